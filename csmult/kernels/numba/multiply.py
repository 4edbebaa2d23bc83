"""
Sparse matrix multiplication by row/column merge-intersection.

Each cell of the product is the dot product of a row of the left operand,
stored in CRS, with a column of the right operand, stored in CCS.  Both slices
are sorted by their shared inner index, so the dot product is a single forward
merge over the two slices.
"""

import logging
import numpy as np
from numba import njit

from csmult.compressed import CRS

_log = logging.getLogger(__name__)


def mult_crs_ccs(X, Y):
    """
    Multiply a CRS matrix by a CCS matrix.

    Args:
        X(CRS): the left-hand matrix.
        Y(CCS): the right-hand matrix, with ``Y.nrows == X.ncols``.

    Returns:
        CRS: the product, with no explicit zeros.
    """
    assert X.ncols == Y.nrows

    # at most one value per output cell
    bound = X.nrows * Y.ncols
    cap = min(bound, max(X.nnz, Y.nnz, 1))
    dtype = np.result_type(X.values, Y.values)
    z_ci = np.empty(cap, np.intc)
    z_vs = np.empty(cap, dtype)

    z_rp, z_ci, z_vs, nnz = _mult_merge(X.nrows, X.rowptrs, X.colinds, X.values,
                                        Y.ncols, Y.colptrs, Y.rowinds, Y.values,
                                        bound, z_ci, z_vs)
    _log.debug('product has %d nnz (scratch capacity %d, bound %d)', nnz, len(z_ci), bound)

    # copy the realized prefix into right-sized storage
    z_ci = z_ci[:nnz].copy()
    z_vs = z_vs[:nnz].copy()
    return CRS(X.nrows, Y.ncols, nnz, z_rp, z_ci, z_vs)


@njit(nogil=True)
def _dot(x_ci, x_vs, xs, xe, y_ri, y_vs, ys, ye):
    """
    Dot product of the X row slice ``[xs, xe)`` with the Y column slice
    ``[ys, ye)``.  The Y cursor is shared across the whole X row and only ever
    moves forward.
    """
    acc = 0
    yp = ys
    for xp in range(xs, xe):
        k = x_ci[xp]
        while yp < ye and y_ri[yp] < k:
            yp += 1

        # no more entries in the column, so nothing else can match
        if yp >= ye:
            break

        if y_ri[yp] == k:
            acc += x_vs[xp] * y_vs[yp]

    return acc


@njit(nogil=True)
def _mult_merge(x_nr, x_rp, x_ci, x_vs, y_nc, y_cp, y_ri, y_vs, bound, z_ci, z_vs):
    z_rp = np.zeros(x_nr + 1, np.int64)
    c_len = len(z_ci)
    nnz = 0

    for i in range(x_nr):
        xs = x_rp[i]
        xe = x_rp[i + 1]
        if xs == xe:
            z_rp[i + 1] = nnz
            continue

        for j in range(y_nc):
            dot = _dot(x_ci, x_vs, xs, xe, y_ri, y_vs, y_cp[j], y_cp[j + 1])
            if dot == 0:
                continue

            # make sure we have enough length
            if nnz == c_len:
                ocl = c_len
                c_len = min(c_len * 2, bound)
                ci2 = np.empty(c_len, z_ci.dtype)
                ci2[:ocl] = z_ci
                z_ci = ci2
                vs2 = np.empty(c_len, z_vs.dtype)
                vs2[:ocl] = z_vs
                z_vs = vs2

            z_ci[nnz] = j
            z_vs[nnz] = dot
            nnz += 1

        z_rp[i + 1] = nnz

    return z_rp, z_ci, z_vs, nnz


@njit(nogil=True)
def _dense_mm(X, Y, Z):
    m, k = X.shape
    n = Y.shape[1]
    for i in range(m):
        for j in range(n):
            dot = 0
            for kk in range(k):
                dot += X[i, kk] * Y[kk, j]
            Z[i, j] = dot


def mult_dense(X, Y):
    """
    Multiply two dense matrices with the textbook triple loop.

    Args:
        X(numpy.ndarray): an ``m x k`` array.
        Y(numpy.ndarray): a ``k x n`` array.

    Returns:
        numpy.ndarray: the ``m x n`` product.
    """
    assert X.shape[1] == Y.shape[0]
    Z = np.zeros((X.shape[0], Y.shape[1]), dtype=np.result_type(X, Y))
    _dense_mm(X, Y, Z)
    return Z
