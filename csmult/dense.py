"""
Dense matrix utilities, used as a baseline for checking sparse products and for
printing matrices.
"""

import numpy as np

from .errors import DimensionMismatch, AllocationFailure
from .kernels import get_kernel


def _require_2d(M, name):
    M = np.asarray(M)
    if M.ndim != 2:
        raise ValueError('{} must be 2-D, got {} dimensions'.format(name, M.ndim))
    return M


def dense_multiply(X, Y):
    """
    Multiply two dense matrices.

    Args:
        X(array-like): an ``m x k`` matrix.
        Y(array-like): a ``k x n`` matrix.

    Returns:
        numpy.ndarray: the ``m x n`` product.

    Raises:
        DimensionMismatch: if the inner dimensions differ.
        AllocationFailure: if there is not enough memory for the product.
    """
    X = _require_2d(X, 'X')
    Y = _require_2d(Y, 'Y')
    if X.shape[1] != Y.shape[0]:
        raise DimensionMismatch(X.shape, Y.shape)

    try:
        return get_kernel().mult_dense(X, Y)
    except MemoryError as e:
        raise AllocationFailure('out of memory multiplying {}x{} by {}x{}'.format(
            X.shape[0], X.shape[1], Y.shape[0], Y.shape[1])) from e


def random_dense(nrows, ncols, upper=10, *, rng=None):
    """
    Create a matrix of random integers in :math:`[0, \\mathrm{upper})`.

    Args:
        nrows(int): the number of rows.
        ncols(int): the number of columns.
        upper(int): the exclusive upper bound of the values.
        rng: a seed or :py:class:`numpy.random.Generator`.
    """
    rng = np.random.default_rng(rng)
    return rng.integers(0, upper, size=(nrows, ncols))


def format_dense(M):
    """
    Format a matrix as text: one row per line, values separated by spaces,
    with zeros shown explicitly.
    """
    M = _require_2d(M, 'M')
    return '\n'.join(' '.join(str(v) for v in row) for row in M)
