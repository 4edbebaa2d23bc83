"""
Sparse matrix products.
"""

import logging

from .compressed import CRS, CCS
from .errors import DimensionMismatch, AllocationFailure
from .kernels import get_kernel

_log = logging.getLogger(__name__)


def multiply(X, Y, *, kernel=None):
    """
    Multiply a row-compressed matrix by a column-compressed matrix.  CRS
    matrices are fast at traversing rows and CCS matrices at traversing
    columns, which is exactly what each cell of :math:`XY` needs.

    The operands are not modified.

    Args:
        X(CRS): the left-hand matrix.
        Y(CCS): the right-hand matrix.
        kernel(str or None): the kernel to use, or ``None`` for the active kernel.

    Returns:
        CRS:
            the product :math:`XY`, of shape ``(X.nrows, Y.ncols)``.  It stores
            no explicit zeros, and its column indices are increasing within
            each row.

    Raises:
        DimensionMismatch: if ``X.ncols != Y.nrows``.
        AllocationFailure: if there is not enough memory for the product.
    """
    if not isinstance(X, CRS):
        raise TypeError('left operand must be CRS, got {}'.format(type(X).__name__))
    if not isinstance(Y, CCS):
        raise TypeError('right operand must be CCS, got {}'.format(type(Y).__name__))
    if X.ncols != Y.nrows:
        raise DimensionMismatch(X.shape, Y.shape)

    K = get_kernel(kernel)
    _log.debug('multiplying %s by %s with kernel %s', X, Y, K.__name__)
    try:
        return K.mult_crs_ccs(X, Y)
    except MemoryError as e:
        raise AllocationFailure('out of memory multiplying {} by {}'.format(X, Y)) from e
