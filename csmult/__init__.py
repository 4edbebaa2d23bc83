"""
Compressed sparse matrix multiplication: CRS times CCS, with Numba kernels.
"""

__version__ = "0.1.0"
__all__ = [
    'CRS',
    'CCS',
    'multiply',
    'dense_multiply',
    'DimensionMismatch',
    'AllocationFailure',
]

from .errors import DimensionMismatch, AllocationFailure
from .compressed import CRS, CCS
from .product import multiply
from .dense import dense_multiply
