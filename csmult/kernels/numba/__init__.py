"""
Kernel implementing matrix operations in pure Numba.  This is the default
kernel.
"""

from .multiply import mult_crs_ccs, mult_dense  # noqa: F401
