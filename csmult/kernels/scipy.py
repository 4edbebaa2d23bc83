"""
SciPy "kernel".  This kernel will never be selected as the default.  It
primarily exists for ease in testing and benchmarking the Numba kernel.
"""

import numpy as np

from csmult.compressed import CRS


def mult_crs_ccs(X, Y):
    Z = (X.to_scipy() @ Y.to_scipy()).tocsr()
    # from_scipy sorts and drops the zeros from cancelling terms
    return CRS.from_scipy(Z, copy=False)


def mult_dense(X, Y):
    return np.matmul(X, Y)
