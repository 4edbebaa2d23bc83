import logging

from csmult import CRS, CCS
import numpy as np

import pytest
from hypothesis import given
import hypothesis.strategies as st
import hypothesis.extra.numpy as nph


@given(st.integers(0, 1000), st.integers(0, 1000))
def test_empty(nrows, ncols):
    crs = CRS.empty(nrows, ncols)
    assert crs.nrows == nrows
    assert crs.ncols == ncols
    assert crs.nnz == 0
    assert all(crs.rowptrs == 0)
    assert len(crs.rowptrs) == nrows + 1
    assert len(crs.colinds) == 0
    assert len(crs.values) == 0
    crs.check()


@given(st.integers(0, 1000), st.integers(0, 1000))
def test_empty_ccs(nrows, ncols):
    ccs = CCS.empty(nrows, ncols)
    assert ccs.shape == (nrows, ncols)
    assert ccs.nnz == 0
    assert all(ccs.colptrs == 0)
    assert len(ccs.colptrs) == ncols + 1
    assert len(ccs.rowinds) == 0
    ccs.check()


def test_crs_from_coo_fixed():
    "Make a CRS from unordered COO data"
    rows = np.array([3, 0, 1, 0], dtype=np.int32)
    cols = np.array([1, 2, 0, 1], dtype=np.int32)
    vals = np.array([4, 2, 3, 1])

    crs = CRS.from_coo(rows, cols, vals)
    assert crs.nrows == 4
    assert crs.ncols == 3
    assert crs.nnz == 4
    assert all(crs.rowptrs == [0, 2, 3, 3, 4])
    assert all(crs.colinds == [1, 2, 0, 1])
    assert all(crs.values == [1, 2, 3, 4])
    crs.check()


def test_ccs_from_coo_fixed():
    "Make a CCS from unordered COO data"
    rows = np.array([3, 0, 1, 0], dtype=np.int32)
    cols = np.array([1, 2, 0, 1], dtype=np.int32)
    vals = np.array([4, 2, 3, 1])

    ccs = CCS.from_coo(rows, cols, vals)
    assert ccs.shape == (4, 3)
    assert ccs.nnz == 4
    assert all(ccs.colptrs == [0, 1, 3, 4])
    assert all(ccs.rowinds == [1, 0, 3, 0])
    assert all(ccs.values == [3, 1, 4, 2])
    ccs.check()


def test_from_coo_drops_zeros():
    crs = CRS.from_coo([0, 1, 1], [0, 0, 1], [5, 0, 7], (2, 2))
    assert crs.nnz == 2
    assert all(crs.rowptrs == [0, 1, 2])
    assert all(crs.colinds == [0, 1])
    assert all(crs.values == [5, 7])


def test_from_coo_logs(caplog):
    with caplog.at_level(logging.DEBUG, logger='csmult'):
        CCS.from_coo([0, 1, 1], [0, 0, 1], [5, 0, 7], (2, 2))
    messages = [r.getMessage() for r in caplog.records]
    assert 'dropping 1 explicit zeros' in messages
    assert 'compressing 2 COO entries into 2 slices' in messages


def test_from_coo_shape():
    ccs = CCS.from_coo([0], [1], [3], (4, 5))
    assert ccs.shape == (4, 5)
    assert len(ccs.colptrs) == 6


def test_from_coo_no_entries():
    crs = CRS.from_coo([], [], [], (3, 2))
    assert crs.shape == (3, 2)
    assert crs.nnz == 0
    assert all(crs.rowptrs == 0)


@pytest.mark.parametrize('cls', [CRS, CCS])
def test_from_coo_duplicate(cls):
    with pytest.raises(ValueError, match='duplicate'):
        cls.from_coo([0, 1, 0], [2, 0, 2], [1, 2, 3])


@pytest.mark.parametrize('cls', [CRS, CCS])
def test_from_coo_out_of_range(cls):
    with pytest.raises(ValueError):
        cls.from_coo([0, 3], [0, 0], [1, 2], (3, 3))
    with pytest.raises(ValueError):
        cls.from_coo([0, 1], [0, 3], [1, 2], (3, 3))
    with pytest.raises(ValueError):
        cls.from_coo([0, -1], [0, 0], [1, 2], (3, 3))


def test_from_coo_bad_lengths():
    with pytest.raises(ValueError):
        CRS.from_coo([0, 1], [0], [1, 2])


@pytest.mark.parametrize('cls', [CRS, CCS])
@given(nph.arrays(np.int64, st.tuples(st.integers(0, 30), st.integers(0, 30)),
                  elements=st.integers(-5, 5)))
def test_from_dense(cls, mat):
    m = cls.from_dense(mat)
    assert m.shape == mat.shape
    assert m.nnz == np.count_nonzero(mat)
    m.check()
    assert np.all(m.to_dense() == mat)


def test_from_dense_rank():
    with pytest.raises(ValueError):
        CRS.from_dense(np.arange(5))


def test_direct_construction():
    "Populate a CRS directly with its compressed arrays"
    crs = CRS(3, 4, 3, [0, 2, 2, 3], [1, 3, 0], [5, 6, 7])
    assert crs.rowptrs.dtype == np.intc
    assert crs.colinds.dtype == np.intc
    crs.check()
    assert np.all(crs.to_dense() == [[0, 5, 0, 6], [0, 0, 0, 0], [7, 0, 0, 0]])
