import numpy as np

from csmult import dense_multiply, DimensionMismatch, AllocationFailure
from csmult.dense import random_dense, format_dense
from csmult.kernels import use_kernel
from csmult.test_utils import int_matrices

from pytest import raises
from hypothesis import given
import hypothesis.strategies as st
import hypothesis.extra.numpy as nph


def test_dense_fixed(kernel):
    X = np.array([[1, 2], [3, 4], [0, 1]])
    Y = np.array([[5, 6, 7], [8, 9, 10]])
    Z = dense_multiply(X, Y)
    assert Z.shape == (3, 3)
    assert np.all(Z == [[21, 24, 27], [47, 54, 61], [8, 9, 10]])


@given(st.data())
def test_dense_multiply(kernel, data):
    X = data.draw(int_matrices())
    ncols = data.draw(st.integers(1, 20))
    Y = data.draw(nph.arrays(np.int64, (X.shape[1], ncols), elements=st.integers(-20, 20)))

    Z = dense_multiply(X, Y)
    assert Z.shape == (X.shape[0], ncols)
    assert np.all(Z == X @ Y)


def test_dense_lists():
    Z = dense_multiply([[1, 2]], [[3], [4]])
    assert np.all(Z == [[11]])


def test_dense_mismatch():
    with raises(DimensionMismatch) as exc:
        dense_multiply(np.zeros((4, 5), np.int64), np.zeros((3, 5), np.int64))
    assert exc.value.left_shape == (4, 5)
    assert exc.value.right_shape == (3, 5)


def test_dense_out_of_memory(monkeypatch):
    from csmult.kernels import numba as nk

    def oom(X, Y):
        raise MemoryError()

    monkeypatch.setattr(nk, 'mult_dense', oom)
    X = np.ones((2, 3), np.int64)
    Y = np.ones((3, 4), np.int64)
    with use_kernel('numba'), raises(AllocationFailure, match='multiplying 2x3 by 3x4') as exc:
        dense_multiply(X, Y)
    assert isinstance(exc.value.__cause__, MemoryError)


def test_dense_rank():
    with raises(ValueError):
        dense_multiply(np.zeros(3), np.zeros((3, 2)))


def test_random_dense():
    M = random_dense(4, 5, rng=42)
    assert M.shape == (4, 5)
    assert np.all(M >= 0)
    assert np.all(M < 10)
    assert np.all(M == random_dense(4, 5, rng=42))


def test_random_dense_upper():
    M = random_dense(30, 30, upper=3, rng=np.random.default_rng(7))
    assert set(np.unique(M)) <= {0, 1, 2}


def test_format_dense():
    text = format_dense(np.array([[6, 0, 20], [0, 0, 0]]))
    assert text == '6 0 20\n0 0 0'


def test_format_dense_rank():
    with raises(ValueError):
        format_dense(np.arange(3))
