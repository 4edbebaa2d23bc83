"""
Python API for compressed sparse matrices.
"""

import logging
import numpy as np
import scipy.sparse as sps

from . import structure

INTC = np.iinfo(np.intc)
_log = logging.getLogger(__name__)


class _Compressed:
    """
    Storage shared by the compressed layouts.  A compressed matrix keeps only
    its nonzero entries, grouped by a *major* axis: a pointer array with one
    entry per major slice (plus one) locates each slice in the index and value
    arrays, and the index array records each entry's position along the *minor*
    axis, strictly increasing within a slice.

    Subclasses fix which axis is major; everything else is shared.  You
    generally don't want to use the constructor directly; instead, use one of
    the class methods such as :py:meth:`from_coo` or :py:meth:`from_dense`.
    The constructor may reuse the arrays that you pass.

    Attributes:
        nrows(int): the number of rows.
        ncols(int): the number of columns.
        nnz(int): the number of stored entries.
        values(numpy.ndarray): the stored values.
    """

    #: ``True`` if the major axis is rows.
    _row_major = True
    _scipy_format = None

    def __init__(self, nrows, ncols, nnz, ptrs, inds, vals, _cast=True):
        assert nrows >= 0
        assert nrows <= INTC.max
        assert ncols >= 0
        assert ncols <= INTC.max
        assert nnz >= 0

        if _cast:
            inds = np.require(inds, np.intc, 'C')
            if nnz <= INTC.max:
                ptrs = np.require(ptrs, np.intc, 'C')
            else:
                ptrs = np.require(ptrs, np.int64, 'C')
            vals = np.require(vals, requirements='C')

        self.nrows = int(nrows)
        self.ncols = int(ncols)
        self.nnz = int(nnz)
        self._ptrs = ptrs
        self._inds = inds
        self.values = vals

        assert len(self._ptrs) == self._n_major + 1

    @property
    def shape(self):
        return (self.nrows, self.ncols)

    @property
    def _n_major(self):
        return self.nrows if self._row_major else self.ncols

    @property
    def _n_minor(self):
        return self.ncols if self._row_major else self.nrows

    @classmethod
    def empty(cls, nrows, ncols, dtype=np.int64):
        """
        Create a matrix with no stored entries.

        Args:
            nrows(int): the number of rows.
            ncols(int): the number of columns.
            dtype(numpy.dtype): the value type.
        """
        n_major = nrows if cls._row_major else ncols
        ptrs = np.zeros(n_major + 1, dtype=np.intc)
        inds = np.zeros(0, dtype=np.intc)
        vals = np.zeros(0, dtype=dtype)
        return cls(nrows, ncols, 0, ptrs, inds, vals)

    @classmethod
    def from_coo(cls, rows, cols, vals, shape=None):
        """
        Create a matrix from data in COO format.  Entries with a value of zero
        are dropped.

        Args:
            rows(array-like): the row indices.
            cols(array-like): the column indices.
            vals(array-like): the data values.
            shape(tuple): the array shape, or ``None`` to infer from row & column indices.

        Raises:
            ValueError: if the coordinates are out of range or repeated.
        """
        rows = np.asarray(rows, dtype=np.intc)
        cols = np.asarray(cols, dtype=np.intc)
        vals = np.asarray(vals)

        nnz = len(rows)
        if len(cols) != nnz or len(vals) != nnz:
            raise ValueError('coordinate arrays have lengths {}, {}, {}'.format(
                nnz, len(cols), len(vals)))
        if np.min(rows, initial=0) < 0 or np.min(cols, initial=0) < 0:
            raise ValueError('negative coordinate')

        if shape is not None:
            nrows, ncols = shape
            if np.max(rows, initial=-1) >= nrows or np.max(cols, initial=-1) >= ncols:
                raise ValueError('coordinate out of range for shape {}x{}'.format(nrows, ncols))
        else:
            nrows = int(np.max(rows, initial=-1)) + 1
            ncols = int(np.max(cols, initial=-1)) + 1

        nz = vals != 0
        if not np.all(nz):
            _log.debug('dropping %d explicit zeros', nnz - np.count_nonzero(nz))
            rows = rows[nz]
            cols = cols[nz]
            vals = vals[nz]

        if cls._row_major:
            ptrs, inds, vals = structure.from_coo(nrows, rows, cols, vals)
        else:
            ptrs, inds, vals = structure.from_coo(ncols, cols, rows, vals)
        return cls(nrows, ncols, len(inds), ptrs, inds, vals)

    @classmethod
    def from_dense(cls, array):
        """
        Create a matrix holding the nonzero cells of a dense array.

        Args:
            array(array-like): a two-dimensional array.
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError('expected a 2-D array, got {} dimensions'.format(array.ndim))
        rows, cols = np.nonzero(array)
        return cls.from_coo(rows, cols, array[rows, cols], array.shape)

    @classmethod
    def from_scipy(cls, mat, copy=True):
        """
        Convert a SciPy sparse matrix.  The result is canonical (sorted, with
        no duplicate or zero entries).

        Args:
            mat(scipy.sparse.spmatrix): a SciPy sparse matrix.
            copy(bool):
                if ``False``, reuse the SciPy storage if possible.  This may
                canonicalize ``mat`` in place.
        """
        if mat.format != cls._scipy_format:
            mat = mat.asformat(cls._scipy_format)
        elif copy:
            mat = mat.copy()
        mat.sum_duplicates()
        mat.eliminate_zeros()
        nr, nc = mat.shape
        return cls(nr, nc, mat.nnz, mat.indptr, mat.indices, mat.data)

    def to_scipy(self):
        """
        Convert to the corresponding SciPy sparse matrix, avoiding copies if
        possible.
        """
        ctor = sps.csr_matrix if self._row_major else sps.csc_matrix
        return ctor((self.values, self._inds, self._ptrs), shape=self.shape)

    def to_dense(self):
        """
        Convert to a dense array, with 0s in the place of missing values.

        Returns:
            numpy.ndarray: an array of shape ``(nrows, ncols)``.
        """
        dense = structure.expand(self._n_major, self._n_minor, self._ptrs, self._inds, self.values)
        if self._row_major:
            return dense
        else:
            return np.ascontiguousarray(dense.T)

    def check(self):
        """
        Check the structural invariants of this matrix.

        Raises:
            ValueError: if an invariant does not hold.
        """
        structure.check(self._n_major, self._n_minor, self.nnz,
                        self._ptrs, self._inds, self.values)

    def copy(self):
        "Create a copy of this matrix."
        return type(self)(self.nrows, self.ncols, self.nnz,
                          np.copy(self._ptrs), np.copy(self._inds), np.copy(self.values))

    def _extent(self, i):
        return self._ptrs[i], self._ptrs[i + 1]

    def _transposed_arrays(self):
        return structure.transpose(self._n_major, self._n_minor,
                                   self._ptrs, self._inds, self.values)

    def __str__(self):
        return '<{} {}x{} ({} nnz)>'.format(type(self).__name__, self.nrows, self.ncols, self.nnz)

    def __repr__(self):
        pname, iname = self._array_names
        repr = '<{} {}x{} ({} nnz)'.format(type(self).__name__, self.nrows, self.ncols, self.nnz)
        repr += ' {\n'
        repr += '  {}={}\n'.format(pname, self._ptrs)
        repr += '  {}={}\n'.format(iname, self._inds)
        repr += '  values={}\n'.format(self.values)
        repr += '  dtype={}\n'.format(self.values.dtype)
        repr += '}>'
        return repr

    def __reduce__(self):
        args = (self.nrows, self.ncols, self.nnz, self._ptrs, self._inds, self.values, False)
        return (type(self), args)


class CRS(_Compressed):
    """
    Compressed Row Storage: the nonzero entries in row-major order.  The
    entries of row ``i`` occupy positions ``[rowptrs[i], rowptrs[i+1])`` of
    :py:attr:`colinds` and :py:attr:`values`.

    Attributes:
        nrows(int): the number of rows.
        ncols(int): the number of columns.
        nnz(int): the number of stored entries.
        rowptrs(numpy.ndarray): the row pointers (length ``nrows + 1``).
        colinds(numpy.ndarray): the column indices (length ``nnz``).
        values(numpy.ndarray): the values (length ``nnz``).
    """

    _row_major = True
    _scipy_format = 'csr'
    _array_names = ('rowptrs', 'colinds')

    @property
    def rowptrs(self):
        return self._ptrs

    @property
    def colinds(self):
        return self._inds

    def row_extent(self, row):
        """
        Get the extent of a row in the underlying column index and value arrays.

        Args:
            row(int): the row index.

        Returns:
            tuple: ``(s, e)``, where the row occupies positions :math:`[s, e)` in the
            CRS data.
        """
        return self._extent(row)

    def row_cs(self, row):
        "Get the column indices for the stored values of a row."
        sp, ep = self._extent(row)
        return self._inds[sp:ep]

    def row_vs(self, row):
        "Get the stored values of a row."
        sp, ep = self._extent(row)
        return self.values[sp:ep]

    def row(self, row):
        """
        Return a row of this matrix as a dense ndarray.

        Args:
            row(int): the row index.

        Returns:
            numpy.ndarray: the row, with 0s in the place of missing values.
        """
        v = np.zeros(self.ncols, dtype=self.values.dtype)
        v[self.row_cs(row)] = self.row_vs(row)
        return v

    def row_nnzs(self):
        "Get a vector of the number of nonzero entries in each row."
        return np.diff(self._ptrs)

    def entry_rows(self) -> np.ndarray:
        """
        Get the row index of each stored entry.  Combined with :py:attr:`colinds` and
        :py:attr:`values`, this can form a COO-format sparse matrix.  (The row
        indices of a :py:class:`CCS` are stored directly, as :py:attr:`CCS.rowinds`.)
        """
        return structure.major_indices(self.nrows, self._ptrs)

    def to_ccs(self):
        """
        Convert this matrix to Compressed Column Storage.

        Returns:
            CCS: the same matrix, stored column-major.
        """
        cps, ris, vs = self._transposed_arrays()
        return CCS(self.nrows, self.ncols, self.nnz, cps, ris, vs)

    def multiply(self, other):
        """
        Multiply this matrix by another.

        Args:
            other(CCS): the right-hand matrix.

        Returns:
            CRS: the product of the two matrices.

        Raises:
            DimensionMismatch: if ``self.ncols != other.nrows``.
        """
        from .product import multiply
        return multiply(self, other)


class CCS(_Compressed):
    """
    Compressed Column Storage: the nonzero entries in column-major order.  The
    entries of column ``j`` occupy positions ``[colptrs[j], colptrs[j+1])`` of
    :py:attr:`rowinds` and :py:attr:`values`.

    Attributes:
        nrows(int): the number of rows.
        ncols(int): the number of columns.
        nnz(int): the number of stored entries.
        colptrs(numpy.ndarray): the column pointers (length ``ncols + 1``).
        rowinds(numpy.ndarray): the row indices (length ``nnz``).
        values(numpy.ndarray): the values (length ``nnz``).
    """

    _row_major = False
    _scipy_format = 'csc'
    _array_names = ('colptrs', 'rowinds')

    @property
    def colptrs(self):
        return self._ptrs

    @property
    def rowinds(self):
        return self._inds

    def col_extent(self, col):
        """
        Get the extent of a column in the underlying row index and value arrays.

        Returns:
            tuple: ``(s, e)``, where the column occupies positions :math:`[s, e)`.
        """
        return self._extent(col)

    def col_rs(self, col):
        "Get the row indices for the stored values of a column."
        sp, ep = self._extent(col)
        return self._inds[sp:ep]

    def col_vs(self, col):
        "Get the stored values of a column."
        sp, ep = self._extent(col)
        return self.values[sp:ep]

    def col(self, col):
        "Return a column of this matrix as a dense ndarray."
        v = np.zeros(self.nrows, dtype=self.values.dtype)
        v[self.col_rs(col)] = self.col_vs(col)
        return v

    def col_nnzs(self):
        "Get a vector of the number of nonzero entries in each column."
        return np.diff(self._ptrs)

    def entry_cols(self) -> np.ndarray:
        "Get the column index of each stored entry, the mirror of :py:meth:`CRS.entry_rows`."
        return structure.major_indices(self.ncols, self._ptrs)

    def to_crs(self):
        """
        Convert this matrix to Compressed Row Storage.

        Returns:
            CRS: the same matrix, stored row-major.
        """
        rps, cis, vs = self._transposed_arrays()
        return CRS(self.nrows, self.ncols, self.nnz, rps, cis, vs)
