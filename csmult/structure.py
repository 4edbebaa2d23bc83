"""
Routines for working with compressed matrix structure.

These functions operate on the raw arrays of a compressed layout, named by
*major* (the compressed, primary axis) and *minor* (the axis recorded in the
index array).  For a CRS the major axis is rows; for a CCS it is columns.
"""

import logging
import numpy as np
from numba import njit

_log = logging.getLogger(__name__)


@njit(nogil=True)
def _major_pointers(n_major, major):
    "Count entries per major slice and convert the counts to pointers."
    counts = np.zeros(n_major, dtype=np.int64)
    for m in major:
        counts[m] += 1

    ptrs = np.zeros(n_major + 1, dtype=np.int64)
    for i in range(n_major):
        ptrs[i + 1] = ptrs[i] + counts[i]

    return ptrs


def from_coo(n_major, major, minor, values):
    """
    Transform coordinate data into compressed structure.

    Args:
        n_major(int): the size of the major axis.
        major(numpy.ndarray): the major-axis coordinate of each entry.
        minor(numpy.ndarray): the minor-axis coordinate of each entry.
        values(numpy.ndarray): the entry values.

    Returns:
        tuple: ``(ptrs, inds, values)``, with indices sorted within each slice.

    Raises:
        ValueError: if two entries share the same coordinates.
    """
    _log.debug('compressing %d COO entries into %d slices', len(major), n_major)
    order = np.lexsort((minor, major))
    major = major[order]
    minor = minor[order]
    values = values[order]

    if len(major) > 1:
        dup = (major[1:] == major[:-1]) & (minor[1:] == minor[:-1])
        if np.any(dup):
            pos = np.argmax(dup)
            raise ValueError('duplicate entry at ({}, {})'.format(major[pos], minor[pos]))

    ptrs = _major_pointers(n_major, major)
    return ptrs, minor, values


@njit(nogil=True)
def transpose(n_major, n_minor, ptrs, inds, vals):
    """
    Swap the major and minor axes of compressed data.  Applied to CRS arrays
    this yields the CCS arrays of the same matrix, and vice versa.  Because the
    input is scanned in major order, the output indices come out sorted within
    each slice.
    """
    optrs = np.zeros(n_minor + 1, ptrs.dtype)
    oinds = np.empty_like(inds)
    ovals = np.empty_like(vals)

    # count elements
    for i in range(n_major):
        for jj in range(ptrs[i], ptrs[i + 1]):
            j = inds[jj]
            optrs[j + 1] += 1

    # convert to pointers
    for j in range(n_minor):
        optrs[j + 1] = optrs[j] + optrs[j + 1]

    # construct results
    for i in range(n_major):
        for jj in range(ptrs[i], ptrs[i + 1]):
            j = inds[jj]
            oinds[optrs[j]] = i
            ovals[optrs[j]] = vals[jj]
            optrs[j] += 1

    # restore pointers
    for i in range(n_minor - 1, 0, -1):
        optrs[i] = optrs[i - 1]
    optrs[0] = 0

    return optrs, oinds, ovals


@njit(nogil=True)
def _expand(n_major, ptrs, inds, vals, out):
    for i in range(n_major):
        for jj in range(ptrs[i], ptrs[i + 1]):
            out[i, inds[jj]] = vals[jj]


def expand(n_major, n_minor, ptrs, inds, vals):
    "Expand compressed data into a dense (major x minor) array."
    out = np.zeros((n_major, n_minor), dtype=vals.dtype)
    _expand(n_major, ptrs, inds, vals, out)
    return out


def major_indices(n_major, ptrs):
    "Get the major-axis index of every stored entry."
    return np.repeat(np.arange(n_major, dtype=np.intc), np.diff(ptrs))


def check(n_major, n_minor, nnz, ptrs, inds, vals):
    """
    Verify the invariants of compressed data.

    Raises:
        ValueError: describing the first violated invariant.
    """
    if len(ptrs) != n_major + 1:
        raise ValueError('pointer array has length {}, expected {}'.format(len(ptrs), n_major + 1))
    if ptrs[0] != 0:
        raise ValueError('pointer array starts at {}, expected 0'.format(ptrs[0]))
    if np.any(np.diff(ptrs) < 0):
        raise ValueError('pointer array is decreasing')
    if ptrs[n_major] != nnz:
        raise ValueError('pointer array ends at {}, expected {}'.format(ptrs[n_major], nnz))
    if len(inds) != nnz:
        raise ValueError('index array has length {}, expected {}'.format(len(inds), nnz))
    if len(vals) != nnz:
        raise ValueError('value array has length {}, expected {}'.format(len(vals), nnz))
    if nnz == 0:
        return

    if np.min(inds) < 0 or np.max(inds) >= n_minor:
        raise ValueError('index out of range [0, {})'.format(n_minor))

    owner = major_indices(n_major, ptrs)
    same = owner[1:] == owner[:-1]
    if np.any(np.diff(inds)[same] <= 0):
        raise ValueError('indices are not strictly increasing within a slice')

    if np.any(vals == 0):
        raise ValueError('explicit zero stored')
