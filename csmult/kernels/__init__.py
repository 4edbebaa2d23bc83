"""
Kernel selection.  A kernel is a module providing:

``mult_crs_ccs(X, Y)``
    multiply a :py:class:`~csmult.CRS` by a :py:class:`~csmult.CCS` with
    compatible shapes, returning a new :py:class:`~csmult.CRS`.
``mult_dense(X, Y)``
    multiply two dense 2-D arrays with compatible shapes.

The available kernels are ``numba`` (the default) and ``scipy``.
"""

import os
import logging
import warnings
from contextlib import contextmanager
from importlib import import_module
import threading

KERNEL_NAMES = ('numba', 'scipy')
DEFAULT_KERNEL = 'numba'
ENV_VAR = 'CSMULT_KERNEL'

_log = logging.getLogger(__name__)
kernels = {}
__all__ = [
    'set_kernel',
    'use_kernel',
    'get_kernel',
]


class ActiveKernel(threading.local):
    def __init__(self):
        self.__dict__.update({'active_name': None, '_active': None})

    @property
    def active(self):
        kern = self._active
        if kern is None:
            return _default_kernel()
        else:
            return kern

    def set_active(self, name, kern):
        self.active_name = name
        self._active = kern


_cached_default = None
_active = ActiveKernel()


def set_kernel(name):
    """
    Set the active kernel for the current thread.  Most applications should
    let csmult select its default kernel, or configure it through the
    ``CSMULT_KERNEL`` environment variable; this is here primarily to enable
    test code to switch kernels.

    Args:
        name(str or None):
            The name of the kernel, or ``None`` to restore the default.
    """

    if name is None:
        _active.set_active(None, None)
    else:
        _active.set_active(name, get_kernel(name))


@contextmanager
def use_kernel(name):
    """
    Context manager to run code with a specified (thread-local) kernel.  It calls
    :py:func:`set_kernel`, and restores the previously-active kernel when the context
    exits.
    """
    old = _active.active_name
    try:
        set_kernel(name)
        yield get_kernel()
    finally:
        set_kernel(old)


def get_kernel(name=None):
    """
    Get a kernel.

    Args:
        name(str or None):
            The name of the kernel.  If ``None``, returns the active kernel.

    Raises:
        ValueError: if there is no kernel with the specified name.
    """
    if name is None:
        return _active.active

    kern = kernels.get(name, None)
    if not kern:
        if name not in KERNEL_NAMES:
            raise ValueError(f'unknown kernel {name!r}')
        kern = import_module(f'{__name__}.{name}')
        kernels[name] = kern
    return kern


def _initialize(name=None):
    global _cached_default
    if _cached_default:
        warnings.warn('default kernel already initialized')

    if not name:
        name = os.environ.get(ENV_VAR, DEFAULT_KERNEL)

    _log.debug('using default kernel %s', name)
    _cached_default = get_kernel(name)


def _default_kernel():
    if not _cached_default:
        _initialize()

    return _cached_default
