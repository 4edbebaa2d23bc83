"""
Command-line demonstration of sparse (or dense) matrix multiplication.
"""

import sys
import logging
import argparse
import numpy as np

from .compressed import CRS, CCS
from .dense import dense_multiply, random_dense, format_dense
from .errors import DimensionMismatch, AllocationFailure
from .kernels import KERNEL_NAMES, use_kernel

_log = logging.getLogger(__name__)


def example_operands():
    """
    Build the fixed example: a 7x5 CRS matrix and a 5x6 CCS matrix, populated
    directly with their compressed arrays.

    Returns:
        tuple: ``(X, Y)``
    """
    X = CRS(7, 5, 6,
            np.array([0, 2, 2, 3, 4, 4, 5, 6]),
            np.array([0, 3, 2, 0, 1, 4]),
            np.array([2, 4, 3, 1, 6, 2]))
    Y = CCS(5, 6, 9,
            np.array([0, 2, 3, 5, 6, 8, 9]),
            np.array([0, 4, 1, 1, 3, 0, 1, 2, 4]),
            np.array([3, 11, 2, 3, 5, 4, 2, 6, 5]))
    return X, Y


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='csmult',
        description='Multiply example matrices and print the operands and product.')
    parser.add_argument('--dense', action='store_true',
                        help='multiply random dense matrices instead of the sparse example')
    parser.add_argument('--seed', metavar='N', type=int,
                        help='seed the random matrices with N')
    parser.add_argument('--kernel', '-k', metavar='NAME', choices=KERNEL_NAMES,
                        help='use kernel NAME')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='enable debug logging')
    return parser.parse_args(argv)


def _print_matrices(pairs, out):
    for label, M in pairs:
        print('---{}---'.format(label), file=out)
        print(format_dense(M), file=out)


def _run_sparse(out):
    X, Y = example_operands()
    Z = X.multiply(Y)
    _print_matrices([('X', X.to_dense()), ('Y', Y.to_dense()), ('Z', Z.to_dense())], out)


def _run_dense(seed, out):
    rng = np.random.default_rng(seed)
    X = random_dense(4, 5, rng=rng)
    Y = random_dense(5, 3, rng=rng)
    Z = dense_multiply(X, Y)
    _print_matrices([('X', X), ('Y', Y), ('Z', Z)], out)


def main(argv=None, out=None):
    """
    Run the demonstration.

    Returns:
        int: the process exit status.
    """
    args = parse_args(argv)
    if out is None:
        out = sys.stdout
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s', stream=sys.stderr)

    try:
        with use_kernel(args.kernel) as kern:
            _log.debug('using kernel %s', kern.__name__)
            if args.dense:
                _run_dense(args.seed, out)
            else:
                _run_sparse(out)
    except DimensionMismatch as e:
        print('csmult: matrix sizes are incompatible for multiplication:', e, file=sys.stderr)
        return 1
    except AllocationFailure as e:
        print('csmult: out of memory:', e, file=sys.stderr)
        return 1
    except ValueError as e:
        print('csmult:', e, file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
