"""Axis-name compatibility checks and output-name derivation.

Everything here operates on plain name tuples, never on arrays, so the
functions can be called before any numeric work happens.  Derivations are
memoised: the same inputs hand back the same tuple object.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Hashable, Tuple

from .exceptions import DimensionNameMismatch, InvalidReductionAxisError, UnsupportedOperandError

WILDCARD = "_"

Names = Tuple[str, ...]


def valid_matmul_names(a: Names, b: Names) -> bool:
    """Return whether the contracted axes of ``a @ b`` are compatible.

    A bare vector on the left imposes no constraint.  Otherwise the last name
    of ``a`` must equal the first name of ``b`` unless either is the wildcard.
    """

    if len(a) == 1:
        return True
    a_dim = a[-1]
    b_dim = b[0]
    return a_dim == b_dim or a_dim == WILDCARD or b_dim == WILDCARD


def matmul_names(a: Names, b: Names) -> Names:
    rank = (len(a), len(b))
    if rank == (2, 1):
        return (a[0],)
    if rank == (2, 2):
        return (a[0], b[1])
    if rank == (1, 2):
        return (b[1],)
    if rank == (1, 1):
        raise UnsupportedOperandError(
            "Matrix product of two vectors is not defined; transpose the left operand "
            "for an inner product"
        )
    raise UnsupportedOperandError(f"Matrix product is only defined for rank 1 and 2, got ranks {rank}")


def check_matmul_names(a: Names, b: Names) -> None:
    if not valid_matmul_names(a, b):
        raise DimensionNameMismatch(a[-1], b[0])


@lru_cache(maxsize=1024)
def matrix_prod_names(a: Names, b: Names) -> Names:
    check_matmul_names(a, b)
    return matmul_names(a, b)


@lru_cache(maxsize=256)
def inverse_names(names: Names) -> Names:
    if len(names) != 2:
        raise UnsupportedOperandError(f"Inverse is only defined for rank-2 arrays, got names {names}")
    return (names[1], names[0])


_WILDCARD_PAIR: Names = (WILDCARD, WILDCARD)


@lru_cache(maxsize=256)
def symmetric_names(names: Names, dims: Hashable, strict: bool = False) -> Names:
    """Names of the square result of a correlation or covariance.

    ``dims`` is the 1-based dimension holding the observations; the result is
    indexed twice by the remaining (variable) axis.  Any other value gives the
    wildcard pair, or raises when ``strict`` is set.
    """

    if dims == 1:
        return (names[1], names[1])
    if dims == 2:
        return (names[0], names[0])
    if strict:
        raise InvalidReductionAxisError(dims, names)
    return _WILDCARD_PAIR
