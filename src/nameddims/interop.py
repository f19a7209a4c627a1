"""Registration table for foreign array types in named matrix products.

A foreign operand (anything that is not a :class:`NamedArray`) takes part in
``named @ foreign`` or ``foreign @ named`` only when its type has been
registered for that rank combination.  It is then promoted to a
``NamedArray`` using :func:`dimnames` and the product proceeds exactly as if
both operands were named.

Built-in registrations cover NumPy arrays and SciPy sparse matrices/arrays.
Other libraries can opt in with :func:`register_matmul`::

    register_matmul(MyMatrix, MyVector, dimnames=lambda x: x.axis_labels)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, Union

import numpy as np
import scipy.sparse as sp

from .core import backend
from .core.named_array import NamedArray
from .core.names import WILDCARD, Names

logger = logging.getLogger(__name__)

TypeSpec = Union[Type[Any], Tuple[Type[Any], ...]]
DimnamesFn = Callable[[Any], Iterable[str]]


@dataclass(frozen=True)
class MatmulRegistration:
    foreign_type: Type[Any]
    foreign_rank: int
    named_rank: int
    foreign_on_left: bool

    def promote(self, value: Any) -> NamedArray:
        return NamedArray(value, dimnames(value))


_RegistryKey = Tuple[Type[Any], int, int, bool]
_REGISTRY: Dict[_RegistryKey, MatmulRegistration] = {}
_DIMNAMES: Dict[Type[Any], DimnamesFn] = {}


def _as_types(spec: Optional[TypeSpec]) -> Tuple[Type[Any], ...]:
    if spec is None:
        return ()
    if isinstance(spec, tuple):
        return spec
    return (spec,)


def _add(types: Tuple[Type[Any], ...], foreign_rank: int, named_rank: int, foreign_on_left: bool) -> None:
    for foreign_type in types:
        key = (foreign_type, foreign_rank, named_rank, foreign_on_left)
        _REGISTRY[key] = MatmulRegistration(*key)


def register_matmul(
    matrix_type: TypeSpec,
    vector_type: Optional[TypeSpec] = None,
    *,
    dimnames: Optional[DimnamesFn] = None,
    vector_products: bool = False,
) -> None:
    """
    Let ``matrix_type`` (and ``vector_type``) multiply with named arrays.

    Parameters
    ----------
    matrix_type:
        Foreign type (or tuple of types) used as a rank-2 operand.
    vector_type:
        Foreign type used as a rank-1 operand.  When omitted only
        matrix x matrix products are registered.
    dimnames:
        Accessor returning the axis names of a foreign value.  Defaults to
        wildcards on every axis.
    vector_products:
        Also register foreign-matrix x named-vector and
        named-vector x foreign-matrix, for matrix types without a vector
        counterpart (e.g. diagonal matrices).
    """

    matrix_types = _as_types(matrix_type)
    vector_types = _as_types(vector_type)
    types_by_rank = {1: vector_types, 2: matrix_types}
    combos = ((1, 2), (2, 1), (2, 2)) if vector_types else ((2, 2),)
    for na, nb in combos:
        _add(types_by_rank[nb], nb, na, foreign_on_left=False)
        _add(types_by_rank[na], na, nb, foreign_on_left=True)
    if vector_products:
        _add(matrix_types, 2, 1, foreign_on_left=True)
        _add(matrix_types, 2, 1, foreign_on_left=False)
    if dimnames is not None:
        for foreign_type in matrix_types + vector_types:
            _DIMNAMES[foreign_type] = dimnames
    logger.debug(
        "registered matmul interop for %s / %s (combos=%s, vector_products=%s)",
        [t.__name__ for t in matrix_types],
        [t.__name__ for t in vector_types],
        combos,
        vector_products,
    )


def unregister_matmul(foreign_type: TypeSpec) -> int:
    """Drop every registration for ``foreign_type``; returns how many were removed."""

    types = set(_as_types(foreign_type))
    keys = [key for key in _REGISTRY if key[0] in types]
    for key in keys:
        del _REGISTRY[key]
    for t in types:
        _DIMNAMES.pop(t, None)
    return len(keys)


def lookup(
    value: Any,
    named_rank: int,
    foreign_on_left: bool,
) -> Optional[MatmulRegistration]:
    """Find the registration that lets ``value`` meet a named operand of ``named_rank``.

    The most specific registered class in ``type(value).__mro__`` wins.
    """

    foreign_rank = backend.rank(value)
    for cls in type(value).__mro__:
        entry = _REGISTRY.get((cls, foreign_rank, named_rank, foreign_on_left))
        if entry is not None:
            return entry
    return None


def registered_products() -> List[MatmulRegistration]:
    return list(_REGISTRY.values())


def dimnames(value: Any) -> Names:
    if isinstance(value, NamedArray):
        return value.names
    for cls in type(value).__mro__:
        accessor = _DIMNAMES.get(cls)
        if accessor is not None:
            return tuple(accessor(value))
    return (WILDCARD,) * backend.rank(value)


register_matmul(np.ndarray, np.ndarray)
register_matmul((sp.spmatrix, sp.sparray), vector_products=True)
