"""The named array primitive: a raw array plus one name per axis."""

from __future__ import annotations

from numbers import Integral
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

import numpy as np

from . import backend
from .exceptions import RankMismatchError, UnknownAxisError
from .names import WILDCARD, Names

AxisSpec = Union[str, int]


def _normalize_names(names: Union[str, Iterable[str]]) -> Names:
    if isinstance(names, str):
        names = (names,)
    normalized = tuple(names)
    for name in normalized:
        if not isinstance(name, str):
            raise TypeError(f"Axis names must be strings, got {name!r}")
    return normalized


class NamedArray:
    """
    Wrap an array (NumPy ndarray or SciPy sparse matrix) with axis names.

    The wrapped array is held by reference; nothing in this package copies it.
    ``a @ b`` routes through :func:`nameddims.core.dispatch.matmul`, which
    checks that the contracted axes carry compatible names.
    """

    __slots__ = ("_data", "_names")

    # Make NumPy defer ``ndarray @ NamedArray`` to ``NamedArray.__rmatmul__``.
    __array_ufunc__ = None

    def __init__(self, data: Any, names: Union[str, Iterable[str]]):
        normalized = _normalize_names(names)
        data = backend.as_array(data)
        ndim = backend.rank(data)
        if len(normalized) != ndim:
            raise RankMismatchError(normalized, ndim)
        self._data = data
        self._names = normalized

    @property
    def parent(self) -> Any:
        return self._data

    @property
    def names(self) -> Names:
        return self._names

    @property
    def ndim(self) -> int:
        return len(self._names)

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self._data.shape)

    @property
    def dtype(self) -> Any:
        return self._data.dtype

    @property
    def T(self) -> "NamedArray":
        return self.transpose()

    def transpose(self) -> "NamedArray":
        if self.ndim == 1:
            return NamedCoVector(self._data, self._names)
        if self.ndim == 2:
            return NamedArray(self._data.T, (self._names[1], self._names[0]))
        raise ValueError(f"transpose() is only defined for rank 1 and 2, got rank {self.ndim}")

    def dim(self, spec: AxisSpec) -> int:
        return resolve_axis(self, spec)

    def rename(self, mapping: Optional[Mapping[str, str]] = None, **renames: str) -> "NamedArray":
        translate = dict(mapping or {})
        translate.update(renames)
        for old in translate:
            if old not in self._names:
                raise UnknownAxisError(old, self._names)
        return wrap(self._data, tuple(translate.get(name, name) for name in self._names))

    def __matmul__(self, other: Any) -> Any:
        from .dispatch import matmul

        return matmul(self, other)

    def __rmatmul__(self, other: Any) -> Any:
        from .dispatch import matmul

        return matmul(other, self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(names={self._names}, shape={self.shape})"


class NamedCoVector(NamedArray):
    """
    Transpose of a named vector: a ``(1, n)`` view named ``("_", name)``.

    Products with a covector on the left give raw, unnamed results.
    """

    __slots__ = ("_vector",)

    def __init__(self, vector: Any, names: Union[str, Iterable[str]]):
        normalized = _normalize_names(names)
        vector = backend.as_array(vector)
        if backend.rank(vector) != 1 or len(normalized) != 1:
            raise RankMismatchError(normalized, backend.rank(vector))
        super().__init__(vector[np.newaxis, :], (WILDCARD, normalized[0]))
        self._vector = vector

    @property
    def vector(self) -> Any:
        return self._vector

    def transpose(self) -> NamedArray:
        return NamedArray(self._vector, (self._names[1],))

    def rename(self, mapping: Optional[Mapping[str, str]] = None, **renames: str) -> "NamedCoVector":
        renamed = super().rename(mapping, **renames)
        return NamedCoVector(self._vector, (renamed.names[1],))


def wrap(data: Any, names: Union[str, Iterable[str]]) -> NamedArray:
    return NamedArray(data, names)


def unwrap(x: Any) -> Any:
    if isinstance(x, NamedArray):
        return x.parent
    return x


def resolve_axis(x: NamedArray, spec: AxisSpec) -> int:
    """Map an axis name or 1-based index to a 1-based dimension number.

    Integers pass through unchanged; range checking is left to the numeric
    backend.
    """

    if isinstance(spec, str):
        try:
            return x.names.index(spec) + 1
        except ValueError:
            raise UnknownAxisError(spec, x.names) from None
    if isinstance(spec, Integral) and not isinstance(spec, bool):
        return int(spec)
    raise TypeError(f"Axis must be an axis name or an integer, got {spec!r}")
