from __future__ import annotations

from typing import Any, Optional


class NamedDimsError(Exception):
    """Base class for nameddims-specific exceptions."""


class DimensionNameMismatch(NamedDimsError, ValueError):
    def __init__(self, a_name: Any, b_name: Any, *, message: Optional[str] = None):
        if message is None:
            message = (
                "Cannot take matrix product of arrays with different inner dimension names. "
                f"{a_name} vs {b_name}"
            )
        super().__init__(message)
        self.a_name = a_name
        self.b_name = b_name


class RankMismatchError(NamedDimsError, ValueError):
    def __init__(self, names: Any, ndim: int):
        super().__init__(
            f"Number of axis names ({len(names)}) does not match array rank ({ndim}): {tuple(names)}"
        )
        self.names = tuple(names)
        self.ndim = ndim


class UnknownAxisError(NamedDimsError, KeyError):
    def __init__(self, name: Any, names: Any):
        super().__init__(f"Axis name {name!r} not found in {tuple(names)}")
        self.name = name
        self.names = tuple(names)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0])


class UnsupportedOperandError(NamedDimsError, TypeError):
    pass


class InvalidReductionAxisError(NamedDimsError, ValueError):
    def __init__(self, dims: Any, names: Any):
        super().__init__(
            f"Reduction axis {dims!r} does not resolve to dimension 1 or 2 of {tuple(names)}"
        )
        self.dims = dims
        self.names = tuple(names)
