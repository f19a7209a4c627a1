"""Named matrix products, inverse and symmetric reductions.

Each operation unwraps its named operands, checks and derives axis names,
delegates the numeric work to :mod:`nameddims.core.backend` and wraps the raw
result again.  Name checks always run before any numeric work.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from . import backend
from .config import AlgebraConfig, resolve_config
from .exceptions import UnsupportedOperandError
from .named_array import AxisSpec, NamedArray, NamedCoVector, resolve_axis
from .names import Names, check_matmul_names, inverse_names, matrix_prod_names, symmetric_names

logger = logging.getLogger(__name__)

_PRODUCT_RANKS = (1, 2)


def _type_name(value: Any) -> str:
    return type(value).__name__


def _require_product_rank(x: NamedArray) -> None:
    if x.ndim not in _PRODUCT_RANKS:
        raise UnsupportedOperandError(
            f"Matrix product is only defined for rank 1 and 2 named arrays, got names {x.names}"
        )


def _promote(foreign: Any, named: NamedArray, foreign_on_left: bool) -> NamedArray:
    from ..interop import lookup

    entry = lookup(foreign, named.ndim, foreign_on_left)
    if entry is None:
        order = f"{_type_name(foreign)} @ NamedArray" if foreign_on_left else f"NamedArray @ {_type_name(foreign)}"
        raise UnsupportedOperandError(
            f"No matmul interop registered for {order} "
            f"(foreign rank {backend.rank(foreign)}, named rank {named.ndim})"
        )
    return entry.promote(foreign)


def _named_product(a: NamedArray, b: NamedArray) -> NamedArray:
    _require_product_rank(a)
    _require_product_rank(b)
    names = matrix_prod_names(a.names, b.names)
    data = backend.multiply(a.parent, b.parent)
    logger.debug("matmul %s @ %s -> %s", a.names, b.names, names)
    return NamedArray(data, names)


def _covector_product(a: NamedCoVector, b: Any) -> Any:
    # Row vector on the left: the result carries no axis worth naming.
    if isinstance(b, NamedArray):
        _require_product_rank(b)
        check_matmul_names(a.names, b.names)
        raw_b = b.parent
    else:
        raw_b = b
    if backend.rank(raw_b) == 1:
        return backend.multiply(a.vector, raw_b)
    return backend.multiply(a.parent, raw_b)


def matmul(a: Any, b: Any) -> Any:
    """
    Matrix product ``a @ b`` with axis-name checking.

    Supported named rank combinations are matrix x vector, vector x matrix and
    matrix x matrix.  The contracted names must match unless one of them is the
    wildcard ``"_"``; otherwise :class:`DimensionNameMismatch` is raised.  A
    covector (transposed named vector) on the left yields a raw, unnamed
    result.  Foreign operands are promoted through :mod:`nameddims.interop`.
    """

    a_named = isinstance(a, NamedArray)
    b_named = isinstance(b, NamedArray)
    if isinstance(a, NamedCoVector):
        return _covector_product(a, b)
    if a_named and b_named:
        return _named_product(a, b)
    if a_named:
        _require_product_rank(a)
        return matmul(a, _promote(b, a, foreign_on_left=False))
    if b_named:
        _require_product_rank(b)
        return matmul(_promote(a, b, foreign_on_left=True), b)
    raise UnsupportedOperandError(
        f"matmul expects at least one NamedArray operand, got {_type_name(a)} and {_type_name(b)}"
    )


def _require_matrix(x: Any, op: str) -> NamedArray:
    if not isinstance(x, NamedArray):
        raise UnsupportedOperandError(f"{op} expects a NamedArray, got {_type_name(x)}")
    if x.ndim != 2:
        raise UnsupportedOperandError(f"{op} is only defined for rank-2 named arrays, got names {x.names}")
    return x


def inv(a: NamedArray, *, config: Optional[AlgebraConfig] = None) -> NamedArray:
    """Matrix inverse; the result's names are the input's names reversed."""

    cfg = resolve_config(config)
    a = _require_matrix(a, "inv")
    names = inverse_names(a.names)
    data = backend.invert(a.parent, sparse_mode=cfg.sparse_inverse)
    return NamedArray(data, names)


def _reduction_names(a: NamedArray, dims: AxisSpec, cfg: AlgebraConfig, op: str) -> Tuple[int, Names]:
    a = _require_matrix(a, op)
    numerical_dims = resolve_axis(a, dims)
    names = symmetric_names(a.names, numerical_dims, cfg.strict_reduction_names)
    logger.debug("%s over dims=%r (%d) of %s -> %s", op, dims, numerical_dims, a.names, names)
    return numerical_dims, names


def cor(a: NamedArray, dims: AxisSpec = 1, *, config: Optional[AlgebraConfig] = None) -> NamedArray:
    """Correlation matrix of the variables of ``a``.

    ``dims`` names (or numbers, 1-based) the dimension along which the
    observations lie.  For ``a`` named ``(obs, var)`` and ``dims=1`` the
    result is named ``(var, var)``.
    """

    cfg = resolve_config(config)
    numerical_dims, names = _reduction_names(a, dims, cfg, "cor")
    data = backend.reduce_correlation(a.parent, numerical_dims)
    return NamedArray(data, names)


def cov(
    a: NamedArray,
    dims: AxisSpec = 1,
    *,
    config: Optional[AlgebraConfig] = None,
    **kwargs: Any,
) -> NamedArray:
    """Covariance matrix of the variables of ``a``; see :func:`cor` for ``dims``.

    Extra keyword arguments (``ddof``, ``bias``, ``fweights``, ``aweights``)
    are forwarded to :func:`numpy.cov`.
    """

    cfg = resolve_config(config)
    numerical_dims, names = _reduction_names(a, dims, cfg, "cov")
    data = backend.reduce_covariance(a.parent, numerical_dims, **kwargs)
    return NamedArray(data, names)


def estimator_cov(
    estimator: Any,
    a: NamedArray,
    dims: AxisSpec = 1,
    *,
    config: Optional[AlgebraConfig] = None,
) -> NamedArray:
    """Covariance of ``a`` computed by a scikit-learn covariance estimator.

    Any estimator exposing ``fit(X)`` and ``covariance_`` works, for example
    ``EmpiricalCovariance``, ``LedoitWolf``, ``ShrunkCovariance`` or ``OAS``.
    """

    cfg = resolve_config(config)
    numerical_dims, names = _reduction_names(a, dims, cfg, "estimator_cov")
    data = backend.reduce_estimator_covariance(
        estimator,
        a.parent,
        numerical_dims,
        clone_estimator=cfg.clone_estimators,
    )
    return NamedArray(data, names)
