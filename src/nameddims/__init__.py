from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _load_version

from .core.config import AlgebraConfig, get_default_config, set_default_config
from .core.dispatch import cor, cov, estimator_cov, inv, matmul
from .core.exceptions import (
    DimensionNameMismatch,
    InvalidReductionAxisError,
    NamedDimsError,
    RankMismatchError,
    UnknownAxisError,
    UnsupportedOperandError,
)
from .core.named_array import NamedArray, NamedCoVector, resolve_axis, unwrap, wrap
from .core.names import (
    WILDCARD,
    inverse_names,
    matmul_names,
    matrix_prod_names,
    symmetric_names,
    valid_matmul_names,
)
from .interop import dimnames, register_matmul, unregister_matmul

try:
    __version__ = _load_version("nameddims")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "NamedArray",
    "NamedCoVector",
    "WILDCARD",
    "wrap",
    "unwrap",
    "resolve_axis",
    "dimnames",
    "matmul",
    "inv",
    "cor",
    "cov",
    "estimator_cov",
    "valid_matmul_names",
    "matmul_names",
    "matrix_prod_names",
    "inverse_names",
    "symmetric_names",
    "register_matmul",
    "unregister_matmul",
    "AlgebraConfig",
    "get_default_config",
    "set_default_config",
    "NamedDimsError",
    "DimensionNameMismatch",
    "RankMismatchError",
    "UnknownAxisError",
    "UnsupportedOperandError",
    "InvalidReductionAxisError",
    "__version__",
]
