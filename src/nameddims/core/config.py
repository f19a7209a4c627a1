from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class AlgebraConfig:
    """
    Switches shared by the named reductions and products.

    Key behaviors:
    * ``strict_reduction_names`` raises ``InvalidReductionAxisError`` when a
      correlation/covariance axis resolves to something other than dimension 1
      or 2, instead of naming the result with the wildcard pair.
    * ``clone_estimators`` fits a clone of scikit-learn covariance estimators so
      the caller's estimator object is left untouched.
    * ``sparse_inverse`` selects how SciPy sparse inputs are inverted:
      ``"auto"`` keeps them sparse, ``"dense"`` inverts a dense copy.
    """

    strict_reduction_names: bool = False
    clone_estimators: bool = True
    sparse_inverse: str = "auto"  # "auto" | "dense"

    def normalized(self) -> "AlgebraConfig":
        sparse_inverse = (self.sparse_inverse or "auto").lower()
        if sparse_inverse not in {"auto", "dense"}:
            raise ValueError(f"Unsupported sparse inverse mode: {self.sparse_inverse}")
        return replace(
            self,
            strict_reduction_names=bool(self.strict_reduction_names),
            clone_estimators=bool(self.clone_estimators),
            sparse_inverse=sparse_inverse,
        )


_DEFAULT_CONFIG = AlgebraConfig()


def get_default_config() -> AlgebraConfig:
    return _DEFAULT_CONFIG


def set_default_config(config: AlgebraConfig) -> AlgebraConfig:
    """Install ``config`` as the process default and return the previous one."""

    global _DEFAULT_CONFIG
    previous = _DEFAULT_CONFIG
    _DEFAULT_CONFIG = config.normalized()
    return previous


def resolve_config(config: Optional[AlgebraConfig]) -> AlgebraConfig:
    if config is None:
        return _DEFAULT_CONFIG
    return config.normalized()
