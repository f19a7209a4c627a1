"""Numeric operations on raw (unnamed) arrays.

NumPy handles dense arrays, SciPy handles sparse ones, and scikit-learn
supplies covariance estimators.  Inputs are passed through untouched; errors
from these libraries propagate to the caller.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as spla
from sklearn.base import clone


def as_array(data: Any) -> Any:
    # Anything exposing ``ndim`` is already an array type (NumPy, SciPy sparse or
    # a registered foreign matrix) and is held as is; lists and tuples are converted.
    if isinstance(data, np.ndarray) or sp.issparse(data) or hasattr(data, "ndim"):
        return data
    return np.asarray(data)


def rank(data: Any) -> int:
    ndim = getattr(data, "ndim", None)
    if ndim is None:
        return int(np.ndim(data))
    return int(ndim)


def multiply(a: Any, b: Any) -> Any:
    return a @ b


def invert(data: Any, *, sparse_mode: str = "auto") -> Any:
    if sp.issparse(data):
        if sparse_mode == "dense":
            return np.linalg.inv(data.toarray())
        # spla.inv expects CSC input.
        return spla.inv(data.tocsc())
    return np.linalg.inv(data)


def _rowvar(dims: int) -> bool:
    # ``dims`` is the 1-based dimension holding observations.
    if dims == 1:
        return False
    if dims == 2:
        return True
    raise ValueError(f"dims must be 1 or 2 for a rank-2 array, got {dims}")


def _dense(data: Any) -> Any:
    if sp.issparse(data):
        return data.toarray()
    return data


def reduce_correlation(data: Any, dims: int) -> np.ndarray:
    # A single variable reduces to a 0-d result; keep it square.
    return np.atleast_2d(np.corrcoef(_dense(data), rowvar=_rowvar(dims)))


def reduce_covariance(data: Any, dims: int, **kwargs: Any) -> np.ndarray:
    return np.atleast_2d(np.cov(_dense(data), rowvar=_rowvar(dims), **kwargs))


def reduce_estimator_covariance(
    estimator: Any,
    data: Any,
    dims: int,
    *,
    clone_estimator: bool = True,
) -> np.ndarray:
    """Fit a scikit-learn covariance estimator and return ``covariance_``.

    scikit-learn expects observations along rows, so ``dims == 2`` fits the
    transpose.
    """

    samples = _dense(data)
    if _rowvar(dims):
        samples = samples.T
    # safe=False deep-copies estimators that do not implement get_params().
    fitted = clone(estimator, safe=False) if clone_estimator else estimator
    fitted.fit(samples)
    return fitted.covariance_
