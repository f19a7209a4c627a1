"""Least squares with named axes.

The normal equations ``(X^T X)^{-1} X^T y`` only line up if every product
contracts matching axes; multiplying ``X`` by itself by mistake raises
``DimensionNameMismatch`` instead of silently producing a wrong result.
"""

import numpy as np

from nameddims import DimensionNameMismatch, NamedArray, cov, inv

rng = np.random.default_rng(0)
true_weights = np.array([1.5, -2.0, 0.5])

X = NamedArray(rng.standard_normal((100, 3)), ("sample", "feature"))
y = NamedArray(X.parent @ true_weights + 0.1 * rng.standard_normal(100), ("sample",))

gram = X.T @ X  # (feature, feature)
weights = inv(gram) @ (X.T @ y)
print(weights.names, np.round(weights.parent, 2))

covariance = cov(X, dims="sample")
print(covariance.names, covariance.shape)

try:
    X @ X
except DimensionNameMismatch as exc:
    print(f"caught: {exc}")
