import numpy as np
import pytest
import scipy.sparse as sp

from nameddims import AlgebraConfig, NamedArray, UnsupportedOperandError, inv


def test_inverse_reverses_names():
    data = np.array([[2.0, 1.0], [1.0, 3.0]])
    result = inv(NamedArray(data, ("x", "y")))
    assert result.names == ("y", "x")
    np.testing.assert_allclose(result.parent, np.linalg.inv(data))


def test_inverse_is_involutive_on_names():
    named = NamedArray(np.array([[4.0, 1.0], [2.0, 3.0]]), ("x", "y"))
    twice = inv(inv(named))
    assert twice.names == ("x", "y")
    np.testing.assert_allclose(twice.parent, named.parent)


def test_inverse_product_is_consistently_named():
    named = NamedArray(np.array([[4.0, 1.0], [2.0, 3.0]]), ("x", "y"))
    identity = named @ inv(named)
    assert identity.names == ("x", "x")
    np.testing.assert_allclose(identity.parent, np.eye(2), atol=1e-12)


def test_singular_matrix_error_propagates():
    with pytest.raises(np.linalg.LinAlgError):
        inv(NamedArray(np.zeros((2, 2)), ("x", "y")))


def test_inverse_needs_a_named_matrix():
    with pytest.raises(UnsupportedOperandError, match="rank-2"):
        inv(NamedArray(np.ones(2), "x"))
    with pytest.raises(UnsupportedOperandError, match="expects a NamedArray"):
        inv(np.eye(2))


def test_sparse_inverse_stays_sparse():
    data = sp.csc_array(np.array([[2.0, 0.0], [0.0, 4.0]]))
    result = inv(NamedArray(data, ("x", "y")))
    assert result.names == ("y", "x")
    assert sp.issparse(result.parent)
    np.testing.assert_allclose(result.parent.toarray(), [[0.5, 0.0], [0.0, 0.25]])


def test_sparse_inverse_dense_mode():
    data = sp.csr_matrix(np.array([[2.0, 0.0], [0.0, 4.0]]))
    result = inv(NamedArray(data, ("x", "y")), config=AlgebraConfig(sparse_inverse="Dense"))
    assert isinstance(result.parent, np.ndarray)
    np.testing.assert_allclose(result.parent, [[0.5, 0.0], [0.0, 0.25]])
