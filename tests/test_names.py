import pytest
from hypothesis import given
from hypothesis import strategies as st

from nameddims import (
    WILDCARD,
    DimensionNameMismatch,
    InvalidReductionAxisError,
    UnsupportedOperandError,
    inverse_names,
    matmul_names,
    matrix_prod_names,
    symmetric_names,
    valid_matmul_names,
)

_NAMES = st.sampled_from(["row", "col", "mid", "bad", "out", WILDCARD])
_CONCRETE = st.sampled_from(["row", "col", "mid", "bad", "out"])


def _compatible(a: str, b: str) -> bool:
    return a == b or WILDCARD in (a, b)


@given(_NAMES, _NAMES, _NAMES)
def test_matrix_vector_names(a1, a2, b):
    if _compatible(a2, b):
        assert matrix_prod_names((a1, a2), (b,)) == (a1,)
    else:
        with pytest.raises(DimensionNameMismatch) as excinfo:
            matrix_prod_names((a1, a2), (b,))
        assert (excinfo.value.a_name, excinfo.value.b_name) == (a2, b)


@given(_NAMES, _NAMES, _NAMES)
def test_matrix_matrix_keeps_outer_names(a1, b1, b2):
    assert matrix_prod_names((a1, "x"), ("x", b2)) == (a1, b2)
    assert matrix_prod_names((a1, WILDCARD), (b1, b2)) == (a1, b2)
    assert matrix_prod_names((a1, b1), (WILDCARD, b2)) == (a1, b2)


@given(_CONCRETE, _CONCRETE, _CONCRETE, _CONCRETE)
def test_matrix_matrix_mismatch_cites_inner_names(a1, a2, b1, b2):
    if a2 == b1:
        return
    with pytest.raises(DimensionNameMismatch) as excinfo:
        matrix_prod_names((a1, a2), (b1, b2))
    assert excinfo.value.a_name == a2
    assert excinfo.value.b_name == b1
    assert f"{a2} vs {b1}" in str(excinfo.value)


@given(_NAMES, _NAMES, _NAMES)
def test_vector_on_left_is_always_compatible(a, b1, b2):
    assert valid_matmul_names((a,), (b1, b2))
    assert matrix_prod_names((a,), (b1, b2)) == (b2,)


def test_only_contracted_pair_is_checked():
    assert valid_matmul_names(("row", "k"), ("k", "row"))
    assert not valid_matmul_names(("row", "k"), ("j", "k"))


def test_vector_times_vector_is_rejected():
    with pytest.raises(UnsupportedOperandError, match="two vectors"):
        matmul_names(("a",), ("a",))
    with pytest.raises(TypeError):
        matrix_prod_names(("a",), ("a",))


def test_higher_rank_product_is_rejected():
    with pytest.raises(UnsupportedOperandError, match="rank 1 and 2"):
        matmul_names(("a", "b", "c"), ("c", "d"))


def test_derivation_is_memoised():
    first = matrix_prod_names(("row", "col"), ("col",))
    second = matrix_prod_names(("row", "col"), ("col",))
    assert first == ("row",)
    assert first is second
    assert symmetric_names(("x", "y"), 1) is symmetric_names(("x", "y"), 1)


@given(_NAMES, _NAMES)
def test_inverse_names_reverse_and_are_involutive(x, y):
    assert inverse_names((x, y)) == (y, x)
    assert inverse_names(inverse_names((x, y))) == (x, y)


def test_inverse_names_require_rank_two():
    with pytest.raises(UnsupportedOperandError):
        inverse_names(("x",))


def test_symmetric_names_follow_observation_axis():
    assert symmetric_names(("x", "y"), 1) == ("y", "y")
    assert symmetric_names(("x", "y"), 2) == ("x", "x")


@pytest.mark.parametrize("dims", [0, 3, -1])
def test_symmetric_names_fall_back_to_wildcards(dims):
    assert symmetric_names(("x", "y"), dims) == (WILDCARD, WILDCARD)


def test_symmetric_names_strict_mode_raises():
    with pytest.raises(InvalidReductionAxisError) as excinfo:
        symmetric_names(("x", "y"), 3, True)
    assert excinfo.value.dims == 3
    assert excinfo.value.names == ("x", "y")
