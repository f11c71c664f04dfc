"""Tests for type operations."""

import pytest

from itgl.core.types import (
    BOOL,
    DYN,
    INT,
    BaseType,
    TypeArrow,
    TypeDyn,
    TypeParam,
    TypeVar,
    is_bvp_type,
    render_type,
)


class TestRendering:
    """Tests for string representation."""

    def test_base_types(self):
        """Base types print their name."""
        assert str(INT) == "int"
        assert str(BOOL) == "bool"

    def test_dyn(self):
        """The dynamic type prints as ?."""
        assert str(DYN) == "?"

    def test_type_var(self):
        """Type variables print with an x prefix."""
        assert str(TypeVar(3)) == "'x3"

    def test_params_named_by_first_appearance(self):
        """Parameters get letters in the order they appear, not by id."""
        t = TypeArrow(TypeParam(7), TypeArrow(TypeParam(2), TypeParam(7)))
        assert str(t) == "'a -> 'b -> 'a"

    def test_arrow_domain_parenthesized(self):
        """An arrow in domain position is parenthesized."""
        t = TypeArrow(TypeArrow(INT, BOOL), INT)
        assert str(t) == "(int -> bool) -> int"

    def test_arrow_right_associative(self):
        """Arrows in codomain position are not parenthesized."""
        t = TypeArrow(INT, TypeArrow(BOOL, DYN))
        assert str(t) == "int -> bool -> ?"

    def test_many_params(self):
        """Past 'z the letters restart with a numeric suffix."""
        t = TypeParam(0)
        for i in range(1, 28):
            t = TypeArrow(TypeParam(i), t)
        rendered = str(t)
        assert rendered.startswith("'a -> 'b")
        assert "'z -> 'a1 -> 'b1" in rendered

    def test_shared_names(self):
        """Rendering two types with one dict shares parameter names."""
        names: dict[int, str] = {}
        assert render_type(TypeParam(5), names) == "'a"
        assert render_type(TypeArrow(TypeParam(9), TypeParam(5)), names) == "'b -> 'a"


class TestFreeVars:
    """Tests for free_vars."""

    def test_var(self):
        assert TypeVar(1).free_vars() == {1}

    def test_param_is_not_a_variable(self):
        """Type parameters are not free type variables."""
        assert TypeParam(1).free_vars() == set()

    def test_arrow(self):
        t = TypeArrow(TypeVar(1), TypeArrow(INT, TypeVar(2)))
        assert t.free_vars() == {1, 2}

    @pytest.mark.parametrize("t", [INT, BOOL, DYN])
    def test_leaves(self, t):
        assert t.free_vars() == set()


class TestSubstitute:
    """Tests for single-variable substitution."""

    def test_matching_var(self):
        assert TypeVar(1).substitute(1, INT) == INT

    def test_other_var(self):
        assert TypeVar(2).substitute(1, INT) == TypeVar(2)

    def test_arrow(self):
        """Substitution reaches both sides of an arrow."""
        t = TypeArrow(TypeVar(1), TypeArrow(TypeVar(1), TypeVar(2)))
        expected = TypeArrow(BOOL, TypeArrow(BOOL, TypeVar(2)))
        assert t.substitute(1, BOOL) == expected

    def test_param_untouched(self):
        """Parameters and variables with the same id are unrelated."""
        assert TypeParam(1).substitute(1, INT) == TypeParam(1)


class TestClassification:
    """Tests for is_static and is_bvp_type."""

    def test_dyn_not_static(self):
        assert not DYN.is_static()

    def test_arrow_with_dyn_not_static(self):
        assert not TypeArrow(INT, TypeArrow(DYN, INT)).is_static()

    def test_arrow_static(self):
        assert TypeArrow(TypeVar(1), INT).is_static()

    @pytest.mark.parametrize("t", [INT, BOOL, TypeVar(1), TypeParam(1)])
    def test_bvp(self, t):
        assert is_bvp_type(t)

    @pytest.mark.parametrize("t", [DYN, TypeArrow(INT, INT)])
    def test_not_bvp(self, t):
        assert not is_bvp_type(t)

    def test_dyn_is_a_leaf(self):
        """? is its own type, not sugar for ? -> ?."""
        assert DYN != TypeArrow(DYN, DYN)
        assert TypeDyn() == DYN

    def test_structural_equality(self):
        assert BaseType("int") == INT
        assert TypeArrow(TypeVar(1), INT) == TypeArrow(TypeVar(1), INT)
        assert hash(TypeArrow(TypeVar(1), INT)) == hash(TypeArrow(TypeVar(1), INT))
