"""Tests for the unification algorithm."""

import pytest

from itgl.core.constraints import Consistent, ConstraintSet, Equal
from itgl.core.errors import UnificationError
from itgl.core.fresh import FreshSupply
from itgl.core.types import BOOL, DYN, INT, TypeArrow, TypeParam, TypeVar
from itgl.core.unify import Substitution, Unifier, occurs_in, unify

X1, X2, X3, X4 = TypeVar(1), TypeVar(2), TypeVar(3), TypeVar(4)


def solve(*constraints, supply=None):
    return unify(ConstraintSet.of(*constraints), supply if supply is not None else FreshSupply(start=100))


class TestOccursIn:
    """Tests for occurs check."""

    def test_var_in_var_same(self):
        assert occurs_in(1, X1) is True

    def test_var_in_var_different(self):
        assert occurs_in(1, X2) is False

    def test_var_in_arrow(self):
        t = TypeArrow(X1, TypeArrow(INT, X2))
        assert occurs_in(2, t) is True
        assert occurs_in(3, t) is False


class TestSubstitution:
    """Tests for Substitution."""

    def test_empty(self):
        assert Substitution.empty().apply(X1) == X1

    def test_singleton(self):
        s = Substitution.singleton(1, INT)
        assert s.apply(X1) == INT
        assert s.apply(X2) == X2

    def test_fold_left_to_right(self):
        """A binding may mention variables bound later in the list."""
        s = Substitution(((1, TypeArrow(X2, X2)), (2, BOOL)))
        assert s.apply(X1) == TypeArrow(BOOL, BOOL)

    def test_order_matters(self):
        """Reversing the bindings changes the result: it is not a mapping."""
        s = Substitution(((2, BOOL), (1, TypeArrow(X2, X2))))
        assert s.apply(X1) == TypeArrow(X2, X2)

    def test_extend_appends(self):
        s = Substitution.singleton(1, X2).extend(2, INT)
        assert list(s) == [(1, X2), (2, INT)]
        assert s.apply(X1) == INT

    def test_str(self):
        s = Substitution(((1, INT), (2, TypeArrow(X3, X4))))
        assert str(s) == "x1=int, x2='x3 -> 'x4"


class TestConsistencyRules:
    """Rules for Consistent constraints."""

    def test_reflexive_base(self):
        assert len(solve(Consistent(INT, INT))) == 0

    def test_reflexive_var(self):
        assert len(solve(Consistent(X1, X1))) == 0

    def test_reflexive_param(self):
        assert len(solve(Consistent(TypeParam(1), TypeParam(1)))) == 0

    @pytest.mark.parametrize("other", [INT, BOOL, X1, TypeArrow(INT, BOOL)])
    def test_dyn_left_and_right(self, other):
        """? is consistent with everything, on either side."""
        assert len(solve(Consistent(DYN, other))) == 0
        assert len(solve(Consistent(other, DYN))) == 0

    def test_arrow_decomposition(self):
        s = solve(Consistent(TypeArrow(X1, DYN), TypeArrow(INT, BOOL)))
        assert s.apply(X1) == INT

    def test_var_oriented_first(self):
        """int ~ x is flipped and becomes x = int."""
        s = solve(Consistent(INT, X1))
        assert list(s) == [(1, INT)]

    def test_var_var(self):
        s = solve(Consistent(X1, X2))
        assert list(s) == [(1, X2)]

    def test_var_against_arrow_with_dyn(self):
        """x ~ (? -> int) forces x to an arrow of fresh variables; the ? part stays open."""
        s = solve(Consistent(X1, TypeArrow(DYN, INT)))
        result = s.apply(X1)
        assert isinstance(result, TypeArrow)
        assert isinstance(result.dom, TypeVar)
        assert result.cod == INT

    def test_var_against_arrow_uses_supply(self):
        supply = FreshSupply(start=50)
        s = solve(Consistent(X1, TypeArrow(INT, INT)), supply=supply)
        assert s.apply(X1) == TypeArrow(INT, INT)
        assert supply.tyvar() == TypeVar(52)

    def test_static_mismatch(self):
        with pytest.raises(UnificationError) as exc_info:
            solve(Consistent(BOOL, INT))
        assert exc_info.value.constraint == Consistent(BOOL, INT)
        assert str(exc_info.value) == "cannot unify: bool ~ int"

    def test_arrow_against_base(self):
        with pytest.raises(UnificationError):
            solve(Consistent(TypeArrow(INT, INT), INT))

    def test_distinct_params_inconsistent(self):
        with pytest.raises(UnificationError):
            solve(Consistent(TypeParam(1), TypeParam(2)))

    def test_occurs_check(self):
        """x ~ x -> int has no finite solution."""
        with pytest.raises(UnificationError):
            solve(Consistent(X1, TypeArrow(X1, INT)))


class TestEqualityRules:
    """Rules for Equal constraints."""

    def test_reflexive(self):
        assert len(solve(Equal(BOOL, BOOL))) == 0

    def test_bind(self):
        s = solve(Equal(X1, TypeArrow(X2, X3)))
        assert list(s) == [(1, TypeArrow(X2, X3))]

    def test_flip(self):
        s = solve(Equal(INT, X1))
        assert list(s) == [(1, INT)]

    def test_arrow_decomposition(self):
        s = solve(Equal(TypeArrow(X1, X2), TypeArrow(INT, BOOL)))
        assert s.apply(TypeArrow(X1, X2)) == TypeArrow(INT, BOOL)

    def test_mismatch(self):
        with pytest.raises(UnificationError) as exc_info:
            solve(Equal(INT, BOOL))
        assert str(exc_info.value) == "cannot unify: int = bool"

    def test_dyn_is_not_equal_to_itself(self):
        """Equality only handles static types; ? = ? has no rule."""
        with pytest.raises(UnificationError):
            solve(Equal(DYN, DYN))

    def test_occurs_check(self):
        """x = x -> y is reported as an ordinary unification failure."""
        with pytest.raises(UnificationError) as exc_info:
            solve(Equal(X1, TypeArrow(X1, X2)))
        assert str(exc_info.value).startswith("cannot unify: ")


class TestSolving:
    """Whole constraint sets."""

    def test_binding_substituted_into_rest(self):
        """Once x1 is bound, remaining constraints see its value."""
        with pytest.raises(UnificationError):
            solve(Equal(X1, INT), Consistent(X1, BOOL))

    def test_chain(self):
        s = solve(Equal(X1, TypeArrow(X2, X3)), Equal(X2, INT), Consistent(X3, BOOL))
        assert s.apply(X1) == TypeArrow(INT, BOOL)

    def test_every_variable_resolved(self):
        """Applying the result leaves no bound variable behind."""
        s = solve(
            Equal(X1, TypeArrow(X2, X3)),
            Equal(X1, TypeArrow(X4, TypeVar(5))),
            Consistent(X4, INT),
        )
        result = s.apply(TypeArrow(X1, TypeArrow(X2, X4)))
        for var, _ in s:
            assert var not in result.free_vars()
        assert s.apply(X1) == TypeArrow(INT, TypeVar(5))

    def test_deterministic(self):
        """Equal sets built in different orders solve identically."""
        cs = [Equal(X1, TypeArrow(X2, X3)), Consistent(X2, INT), Consistent(X3, X4)]
        s1 = unify(ConstraintSet.of(*cs), FreshSupply())
        s2 = unify(ConstraintSet.of(*reversed(cs)), FreshSupply())
        assert s1 == s2

    def test_unifier_class(self):
        s = Unifier(FreshSupply()).unify(ConstraintSet.of(Consistent(X1, INT)))
        assert s.apply(X1) == INT

    def test_deep_constraint_set(self):
        """Long chains do not hit the recursion limit."""
        n = 1000
        cs = [Equal(TypeVar(i), TypeVar(i + 1)) for i in range(1, n)] + [Equal(TypeVar(n), INT)]
        s = solve(*cs)
        assert s.apply(X1) == INT
