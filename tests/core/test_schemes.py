"""Generalization, instantiation and fresh-variable supply."""

from algow.environment import PRIMITIVES, extend_context
from algow.schemes import free_type_vars_context, generalize, instantiate
from algow.state import InferenceState
from algow.substitution import free_type_vars
from algow.types import TVar, INT, BOOL, Scheme, fun, monotype

a, b = TVar("a"), TVar("b")


class TestFreshVariables:

    def test_names_follow_counter(self):
        state = InferenceState()
        assert state.fresh_type_var() == TVar("u0")
        assert state.fresh_type_var() == TVar("u1")
        assert state.counter == 2

    def test_independent_states_do_not_share_counters(self):
        s1, s2 = InferenceState(), InferenceState()
        s1.fresh_type_var()
        s1.fresh_type_var()
        assert s2.fresh_type_var() == TVar("u0")


class TestGeneralize:

    def test_empty_context_binds_everything(self):
        scheme = generalize({}, fun(a, b, a))
        assert scheme == Scheme(("a", "b"), fun(a, b, a))

    def test_variables_free_in_context_stay_free(self):
        ctx = {"x": monotype(a)}
        scheme = generalize(ctx, fun(a, b))
        assert scheme.vars == ("b",)

    def test_bound_variables_in_context_do_not_block(self):
        ctx = {"f": Scheme(("a",), a)}
        assert generalize(ctx, fun(a, a)).vars == ("a",)

    def test_closed_type_binds_nothing(self):
        assert generalize({}, fun(INT, BOOL)) == Scheme((), fun(INT, BOOL))

    def test_order_of_first_occurrence(self):
        scheme = generalize({}, fun(b, a, b))
        assert scheme.vars == ("b", "a")

    def test_context_free_vars(self):
        ctx = extend_context(PRIMITIVES, "x", monotype(fun(a, b)))
        assert free_type_vars_context(ctx) == {"a", "b"}
        assert free_type_vars_context(PRIMITIVES) == set()


class TestInstantiate:

    def test_bound_variables_replaced_with_fresh(self):
        state = InferenceState()
        t = instantiate(state, Scheme(("a", "b"), fun(a, b, a)))
        assert t == fun(TVar("u0"), TVar("u1"), TVar("u0"))

    def test_free_variables_kept(self):
        state = InferenceState()
        t = instantiate(state, Scheme(("a",), fun(a, b)))
        assert t == fun(TVar("u0"), b)

    def test_monotype_allocates_nothing(self):
        state = InferenceState()
        assert instantiate(state, monotype(fun(a, INT))) == fun(a, INT)
        assert state.counter == 0

    def test_two_instantiations_never_share_names(self):
        state = InferenceState()
        scheme = PRIMITIVES["const"]
        first = instantiate(state, scheme)
        second = instantiate(state, scheme)
        assert free_type_vars(first).isdisjoint(free_type_vars(second))
