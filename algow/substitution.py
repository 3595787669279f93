"""Substitutions: finite maps from type-variable names to types.

A substitution is a mapping that is never mutated once built. Every
operation here returns a fresh dict, so callers can keep sharing the
substitutions they already hold. The shared ``EMPTY_SUBST`` is read-only.

Composition pre-applies the left substitution to the right one's range
and takes the union with the left one, biased towards the pre-applied
entries::

    apply_subst(compose_subst(s1, s2), t) == apply_subst(s1, apply_subst(s2, t))

With that invariant a single ``apply_subst`` pass is always enough; no
substitution ever has to be applied to a fixpoint.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from algow.types import Type, TVar, TFun, TInt, TBool, Scheme

Substitution = Mapping[str, Type]

EMPTY_SUBST: Substitution = MappingProxyType({})


def free_type_vars(t: Type) -> set[str]:
    if isinstance(t, TVar):
        return {t.name}
    if isinstance(t, TFun):
        return free_type_vars(t.arg) | free_type_vars(t.result)
    if isinstance(t, (TInt, TBool)):
        return set()
    raise TypeError(f"not a type: {t!r}")


def free_type_vars_scheme(s: Scheme) -> set[str]:
    return free_type_vars(s.type) - set(s.vars)


def apply_subst(subst: Substitution, t: Type) -> Type:
    if isinstance(t, TVar):
        return subst.get(t.name, t)
    if isinstance(t, TFun):
        return TFun(apply_subst(subst, t.arg), apply_subst(subst, t.result))
    if isinstance(t, (TInt, TBool)):
        return t
    raise TypeError(f"not a type: {t!r}")


def apply_subst_scheme(subst: Substitution, s: Scheme) -> Scheme:
    # Quantified names shadow the substitution.
    if any(v in subst for v in s.vars):
        subst = {k: v for k, v in subst.items() if k not in s.vars}
    return Scheme(s.vars, apply_subst(subst, s.type))


def compose_subst(s1: Substitution, s2: Substitution) -> dict[str, Type]:
    """``s1`` after ``s2``.

    ``s1`` only contributes the names ``s2`` leaves unbound; a name bound by
    both resolves through ``s2`` first, then ``s1``.
    """
    result = dict(s1)
    result.update((k, apply_subst(s1, v)) for k, v in s2.items())
    return result
