"""Typing contexts and the primitive environment.

A context maps identifiers to type schemes. Contexts are never updated in
place: :func:`extend_context` and :func:`apply_subst_context` build new
mappings and leave the caller's context valid for outer scopes.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from algow.substitution import Substitution, apply_subst_scheme
from algow.types import BOOL, INT, Scheme, TVar, fun

Context = Mapping[str, Scheme]

EMPTY_CONTEXT: Context = MappingProxyType({})


def extend_context(context: Context, name: str, scheme: Scheme) -> dict[str, Scheme]:
    extended = dict(context)
    extended[name] = scheme
    return extended


def apply_subst_context(subst: Substitution, context: Context) -> dict[str, Scheme]:
    return {name: apply_subst_scheme(subst, scheme) for name, scheme in context.items()}


_a = TVar("a")
_b = TVar("b")

PRIMITIVES: Context = MappingProxyType({
    "identity": Scheme(("a",), fun(_a, _a)),
    "const": Scheme(("a", "b"), fun(_a, _b, _a)),
    "add": Scheme((), fun(INT, INT, INT)),
    "gte": Scheme((), fun(INT, INT, BOOL)),
    "if": Scheme(("a",), fun(BOOL, _a, _a, _a)),
})
