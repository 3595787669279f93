"""Generalization and instantiation of type schemes."""

from __future__ import annotations

import logging
from typing import Iterator, Mapping

from algow.state import InferenceState
from algow.substitution import apply_subst, free_type_vars_scheme
from algow.types import Type, TVar, TFun, Scheme

logger = logging.getLogger(__name__)


def _vars_in_order(t: Type) -> Iterator[str]:
    if isinstance(t, TVar):
        yield t.name
    elif isinstance(t, TFun):
        yield from _vars_in_order(t.arg)
        yield from _vars_in_order(t.result)


def free_type_vars_context(context: Mapping[str, Scheme]) -> set[str]:
    result: set[str] = set()
    for scheme in context.values():
        result |= free_type_vars_scheme(scheme)
    return result


def generalize(context: Mapping[str, Scheme], t: Type) -> Scheme:
    """Quantify every variable of ``t`` that the context does not mention.

    Variables still free in the context belong to an enclosing binder and
    must stay monomorphic. Quantified names are listed in the order they
    first occur in ``t``.
    """
    fixed = free_type_vars_context(context)
    bound: list[str] = []
    for name in _vars_in_order(t):
        if name not in fixed and name not in bound:
            bound.append(name)
    scheme = Scheme(tuple(bound), t)
    logger.debug("generalize %s => %s", t, scheme)
    return scheme


def instantiate(state: InferenceState, scheme: Scheme) -> Type:
    """Replace each quantified variable with a fresh one from ``state``."""
    if not scheme.vars:
        return scheme.type
    subst = {name: state.fresh_type_var() for name in scheme.vars}
    return apply_subst(subst, scheme.type)
