"""Robinson unification with occurs check.

    unify(Int, Int)            = []
    unify(a, t)                = [a := t]     if a not in FV(t)
    unify(l -> r, l2 -> r2)    = S2 . S1      S1 = unify(l, l2)
                                              S2 = unify(S1 r, S1 r2)
    unify(t1, t2)              = FAIL         otherwise
"""

from __future__ import annotations

import logging
from typing import Optional

from algow.errors import OccursCheckFailure, UnificationMismatch
from algow.state import InferenceState
from algow.substitution import (
    EMPTY_SUBST, Substitution, apply_subst, compose_subst, free_type_vars,
)
from algow.types import Type, TVar, TFun, TInt, TBool

logger = logging.getLogger(__name__)


def unify(t1: Type, t2: Type, state: Optional[InferenceState] = None) -> Substitution:
    """Most general unifier of ``t1`` and ``t2``.

    Each call, recursive ones included, is counted on ``state`` when given.

    Raises :class:`UnificationMismatch` when the shapes differ and
    :class:`OccursCheckFailure` when a solution would be an infinite type.
    """
    if state is not None:
        state.unifications += 1

    if isinstance(t1, TInt) and isinstance(t2, TInt):
        return EMPTY_SUBST
    if isinstance(t1, TBool) and isinstance(t2, TBool):
        return EMPTY_SUBST

    if isinstance(t1, TVar):
        return var_bind(t1.name, t2)
    if isinstance(t2, TVar):
        return var_bind(t2.name, t1)

    if isinstance(t1, TFun) and isinstance(t2, TFun):
        s1 = unify(t1.arg, t2.arg, state)
        s2 = unify(apply_subst(s1, t1.result), apply_subst(s1, t2.result), state)
        return compose_subst(s2, s1)

    raise UnificationMismatch(t1, t2)


def var_bind(var: str, t: Type) -> Substitution:
    if isinstance(t, TVar) and t.name == var:
        return EMPTY_SUBST
    if var in free_type_vars(t):
        raise OccursCheckFailure(var, t)
    logger.debug("bind %s := %s", var, t)
    return {var: t}
