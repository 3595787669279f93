"""algow Hindley-Milner Type Inference — Algorithm W.

  Damas, L. & Milner, R. (1982) "Principal Type-Schemes for Functional Programs"
  POPL '82, https://doi.org/10.1145/582153.582176

  W(G, x)              = ([], inst(G(x)))
  W(G, e1 e2)          = (S3 S2 S1, S3 b)   where (S1, t1) = W(G, e1)
                                                  (S2, t2) = W(S1 G, e2)
                                                  S3 = unify(S2 t1, t2 -> b)
  W(G, \\x. e)          = (S1, S1 b -> t1)   where (S1, t1) = W(G[x:b], e)
  W(G, let x = e1 in e2) = (S2 S1, t2)      where (S1, t1) = W(G, e1)
                                                  (S2, t2) = W(S1 G[x:s], e2)

By default the let-bound scheme ``s`` is the monomorphic ``S1 t1``.
With ``let_generalization`` it is ``gen(S1 G, S1 t1)`` as in the paper.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from algow.ast_nodes import Exp, EVar, ELit, EApp, EAbs, ELet, Lit, LInt, LBool
from algow.config import AlgowConfig
from algow.environment import (
    PRIMITIVES, Context, apply_subst_context, extend_context,
)
from algow.errors import InferenceError, UnboundVariable
from algow.schemes import generalize, instantiate
from algow.state import InferenceState
from algow.substitution import (
    EMPTY_SUBST, Substitution, apply_subst, compose_subst,
)
from algow.types import Type, TFun, INT, BOOL, Scheme, monotype, normalize_scheme
from algow.unify import unify

logger = logging.getLogger(__name__)


@dataclass
class InferenceResult:
    type: Optional[Type] = None
    error: Optional[InferenceError] = None
    fresh_vars: int = 0
    unifications: int = 0
    context: Context = field(default_factory=dict, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def scheme(self) -> Optional[Scheme]:
        """The result generalized against the starting context, with tidy names."""
        if self.type is None:
            return None
        return normalize_scheme(generalize(self.context, self.type))

    @property
    def summary(self) -> str:
        if self.ok:
            return (f"✅ TYPE INFERENCE: {self.scheme} "
                    f"({self.fresh_vars} fresh variables, {self.unifications} unifications)")
        return f"❌ TYPE INFERENCE: {self.error}"


class HMTypeInferenceEngine:
    """
    Algorithm W over one inference run.
    The engine owns the run's InferenceState; use a new engine per run.
    """

    def __init__(self, let_generalization: bool = False,
                 state: Optional[InferenceState] = None) -> None:
        self.let_generalization = let_generalization
        self.state = state if state is not None else InferenceState()

    def infer(self, context: Context, exp: Exp) -> tuple[Substitution, Type]:
        if isinstance(exp, EVar):
            return self._infer_var(context, exp)
        if isinstance(exp, ELit):
            return EMPTY_SUBST, self._infer_literal(exp.lit)
        if isinstance(exp, EApp):
            return self._infer_app(context, exp)
        if isinstance(exp, EAbs):
            return self._infer_abs(context, exp)
        if isinstance(exp, ELet):
            return self._infer_let(context, exp)
        raise TypeError(f"not an expression: {exp!r}")

    def type_of(self, context: Context, exp: Exp) -> Type:
        s, t = self.infer(context, exp)
        return apply_subst(s, t)

    def _infer_var(self, context: Context, exp: EVar) -> tuple[Substitution, Type]:
        scheme = context.get(exp.name)
        if scheme is None:
            raise UnboundVariable(exp.name)
        return EMPTY_SUBST, instantiate(self.state, scheme)

    def _infer_literal(self, lit: Lit) -> Type:
        if isinstance(lit, LBool):
            return BOOL
        if isinstance(lit, LInt):
            return INT
        raise TypeError(f"not a literal: {lit!r}")

    def _infer_app(self, context: Context, exp: EApp) -> tuple[Substitution, Type]:
        s0, ty_fn = self.infer(context, exp.fn)
        s1, ty_arg = self.infer(apply_subst_context(s0, context), exp.arg)
        ty_res = self.state.fresh_type_var()
        s2 = unify(apply_subst(s1, ty_fn), TFun(ty_arg, ty_res), self.state)
        return compose_subst(s2, compose_subst(s1, s0)), apply_subst(s2, ty_res)

    def _infer_abs(self, context: Context, exp: EAbs) -> tuple[Substitution, Type]:
        ty_param = self.state.fresh_type_var()
        # Lambda-bound variables are never generalized.
        inner = extend_context(context, exp.param, monotype(ty_param))
        s1, ty_body = self.infer(inner, exp.body)
        return s1, TFun(apply_subst(s1, ty_param), ty_body)

    def _infer_let(self, context: Context, exp: ELet) -> tuple[Substitution, Type]:
        s1, ty_bound = self.infer(context, exp.binding)
        outer = apply_subst_context(s1, context)
        if self.let_generalization:
            scheme = generalize(outer, apply_subst(s1, ty_bound))
        else:
            scheme = monotype(apply_subst(s1, ty_bound))
        s2, ty_body = self.infer(extend_context(outer, exp.name, scheme), exp.body)
        return compose_subst(s2, s1), ty_body


def type_inference(context: Context, exp: Exp, *, let_generalization: bool = False) -> Type:
    """Infer the type of ``exp`` under ``context`` in a fresh run.

    The result is not generalized; see :func:`infer_scheme`.
    Raises :class:`InferenceError` on the first failure.
    """
    engine = HMTypeInferenceEngine(let_generalization=let_generalization)
    t = engine.type_of(context, exp)
    logger.debug("inferred %s : %s (%d fresh variables)", exp, t, engine.state.counter)
    return t


def infer_scheme(context: Context, exp: Exp, *, let_generalization: bool = False) -> Scheme:
    t = type_inference(context, exp, let_generalization=let_generalization)
    return generalize(context, t)


def run_type_inference(exp: Exp, context: Context = PRIMITIVES,
                       config: Optional[AlgowConfig] = None) -> InferenceResult:
    """Entry point: infer ``exp`` and report success or the first error."""
    let_generalization = config.let_generalization if config is not None else False
    engine = HMTypeInferenceEngine(let_generalization=let_generalization)
    result = InferenceResult(context=context)
    try:
        result.type = engine.type_of(context, exp)
    except InferenceError as e:
        logger.debug("inference of %s failed: %s", exp, e)
        result.error = e
    result.fresh_vars = engine.state.counter
    result.unifications = engine.state.unifications
    return result


def infer_program(definitions: Iterable[tuple[str, Exp]], context: Context = PRIMITIVES,
                  config: Optional[AlgowConfig] = None) -> dict[str, Scheme]:
    """Infer top-level definitions in order, REPL style.

    Each definition is generalized against the context built so far and
    added to it, so later definitions may use earlier ones polymorphically.
    The whole program shares one run; the first error aborts it.
    """
    let_generalization = config.let_generalization if config is not None else False
    engine = HMTypeInferenceEngine(let_generalization=let_generalization)
    schemes: dict[str, Scheme] = {}
    for name, exp in definitions:
        t = engine.type_of(context, exp)
        scheme = generalize(context, t)
        logger.debug("%s : %s", name, scheme)
        context = extend_context(context, name, scheme)
        schemes[name] = scheme
    return schemes
