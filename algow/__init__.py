"""algow — Hindley-Milner type inference (Algorithm W)"""

__version__ = "0.1.0"

from algow.types import (
    Type, TVar, TFun, TInt, TBool, INT, BOOL, Scheme, fun, monotype,
    pretty_type, pretty_scheme, normalize_scheme,
)
from algow.ast_nodes import Exp, EVar, ELit, EApp, EAbs, ELet, Lit, LInt, LBool, app
from algow.errors import (
    ErrorKind, InferenceError, UnboundVariable, OccursCheckFailure,
    UnificationMismatch, DecodeError,
)
from algow.substitution import (
    Substitution, EMPTY_SUBST, apply_subst, apply_subst_scheme, compose_subst,
    free_type_vars, free_type_vars_scheme,
)
from algow.state import InferenceState
from algow.unify import unify
from algow.schemes import generalize, instantiate, free_type_vars_context
from algow.environment import (
    Context, EMPTY_CONTEXT, PRIMITIVES, extend_context, apply_subst_context,
)
from algow.inference import (
    HMTypeInferenceEngine, InferenceResult, type_inference, infer_scheme,
    run_type_inference, infer_program,
)
