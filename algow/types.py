"""algow type language.

Monotypes: type variables, Int, Bool and the function arrow.
Type schemes quantify a list of type variables over a monotype.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterator


# ---------------------------------------------------------------------------
# Type Representations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Type:
    """Base type."""

    def __str__(self) -> str:
        return pretty_type(self)


@dataclass(frozen=True)
class TVar(Type):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TFun(Type):
    arg: Type
    result: Type

    def __str__(self) -> str:
        return pretty_type(self)


@dataclass(frozen=True)
class TInt(Type):
    def __str__(self) -> str:
        return "Int"


@dataclass(frozen=True)
class TBool(Type):
    def __str__(self) -> str:
        return "Bool"


INT = TInt()
BOOL = TBool()


def fun(*types: Type) -> Type:
    """Right-nested arrow: ``fun(a, b, c)`` is ``a -> b -> c``."""
    if not types:
        raise ValueError("fun() needs at least one type")
    result = types[-1]
    for t in reversed(types[:-1]):
        result = TFun(t, result)
    return result


@dataclass(frozen=True)
class Scheme:
    """``forall vars. type``."""
    vars: tuple[str, ...]
    type: Type

    def __str__(self) -> str:
        return pretty_scheme(self)


def monotype(t: Type) -> Scheme:
    return Scheme((), t)


# ---------------------------------------------------------------------------
# Pretty printing
# ---------------------------------------------------------------------------

def pretty_type(t: Type) -> str:
    if isinstance(t, TVar):
        return t.name
    if isinstance(t, TInt):
        return "Int"
    if isinstance(t, TBool):
        return "Bool"
    if isinstance(t, TFun):
        arg = pretty_type(t.arg)
        if isinstance(t.arg, TFun):
            arg = f"({arg})"
        return f"{arg} -> {pretty_type(t.result)}"
    raise TypeError(f"not a type: {t!r}")


def pretty_scheme(s: Scheme) -> str:
    if not s.vars:
        return pretty_type(s.type)
    return f"forall {' '.join(s.vars)}. {pretty_type(s.type)}"


def _display_names() -> Iterator[str]:
    letters = "abcdefghijklmnopqrstuvwxyz"
    yield from letters
    for n in itertools.count(1):
        for letter in letters:
            yield f"{letter}{n}"


def normalize_scheme(s: Scheme) -> Scheme:
    """Rename bound variables to a, b, c, ... in quantifier order.

    Names already free in the body are skipped so renaming never captures.
    """
    from algow.substitution import apply_subst, free_type_vars

    taken = free_type_vars(s.type) - set(s.vars)
    names = (n for n in _display_names() if n not in taken)
    renaming = {v: TVar(next(names)) for v in s.vars}
    return Scheme(
        tuple(renaming[v].name for v in s.vars),
        apply_subst(renaming, s.type),
    )
