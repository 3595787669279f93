"""algow AST Node definitions.

Expressions: variables, literals, application, abstraction, let.
Literals: Int and Bool.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Lit:
    """Base class for literals."""


@dataclass(frozen=True)
class LInt(Lit):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class LBool(Lit):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Exp:
    """Base class for expressions."""


@dataclass(frozen=True)
class EVar(Exp):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ELit(Exp):
    lit: Lit

    def __str__(self) -> str:
        return str(self.lit)


@dataclass(frozen=True)
class EApp(Exp):
    """Function application ``fn arg``."""
    fn: Exp
    arg: Exp

    def __str__(self) -> str:
        return f"({self.fn} {self.arg})"


@dataclass(frozen=True)
class EAbs(Exp):
    """Lambda abstraction ``\\param. body``."""
    param: str
    body: Exp

    def __str__(self) -> str:
        return f"(\\{self.param}. {self.body})"


@dataclass(frozen=True)
class ELet(Exp):
    """Non-recursive ``let name = binding in body``."""
    name: str
    binding: Exp
    body: Exp

    def __str__(self) -> str:
        return f"(let {self.name} = {self.binding} in {self.body})"


def app(fn: Exp, *args: Exp) -> Exp:
    """Left-nested application: ``app(f, x, y)`` is ``(f x) y``."""
    result = fn
    for arg in args:
        result = EApp(result, arg)
    return result
