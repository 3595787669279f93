"""Structured error objects for algow.

Every error is machine-readable: each carries a kind, a message and a
details mapping that the CLI serializes as JSON.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional

from algow.types import Type, pretty_type


class ErrorKind(Enum):
    UNBOUND_VARIABLE = "unbound_variable"
    OCCURS_CHECK = "occurs_check"
    UNIFICATION_MISMATCH = "unification_mismatch"
    DECODE_ERROR = "decode_error"


class InferenceError(Exception):
    """Base class for every failure that aborts an inference run."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str,
                 details: Optional[dict[str, Any]] = None):
        self.kind = kind
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.details:
            d["details"] = self.details
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        return f"[{self.kind.value}]: {self.message}"


class UnboundVariable(InferenceError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            ErrorKind.UNBOUND_VARIABLE,
            f"Unbound variable '{name}'",
            {"name": name},
        )


class OccursCheckFailure(InferenceError):
    """Binding ``var`` to ``type`` would build an infinite type."""

    def __init__(self, var: str, type: Type):
        self.var = var
        self.type = type
        super().__init__(
            ErrorKind.OCCURS_CHECK,
            f"Occurs check failed: '{var}' occurs in '{pretty_type(type)}'",
            {"var": var, "type": pretty_type(type)},
        )


class UnificationMismatch(InferenceError):
    def __init__(self, left: Type, right: Type):
        self.left = left
        self.right = right
        super().__init__(
            ErrorKind.UNIFICATION_MISMATCH,
            f"Types do not unify: '{pretty_type(left)}' vs. '{pretty_type(right)}'",
            {"left": pretty_type(left), "right": pretty_type(right)},
        )


class DecodeError(InferenceError):
    """Raised by the JSON loader, never by the inference core."""

    def __init__(self, message: str, path: str = "$"):
        self.path = path
        super().__init__(
            ErrorKind.DECODE_ERROR,
            f"{message} at {path}",
            {"path": path},
        )
