"""Per-run inference state: the fresh type-variable supply."""

from __future__ import annotations

from dataclasses import dataclass

from algow.types import TVar


@dataclass
class InferenceState:
    """Owned by exactly one inference run.

    ``counter`` only ever grows, so every name handed out by
    :meth:`fresh_type_var` is unique within the run.
    """
    counter: int = 0
    unifications: int = 0

    def fresh_type_var(self) -> TVar:
        var = TVar(f"u{self.counter}")
        self.counter += 1
        return var
