"""Resolution of typed command prefixes to command names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .registry import PrefixIndex


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of matching a typed prefix against the known names."""

    prefix: str
    candidates: tuple[str, ...]
    exact: bool
    name: Optional[str]
    predict: bool = True

    @property
    def resolved(self) -> bool:
        return self.name is not None

    @property
    def lists_candidates(self) -> bool:
        """Whether the not-found diagnostics include the candidate list."""
        if self.resolved:
            return False
        return len(self.candidates) > 1 or (
            not self.predict and not self.exact and len(self.candidates) == 1
        )

    def diagnostics(self) -> list[str]:
        """Return the lines reported when the prefix did not resolve."""
        if self.resolved:
            return []
        lines = [f"Command not found: {self.prefix}"]
        if self.lists_candidates:
            lines.append("Candidates:\n  " + "\n  ".join(sorted(self.candidates)))
        lines.append("Use 'help' to see available commands.")
        return lines


def resolve(prefix: str, index: PrefixIndex, predict: bool = True) -> Resolution:
    """Resolve ``prefix`` to a single name.

    An exact match always wins, even when longer names share the prefix. A
    unique inexact match is used only with prediction enabled. Anything else
    is unresolved.
    """
    candidates = tuple(index.starting_with(prefix))
    exact = prefix in candidates
    if exact:
        name: Optional[str] = prefix
    elif predict and len(candidates) == 1:
        name = candidates[0]
    else:
        name = None
    return Resolution(
        prefix=prefix,
        candidates=candidates,
        exact=exact,
        name=name,
        predict=predict,
    )
