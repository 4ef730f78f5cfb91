from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found in a table config; `code` is stable, `message` is for people."""
    code: str
    message: str


class ValidationError(Exception):
    """Raised by the config loader with every issue found, not just the first."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(f"[{i.code}] {i.message}" for i in self.issues))

    @property
    def codes(self) -> List[str]:
        return [i.code for i in self.issues]
