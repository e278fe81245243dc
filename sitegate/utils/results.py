"""Result types shared by the gate checker, the validators and the orchestrator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    MISSING_STATE = "missing_state"
    INVALID_STATE = "invalid_state"
    GATE_FAILURE = "gate_failure"
    PLACEHOLDER_FOUND = "placeholder_found"
    MISSING_ARTIFACT = "missing_artifact"
    MISSING_ASSET = "missing_asset"
    PROVENANCE_MISMATCH = "provenance_mismatch"


class BuildStateError(ValueError):
    """Raised when a write operation needs a build state that is missing or invalid."""


@dataclass(frozen=True)
class GateResult:
    passed: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class Issue:
    kind: ErrorKind
    message: str


@dataclass
class ValidationResult:
    """Outcome of one validator run.

    Issues are kept in the order they were found so that a caller can
    concatenate several results without losing the per-artifact ordering.
    """

    name: str
    issues: list[Issue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues

    @property
    def errors(self) -> list[str]:
        return [issue.message for issue in self.issues]

    def add(self, kind: ErrorKind, message: str) -> None:
        self.issues.append(Issue(kind, message))
