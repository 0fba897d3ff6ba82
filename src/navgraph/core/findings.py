"""
Findings produced by the builder and the validator.

A finding is data, never control flow: callers decide whether errors block
and warnings advise.
"""

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any, Dict, Iterable, List


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class FindingCode(StrEnum):
    """Stable identifiers for each kind of finding."""
    DUPLICATE_ID = "duplicate_id"
    EMPTY_ID = "empty_id"
    DANGLING_TARGET = "dangling_target"
    EMPTY_TRIGGER = "empty_trigger"
    TRANSITION_CONFLICT = "transition_conflict"
    UNKNOWN_SOURCE = "unknown_source"
    PROVIDER_FAILED = "provider_failed"
    START_UNRESOLVED = "start_unresolved"
    MISSING_CONTENT = "missing_content"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class Finding:
    """
    One classified problem.

    Attributes:
        severity: ERROR when the graph is structurally unsound, WARNING otherwise.
        code: What kind of problem this is.
        message: Human readable description.
        subject: The window id (or edge target) the finding is about, if any.
    """
    severity: Severity
    code: FindingCode
    message: str
    subject: str | None = None

    @classmethod
    def error(cls, code: FindingCode, message: str, subject: str | None = None) -> "Finding":
        return cls(Severity.ERROR, code, message, subject)

    @classmethod
    def warning(cls, code: FindingCode, message: str, subject: str | None = None) -> "Finding":
        return cls(Severity.WARNING, code, message, subject)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        data["code"] = self.code.value
        return data


def errors_in(findings: Iterable[Finding]) -> List[Finding]:
    return [f for f in findings if f.severity is Severity.ERROR]


def warnings_in(findings: Iterable[Finding]) -> List[Finding]:
    return [f for f in findings if f.severity is Severity.WARNING]
