"""Data models for accessibility findings.

Issues are immutable value objects created by analyzers during a scan.
Severity and type are closed enums shared by every analyzer and the
scanner, so sorting and filtering never meet an unknown category.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity levels for accessibility issues, most urgent first."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Sort key: critical=0, warning=1, info=2."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}


def severity_rank(severity: Severity | str) -> int:
    """Sort key for a severity or its wire value; raises ValueError for unknown ones."""
    return Severity(severity).rank


class IssueType(str, Enum):
    """Categories of accessibility issues, one per analyzer."""

    CONTRAST = "contrast"
    TEXT_SIZE = "textSize"
    TOUCH_TARGET = "touchTarget"
    ALT_TEXT = "altText"
    COLOR_BLINDNESS = "colorBlindness"
    NAVIGATION = "navigation"


@dataclass(frozen=True)
class IssueLocation:
    """Where in the design tree an issue was found."""

    node_id: str
    node_name: str
    node_path: str

    def to_dict(self) -> dict[str, str]:
        return {
            "node_id": self.node_id,
            "node_name": self.node_name,
            "node_path": self.node_path,
        }


@dataclass(frozen=True)
class FixSuggestion:
    """A remediation hint, optionally with a callback that applies it.

    The action is handed to the caller untouched; the engine never
    invokes it.
    """

    description: str
    action: Callable[[], Awaitable[None]] | None = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "has_action": self.action is not None,
        }


@dataclass(frozen=True)
class Issue:
    """An accessibility issue found on one node."""

    id: str
    type: IssueType
    severity: Severity
    title: str
    description: str
    location: IssueLocation
    current_value: str | None = None
    required_value: str | None = None
    wcag_guideline: str | None = None
    wcag_link: str | None = None
    fix_suggestions: tuple[FixSuggestion, ...] = ()
    screenshot: str | None = None

    @property
    def node_id(self) -> str:
        return self.location.node_id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "type": self.type.value,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "location": self.location.to_dict(),
            "current_value": self.current_value,
            "required_value": self.required_value,
            "wcag_guideline": self.wcag_guideline,
            "wcag_link": self.wcag_link,
            "fix_suggestions": [s.to_dict() for s in self.fix_suggestions],
            "screenshot": self.screenshot,
        }
