"""Accessibility scanner - runs every analyzer over a node set and merges the results.

The scanner fans out to all enabled analyzers concurrently, waits for
every one of them, and merges their issues ordered by severity. An
analyzer that fails contributes nothing; the scan itself always
completes.
"""

import asyncio
import time
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

import structlog

from .analyzers import (
    BaseAnalyzer,
    ColorBlindnessAnalyzer,
    ContrastAnalyzer,
    ImageAccessibilityAnalyzer,
    NavigationAnalyzer,
    TextSizeAnalyzer,
    TouchTargetAnalyzer,
)
from .config import ScanSettings, get_settings
from .exceptions import ScanTimeoutError
from .models import Issue, IssueType, Severity, severity_rank
from .nodes.traversal import collect_nodes
from .utils.logging import LogContext, ScanLogger

logger = structlog.get_logger()

# Score deductions per issue
SEVERITY_PENALTIES = {
    Severity.CRITICAL: 15,
    Severity.WARNING: 5,
    Severity.INFO: 1,
}


def sort_issues(issues: Iterable[Issue]) -> list[Issue]:
    """Stable sort by severity, critical first."""
    return sorted(issues, key=lambda issue: severity_rank(issue.severity))


@dataclass
class ScanReport:
    """Result of one scan.

    Attributes:
        issues: All issues found, critical first
        node_count: Number of nodes the analyzers inspected
        duration_ms: Wall-clock time of the scan
        failed_analyzers: Analyzers that raised and contributed no issues
        scan_id: Identifier bound to the scan's log lines
    """

    issues: list[Issue]
    node_count: int = 0
    duration_ms: float = 0.0
    failed_analyzers: list[str] = field(default_factory=list)
    scan_id: str = ""

    @property
    def counts_by_severity(self) -> dict[str, int]:
        counts = Counter(issue.severity.value for issue in self.issues)
        return {severity.value: counts.get(severity.value, 0) for severity in Severity}

    @property
    def counts_by_type(self) -> dict[str, int]:
        counts = Counter(issue.type.value for issue in self.issues)
        return {issue_type.value: counts.get(issue_type.value, 0) for issue_type in IssueType}

    @property
    def score(self) -> float:
        """Accessibility score from 0 to 100, lowered by every issue found."""
        penalty = sum(SEVERITY_PENALTIES[issue.severity] for issue in self.issues)
        return float(max(0, 100 - penalty))

    @property
    def has_critical_issues(self) -> bool:
        return any(issue.severity == Severity.CRITICAL for issue in self.issues)

    @property
    def summary(self) -> str:
        """Human-readable summary of the findings."""
        if not self.issues:
            return (
                f"Accessibility score: {self.score:.0f}/100. "
                f"No issues found in {self.node_count} node(s)."
            )

        by_severity = self.counts_by_severity
        parts = [
            f"{count} {severity}"
            for severity, count in by_severity.items()
            if count
        ]
        summary = (
            f"Accessibility score: {self.score:.0f}/100. "
            f"Found {len(self.issues)} issue(s) in {self.node_count} node(s): {', '.join(parts)}."
        )

        critical_types = Counter(
            issue.type.value for issue in self.issues if issue.severity == Severity.CRITICAL
        )
        if critical_types:
            top_type, top_count = critical_types.most_common(1)[0]
            summary += f" Priority: fix {top_count} critical {top_type} issue(s)."

        if self.failed_analyzers:
            summary += f" Incomplete: {', '.join(self.failed_analyzers)} failed."

        return summary

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "scan_id": self.scan_id,
            "score": self.score,
            "summary": self.summary,
            "node_count": self.node_count,
            "duration_ms": round(self.duration_ms, 1),
            "failed_analyzers": list(self.failed_analyzers),
            "total_issues": len(self.issues),
            "issues_by_severity": self.counts_by_severity,
            "issues_by_type": self.counts_by_type,
            "issues": [issue.to_dict() for issue in self.issues],
        }


class AccessibilityScanner:
    """Runs a set of analyzers concurrently over the same nodes.

    Usage:
        scanner = AccessibilityScanner()
        report = await scanner.scan_report(roots)
        for issue in report.issues:
            print(issue.severity, issue.title)
    """

    def __init__(
        self,
        settings: ScanSettings | None = None,
        analyzers: Sequence[BaseAnalyzer] | None = None,
    ):
        self.settings = settings or get_settings()
        self.analyzers = list(analyzers) if analyzers is not None else self._default_analyzers()
        self.log = logger.bind(component="scanner")

    def _default_analyzers(self) -> list[BaseAnalyzer]:
        analyzers: list[BaseAnalyzer] = [
            ContrastAnalyzer(self.settings),
            TextSizeAnalyzer(self.settings),
            TouchTargetAnalyzer(self.settings),
            ImageAccessibilityAnalyzer(self.settings),
            NavigationAnalyzer(self.settings),
        ]
        if self.settings.include_color_blindness:
            analyzers.append(ColorBlindnessAnalyzer(self.settings))
        return analyzers

    async def scan(self, nodes: Sequence[Any]) -> list[Issue]:
        """Scan nodes and return the merged issues, critical first."""
        report = await self.scan_report(nodes)
        return report.issues

    async def scan_report(self, nodes: Sequence[Any]) -> ScanReport:
        """Scan nodes and return a full report.

        Args:
            nodes: Nodes to scan; expanded into their subtrees when
                ``include_descendants`` is set

        Returns:
            ScanReport with issues sorted critical first
        """
        scan_id = str(uuid4())
        start = time.perf_counter()
        nodes = list(nodes or [])

        if not nodes:
            return ScanReport(issues=[], scan_id=scan_id)

        with LogContext(scan_id=scan_id):
            if self.settings.include_descendants:
                nodes = await collect_nodes(nodes)

            scan_log = ScanLogger(self.log)
            scan_log.scan_started(len(nodes), [analyzer.analyzer_type for analyzer in self.analyzers])

            tasks = [analyzer.analyze(nodes) for analyzer in self.analyzers]
            results = await asyncio.gather(*tasks, return_exceptions=True)

            issues: list[Issue] = []
            for analyzer, result in zip(self.analyzers, results):
                if isinstance(result, BaseException):
                    scan_log.analyzer_failed(analyzer.analyzer_type, result)
                    continue
                scan_log.analyzer_finished(analyzer.analyzer_type, len(result))
                issues.extend(result)

            report = ScanReport(
                issues=sort_issues(issues),
                node_count=len(nodes),
                duration_ms=(time.perf_counter() - start) * 1000,
                failed_analyzers=list(scan_log.failed),
                scan_id=scan_id,
            )
            scan_log.scan_completed(report.counts_by_severity, report.duration_ms)

        return report


async def run_accessibility_check(
    nodes: Sequence[Any],
    *,
    include_color_blindness: bool | None = None,
    settings: ScanSettings | None = None,
) -> list[Issue]:
    """Run every analyzer over ``nodes`` and return the issues, critical first.

    Never raises: an empty node list gives an empty result, and any
    failure leaves whatever was collected (or nothing).

    Args:
        nodes: Nodes to scan
        include_color_blindness: Override the setting of the same name
        settings: Scan settings (defaults to environment settings)

    Returns:
        Issues sorted by severity
    """
    if not nodes:
        return []

    try:
        settings = settings or get_settings()
        if include_color_blindness is not None:
            settings = settings.model_copy(update={"include_color_blindness": include_color_blindness})
        return await AccessibilityScanner(settings).scan(nodes)
    except Exception as e:
        logger.error("Accessibility check failed", error=str(e), exc_info=True)
        return []


async def scan_with_timeout(
    nodes: Sequence[Any],
    timeout_seconds: float,
    *,
    settings: ScanSettings | None = None,
) -> ScanReport:
    """Scan with a wall-clock budget.

    Raises:
        ScanTimeoutError: if the scan does not finish within ``timeout_seconds``
    """
    scanner = AccessibilityScanner(settings)
    try:
        return await asyncio.wait_for(scanner.scan_report(nodes), timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        logger.warning("Accessibility scan timed out", timeout_seconds=timeout_seconds)
        raise ScanTimeoutError(timeout_seconds) from e


def filter_issues(
    issues: Iterable[Issue],
    severities: Iterable[Severity | str] | None = None,
    types: Iterable[IssueType | str] | None = None,
) -> list[Issue]:
    """Keep issues matching any of ``severities`` and any of ``types``.

    A filter left as None matches everything; order is preserved.
    """
    wanted_severities = {Severity(s) for s in severities} if severities is not None else None
    wanted_types = {IssueType(t) for t in types} if types is not None else None

    return [
        issue
        for issue in issues
        if (wanted_severities is None or issue.severity in wanted_severities)
        and (wanted_types is None or issue.type in wanted_types)
    ]


def _issue_key(issue: Issue) -> tuple[str, str, str]:
    return (issue.type.value, issue.node_id, issue.title)


def compare_scans(baseline: Sequence[Issue], current: Sequence[Issue]) -> dict[str, Any]:
    """Compare two scans of the same design.

    Issues are matched by type, node and title, since ids are regenerated
    on every scan.

    Returns:
        Dictionary with new and fixed issues and whether anything regressed
    """
    baseline_keys = {_issue_key(issue) for issue in baseline}
    current_keys = {_issue_key(issue) for issue in current}

    new_issues = [issue for issue in current if _issue_key(issue) not in baseline_keys]
    fixed_issues = [issue for issue in baseline if _issue_key(issue) not in current_keys]

    return {
        "has_regression": len(new_issues) > 0,
        "new_issues": new_issues,
        "fixed_issues": fixed_issues,
        "total_new": len(new_issues),
        "total_fixed": len(fixed_issues),
        "new_critical": sum(1 for issue in new_issues if issue.severity == Severity.CRITICAL),
    }
