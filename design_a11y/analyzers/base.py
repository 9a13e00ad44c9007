"""Base Analyzer - Foundation for accessibility analyzers.

Provides common functionality for all analyzers:
- Per-node dispatch with fail-soft error handling
- Optional group checks spanning several nodes
- Issue construction (ids, locations, WCAG citations)
- Effective background resolution through the ancestor chain
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any
from uuid import uuid4

import structlog

from ..config import ScanSettings, get_settings
from ..models import FixSuggestion, Issue, IssueLocation, IssueType, Severity
from ..nodes.base import fill_color, node_id, node_name
from ..nodes.traversal import ancestors, is_visible, node_path
from ..utils.color import RGBA, WHITE, composite, parse_color
from ..utils.wcag import get_guideline


async def effective_background(node: Any, include_self: bool = True) -> RGBA:
    """Resolve the opaque color painted behind ``node``.

    Walks from the node (or its parent) up the ancestor chain collecting
    fills until an opaque one is found, then composites them. Defaults
    to white when no ancestor has a fill.
    """
    chain = [node] if include_self else []
    chain.extend(await ancestors(node))

    layers: list[RGBA] = []
    for candidate in chain:
        fill = fill_color(candidate)
        if not fill:
            continue
        rgba = parse_color(fill)
        layers.append(rgba)
        if rgba.a >= 1.0:
            break

    result = WHITE
    for layer in reversed(layers):
        result = composite(layer, result)
    return result


class BaseAnalyzer(ABC):
    """Base class for accessibility analyzers.

    Subclasses should implement:
    - issue_type: Which IssueType the analyzer reports
    - analyze_node(): Checks on a single node
    - analyze_group(): Checks spanning several nodes (optional)
    """

    # Analyzers that inspect hidden nodes themselves set this to False
    skip_hidden: bool = True

    def __init__(self, settings: ScanSettings | None = None):
        """Initialize analyzer.

        Args:
            settings: Scan settings (defaults to environment settings)
        """
        self.settings = settings or get_settings()
        self.log = structlog.get_logger().bind(analyzer=self.__class__.__name__)

    @property
    @abstractmethod
    def issue_type(self) -> IssueType:
        """Return the type of issue this analyzer reports."""
        pass

    @property
    def analyzer_type(self) -> str:
        return self.issue_type.value

    async def analyze(self, nodes: Sequence[Any]) -> list[Issue]:
        """Analyze the given nodes.

        A node that cannot be inspected is skipped; it never aborts the
        analysis.

        Args:
            nodes: Nodes to inspect (not expanded into their subtrees)

        Returns:
            Issues found, in node order
        """
        start = time.perf_counter()
        nodes = list(nodes or [])
        issues: list[Issue] = []

        candidates = []
        for node in nodes:
            try:
                if self.skip_hidden and not await is_visible(node):
                    continue
                candidates.append(node)
                issues.extend(await self.analyze_node(node))
            except Exception as e:
                self.log.debug("Error analyzing node", node_id=node_id(node), error=str(e))

        try:
            issues.extend(await self.analyze_group(candidates))
        except Exception as e:
            self.log.debug("Error in group checks", error=str(e))

        self.log.debug(
            "Analysis finished",
            nodes=len(nodes),
            issues=len(issues),
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return issues

    async def analyze_node(self, node: Any) -> list[Issue]:
        """Checks on a single node. Override in subclasses."""
        return []

    async def analyze_group(self, nodes: list[Any]) -> list[Issue]:
        """Checks that need several nodes at once. Override in subclasses."""
        return []

    def log_skipped(self, check: str, node: Any, error: Exception) -> None:
        """Record a group check that could not be completed around ``node``.

        Group checks call this per section or per pair, so one bad node
        costs only the findings that involve it.
        """
        self.log.debug("Group check skipped", check=check, node_id=node_id(node), error=str(error))

    async def make_issue(
        self,
        node: Any,
        severity: Severity,
        title: str,
        description: str,
        *,
        current_value: str | None = None,
        required_value: str | None = None,
        guideline: str | None = None,
        fixes: Iterable[FixSuggestion] = (),
    ) -> Issue:
        """Build an issue located at ``node`` with a fresh id."""
        key = node_id(node)
        if not key:
            raise ValueError("Cannot report an issue on a node without an id")

        wcag = get_guideline(guideline) if guideline else None

        return Issue(
            id=str(uuid4()),
            type=self.issue_type,
            severity=severity,
            title=title,
            description=description,
            location=IssueLocation(
                node_id=key,
                node_name=node_name(node),
                node_path=await node_path(node),
            ),
            current_value=current_value,
            required_value=required_value,
            wcag_guideline=f"{wcag.id} {wcag.name}" if wcag else None,
            wcag_link=wcag.url if wcag else None,
            fix_suggestions=tuple(fixes),
        )
