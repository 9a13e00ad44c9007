"""Touch target analyzer - target size and spacing (WCAG 2.5.5, 2.5.8)."""

from functools import partial
from itertools import combinations
from typing import Any

from ..models import FixSuggestion, Issue, IssueType, Severity
from ..nodes.base import apply_attributes, has_interaction, is_interactive, node_bounds, node_name
from ..nodes.traversal import ancestors, group_by_parent
from ..utils.wcag import required_touch_target_size
from .base import BaseAnalyzer

# WCAG 2.5.8 absolute minimum target edge
MINIMUM_TARGET_PX = 24


class TouchTargetAnalyzer(BaseAnalyzer):
    """Flags interactive elements that are too small or too close together.

    Severity follows the size ratio (smallest edge / required edge):
    below 0.5 is critical, anything else under the requirement is a warning.
    """

    CRITICAL_RATIO = 0.5

    @property
    def issue_type(self) -> IssueType:
        return IssueType.TOUCH_TARGET

    async def _is_target(self, node: Any) -> bool:
        """Interactive nodes with a size, not nested inside another target."""
        if node_bounds(node) is None or not await is_interactive(node):
            return False
        return not any(has_interaction(ancestor) for ancestor in await ancestors(node))

    async def analyze_node(self, node: Any) -> list[Issue]:
        if not await self._is_target(node):
            return []

        bounds = node_bounds(node)
        required = required_touch_target_size(self.settings.platform)
        smallest = min(bounds.width, bounds.height)
        if bounds.width >= required and bounds.height >= required:
            return []

        ratio = smallest / required
        severity = Severity.CRITICAL if ratio < self.CRITICAL_RATIO else Severity.WARNING
        guideline = "2.5.8" if smallest < MINIMUM_TARGET_PX else "2.5.5"

        new_width = max(bounds.width, required)
        new_height = max(bounds.height, required)
        return [
            await self.make_issue(
                node,
                severity,
                "Touch target too small",
                (
                    f"This interactive element is {bounds.width:g}x{bounds.height:g}px. "
                    f"Targets on {self.settings.platform.value} should be at least "
                    f"{required}x{required}px so they can be activated reliably."
                ),
                current_value=f"{bounds.width:g}x{bounds.height:g}px",
                required_value=f"{required}x{required}px",
                guideline=guideline,
                fixes=[
                    FixSuggestion(
                        f"Resize to {new_width:g}x{new_height:g}px",
                        partial(apply_attributes, node, {"width": new_width, "height": new_height}),
                    ),
                    FixSuggestion("Add transparent padding around the element to enlarge its hit area"),
                ],
            )
        ]

    async def analyze_group(self, nodes: list[Any]) -> list[Issue]:
        targets = []
        for node in nodes:
            try:
                if await self._is_target(node):
                    targets.append(node)
            except Exception as e:
                self.log_skipped("touch_spacing", node, e)

        issues = []
        for siblings in (await group_by_parent(targets)).values():
            for first, second in combinations(siblings, 2):
                try:
                    issue = await self._check_spacing(first, second)
                except Exception as e:
                    self.log_skipped("touch_spacing", first, e)
                    continue
                if issue:
                    issues.append(issue)

        return issues

    async def _check_spacing(self, first: Any, second: Any) -> Issue | None:
        min_spacing = self.settings.min_touch_spacing
        gap = node_bounds(first).gap_to(node_bounds(second))
        if gap >= min_spacing:
            return None

        pair = f"'{node_name(first)}' and '{node_name(second)}'"
        if gap < 0:
            severity = Severity.WARNING
            title = "Touch targets overlap"
            description = f"{pair} overlap, so taps may hit the wrong element."
        else:
            severity = Severity.INFO
            title = "Touch targets too close"
            description = (
                f"{pair} are only {round(gap, 1):g}px apart. Keep at least "
                f"{min_spacing:g}px between targets."
            )

        return await self.make_issue(
            first,
            severity,
            title,
            description,
            current_value=f"{round(gap, 1):g}px",
            required_value=f"{min_spacing:g}px",
            guideline="2.5.8",
            fixes=[
                FixSuggestion(f"Increase spacing between the targets to {min_spacing:g}px"),
            ],
        )
