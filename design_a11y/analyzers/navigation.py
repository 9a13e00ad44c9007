"""Navigation analyzer - structure, focus order and operability.

Checks:
- Heading hierarchy (skipped levels, missing or repeated level 1)
- Interactive elements that are hidden or fully covered by another layer
- Interactive elements without an accessible name
- Positive tab indexes and focus order that disagrees with reading order
- Navigation regions without a skip link
"""

import re
from functools import partial
from typing import Any

from ..models import FixSuggestion, Issue, IssueType, Severity
from ..nodes.base import (
    apply_attributes,
    coordinate,
    fill_color,
    heading_level,
    is_interactive,
    is_text_node,
    node_bounds,
    node_id,
    node_name,
)
from ..nodes.traversal import (
    ancestors,
    descendants,
    find_by_name,
    get_children,
    get_parent,
    is_visible,
    z_order,
)
from ..utils.color import parse_color
from ..utils.fallible import read_attr
from .base import BaseAnalyzer

_NAV_REGION = re.compile(r"\b(nav|navbar|navigation|menu\s*bar|header\s*nav)\b", re.IGNORECASE)
_SKIP_LINK = re.compile(r"\bskip\b", re.IGNORECASE)


def _label_of(node: Any) -> str:
    for attribute in ("accessibility_label", "text", "alt_text"):
        value = read_attr(node, attribute)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _positive_tab_index(node: Any) -> int | None:
    tab_index = read_attr(node, "tab_index")
    if isinstance(tab_index, int) and not isinstance(tab_index, bool) and tab_index > 0:
        return tab_index
    return None


async def reading_position(node: Any) -> tuple[float, float]:
    """Absolute (y, x) of a node; x/y are summed up the ancestor chain."""
    x = coordinate(node, "x")
    y = coordinate(node, "y")
    for ancestor in await ancestors(node):
        x += coordinate(ancestor, "x")
        y += coordinate(ancestor, "y")
    return (y, x)


class NavigationAnalyzer(BaseAnalyzer):
    """Flags structural problems for keyboard and screen reader users."""

    # Hidden interactive elements are findings here
    skip_hidden = False

    @property
    def issue_type(self) -> IssueType:
        return IssueType.NAVIGATION

    async def analyze_node(self, node: Any) -> list[Issue]:
        issues = []
        interactive = await is_interactive(node)
        visible = await is_visible(node)

        if interactive and not visible:
            if read_attr(node, "visible", True) is False:
                show = FixSuggestion("Make the element visible", partial(apply_attributes, node, {"visible": True}))
            else:
                show = FixSuggestion("Make the hidden parent layer visible")
            issues.append(
                await self.make_issue(
                    node,
                    Severity.WARNING,
                    "Interactive element is hidden",
                    (
                        f"'{node_name(node)}' looks interactive but it or one of its parents is "
                        f"hidden, so keyboard and screen reader users cannot reach it."
                    ),
                    current_value="hidden",
                    required_value="visible",
                    guideline="2.1.1",
                    fixes=[show, FixSuggestion("Remove the element if it is not meant to be used")],
                )
            )

        if interactive and visible and not is_text_node(node) and not await self._has_accessible_name(node):
            issues.append(
                await self.make_issue(
                    node,
                    Severity.WARNING,
                    "Interactive element has no accessible name",
                    (
                        f"'{node_name(node)}' has no label and no text content, so assistive "
                        f"technology cannot announce what it does."
                    ),
                    current_value="none",
                    required_value="accessible name",
                    guideline="4.1.2",
                    fixes=[FixSuggestion("Add an accessibility label or visible text describing the action")],
                )
            )

        tab_index = _positive_tab_index(node)
        if visible and tab_index is not None:
            issues.append(
                await self.make_issue(
                    node,
                    Severity.INFO,
                    "Positive tab index",
                    (
                        f"Tab index {tab_index} overrides the natural focus order, which is easy "
                        f"to get wrong as the layout changes."
                    ),
                    current_value=str(tab_index),
                    required_value="0 or unset",
                    guideline="2.4.3",
                    fixes=[
                        FixSuggestion(
                            "Use tab index 0 and order elements in the layer list instead",
                            partial(apply_attributes, node, {"tab_index": 0}),
                        ),
                    ],
                )
            )

        return issues

    async def analyze_group(self, nodes: list[Any]) -> list[Issue]:
        visible = [node for node in nodes if await is_visible(node)]

        sections: dict[str, tuple[Any, list[Any]]] = {}
        members = {node_id(node) for node in nodes}
        for node in visible:
            top = await self._section_root(node, members)
            sections.setdefault(node_id(top), (top, []))[1].append(node)

        issues = []
        for root, section in sections.values():
            for check, pending in (
                ("headings", self._check_headings(root, section)),
                ("focus_order", self._check_focus_order(section)),
                ("skip_link", self._check_skip_link(root)),
            ):
                try:
                    issues.extend(await pending)
                except Exception as e:
                    self.log_skipped(check, root, e)

        for node in visible:
            try:
                if await is_interactive(node):
                    issue = await self._check_covered(node)
                    if issue:
                        issues.append(issue)
            except Exception as e:
                self.log_skipped("covered", node, e)

        return issues

    async def _section_root(self, node: Any, members: set[str]) -> Any:
        """Outermost ancestor of ``node`` that is part of the scan."""
        top = node
        for ancestor in await ancestors(node):
            if node_id(ancestor) in members:
                top = ancestor
        return top

    async def _has_accessible_name(self, node: Any) -> bool:
        if _label_of(node):
            return True
        for child in await descendants(node):
            if _label_of(child) and await is_visible(child):
                return True
        return False

    async def _in_reading_order(self, nodes: list[Any]) -> list[Any]:
        positioned = [(await reading_position(node), i, node) for i, node in enumerate(nodes)]
        positioned.sort(key=lambda item: (item[0], item[1]))
        return [node for _, _, node in positioned]

    async def _check_headings(self, root: Any, section: list[Any]) -> list[Issue]:
        headings = [node for node in section if heading_level(node) is not None]
        if not headings:
            return []

        issues = []
        ordered = await self._in_reading_order(headings)

        previous = 0
        for heading in ordered:
            level = heading_level(heading)
            if previous and level > previous + 1:
                issues.append(
                    await self.make_issue(
                        heading,
                        Severity.WARNING,
                        "Skipped heading level",
                        (
                            f"Heading level jumps from H{previous} to H{level}. Screen reader "
                            f"users navigate by headings and rely on a consistent outline."
                        ),
                        current_value=f"H{level}",
                        required_value=f"H{previous + 1} or higher",
                        guideline="1.3.1",
                        fixes=[
                            FixSuggestion(
                                f"Change this heading to H{previous + 1}",
                                partial(apply_attributes, heading, {"heading_level": previous + 1}),
                            ),
                        ],
                    )
                )
            previous = level

        top_level = [heading for heading in ordered if heading_level(heading) == 1]
        if not top_level:
            issues.append(
                await self.make_issue(
                    root,
                    Severity.INFO,
                    "No main heading",
                    f"'{node_name(root)}' has headings but no H1 describing the screen.",
                    current_value="0 H1",
                    required_value="1 H1",
                    guideline="2.4.6",
                    fixes=[FixSuggestion("Add a single H1 that names the screen")],
                )
            )
        elif len(top_level) > 1:
            issues.append(
                await self.make_issue(
                    root,
                    Severity.INFO,
                    "Multiple main headings",
                    f"'{node_name(root)}' has {len(top_level)} H1 headings; one is expected.",
                    current_value=f"{len(top_level)} H1",
                    required_value="1 H1",
                    guideline="2.4.6",
                    fixes=[FixSuggestion("Keep one H1 and demote the others to H2")],
                )
            )

        return issues

    async def _check_focus_order(self, section: list[Any]) -> list[Issue]:
        indexed = [node for node in section if _positive_tab_index(node) is not None]
        if len(indexed) < 2:
            return []

        focus_order = sorted(indexed, key=_positive_tab_index)
        reading_order = await self._in_reading_order(indexed)
        for focused, read in zip(focus_order, reading_order):
            if node_id(focused) != node_id(read):
                return [
                    await self.make_issue(
                        focused,
                        Severity.WARNING,
                        "Focus order differs from reading order",
                        (
                            f"Tab index {_positive_tab_index(focused)} moves focus to "
                            f"'{node_name(focused)}' before '{node_name(read)}', which comes "
                            f"first on screen."
                        ),
                        current_value=" > ".join(node_name(n) for n in focus_order),
                        required_value=" > ".join(node_name(n) for n in reading_order),
                        guideline="2.4.3",
                        fixes=[FixSuggestion("Reorder the tab indexes to follow the visual layout")],
                    )
                ]
        return []

    async def _check_skip_link(self, root: Any) -> list[Issue]:
        if not await find_by_name(root, _NAV_REGION):
            return []
        if await find_by_name(root, _SKIP_LINK):
            return []

        return [
            await self.make_issue(
                root,
                Severity.INFO,
                "No skip link",
                (
                    f"'{node_name(root)}' has a navigation region but no 'Skip to content' "
                    f"link, so keyboard users must tab through it on every screen."
                ),
                current_value="none",
                required_value="skip link",
                guideline="2.4.1",
                fixes=[FixSuggestion("Add a 'Skip to main content' link as the first focusable element")],
            )
        ]

    async def _check_covered(self, node: Any) -> Issue | None:
        bounds = node_bounds(node)
        parent = await get_parent(node)
        if bounds is None or parent is None:
            return None

        siblings = await z_order(await get_children(parent))
        for sibling in siblings:
            if node_id(sibling) == node_id(node):
                # Everything after this point is painted behind the node
                return None

            cover = node_bounds(sibling)
            fill = fill_color(sibling)
            if (
                cover is None
                or fill is None
                or parse_color(fill).a < 1.0
                or read_attr(sibling, "visible", True) is False
                or not cover.contains(bounds)
            ):
                continue

            return await self.make_issue(
                node,
                Severity.WARNING,
                "Interactive element is covered",
                (
                    f"'{node_name(node)}' is completely covered by '{node_name(sibling)}', "
                    f"which is painted in front of it, so it cannot be seen or tapped."
                ),
                current_value=f"covered by {node_name(sibling)}",
                required_value="unobstructed",
                guideline="2.1.1",
                fixes=[FixSuggestion(f"Move '{node_name(node)}' above '{node_name(sibling)}' in the layer order")],
            )

        return None
