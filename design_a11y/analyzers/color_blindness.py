"""Color blindness analyzer - information conveyed by color alone (WCAG 1.4.1)."""

from functools import partial
from itertools import combinations
from typing import Any

from ..models import FixSuggestion, Issue, IssueType, Severity
from ..nodes.base import apply_attributes, fill_color, is_text_node, node_bounds, node_name, text_color
from ..nodes.traversal import group_by_parent
from ..utils.color import (
    DichromacyKind,
    color_distance,
    contrast_ratio,
    format_ratio,
    luminance_of,
    parse_color,
    shift_luminance,
    simulate_dichromacy,
    to_hex,
)
from .base import BaseAnalyzer

# Red-green deficiencies are far more common than tritanopia
_COMMON_KINDS = {DichromacyKind.PROTANOPIA, DichromacyKind.DEUTERANOPIA}


def color_of(node: Any) -> str | None:
    """Color a node presents: text color for text, fill otherwise."""
    if is_text_node(node):
        return text_color(node) or fill_color(node)
    return fill_color(node)


class ColorBlindnessAnalyzer(BaseAnalyzer):
    """Finds neighbouring elements told apart only by hue.

    Two colored siblings close to each other are compared under each
    dichromacy simulation. A pair whose colors are clearly different for
    typical vision, but for some deficiency fall below the distinguishable
    distance or keep less than ``retained_distance_ratio`` of their
    original distance, is reported: as a warning when a red-green
    deficiency loses the distinction, as info when only tritanopia does.
    """

    @property
    def issue_type(self) -> IssueType:
        return IssueType.COLOR_BLINDNESS

    async def analyze_group(self, nodes: list[Any]) -> list[Issue]:
        colored = [node for node in nodes if color_of(node) and node_bounds(node)]

        issues = []
        for siblings in (await group_by_parent(colored)).values():
            for first, second in combinations(siblings, 2):
                try:
                    if node_bounds(first).gap_to(node_bounds(second)) > self.settings.adjacency_gap:
                        continue
                    issue = await self._check_pair(first, second)
                except Exception as e:
                    self.log_skipped("color_pair", first, e)
                    continue
                if issue:
                    issues.append(issue)

        return issues

    async def _check_pair(self, first: Any, second: Any) -> Issue | None:
        threshold = self.settings.distinguishable_distance
        color_a = to_hex(parse_color(color_of(first)))
        color_b = to_hex(parse_color(color_of(second)))

        distance = color_distance(color_a, color_b)
        if distance < threshold:
            return None
        # Enough lightness difference survives any hue loss
        ratio = contrast_ratio(parse_color(color_a), parse_color(color_b))
        if ratio >= self.settings.hue_only_contrast:
            return None

        # Lost: too close in absolute terms, or most of the difference gone
        floor = max(threshold, distance * self.settings.retained_distance_ratio)
        lost = [
            kind
            for kind in DichromacyKind
            if color_distance(
                simulate_dichromacy(color_a, kind),
                simulate_dichromacy(color_b, kind),
            ) < floor
        ]
        if not lost:
            return None

        severity = Severity.WARNING if _COMMON_KINDS & set(lost) else Severity.INFO
        kinds = ", ".join(kind.value for kind in lost)

        # Push the second color away from the first in lightness
        lighten = luminance_of(parse_color(color_b)) >= luminance_of(parse_color(color_a))
        shifted = shift_luminance(color_b, 0.4, lighten)
        attributes = {"color": shifted} if is_text_node(second) else {"fill": shifted, "background_color": shifted}

        return await self.make_issue(
            first,
            severity,
            "Colors indistinguishable with color blindness",
            (
                f"'{node_name(first)}' ({color_a}) and '{node_name(second)}' ({color_b}) differ "
                f"mainly by hue (contrast {format_ratio(ratio)}) and look alike with {kinds}."
            ),
            current_value=f"{color_a} / {color_b}",
            required_value=f"contrast {format_ratio(self.settings.hue_only_contrast)} or a non-color cue",
            guideline="1.4.1",
            fixes=[
                FixSuggestion("Add a pattern, icon or text label so the difference does not rely on color"),
                FixSuggestion(
                    f"Change the color of '{node_name(second)}' to {shifted} to add lightness contrast",
                    partial(apply_attributes, second, attributes),
                ),
            ],
        )
