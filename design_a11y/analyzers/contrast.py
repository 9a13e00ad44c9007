"""Contrast analyzer - WCAG 1.4.3 / 1.4.6 text contrast and 1.4.11 non-text contrast."""

from functools import partial
from typing import Any

from ..models import FixSuggestion, Issue, IssueType, Severity
from ..nodes.base import (
    apply_attributes,
    fill_color,
    font_size_of,
    is_bold,
    is_interactive,
    is_text_node,
    text_color,
)
from ..utils.color import (
    RGBA,
    composite,
    contrast_ratio,
    find_contrasting_shade,
    format_ratio,
    luminance_of,
    parse_color,
    shift_luminance,
    to_hex,
)
from ..utils.fallible import read_attr
from ..utils.wcag import (
    LARGE_TEXT_PX,
    NON_TEXT_CONTRAST,
    WCAGLevel,
    is_large_text,
    required_contrast_ratio,
)
from .base import BaseAnalyzer, effective_background

DEFAULT_TEXT_COLOR = "#000000"


class ContrastAnalyzer(BaseAnalyzer):
    """Checks text and UI component colors against their backdrop.

    Text below the required ratio by 1.0 or more is critical, anything
    closer is a warning.
    """

    CRITICAL_DEFICIT = 1.0

    @property
    def issue_type(self) -> IssueType:
        return IssueType.CONTRAST

    async def analyze_node(self, node: Any) -> list[Issue]:
        if is_text_node(node):
            return await self._check_text(node)
        if fill_color(node) and await is_interactive(node):
            return await self._check_component(node)
        return []

    async def _check_text(self, node: Any) -> list[Issue]:
        text = read_attr(node, "text")
        if isinstance(text, str) and not text.strip():
            return []

        background = await effective_background(node)
        foreground_value = text_color(node) or DEFAULT_TEXT_COLOR
        foreground = composite(parse_color(foreground_value), background)
        ratio = contrast_ratio(foreground, background)

        font_size = font_size_of(node)
        bold = is_bold(node)
        level = WCAGLevel(self.settings.wcag_level)
        required = required_contrast_ratio(font_size, bold, level)

        if ratio < required:
            deficit = required - ratio
            severity = Severity.CRITICAL if deficit >= self.CRITICAL_DEFICIT else Severity.WARNING
            text_kind = "large text" if is_large_text(font_size, bold) else "normal text"
            return [
                await self.make_issue(
                    node,
                    severity,
                    "Insufficient text contrast",
                    (
                        f"Text color {to_hex(foreground)} on background {to_hex(background)} has a "
                        f"contrast ratio of {format_ratio(ratio)}. WCAG {level.value} requires "
                        f"{format_ratio(required)} for {text_kind}."
                    ),
                    current_value=format_ratio(ratio),
                    required_value=format_ratio(required),
                    guideline="1.4.6" if level == WCAGLevel.AAA else "1.4.3",
                    fixes=self._text_fixes(node, foreground, background, required, ratio, font_size, bold),
                )
            ]

        if self.settings.check_aaa and level != WCAGLevel.AAA:
            enhanced = required_contrast_ratio(font_size, bold, WCAGLevel.AAA)
            if ratio < enhanced:
                return [
                    await self.make_issue(
                        node,
                        Severity.INFO,
                        "Text contrast below enhanced level",
                        (
                            f"Contrast of {format_ratio(ratio)} meets AA but not the AAA "
                            f"requirement of {format_ratio(enhanced)}."
                        ),
                        current_value=format_ratio(ratio),
                        required_value=format_ratio(enhanced),
                        guideline="1.4.6",
                        fixes=self._text_fixes(node, foreground, background, enhanced, ratio, font_size, bold),
                    )
                ]

        return []

    async def _check_component(self, node: Any) -> list[Issue]:
        backdrop = await effective_background(node, include_self=False)
        component = composite(parse_color(fill_color(node)), backdrop)
        ratio = contrast_ratio(component, backdrop)
        if ratio >= NON_TEXT_CONTRAST:
            return []

        stroke = read_attr(node, "stroke")
        if isinstance(stroke, str) and stroke:
            stroke_color = composite(parse_color(stroke), backdrop)
            if contrast_ratio(stroke_color, backdrop) >= NON_TEXT_CONTRAST:
                return []

        shade = find_contrasting_shade(to_hex(backdrop), NON_TEXT_CONTRAST)
        return [
            await self.make_issue(
                node,
                Severity.WARNING,
                "Low contrast interactive element",
                (
                    f"The fill {to_hex(component)} of this interactive element has a contrast "
                    f"ratio of {format_ratio(ratio)} against its surroundings "
                    f"({to_hex(backdrop)}), so its boundary is hard to see."
                ),
                current_value=format_ratio(ratio),
                required_value=format_ratio(NON_TEXT_CONTRAST),
                guideline="1.4.11",
                fixes=[
                    FixSuggestion(
                        f"Add a border in {shade}",
                        partial(apply_attributes, node, {"stroke": shade}),
                    ),
                    FixSuggestion(
                        f"Change the fill to {shade}",
                        partial(apply_attributes, node, {"fill": shade, "background_color": shade}),
                    ),
                ],
            )
        ]

    def _text_fixes(
        self,
        node: Any,
        foreground: RGBA,
        background: RGBA,
        required: float,
        ratio: float,
        font_size: float,
        bold: bool,
    ) -> list[FixSuggestion]:
        fixes = []

        shade = find_contrasting_shade(to_hex(background), required)
        fixes.append(
            FixSuggestion(
                f"Change text color to {shade} "
                f"({format_ratio(contrast_ratio(parse_color(shade), background))})",
                partial(apply_attributes, node, {"color": shade}),
            )
        )

        adjusted = self._adjust_color(foreground, background, required)
        if adjusted:
            direction = "Lighten" if luminance_of(background) <= 0.5 else "Darken"
            fixes.append(
                FixSuggestion(
                    f"{direction} the current text color to {adjusted}",
                    partial(apply_attributes, node, {"color": adjusted}),
                )
            )

        if not is_large_text(font_size, bold):
            large_required = required_contrast_ratio(LARGE_TEXT_PX, bold, self.settings.wcag_level)
            if ratio >= large_required:
                fixes.append(
                    FixSuggestion(
                        f"Increase font size to {LARGE_TEXT_PX:g}px; large text only needs "
                        f"{format_ratio(large_required)}",
                        partial(apply_attributes, node, {"font_size": LARGE_TEXT_PX}),
                    )
                )

        return fixes

    @staticmethod
    def _adjust_color(foreground: RGBA, background: RGBA, required: float) -> str | None:
        """Smallest 10% step toward black or white that reaches ``required``."""
        lighten = luminance_of(background) <= 0.5
        for step in range(1, 11):
            candidate = shift_luminance(to_hex(foreground), step / 10, lighten)
            if contrast_ratio(parse_color(candidate), background) >= required:
                return candidate
        return None
