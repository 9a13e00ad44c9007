"""Text size analyzer - legibility minimums and readability (WCAG 1.4.4, 1.4.8)."""

from functools import partial
from typing import Any

from ..models import FixSuggestion, Issue, IssueType, Severity
from ..nodes.base import apply_attributes, font_size_of, is_text_node, node_bounds
from ..utils.fallible import read_attr
from ..utils.wcag import minimum_text_size
from .base import BaseAnalyzer

# Average glyph width as a fraction of the font size
AVG_CHAR_WIDTH_RATIO = 0.5


def parse_line_height(line_height: Any, font_size: float) -> float | None:
    """Parse a line height to pixels.

    Numbers below 4 are multipliers of the font size, larger numbers are
    pixels. Strings may carry "px" or "%" units. "normal", empty and
    unparseable values give None.
    """
    if line_height is None or isinstance(line_height, bool):
        return None
    if isinstance(line_height, (int, float)):
        value = float(line_height)
        return value * font_size if value < 4 else value

    line_height = str(line_height).strip().lower()
    if not line_height or line_height == "normal":
        return None

    try:
        if line_height.endswith("px"):
            return float(line_height[:-2])
        if line_height.endswith("%"):
            return float(line_height[:-1]) / 100 * font_size
        return parse_line_height(float(line_height), font_size)
    except ValueError:
        return None


class TextSizeAnalyzer(BaseAnalyzer):
    """Flags text too small to read on the target platform.

    Text under three quarters of the platform minimum is critical, the
    rest of the undersized text is a warning. Blocks of text with tight
    line spacing or very long lines are reported as info.
    """

    CRITICAL_FRACTION = 0.75

    @property
    def issue_type(self) -> IssueType:
        return IssueType.TEXT_SIZE

    async def analyze_node(self, node: Any) -> list[Issue]:
        if not is_text_node(node):
            return []

        text = read_attr(node, "text")
        if isinstance(text, str) and not text.strip():
            return []

        issues = []
        font_size = font_size_of(node)
        minimum = minimum_text_size(self.settings.platform)

        if font_size < minimum:
            severity = (
                Severity.CRITICAL if font_size < minimum * self.CRITICAL_FRACTION else Severity.WARNING
            )
            issues.append(
                await self.make_issue(
                    node,
                    severity,
                    "Text too small",
                    (
                        f"Font size {font_size:g}px is below the {minimum:g}px minimum for "
                        f"{self.settings.platform.value} and will be hard to read, especially "
                        f"for users with low vision."
                    ),
                    current_value=f"{font_size:g}px",
                    required_value=f"{minimum:g}px",
                    guideline="1.4.4",
                    fixes=[
                        FixSuggestion(
                            f"Increase font size to {minimum:g}px",
                            partial(apply_attributes, node, {"font_size": minimum}),
                        ),
                    ],
                )
            )

        if isinstance(text, str):
            issues.extend(await self._check_readability(node, text, font_size))

        return issues

    async def _check_readability(self, node: Any, text: str, font_size: float) -> list[Issue]:
        issues = []
        max_chars = self.settings.max_line_length_chars

        # Line spacing only matters for blocks of text
        line_height = parse_line_height(read_attr(node, "line_height"), font_size)
        min_line_height = font_size * self.settings.min_line_height_ratio
        if line_height is not None and len(text) >= max_chars and line_height < min_line_height:
            issues.append(
                await self.make_issue(
                    node,
                    Severity.INFO,
                    "Line height too tight",
                    (
                        f"Line height of {line_height:.1f}px is tight for {font_size:g}px text. "
                        f"Blocks of text are easier to read with at least "
                        f"{self.settings.min_line_height_ratio:g}x line spacing."
                    ),
                    current_value=f"{line_height:.1f}px",
                    required_value=f"{min_line_height:.1f}px",
                    guideline="1.4.8",
                    fixes=[
                        FixSuggestion(
                            f"Set line height to {min_line_height:.1f}px",
                            partial(apply_attributes, node, {"line_height": round(min_line_height, 1)}),
                        ),
                    ],
                )
            )

        bounds = node_bounds(node)
        if bounds and bounds.width > 0 and font_size > 0 and len(text) > max_chars:
            chars_per_line = bounds.width / (font_size * AVG_CHAR_WIDTH_RATIO)
            if chars_per_line > max_chars:
                max_width = max_chars * font_size * AVG_CHAR_WIDTH_RATIO
                issues.append(
                    await self.make_issue(
                        node,
                        Severity.INFO,
                        "Line length too long",
                        (
                            f"About {int(chars_per_line)} characters fit on each line. Lines "
                            f"longer than {max_chars} characters are hard to track."
                        ),
                        current_value=f"{int(chars_per_line)} chars",
                        required_value=f"{max_chars} chars",
                        guideline="1.4.8",
                        fixes=[
                            FixSuggestion(
                                f"Limit the text box width to {max_width:g}px",
                                partial(apply_attributes, node, {"width": max_width}),
                            ),
                        ],
                    )
                )

        return issues
