"""Image analyzer - text alternatives for images (WCAG 1.1.1)."""

import re
from functools import partial
from typing import Any

from ..models import FixSuggestion, Issue, IssueType, Severity
from ..nodes.base import apply_attributes, is_image_node, node_name
from ..utils.fallible import read_attr
from .base import BaseAnalyzer

MAX_ALT_LENGTH = 150

_FILE_NAME = re.compile(r"^[\w\-. ]+\.(png|jpe?g|gif|svg|webp|bmp|tiff?|ico|avif|heic)$", re.IGNORECASE)
_REDUNDANT_PREFIX = re.compile(r"^\s*(image|picture|photo|graphic)\s+of\b", re.IGNORECASE)
_DECORATIVE_NAME = re.compile(
    r"\b(decor\w*|background|bg|divider|spacer|ornament\w*|pattern)\b",
    re.IGNORECASE,
)


def alt_text_of(node: Any) -> str:
    """Alternative text of a node, from its alt text or accessibility label."""
    for attribute in ("alt_text", "accessibility_label"):
        value = read_attr(node, attribute)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


class ImageAccessibilityAnalyzer(BaseAnalyzer):
    """Checks images for missing, unhelpful or needless alternative text."""

    @property
    def issue_type(self) -> IssueType:
        return IssueType.ALT_TEXT

    async def analyze_node(self, node: Any) -> list[Issue]:
        if not is_image_node(node):
            return []

        alt = alt_text_of(node)

        if read_attr(node, "decorative") is True:
            if not alt:
                return []
            return [
                await self.make_issue(
                    node,
                    Severity.INFO,
                    "Decorative image has alt text",
                    (
                        "This image is marked decorative but still carries alt text, which "
                        "screen readers may announce as noise."
                    ),
                    current_value=alt,
                    required_value="empty alt text",
                    guideline="1.1.1",
                    fixes=[
                        FixSuggestion(
                            "Remove the alt text",
                            partial(apply_attributes, node, {"alt_text": "", "accessibility_label": ""}),
                        ),
                    ],
                )
            ]

        if not alt:
            return [
                await self.make_issue(
                    node,
                    Severity.CRITICAL,
                    "Missing alt text",
                    (
                        "This image has no text alternative. Screen reader users will not "
                        "know what it shows."
                    ),
                    current_value="none",
                    required_value="descriptive alt text",
                    guideline="1.1.1",
                    fixes=[
                        FixSuggestion("Describe the content or purpose of the image in its alt text"),
                        FixSuggestion(
                            "Mark the image as decorative if it carries no information",
                            partial(apply_attributes, node, {"decorative": True}),
                        ),
                    ],
                )
            ]

        issues = []

        if _FILE_NAME.match(alt):
            issues.append(
                await self.make_issue(
                    node,
                    Severity.WARNING,
                    "Alt text is a file name",
                    f"The alt text '{alt}' looks like a file name rather than a description.",
                    current_value=alt,
                    required_value="descriptive alt text",
                    guideline="1.1.1",
                    fixes=[FixSuggestion("Replace the file name with a description of the image")],
                )
            )

        if _REDUNDANT_PREFIX.match(alt):
            trimmed = _REDUNDANT_PREFIX.sub("", alt).strip()
            trimmed = trimmed[:1].upper() + trimmed[1:]
            issues.append(
                await self.make_issue(
                    node,
                    Severity.INFO,
                    "Redundant alt text prefix",
                    "Screen readers already announce images, so 'image of' adds nothing.",
                    current_value=alt,
                    required_value=trimmed,
                    guideline="1.1.1",
                    fixes=[
                        FixSuggestion(
                            f"Change the alt text to '{trimmed}'",
                            partial(apply_attributes, node, {"alt_text": trimmed}),
                        ),
                    ],
                )
            )

        if len(alt) > MAX_ALT_LENGTH:
            issues.append(
                await self.make_issue(
                    node,
                    Severity.INFO,
                    "Alt text too long",
                    (
                        f"Alt text is {len(alt)} characters. Keep it under {MAX_ALT_LENGTH} "
                        f"and move long descriptions into visible text."
                    ),
                    current_value=f"{len(alt)} chars",
                    required_value=f"{MAX_ALT_LENGTH} chars",
                    guideline="1.1.1",
                    fixes=[FixSuggestion("Shorten the alt text to the essential information")],
                )
            )

        if _DECORATIVE_NAME.search(node_name(node)) and (len(alt.split()) > 5 or len(alt) > 50):
            issues.append(
                await self.make_issue(
                    node,
                    Severity.INFO,
                    "Verbose alt text on decorative image",
                    (
                        f"'{node_name(node)}' looks decorative but has a long description. "
                        f"Decorative images should be hidden from screen readers."
                    ),
                    current_value=alt,
                    required_value="decorative (no alt text)",
                    guideline="1.1.1",
                    fixes=[
                        FixSuggestion(
                            "Mark the image as decorative",
                            partial(
                                apply_attributes,
                                node,
                                {"decorative": True, "alt_text": "", "accessibility_label": ""},
                            ),
                        ),
                    ],
                )
            )

        return issues
