"""WCAG 2.x success criteria referenced by the analyzers.

Contrast Requirements:
- AA Normal Text: 4.5:1 minimum contrast ratio
- AA Large Text (18pt+ or 14pt bold): 3:1 minimum contrast ratio
- AAA Normal Text: 7:1 minimum contrast ratio
- AAA Large Text: 4.5:1 minimum contrast ratio

Touch Target Requirements:
- iOS Human Interface Guidelines: 44x44 points
- Material Design: 48x48 dp
- Windows: 40x40 pixels
- WCAG 2.5.5: 44x44 CSS pixels
"""

from dataclasses import dataclass
from enum import Enum


class WCAGLevel(str, Enum):
    """WCAG conformance levels."""
    A = "A"
    AA = "AA"
    AAA = "AAA"


class Platform(str, Enum):
    """Target platforms with their own touch target conventions."""
    WEB = "web"
    IOS = "ios"
    ANDROID = "android"
    WINDOWS = "windows"


@dataclass(frozen=True)
class WCAGGuideline:
    """A single WCAG success criterion."""
    id: str
    name: str
    level: WCAGLevel
    summary: str
    details: str
    url: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level.value,
            "summary": self.summary,
            "details": self.details,
            "url": self.url,
        }


_UNDERSTANDING_21 = "https://www.w3.org/WAI/WCAG21/Understanding/"
_UNDERSTANDING_22 = "https://www.w3.org/WAI/WCAG22/Understanding/"


WCAG_GUIDELINES: dict[str, WCAGGuideline] = {
    g.id: g
    for g in (
        WCAGGuideline(
            id="1.1.1",
            name="Non-text Content",
            level=WCAGLevel.A,
            summary="All non-text content has a text alternative.",
            details=(
                "All non-text content that is presented to the user has a text "
                "alternative that serves the equivalent purpose, except for specific situations."
            ),
            url=_UNDERSTANDING_21 + "non-text-content.html",
        ),
        WCAGGuideline(
            id="1.3.1",
            name="Info and Relationships",
            level=WCAGLevel.A,
            summary="Information, structure, and relationships can be programmatically determined.",
            details=(
                "Information, structure, and relationships conveyed through presentation "
                "can be programmatically determined or are available in text."
            ),
            url=_UNDERSTANDING_21 + "info-and-relationships.html",
        ),
        WCAGGuideline(
            id="1.3.2",
            name="Meaningful Sequence",
            level=WCAGLevel.A,
            summary="The reading order of content is logical and intuitive.",
            details=(
                "When the sequence in which content is presented affects its meaning, "
                "a correct reading sequence can be programmatically determined."
            ),
            url=_UNDERSTANDING_21 + "meaningful-sequence.html",
        ),
        WCAGGuideline(
            id="1.4.1",
            name="Use of Color",
            level=WCAGLevel.A,
            summary="Color is not the only visual means of conveying information.",
            details=(
                "Color is not used as the only visual means of conveying information, "
                "indicating an action, prompting a response, or distinguishing a visual element."
            ),
            url=_UNDERSTANDING_21 + "use-of-color.html",
        ),
        WCAGGuideline(
            id="1.4.3",
            name="Contrast (Minimum)",
            level=WCAGLevel.AA,
            summary="Text has sufficient contrast against its background.",
            details=(
                "The visual presentation of text and images of text has a contrast ratio "
                "of at least 4.5:1, except for large text (3:1), incidental text, or logotypes."
            ),
            url=_UNDERSTANDING_21 + "contrast-minimum.html",
        ),
        WCAGGuideline(
            id="1.4.4",
            name="Resize Text",
            level=WCAGLevel.AA,
            summary="Text can be resized without loss of content or functionality.",
            details=(
                "Except for captions and images of text, text can be resized without "
                "assistive technology up to 200 percent without loss of content or functionality."
            ),
            url=_UNDERSTANDING_21 + "resize-text.html",
        ),
        WCAGGuideline(
            id="1.4.6",
            name="Contrast (Enhanced)",
            level=WCAGLevel.AAA,
            summary="Text has enhanced contrast against its background.",
            details=(
                "The visual presentation of text and images of text has a contrast ratio "
                "of at least 7:1, except for large text (4.5:1), incidental text, or logotypes."
            ),
            url=_UNDERSTANDING_21 + "contrast-enhanced.html",
        ),
        WCAGGuideline(
            id="1.4.8",
            name="Visual Presentation",
            level=WCAGLevel.AAA,
            summary="Text is presented in a way that is easy to read.",
            details=(
                "For blocks of text, users can select foreground and background colors, "
                "width is no more than 80 characters, text is not fully justified, line "
                "spacing is at least 1.5, and text can be resized without requiring "
                "horizontal scrolling."
            ),
            url=_UNDERSTANDING_21 + "visual-presentation.html",
        ),
        WCAGGuideline(
            id="1.4.11",
            name="Non-text Contrast",
            level=WCAGLevel.AA,
            summary="User interface components and graphical objects have sufficient contrast.",
            details=(
                "The visual presentation of UI components and graphical objects have a "
                "contrast ratio of at least 3:1 against adjacent colors."
            ),
            url=_UNDERSTANDING_21 + "non-text-contrast.html",
        ),
        WCAGGuideline(
            id="2.1.1",
            name="Keyboard",
            level=WCAGLevel.A,
            summary="All functionality is available from a keyboard.",
            details=(
                "All functionality of the content is operable through a keyboard interface "
                "without requiring specific timings for individual keystrokes."
            ),
            url=_UNDERSTANDING_21 + "keyboard.html",
        ),
        WCAGGuideline(
            id="2.4.1",
            name="Bypass Blocks",
            level=WCAGLevel.A,
            summary="A mechanism is available to skip repeated blocks of content.",
            details=(
                "A mechanism is available to bypass blocks of content that are repeated "
                "on multiple Web pages."
            ),
            url=_UNDERSTANDING_21 + "bypass-blocks.html",
        ),
        WCAGGuideline(
            id="2.4.3",
            name="Focus Order",
            level=WCAGLevel.A,
            summary="Focus moves in a logical order when navigating with a keyboard.",
            details=(
                "If a web page can be navigated sequentially and the navigation sequences "
                "affect meaning or operation, focusable components receive focus in an "
                "order that preserves meaning and operability."
            ),
            url=_UNDERSTANDING_21 + "focus-order.html",
        ),
        WCAGGuideline(
            id="2.4.4",
            name="Link Purpose (In Context)",
            level=WCAGLevel.A,
            summary="The purpose of each link can be determined from its text or context.",
            details=(
                "The purpose of each link can be determined from the link text alone or "
                "from the link text together with its programmatically determined context."
            ),
            url=_UNDERSTANDING_21 + "link-purpose-in-context.html",
        ),
        WCAGGuideline(
            id="2.4.6",
            name="Headings and Labels",
            level=WCAGLevel.AA,
            summary="Headings and labels describe topic or purpose.",
            details="Headings and labels describe topic or purpose.",
            url=_UNDERSTANDING_21 + "headings-and-labels.html",
        ),
        WCAGGuideline(
            id="2.4.7",
            name="Focus Visible",
            level=WCAGLevel.AA,
            summary="Keyboard focus is visible.",
            details=(
                "Any keyboard operable user interface has a mode of operation where the "
                "keyboard focus indicator is visible."
            ),
            url=_UNDERSTANDING_21 + "focus-visible.html",
        ),
        WCAGGuideline(
            id="2.5.5",
            name="Target Size",
            level=WCAGLevel.AAA,
            summary="Touch targets are large enough to interact with.",
            details=(
                "The size of the target for pointer inputs is at least 44 by 44 CSS pixels, "
                "except when the target is available through an equivalent link or control "
                "on the same page."
            ),
            url=_UNDERSTANDING_21 + "target-size.html",
        ),
        WCAGGuideline(
            id="2.5.8",
            name="Target Size (Minimum)",
            level=WCAGLevel.AA,
            summary="Targets are at least 24 by 24 CSS pixels or sufficiently spaced.",
            details=(
                "The size of the target for pointer inputs is at least 24 by 24 CSS pixels, "
                "except where the target is spaced so that a 24 pixel circle centered on it "
                "does not intersect another target."
            ),
            url=_UNDERSTANDING_22 + "target-size-minimum.html",
        ),
        WCAGGuideline(
            id="4.1.2",
            name="Name, Role, Value",
            level=WCAGLevel.A,
            summary="User interface components expose a name and role.",
            details=(
                "For all user interface components, the name and role can be "
                "programmatically determined."
            ),
            url=_UNDERSTANDING_21 + "name-role-value.html",
        ),
    )
}

# WCAG contrast ratio requirements
AA_NORMAL_TEXT = 4.5
AA_LARGE_TEXT = 3.0
AAA_NORMAL_TEXT = 7.0
AAA_LARGE_TEXT = 4.5
NON_TEXT_CONTRAST = 3.0

# 18pt and 14pt at 96dpi (1pt = 4/3 px)
LARGE_TEXT_PX = 24.0
LARGE_BOLD_TEXT_PX = 18.66

BOLD_WEIGHT = 700

TOUCH_TARGET_SIZES: dict[Platform, int] = {
    Platform.IOS: 44,
    Platform.ANDROID: 48,
    Platform.WINDOWS: 40,
    Platform.WEB: 44,
}

MINIMUM_TEXT_SIZES: dict[Platform, float] = {
    Platform.IOS: 11.0,
    Platform.ANDROID: 12.0,
    Platform.WINDOWS: 12.0,
    Platform.WEB: 12.0,
}


def get_guideline(guideline_id: str) -> WCAGGuideline | None:
    """Look up a guideline by id (e.g. "1.4.3"); None when unknown."""
    return WCAG_GUIDELINES.get(guideline_id)


def guidelines_by_level(level: WCAGLevel | str) -> list[WCAGGuideline]:
    level = WCAGLevel(level)
    return [g for g in WCAG_GUIDELINES.values() if g.level == level]


def is_large_text(font_size_px: float, is_bold: bool) -> bool:
    """Large text is 18pt (24px) or larger, or 14pt (18.66px) and bold."""
    return font_size_px >= LARGE_TEXT_PX or (font_size_px >= LARGE_BOLD_TEXT_PX and is_bold)


def required_contrast_ratio(
    font_size_px: float,
    is_bold: bool,
    level: WCAGLevel | str = WCAGLevel.AA,
) -> float:
    """Get the required text contrast ratio for a font size and conformance level.

    Args:
        font_size_px: Font size in pixels
        is_bold: Whether the font is bold
        level: Conformance level ("AA" or "AAA"); "A" has no text contrast
            criterion of its own and is treated like AA

    Returns:
        Required contrast ratio
    """
    large = is_large_text(font_size_px, is_bold)
    if WCAGLevel(level) == WCAGLevel.AAA:
        return AAA_LARGE_TEXT if large else AAA_NORMAL_TEXT
    return AA_LARGE_TEXT if large else AA_NORMAL_TEXT


def required_touch_target_size(platform: Platform | str = Platform.WEB) -> int:
    """Minimum touch target edge in pixels for a platform (web when unknown)."""
    try:
        return TOUCH_TARGET_SIZES[Platform(platform)]
    except ValueError:
        return TOUCH_TARGET_SIZES[Platform.WEB]


def minimum_text_size(platform: Platform | str = Platform.WEB) -> float:
    """Smallest legible font size in pixels for a platform (web when unknown)."""
    try:
        return MINIMUM_TEXT_SIZES[Platform(platform)]
    except ValueError:
        return MINIMUM_TEXT_SIZES[Platform.WEB]
