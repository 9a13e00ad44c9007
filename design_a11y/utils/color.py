"""Color science helpers for accessibility checks.

Provides:
- Parsing of hex and rgb()/rgba() color strings
- WCAG 2.1 relative luminance and contrast ratio
- Dichromacy (color vision deficiency) simulation
- Lightening/darkening and contrasting shade search

None of these functions raise on malformed input. A color string that
cannot be understood degrades to opaque black so one bad fill never
aborts a scan.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class RGBA:
    """An sRGB color with 0-255 integer channels and 0-1 alpha."""

    r: int
    g: int
    b: int
    a: float = 1.0


class DichromacyKind(str, Enum):
    """Color vision deficiencies with one cone type missing."""

    PROTANOPIA = "protanopia"
    DEUTERANOPIA = "deuteranopia"
    TRITANOPIA = "tritanopia"


BLACK = RGBA(0, 0, 0, 1.0)
WHITE = RGBA(255, 255, 255, 1.0)

# Linear transforms applied to the (R, G, B) column vector
DICHROMACY_MATRICES: dict[DichromacyKind, tuple[tuple[float, float, float], ...]] = {
    DichromacyKind.PROTANOPIA: (
        (0.567, 0.433, 0.0),
        (0.558, 0.442, 0.0),
        (0.0, 0.242, 0.758),
    ),
    DichromacyKind.DEUTERANOPIA: (
        (0.625, 0.375, 0.0),
        (0.7, 0.3, 0.0),
        (0.0, 0.3, 0.7),
    ),
    DichromacyKind.TRITANOPIA: (
        (0.95, 0.05, 0.0),
        (0.0, 0.433, 0.567),
        (0.0, 0.475, 0.525),
    ),
}

_RGB_PATTERN = re.compile(
    r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)",
    re.IGNORECASE,
)
_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_channel(value: float) -> int:
    return max(0, min(255, _round_half_up(value)))


def parse_color(color: str | None) -> RGBA:
    """Parse a color string into RGBA components.

    Accepts ``#rgb``, ``#rrggbb``, ``#rrggbbaa``, ``rgb(r, g, b)`` and
    ``rgba(r, g, b, a)``. Anything else yields opaque black.

    Args:
        color: Color string (hex, rgb, rgba)

    Returns:
        Parsed RGBA value
    """
    if not color or not isinstance(color, str):
        return BLACK

    color = color.strip()

    if color.startswith("#"):
        hex_color = color[1:]
        if not _HEX_DIGITS.match(hex_color):
            return BLACK

        if len(hex_color) == 3:
            hex_color = "".join(c * 2 for c in hex_color)

        if len(hex_color) == 6:
            return RGBA(
                int(hex_color[0:2], 16),
                int(hex_color[2:4], 16),
                int(hex_color[4:6], 16),
                1.0,
            )
        if len(hex_color) == 8:
            return RGBA(
                int(hex_color[0:2], 16),
                int(hex_color[2:4], 16),
                int(hex_color[4:6], 16),
                int(hex_color[6:8], 16) / 255,
            )
        return BLACK

    match = _RGB_PATTERN.match(color)
    if match:
        r, g, b = (min(255, int(part)) for part in match.groups()[:3])
        alpha = match.group(4)
        try:
            a = float(alpha) if alpha is not None else 1.0
        except ValueError:
            a = 1.0
        return RGBA(r, g, b, max(0.0, min(1.0, a)))

    return BLACK


def is_color(color: str | None) -> bool:
    """Return True if ``color`` is a string parse_color understands."""
    if not color or not isinstance(color, str):
        return False
    color = color.strip()
    if color.startswith("#"):
        return bool(_HEX_DIGITS.match(color[1:])) and len(color) - 1 in (3, 6, 8)
    return _RGB_PATTERN.match(color) is not None


def to_rgb_string(color: RGBA) -> str:
    return f"rgb({color.r}, {color.g}, {color.b})"


def to_hex(color: RGBA) -> str:
    """Encode the opaque part of a color as ``#RRGGBB``."""
    return f"#{color.r:02X}{color.g:02X}{color.b:02X}"


def relative_luminance(r: int, g: int, b: int) -> float:
    """Calculate relative luminance of an sRGB color.

    Implements the WCAG 2.1 relative luminance formula:
    L = 0.2126 * R + 0.7152 * G + 0.0722 * B
    where R, G, B are linearized sRGB values.

    Args:
        r: Red (0-255)
        g: Green (0-255)
        b: Blue (0-255)

    Returns:
        Relative luminance value (0 to 1)
    """

    def linearize(channel: float) -> float:
        c = channel / 255
        if c <= 0.03928:
            return c / 12.92
        return ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)


def luminance_of(color: RGBA) -> float:
    return relative_luminance(color.r, color.g, color.b)


def contrast_ratio(color1: RGBA, color2: RGBA) -> float:
    """Calculate WCAG contrast ratio between two colors.

    contrast = (L1 + 0.05) / (L2 + 0.05) where L1 is the relative
    luminance of the lighter color and L2 of the darker one. The alpha
    channel is ignored; composite translucent colors first.

    Returns:
        Contrast ratio (1:1 to 21:1)
    """
    l1 = luminance_of(color1)
    l2 = luminance_of(color2)

    lighter = max(l1, l2)
    darker = min(l1, l2)

    return (lighter + 0.05) / (darker + 0.05)


def composite(foreground: RGBA, background: RGBA) -> RGBA:
    """Alpha-blend ``foreground`` over an opaque ``background``."""
    alpha = foreground.a
    if alpha >= 1.0:
        return RGBA(foreground.r, foreground.g, foreground.b, 1.0)

    def blend(fg: int, bg: int) -> int:
        return _clamp_channel(fg * alpha + bg * (1 - alpha))

    return RGBA(
        blend(foreground.r, background.r),
        blend(foreground.g, background.g),
        blend(foreground.b, background.b),
        1.0,
    )


def color_distance(color1: str | RGBA, color2: str | RGBA) -> float:
    """Euclidean distance between two colors in RGB space.

    This is a coarse approximation of perceptual difference (a LAB /
    CIEDE2000 metric would be more faithful). Use it only to decide
    whether two colors look the same, never as a contrast measure.
    """
    rgba1 = color1 if isinstance(color1, RGBA) else parse_color(color1)
    rgba2 = color2 if isinstance(color2, RGBA) else parse_color(color2)

    r_diff = rgba1.r - rgba2.r
    g_diff = rgba1.g - rgba2.g
    b_diff = rgba1.b - rgba2.b

    return math.sqrt(r_diff * r_diff + g_diff * g_diff + b_diff * b_diff)


def simulate_dichromacy(color: str, kind: DichromacyKind | str) -> str:
    """Simulate how ``color`` appears to someone with a dichromacy.

    Args:
        color: Original color (any format parse_color accepts)
        kind: protanopia, deuteranopia or tritanopia

    Returns:
        Simulated color as an ``rgb()`` string, channels clamped to 0-255;
        the color unchanged for an unrecognized kind
    """
    rgba = parse_color(color)
    try:
        matrix = DICHROMACY_MATRICES[DichromacyKind(kind)]
    except ValueError:
        return to_rgb_string(rgba)

    channels = [
        _clamp_channel(row[0] * rgba.r + row[1] * rgba.g + row[2] * rgba.b)
        for row in matrix
    ]
    return f"rgb({channels[0]}, {channels[1]}, {channels[2]})"


def simulate_protanopia(color: str) -> str:
    return simulate_dichromacy(color, DichromacyKind.PROTANOPIA)


def simulate_deuteranopia(color: str) -> str:
    return simulate_dichromacy(color, DichromacyKind.DEUTERANOPIA)


def simulate_tritanopia(color: str) -> str:
    return simulate_dichromacy(color, DichromacyKind.TRITANOPIA)


def shift_luminance(color: str, amount: float, lighten: bool) -> str:
    """Move every channel toward white (lighten) or black (darken).

    Args:
        color: Color to adjust
        amount: Fraction of the way to move, 0-1
        lighten: True to move toward 255, False toward 0

    Returns:
        Adjusted color as an ``rgb()`` string
    """
    rgba = parse_color(color)
    amount = max(0.0, min(1.0, amount))

    if lighten:
        channels = [_clamp_channel(c + (255 - c) * amount) for c in (rgba.r, rgba.g, rgba.b)]
    else:
        channels = [_clamp_channel(c * (1 - amount)) for c in (rgba.r, rgba.g, rgba.b)]

    return f"rgb({channels[0]}, {channels[1]}, {channels[2]})"


def find_contrasting_shade(background: str, target_ratio: float) -> str:
    """Find a grey that reaches ``target_ratio`` against ``background``.

    Light backgrounds (luminance > 0.5) are searched from white toward
    black, dark ones from black toward white, in steps of 5. The first
    shade that meets the target is returned, so the suggestion stays as
    close to the background's lightness as the target allows.

    Returns:
        ``rgb()`` string, or pure black/white if no grey qualifies
    """
    bg = parse_color(background)
    bg_luminance = luminance_of(bg)

    if bg_luminance > 0.5:
        for level in range(255, -1, -5):
            if contrast_ratio(bg, RGBA(level, level, level)) >= target_ratio:
                return f"rgb({level}, {level}, {level})"
        return "#000000"

    for level in range(0, 256, 5):
        if contrast_ratio(bg, RGBA(level, level, level)) >= target_ratio:
            return f"rgb({level}, {level}, {level})"
    return "#FFFFFF"


def format_ratio(ratio: float) -> str:
    """Format a contrast ratio the way WCAG tools print it (``4.50:1``)."""
    return f"{ratio:.2f}:1"
