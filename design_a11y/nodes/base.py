"""Node capability interface and attribute readers.

The engine never depends on a concrete host object model. It needs a
node to expose an ``id``, optionally a ``name`` and ``visible`` flag, and
two async accessors for hierarchy navigation. Everything else is an
optional attribute read through ``read_attr``:

- ``node_type``: host type name ("text", "frame", "image", "TextNode", ...)
- geometry: ``x``, ``y``, ``width``, ``height`` (x/y relative to the parent)
- text: ``text``, ``font_size``, ``font_weight``, ``line_height``, ``color``
- fills: ``background_color``, ``fill``, ``stroke``
- images: ``image``, ``alt_text``, ``decorative``
- interaction/semantics: ``link``, ``on_tap``, ``role``, ``tab_index``,
  ``heading_level``, ``accessibility_label``

Host adapters that support edits may also provide an async
``set_attributes(attributes)`` used by fix actions.
"""

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from ..exceptions import NodeAccessError
from ..utils.color import is_color, parse_color
from ..utils.fallible import attempt, read_attr
from ..utils.wcag import BOLD_WEIGHT


@runtime_checkable
class DesignNode(Protocol):
    """Read-only view of a node in a design document."""

    id: str
    name: Optional[str]
    visible: Optional[bool]

    async def get_parent(self) -> Optional["DesignNode"]:
        ...

    async def get_children(self) -> Sequence["DesignNode"]:
        ...


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box in the parent's coordinate space."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def gap_to(self, other: "Bounds") -> float:
        """Distance between the two boxes' edges; negative when they overlap."""
        dx = max(other.x - self.right, self.x - other.right)
        dy = max(other.y - self.bottom, self.y - other.bottom)
        if dx < 0 and dy < 0:
            return max(dx, dy)
        if dx >= 0 and dy >= 0:
            return math.hypot(dx, dy)
        return max(dx, dy)

    def contains(self, other: "Bounds") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and self.right >= other.right
            and self.bottom >= other.bottom
        )


TEXT_TYPES = {"text", "textnode"}
IMAGE_TYPES = {"image", "imagenode", "bitmap", "picture"}

INTERACTIVE_ROLES = {
    "button", "link", "checkbox", "radio", "switch", "tab", "menuitem", "slider", "textbox",
}

_INTERACTIVE_NAME = re.compile(
    r"\b(button|btn|link|cta|toggle|switch|checkbox|radio|chip|input|icon[-_ ]?button)\b",
    re.IGNORECASE,
)
_INTERACTIVE_CONTAINER = re.compile(
    r"\b(nav|navbar|navigation|menu|toolbar|tab\s*bar|tabbar|bottom\s*bar)\b",
    re.IGNORECASE,
)
_HEADING_NAME = re.compile(r"^\s*(?:h|heading\s*)([1-6])\b", re.IGNORECASE)

_FONT_WEIGHTS = {
    "thin": 100,
    "hairline": 100,
    "extra-light": 200,
    "extralight": 200,
    "ultra-light": 200,
    "light": 300,
    "normal": 400,
    "regular": 400,
    "medium": 500,
    "semi-bold": 600,
    "semibold": 600,
    "demi-bold": 600,
    "bold": 700,
    "extra-bold": 800,
    "extrabold": 800,
    "ultra-bold": 800,
    "black": 900,
    "heavy": 900,
}

DEFAULT_FONT_SIZE = 16.0


def node_id(node: Any) -> str:
    return str(read_attr(node, "id", ""))


def node_name(node: Any) -> str:
    """Display name of a node, falling back to its id."""
    return str(read_attr(node, "name", "") or node_id(node))


def node_type(node: Any) -> str:
    return str(read_attr(node, "node_type", "")).strip().lower()


def is_text_node(node: Any) -> bool:
    if node_type(node) in TEXT_TYPES:
        return True
    return isinstance(read_attr(node, "text"), str) and read_attr(node, "font_size") is not None


def is_image_node(node: Any) -> bool:
    return node_type(node) in IMAGE_TYPES or bool(read_attr(node, "image"))


def coordinate(node: Any, axis: str) -> float:
    """Position of a node on one axis, relative to its parent; 0 when unreadable."""
    try:
        return float(read_attr(node, axis, 0.0) or 0.0)
    except (TypeError, ValueError):
        return 0.0


def node_bounds(node: Any) -> Bounds | None:
    """Geometry of a node, or None when the host does not report a size."""
    width = read_attr(node, "width")
    height = read_attr(node, "height")
    try:
        return Bounds(
            x=float(read_attr(node, "x", 0.0)),
            y=float(read_attr(node, "y", 0.0)),
            width=float(width),
            height=float(height),
        )
    except (TypeError, ValueError):
        return None


def fill_color(node: Any) -> str | None:
    """Opaque-enough fill of a node, if it has one."""
    for attribute in ("background_color", "fill"):
        value = read_attr(node, attribute)
        if isinstance(value, str) and is_color(value) and parse_color(value).a > 0:
            return value
    return None


def text_color(node: Any) -> str | None:
    value = read_attr(node, "color")
    if isinstance(value, str) and is_color(value):
        return value
    return None


def parse_font_size(font_size: Any) -> float:
    """Parse a font size (number or CSS-like string) to pixels.

    Args:
        font_size: Font size value (e.g. 16, "16px", "1rem", "12pt")

    Returns:
        Font size in pixels
    """
    if isinstance(font_size, bool):
        return DEFAULT_FONT_SIZE
    if isinstance(font_size, (int, float)):
        return float(font_size)
    if not font_size or not isinstance(font_size, str):
        return DEFAULT_FONT_SIZE

    font_size = font_size.strip().lower()

    units = (
        ("px", 1.0),
        ("pt", 4 / 3),
        ("rem", 16.0),
        ("em", 16.0),
    )
    for suffix, scale in units:
        if font_size.endswith(suffix):
            try:
                return float(font_size[: -len(suffix)]) * scale
            except ValueError:
                return DEFAULT_FONT_SIZE

    if font_size.endswith("%"):
        try:
            return float(font_size[:-1]) / 100 * 16
        except ValueError:
            return DEFAULT_FONT_SIZE

    try:
        return float(font_size)
    except ValueError:
        return DEFAULT_FONT_SIZE


def parse_font_weight(font_weight: Any) -> int:
    """Parse a font weight ("bold", "600", 700) to its numeric value."""
    if isinstance(font_weight, bool):
        return 400
    if isinstance(font_weight, (int, float)):
        return int(font_weight)
    if not font_weight or not isinstance(font_weight, str):
        return 400

    font_weight = font_weight.strip().lower()
    if font_weight in _FONT_WEIGHTS:
        return _FONT_WEIGHTS[font_weight]

    try:
        return int(font_weight)
    except ValueError:
        return 400


def font_size_of(node: Any) -> float:
    return parse_font_size(read_attr(node, "font_size"))


def is_bold(node: Any) -> bool:
    return parse_font_weight(read_attr(node, "font_weight")) >= BOLD_WEIGHT


def heading_level(node: Any) -> int | None:
    """Heading level 1-6 from the node's semantics or its layer name."""
    level = read_attr(node, "heading_level")
    try:
        if level is not None and 1 <= int(level) <= 6:
            return int(level)
    except (TypeError, ValueError):
        pass

    role = str(read_attr(node, "role", "")).lower()
    match = _HEADING_NAME.match(str(read_attr(node, "name", "")))
    if match and (role == "heading" or is_text_node(node)):
        return int(match.group(1))
    return None


def has_interaction(node: Any) -> bool:
    """True when the node itself looks tappable."""
    if read_attr(node, "on_tap") or read_attr(node, "link"):
        return True
    if str(read_attr(node, "role", "")).lower() in INTERACTIVE_ROLES:
        return True
    tab_index = read_attr(node, "tab_index")
    if isinstance(tab_index, int) and not isinstance(tab_index, bool) and tab_index >= 0:
        return True
    return bool(_INTERACTIVE_NAME.search(str(read_attr(node, "name", ""))))


def is_interactive_container(node: Any) -> bool:
    return bool(_INTERACTIVE_CONTAINER.search(str(read_attr(node, "name", ""))))


async def is_interactive(node: Any) -> bool:
    """True for nodes with tap/link behavior or sitting directly in a nav bar, menu or toolbar."""
    if has_interaction(node):
        return True
    parent = await attempt(node.get_parent, None, action="get_parent", node_id=node_id(node))
    return parent is not None and is_interactive_container(parent) and not is_text_node(node)


async def apply_attributes(node: Any, attributes: dict[str, Any]) -> None:
    """Write attributes back to the host, for fix actions.

    Raises:
        NodeAccessError: if the host node does not support edits or the edit fails
    """
    setter = getattr(node, "set_attributes", None)
    if setter is None:
        raise NodeAccessError(node_id(node), "Node does not support attribute updates")
    try:
        await setter(attributes)
    except Exception as e:
        raise NodeAccessError(node_id(node), f"Failed to update node: {e}") from e
