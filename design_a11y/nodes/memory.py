"""In-memory design tree adapter.

Builds ``DesignNode``-compatible objects from plain dictionaries, e.g. a
JSON export of a design document. Keys may be snake_case or camelCase
(``fontSize``, ``backgroundColor``, ``altText``...).
"""

import json
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import NodeTreeError


class NodeSpec(BaseModel):
    """Serialized form of one node and its subtree."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    node_type: Optional[str] = Field(None, alias="type")
    visible: bool = True

    x: float = 0.0
    y: float = 0.0
    width: Optional[float] = None
    height: Optional[float] = None

    text: Optional[str] = None
    font_size: Optional[Union[float, str]] = None
    font_weight: Optional[Union[int, str]] = None
    line_height: Optional[Union[float, str]] = None
    color: Optional[str] = None

    background_color: Optional[str] = None
    fill: Optional[str] = None
    stroke: Optional[str] = None

    image: Optional[str] = None
    alt_text: Optional[str] = None
    decorative: bool = False

    link: Optional[str] = None
    on_tap: bool = False
    role: Optional[str] = None
    tab_index: Optional[int] = None
    heading_level: Optional[int] = Field(None, ge=1, le=6)
    accessibility_label: Optional[str] = None

    children: list["NodeSpec"] = Field(default_factory=list)


NodeSpec.model_rebuild()


class MemoryNode:
    """A design node held in memory, linked to its parent and children."""

    def __init__(self, spec: NodeSpec, parent: Optional["MemoryNode"] = None):
        for field_name in NodeSpec.model_fields:
            if field_name != "children":
                setattr(self, field_name, getattr(spec, field_name))
        self._parent = parent
        self._children: list[MemoryNode] = []

    def __repr__(self) -> str:
        return f"MemoryNode(id={self.id!r}, name={self.name!r})"

    async def get_parent(self) -> Optional["MemoryNode"]:
        return self._parent

    async def get_children(self) -> list["MemoryNode"]:
        return list(self._children)

    async def set_attributes(self, attributes: dict[str, Any]) -> None:
        """Apply attribute edits, as a fix action would in a real host."""
        for key, value in attributes.items():
            if key not in NodeSpec.model_fields or key in ("id", "children"):
                raise KeyError(f"Unknown node attribute: {key}")
            setattr(self, key, value)

    def walk(self):
        """Yield this node and every descendant, pre-order."""
        yield self
        for child in self._children:
            yield from child.walk()


def _build(spec: NodeSpec, parent: Optional[MemoryNode], seen: set[str]) -> MemoryNode:
    if spec.id in seen:
        raise NodeTreeError(f"Duplicate node id: {spec.id}")
    seen.add(spec.id)

    node = MemoryNode(spec, parent)
    node._children = [_build(child, node, seen) for child in spec.children]
    return node


def load_tree(data: Union[dict, list, str]) -> list[MemoryNode]:
    """Build in-memory nodes from a dict, a list of dicts, or a JSON string.

    Returns:
        The root nodes, in input order

    Raises:
        NodeTreeError: if the input is not valid JSON or fails validation
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise NodeTreeError(f"Invalid JSON: {e}") from e

    items = data if isinstance(data, list) else [data]

    try:
        specs = [NodeSpec.model_validate(item) for item in items]
    except ValidationError as e:
        raise NodeTreeError(f"Invalid node tree: {e}") from e

    seen: set[str] = set()
    return [_build(spec, None, seen) for spec in specs]


def load_tree_file(path: Union[str, Path]) -> list[MemoryNode]:
    """Load a design tree from a JSON file."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise NodeTreeError(f"Could not read {path}: {e}") from e
    return load_tree(content)
