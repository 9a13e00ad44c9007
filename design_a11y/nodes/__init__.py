"""Design node interface, traversal helpers and the in-memory adapter."""

from .base import (
    Bounds,
    DesignNode,
    apply_attributes,
    fill_color,
    heading_level,
    is_image_node,
    is_interactive,
    is_text_node,
    node_bounds,
)
from .memory import MemoryNode, NodeSpec, load_tree, load_tree_file
from .traversal import (
    ancestors,
    collect_nodes,
    descendants,
    find_by_name,
    is_visible,
    node_path,
    z_order,
)

__all__ = [
    "Bounds",
    "DesignNode",
    "apply_attributes",
    "fill_color",
    "heading_level",
    "is_image_node",
    "is_interactive",
    "is_text_node",
    "node_bounds",
    "MemoryNode",
    "NodeSpec",
    "load_tree",
    "load_tree_file",
    "ancestors",
    "collect_nodes",
    "descendants",
    "find_by_name",
    "is_visible",
    "node_path",
    "z_order",
]
