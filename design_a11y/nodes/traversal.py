"""Helpers for walking design node hierarchies.

All host calls go through ``attempt``: a subtree or parent chain that
cannot be read simply ends early, and the walk keeps whatever it has.
"""

import re
from collections.abc import Iterable, Sequence
from typing import Any

import structlog

from ..utils.fallible import attempt, read_attr
from .base import node_id, node_name

logger = structlog.get_logger(__name__)


async def get_children(node: Any) -> list[Any]:
    children = await attempt(node.get_children, [], action="get_children", node_id=node_id(node))
    return list(children or [])


async def get_parent(node: Any) -> Any | None:
    return await attempt(node.get_parent, None, action="get_parent", node_id=node_id(node))


async def descendants(node: Any) -> list[Any]:
    """Collect every descendant of ``node`` in pre-order.

    Args:
        node: Parent node

    Returns:
        All descendant nodes, each child followed by its own subtree
    """
    result: list[Any] = []
    seen: set[str] = {node_id(node)}

    async def walk(current: Any) -> None:
        for child in await get_children(current):
            child_id = node_id(child)
            if child_id in seen:
                continue
            seen.add(child_id)
            result.append(child)
            await walk(child)

    await walk(node)
    return result


async def ancestors(node: Any) -> list[Any]:
    """Find all ancestors of a node, nearest first."""
    result: list[Any] = []
    seen: set[str] = {node_id(node)}

    current = node
    while True:
        parent = await get_parent(current)
        if parent is None or node_id(parent) in seen:
            break
        seen.add(node_id(parent))
        result.append(parent)
        current = parent

    return result


async def node_path(node: Any) -> str:
    """Path from the root to ``node``, names (or ids) joined by '/'."""
    chain = list(reversed(await ancestors(node)))
    parts = [node_name(ancestor) for ancestor in chain]
    parts.append(node_name(node))
    return "/".join(parts)


async def is_visible(node: Any) -> bool:
    """A node is visible unless it or one of its ancestors is hidden."""
    if read_attr(node, "visible", True) is False:
        return False

    for ancestor in await ancestors(node):
        if read_attr(ancestor, "visible", True) is False:
            return False

    return True


async def find_by_name(root: Any, pattern: re.Pattern | str) -> list[Any]:
    """Find ``root`` and any descendants whose name matches ``pattern``."""
    if isinstance(pattern, str):
        pattern = re.compile(pattern)

    candidates = [root, *await descendants(root)]
    return [
        node for node in candidates
        if read_attr(node, "name") and pattern.search(str(read_attr(node, "name")))
    ]


async def collect_nodes(roots: Iterable[Any]) -> list[Any]:
    """Expand ``roots`` into roots plus descendants, each node once."""
    result: list[Any] = []
    seen: set[str] = set()

    for root in roots:
        for node in [root, *await descendants(root)]:
            key = node_id(node)
            if key in seen:
                continue
            seen.add(key)
            result.append(node)

    return result


async def group_by_parent(nodes: Iterable[Any]) -> dict[str, list[Any]]:
    """Group nodes by their parent's id, keeping input order within a group.

    Nodes without a readable parent are left out.
    """
    groups: dict[str, list[Any]] = {}
    for node in nodes:
        parent = await get_parent(node)
        if parent is None:
            continue
        groups.setdefault(node_id(parent), []).append(node)
    return groups


async def z_order(nodes: Sequence[Any]) -> list[Any]:
    """Order nodes front to back.

    Siblings are ordered by their index in ``nodes`` (a later index is
    painted in front), and each node is followed by its own children,
    so the result approximates paint order. Falls back to the input
    order if anything goes wrong.
    """
    try:
        index = {node_id(node): i for i, node in enumerate(nodes)}
        parent_of: dict[str, str | None] = {}
        children_of: dict[str, list[Any]] = {}

        for node in nodes:
            parent = await get_parent(node)
            parent_of[node_id(node)] = node_id(parent) if parent is not None else None
            if parent is not None:
                children_of.setdefault(node_id(parent), []).append(node)

        for siblings in children_of.values():
            siblings.sort(key=lambda n: index[node_id(n)], reverse=True)

        # Entry points: nodes whose parent is not part of the input, with
        # siblings under the same outside parent kept together front to back
        entries: list[Any] = []
        placed_groups: set[str] = set()
        for node in nodes:
            parent_key = parent_of[node_id(node)]
            if parent_key is None:
                entries.append(node)
            elif parent_key not in index and parent_key not in placed_groups:
                placed_groups.add(parent_key)
                entries.extend(children_of[parent_key])

        result: list[Any] = []
        processed: set[str] = set()

        def add_with_children(node: Any) -> None:
            key = node_id(node)
            if key in processed:
                return
            processed.add(key)
            result.append(node)
            for child in children_of.get(key, []):
                add_with_children(child)

        for node in [*entries, *nodes]:
            add_with_children(node)

        return result
    except Exception as e:
        logger.warning("Z-order sort failed, keeping input order", error=str(e))
        return list(nodes)
