"""Tests for nodes/traversal.py.

Traversal must tolerate host failures: a subtree or parent chain that
cannot be read ends early instead of aborting the walk.
"""

import re
from unittest.mock import AsyncMock, MagicMock

import pytest

from design_a11y.nodes.memory import load_tree
from design_a11y.nodes.traversal import (
    ancestors,
    collect_nodes,
    descendants,
    find_by_name,
    group_by_parent,
    is_visible,
    node_path,
    z_order,
)


@pytest.fixture
def tree(make_tree):
    return make_tree({
        "id": "page",
        "name": "Page",
        "children": [
            {
                "id": "card",
                "name": "Card",
                "children": [
                    {"id": "title", "name": "Title"},
                    {"id": "icon"},
                ],
            },
            {"id": "footer", "name": "Footer", "visible": False, "children": [{"id": "link", "name": "Link"}]},
        ],
    })


class TestDescendants:
    """Tests for descendants()."""

    @pytest.mark.asyncio
    async def test_pre_order(self, tree):
        result = await descendants(tree["page"])
        assert [node.id for node in result] == ["card", "title", "icon", "footer", "link"]

    @pytest.mark.asyncio
    async def test_leaf_has_none(self, tree):
        assert await descendants(tree["title"]) == []

    @pytest.mark.asyncio
    async def test_failing_subtree_is_skipped(self, tree):
        """A child whose children cannot be read contributes only itself."""
        broken = MagicMock()
        broken.id = "broken"
        broken.get_children = AsyncMock(side_effect=RuntimeError("host unavailable"))

        root = MagicMock()
        root.id = "root"
        root.get_children = AsyncMock(return_value=[broken, tree["title"]])

        result = await descendants(root)

        assert [node.id for node in result] == ["broken", "title"]

    @pytest.mark.asyncio
    async def test_failing_root_gives_empty_list(self, failing_node):
        assert await descendants(failing_node) == []


class TestAncestors:
    """Tests for ancestors() and node_path()."""

    @pytest.mark.asyncio
    async def test_nearest_first(self, tree):
        result = await ancestors(tree["title"])
        assert [node.id for node in result] == ["card", "page"]

    @pytest.mark.asyncio
    async def test_root_has_none(self, tree):
        assert await ancestors(tree["page"]) == []

    @pytest.mark.asyncio
    async def test_failing_parent_lookup(self, failing_node):
        assert await ancestors(failing_node) == []

    @pytest.mark.asyncio
    async def test_path_uses_names(self, tree):
        assert await node_path(tree["title"]) == "Page/Card/Title"

    @pytest.mark.asyncio
    async def test_path_falls_back_to_id(self, tree):
        assert await node_path(tree["icon"]) == "Page/Card/icon"

    @pytest.mark.asyncio
    async def test_path_of_unreachable_parent(self, failing_node):
        assert await node_path(failing_node) == "Broken"


class TestVisibility:
    """Tests for is_visible()."""

    @pytest.mark.asyncio
    async def test_visible_node(self, tree):
        assert await is_visible(tree["title"]) is True

    @pytest.mark.asyncio
    async def test_hidden_node(self, tree):
        assert await is_visible(tree["footer"]) is False

    @pytest.mark.asyncio
    async def test_hidden_ancestor(self, tree):
        assert await is_visible(tree["link"]) is False

    @pytest.mark.asyncio
    async def test_traversal_error_defaults_to_visible(self, failing_node):
        assert await is_visible(failing_node) is True


class TestSearchAndGrouping:
    """Tests for find_by_name(), collect_nodes() and group_by_parent()."""

    @pytest.mark.asyncio
    async def test_find_by_name_includes_root(self, tree):
        result = await find_by_name(tree["page"], re.compile(r"^(Page|Title)$"))
        assert [node.id for node in result] == ["page", "title"]

    @pytest.mark.asyncio
    async def test_find_by_name_accepts_string(self, tree):
        result = await find_by_name(tree["page"], "oo")
        assert [node.id for node in result] == ["footer"]

    @pytest.mark.asyncio
    async def test_collect_nodes_dedupes(self, tree):
        result = await collect_nodes([tree["card"], tree["title"]])
        assert [node.id for node in result] == ["card", "title", "icon"]

    @pytest.mark.asyncio
    async def test_group_by_parent(self, tree):
        groups = await group_by_parent([tree["title"], tree["footer"], tree["icon"], tree["page"]])
        assert {key: [n.id for n in nodes] for key, nodes in groups.items()} == {
            "card": ["title", "icon"],
            "page": ["footer"],
        }


class TestZOrder:
    """Tests for z_order()."""

    @pytest.mark.asyncio
    async def test_later_siblings_first(self, make_tree):
        nodes = make_tree({
            "id": "root",
            "children": [{"id": "back"}, {"id": "middle"}, {"id": "front"}],
        })
        siblings = [nodes["back"], nodes["middle"], nodes["front"]]

        result = await z_order(siblings)

        assert [node.id for node in result] == ["front", "middle", "back"]

    @pytest.mark.asyncio
    async def test_parent_before_children(self, make_tree):
        nodes = make_tree({
            "id": "root",
            "children": [
                {"id": "a", "children": [{"id": "a1"}, {"id": "a2"}]},
                {"id": "b"},
            ],
        })
        ordered_input = [nodes[key] for key in ("root", "a", "a1", "a2", "b")]

        result = await z_order(ordered_input)

        assert [node.id for node in result] == ["root", "b", "a", "a2", "a1"]

    @pytest.mark.asyncio
    async def test_every_node_emitted_once(self, make_tree):
        nodes = make_tree({"id": "r", "children": [{"id": "x", "children": [{"id": "y"}]}]})
        result = await z_order([nodes["y"], nodes["r"], nodes["x"]])
        assert sorted(node.id for node in result) == ["r", "x", "y"]

    @pytest.mark.asyncio
    async def test_empty_input(self):
        assert await z_order([]) == []

    @pytest.mark.asyncio
    async def test_unreadable_parents_keep_input_order(self, failing_node):
        (other,) = load_tree({"id": "other"})
        result = await z_order([failing_node, other])
        assert [node.id for node in result] == ["broken", "other"]
