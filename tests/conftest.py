"""Shared fixtures for design-a11y tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from design_a11y.config import ScanSettings
from design_a11y.nodes.memory import load_tree


@pytest.fixture
def settings():
    """Default scan settings, independent of the environment."""
    return ScanSettings(_env_file=None)


@pytest.fixture
def make_tree():
    """Build an in-memory tree and return its nodes by id."""

    def _make(data):
        roots = load_tree(data)
        nodes = {}
        for root in roots:
            for node in root.walk():
                nodes[node.id] = node
        return nodes

    return _make


@pytest.fixture
def screen(make_tree):
    """A small mobile screen with text, an image and a few buttons."""
    return make_tree({
        "id": "screen",
        "name": "Home",
        "type": "frame",
        "width": 375,
        "height": 812,
        "backgroundColor": "#FFFFFF",
        "children": [
            {
                "id": "title",
                "name": "H1 Title",
                "type": "text",
                "text": "Welcome back",
                "fontSize": 32,
                "fontWeight": "bold",
                "color": "#111111",
                "x": 16,
                "y": 40,
                "width": 343,
                "height": 40,
            },
            {
                "id": "body",
                "name": "Body",
                "type": "text",
                "text": "Here is what happened while you were away.",
                "fontSize": 16,
                "color": "#333333",
                "x": 16,
                "y": 100,
                "width": 343,
                "height": 48,
            },
            {
                "id": "hero",
                "name": "Hero image",
                "type": "image",
                "image": "hero.png",
                "altText": "Team celebrating a product launch",
                "x": 0,
                "y": 160,
                "width": 375,
                "height": 200,
            },
            {
                "id": "cta",
                "name": "Primary Button",
                "type": "frame",
                "onTap": True,
                "fill": "#0055CC",
                "x": 16,
                "y": 700,
                "width": 343,
                "height": 48,
                "children": [
                    {
                        "id": "cta-label",
                        "name": "Label",
                        "type": "text",
                        "text": "Continue",
                        "fontSize": 16,
                        "color": "#FFFFFF",
                        "x": 0,
                        "y": 0,
                        "width": 343,
                        "height": 48,
                    },
                ],
            },
        ],
    })


@pytest.fixture
def failing_node():
    """A host node whose hierarchy calls always fail."""
    node = MagicMock()
    node.id = "broken"
    node.name = "Broken"
    node.visible = True
    node.get_parent = AsyncMock(side_effect=RuntimeError("host unavailable"))
    node.get_children = AsyncMock(side_effect=RuntimeError("host unavailable"))
    return node
