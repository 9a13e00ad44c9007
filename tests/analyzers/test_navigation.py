"""Tests for the navigation analyzer."""

import pytest

from design_a11y.analyzers.navigation import NavigationAnalyzer, reading_position
from design_a11y.models import IssueType, Severity
from design_a11y.nodes.traversal import collect_nodes


async def analyze(analyzer, nodes, root_id):
    return await analyzer.analyze(await collect_nodes([nodes[root_id]]))


def heading(node_id, level, y):
    return {"id": node_id, "name": f"H{level} {node_id}", "type": "text", "text": node_id, "y": y}


class TestReadingPosition:
    """Tests for reading_position."""

    @pytest.mark.asyncio
    async def test_sums_ancestor_offsets(self, make_tree):
        nodes = make_tree({"id": "r", "x": 10, "y": 100, "children": [{"id": "c", "x": 5, "y": 7}]})
        assert await reading_position(nodes["c"]) == (107.0, 15.0)


class TestHeadings:
    """Tests for heading hierarchy checks."""

    @pytest.mark.asyncio
    async def test_well_formed_outline(self, make_tree, settings):
        nodes = make_tree({
            "id": "screen",
            "children": [heading("title", 1, 0), heading("section", 2, 100), heading("sub", 3, 200)],
        })

        assert await analyze(NavigationAnalyzer(settings), nodes, "screen") == []

    @pytest.mark.asyncio
    async def test_skipped_level(self, make_tree, settings):
        nodes = make_tree({
            "id": "screen",
            "children": [heading("title", 1, 0), heading("detail", 3, 100)],
        })

        issues = await analyze(NavigationAnalyzer(settings), nodes, "screen")

        assert len(issues) == 1
        assert issues[0].type == IssueType.NAVIGATION
        assert issues[0].severity == Severity.WARNING
        assert issues[0].node_id == "detail"
        assert issues[0].current_value == "H3"
        assert issues[0].wcag_guideline.startswith("1.3.1")

    @pytest.mark.asyncio
    async def test_order_follows_position_not_layer_order(self, make_tree, settings):
        nodes = make_tree({
            "id": "screen",
            "children": [heading("section", 2, 100), heading("title", 1, 0)],
        })

        assert await analyze(NavigationAnalyzer(settings), nodes, "screen") == []

    @pytest.mark.asyncio
    async def test_missing_h1(self, make_tree, settings):
        nodes = make_tree({"id": "screen", "children": [heading("section", 2, 0)]})

        issues = await analyze(NavigationAnalyzer(settings), nodes, "screen")

        assert [(issue.title, issue.node_id) for issue in issues] == [("No main heading", "screen")]
        assert issues[0].severity == Severity.INFO

    @pytest.mark.asyncio
    async def test_multiple_h1(self, make_tree, settings):
        nodes = make_tree({
            "id": "screen",
            "children": [heading("one", 1, 0), heading("two", 1, 100)],
        })

        issues = await analyze(NavigationAnalyzer(settings), nodes, "screen")

        assert [issue.title for issue in issues] == ["Multiple main headings"]

    @pytest.mark.asyncio
    async def test_separate_screens_checked_separately(self, make_tree, settings):
        nodes = make_tree([
            {"id": "first", "children": [heading("a", 1, 0)]},
            {"id": "second", "children": [heading("b", 1, 0)]},
        ])

        issues = await NavigationAnalyzer(settings).analyze(
            await collect_nodes([nodes["first"], nodes["second"]])
        )

        assert issues == []


class TestInteractiveElements:
    """Tests for hidden, unnamed and covered interactive elements."""

    @pytest.mark.asyncio
    async def test_hidden_button(self, make_tree, settings):
        nodes = make_tree({
            "id": "screen",
            "children": [{"id": "save", "name": "Save button", "visible": False, "accessibilityLabel": "Save"}],
        })

        issues = await analyze(NavigationAnalyzer(settings), nodes, "screen")

        assert [issue.title for issue in issues] == ["Interactive element is hidden"]
        assert issues[0].wcag_guideline.startswith("2.1.1")

    @pytest.mark.asyncio
    async def test_unnamed_icon_button(self, make_tree, settings):
        nodes = make_tree({
            "id": "screen",
            "children": [{"id": "close", "name": "Icon Button", "children": [{"id": "glyph", "name": "Vector"}]}],
        })

        issues = await analyze(NavigationAnalyzer(settings), nodes, "screen")

        assert [issue.title for issue in issues] == ["Interactive element has no accessible name"]
        assert issues[0].node_id == "close"
        assert issues[0].wcag_guideline.startswith("4.1.2")

    @pytest.mark.asyncio
    async def test_text_child_names_button(self, make_tree, settings):
        nodes = make_tree({
            "id": "screen",
            "children": [{
                "id": "cta",
                "name": "CTA",
                "children": [{"id": "label", "type": "text", "text": "Get started"}],
            }],
        })

        assert await analyze(NavigationAnalyzer(settings), nodes, "screen") == []

    @pytest.mark.asyncio
    async def test_covered_button(self, make_tree, settings):
        nodes = make_tree({
            "id": "screen",
            "children": [
                {"id": "buy", "name": "Buy button", "text": "Buy", "x": 10, "y": 10, "width": 100, "height": 40},
                {"id": "sheet", "name": "Sheet", "fill": "#FFFFFF", "x": 0, "y": 0, "width": 375, "height": 400},
            ],
        })

        issues = await analyze(NavigationAnalyzer(settings), nodes, "screen")

        assert [issue.title for issue in issues] == ["Interactive element is covered"]
        assert issues[0].node_id == "buy"

    @pytest.mark.asyncio
    async def test_button_in_front_not_covered(self, make_tree, settings):
        nodes = make_tree({
            "id": "screen",
            "children": [
                {"id": "sheet", "name": "Sheet", "fill": "#FFFFFF", "x": 0, "y": 0, "width": 375, "height": 400},
                {"id": "buy", "name": "Buy button", "text": "Buy", "x": 10, "y": 10, "width": 100, "height": 40},
            ],
        })

        assert await analyze(NavigationAnalyzer(settings), nodes, "screen") == []


class TestFocusOrder:
    """Tests for tab index checks."""

    @pytest.mark.asyncio
    async def test_positive_tab_index_in_reading_order(self, make_tree, settings):
        nodes = make_tree({
            "id": "form",
            "children": [
                {"id": "email", "role": "textbox", "accessibilityLabel": "Email", "tabIndex": 1, "y": 0},
                {"id": "password", "role": "textbox", "accessibilityLabel": "Password", "tabIndex": 2, "y": 60},
            ],
        })

        issues = await analyze(NavigationAnalyzer(settings), nodes, "form")

        assert [issue.title for issue in issues] == ["Positive tab index", "Positive tab index"]
        assert all(issue.severity == Severity.INFO for issue in issues)

    @pytest.mark.asyncio
    async def test_focus_order_against_reading_order(self, make_tree, settings):
        nodes = make_tree({
            "id": "form",
            "children": [
                {"id": "email", "role": "textbox", "accessibilityLabel": "Email", "tabIndex": 2, "y": 0},
                {"id": "password", "role": "textbox", "accessibilityLabel": "Password", "tabIndex": 1, "y": 60},
            ],
        })

        issues = await analyze(NavigationAnalyzer(settings), nodes, "form")

        order_issues = [issue for issue in issues if issue.title == "Focus order differs from reading order"]
        assert len(order_issues) == 1
        assert order_issues[0].node_id == "password"
        assert order_issues[0].severity == Severity.WARNING


class TestSkipLink:
    """Tests for the bypass blocks check."""

    @pytest.mark.asyncio
    async def test_navigation_without_skip_link(self, make_tree, settings):
        nodes = make_tree({"id": "page", "name": "Page", "children": [{"id": "nav", "name": "Navigation"}]})

        issues = await analyze(NavigationAnalyzer(settings), nodes, "page")

        assert [issue.title for issue in issues] == ["No skip link"]
        assert issues[0].node_id == "page"
        assert issues[0].wcag_guideline.startswith("2.4.1")

    @pytest.mark.asyncio
    async def test_navigation_with_skip_link(self, make_tree, settings):
        nodes = make_tree({
            "id": "page",
            "name": "Page",
            "children": [
                {"id": "skip", "name": "Skip to content link", "accessibilityLabel": "Skip to content"},
                {"id": "nav", "name": "Navigation"},
            ],
        })

        assert await analyze(NavigationAnalyzer(settings), nodes, "page") == []


class TestUnreadableNodes:
    """A node the host reports badly only costs the findings that involve it."""

    @pytest.mark.asyncio
    async def test_unparseable_offset_reads_as_zero(self, make_tree):
        nodes = make_tree({"id": "r", "x": 10, "y": 100, "children": [{"id": "c", "x": 5, "y": 7}]})
        nodes["c"].x = "auto"

        assert await reading_position(nodes["c"]) == (107.0, 10.0)

    @pytest.mark.asyncio
    async def test_bad_heading_in_other_frame(self, make_tree, settings):
        nodes = make_tree([
            {"id": "screen", "children": [heading("title", 1, 0), heading("detail", 3, 100)]},
            {"id": "sidebar", "children": [heading("aside", 1, 0)]},
        ])
        nodes["aside"].x = "auto"

        issues = await NavigationAnalyzer(settings).analyze(
            await collect_nodes([nodes["screen"], nodes["sidebar"]])
        )

        assert [(issue.title, issue.node_id) for issue in issues] == [("Skipped heading level", "detail")]

    @pytest.mark.asyncio
    async def test_failing_section_check_keeps_other_sections(self, make_tree, settings, monkeypatch):
        nodes = make_tree([
            {"id": "screen", "children": [heading("title", 1, 0), heading("detail", 3, 100)]},
            {"id": "broken", "name": "Broken", "children": [{"id": "nav", "name": "Navigation"}]},
        ])
        analyzer = NavigationAnalyzer(settings)
        check_skip_link = analyzer._check_skip_link

        async def failing_for_broken(root):
            if root.id == "broken":
                raise ValueError("host error")
            return await check_skip_link(root)

        monkeypatch.setattr(analyzer, "_check_skip_link", failing_for_broken)

        issues = await analyzer.analyze(await collect_nodes([nodes["screen"], nodes["broken"]]))

        assert [(issue.title, issue.node_id) for issue in issues] == [("Skipped heading level", "detail")]

    @pytest.mark.asyncio
    async def test_failing_cover_check_keeps_other_elements(self, make_tree, settings, monkeypatch):
        nodes = make_tree({
            "id": "screen",
            "children": [
                {"id": "buy", "name": "Buy button", "text": "Buy", "x": 10, "y": 10, "width": 100, "height": 40},
                {"id": "sell", "name": "Sell button", "text": "Sell", "x": 10, "y": 60, "width": 100, "height": 40},
                {"id": "sheet", "name": "Sheet", "fill": "#FFFFFF", "x": 0, "y": 0, "width": 375, "height": 400},
            ],
        })
        analyzer = NavigationAnalyzer(settings)
        check_covered = analyzer._check_covered

        async def failing_for_buy(node):
            if node.id == "buy":
                raise ValueError("host error")
            return await check_covered(node)

        monkeypatch.setattr(analyzer, "_check_covered", failing_for_buy)

        issues = await analyze(analyzer, nodes, "screen")

        assert [(issue.title, issue.node_id) for issue in issues] == [("Interactive element is covered", "sell")]
