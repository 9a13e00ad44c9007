"""Tests for the color blindness analyzer."""

import pytest

from design_a11y.analyzers.color_blindness import ColorBlindnessAnalyzer, color_of
from design_a11y.models import IssueType, Severity
from design_a11y.utils.color import color_distance, contrast_ratio, parse_color


def swatches(first, second, gap=0, **extra):
    return {
        "id": "legend",
        "name": "Legend",
        "children": [
            {"id": "a", "name": "Swatch A", "fill": first, "x": 0, "y": 0, "width": 40, "height": 40},
            {"id": "b", "name": "Swatch B", "fill": second, "x": 40 + gap, "y": 0, "width": 40, "height": 40},
        ],
        **extra,
    }


class TestColorOf:
    """Tests for color_of."""

    def test_text_uses_text_color(self, make_tree):
        nodes = make_tree({"id": "t", "type": "text", "text": "x", "color": "#FF0000", "fill": "#00FF00"})
        assert color_of(nodes["t"]) == "#FF0000"

    def test_shape_uses_fill(self, make_tree):
        nodes = make_tree({"id": "s", "fill": "#00FF00"})
        assert color_of(nodes["s"]) == "#00FF00"

    def test_uncolored_node(self, make_tree):
        nodes = make_tree({"id": "s"})
        assert color_of(nodes["s"]) is None


class TestColorBlindness:
    """Tests for hue-only distinctions."""

    @pytest.mark.asyncio
    async def test_red_green_pair_flagged(self, make_tree, settings):
        """An orange-red and a green of similar lightness collapse for protanopia."""
        a, b = "#C86432", "#64E732"
        assert color_distance(a, b) > 50
        assert contrast_ratio(parse_color(a), parse_color(b)) < 3.0
        nodes = make_tree(swatches(a, b))

        issues = await ColorBlindnessAnalyzer(settings).analyze([nodes["a"], nodes["b"]])

        assert len(issues) == 1
        issue = issues[0]
        assert issue.type == IssueType.COLOR_BLINDNESS
        assert issue.severity == Severity.WARNING
        assert "protanopia" in issue.description
        assert issue.node_id == "a"
        assert issue.wcag_guideline == "1.4.1 Use of Color"

    @pytest.mark.asyncio
    async def test_lightness_contrast_is_enough(self, make_tree, settings):
        nodes = make_tree(swatches("#8B0000", "#90EE90"))

        assert await ColorBlindnessAnalyzer(settings).analyze([nodes["a"], nodes["b"]]) == []

    @pytest.mark.asyncio
    async def test_similar_colors_not_flagged(self, make_tree, settings):
        """Colors that already look alike are not a color blindness issue."""
        nodes = make_tree(swatches("#336699", "#336698"))

        assert await ColorBlindnessAnalyzer(settings).analyze([nodes["a"], nodes["b"]]) == []

    @pytest.mark.asyncio
    async def test_distant_elements_not_compared(self, make_tree, settings):
        nodes = make_tree(swatches("#C86432", "#64E732", gap=100))

        assert await ColorBlindnessAnalyzer(settings).analyze([nodes["a"], nodes["b"]]) == []

    @pytest.mark.asyncio
    async def test_hidden_elements_skipped(self, make_tree, settings):
        nodes = make_tree(swatches("#C86432", "#64E732", visible=False))

        assert await ColorBlindnessAnalyzer(settings).analyze([nodes["a"], nodes["b"]]) == []

    @pytest.mark.asyncio
    async def test_lightness_fix_resolves_issue(self, make_tree, settings):
        nodes = make_tree(swatches("#C86432", "#64E732"))
        analyzer = ColorBlindnessAnalyzer(settings)

        (issue,) = await analyzer.analyze([nodes["a"], nodes["b"]])
        await issue.fix_suggestions[1].action()

        assert nodes["b"].fill != "#64E732"
        assert await analyzer.analyze([nodes["a"], nodes["b"]]) == []


class TestCommonPalettes:
    """Everyday red/green pairs keep most of their lightness difference but lose their hue."""

    @pytest.mark.asyncio
    async def test_pure_red_and_green(self, make_tree, settings):
        nodes = make_tree(swatches("#FF0000", "#00FF00"))

        (issue,) = await ColorBlindnessAnalyzer(settings).analyze([nodes["a"], nodes["b"]])

        assert issue.severity == Severity.WARNING
        assert "protanopia, deuteranopia" in issue.description
        assert "tritanopia" not in issue.description

    @pytest.mark.asyncio
    async def test_material_red_and_green(self, make_tree, settings):
        nodes = make_tree(swatches("#E53935", "#43A047"))

        (issue,) = await ColorBlindnessAnalyzer(settings).analyze([nodes["a"], nodes["b"]])

        assert issue.severity == Severity.WARNING
        assert "protanopia" in issue.description

    @pytest.mark.asyncio
    async def test_retained_share_is_configurable(self, make_tree):
        from design_a11y.config import ScanSettings

        nodes = make_tree(swatches("#FF0000", "#00FF00"))
        lenient = ScanSettings(_env_file=None, retained_distance_ratio=0.1)

        assert await ColorBlindnessAnalyzer(lenient).analyze([nodes["a"], nodes["b"]]) == []


class TestFailingPair:
    """A pair that cannot be compared does not hide other pairs."""

    @pytest.mark.asyncio
    async def test_other_pairs_still_checked(self, make_tree, settings, monkeypatch):
        nodes = make_tree({
            "id": "legend",
            "children": [
                {"id": "a", "name": "Swatch A", "fill": "#C86432", "x": 0, "y": 0, "width": 40, "height": 40},
                {"id": "b", "name": "Swatch B", "fill": "#64E732", "x": 40, "y": 0, "width": 40, "height": 40},
                {"id": "c", "name": "Swatch C", "fill": "#64E732", "x": 0, "y": 40, "width": 40, "height": 40},
            ],
        })
        analyzer = ColorBlindnessAnalyzer(settings)
        check_pair = analyzer._check_pair

        async def failing_for_b(first, second):
            if second.id == "b":
                raise ValueError("host error")
            return await check_pair(first, second)

        monkeypatch.setattr(analyzer, "_check_pair", failing_for_b)

        issues = await analyzer.analyze([nodes["a"], nodes["b"], nodes["c"]])

        assert [issue.node_id for issue in issues] == ["a"]
        assert "Swatch C" in issues[0].description
