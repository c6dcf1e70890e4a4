"""Tests for egg_railroad.layout.engine: measure formulas and draw placement."""

import logging

import pytest

from egg_railroad.layout.builder import make_box
from egg_railroad.layout.engine import RailroadLayout, measure
from egg_railroad.layout.types import (
    ChoiceNode,
    DefinitionNode,
    ListNode,
    OneOrMoreNode,
    RuleNode,
    SequenceNode,
    StackNode,
    ZeroOrMoreNode,
    ZeroOrOneNode,
    definition_tab_width,
)
from egg_railroad.renderers.svg import SvgCanvas
from egg_railroad.types import BoxShape


def _token(text: str = "a"):
    return make_box(BoxShape.Token, text)


def _extent(node):
    measure(node)
    return (node.width, node.above, node.below)


# ─── Measure ─────────────────────────────────────────────────────────────────


class TestMeasureLeaves:
    def test_box(self):
        assert _extent(_token("abc")) == pytest.approx((1.9, 0.5, 0.5))

    def test_measured_flag(self):
        box = _token()
        assert not box.measured
        measure(box)
        assert box.measured

    def test_returns_width(self):
        assert measure(_token("ab")) == pytest.approx(1.6)


class TestMeasureComposites:
    def test_sequence(self):
        node = SequenceNode([_token("a"), _token("bc")])
        assert _extent(node) == pytest.approx((3.4, 0.5, 0.5))

    def test_sequence_takes_tallest_item(self):
        node = SequenceNode([_token(), ZeroOrMoreNode(_token())])
        assert _extent(node)[1:] == pytest.approx((1.5, 0.5))

    def test_choice(self):
        node = ChoiceNode([_token("a"), _token("bc")])
        assert _extent(node) == pytest.approx((3.6, 0.5, 1.7))

    def test_optional_choice(self):
        node = ChoiceNode([_token("a")], optional=True)
        assert _extent(node) == pytest.approx((3.3, 0.5, 1.7))

    def test_zero_or_one(self):
        assert _extent(ZeroOrOneNode(_token())) == pytest.approx((3.3, 0.5, 1.5))

    def test_zero_or_more(self):
        assert _extent(ZeroOrMoreNode(_token())) == pytest.approx((2.3, 1.5, 0.5))

    def test_one_or_more(self):
        assert _extent(OneOrMoreNode(_token())) == pytest.approx((2.3, 1.25, 0.5))

    def test_list(self):
        assert _extent(ListNode(_token(), _token(","))) == pytest.approx((2.3, 1.5, 0.5))

    def test_list_wider_separator(self):
        assert _extent(ListNode(_token(), _token(",,,")))[0] == pytest.approx(2.9)

    def test_definition(self):
        assert _extent(DefinitionNode("d", _token())) == pytest.approx((2.3, 2.75, 1.5))

    def test_definition_margins(self):
        node = DefinitionNode("d", _token(), left=1.0, right=2.0)
        assert _extent(node)[0] == pytest.approx(4.3)

    def test_rule(self):
        node = RuleNode(DefinitionNode("d", _token()))
        assert _extent(node) == pytest.approx((3.3, 2.75, 1.5))

    def test_stack(self):
        node = StackNode([RuleNode(DefinitionNode("d", _token())), RuleNode(DefinitionNode("e", _token("ab")))])
        assert _extent(node) == pytest.approx((3.6, 2.75, 1.5 + 1.0 + 4.25))


# ─── Draw ────────────────────────────────────────────────────────────────────


def _render(node, x=0.0, y=0.0) -> str:
    return RailroadLayout().render(node, x, y).to_string()


class TestDraw:
    def test_rule_end_caps(self):
        svg = _render(RuleNode(DefinitionNode("d", _token("x"))))
        assert svg.count("<ellipse") == 2
        assert ">x</text>" in svg
        assert ">d</text>" in svg

    def test_definition_panel(self):
        svg = _render(DefinitionNode("d", _token("a")))
        assert '<rect x="0" y="-2" width="0.76" height="1.5"' in svg  # name tab
        assert '<rect x="0" y="-1.25" width="2.3" height="2.75"' in svg  # frame
        assert '<rect x="0.25" y="-1" width="1.8" height="2.25"' in svg  # panel
        assert '<text x="0.2" y="-1.35" font-family="monospace" font-size="0.65"' in svg

    def test_definition_tab_grows_with_name(self):
        assert definition_tab_width("abcd") == pytest.approx(1.84)

    def test_sequence_positions(self):
        svg = _render(SequenceNode([_token("a"), _token("bc")]))
        assert '<rect x="0" y="-0.4"' in svg
        assert '<rect x="1.8" y="-0.4"' in svg

    def test_choice_branches(self):
        svg = _render(ChoiceNode([_token("a"), _token("b"), _token("c")]))
        assert svg.count("<rect") == 3
        # first branch runs on the entry track at x + 2R
        assert '<rect x="1" y="-0.4"' in svg

    def test_optional_choice_moves_items_down(self):
        svg = _render(ChoiceNode([_token("a")], optional=True))
        assert '<rect x="1" y="0.6"' in svg

    def test_zero_or_more_draws_item_above(self):
        svg = _render(ZeroOrMoreNode(_token("a")))
        assert '<rect x="0.5" y="-1.4"' in svg

    def test_list_centres_separator(self):
        svg = _render(ListNode(_token("a"), _token(",")))
        assert '<rect x="0.5" y="-1.4"' in svg
        assert '<rect x="0.5" y="-0.4"' in svg

    def test_render_measures_once(self):
        node = SequenceNode([_token("a")])
        measure(node)
        node.width = 99.0
        RailroadLayout().render(node, 0, 0)
        assert node.width == 99.0

    def test_nested_panel_is_lighter(self):
        node = RuleNode(DefinitionNode("d", _token()))
        assert "hsl(184,100%,95%)" in _render(node)
        assert "hsl(184,100%,100%)" in RailroadLayout(nested=True).render(node, 0, 0).to_string()

    def test_unknown_node_placeholder(self, caplog):
        canvas = SvgCanvas()
        with caplog.at_level(logging.ERROR, logger="egg_railroad.layout.engine"):
            RailroadLayout().draw(object(), 0, 0, 2.0, canvas)
        svg = canvas.to_string()
        assert 'stroke="red"' in svg
        assert ">unknown</text>" in svg
        assert "Unknown railroad node" in caplog.text
