"""Tests for the SVG canvas, the markup helpers and the railroad renderer."""

import logging

from egg_railroad.config import RenderConfig, Theme
from egg_railroad.ir.ruleset import construct
from egg_railroad.renderers.markup import element, escape, number
from egg_railroad.renderers.railroad import RailroadRenderer
from egg_railroad.renderers.svg import SVG_NAMESPACE, SvgCanvas, wrap
from egg_railroad.types import BoxShape

TRACK = "hsl(132,100%,25%)"


# ─── Markup ──────────────────────────────────────────────────────────────────


class TestMarkup:
    def test_number(self):
        assert number(2.0) == "2"
        assert number(0.1 + 0.2) == "0.3"
        assert number(1.25) == "1.25"
        assert number(5) == "5"
        assert number(-0.00001) == "0"

    def test_escape(self):
        assert escape("a<b>&c") == "a&lt;b&gt;&amp;c"

    def test_self_closing(self):
        assert element("g", {}) == "<g/>"

    def test_attributes_in_order(self):
        assert element("a", {"x": 1.5, "title": 'say "hi"'}, "c") == '<a x="1.5" title="say &quot;hi&quot;">c</a>'


# ─── Canvas ──────────────────────────────────────────────────────────────────


class TestCanvas:
    def test_line(self):
        canvas = SvgCanvas()
        canvas.line(0, 0, 1, 0)
        assert canvas.to_string() == (
            f'<line x1="0" y1="0" x2="1" y2="0" stroke="{TRACK}" stroke-width="0.1"'
            ' stroke-linecap="square" fill="none"/>'
        )

    def test_circle(self):
        canvas = SvgCanvas()
        canvas.circle(1, 2)
        assert canvas.to_string().startswith('<ellipse cx="1" cy="2" rx="0.2" ry="0.2"')

    def test_arc(self):
        canvas = SvgCanvas()
        canvas.arc(0, 0, 0.5, "es")
        assert 'd="M 0 0 A 0.5 0.5 0 0 1 0.5 0.5"' in canvas.to_string()

    def test_half_arc(self):
        canvas = SvgCanvas()
        canvas.arc(1, 1, 0.5, "we")
        assert 'd="M 1 1 A 0.5 0.5 0 0 1 1 0"' in canvas.to_string()

    def test_unknown_arc(self, caplog):
        canvas = SvgCanvas()
        with caplog.at_level(logging.ERROR, logger="egg_railroad.renderers.svg"):
            canvas.arc(0, 0, 0.5, "xx")
        assert canvas.parts == []
        assert "Unknown railroad node arc direction: xx" in caplog.text

    def test_loop_close_tracks(self):
        canvas = SvgCanvas()
        canvas.loop(0, 0, 2, 0.9, 0.5, None)
        assert len(canvas.parts) == 2

    def test_loop_with_risers(self):
        canvas = SvgCanvas()
        canvas.loop(0, 0, 2, 3, 0.5, 1.0)
        assert len(canvas.parts) == 7
        assert canvas.to_string().count("<line") == 3

    def test_rule_box(self):
        canvas = SvgCanvas()
        canvas.box(0, 0, 2, 0.8, "expr", BoxShape.Rule)
        svg = canvas.to_string()
        assert 'rx="0.4"' in svg
        assert 'font-style="italic"' in svg
        assert ">expr</text>" in svg

    def test_token_box(self):
        canvas = SvgCanvas()
        canvas.box(0, 0, 2, 0.8, "<", BoxShape.Token)
        svg = canvas.to_string()
        assert svg.startswith("<rect")
        assert 'font-style="normal"' in svg
        assert ">&lt;</text>" in svg

    def test_terminal_box(self):
        canvas = SvgCanvas()
        canvas.box(0, 0, 2, 0.8, "digit", BoxShape.Terminal)
        assert canvas.to_string().startswith("<polygon")

    def test_theme_hues(self):
        canvas = SvgCanvas(Theme(hues={**Theme().hues, "track": 0}))
        canvas.line(0, 0, 1, 0)
        assert 'stroke="hsl(0,100%,25%)"' in canvas.to_string()


class TestWrap:
    def test_viewbox(self):
        assert wrap("<line/>", 10, 5) == (
            f'<svg xmlns="{SVG_NAMESPACE}" version="1.1" viewBox="0 0 10 5"><line/></svg>'
        )

    def test_scale(self):
        svg = wrap("<line/>", 10, 5, scale=10)
        assert 'width="120"' in svg
        assert 'height="60"' in svg
        assert '<g transform="scale(12)"><line/></g>' in svg
        assert "viewBox" not in svg


# ─── Railroad renderer ───────────────────────────────────────────────────────


class TestRailroadRenderer:
    def test_single_rule_viewbox(self):
        svg = RailroadRenderer().render(construct({"a": {"token": "x"}}))
        assert svg.startswith("<svg")
        assert 'viewBox="0 0 4.3 5.25"' in svg
        assert svg.endswith("</svg>")

    def test_scaled(self):
        svg = RailroadRenderer(RenderConfig(scale=1.0)).render(construct({"a": {"token": "x"}}))
        assert 'transform="scale(1.2)"' in svg

    def test_nothing_to_draw(self):
        rules = construct({"a": {"token": "x", "railroad": False}})
        assert RailroadRenderer().render(rules) == ""

    def test_render_rule(self):
        rules = construct({"a": {"sequence": ["b"]}, "b": {"token": "x", "inline": False}})
        svg = RailroadRenderer().render_rule(rules, "b")
        assert ">b</text>" in svg
        assert ">a</text>" not in svg

    def test_render_rule_unknown(self):
        assert RailroadRenderer().render_rule(construct({"a": {"token": "x"}}), "b") == ""

    def test_render_mega_unknown_root(self):
        assert RailroadRenderer().render_mega(construct({"a": {"token": "x"}}), {}, root="module") == ""

    def test_render_mega(self):
        rules = construct({
            "a": {"sequence": [{"token": "x"}, "b"], "inline": False},
            "b": {"sequence": [{"token": "y"}, {"zeroOrOne": "a"}], "inline": False},
        })
        svg = RailroadRenderer().render_mega(rules, {"b": "a"}, root="a")
        assert ">a</text>" in svg
        assert ">b</text>" in svg
        assert "hsl(184,100%,100%)" in svg
