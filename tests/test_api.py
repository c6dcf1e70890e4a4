"""Tests for the rendering entry points in egg_railroad.api."""

import logging

from egg_railroad import RenderConfig, render_snippet
from egg_railroad.api import render_ascii, render_bottlecaps, render_poster, render_railroad, render_syntax
from egg_railroad.parsers import GrammarSource

SOURCE = GrammarSource(
    rules={
        "module": {"sequence": ["item", {"zeroOrMore": "item"}], "inline": False},
        "item": {"choice": [{"token": "a"}, "pair"]},
        "pair": {"list": "digit", "separator": {"token": ","}},
        "digit": {"terminal": "digit"},
    },
    variations={"plain": {"pair": {"token": "p"}}},
)


class TestTextEntryPoints:
    def test_ascii_delists(self):
        html = render_ascii(SOURCE, variation=None, collapsed=False)
        assert "&lt;pair&gt;</span> <span class=\"token\">','</span>" in html

    def test_bottlecaps(self):
        text = render_bottlecaps(SOURCE, variation=None)
        assert "pair ::= digit\n       | pair ',' digit" in text

    def test_variation_applied(self):
        assert "pair ::= 'p'" in render_bottlecaps(SOURCE, variation="plain")

    def test_unknown_variation_renders_nothing(self, caplog):
        with caplog.at_level(logging.ERROR, logger="egg_railroad.api"):
            assert render_ascii(SOURCE, variation="nope") == ""
            assert render_bottlecaps(SOURCE, variation="nope") == ""
            assert render_railroad(SOURCE, variation="nope") == ""
        assert "Unknown variation 'nope'; known variations: plain" in caplog.text

    def test_syntax_without_default_variations_uses_base(self):
        assert render_syntax("bottlecaps", SOURCE) == render_bottlecaps(SOURCE, variation=None)

    def test_invalid_grammar_renders_nothing(self):
        broken = GrammarSource(rules={"a": {"sequence": ["b"]}})
        assert render_ascii(broken, variation=None) == ""
        assert render_bottlecaps(broken, variation=None) == ""
        assert render_railroad(broken, variation=None) == ""
        assert render_poster(broken, root="a", variation=None) == ""


class TestDiagramEntryPoints:
    def test_railroad_keeps_lists(self):
        svg = render_railroad(SOURCE, variation=None)
        assert ">module</text>" in svg
        assert ">,</text>" in svg

    def test_poster_root(self):
        svg = render_poster(SOURCE, {}, root="module", variation=None)
        assert svg.count("<svg") == 1
        assert ">item</text>" in svg

    def test_snippet(self):
        svg = render_snippet({"a": {"sequence": [{"token": "x"}, {"terminal": "y"}]}})
        assert svg.startswith("<svg")
        assert ">x</text>" in svg

    def test_syntax_uses_config(self):
        config = RenderConfig(scale=1.0, collapsed=False)
        assert 'transform="scale(1.2)"' in render_syntax("railroad", SOURCE, config)
        assert render_syntax("ascii", SOURCE, config) == render_ascii(SOURCE, variation=None, collapsed=False)
