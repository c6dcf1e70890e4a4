"""egg-railroad: BNF listings and SVG railroad diagrams of the Egg grammar."""

from egg_railroad.api import (
    POSTER_MEGA,
    TARGETS,
    render_ascii,
    render_bottlecaps,
    render_poster,
    render_railroad,
    render_rule,
    render_snippet,
    render_syntax,
)
from egg_railroad.config import RenderConfig, Theme
from egg_railroad.parsers import GrammarSource, load, load_default, parse

__all__ = [
    "POSTER_MEGA",
    "TARGETS",
    "GrammarSource",
    "RenderConfig",
    "Theme",
    "load",
    "load_default",
    "parse",
    "render_ascii",
    "render_bottlecaps",
    "render_poster",
    "render_railroad",
    "render_rule",
    "render_snippet",
    "render_syntax",
]
