"""Rendering entry points.

Each function takes a GrammarSource (the bundled Egg grammar by default),
applies a named variation, validates and renders. Unknown variation names
and validation problems are logged and yield an empty string: the caller
shows nothing rather than a broken listing or the wrong view.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from egg_railroad.config import RenderConfig
from egg_railroad.ir.ruleset import RuleSet, validate
from egg_railroad.ir.variations import resolve
from egg_railroad.parsers import GrammarSource, load_default
from egg_railroad.renderers.ascii import AsciiRenderer
from egg_railroad.renderers.bottlecaps import BottlecapsRenderer
from egg_railroad.renderers.railroad import RailroadRenderer

logger = logging.getLogger(__name__)

# Rules inlined into the poster, keyed by the definition they appear inside.
# None splices a rule without a panel.
POSTER_MEGA: dict[str, str | None] = {
    "attribute": "definition-function-parameter",
    "parameter-list": "expression-primary",
    "expression": "statement-action",
    "expression-unary": "expression-binary",
    "expression-primary": "expression-unary",
    "definition-function-parameter": "definition-function",
    "type-expression": "definition-type",
    "type-expression-primary": None,
    "statement-switch": None,
    "statement-while": None,
    "statement-do": None,
    "statement-for": None,
    "statement-foreach": None,
    "statement-break": None,
    "statement-continue": None,
    "statement-throw": None,
    "statement-try": None,
    "statement-try-finally": None,
    "statement-return": None,
    "statement-yield": None,
    "statement-call": None,
    "literal-type": "definition-type",
}

TARGETS: tuple[str, ...] = ("ascii", "bottlecaps", "railroad", "poster")


def _construct(source: GrammarSource | None, variation: str | None, delist: bool) -> RuleSet | None:
    if source is None:
        source = load_default()
    try:
        raw = resolve(source, variation)
    except KeyError as e:
        logger.error("%s", e.args[0])
        return None
    return validate(raw, delist).rules


def _default_variation(source: GrammarSource, name: str) -> str | None:
    # Grammars without variations render their base rules
    return name if name in source.variations else None


def render_ascii(
    source: GrammarSource | None = None,
    *,
    variation: str | None = "full",
    collapsed: bool = True,
    annotated: bool = False,
) -> str:
    """HTML listing of the grammar with single-use rules collapsed into their users."""
    rules = _construct(source, variation, delist=True)
    if rules is None:
        return ""
    return AsciiRenderer(collapsed=collapsed, annotated=annotated).render(rules)


def render_bottlecaps(source: GrammarSource | None = None, *, variation: str | None = "full") -> str:
    """Plain BNF accepted by the bottlecaps.de railroad diagram generator."""
    rules = _construct(source, variation, delist=True)
    if rules is None:
        return ""
    return BottlecapsRenderer().render(rules)


def render_railroad(
    source: GrammarSource | None = None,
    *,
    variation: str | None = "concise",
    config: RenderConfig | None = None,
) -> str:
    """Railroad diagrams of every non-inline rule, stacked."""
    rules = _construct(source, variation, delist=False)
    if rules is None:
        return ""
    return RailroadRenderer(config).render(rules)


def render_rule(
    name: str,
    source: GrammarSource | None = None,
    *,
    variation: str | None = "concise",
    config: RenderConfig | None = None,
) -> str:
    """Railroad diagram of the single rule *name*."""
    rules = _construct(source, variation, delist=False)
    if rules is None:
        return ""
    return RailroadRenderer(config).render_rule(rules, name)


def render_poster(
    source: GrammarSource | None = None,
    mega: Mapping[str, str | None] | None = None,
    *,
    root: str = "module",
    variation: str | None = "concise",
    config: RenderConfig | None = None,
) -> str:
    """One composite diagram of *root* with the rules named in *mega* inlined."""
    rules = _construct(source, variation, delist=False)
    if rules is None:
        return ""
    return RailroadRenderer(config).render_mega(rules, POSTER_MEGA if mega is None else mega, root=root)


def render_snippet(raw_rules: Mapping[str, Any], config: RenderConfig | None = None) -> str:
    """Railroad diagram of an ad-hoc rule mapping, without variations."""
    return render_railroad(GrammarSource(rules=dict(raw_rules)), variation=None, config=config)


def render_syntax(target: str, source: GrammarSource | None = None, config: RenderConfig | None = None) -> str:
    """Dispatch on *target*: one of TARGETS, or the name of a rule to draw alone.

    Text targets use the "full" variation and diagrams the "concise" one,
    when *source* defines them.
    """
    config = config or RenderConfig()
    if source is None:
        source = load_default()
    full = _default_variation(source, "full")
    concise = _default_variation(source, "concise")
    if target == "ascii":
        return render_ascii(source, variation=full, collapsed=config.collapsed, annotated=config.annotated)
    if target == "bottlecaps":
        return render_bottlecaps(source, variation=full)
    if target == "railroad":
        return render_railroad(source, variation=concise, config=config)
    if target == "poster":
        return render_poster(source, variation=concise, config=config)
    return render_rule(target, source, variation=concise, config=config)
