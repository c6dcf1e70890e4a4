"""Collapsed BNF listing rendered as HTML fragments.

Each kept rule becomes one ``<pre>`` block. Rules used from a single place
(or marked ``inline``) can be collapsed into their use-site; with
annotations every rule is listed and followed by a note saying whether it is
unused, collapsed into its referrers, or used by them.
"""

from __future__ import annotations

from egg_railroad.ir.ruleset import RuleSet
from egg_railroad.renderers.base import Expander
from egg_railroad.renderers.markup import element, escape, span_rule, span_terminal, span_token
from egg_railroad.syntax.types import Node


class _HtmlExpander(Expander):
    unknown = "&lt;unknown&gt;"

    def __init__(self, rules: RuleSet, collapsed: bool) -> None:
        super().__init__(rules)
        self.collapsed = collapsed

    def rule(self, name: str) -> str:
        return span_rule(name)

    def token(self, text: str) -> str:
        return span_token(text)

    def terminal(self, text: str) -> str:
        return span_terminal(text)

    def display_width(self, name: str) -> int:
        return len(name) + 2  # <name>

    def collapses(self, name: str) -> bool:
        """Whether references to *name* are replaced by its body."""
        if not self.collapsed:
            return False
        rule = self.rules.get(name)
        if rule is None or not rule.refs - {name}:
            return False  # roots always get their own entry
        if rule.inline is not None:
            return rule.inline
        return len(rule.refs) == 1

    def inline_body(self, name: str) -> Node | None:
        if self.collapses(name):
            return self.rules[name].body
        return None


class AsciiRenderer:
    """HTML listing renderer."""

    def __init__(self, collapsed: bool = True, annotated: bool = False) -> None:
        self.collapsed = collapsed
        self.annotated = annotated

    def render(self, rules: RuleSet) -> str:
        expander = _HtmlExpander(rules, self.collapsed)
        html = ""
        for rule in rules:
            collapsed = expander.collapses(rule.name)
            if collapsed and not self.annotated:
                continue
            html += element("pre", {}, expander.production(rule))
            if self.annotated:
                html += _annotation(rules, rule.name, collapsed)
        return html


def _annotation(rules: RuleSet, name: str, collapsed: bool) -> str:
    referrers = ", ".join(escape(r) for r in rules.referrers(name))
    if not referrers:
        return element("div", {"class": "unused"}, "Unused")
    if collapsed:
        return element("div", {"class": "collapsed"}, "Collapsed into " + referrers)
    return element("div", {"class": "used"}, "Used by " + referrers)
