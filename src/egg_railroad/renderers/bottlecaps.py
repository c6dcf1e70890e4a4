"""Plain-text BNF in the dialect of the bottlecaps.de railroad diagram generator.

Tokens are quoted, references and terminals are bare words, repetition uses
``?``/``*``/``+`` and the alternatives of a choice continue on lines that
start with ``|`` aligned under the ``=`` of ``::=``.
"""

from __future__ import annotations

from egg_railroad.ir.ruleset import RuleSet
from egg_railroad.renderers.base import Expander


class _TextExpander(Expander):
    def rule(self, name: str) -> str:
        return name

    def token(self, text: str) -> str:
        return f"'{text}'"

    def terminal(self, text: str) -> str:
        return text

    def alias(self, text: str) -> str:
        return text


class BottlecapsRenderer:
    """Plain BNF text renderer."""

    def render(self, rules: RuleSet) -> str:
        expander = _TextExpander(rules)
        return "\n\n".join(expander.production(rule) for rule in rules)


def split_alternatives(production: str) -> list[str]:
    """Split one rendered production back into its alternatives."""
    _, _, rest = production.partition(" ::= ")
    lines = rest.split("\n")
    return [lines[0]] + [line.strip()[2:] for line in lines[1:]]
