"""Base renderer protocol and the grammar-to-text expander shared by text renderers."""

from __future__ import annotations

import logging
from typing import Protocol

from egg_railroad.ir.ruleset import RuleSet
from egg_railroad.syntax.types import (
    REPETITIONS,
    Alias,
    Child,
    Choice,
    ListOf,
    Node,
    OneOrMore,
    Rule,
    RuleLabel,
    Sequence,
    Terminal,
    Token,
    Tokens,
    ZeroOrMore,
    ZeroOrOne,
)

logger = logging.getLogger(__name__)

_POSTFIX: dict[type, str] = {ZeroOrOne: "?", ZeroOrMore: "*", OneOrMore: "+"}


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, rules: RuleSet) -> str:
        """Render a validated rule set to an output string."""
        ...


class Expander:
    """Renders rule bodies as single-line BNF expressions.

    Subclasses choose the spelling of leaves (``rule``, ``token``,
    ``terminal``, ``alias``) and may substitute referenced rules inline by
    overriding ``inline_body``.
    """

    unknown = "[unknown]"
    # Column of the "|" of continuation lines, relative to the displayed name
    indent = 3

    def __init__(self, rules: RuleSet) -> None:
        self.rules = rules
        self._active: list[str] = []

    # ── Leaf spelling ────────────────────────────────────────────────────────

    def rule(self, name: str) -> str:
        raise NotImplementedError

    def token(self, text: str) -> str:
        raise NotImplementedError

    def terminal(self, text: str) -> str:
        raise NotImplementedError

    def alias(self, text: str) -> str:
        return self.rule(text)

    def display_name(self, name: str) -> str:
        return self.rule(name)

    def display_width(self, name: str) -> int:
        return len(name)

    def inline_body(self, name: str) -> Node | None:
        return None

    # ── Expansion ────────────────────────────────────────────────────────────

    def expand(self, child: Child, parentheses: bool = False, top: bool = False) -> str:
        if isinstance(child, str):
            body = self.inline_body(child) if child not in self._active else None
            if body is None:
                return self.rule(child)
            self._active.append(child)
            text = self.expand(body, parentheses)
            self._active.pop()
            return text

        node = child
        if isinstance(node, Sequence):
            result = " ".join(self.expand(x) for x in node.items)
        elif isinstance(node, ListOf):
            result = f"({self.rule(node.item)} {self.expand(node.separator)})* {self.rule(node.item)}"
        elif isinstance(node, REPETITIONS):
            text = self.expand(node.item, True)
            if isinstance(self._operand(node.item), REPETITIONS):
                # one postfix per primary: b?* is not BNF, (b?)* is
                text = f"({text})"
            return text + _POSTFIX[type(node)]
        elif isinstance(node, Choice):
            text = " | ".join(self.expand(x) for x in node.items)
            return text if top else f"({text})"
        elif isinstance(node, Tokens):
            text = " | ".join(self.token(x) for x in node.texts)
            return text if top else f"({text})"
        elif isinstance(node, Alias):
            return self.alias(node.text)
        elif isinstance(node, RuleLabel):
            return self.rule(node.text)
        elif isinstance(node, Terminal):
            return self.terminal(node.text)
        elif isinstance(node, Token):
            return self.token(node.text)
        else:
            logger.error("Invalid tag: %r", node)
            return self.unknown
        if parentheses:
            return f"({result})"
        return result

    def _operand(self, child: Child) -> Child:
        """The node *child* will be expanded as, after inlining."""
        if isinstance(child, str) and child not in self._active:
            body = self.inline_body(child)
            if body is not None:
                return body
        return child

    def alternatives(self, rule: Rule) -> list[str]:
        """The right-hand sides of *rule*, one per stacked alternative."""
        body = rule.body
        self._active.append(rule.name)
        if isinstance(body, Choice):
            lines = [self.expand(x) for x in body.items]
        elif isinstance(body, ListOf):
            lines = [
                self.expand(body.item),
                f"{self.rule(rule.name)} {self.expand(body.separator)} {self.expand(body.item)}",
            ]
        else:
            lines = [self.expand(body, top=True)]
        self._active.pop()
        return lines

    def production(self, rule: Rule) -> str:
        before = self.display_name(rule.name) + " ::= "
        continuation = "\n" + " " * (self.display_width(rule.name) + self.indent) + "| "
        return before + continuation.join(self.alternatives(rule))
