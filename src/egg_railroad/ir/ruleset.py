"""Rule set IR: validates a raw grammar description into canonical rules.

Validation clones every rule body into the node variants of
``egg_railroad.syntax``, checks that every referenced rule exists in the same
rule set and records who references whom in a networkx DiGraph (edge
referrer -> referenced). Failures never raise: ``validate`` returns a
``ValidationResult`` without rules and with the diagnostic that stopped it,
and the same diagnostic is logged. Callers render nothing in that case.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NoReturn

import networkx as nx

from egg_railroad.ir.variations import apply_variation
from egg_railroad.syntax.types import (
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
from egg_railroad.types import METADATA_KEYS, NodeKind

logger = logging.getLogger(__name__)


class Severity(Enum):
    Warning = "warning"
    Error = "error"


@dataclass
class Diagnostic:
    severity: Severity
    rule: str
    message: str

    def __str__(self) -> str:
        return f"'{self.rule}' {self.message}"


class RuleSet:
    """Validated rules in source order plus the reference graph between them."""

    def __init__(self, rules: dict[str, Rule], digraph: nx.DiGraph) -> None:
        self.rules = rules
        self.digraph = digraph

    def __getitem__(self, name: str) -> Rule:
        return self.rules[name]

    def __contains__(self, name: object) -> bool:
        return name in self.rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules.values())

    def __len__(self) -> int:
        return len(self.rules)

    def get(self, name: str) -> Rule | None:
        return self.rules.get(name)

    def names(self) -> list[str]:
        return list(self.rules)

    def referrers(self, name: str) -> list[str]:
        """Rules referencing *name*, in the order the references were met."""
        if name not in self.digraph:
            return []
        return list(self.digraph.predecessors(name))

    def references(self, name: str) -> list[str]:
        if name not in self.digraph:
            return []
        return list(self.digraph.successors(name))

    def unused(self) -> list[str]:
        """Rules nobody references: the roots (and dead rules) of the grammar."""
        return [name for name in self.rules if self.digraph.in_degree(name) == 0]

    def reachable(self, root: str) -> set[str]:
        """Every rule reachable from *root* through references, *root* included."""
        if root not in self.digraph:
            return set()
        return nx.descendants(self.digraph, root) | {root}

    def is_recursive(self, name: str) -> bool:
        """True if *name* can reach itself through references."""
        if name not in self.digraph:
            return False
        return any(nx.has_path(self.digraph, succ, name) for succ in self.digraph.successors(name))

    def cycles(self) -> list[list[str]]:
        return [list(c) for c in nx.simple_cycles(self.digraph)]


@dataclass
class ValidationResult:
    rules: RuleSet | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.rules is not None


class _Abort(Exception):
    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic


def _dump(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


class _Validator:
    """Single validation pass over a raw rule mapping."""

    def __init__(self, raw: Mapping[str, Any], delist: bool) -> None:
        self.raw = raw
        self.delist = delist
        self.digraph: nx.DiGraph = nx.DiGraph()
        self.digraph.add_nodes_from(raw)

    def fail(self, rule: str, message: str, severity: Severity = Severity.Error) -> NoReturn:
        raise _Abort(Diagnostic(severity, rule, message))

    # ── References ───────────────────────────────────────────────────────────

    def reference(self, name: str, tag: str, target: str) -> str:
        if target not in self.raw:
            self.fail(name, f"{tag} has unknown rule: '{target}'", Severity.Warning)
        self.digraph.add_edge(name, target)
        return target

    def child(self, name: str, tag: str, value: Any, index: int | None = None) -> Child:
        if isinstance(value, str):
            return self.reference(name, tag, value)
        if isinstance(value, Mapping):
            return self.node(name, value, top=False)
        if index is None:
            self.fail(name, f"{tag} has bad value: {_dump(value)}")
        self.fail(name, f"{tag} has bad element {index}: {_dump(value)}")

    def children(self, name: str, tag: str, value: Any) -> list[Child]:
        if not isinstance(value, list):
            self.fail(name, f"{tag} expected to be an array")
        return [self.child(name, tag, v, i) for i, v in enumerate(value)]

    # ── Nodes ────────────────────────────────────────────────────────────────

    def node(self, name: str, src: Any, top: bool) -> Node:
        if not isinstance(src, Mapping):
            self.fail(name, f"is invalid object: {_dump(src)}")
        tags = [k for k in src if k not in METADATA_KEYS]
        if not tags:
            self.fail(name, f"is invalid object: {_dump(src)}")
        if len(tags) > 1:
            self.fail(name, f"has more than one tag: {_dump(tags)}")
        tag = tags[0]
        kind = NodeKind.from_tag(tag)
        if kind is None:
            self.fail(name, f"has invalid tag: {_dump(tag)}")
        value = src[tag]

        if kind in (NodeKind.Token, NodeKind.Terminal, NodeKind.Alias, NodeKind.Rule):
            if not isinstance(value, str):
                self.fail(name, f"{tag} has bad value: {_dump(value)}")
            leaf = {NodeKind.Token: Token, NodeKind.Terminal: Terminal, NodeKind.Alias: Alias, NodeKind.Rule: RuleLabel}
            return leaf[kind](value)
        if kind == NodeKind.Tokens:
            if not isinstance(value, list):
                self.fail(name, f"{tag} expected to be an array")
            for i, text in enumerate(value):
                if not isinstance(text, str):
                    self.fail(name, f"{tag} has bad element {i}: {_dump(text)}")
            return Tokens(list(value))
        if kind == NodeKind.Sequence:
            return Sequence(self.children(name, tag, value))
        if kind == NodeKind.Choice:
            return Choice(self.children(name, tag, value))
        if kind == NodeKind.ZeroOrOne:
            return ZeroOrOne(self.child(name, tag, value))
        if kind == NodeKind.ZeroOrMore:
            return ZeroOrMore(self.child(name, tag, value))
        if kind == NodeKind.OneOrMore:
            return OneOrMore(self.child(name, tag, value))
        return self.list_node(name, tag, value, src, top)

    def list_node(self, name: str, tag: str, value: Any, src: Mapping[str, Any], top: bool) -> Node:
        if not isinstance(value, str):
            self.fail(name, f"{tag} expected to be string")
        if "separator" not in src:
            self.fail(name, f"{tag} is missing separator property")
        if not self.delist:
            separator = self.node(name, src["separator"], top=False)
            return ListOf(self.reference(name, tag, value), separator)
        item = self.reference(name, tag, value)
        if top:
            # item | self separator item
            separator = self.node(name, src["separator"], top=False)
            return Choice([item, Sequence([self.reference(name, tag, name), separator, item])])
        # A nested list has no rule of its own to recurse on
        separator = self.node(name, src["separator"], top=False)
        return Sequence([item, ZeroOrMore(Sequence([separator, item]))])

    # ── Rules ────────────────────────────────────────────────────────────────

    def flag(self, name: str, src: Mapping[str, Any], key: str) -> bool | None:
        value = src.get(key)
        if value is not None and not isinstance(value, bool):
            self.fail(name, f"{key} must be true or false: {_dump(value)}")
        return value

    def margin(self, name: str, src: Mapping[str, Any], key: str) -> float | None:
        value = src.get(key)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            self.fail(name, f"{key} must be a number: {_dump(value)}")
        return float(value)

    def rule(self, name: str, src: Any) -> Rule:
        if not isinstance(name, str):
            self.fail(str(name), "rule name must be a string")
        body = self.node(name, src, top=True)
        inline = self.flag(name, src, "inline")
        if inline is None:
            inline = self.flag(name, src, "collapse")
        if isinstance(body, (Choice, Tokens)):
            inline = False
        railroad = self.flag(name, src, "railroad")
        return Rule(
            name=name,
            body=body,
            inline=inline,
            railroad=railroad is not False,
            left=self.margin(name, src, "left"),
            right=self.margin(name, src, "right"),
        )

    def run(self) -> RuleSet:
        rules = {name: self.rule(name, src) for name, src in self.raw.items()}
        for name, rule in rules.items():
            rule.refs = frozenset(self.digraph.predecessors(name))
        return RuleSet(rules, self.digraph)


def validate(raw_rules: Mapping[str, Any], delist: bool = False) -> ValidationResult:
    """Validate a raw rule mapping.

    Args:
        raw_rules: Rule name to raw node description, in source order.
        delist: Rewrite ``list`` bodies into explicit left-recursive choices.

    Returns:
        A ValidationResult whose ``rules`` is None when any rule is malformed
        or references an unknown rule.
    """
    try:
        rules = _Validator(raw_rules, delist).run()
    except _Abort as e:
        diagnostic = e.diagnostic
        if diagnostic.severity == Severity.Warning:
            logger.warning("%s", diagnostic)
        else:
            logger.error("%s", diagnostic)
        return ValidationResult(rules=None, diagnostics=[diagnostic])
    return ValidationResult(rules=rules)


def construct(
    base: Mapping[str, Any],
    variation: Mapping[str, Any] | None = None,
    delist: bool = False,
) -> RuleSet | None:
    """Apply *variation* to *base* and validate; None means "render nothing"."""
    return validate(apply_variation(base, variation), delist).rules
