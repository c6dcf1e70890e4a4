"""Grammar model: the validated form of an Egg grammar description.

A rule body is one node variant (Token, Terminal, Alias, RuleLabel, Tokens,
Sequence, Choice, ListOf, ZeroOrOne, ZeroOrMore, OneOrMore). Wherever a node
holds "another rule" it holds the rule's name as a plain ``str``; that is a
reference resolved against the owning RuleSet, never ownership.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from egg_railroad.types import NodeKind


@dataclass
class Token:
    kind: ClassVar[NodeKind] = NodeKind.Token
    text: str


@dataclass
class Terminal:
    kind: ClassVar[NodeKind] = NodeKind.Terminal
    text: str


@dataclass
class Alias:
    kind: ClassVar[NodeKind] = NodeKind.Alias
    text: str


@dataclass
class RuleLabel:
    """A rule-styled label that names a rule without referencing it."""

    kind: ClassVar[NodeKind] = NodeKind.Rule
    text: str


@dataclass
class Tokens:
    kind: ClassVar[NodeKind] = NodeKind.Tokens
    texts: list[str]


@dataclass
class Sequence:
    kind: ClassVar[NodeKind] = NodeKind.Sequence
    items: list[Child]


@dataclass
class Choice:
    kind: ClassVar[NodeKind] = NodeKind.Choice
    items: list[Child]


@dataclass
class ListOf:
    kind: ClassVar[NodeKind] = NodeKind.List
    item: str
    separator: Node


@dataclass
class ZeroOrOne:
    kind: ClassVar[NodeKind] = NodeKind.ZeroOrOne
    item: Child


@dataclass
class ZeroOrMore:
    kind: ClassVar[NodeKind] = NodeKind.ZeroOrMore
    item: Child


@dataclass
class OneOrMore:
    kind: ClassVar[NodeKind] = NodeKind.OneOrMore
    item: Child


Node = Union[Token, Terminal, Alias, RuleLabel, Tokens, Sequence, Choice, ListOf, ZeroOrOne, ZeroOrMore, OneOrMore]
Child = Union[Node, str]

# Variants whose single child sits in ``item``.
REPETITIONS: tuple[type, ...] = (ZeroOrOne, ZeroOrMore, OneOrMore)


@dataclass
class Rule:
    """A named production together with its presentation flags."""

    name: str
    body: Node
    inline: bool | None = None  # None: decide from usage
    railroad: bool = True
    left: float | None = None
    right: float | None = None
    refs: frozenset[str] = field(default_factory=frozenset)

    @property
    def kind(self) -> NodeKind:
        return self.body.kind
