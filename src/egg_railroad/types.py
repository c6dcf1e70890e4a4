"""Shared type definitions for egg-railroad.

Enums shared by the grammar model and the diagram layout.
"""

from __future__ import annotations

from enum import Enum


class NodeKind(Enum):
    """Tags of the raw grammar description (the JSON key of each node)."""

    Token = "token"  # {"token": "if"}
    Terminal = "terminal"  # {"terminal": "digit"}
    Alias = "alias"  # {"alias": "identifier"}
    Rule = "rule"  # {"rule": "name"}, a label, not a reference
    Tokens = "tokens"  # {"tokens": ["+", "-"]}
    Sequence = "sequence"
    Choice = "choice"
    List = "list"  # {"list": "item", "separator": {...}}
    ZeroOrOne = "zeroOrOne"
    ZeroOrMore = "zeroOrMore"
    OneOrMore = "oneOrMore"

    @classmethod
    def from_tag(cls, tag: str) -> NodeKind | None:
        try:
            return cls(tag)
        except ValueError:
            return None


class LayoutKind(Enum):
    Box = "box"
    Sequence = "sequence"
    Choice = "choice"
    ZeroOrOne = "zeroOrOne"
    ZeroOrMore = "zeroOrMore"
    OneOrMore = "oneOrMore"
    List = "list"
    Definition = "definition"
    Rule = "rule"
    Stack = "stack"


class BoxShape(Enum):
    """Leaf box category; also the key into the theme's hue table."""

    Rule = "rule"
    Token = "token"
    Terminal = "terminal"
    Unknown = "unknown"


# Keys that may sit beside the tag key of a raw node.
METADATA_KEYS: frozenset[str] = frozenset(
    {"name", "refs", "inline", "collapse", "railroad", "separator", "left", "right", "end"}
)
