"""Grammar model: node variants and rules."""

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

__all__ = [
    "REPETITIONS",
    "Alias",
    "Child",
    "Choice",
    "ListOf",
    "Node",
    "OneOrMore",
    "Rule",
    "RuleLabel",
    "Sequence",
    "Terminal",
    "Token",
    "Tokens",
    "ZeroOrMore",
    "ZeroOrOne",
]
