"""Base parser protocol and the parsed grammar source."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

RawRules = dict[str, Any]
RawVariation = dict[str, Any]


@dataclass
class GrammarSource:
    """A raw grammar description: rules plus named variations, in source order."""

    rules: RawRules = field(default_factory=dict)
    variations: dict[str, RawVariation] = field(default_factory=dict)


class Parser(Protocol):
    """Protocol that all grammar source parsers must implement."""

    def parse(self, src: str) -> GrammarSource:
        """Parse source text into a GrammarSource."""
        ...
