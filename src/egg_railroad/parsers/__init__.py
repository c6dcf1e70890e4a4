"""Parser registry: detect the grammar source format and dispatch to the right parser."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

from egg_railroad.parsers.base import GrammarSource, Parser, RawRules, RawVariation
from egg_railroad.parsers.json_grammar import JsonParser, JsonpParser

__all__ = [
    "GrammarSource",
    "RawRules",
    "RawVariation",
    "detect_type",
    "load",
    "load_default",
    "parse",
]


def detect_type(src: str) -> str:
    """Detect the source format. Returns 'json' or 'jsonp'."""
    for line in src.strip().split("\n"):
        line = line.strip()
        if not line or line.startswith("//"):
            continue
        if line.startswith("{"):
            return "json"
        return "jsonp"
    return "json"  # default


_PARSERS: dict[str, type[Parser]] = {
    "json": JsonParser,
    "jsonp": JsonpParser,
}


def parse(src: str) -> GrammarSource:
    """Auto-detect the source format and parse it into a GrammarSource."""
    source_type = detect_type(src)
    parser_cls = _PARSERS.get(source_type)
    if parser_cls is None:
        raise ValueError(f"Unsupported grammar format: {source_type}")
    return parser_cls().parse(src)


def load(path: str | Path) -> GrammarSource:
    """Read and parse a grammar file."""
    return parse(Path(path).read_text(encoding="utf-8"))


def load_default() -> GrammarSource:
    """The Egg grammar bundled with the package."""
    text = resources.files("egg_railroad").joinpath("data/egg.json").read_text(encoding="utf-8")
    return parse(text)
