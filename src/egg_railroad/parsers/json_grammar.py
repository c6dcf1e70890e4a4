"""JSON and JSONP grammar description parsers.

Both forms carry a ``rules`` mapping and an optional ``variations`` mapping
of named overlays. The JSONP form is a single ``callback({...});`` call whose
argument must be strict JSON: JavaScript object literals with unquoted keys
or trailing commas are rejected.
"""

from __future__ import annotations

import json
import re
from typing import Any

from egg_railroad.parsers.base import GrammarSource

_LINE_COMMENT_RE = re.compile(r"^\s*//[^\n]*\n?", re.MULTILINE)
_JSONP_RE = re.compile(r"^\s*[A-Za-z_$][\w$.]*\s*\((?P<body>.*)\)\s*;?\s*$", re.DOTALL)


def _check_mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _to_source(data: Any) -> GrammarSource:
    data = _check_mapping(data, "grammar")
    if "rules" not in data:
        # A bare mapping of rules, as used by inline snippet diagrams
        return GrammarSource(rules=data, variations={})
    rules = _check_mapping(data["rules"], "'rules'")
    variations = _check_mapping(data.get("variations") or {}, "'variations'")
    for name, variation in variations.items():
        _check_mapping(variation, f"variation '{name}'")
    return GrammarSource(rules=rules, variations=variations)


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid grammar JSON at line {e.lineno} column {e.colno}: {e.msg}") from e


class JsonParser:
    def parse(self, src: str) -> GrammarSource:
        return _to_source(_loads(src))


class JsonpParser:
    """Unwraps ``callback({...});`` then parses the JSON payload."""

    def parse(self, src: str) -> GrammarSource:
        stripped = _LINE_COMMENT_RE.sub("", src)
        m = _JSONP_RE.match(stripped)
        if m is None:
            raise ValueError("expected a JSONP call of the form 'callback({...});'")
        return _to_source(_loads(m.group("body")))
