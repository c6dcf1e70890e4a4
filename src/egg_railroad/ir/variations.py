"""Variation overlays: named views that delete or replace rules of the base grammar."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from egg_railroad.parsers.base import GrammarSource, RawRules


def apply_variation(base: Mapping[str, Any], variation: Mapping[str, Any] | None) -> RawRules:
    """Overlay *variation* onto a shallow copy of *base*.

    A ``None`` value deletes the rule, any other value replaces its body.
    Replacements are not validated here. Replaced rules keep their position
    in the base order; rules that only exist in the variation are appended.
    """
    constructed: RawRules = dict(base)
    for name, body in (variation or {}).items():
        if body is None:
            constructed.pop(name, None)
        else:
            constructed[name] = body
    return constructed


def resolve(source: GrammarSource, name: str | None) -> RawRules:
    """Apply the named variation of *source*; ``None`` yields the base rules."""
    if name is None:
        return apply_variation(source.rules, None)
    if name not in source.variations:
        known = ", ".join(source.variations) or "none"
        raise KeyError(f"Unknown variation '{name}'; known variations: {known}")
    return apply_variation(source.rules, source.variations[name])
