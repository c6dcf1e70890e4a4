"""Markup helpers shared by the HTML listing and the SVG emitter."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def number(value: float) -> str:
    """Compact decimal form: 2.0 -> '2', 0.30000000000000004 -> '0.3'."""
    if isinstance(value, int):
        return str(value)
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _attribute(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return number(value)
    return escape(str(value)).replace('"', "&quot;")


def element(name: str, attributes: Mapping[str, Any], content: str | None = None) -> str:
    """Serialise one element; attributes keep their insertion order.

    *content* is inserted verbatim (already escaped or nested markup);
    without content the element is self-closing.
    """
    result = "<" + name
    for key, value in attributes.items():
        result += f' {key}="{_attribute(value)}"'
    if content:
        return result + ">" + content + "</" + name + ">"
    return result + "/>"


def span_rule(name: str) -> str:
    return element("span", {"class": "rule"}, "&lt;" + escape(name) + "&gt;")


def span_token(token: str) -> str:
    return element("span", {"class": "token"}, "'" + escape(token) + "'")


def span_terminal(terminal: str) -> str:
    return element("span", {"class": "terminal"}, "[" + escape(terminal) + "]")
