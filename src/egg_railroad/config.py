"""Centralized configuration for egg-railroad."""

from __future__ import annotations

from dataclasses import dataclass, field


def _default_hues() -> dict[str, int]:
    return {
        "definition": 184,  # azure
        "rule": 30,  # egg
        "track": 132,  # green
        "terminal": 235,  # blue
        "token": 287,  # purple
    }


@dataclass
class Theme:
    """Colour scheme of railroad diagrams: one hue per category.

    Strokes use the hue at ``stroke_lightness`` and fills at
    ``fill_lightness``, so every category reads as one colour family.
    """

    hues: dict[str, int] = field(default_factory=_default_hues)
    stroke_lightness: str = "25%"
    fill_lightness: str = "93%"
    definition_frame: str = "75%"
    definition_panel: str = "95%"
    definition_panel_mega: str = "100%"

    def hsl(self, what: str, lightness: str) -> str:
        return f"hsl({self.hues[what]},100%,{lightness})"

    def stroke(self, what: str) -> str:
        return self.hsl(what, self.stroke_lightness)

    def fill(self, what: str) -> str:
        return self.hsl(what, self.fill_lightness)


@dataclass
class RenderConfig:
    """Configuration for the rendering pipeline."""

    theme: Theme = field(default_factory=Theme)
    scale: float | None = None  # None: emit a viewBox and let the page size it
    collapsed: bool = True
    annotated: bool = False
