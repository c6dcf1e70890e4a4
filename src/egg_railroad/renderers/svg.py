"""SvgCanvas: vector primitives for railroad diagrams.

Every method appends one or more SVG elements; no layout decisions are
made here. Colours come from the Theme: tracks use the ``track`` hue, boxes
the hue of their shape.
"""

from __future__ import annotations

import logging

from egg_railroad.config import Theme
from egg_railroad.layout.types import END_CAP_RADIUS, FONT_RATIO, STROKE_WIDTH
from egg_railroad.renderers.markup import element, escape, number
from egg_railroad.types import BoxShape

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Arc endpoints relative to the start point, in radii, and the sweep flag
_ARCS: dict[str, tuple[int, float, float]] = {
    "wn": (1, -1, -1),
    "we": (1, 0, -2),
    "ws": (0, -1, 1),
    "en": (0, 1, -1),
    "ew": (1, 0, 2),
    "es": (1, 1, 1),
    "ne": (1, 1, -1),
    "se": (0, 1, 1),
}


class SvgCanvas:
    """An ordered list of SVG elements in diagram coordinates."""

    def __init__(self, theme: Theme | None = None) -> None:
        self.theme = theme or Theme()
        self.parts: list[str] = []

    def _track(self) -> dict[str, object]:
        return {"stroke": self.theme.stroke("track"), "stroke-width": STROKE_WIDTH}

    def line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        attrs = {"x1": x0, "y1": y0, "x2": x1, "y2": y1, **self._track(), "stroke-linecap": "square", "fill": "none"}
        self.parts.append(element("line", attrs))

    def circle(self, x: float, y: float, r: float = END_CAP_RADIUS) -> None:
        self.parts.append(element("ellipse", {"cx": x, "cy": y, "rx": r, "ry": r, **self._track(), "fill": "none"}))

    def rounded(self, x: float, y: float, w: float, h: float, r: float, fill: str) -> None:
        attrs = {"x": x, "y": y, "width": w, "height": h, "fill": fill, "stroke": "none", "rx": r, "ry": r}
        self.parts.append(element("rect", attrs))

    def arc(self, x: float, y: float, r: float, direction: str) -> None:
        """Quarter (or half, for 'we'/'ew') circle leaving (x, y) in *direction*."""
        if direction not in _ARCS:
            logger.error("Unknown railroad node arc direction: %s", direction)
            return
        sweep, dx, dy = _ARCS[direction]
        path = ["M", x, y, "A", r, r, 0, 0, sweep, x + dx * r, y + dy * r]
        d = " ".join(number(p) if not isinstance(p, str) else p for p in path)
        attrs = {"d": d, **self._track(), "stroke-linecap": "square", "fill": "none"}
        self.parts.append(element("path", attrs))

    def text(self, x: float, y: float, content: str, size: float, fill: str, **style: str) -> None:
        attrs: dict[str, object] = {"x": x, "y": y, "font-family": "monospace", "font-size": size}
        attrs.update({key.replace("_", "-"): value for key, value in style.items()})
        attrs["fill"] = fill
        self.parts.append(element("text", attrs, escape(content)))

    def box(self, x: float, y: float, w: float, h: float, text: str, shape: BoxShape) -> None:
        """A labelled leaf box centred vertically on the track at *y*."""
        theme = self.theme
        style = "italic"
        y -= h * 0.5
        stroke_width = STROKE_WIDTH
        if shape == BoxShape.Rule:
            attrs = {"x": x, "y": y, "width": w, "height": h, "fill": theme.fill("rule"),
                     "stroke": theme.stroke("rule"), "stroke-width": stroke_width, "rx": 0.4, "ry": 0.4}
            self.parts.append(element("rect", attrs))
        elif shape == BoxShape.Token:
            style = "normal"
            attrs = {"x": x, "y": y, "width": w, "height": h, "fill": theme.fill("token"),
                     "stroke": theme.stroke("token"), "stroke-width": stroke_width}
            self.parts.append(element("rect", attrs))
        elif shape == BoxShape.Terminal:
            dx = h / 3
            points = [
                x, y + h * 0.5,
                x + dx, y,
                x + w - dx, y,
                x + w, y + h * 0.5,
                x + w - dx, y + h,
                x + dx, y + h,
            ]
            attrs = {"points": " ".join(number(p) for p in points), "fill": theme.fill("terminal"),
                     "stroke": theme.stroke("terminal"), "stroke-width": stroke_width}
            self.parts.append(element("polygon", attrs))
        else:
            attrs = {"x": x, "y": y, "width": w, "height": h, "fill": "white", "stroke": "red",
                     "stroke-width": stroke_width}
            self.parts.append(element("rect", attrs))
        font_size = h * FONT_RATIO
        fill = theme.stroke(shape.value) if shape.value in theme.hues else "red"
        self.text(x + w * 0.5, y + font_size, text, font_size, fill,
                  font_weight="bold", font_style=style, text_anchor="middle")

    def loop(self, x0: float, y0: float, x1: float, y1: float, r: float, yline: float | None) -> None:
        """Return path from (x1, y0) back to (x0, y1), plus an optional line at *yline*.

        When the two tracks are closer than two radii the loop is a pair of
        half circles; otherwise it gets vertical risers between quarter arcs.
        """
        if (y1 - r) < (y0 + r + 1e-8):
            self.arc(x0, y1, r, "we")
            self.arc(x1, y0, r, "ew")
        else:
            self.arc(x0, y1, r, "wn")
            self.line(x0 - r, y1 - r, x0 - r, y0 + r)
            self.arc(x0 - r, y0 + r, r, "ne")
            self.arc(x1, y0, r, "es")
            self.line(x1 + r, y0 + r, x1 + r, y1 - r)
            self.arc(x1, y1, r, "en")
        if yline is not None:
            self.line(x0, yline, x1, yline)

    def to_string(self) -> str:
        return "".join(self.parts)


def wrap(content: str, width: float, height: float, scale: float | None = None) -> str:
    """The outer <svg> element around drawn *content* of the given extent."""
    if scale:
        scale *= 1.2
        group = element("g", {"transform": f"scale({number(scale)})"}, content)
        attrs = {"xmlns": SVG_NAMESPACE, "version": "1.1", "width": width * scale, "height": height * scale}
        return element("svg", attrs, group)
    viewbox = " ".join(number(v) for v in (0, 0, width, height))
    return element("svg", {"xmlns": SVG_NAMESPACE, "version": "1.1", "viewBox": viewbox}, content)
