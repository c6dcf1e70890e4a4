"""Railroad layout engine: measure bottom-up, then draw top-down.

Phases:
  1. ``measure`` fills width/above/below of every layout node from its
     children with a fixed formula per node kind.
  2. ``RailroadLayout.draw`` walks the measured tree with the track position
     (x, y) and available width, emitting primitives onto an SvgCanvas.
"""

from __future__ import annotations

import logging

from egg_railroad.config import Theme
from egg_railroad.layout.types import (
    ARC_RADIUS,
    BOX_HEIGHT,
    DEFINITION_BANNER,
    DEFINITION_FOOTER,
    DEFINITION_FRAME_RADIUS,
    DEFINITION_FRAME_TOP,
    DEFINITION_NAME_BASELINE,
    DEFINITION_NAME_SIZE,
    DEFINITION_NAME_X,
    DEFINITION_PANEL_INSET,
    DEFINITION_TAB_HEIGHT,
    DEFINITION_TAB_RADIUS,
    DEFINITION_TAB_TOP,
    END_CAP_RADIUS,
    Box,
    ChoiceNode,
    DefinitionNode,
    LayoutNode,
    ListNode,
    OneOrMoreNode,
    RuleNode,
    SequenceNode,
    StackNode,
    ZeroOrMoreNode,
    ZeroOrOneNode,
    definition_tab_width,
)
from egg_railroad.renderers.svg import SvgCanvas
from egg_railroad.types import BoxShape

logger = logging.getLogger(__name__)

R = ARC_RADIUS


# ─── Measure ─────────────────────────────────────────────────────────────────


def _measure_stacked(node: ChoiceNode | StackNode) -> None:
    height = 0.0
    node.width = 0.0
    node.above = 0.0
    if isinstance(node, ChoiceNode) and node.optional:
        # the empty bypass track sits on the entry line
        node.above = R
        height = 2 * R
    for item in node.items:
        if height == 0:
            node.width = measure(item)
            node.above = item.above
            height = item.above + item.below
        else:
            node.width = max(node.width, measure(item))
            height += item.above + item.below + node.between
    node.below = height - node.above
    if isinstance(node, ChoiceNode):
        node.width += 4 * R  # fan-out and fan-in arcs


def _measure_sequence(node: SequenceNode) -> None:
    width = 0.0
    node.above = node.below = 0.0
    for i, item in enumerate(node.items):
        if i == 0:
            width = measure(item)
            node.above = item.above
            node.below = item.below
        else:
            width += node.between + measure(item)
            node.above = max(node.above, item.above)
            node.below = max(node.below, item.below)
    node.width = width


def measure(node: LayoutNode) -> float:
    """Fill ``width``, ``above`` and ``below`` of *node* and its subtree; return the width."""
    if isinstance(node, (StackNode, ChoiceNode)):
        _measure_stacked(node)
    elif isinstance(node, SequenceNode):
        _measure_sequence(node)
    elif isinstance(node, ZeroOrOneNode):
        node.width = measure(node.item) + 4 * R
        node.above = R
        node.below = node.item.above + node.item.below + R
    elif isinstance(node, ZeroOrMoreNode):
        node.width = measure(node.item) + 2 * R
        node.above = node.item.above + node.item.below + R
        node.below = R
    elif isinstance(node, OneOrMoreNode):
        node.width = measure(node.item) + 2 * R
        node.above = node.item.above + 1.5 * R
        node.below = node.item.below
    elif isinstance(node, ListNode):
        node.width = max(measure(node.item), measure(node.separator)) + 2 * R
        node.above = node.separator.above + node.separator.below + node.item.above
        node.below = node.item.below
    elif isinstance(node, DefinitionNode):
        node.width = measure(node.item) + node.left + node.right
        node.above = node.item.above + DEFINITION_BANNER
        node.below = node.item.below + DEFINITION_FOOTER
    elif isinstance(node, RuleNode):
        node.width = measure(node.item) + node.end * 2
        node.above = node.item.above
        node.below = node.item.below
    else:
        # leaf box: a single-line track
        node.above = node.above or R
        node.below = node.below or R
    node.measured = True
    return node.width


# ─── Draw ────────────────────────────────────────────────────────────────────


class RailroadLayout:
    """Draws measured layout trees.

    *nested* selects the lighter panel used when definitions are inlined
    into one composite (mega) diagram.
    """

    def __init__(self, theme: Theme | None = None, nested: bool = False) -> None:
        self.theme = theme or Theme()
        self.nested = nested

    def render(self, node: LayoutNode, x: float, y: float) -> SvgCanvas:
        """Measure *node* if needed and draw it with its track entering at (x, y)."""
        if not node.measured:
            measure(node)
        canvas = SvgCanvas(self.theme)
        self.draw(node, x, y, node.width, canvas)
        return canvas

    def draw(self, node: LayoutNode, x: float, y: float, w: float, canvas: SvgCanvas) -> None:
        if isinstance(node, StackNode):
            self._draw_stack(node, x, y, w, canvas)
        elif isinstance(node, SequenceNode):
            for item in node.items:
                self.draw(item, x, y, item.width, canvas)
                x += item.width + node.between
        elif isinstance(node, ChoiceNode):
            self._draw_choice(node, x, y, w, canvas)
        elif isinstance(node, RuleNode):
            canvas.line(x + END_CAP_RADIUS, y, x + node.width - END_CAP_RADIUS, y)
            self.draw(node.item, x + node.end, y, node.width - node.end * 2, canvas)
            canvas.circle(x, y)
            canvas.circle(x + node.width, y)
        elif isinstance(node, DefinitionNode):
            self._draw_definition(node, x, y, canvas)
        elif isinstance(node, ZeroOrOneNode):
            self._draw_zero_or_one(node, x, y, w, canvas)
        elif isinstance(node, ZeroOrMoreNode):
            loop_y = y - node.item.below - R
            canvas.loop(x + R, loop_y, x + w - R, y, R, loop_y)
            self.draw(node.item, x + R, loop_y, node.item.width, canvas)
        elif isinstance(node, OneOrMoreNode):
            loop_y = y - node.item.above - R
            canvas.loop(x + R, loop_y, x + w - R, y, R, loop_y)
            self.draw(node.item, x + R, y, node.item.width, canvas)
        elif isinstance(node, ListNode):
            loop_y = y - node.item.above - R
            canvas.loop(x + R, loop_y, x + w - R, y, R, loop_y)
            self.draw(node.separator, x + (w - node.separator.width) / 2, loop_y, node.separator.width, canvas)
            self.draw(node.item, x + (w - node.item.width) / 2, y, w - 2 * R, canvas)
        elif isinstance(node, Box):
            canvas.box(x, y, node.width, BOX_HEIGHT, node.text, node.shape)
        else:
            logger.error("Unknown railroad node: %r", node)
            canvas.box(x, y, w or 1.0, BOX_HEIGHT, "unknown", BoxShape.Unknown)

    def _draw_stack(self, node: StackNode, x: float, y: float, w: float, canvas: SvgCanvas) -> None:
        if not node.items:
            return
        y -= node.items[0].above
        for item in node.items:
            y += item.above
            self.draw(item, x, y, w, canvas)
            y += item.below + node.between

    def _draw_choice(self, node: ChoiceNode, x: float, y: float, w: float, canvas: SvgCanvas) -> None:
        joint: float | None = None
        canvas.arc(x, y, R, "es")
        canvas.arc(x + w, y, R, "ws")
        if node.optional:
            y += R
            joint = y
        for item in node.items:
            if joint is None:
                # first branch runs straight through on the entry track
                joint = y + R
            else:
                y += item.above
                canvas.line(x + R, joint, x + R, y - R)
                canvas.arc(x + R, y - R, R, "se")
                canvas.arc(x + w - 2 * R, y, R, "en")
                canvas.line(x + w - R, joint, x + w - R, y - R)
                joint = y - R
                canvas.line(x + 2 * R, y, x + w - 2 * R, y)
            self.draw(item, x + 2 * R, y, w - 4 * R, canvas)
            y += item.below + node.between

    def _draw_definition(self, node: DefinitionNode, x: float, y: float, canvas: SvgCanvas) -> None:
        theme = self.theme
        frame = theme.hsl("definition", theme.definition_frame)
        panel = theme.hsl("definition", theme.definition_panel_mega if self.nested else theme.definition_panel)
        top = y - node.above
        height = node.above + node.below
        inset = DEFINITION_PANEL_INSET
        frame_top = top + DEFINITION_FRAME_TOP
        frame_height = height - DEFINITION_FRAME_TOP
        canvas.rounded(x, top + DEFINITION_TAB_TOP, definition_tab_width(node.name), DEFINITION_TAB_HEIGHT,
                       DEFINITION_TAB_RADIUS, frame)
        canvas.rounded(x, frame_top, node.width, frame_height, DEFINITION_FRAME_RADIUS, frame)
        canvas.rounded(x + inset, frame_top + inset, node.width - 2 * inset, frame_height - 2 * inset, inset, panel)
        canvas.text(x + DEFINITION_NAME_X, top + DEFINITION_NAME_BASELINE, node.name, DEFINITION_NAME_SIZE,
                    theme.stroke("definition"), font_style="italic", text_anchor="left")
        canvas.line(x, y, x + node.width, y)
        self.draw(node.item, x + node.left, y, node.width - node.left - node.right, canvas)

    def _draw_zero_or_one(self, node: ZeroOrOneNode, x: float, y: float, w: float, canvas: SvgCanvas) -> None:
        item = node.item
        lower = y + item.above + R
        canvas.line(x + 2 * R, lower, x + w - 2 * R, lower)
        canvas.arc(x, y, R, "es")
        canvas.arc(x + R, y + item.above, R, "se")
        canvas.arc(x + item.width + 2 * R, lower, R, "en")
        canvas.arc(x + item.width + 3 * R, y + R, R, "ne")
        if item.above != R:
            canvas.line(x + R, y + R, x + R, y + item.above)
            canvas.line(x + item.width + 3 * R, y + R, x + item.width + 3 * R, y + item.above)
        self.draw(item, x + 2 * R, lower, item.width, canvas)
