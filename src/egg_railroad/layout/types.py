"""Layout types shared by the diagram builder, the layout engine and the SVG renderer.

Layout nodes form the draw-tree of one railroad diagram. ``measure`` fills
``width``, ``above`` and ``below`` bottom-up: ``above``/``below`` are how far
the node extends above/below the horizontal track it is entered and left on.
All lengths are in grid units.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from egg_railroad.types import BoxShape, LayoutKind

# ─── Geometry constants ──────────────────────────────────────────────────────

ARC_RADIUS: float = 0.5
BOX_HEIGHT: float = 0.8
FONT_RATIO: float = 0.7  # font size relative to BOX_HEIGHT
CHAR_WIDTH: float = 0.3
BOX_PADDING: float = 1.0
SEQUENCE_GAP: float = 0.5
CHOICE_GAP: float = 0.2
STACK_GAP: float = 1.0
RULE_END: float = 0.5
END_CAP_RADIUS: float = 0.2
DEFINITION_MARGIN: float = 0.5
DEFINITION_BANNER: float = 2.25
DEFINITION_FOOTER: float = 1.0
# Definition panel: name tab above a frame, with a lighter panel inset in it
DEFINITION_TAB_TOP: float = 0.75  # from the top of the definition
DEFINITION_TAB_HEIGHT: float = 1.5
DEFINITION_TAB_RADIUS: float = 0.25
DEFINITION_TAB_CHAR_WIDTH: float = 0.36
DEFINITION_TAB_PADDING: float = 0.4
DEFINITION_FRAME_TOP: float = 1.5
DEFINITION_FRAME_RADIUS: float = 0.5
DEFINITION_PANEL_INSET: float = 0.25
DEFINITION_NAME_X: float = 0.2
DEFINITION_NAME_BASELINE: float = 1.4
DEFINITION_NAME_SIZE: float = 0.65
STROKE_WIDTH: float = 0.1


def box_width(text: str) -> float:
    return len(text) * CHAR_WIDTH + BOX_PADDING


def definition_tab_width(name: str) -> float:
    return len(name) * DEFINITION_TAB_CHAR_WIDTH + DEFINITION_TAB_PADDING


@dataclass(kw_only=True)
class Extent:
    """Measured geometry, filled in by ``measure``."""

    width: float = 0.0
    above: float = 0.0
    below: float = 0.0
    measured: bool = False


@dataclass
class Box(Extent):
    kind: ClassVar[LayoutKind] = LayoutKind.Box
    shape: BoxShape
    text: str


@dataclass
class SequenceNode(Extent):
    kind: ClassVar[LayoutKind] = LayoutKind.Sequence
    items: list[LayoutNode]
    between: float = SEQUENCE_GAP


@dataclass
class ChoiceNode(Extent):
    kind: ClassVar[LayoutKind] = LayoutKind.Choice
    items: list[LayoutNode]
    between: float = CHOICE_GAP
    optional: bool = False  # adds an empty bypass track above the items


@dataclass
class StackNode(Extent):
    kind: ClassVar[LayoutKind] = LayoutKind.Stack
    items: list[LayoutNode]
    between: float = STACK_GAP


@dataclass
class ZeroOrOneNode(Extent):
    kind: ClassVar[LayoutKind] = LayoutKind.ZeroOrOne
    item: LayoutNode


@dataclass
class ZeroOrMoreNode(Extent):
    kind: ClassVar[LayoutKind] = LayoutKind.ZeroOrMore
    item: LayoutNode


@dataclass
class OneOrMoreNode(Extent):
    kind: ClassVar[LayoutKind] = LayoutKind.OneOrMore
    item: LayoutNode


@dataclass
class ListNode(Extent):
    kind: ClassVar[LayoutKind] = LayoutKind.List
    item: LayoutNode
    separator: LayoutNode


@dataclass
class DefinitionNode(Extent):
    """A named panel: a rule's body under a banner carrying its name."""

    kind: ClassVar[LayoutKind] = LayoutKind.Definition
    name: str
    item: LayoutNode
    left: float = DEFINITION_MARGIN
    right: float = DEFINITION_MARGIN


@dataclass
class RuleNode(Extent):
    """Top-level wrapper adding the start/end stubs of a diagram."""

    kind: ClassVar[LayoutKind] = LayoutKind.Rule
    item: LayoutNode
    end: float = RULE_END


LayoutNode = Union[
    Box,
    SequenceNode,
    ChoiceNode,
    StackNode,
    ZeroOrOneNode,
    ZeroOrMoreNode,
    OneOrMoreNode,
    ListNode,
    DefinitionNode,
    RuleNode,
]


def walk(node: LayoutNode):
    """Yield *node* and all its descendants, depth first."""
    yield node
    for name in ("item", "separator"):
        child = getattr(node, name, None)
        if child is not None:
            yield from walk(child)
    for child in getattr(node, "items", ()):
        yield from walk(child)
