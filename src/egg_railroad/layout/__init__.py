"""Railroad layout: diagram builder, layout-node types and the measure/draw engine."""

from __future__ import annotations

from egg_railroad.layout.builder import DiagramBuilder, Expansion, MegaMap
from egg_railroad.layout.engine import RailroadLayout, measure
from egg_railroad.layout.types import (
    ARC_RADIUS,
    BOX_HEIGHT,
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
    walk,
)

__all__ = [
    "ARC_RADIUS",
    "BOX_HEIGHT",
    "Box",
    "ChoiceNode",
    "DefinitionNode",
    "DiagramBuilder",
    "Expansion",
    "LayoutNode",
    "ListNode",
    "MegaMap",
    "OneOrMoreNode",
    "RailroadLayout",
    "RuleNode",
    "SequenceNode",
    "StackNode",
    "ZeroOrMoreNode",
    "ZeroOrOneNode",
    "measure",
    "walk",
]
