"""SVG railroad diagram renderer."""

from __future__ import annotations

from collections.abc import Mapping

from egg_railroad.config import RenderConfig
from egg_railroad.ir.ruleset import RuleSet
from egg_railroad.layout.builder import DiagramBuilder, MegaMap
from egg_railroad.layout.engine import RailroadLayout, measure
from egg_railroad.layout.types import StackNode
from egg_railroad.renderers.svg import wrap

# Margin around the outermost diagram, in grid units
MARGIN: float = 0.5


class RailroadRenderer:
    """Renders railroad diagrams as an ``<svg>`` fragment."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def render(self, rules: RuleSet) -> str:
        """Every diagrammed rule of *rules*, stacked in rule order."""
        return self._render_stack(DiagramBuilder(rules).build_all(), nested=False)

    def render_rule(self, rules: RuleSet, name: str) -> str:
        """A single rule; references to other rules are drawn as usual."""
        rule = rules.get(name)
        if rule is None:
            return ""
        return self._render_stack(StackNode([DiagramBuilder(rules).build(rule)]), nested=False)

    def render_mega(self, rules: RuleSet, targets: Mapping[str, str | None], root: str = "module") -> str:
        """One composite diagram of *root* with referenced rules inlined as panels."""
        rule = rules.get(root)
        if rule is None:
            return ""
        builder = DiagramBuilder(rules, MegaMap(targets, root=root))
        return self._render_stack(StackNode([builder.build(rule)]), nested=True)

    def _render_stack(self, stack: StackNode, nested: bool) -> str:
        if not stack.items:
            return ""
        measure(stack)
        layout = RailroadLayout(self.config.theme, nested=nested)
        canvas = layout.render(stack, MARGIN, MARGIN + stack.above)
        width = stack.width + 2 * MARGIN
        height = stack.above + stack.below + 2 * MARGIN
        return wrap(canvas.to_string(), width, height, self.config.scale)
