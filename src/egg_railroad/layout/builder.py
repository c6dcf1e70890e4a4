"""Diagram builder: turns validated rules into railroad layout trees.

A reference to another rule is drawn in one of three ways:

* as a rule box (a leaf naming the rule),
* spliced: the referenced rule's body is drawn in place,
* as a nested definition panel (only with a mega map, see ``MegaMap``).

Rules that are not inline (``inline`` is False, which includes every choice
and tokens rule) are boxes; everything else is spliced. ``railroad: false``
forces a rule inline.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum, auto

from egg_railroad.ir.ruleset import RuleSet
from egg_railroad.layout.types import (
    DEFINITION_MARGIN,
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
    box_width,
)
from egg_railroad.syntax.types import (
    Alias,
    Child,
    Choice,
    ListOf,
    Node,
    OneOrMore,
    Rule,
    RuleLabel,
    Sequence,
    Terminal,
    Token,
    Tokens,
    ZeroOrMore,
    ZeroOrOne,
)
from egg_railroad.types import BoxShape


class Expansion(Enum):
    Definition = auto()  # draw as a nested definition panel
    Box = auto()  # draw as a rule box
    Splice = auto()  # draw the body in place, without a panel


class MegaMap:
    """Which referenced rules become nested definitions in a mega diagram.

    *targets* maps a rule name to the name of the definition it may be
    expanded inside, or to None to splice it without a panel. Rules missing
    from *targets* expand at their first reference anywhere. Every rule is
    expanded at most once per diagram; the first reference met in a
    depth-first, left-to-right walk wins and later ones become boxes.

    The caller's mapping is copied, so one MegaMap serves exactly one render.
    """

    def __init__(self, targets: Mapping[str, str | None] | None = None, root: str = "module") -> None:
        self.targets: dict[str, str | None] = dict(targets or {})
        self.root = root
        # rule name -> context it was expanded in
        self.expanded: dict[str, str | None] = {root: None}

    def claim(self, name: str, context: str | None) -> Expansion:
        if name in self.expanded:
            return Expansion.Box
        if name in self.targets:
            target = self.targets[name]
            if target is None:
                return Expansion.Splice
            if target != context:
                return Expansion.Box
        self.expanded[name] = context
        return Expansion.Definition


def make_box(shape: BoxShape, text: str) -> Box:
    return Box(shape, text, width=box_width(text))


def make_zero_or_more(item: LayoutNode) -> ZeroOrMoreNode:
    # The loop is drawn above the track and read right to left
    if isinstance(item, SequenceNode):
        item.items.reverse()
    return ZeroOrMoreNode(item)


class DiagramBuilder:
    """Builds RuleNode trees for the rules of one rule set."""

    def __init__(self, rules: RuleSet, mega: MegaMap | None = None) -> None:
        self.rules = rules
        self.mega = mega
        self._splicing: list[str] = []

    def inlines(self, rule: Rule) -> bool | None:
        if not rule.railroad:
            return True
        return rule.inline

    def is_diagrammed(self, rule: Rule) -> bool:
        """Whether *rule* gets its own diagram when drawing all rules."""
        if not rule.railroad:
            return False
        if self.inlines(rule) is False:
            return True
        return not rule.refs - {rule.name}  # roots are never inlined

    # ── Public API ───────────────────────────────────────────────────────────

    def build(self, rule: Rule) -> RuleNode:
        return RuleNode(self.definition(rule))

    def build_all(self) -> StackNode:
        return StackNode([self.build(rule) for rule in self.rules if self.is_diagrammed(rule)])

    # ── Expansion ────────────────────────────────────────────────────────────

    def definition(self, rule: Rule) -> DefinitionNode:
        self._splicing.append(rule.name)
        item = self.expand(rule.body, rule.name, rule.name)
        self._splicing.pop()
        return DefinitionNode(
            rule.name,
            item,
            left=rule.left or DEFINITION_MARGIN,
            right=rule.right or DEFINITION_MARGIN,
        )

    def reference(self, name: str, context: str) -> LayoutNode:
        rule = self.rules[name]
        if self.inlines(rule) is False:
            if self.mega is None:
                return make_box(BoxShape.Rule, name)
            claim = self.mega.claim(name, context)
            if claim == Expansion.Definition:
                return self.definition(rule)
            if claim == Expansion.Box:
                return make_box(BoxShape.Rule, name)
        if name in self._splicing:
            return make_box(BoxShape.Rule, name)
        self._splicing.append(name)
        node = self.expand(rule.body, context, name)
        self._splicing.pop()
        return node

    def expand(self, child: Child, context: str, owner: str) -> LayoutNode:
        """Lay out *child* found inside definition *context*, in the body of rule *owner*."""
        if isinstance(child, str):
            return self.reference(child, context)
        node: Node = child
        if isinstance(node, Sequence):
            return SequenceNode([self.expand(x, context, owner) for x in node.items])
        if isinstance(node, Choice):
            return ChoiceNode([self.expand(x, context, owner) for x in node.items])
        if isinstance(node, ZeroOrOne):
            value = self.expand(node.item, context, owner)
            if isinstance(value, ChoiceNode):
                value.optional = True
                return value
            return ZeroOrOneNode(value)
        if isinstance(node, ZeroOrMore):
            value = self.expand(node.item, context, owner)
            if isinstance(value, (SequenceNode, DefinitionNode)):
                return OneOrMoreNode(ZeroOrOneNode(value))
            if isinstance(value, ChoiceNode):
                value.optional = True
                return OneOrMoreNode(value)
            return make_zero_or_more(value)
        if isinstance(node, OneOrMore):
            return OneOrMoreNode(self.expand(node.item, context, owner))
        if isinstance(node, ListOf):
            return ListNode(self.expand(node.item, context, owner), self.expand(node.separator, context, owner))
        if isinstance(node, Tokens):
            return ChoiceNode([make_box(BoxShape.Token, x) for x in node.texts])
        if isinstance(node, Alias):
            # Reads as a lexical category named after the aliasing rule
            return make_box(BoxShape.Terminal, owner)
        if isinstance(node, RuleLabel):
            return make_box(BoxShape.Rule, node.text)
        if isinstance(node, Terminal):
            return make_box(BoxShape.Terminal, node.text)
        if isinstance(node, Token):
            return make_box(BoxShape.Token, node.text)
        return make_box(BoxShape.Unknown, type(node).__name__)
