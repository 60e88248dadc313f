"""
Bottom-up algebraic simplification of expression trees.

Operator subtrees are simplified children first. Once both children of an
operator are leaves, the operator collapses to a single leaf:

    Constant folding (both operands numeric):
        (3 + 4)  -> 7          number operand

    Symbolic rules (at least one operand is a variable):
        0 + e -> e     e + 0 -> e     a + b -> (a+b)
        0 * e -> 0     e * 0 -> 0     1 * e -> e     e * 1 -> e     a * b -> (a*b)
        e - e -> 0     0 - e -> (-e)  e - 0 -> e     a - b -> (a-b)

Symbolic results are variable operands, including the literal "0".
No other patterns are recognized.

Tracing:
    trace = SimplifyTrace()
    result = simplify(root, trace)
    print(trace.format("rules"))   # fold -> add-zero-right
"""

import logging
import operator
from typing import Callable, Dict, List, Optional, Tuple

from .node import NodeType, TreeNode, leaf
from .renderer import to_string
from .tokens import is_number

logger = logging.getLogger(__name__)

# Symbolic rule: (left text, right text) -> (rule name, result text)
SymbolicRule = Callable[[str, str], Tuple[str, str]]


# ============================================================
# Trace
# ============================================================

class SimplifyStep:
    """A single rewrite: one operator collapsed to a leaf."""

    def __init__(self, rule: str, before: TreeNode, after: TreeNode):
        self.rule = rule
        self.before = before
        self.after = after

    def __repr__(self) -> str:
        return f"{self.rule}: {to_string(self.before)} -> {to_string(self.after)}"

    def to_dict(self) -> Dict:
        """Convert step to dictionary for serialization."""
        return {
            "rule": self.rule,
            "before": to_string(self.before),
            "after": to_string(self.after),
            "after_type": self.after.type.value,
        }


class SimplifyTrace:
    """
    Record of the rewrites performed by simplify(), in application order.

    Formatting options:
        - format("verbose"): numbered list of steps (default)
        - format("compact"): single line, initial --[rules]--> final
        - format("rules"): just the rule names
    """

    def __init__(self):
        self.steps: List[SimplifyStep] = []
        self.initial: Optional[TreeNode] = None
        self.final: Optional[TreeNode] = None

    def add_step(self, step: SimplifyStep):
        self.steps.append(step)

    def format(self, style: str = "verbose") -> str:
        if style == "compact":
            return (f"{_render(self.initial)} --[{', '.join(self.rules_applied())}]--> "
                    f"{_render(self.final)}")

        elif style == "rules":
            rules = self.rules_applied()
            return " -> ".join(rules) if rules else "(no rules applied)"

        else:  # verbose (default)
            return repr(self)

    def __repr__(self) -> str:
        lines = [f"Initial: {_render(self.initial)}"]
        for i, step in enumerate(self.steps, 1):
            lines.append(f"  {i}. {step}")
        lines.append(f"Final: {_render(self.final)}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __bool__(self) -> bool:
        """True if any rewriting was done."""
        return len(self.steps) > 0

    def rules_applied(self) -> List[str]:
        """Get list of rule names in order of application."""
        return [step.rule for step in self.steps]

    def rule_counts(self) -> Dict[str, int]:
        """Count how many times each rule was applied."""
        counts: Dict[str, int] = {}
        for step in self.steps:
            counts[step.rule] = counts.get(step.rule, 0) + 1
        return counts

    def to_dict(self) -> Dict:
        """Convert trace to dictionary for JSON serialization."""
        return {
            "initial": _render(self.initial),
            "final": _render(self.final),
            "steps": [step.to_dict() for step in self.steps],
            "step_count": len(self.steps),
        }


def _render(node: Optional[TreeNode]) -> str:
    return to_string(node) if node is not None else ""


# ============================================================
# Rules
# ============================================================

FOLD_FUNCS: Dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
}


def _simplify_add(left: str, right: str) -> Tuple[str, str]:
    if left == "0":
        return "add-zero-left", right
    if right == "0":
        return "add-zero-right", left
    return "add", "(" + left + "+" + right + ")"


def _simplify_mul(left: str, right: str) -> Tuple[str, str]:
    if left == "0" or right == "0":
        return "mul-zero", "0"
    if left == "1":
        return "mul-one-left", right
    if right == "1":
        return "mul-one-right", left
    return "mul", "(" + left + "*" + right + ")"


def _simplify_sub(left: str, right: str) -> Tuple[str, str]:
    if left == right:
        return "sub-self", "0"
    if left == "0":
        return "sub-from-zero", "(-" + right + ")"
    if right == "0":
        return "sub-zero", left
    return "sub", "(" + left + "-" + right + ")"


SYMBOLIC_RULES: Dict[str, SymbolicRule] = {
    "+": _simplify_add,
    "*": _simplify_mul,
    "-": _simplify_sub,
}


def is_numeric(node: TreeNode) -> bool:
    """
    Check if a leaf takes part in constant folding.

    Number operands always do (a folded result may be negative). A variable
    operand does when its payload is a digit run, e.g. the "0" of x - x.
    """
    return node.is_number() or is_number(node.data)


# ============================================================
# Simplifier
# ============================================================

def simplify(tree: TreeNode, trace: Optional[SimplifyTrace] = None) -> TreeNode:
    """
    Recursively simplify an expression tree.

    The input tree is not modified. A leaf is returned unchanged.

    Args:
        tree: Root of the tree to simplify
        trace: Optional SimplifyTrace that receives every rewrite

    Returns:
        Root of the simplified tree
    """
    if trace is not None and trace.initial is None:
        trace.initial = tree

    result = _simplify_node(tree, trace) if tree.is_operator() else tree

    if trace is not None:
        trace.final = result
    return result


def _simplify_node(tree: TreeNode, trace: Optional[SimplifyTrace]) -> TreeNode:
    assert tree.left is not None and tree.right is not None, \
        f"operator '{tree.data}' must have two children"

    left = tree.left
    if left.is_operator():
        left = _simplify_node(left, trace)
    right = tree.right
    if right.is_operator():
        right = _simplify_node(right, trace)

    if is_numeric(left) and is_numeric(right):
        value = FOLD_FUNCS[tree.data](int(left.data), int(right.data))
        rule = "fold"
        node = leaf(NodeType.NUMBER_OPERAND, str(value))
    else:
        rule, text = SYMBOLIC_RULES[tree.data](left.data, right.data)
        node = leaf(NodeType.VARIABLE_OPERAND, text)

    logger.debug("%s: %s%s%s -> %s", rule, left.data, tree.data, right.data, node.data)
    if trace is not None:
        trace.add_step(SimplifyStep(rule, TreeNode(tree.type, tree.data, left, right), node))
    return node
