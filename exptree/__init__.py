"""
exptree - postfix expression trees

Builds binary expression trees from postfix (reverse Polish) text,
simplifies them with a fixed set of algebraic rules, and renders them
back to infix.

Quick Start:
    from exptree import ExpressionTree

    tree = ExpressionTree.from_postfix("5 2 3 * +")
    str(tree)               # => "5+(2*3)"
    str(tree.simplify())    # => "11"

    tree = ExpressionTree.from_postfix("x 0 + 1 *")
    str(tree.simplify())    # => "x"

Token Syntax:
    42                - number operand (digit run)
    x, rate2          - variable operand (letter, then letters/digits)
    +  -  *           - binary operators

Simplification Rules:
    c1 op c2          - constant folding
    0 + e, e + 0      - e
    0 * e, e * 0      - 0
    1 * e, e * 1      - e
    e - e             - 0
    0 - e             - (-e)
    e - 0             - e
"""

__version__ = "0.1.0"

from .node import NodeType, TreeNode, same_tree
from .tokens import (
    OPERATORS,
    is_number,
    is_variable,
    is_operator,
    classify,
    tokenize,
)
from .builder import (
    build_tree,
    ParseError,
    InsufficientOperandsError,
    InvalidTokenError,
    MalformedExpressionError,
)
from .simplifier import (
    simplify,
    SimplifyStep,
    SimplifyTrace,
    FOLD_FUNCS,
    SYMBOLIC_RULES,
)
from .renderer import to_string, to_postfix
from .tree import ExpressionTree

# Public API
__all__ = [
    # Version
    "__version__",
    # Nodes
    "NodeType",
    "TreeNode",
    "same_tree",
    # Tokens
    "OPERATORS",
    "is_number",
    "is_variable",
    "is_operator",
    "classify",
    "tokenize",
    # Builder
    "build_tree",
    "ParseError",
    "InsufficientOperandsError",
    "InvalidTokenError",
    "MalformedExpressionError",
    # Simplifier
    "simplify",
    "SimplifyStep",
    "SimplifyTrace",
    "FOLD_FUNCS",
    "SYMBOLIC_RULES",
    # Renderer
    "to_string",
    "to_postfix",
    # Tree
    "ExpressionTree",
]
