"""
Expression tree nodes.

An expression tree is a strict binary tree:

    - operand nodes (numbers and variables) are leaves
    - operator nodes hold exactly two children

Every node is owned by exactly one parent. There is no sharing between
trees and no back-references, so dropping the root releases the whole tree.
"""

from enum import Enum
from typing import Optional


class NodeType(Enum):
    """Kind of an expression tree node."""
    NUMBER_OPERAND = "number"
    VARIABLE_OPERAND = "variable"
    OPERATOR = "operator"


class TreeNode:
    """
    A node of an expression tree.

    Examples:
        TreeNode(NodeType.NUMBER_OPERAND, "3")
        TreeNode(NodeType.OPERATOR, "+",
                 TreeNode(NodeType.VARIABLE_OPERAND, "x"),
                 TreeNode(NodeType.NUMBER_OPERAND, "1"))
    """

    __slots__ = ('type', 'data', 'left', 'right')

    def __init__(self, node_type: NodeType, data: str,
                 left: Optional['TreeNode'] = None,
                 right: Optional['TreeNode'] = None):
        self.type = node_type
        self.data = data
        self.left = left
        self.right = right

    def is_number(self) -> bool:
        return self.type == NodeType.NUMBER_OPERAND

    def is_variable(self) -> bool:
        return self.type == NodeType.VARIABLE_OPERAND

    def is_operator(self) -> bool:
        return self.type == NodeType.OPERATOR

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __eq__(self, other):
        if isinstance(other, TreeNode):
            return same_tree(self, other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        if self.is_leaf():
            return f"TreeNode({self.type.name}, {self.data!r})"
        return (f"TreeNode({self.type.name}, {self.data!r}, "
                f"{self.left!r}, {self.right!r})")


def leaf(node_type: NodeType, data: str) -> TreeNode:
    """Create an operand (leaf) node."""
    return TreeNode(node_type, data)


def same_tree(tree1: Optional[TreeNode], tree2: Optional[TreeNode]) -> bool:
    """
    Determine whether two tree structures represent the same expression.

    Two empty subtrees are equal. Otherwise the node types and payloads
    must match and both pairs of children must be the same tree.

    Args:
        tree1: first tree structure
        tree2: second tree structure

    Returns:
        True if same, False otherwise
    """
    if tree1 is None or tree2 is None:
        return tree1 is tree2
    if tree1 is tree2:
        return True
    if tree1.type != tree2.type or tree1.data != tree2.data:
        return False
    return same_tree(tree1.left, tree2.left) and same_tree(tree1.right, tree2.right)
