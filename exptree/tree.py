"""
ExpressionTree: a handle on an optional expression tree root.

    tree = ExpressionTree.from_postfix("x 0 + 2 3 * *")
    str(tree)                  # => "(x+0)*(2*3)"
    str(tree.simplify())       # => "(x*6)"

    tree = ExpressionTree()    # empty tree
    tree.build("3 4 +")        # raises ParseError on bad input
"""

from typing import Optional, Tuple, Union

from .builder import build_tree
from .node import TreeNode, same_tree
from .renderer import to_postfix, to_string
from .simplifier import SimplifyTrace, simplify


class ExpressionTree:
    """
    Expression tree built from postfix text.

    An ExpressionTree owns its root node and all of its descendants. The
    empty tree (no root) is the default state.
    """

    def __init__(self, root: Optional[TreeNode] = None):
        self._root = root

    @classmethod
    def from_postfix(cls, postfix: str) -> 'ExpressionTree':
        """Create a tree from its postfix representation."""
        return cls(build_tree(postfix))

    @property
    def root(self) -> Optional[TreeNode]:
        return self._root

    def is_empty(self) -> bool:
        return self._root is None

    def build(self, postfix: str) -> 'ExpressionTree':
        """
        Build the tree from its postfix representation.

        The current root is replaced only when the build succeeds.

        Raises:
            ParseError: If postfix is not a valid expression
        """
        self._root = build_tree(postfix)
        return self

    def simplify(self, trace: bool = False) -> Union['ExpressionTree', Tuple['ExpressionTree', SimplifyTrace]]:
        """
        Return a simplified copy of this tree.

        Args:
            trace: If True, return (tree, SimplifyTrace) instead

        Returns:
            Simplified tree, or (tree, trace) if trace=True
        """
        steps = SimplifyTrace() if trace else None
        if self._root is None:
            result = ExpressionTree()
        else:
            result = ExpressionTree(simplify(self._root, steps))

        if trace:
            return result, steps
        return result

    def to_string(self, need_outer_paren: bool = False) -> str:
        """Infix representation, empty string for the empty tree."""
        if self._root is None:
            return ""
        return to_string(self._root, need_outer_paren)

    def to_postfix(self) -> str:
        """Postfix representation, empty string for the empty tree."""
        if self._root is None:
            return ""
        return to_postfix(self._root)

    def same_tree(self, other: 'ExpressionTree') -> bool:
        """Determine whether two trees represent the same expression."""
        return same_tree(self._root, other._root)

    def __eq__(self, other):
        if isinstance(other, ExpressionTree):
            return self.same_tree(other)
        return NotImplemented

    __hash__ = None

    def __bool__(self) -> bool:
        """True unless the tree is empty."""
        return self._root is not None

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self._root is None:
            return "ExpressionTree()"
        return f"ExpressionTree({self.to_postfix()!r})"
