"""
Render expression trees as text.

Infix output parenthesizes every operator subexpression except, when the
caller asks for it, the outermost one:

    to_string(build_tree("5 2 3 * +"))         -> "5+(2*3)"
    to_string(build_tree("5 2 3 * +"), True)   -> "(5+(2*3))"

Postfix output is space separated. For a tree made by build_tree() it
parses back to the same tree; simplified leaves such as "(x+y)" do not.
"""

from .node import TreeNode


def to_string(tree: TreeNode, need_outer_paren: bool = False) -> str:
    """
    Produce an infix representation of the tree structure.

    Args:
        tree: Root of the tree to render
        need_outer_paren: Callers generally pass False to drop the outer
                          parentheses; recursive calls pass True.

    Returns:
        Infix string representation
    """
    if not tree.is_operator():
        return tree.data

    s = to_string(tree.left, True) + tree.data + to_string(tree.right, True)
    if need_outer_paren:
        return "(" + s + ")"
    return s


def to_postfix(tree: TreeNode) -> str:
    """Produce a postfix representation of the tree structure."""
    if not tree.is_operator():
        return tree.data
    return " ".join([to_postfix(tree.left), to_postfix(tree.right), tree.data])
