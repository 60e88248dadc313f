"""
Build expression trees from postfix (reverse Polish) text.

    build_tree("5 2 3 * +")

    ->      +
           / \\
          5   *
             / \\
            2   3

The builder keeps a LIFO stack of nodes. Operands are pushed as leaves;
an operator pops its right operand, then its left operand, and pushes a
new operator node owning both. On any error the stack is drained before
the error is raised, so a failed build leaves no nodes behind.
"""

import logging
from typing import Optional

from .node import NodeType, TreeNode, leaf
from .tokens import classify, tokenize

logger = logging.getLogger(__name__)


# ============================================================
# Errors
# ============================================================

class ParseError(ValueError):
    """
    Base class for postfix parse errors.

    Attributes:
        token: The offending token, if any
        position: 0-based index of the offending token, if any
    """

    def __init__(self, message: str, token: Optional[str] = None,
                 position: Optional[int] = None):
        super().__init__(message)
        self.token = token
        self.position = position


class InsufficientOperandsError(ParseError):
    """An operator appeared while fewer than two operands were available."""


class InvalidTokenError(ParseError):
    """A token is neither a number, a variable nor an operator."""


class MalformedExpressionError(ParseError):
    """The tokens did not reduce to exactly one expression."""

    def __init__(self, message: str, remaining: int):
        super().__init__(message)
        self.remaining = remaining


# ============================================================
# Builder
# ============================================================

def _drain(stack) -> None:
    """Release every node still on the working stack."""
    while len(stack):
        stack.pop()


def build_tree(postfix: str, stack=None) -> TreeNode:
    """
    Build an expression tree from its postfix representation.

    Args:
        postfix: Whitespace-separated postfix expression, e.g. "3 4 +"
        stack: Optional working stack (anything with append, pop and len).
               Defaults to a new list. It is empty again when an error
               is raised.

    Returns:
        The root node of the new tree

    Raises:
        InsufficientOperandsError: operator with fewer than two operands
        InvalidTokenError: unrecognized token
        MalformedExpressionError: zero or several expressions left over
    """
    if stack is None:
        stack = []

    for position, token in enumerate(tokenize(postfix)):
        node_type = classify(token)

        if node_type is None:
            _drain(stack)
            logger.debug("invalid token %r at position %d", token, position)
            raise InvalidTokenError(
                f"Invalid token '{token}' at position {position}",
                token=token, position=position)

        if node_type != NodeType.OPERATOR:
            stack.append(leaf(node_type, token))
            continue

        if len(stack) < 2:
            available = len(stack)
            _drain(stack)
            logger.debug("operator %r at position %d has %d operand(s)",
                         token, position, available)
            raise InsufficientOperandsError(
                f"Operator '{token}' at position {position} needs 2 operands, "
                f"found {available}",
                token=token, position=position)

        right = stack.pop()
        left = stack.pop()
        stack.append(TreeNode(NodeType.OPERATOR, token, left, right))

    if len(stack) != 1:
        remaining = len(stack)
        _drain(stack)
        logger.debug("postfix %r left %d expression(s) on the stack",
                     postfix, remaining)
        if remaining == 0:
            message = "Empty expression"
        else:
            message = f"Expression has {remaining} operands left without operators"
        raise MalformedExpressionError(message, remaining=remaining)

    return stack.pop()
