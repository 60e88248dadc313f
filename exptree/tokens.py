"""
Token classification for postfix expressions.

A postfix expression is a whitespace-separated sequence of tokens. Each
token is one of:

    digit run       3, 42, 007         -> number operand
    identifier      x, rate, x2        -> variable operand
    operator        +  -  *            -> operator

Anything else is an invalid token.
"""

import re
import string
from typing import Iterator, Optional

from .node import NodeType

OPERATORS = ("+", "-", "*")

_LETTERS = frozenset(string.ascii_letters)
_ALNUM = frozenset(string.ascii_letters + string.digits)

# Tokens are separated by ASCII whitespace only
_TOKEN_RE = re.compile(r"[^ \t\n\r\f\v]+")


def is_number(token: str) -> bool:
    """
    Check if a token is a number (a run of ASCII digits).

    Args:
        token: The token to check

    Returns:
        True if token is non-empty and contains only digits
    """
    if not token:
        return False
    return all(c in string.digits for c in token)


def is_variable(token: str) -> bool:
    """
    Check if a token is a variable identifier.

    Args:
        token: The token to check

    Returns:
        True if token is non-empty, starts with a letter, and the rest
        are letters or digits
    """
    if not token or token[0] not in _LETTERS:
        return False
    return all(c in _ALNUM for c in token)


def is_operator(token: str) -> bool:
    """Check if a token is one of the binary operators +, - or *."""
    return token in OPERATORS


def classify(token: str) -> Optional[NodeType]:
    """
    Return the node type a token produces, or None if the token is invalid.

    Examples:
        classify("42")  -> NodeType.NUMBER_OPERAND
        classify("x1")  -> NodeType.VARIABLE_OPERAND
        classify("*")   -> NodeType.OPERATOR
        classify("?")   -> None
    """
    if is_number(token):
        return NodeType.NUMBER_OPERAND
    if is_variable(token):
        return NodeType.VARIABLE_OPERAND
    if is_operator(token):
        return NodeType.OPERATOR
    return None


def tokenize(text: str) -> Iterator[str]:
    """Yield the whitespace-separated tokens of text, one at a time."""
    for match in _TOKEN_RE.finditer(text):
        yield match.group()
