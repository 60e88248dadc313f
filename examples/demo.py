#!/usr/bin/env python3
"""
exptree Feature Demonstration

This script walks through building, rendering and simplifying
postfix expression trees.
"""

from exptree import ExpressionTree, ParseError


def section(title: str):
    """Print a section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def demo_rendering():
    """Demonstrate building and rendering."""
    section("Building and Rendering")

    for postfix in ["3 4 +", "5 2 3 * +", "a b - c d - -"]:
        tree = ExpressionTree.from_postfix(postfix)
        print(f"  {postfix:<16} => {tree}")


def demo_folding():
    """Demonstrate constant folding."""
    section("Constant Folding")

    for postfix in ["3 4 +", "5 2 3 * +", "3 5 - 2 *"]:
        tree = ExpressionTree.from_postfix(postfix)
        print(f"  {str(tree):<16} => {tree.simplify()}")


def demo_identities():
    """Demonstrate the symbolic identities."""
    section("Symbolic Identities")

    for postfix in ["x 0 +", "0 x *", "1 x *", "x x -", "0 x -", "x y +",
                    "x 0 + 2 3 * *"]:
        tree = ExpressionTree.from_postfix(postfix)
        print(f"  {str(tree):<16} => {tree.simplify()}")


def demo_tracing():
    """Demonstrate simplification traces."""
    section("Tracing")

    tree = ExpressionTree.from_postfix("x 0 + 1 * y y - +")
    result, trace = tree.simplify(trace=True)
    print(trace.format("verbose"))
    print()
    print(f"  compact: {trace.format('compact')}")
    print(f"  rules:   {trace.format('rules')}")


def demo_errors():
    """Demonstrate parse errors."""
    section("Parse Errors")

    for postfix in ["3 +", "3 4 ?", "3 4", ""]:
        try:
            ExpressionTree.from_postfix(postfix)
        except ParseError as e:
            print(f"  {postfix!r:<10} {type(e).__name__}: {e}")


def main():
    """Run all demos."""
    print("exptree Feature Demonstration")

    demo_rendering()
    demo_folding()
    demo_identities()
    demo_tracing()
    demo_errors()

    print(f"\n{'='*60}")
    print(" Demo Complete!")
    print('='*60)


if __name__ == "__main__":
    main()
