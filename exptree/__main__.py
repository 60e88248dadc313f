"""Allow running exptree as ``python -m exptree``."""

from .cli import main

main()
