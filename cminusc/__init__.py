"""Intermediate-code generation for C-minus: symbols, syntax trees, quadruples and temporaries."""

__version__ = "0.1.0"

__all__ = [
    "cgen",
    "expressions",
    "includes",
    "ir",
    "symtab",
    "temporaries",
    "tiny_scan",
    "tree",
]