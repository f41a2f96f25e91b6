"""Scramble the prose of Typst documents while keeping their markup intact.

The package reads a document, separates prose from markup, code and math,
replaces every prose word with a random substitute and writes the result back
so that the document still compiles and looks roughly the same.
"""

__version__ = "0.3.0"
