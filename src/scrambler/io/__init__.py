"""Reading and writing Typst sources.

A Typst document is plain text whatever its file name, so any path is
accepted.  Sources are read and written without newline translation.
"""

from .readers.txt_reader import read_text
from .writers.txt_writer import write_text

__all__ = ["read_text", "write_text"]
