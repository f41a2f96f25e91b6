"""Plain-text reader for Typst sources.

:func:`read_text` loads a document without any content normalization.  Newline
characters are preserved exactly as stored on disk so that untouched markup
round-trips byte-for-byte, and a UTF-8 byte-order mark is consumed by the
default ``"utf-8-sig"`` codec.  ``FileNotFoundError`` and other I/O errors
propagate to the caller.  Content that cannot be decoded with the requested
encoding raises :class:`~scrambler.utils.errors.IOFormatError`.
"""

from __future__ import annotations

import os

from scrambler.utils.errors import IOFormatError

PathLikeStr = os.PathLike[str]


def read_text(
    path: str | PathLikeStr,
    *,
    encoding: str = "utf-8-sig",
    errors: str = "strict",
) -> str:
    """Read a source file as-is.

    Parameters
    ----------
    path:
        Path to the file on disk.
    encoding:
        Text encoding to use.  Defaults to ``"utf-8-sig"``.
    errors:
        Error handling strategy passed to :func:`open`.
    """

    with open(path, "r", encoding=encoding, errors=errors, newline="") as f:
        try:
            return f.read()
        except UnicodeDecodeError as exc:
            raise IOFormatError(f"{path}: not valid {encoding} text ({exc.reason})") from exc


__all__ = ["read_text"]
