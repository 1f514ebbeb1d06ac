"""A streaming XML writer with tag name checks and optional compression."""

from __future__ import annotations

import bz2
import gzip
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, TextIO, Union

_ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_ASCII_DIGITS = frozenset("0123456789")
# colons are allowed for primitive namespace support
_TAG_CHARS = _ASCII_LETTERS | _ASCII_DIGITS | frozenset("-_.:")

_ESCAPES = {"<": "&lt;", ">": "&gt;", "&": "&amp;"}


class XmlWriterError(Exception):
    """Raised when the writer is used in a way that yields invalid XML."""


class _Kind(Enum):
    TAG = auto()
    COMMENT = auto()


@dataclass
class _XmlNode:
    kind: _Kind
    name: str
    hanging: bool


def _check_tag_name(tag: str) -> None:
    if not tag or (tag[0] not in _ASCII_LETTERS and tag[0] != "_"):
        raise XmlWriterError(
            "XML elements must start with either a letter or an underscore"
        )
    if tag[:3].lower() == "xml":
        raise XmlWriterError("XML elements cannot start with XML, xml, Xml etc.")
    if any(char not in _TAG_CHARS for char in tag):
        raise XmlWriterError(
            "XML elements can only contain letters, digits, hyphens, "
            "underscores and periods."
        )


def _open_file(path: str) -> TextIO:
    if path.endswith(".gz"):
        return gzip.open(path, "wt", encoding="utf-8")
    if path.endswith(".bz2"):
        return bz2.open(path, "wt", compresslevel=9, encoding="utf-8")
    return open(path, "w", encoding="utf-8")


class XmlWriter:
    """Writes XML to a text stream or a file, element by element.

    A path ending in '.gz' or '.bz2' is written compressed. Files opened
    by the writer are closed by close() or on leaving a with block.
    """

    def __init__(
        self,
        out: Union[TextIO, str, os.PathLike],
        pretty: bool = False,
        indent: int = 4,
    ) -> None:
        if isinstance(out, (str, os.PathLike)):
            self._out: TextIO = _open_file(os.fspath(out))
            self._owns_out = True
        else:
            self._out = out
            self._owns_out = False
        self._pretty = pretty
        self._indent = indent
        self._stack: list[_XmlNode] = []

    def _in_comment(self) -> bool:
        return bool(self._stack) and self._stack[-1].kind is _Kind.COMMENT

    def _do_indent(self) -> None:
        if self._pretty:
            self.put("\n" + " " * (len(self._stack) * self._indent))

    def _close_hanging(self) -> None:
        if self._stack and self._stack[-1].hanging:
            self.put(">")
            self._stack[-1].hanging = False

    def open_tag(self, tag: str, attrs: Optional[Mapping[str, str]] = None) -> None:
        """Open an element; attributes are written in sorted key order."""
        if self._in_comment():
            raise XmlWriterError("Opening tags not allowed while inside comment.")
        _check_tag_name(tag)
        self._close_hanging()
        self._do_indent()

        self.put("<" + tag)
        for key, value in sorted((attrs or {}).items()):
            self.put(" ")
            self.put_escaped(key, '"')
            self.put('="')
            self.put_escaped(value, '"')
            self.put('"')

        self._stack.append(_XmlNode(_Kind.TAG, tag, True))

    def open_comment(self) -> None:
        """Open a comment; does nothing when already inside one."""
        if self._in_comment():
            return
        self._close_hanging()
        self._do_indent()
        self.put("<!-- ")
        self._stack.append(_XmlNode(_Kind.COMMENT, "", False))

    def write_text(self, text: str) -> None:
        """Write escaped text content inside the current element."""
        if not self._stack:
            raise XmlWriterError("Text content not allowed in prolog / trailing.")
        self._close_hanging()
        self._do_indent()
        self.put_escaped(text, " ")

    def close_tag(self) -> None:
        """Close the innermost open element or comment, if any."""
        if not self._stack:
            return
        node = self._stack.pop()
        if node.kind is _Kind.COMMENT:
            self._do_indent()
            self.put(" -->")
        elif node.hanging:
            self.put(" />")
        else:
            self._do_indent()
            self.put(f"</{node.name}>")

    def close_tags(self) -> None:
        """Close everything still open, finishing the document."""
        while self._stack:
            self.close_tag()

    def put_escaped(self, text: str, quote: str) -> None:
        """Write text XML-escaped; inside a comment it is written verbatim.

        The quote character (' or ") is escaped as well.
        """
        if self._in_comment():
            self.put(text)
            return
        parts = []
        for char in text:
            if quote == '"' and char == '"':
                parts.append("&quot;")
            elif quote == "'" and char == "'":
                parts.append("&apos;")
            else:
                parts.append(_ESCAPES.get(char, char))
        self.put("".join(parts))

    def put(self, text: str) -> None:
        """Write text verbatim."""
        self._out.write(text)

    def close(self) -> None:
        """Close the output file if the writer opened it, else flush it."""
        if self._owns_out:
            if not self._out.closed:
                self._out.close()
        else:
            self._out.flush()

    def __enter__(self) -> XmlWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()