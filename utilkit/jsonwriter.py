"""A streaming JSON writer with structural checks."""

from __future__ import annotations

import math
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, TextIO

from utilkit.text import json_string_escape


class WriterError(Exception):
    """Raised when the writer is used in a way that yields invalid JSON."""


class _Kind(Enum):
    OBJ = auto()
    ARR = auto()
    KEY = auto()


@dataclass
class _Frame:
    kind: _Kind
    empty: bool = True


class Writer:
    """Writes JSON to a text stream piece by piece.

    Values are None, bool, int, float, str, lists/tuples and mappings;
    mapping keys are written in sorted order.
    """

    def __init__(
        self, out: TextIO, precision: int = 10, pretty: bool = False, indent: int = 2
    ) -> None:
        self._out = out
        self._precision = precision
        self._pretty = pretty
        self._indent = indent
        self._stack: list[_Frame] = []

    def _top_is(self, kind: _Kind) -> bool:
        return bool(self._stack) and self._stack[-1].kind is kind

    def _prettify(self) -> None:
        if self._pretty:
            self._out.write("\n" + " " * (self._indent * len(self._stack)))

    def _val_check(self) -> None:
        if not (self._top_is(_Kind.KEY) or self._top_is(_Kind.ARR)):
            raise WriterError("Value not allowed here.")
        if self._top_is(_Kind.KEY):
            self._stack.pop()
        if self._top_is(_Kind.ARR):
            if not self._stack[-1].empty:
                self._out.write("," + (" " if self._pretty else ""))
            self._stack[-1].empty = False

    def obj(self) -> None:
        """Open an object."""
        if self._top_is(_Kind.OBJ):
            raise WriterError("Object not allowed as key")
        if self._top_is(_Kind.KEY):
            self._stack.pop()
        if self._top_is(_Kind.ARR):
            self._val_check()
            self._prettify()
        self._out.write("{")
        self._stack.append(_Frame(_Kind.OBJ))

    def arr(self) -> None:
        """Open an array."""
        if self._top_is(_Kind.OBJ):
            raise WriterError("Array not allowed as key")
        if self._top_is(_Kind.KEY):
            self._stack.pop()
        if self._top_is(_Kind.ARR):
            self._val_check()
        self._out.write("[")
        self._stack.append(_Frame(_Kind.ARR))

    def key(self, key: str) -> None:
        """Write a key inside the current object; the key is written as given."""
        if not self._top_is(_Kind.OBJ):
            raise WriterError("Keys only allowed in objects.")
        if not self._stack[-1].empty:
            self._out.write(",")
        self._stack[-1].empty = False
        self._prettify()
        self._out.write(f'"{key}":' + (" " if self._pretty else ""))
        self._stack.append(_Frame(_Kind.KEY))

    def _write_float(self, value: float) -> None:
        if value > sys.float_info.max:
            value = sys.float_info.max
        if math.isnan(value):
            self._out.write("NaN")
        else:
            self._out.write(f"{value:.{self._precision}f}")

    def val(self, value: Any) -> None:
        """Write a value after a key, inside an array, or a container anywhere."""
        if isinstance(value, (list, tuple)):
            self.arr()
            for item in value:
                self.val(item)
            self.close()
            return
        if isinstance(value, Mapping):
            self.obj()
            for k in sorted(value):
                self.key_val(k, value[k])
            self.close()
            return
        if value is not None and not isinstance(value, (bool, int, float, str)):
            raise TypeError(f"cannot write value of type {type(value).__name__}")

        self._val_check()
        if value is None:
            self._out.write("null")
        elif isinstance(value, bool):
            self._out.write("true" if value else "false")
        elif isinstance(value, int):
            self._out.write(str(value))
        elif isinstance(value, float):
            self._write_float(value)
        else:
            self._out.write('"' + json_string_escape(value) + '"')

    def key_val(self, key: str, value: Any) -> None:
        """Write a key followed by its value."""
        self.key(key)
        self.val(value)

    def close(self) -> None:
        """Close the innermost open object or array."""
        if not self._stack:
            return
        kind = self._stack[-1].kind
        if kind is _Kind.KEY:
            raise WriterError("Missing value.")
        self._stack.pop()
        if kind is _Kind.OBJ:
            self._prettify()
            self._out.write("}")
        else:
            self._out.write("]")

    def close_all(self) -> None:
        """Close everything that is still open."""
        while self._stack:
            self.close()