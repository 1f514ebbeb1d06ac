"""Assorted numeric, parsing, filesystem and process helpers."""

from __future__ import annotations

import math
import os
import re
import sys
from typing import Generic, Hashable, TypeVar

from utilkit.text import random_string

try:
    import pwd
except ImportError:  # pragma: no cover - not available on every platform
    pwd = None  # type: ignore[assignment]

try:
    import resource
except ImportError:  # pragma: no cover - not available on every platform
    resource = None  # type: ignore[assignment]

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_UINT64_MASK = (1 << 64) - 1
_POW10 = tuple(10**i for i in range(10))
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_SIZE_UNITS = ("B", "kB", "MB", "GB", "TB", "PB")
_TMP_NAME_ATTEMPTS = 10000
_FLOAT32_EPSILON = 1.1920928955078125e-07


class SparseMatrix(Generic[K, V]):
    """A matrix that stores only explicitly set cells."""

    def __init__(self, default: V) -> None:
        self._default = default
        self._cells: dict[tuple[K, K], V] = {}

    def get(self, x: K, y: K) -> V:
        """Return the value at (x, y), or the default if unset."""
        return self._cells.get((x, y), self._default)

    def set(self, x: K, y: K, value: V) -> None:
        self._cells[(x, y)] = value

    def values(self) -> dict[tuple[K, K], V]:
        """Return all set cells, ordered by their coordinates."""
        return dict(sorted(self._cells.items()))


class Approx:
    """A float that compares equal to values within a small epsilon."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, magnitude: float) -> None:
        self._epsilon = _FLOAT32_EPSILON * 100
        self._magnitude = magnitude

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Approx):
            return abs(other._magnitude - self._magnitude) < self._epsilon
        if isinstance(other, (int, float)):
            return abs(other - self._magnitude) < self._epsilon
        return NotImplemented

    def __le__(self, other: float) -> bool:
        return self._magnitude < other or self == other

    def __ge__(self, other: float) -> bool:
        return self._magnitude > other or self == other

    def __repr__(self) -> str:
        return f"~{self._magnitude:g}"


def factorial(n: int) -> int:
    """n! as an unsigned 64-bit value; 1 for n < 2."""
    if n < 2:
        return 1
    return math.factorial(n) & _UINT64_MASK


def atoul(text: str) -> int:
    """Parse a string of decimal digits into an unsigned 64-bit integer, unchecked."""
    result = 0
    for char in text:
        result = (result * 10 + (ord(char) - ord("0"))) & _UINT64_MASK
    return result


def is_floating_point(text: str) -> bool:
    """True if the whole string is a decimal floating point number."""
    return _FLOAT_RE.fullmatch(text) is not None


def format_float(value: float, digits: int) -> str:
    """Format with a fixed number of decimals, then drop trailing zeros."""
    formatted = f"{value:.{digits}f}"
    if formatted.endswith("0") and "." in formatted:
        formatted = formatted.rstrip("0")
        if formatted.endswith("."):
            formatted = formatted[:-1]
    return formatted


def atof(text: str, max_decimals: int = 38) -> float:
    """Fast parse of plain decimal strings like '56.445' or '-345.00'.

    At most max_decimals fractional digits are read; parsing stops at the
    first character that does not fit.
    """
    pos = 0
    length = len(text)
    while pos < length and text[pos].isspace():
        pos += 1

    negative = pos < length and text[pos] == "-"
    if negative:
        pos += 1

    result = 0.0
    while pos < length and "0" <= text[pos] <= "9":
        result = result * 10.0 + (ord(text[pos]) - ord("0"))
        pos += 1

    if pos < length and text[pos] == ".":
        pos += 1
        fraction = 0.0
        count = 0
        while count < max_decimals and pos < length and "0" <= text[pos] <= "9":
            fraction = fraction * 10.0 + (ord(text[pos]) - ord("0"))
            count += 1
            pos += 1
        if count < 10:
            result += fraction / _POW10[count]
        else:
            result += fraction / math.pow(10, count)

    return -result if negative else result


def _sort_counting(values: list) -> tuple[list, int]:
    if len(values) < 2:
        return values, 0
    middle = (len(values) + 1) // 2
    left, left_count = _sort_counting(values[:middle])
    right, right_count = _sort_counting(values[middle:])
    merged = []
    count = left_count + right_count
    li = ri = 0
    while li < len(left) and ri < len(right):
        if left[li] <= right[ri]:
            merged.append(left[li])
            li += 1
        else:
            merged.append(right[ri])
            ri += 1
            # every remaining left element is larger than this right one
            count += len(left) - li
    merged.extend(left[li:])
    merged.extend(right[ri:])
    return merged, count


def inversions(values) -> int:
    """Number of pairs i < j with values[i] > values[j]."""
    return _sort_counting(list(values))[1]


def get_home_dir() -> str:
    """The user's home directory, from HOME or the password database."""
    home = os.environ.get("HOME")
    if home is not None:
        return home
    if pwd is None:
        return ""
    try:
        return pwd.getpwuid(os.getuid()).pw_dir
    except KeyError:
        return ""


def get_tmp_dir() -> str:
    """A writable directory for temporary files."""
    tmpdir = os.environ.get("TMPDIR")
    if tmpdir:
        return tmpdir
    if os.access("/tmp/", os.W_OK):
        return "/tmp"
    if os.access(".", os.W_OK):
        return "."
    return get_home_dir()


def _candidate_name(directory: str, name: str, postfix: str) -> str:
    return f"{directory}{name}{postfix}.{os.getpid()}.{random_string(15)}"


def get_tmp_fname(directory: str, name: str, postfix: str = "") -> str:
    """A path for a new temporary file that does not exist yet.

    The directory "<tmp>" stands for get_tmp_dir(). Raises FileExistsError
    if no free name is found.
    """
    if postfix:
        postfix = "." + postfix
    if directory == "<tmp>":
        directory = get_tmp_dir()
    if directory and not directory.endswith("/"):
        directory += "/"

    path = _candidate_name(directory, name, postfix)
    attempts = 0
    while os.path.exists(path):
        attempts += 1
        if attempts > _TMP_NAME_ATTEMPTS:
            raise FileExistsError("Could not create temporary file!")
        path = _candidate_name(directory, name, postfix)
    return path


def readable_size(size: float) -> str:
    """Human readable byte size, e.g. '1.5 kB'."""
    unit = 0
    while size > 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.{unit}f} {_SIZE_UNITS[unit]}"


def get_peak_rss() -> int:
    """Peak resident set size in bytes, or 0 if unknown."""
    if resource is None:
        return 0
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    if sys.platform == "darwin":
        return int(peak)
    return int(peak) * 1024


def get_current_rss() -> int:
    """Current resident set size in bytes, or 0 if unknown."""
    try:
        with open("/proc/self/statm", encoding="ascii") as statm:
            fields = statm.read().split()
        pages = int(fields[1])
        return pages * os.sysconf("SC_PAGESIZE")
    except (OSError, IndexError, ValueError, AttributeError):
        return 0