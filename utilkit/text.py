"""String helpers: comparison, escaping, splitting, trimming and similarity."""

from __future__ import annotations

import random
import re
from itertools import combinations, islice, permutations, zip_longest
from typing import Iterable

WHITESPACE = " \t\n\v\f\r"

_RANDOM_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghipqrstuvwxyz"

_UPPER_TABLE = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)
_LOWER_TABLE = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)

_URL_ESCAPE = re.compile(
    rb"%([0-9A-Fa-f]{2}|[ \t\n\v\f\r][0-9A-Fa-f])|\+"
)
_WHITESPACE_RUN = re.compile(r"[ \t\n\v\f\r]+")

_JSON_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _lower_ord(char: str) -> int:
    code = ord(char)
    return code + 32 if 65 <= code <= 90 else code


def _case_insensitive_diff(pairs: Iterable[tuple[str, str]]) -> int:
    for a, b in pairs:
        diff = _lower_ord(a) - _lower_ord(b)
        if diff or a == "\0":
            return diff
    return 0


def strcicmp(left: str, right: str) -> int:
    """Compare case-insensitively (ASCII); 0 if equal, else the char difference."""
    return _case_insensitive_diff(zip_longest(left, right, fillvalue="\0"))


def strncicmp(left: str, right: str, n: int) -> int:
    """Like strcicmp, but compare at most n characters."""
    return _case_insensitive_diff(
        islice(zip_longest(left, right, fillvalue="\0"), n)
    )


def ends_with(text: str, suffix: str) -> bool:
    """Return True if text ends with suffix."""
    return text.endswith(suffix)


def _decode_match(match: re.Match) -> bytes:
    if match.group(0) == b"+":
        return b" "
    return bytes([int(match.group(1).strip(), 16)])


def url_decode(encoded: str) -> str:
    """Decode %XX escapes and '+' as space; malformed escapes are kept."""
    raw = encoded.encode("utf-8", "surrogateescape")
    decoded = _URL_ESCAPE.sub(_decode_match, raw)
    return decoded.decode("utf-8", "surrogateescape")


def json_string_escape(text: str) -> str:
    """Escape text for use inside a JSON string literal."""
    return "".join(
        _JSON_ESCAPES.get(char)
        or (f"\\u{ord(char):04x}" if char <= "\x1f" else char)
        for char in text
    )


def replace_first(subject: str, old: str, new: str) -> tuple[str, bool]:
    """Replace the first occurrence of old; return (result, replaced)."""
    if not old or old not in subject:
        return subject, False
    return subject.replace(old, new, 1), True


def replace_all(subject: str, old: str, new: str) -> tuple[str, bool]:
    """Replace all occurrences of old; return (result, replaced)."""
    if not old or old not in subject:
        return subject, False
    return subject.replace(old, new), True


def unix_basename(pathname: str) -> str:
    """Return everything after the last '/'."""
    return pathname.rpartition("/")[2]


def split(text: str, sep: str, n: int | None = None) -> list[str]:
    """Split text at sep.

    A trailing separator yields no empty last field. With a limit n, the
    n-th field is the next whitespace-delimited word after the first n-1
    fields.
    """
    if n == 0:
        return []
    if n == 1:
        return [text]
    result: list[str] = []
    pos = 0
    while pos < len(text):
        idx = text.find(sep, pos)
        if idx == -1:
            result.append(text[pos:])
            pos = len(text)
        else:
            result.append(text[pos:idx])
            pos = idx + len(sep)
        if n is not None and len(result) + 1 == n:
            words = text[pos:].lstrip(WHITESPACE)
            match = re.match(r"[^ \t\n\v\f\r]*", words)
            result.append(match.group(0))
            return result
    return result


def ltrim(text: str, chars: str = WHITESPACE) -> str:
    """Strip the given characters from the left."""
    return text.lstrip(chars) if chars else text


def rtrim(text: str, chars: str = WHITESPACE) -> str:
    """Strip the given characters from the right."""
    return text.rstrip(chars) if chars else text


def trim(text: str, chars: str = WHITESPACE) -> str:
    """Strip the given characters from both ends."""
    return ltrim(rtrim(text, chars), chars)


def edit_dist(s1: str, s2: str) -> int:
    """Levenshtein distance between s1 and s2."""
    prev = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        cur = [i + 1]
        for j, c2 in enumerate(s2):
            cur.append(min(prev[j + 1] + 1, cur[j] + 1, prev[j] + (c1 != c2)))
        prev = cur
    return prev[-1]


def prefix_edit_dist(prefix: str, s: str, delta_max: int | None = None) -> int:
    """Smallest edit distance between prefix and any prefix of s."""
    if delta_max is None:
        delta_max = len(s)
    target = s[: min(len(s), len(prefix) + delta_max + 1)]
    prev = list(range(len(target) + 1))
    for i, pc in enumerate(prefix, 1):
        cur = [i]
        for j, sc in enumerate(target):
            cur.append(min(prev[j + 1] + 1, cur[j] + 1, prev[j] + (pc != sc)))
        prev = cur
    return min(min(prev), max(delta_max + 1, len(prefix), len(s)))


def to_upper(text: str) -> str:
    """Upper-case ASCII letters only."""
    return text.translate(_UPPER_TABLE)


def to_lower(text: str) -> str:
    """Lower-case ASCII letters only."""
    return text.translate(_LOWER_TABLE)


def implode(items: Iterable[object], delimiter: str) -> str:
    """Join the string forms of items with delimiter."""
    return delimiter.join(str(item) for item in items)


def normalize_whitespace(text: str) -> str:
    """Collapse every run of whitespace into one space."""
    return _WHITESPACE_RUN.sub(" ", text)


def tokenize(text: str) -> list[str]:
    """Split text into runs of alphanumeric characters."""
    tokens: list[str] = []
    current: list[str] = []
    for char in text:
        if char.isalnum():
            current.append(char)
        elif current:
            tokens.append("".join(current))
            current = []
    if current:
        tokens.append("".join(current))
    return tokens


def jaccard_simi(a: str, b: str) -> float:
    """Jaccard similarity of the token sets of a and b."""
    if a == b:
        return 1.0
    set_a, set_b = set(tokenize(a)), set(tokenize(b))
    if not set_a and not set_b:
        return 0.0
    inter = len(set_a & set_b)
    return inter / (len(set_a) + len(set_b) - inter)


def _edit_simi(a: str, b: str) -> float:
    return 1 - edit_dist(a, b) / max(len(a), len(b))


def _bts_simi_inner(tokens: list[str], target: str, best: float) -> float:
    unique = sorted(set(tokens))
    for size in range(1, len(unique) + 1):
        for combo in combinations(unique, size):
            joined_len = sum(len(tok) for tok in combo) + size - 1
            # the edit distance is at least the length difference
            bound = 1 - abs(joined_len - len(target)) / max(joined_len, len(target))
            if bound <= best:
                continue
            for perm in permutations(combo):
                simi = _edit_simi(" ".join(perm), target)
                if abs(simi - 1) < 0.0001:
                    return 1.0
                best = max(best, simi)
    return best


def bts_simi(a: str, b: str) -> float:
    """Best token subsequence similarity between a and b."""
    if a == b:
        return 1.0
    toks_a, toks_b = tokenize(a), tokenize(b)
    if len(toks_a) > 6 or len(toks_b) > 6:
        return jaccard_simi(a, b)
    if len(toks_a) > len(toks_b):
        a, b = b, a
        toks_a, toks_b = toks_b, toks_a
    best = _edit_simi(a, b)
    if abs(best) < 0.0001:
        return 0.0
    best = _bts_simi_inner(toks_a, b, best)
    if abs(best - 1) < 0.0001:
        return 1.0
    return _bts_simi_inner(toks_b, a, best)


def random_string(n: int) -> str:
    """Random string of n characters; not for security purposes."""
    return "".join(random.choices(_RANDOM_CHARS[:-1], k=n))