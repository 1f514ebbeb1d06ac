# utilkit

A collection of small utilities that need nothing beyond the standard library.

## Modules

- `utilkit.text`: string helpers.
  - Comparison: `strcicmp`, `strncicmp` (ASCII case-insensitive, returning the
    character difference), `ends_with`.
  - Transformation: `url_decode`, `json_string_escape`, `replace_first` and
    `replace_all` (both return `(result, replaced)`), `unix_basename`,
    `to_upper` / `to_lower` (ASCII letters only), `implode`,
    `normalize_whitespace`.
  - Splitting and trimming: `split(text, sep, n=None)`, `ltrim`, `rtrim`,
    `trim`, `tokenize` (runs of alphanumeric characters).
  - Similarity: `edit_dist` (Levenshtein), `prefix_edit_dist`,
    `jaccard_simi` (token sets), `bts_simi` (best token subsequence,
    falling back to Jaccard for more than six tokens).
  - `random_string(n)`, not meant for security purposes.
- `utilkit.nullable`: `Nullable`, a value that may be null. `get()` raises
  `ValueError` when null; comparisons with other `Nullable`s or plain values
  pass through to the held value.
- `utilkit.pqueue`: `PriorityQueue`, a min-heap of `(key, value)` pairs.
  Once `top_key()` or `top_value()` has been read, later pushes with a
  smaller key are raised to that key, so keys come out in non-decreasing order.
- `utilkit.misc`:
  - Numbers: `factorial` and `atoul` (unsigned 64-bit wrap-around),
    `atof(text, max_decimals=38)` for plain decimal strings,
    `is_floating_point`, `format_float` (fixed decimals, trailing zeros
    dropped), `inversions` (count of out-of-order pairs),
    `readable_size` (e.g. `'1.5 kB'`).
  - Files and process: `get_home_dir`, `get_tmp_dir`,
    `get_tmp_fname(directory, name, postfix="")` (the directory `"<tmp>"`
    stands for `get_tmp_dir()`; raises `FileExistsError` if no free name is
    found), `get_peak_rss`, `get_current_rss` (0 where unknown).
  - `SparseMatrix(default)`: stores only set cells; `get`, `set`, `values()`.
  - `Approx(magnitude)`: compares equal to numbers within a small epsilon.
- `utilkit.colors`: `rgb_to_hex`, `hsv_to_rgb`, `norm_html_color` (HTML
  colour names to hex, via `HTML_COLOR_NAMES`), `random_html_color`.
- `utilkit.jsonwriter`: `Writer(out, precision=10, pretty=False, indent=2)`,
  a streaming JSON writer with `obj`, `arr`, `key`, `val`, `key_val`,
  `close` and `close_all`. Misuse raises `WriterError`. `val` accepts
  `None`, `bool`, `int`, `float`, `str`, lists/tuples and mappings (keys
  written sorted). Keys are written as given, without escaping.
- `utilkit.xmlwriter`: `XmlWriter(out, pretty=False, indent=4)`, a streaming
  XML writer with `open_tag`, `open_comment`, `write_text`, `close_tag`,
  `close_tags`, `put` and `put_escaped`. `out` is a text stream or a path;
  paths ending in `.gz` or `.bz2` are written compressed. It is a context
  manager; `close()` closes files it opened. Invalid tag names and misuse
  raise `XmlWriterError`.

## Installation

```
pip install .
```

## Examples

```python
from utilkit.text import edit_dist, split

edit_dist("kitten", "sitting")   # 3
split("a,b,c", ",", 2)           # ['a', 'b,c']
```

```python
import io
from utilkit.jsonwriter import Writer

out = io.StringIO()
w = Writer(out)
w.obj()
w.key_val("name", "value")
w.close_all()
out.getvalue()                   # '{"name":"value"}'
```

```python
import io
from utilkit.xmlwriter import XmlWriter

out = io.StringIO()
w = XmlWriter(out)
w.open_tag("a", {"href": "x"})
w.write_text("1 < 2")
w.close_tags()
out.getvalue()                   # '<a href="x">1 &lt; 2</a>'
```

```python
from utilkit.misc import format_float, readable_size

format_float(1.5, 3)             # '1.5'
readable_size(1536)              # '1.5 kB'
```

## What this package does not do

It is a library only: it has no command-line program and no network server.
It provides no graph data structures or graph algorithms, no thread-safe job
queue and no external (on-disk) sorting.

## Running the tests

```
pip install .[test]
pytest
```