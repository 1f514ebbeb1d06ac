import bz2
import gzip
import io
import xml.etree.ElementTree as ET

import pytest

from utilkit.xmlwriter import XmlWriter, XmlWriterError


def _writer(pretty=False, indent=4):
    buf = io.StringIO()
    return buf, XmlWriter(buf, pretty, indent)


def test_empty_tag_self_closes():
    buf, w = _writer()
    w.open_tag("a")
    w.close_tag()
    assert buf.getvalue() == "<a />"


def test_nested_structure_parses():
    buf, w = _writer()
    w.open_tag("root", {"id": "1", "name": "top"})
    w.open_tag("child")
    w.write_text("hello")
    w.close_tag()
    w.open_tag("empty")
    w.close_tags()
    root = ET.fromstring(buf.getvalue())
    assert root.tag == "root"
    assert root.attrib == {"id": "1", "name": "top"}
    assert [c.tag for c in root] == ["child", "empty"]
    assert root[0].text == "hello"
    assert len(root[1]) == 0


def test_attributes_written_sorted():
    buf, w = _writer()
    w.open_tag("a", {"z": "1", "b": "2"})
    w.close_tag()
    out = buf.getvalue()
    assert out.index('b="2"') < out.index('z="1"')


def test_text_escaping_round_trip():
    text = 'a<b>&"c\'d'
    buf, w = _writer()
    w.open_tag("t", {"k": 'v"<&>'})
    w.write_text(text)
    w.close_tags()
    root = ET.fromstring(buf.getvalue())
    assert root.text == text
    assert root.attrib["k"] == 'v"<&>'


def test_put_escaped_quote_characters():
    buf, w = _writer()
    w.put_escaped("'", "'")
    assert buf.getvalue() == "&apos;"
    buf2, w2 = _writer()
    w2.put_escaped('"', '"')
    assert buf2.getvalue() == "&quot;"
    buf3, w3 = _writer()
    w3.put_escaped("'\"", " ")
    assert buf3.getvalue() == "'\""


def test_put_writes_verbatim():
    buf, w = _writer()
    w.put("<raw&>")
    assert buf.getvalue() == "<raw&>"


def test_pretty_output():
    buf, w = _writer(pretty=True)
    w.open_tag("a")
    w.open_tag("b")
    w.close_tags()
    assert buf.getvalue() == "\n<a>\n    <b />\n</a>"


def test_pretty_matches_compact_structure():
    def build(w):
        w.open_tag("r", {"x": "y"})
        w.open_tag("c")
        w.open_tag("d")
        w.close_tag()
        w.close_tags()

    compact, wc = _writer()
    build(wc)
    pretty, wp = _writer(pretty=True, indent=2)
    build(wp)
    assert "".join(pretty.getvalue().split()) == "".join(compact.getvalue().split())
    r = ET.fromstring(pretty.getvalue().strip())
    assert r.attrib == {"x": "y"}
    assert r[0][0].tag == "d"


def test_comment_is_verbatim():
    buf, w = _writer()
    w.open_comment()
    w.put_escaped("x<y", " ")
    w.close_tag()
    assert buf.getvalue() == "<!-- x<y -->"


def test_nested_comment_ignored():
    buf, w = _writer()
    w.open_tag("a")
    w.open_comment()
    w.open_comment()
    w.close_tag()
    w.close_tag()
    root = ET.fromstring(buf.getvalue())
    assert root.tag == "a"
    assert buf.getvalue().count("<!--") == 1


def test_open_tag_inside_comment_raises():
    _, w = _writer()
    w.open_comment()
    with pytest.raises(XmlWriterError):
        w.open_tag("a")


@pytest.mark.parametrize("name", ["", "1abc", "xmlfoo", "XmlFoo", "a b", "a/b", "-a"])
def test_invalid_tag_names(name):
    _, w = _writer()
    with pytest.raises(XmlWriterError):
        w.open_tag(name)


def test_text_outside_element_raises():
    _, w = _writer()
    with pytest.raises(XmlWriterError):
        w.write_text("x")


def test_close_on_empty_stack_writes_nothing():
    buf, w = _writer()
    w.close_tag()
    w.close_tags()
    assert buf.getvalue() == ""


def test_plain_file(tmp_path):
    path = tmp_path / "out.xml"
    with XmlWriter(path) as w:
        w.open_tag("doc")
        w.write_text("content")
        w.close_tags()
    assert ET.parse(path).getroot().text == "content"


def test_gzip_file(tmp_path):
    path = tmp_path / "out.xml.gz"
    with XmlWriter(str(path)) as w:
        w.open_tag("doc", {"k": "v"})
        w.close_tags()
    with gzip.open(path, "rt", encoding="utf-8") as f:
        root = ET.fromstring(f.read())
    assert root.attrib == {"k": "v"}


def test_bzip2_file(tmp_path):
    path = tmp_path / "out.xml.bz2"
    with XmlWriter(str(path), pretty=True) as w:
        w.open_tag("doc")
        w.open_tag("item")
        w.close_tags()
    with bz2.open(path, "rt", encoding="utf-8") as f:
        root = ET.fromstring(f.read().strip())
    assert [c.tag for c in root] == ["item"]


def test_close_leaves_foreign_stream_open():
    buf, w = _writer()
    w.open_tag("a")
    w.close_tags()
    w.close()
    assert buf.closed is False
    assert ET.fromstring(buf.getvalue()).tag == "a"


def test_unwritable_path_raises(tmp_path):
    with pytest.raises(OSError):
        XmlWriter(tmp_path / "missing" / "out.xml")