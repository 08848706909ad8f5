"""Tests for docbot.docs.parser — rustdoc HTML to Document."""

from bs4 import BeautifulSoup

from docbot.docs.builder import build_documentation
from docbot.docs.html import run_to_plain
from docbot.docs.model import (
    BeginStyle,
    Bold,
    CodeBlock,
    EndStyle,
    Link,
    ListBlock,
    Literal,
    Monospaced,
    TableRef,
    TextBlock,
)
from docbot.docs.parser import inline_run, parse_document

STRUCT_PAGE = """
<html><body>
<main><div id="main-content" class="content">
  <div class="main-heading">
    <h1>Struct <a class="struct" href="#">Vec</a><button id="copy-path">Copy item path</button></h1>
    <span class="out-of-band"><a class="src" href="../../src/alloc/vec/mod.rs.html">Source</a></span>
  </div>
  <pre class="rust item-decl"><code>pub struct Vec&lt;T&gt; { /* private fields */ }</code></pre>
  <details class="toggle top-doc" open><summary class="hideme"><span>Expand description</span></summary>
  <div class="docblock">
    <p>A contiguous <strong>growable</strong> array type, written as <code>Vec&lt;T&gt;</code>.</p>
    <h2 id="examples"><a class="doc-anchor" href="#examples">§</a>Examples</h2>
    <div class="example-wrap"><pre class="rust rust-example-rendered"><code>let mut vec = Vec::new();
vec.push(1);</code></pre></div>
    <ul><li>first <em>item</em></li><li>second <a href="struct.String.html">item</a></li></ul>
    <table><tr><td>a</td></tr></table>
  </div>
  </details>
</div></main>
</body></html>
"""

MODULE_PAGE = """
<html><body><main><section id="main-content" class="content">
  <div class="main-heading"><h1>Crate <a class="mod" href="#">serde</a></h1></div>
  <details class="toggle top-doc" open><summary class="hideme"><span>Expand description</span></summary>
  <div class="docblock"><p>Serde is a framework.</p></div></details>
  <h2 id="modules" class="section-header">Modules<a href="#modules" class="anchor">§</a></h2>
  <dl class="item-table">
    <dt><a class="mod" href="de/index.html" title="mod serde::de">de</a></dt>
    <dd>Generic data structure deserialization framework.</dd>
    <dt><a class="mod" href="ser/index.html" title="mod serde::ser">ser</a></dt>
    <dd>Generic data structure serialization framework.</dd>
  </dl>
  <h2 id="macros" class="section-header">Macros<a href="#macros" class="anchor">§</a></h2>
  <ul class="item-table">
    <li><div class="item-name"><a class="macro" href="macro.forward_to_deserialize_any.html">forward_to_deserialize_any</a></div>
        <div class="desc docblock-short">Helper macro.</div></li>
  </ul>
</section></main></body></html>
"""


class TestStructPage:
    def test_title_strips_noise(self):
        doc = parse_document(STRUCT_PAGE)
        assert doc is not None
        assert run_to_plain(doc.title) == "Struct Vec"

    def test_declaration_is_monospaced(self):
        doc = parse_document(STRUCT_PAGE)
        assert doc.declaration[0] == BeginStyle(Monospaced())
        assert doc.declaration[1] == Literal("pub struct Vec<T> { /* private fields */ }")
        assert doc.declaration[-1] == EndStyle()

    def test_description_split_at_headings(self):
        doc = parse_document(STRUCT_PAGE)
        assert len(doc.description) == 2
        intro, examples = doc.description
        assert intro.heading is None
        assert isinstance(intro.contents[0], TextBlock)
        assert run_to_plain(examples.heading) == "Examples"

        kinds = [type(p) for p in examples.contents]
        assert kinds == [CodeBlock, ListBlock, TextBlock]
        assert examples.contents[0].run == [Literal("let mut vec = Vec::new();\nvec.push(1);")]
        assert examples.contents[2].run == [TableRef()]

    def test_inline_styles_mapped(self):
        doc = parse_document(STRUCT_PAGE)
        run = doc.description[0].contents[0].run
        assert BeginStyle(Bold()) in run
        assert BeginStyle(Monospaced()) in run
        items = doc.description[1].contents[1].items
        assert BeginStyle(Link("struct.String.html")) in items[1]

    def test_renders_balanced_pages(self):
        doc = parse_document(STRUCT_PAGE)
        documentation = build_documentation(doc, "https://doc.rust-lang.org/std/vec/struct.Vec.html")
        first = documentation.pages[0].text
        assert first.startswith("Struct <a href=")
        assert "<code>pub struct Vec&lt;T&gt; { /* private fields */ }</code>" in first
        assert "Source" not in first
        second = documentation.pages[1].text
        assert "<b>growable</b>" in second
        assert "<code>Vec&lt;T&gt;</code>" in second


class TestModulePage:
    def test_listings_from_both_table_layouts(self):
        doc = parse_document(MODULE_PAGE)
        assert [run_to_plain(listing.heading) for listing in doc.listings] == ["Modules", "Macros"]

        modules = doc.listings[0].rows
        assert [run_to_plain(row.name) for row in modules] == ["de", "ser"]
        assert run_to_plain(modules[0].summary) == "Generic data structure deserialization framework."

        macros = doc.listings[1].rows
        assert run_to_plain(macros[0].name) == "forward_to_deserialize_any"
        assert run_to_plain(macros[0].summary) == "Helper macro."

    def test_jump_buttons_for_listings(self):
        doc = parse_document(MODULE_PAGE)
        documentation = build_documentation(doc, "https://docs.rs/serde/latest/serde/")
        groups = documentation.pages[0].additionals
        assert [row[0].text for row in groups[0]] == ["Modules", "Macros"]


class TestRejects:
    def test_page_without_main_content(self):
        assert parse_document("<html><body><p>404</p></body></html>") is None

    def test_page_without_title(self):
        assert parse_document('<main><div id="main-content"><p>x</p></div></main>') is None


class TestInlineRun:
    def test_br_and_anchor_without_href(self):
        node = BeautifulSoup("<p>a<br><a name='x'>b</a></p>", "html.parser").p
        assert inline_run(node) == [Literal("a"), Literal("\n"), Literal("b")]
