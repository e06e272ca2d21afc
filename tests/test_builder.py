"""Tests for tree construction from markup events."""

from bs4 import BeautifulSoup
from readpull.builder import TreeBuilder, decode_html, detect_encoding, feed_html, feed_soup
from readpull.models.config import GroupingConfig
from readpull.scoring import ContentVariety, Node, Text


def find(builder, tag_name):
    """Return the first container with the given tag."""
    return next(node for node in builder.root.iter_nodes() if node.tag_name == tag_name)


class RecordingEvents:
    """Event target that records every call."""

    def __init__(self):
        self.events = []

    def on_open_tag(self, name):
        self.events.append(("open", name))

    def on_attribute(self, name, value):
        self.events.append(("attr", name, value))

    def on_text(self, text):
        self.events.append(("text", text))

    def on_close_tag(self, name):
        self.events.append(("close", name))


class TestTreeBuilder:
    """Tests for TreeBuilder event handling."""

    def test_builds_nested_containers(self):
        """Test that open/text/close events produce the matching tree."""
        builder = TreeBuilder()
        builder.on_open_tag("div")
        builder.on_open_tag("p")
        builder.on_text("Hello")
        builder.on_close_tag("p")
        builder.on_close_tag("div")

        div = builder.root.children[0]
        assert isinstance(div, Node)
        assert div.tag_name == "div"
        paragraph = div.children[0]
        assert paragraph.tag_name == "p"
        assert str(paragraph.children[0]) == "Hello"
        assert builder.current is builder.root

    def test_lowercases_tag_names(self):
        """Test that tag identities are case-insensitive."""
        builder = TreeBuilder()
        builder.on_open_tag("DIV")
        assert builder.current.tag_name == "div"

    def test_hyperlink_variety_is_inherited(self):
        """Test that text under a link counts as hyperlink text."""
        builder = TreeBuilder()
        builder.on_open_tag("a")
        builder.on_open_tag("span")
        builder.on_text("Home")

        span = builder.current
        assert span.of_variety(ContentVariety.HYPERLINK)
        leaf = span.children[0]
        assert leaf.hyperchars == leaf.chars == 4

    def test_bad_tags_are_demoted(self):
        """Test that low-value tags mark their subtree as bad."""
        builder = TreeBuilder()
        builder.on_open_tag("nav")
        builder.on_open_tag("ul")
        assert builder.current.of_variety(ContentVariety.BAD)

    def test_bad_attributes_are_demoted(self):
        """Test that class/id values matching the pattern mark the node as bad."""
        builder = TreeBuilder()
        builder.on_open_tag("div")
        builder.on_attribute("class", "post-sidebar widget")
        sidebar = builder.current
        builder.on_close_tag("div")
        builder.on_open_tag("div")
        builder.on_attribute("id", "content")

        assert sidebar.of_variety(ContentVariety.BAD)
        assert not builder.current.of_variety(ContentVariety.BAD)
        assert builder.current.attributes == {"id": "content"}

    def test_custom_grouping(self):
        """Test that classification tables come from configuration."""
        grouping = GroupingConfig(bad_tags=frozenset({"DIV"}), bad_attribute_pattern="nomatch")
        builder = TreeBuilder(grouping=grouping)
        builder.on_open_tag("div")
        assert builder.current.of_variety(ContentVariety.BAD)

    def test_skipped_content_is_dropped(self):
        """Test that script contents and nested tags never reach the tree."""
        builder = TreeBuilder()
        builder.on_open_tag("p")
        builder.on_open_tag("script")
        builder.on_open_tag("b")
        builder.on_text("var x = 1;")
        builder.on_close_tag("b")
        builder.on_close_tag("script")
        builder.on_text("after")

        paragraph = builder.current
        assert paragraph.tag_name == "p"
        assert len(paragraph.children) == 1
        assert str(paragraph) == "\n\nafter\n\n"

    def test_captures_first_title(self):
        """Test that the document title is captured and not scored."""
        builder = TreeBuilder()
        builder.on_open_tag("head")
        builder.on_open_tag("title")
        builder.on_text("  My \n Page ")
        builder.on_close_tag("title")
        builder.on_close_tag("head")
        builder.on_open_tag("title")
        builder.on_text("Second")
        builder.on_close_tag("title")

        assert builder.title == "My Page"
        assert builder.root.children == []

    def test_no_title(self):
        """Test that pages without a title report None."""
        assert TreeBuilder().title is None

    def test_text_collapses_whitespace_and_merges(self):
        """Test that adjacent text merges into one leaf with collapsed whitespace."""
        builder = TreeBuilder()
        builder.on_open_tag("p")
        builder.on_text("one\n\t two")
        builder.on_text("  three")

        paragraph = builder.current
        assert len(paragraph.children) == 1
        assert str(paragraph.children[0]) == "one two three"

    def test_whitespace_only_text(self):
        """Test that whitespace survives only as a separator after an element."""
        builder = TreeBuilder()
        builder.on_open_tag("div")
        builder.on_text("\n   ")
        builder.on_open_tag("span")
        builder.on_text("a")
        builder.on_close_tag("span")
        builder.on_text("\n  ")
        builder.on_open_tag("span")
        builder.on_text("b")
        builder.on_close_tag("span")

        div = builder.current
        assert [type(child) for child in div.children] == [Node, Text, Node]
        assert str(div) == "\n\na b\n\n"

    def test_unmatched_close_at_root(self):
        """Test that stray closing tags at the root are ignored."""
        builder = TreeBuilder()
        builder.on_close_tag("div")
        assert builder.current is builder.root

    def test_attributes_on_root_are_ignored(self):
        """Test that attributes with no open element are dropped."""
        builder = TreeBuilder()
        builder.on_attribute("class", "sidebar")
        assert builder.root.attributes == {}
        assert not builder.root.of_variety(ContentVariety.BAD)


class TestSoupDriver:
    """Tests for feeding BeautifulSoup documents to a builder."""

    def test_event_order(self):
        """Test open, attribute, text and close ordering."""
        events = RecordingEvents()
        feed_html('<div class="a b" id="x">hi<br>there</div>', events)

        assert events.events == [
            ("open", "div"),
            ("attr", "class", "a b"),
            ("attr", "id", "x"),
            ("text", "hi"),
            ("open", "br"),
            ("close", "br"),
            ("text", "there"),
            ("close", "div"),
        ]

    def test_skips_comments_and_doctype(self):
        """Test that comments and doctypes produce no events."""
        events = RecordingEvents()
        feed_html("<!DOCTYPE html><p><!-- note -->text</p>", events)

        assert events.events == [("open", "p"), ("text", "text"), ("close", "p")]

    def test_void_elements_have_no_children(self):
        """Test that void elements are closed immediately."""
        builder = TreeBuilder()
        feed_html('<p>one<br>two<img src="x.png">three</p>', builder)

        paragraph = find(builder, "p")
        image = find(builder, "img")
        assert len(paragraph.children) == 5
        assert find(builder, "br").children == []
        assert image.children == []
        assert image.attributes == {"src": "x.png"}

    def test_full_page(self):
        """Test building a realistic page."""
        builder = TreeBuilder()
        feed_html(
            b"""<html><head><title> Test  Page </title><style>p { color: red }</style></head>
            <body>
              <nav class="menu"><a href="/">Home</a></nav>
              <article><p>Hello <b>big</b> world</p></article>
              <script>var tracking = true;</script>
            </body></html>""",
            builder,
        )

        assert builder.title == "Test Page"
        tags = {node.tag_name for node in builder.root.iter_nodes()}
        assert {"html", "body", "nav", "a", "article", "p", "b"} <= tags
        assert not tags & {"head", "title", "style", "script"}

        anchor = find(builder, "a")
        assert anchor.of_variety(ContentVariety.HYPERLINK | ContentVariety.BAD)
        assert str(find(builder, "p")) == "\n\nHello big world\n\n"
        assert "tracking" not in str(builder.root)

    def test_feed_soup_subtree(self):
        """Test feeding an already-parsed subtree."""
        soup = BeautifulSoup("<div><section><p>inner</p></section></div>", "html.parser")
        builder = TreeBuilder()
        feed_soup(soup.find("section"), builder)

        paragraph = builder.root.children[0]
        assert paragraph.tag_name == "p"
        assert str(paragraph) == "\n\ninner\n\n"

    def test_deeply_nested_document(self):
        """Test that deep nesting does not exhaust the recursion limit."""
        depth = 1500
        html = "<div>" * depth + "deep" + "</div>" * depth
        events = RecordingEvents()
        feed_html(html, events)

        assert ("text", "deep") in events.events
        assert sum(1 for event in events.events if event[0] == "close") == depth


class TestDecoding:
    """Tests for charset handling."""

    def test_detects_meta_charset(self):
        """Test charset detection from a meta tag."""
        assert detect_encoding(b'<meta charset="iso-8859-1">') == "iso-8859-1"
        assert detect_encoding(b"<p>nothing declared</p>") == "utf-8"

    def test_decodes_declared_charset(self):
        """Test decoding with the declared charset."""
        html = '<meta charset="iso-8859-1"><p>Wörld</p>'.encode("iso-8859-1")
        assert "Wörld" in decode_html(html)

    def test_unknown_charset_falls_back(self):
        """Test that an unknown charset decodes as UTF-8."""
        html = '<meta charset="bogus-charset"><p>Héllo</p>'.encode()
        assert "Héllo" in decode_html(html)

    def test_strings_pass_through(self):
        """Test that decoded strings are returned unchanged."""
        assert decode_html("<p>x</p>") == "<p>x</p>"
