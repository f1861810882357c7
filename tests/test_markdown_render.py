"""
Rendering tests - markdown_toHtml() with and without visitors

Covers the visitor contract (replace / unchanged / suppress), event order,
pass-through of breaks and rules, and the HTML written for common blocks.
"""

import pytest

from zinepress.lib.events import events_iterate, parser_make
from zinepress.lib.markdown import markdown_toHtml, events_filter
from zinepress.lib.visitor import MarkdownVisitor, VisitOutcome, UNCHANGED, SUPPRESS
from zinepress.lib.writer import html_push
from zinepress.models.events import Event, EventKind, LinkType, Tag, TagKind


class NopVisitor(MarkdownVisitor):
    pass


class DummyVisitor(MarkdownVisitor):
    """Drops block quotes, links `@user` code spans"""

    def visit_start_tag(self, tag):
        if tag.kind is TagKind.BLOCK_QUOTE:
            return SUPPRESS
        return UNCHANGED

    def visit_end_tag(self, tag):
        if tag.kind is TagKind.BLOCK_QUOTE:
            return SUPPRESS
        return UNCHANGED

    def visit_code(self, code):
        if code.startswith("@"):
            username = code[1:]
            return VisitOutcome.replace(
                Event.html(f'<a href="https://github.com/{username}">{code}</a>')
            )
        return UNCHANGED


class SuppressAllVisitor(MarkdownVisitor):
    def visit_start_tag(self, tag):
        return SUPPRESS

    def visit_end_tag(self, tag):
        return SUPPRESS

    def visit_text(self, text):
        return SUPPRESS

    def visit_code(self, code):
        return SUPPRESS


class RecordingVisitor(MarkdownVisitor):
    """Records every visit; keeps all events"""

    def __init__(self):
        self.seen = []

    def visit_start_tag(self, tag):
        self.seen.append(("start", tag.kind))
        return UNCHANGED

    def visit_end_tag(self, tag):
        self.seen.append(("end", tag.kind))
        return UNCHANGED

    def visit_text(self, text):
        self.seen.append(("text", text))
        return UNCHANGED

    def visit_code(self, code):
        self.seen.append(("code", code))
        return UNCHANGED


SAMPLES = [
    "",
    "![](image.png)",
    "# Title\n\nSome *text* and `code`.",
    "> quote\n> more\n\n1. one\n2. two\n\n- a\n\n- b\n",
    "```rust\nfn main() {}\n```\n\n    indented\n",
    '[link](https://example.com "Title") <span>raw</span>\n\n---\n',
    "| a | b |\n|---|:-:|\n| 1 | 2 |\n",
    "line one  \nline two\nline three ~~gone~~",
]


class TestVisitorContract:
    """The three visit outcomes as seen in rendered HTML"""

    def test_nop_visitor_image(self):
        html = markdown_toHtml("![](image.png)", NopVisitor())
        assert html == '<p><img src="image.png" alt="" /></p>\n'

    def test_replace_code_with_html(self):
        html = markdown_toHtml("`@zineland`", DummyVisitor())
        assert html == '<p><a href="https://github.com/zineland">@zineland</a></p>\n'

    def test_unchanged_code(self):
        html = markdown_toHtml("`DummyVisitor`", DummyVisitor())
        assert html == "<p><code>DummyVisitor</code></p>\n"

    def test_suppress_block_quote(self):
        html = markdown_toHtml("> DummyVisitor", DummyVisitor())
        assert html == "<p>DummyVisitor</p>\n"

    @pytest.mark.parametrize("markdown", SAMPLES)
    def test_nop_visitor_matches_baseline(self, markdown):
        """A visitor that changes nothing renders like no visitor at all"""
        assert markdown_toHtml(markdown, NopVisitor()) == markdown_toHtml(markdown)

    def test_suppress_everything_leaves_breaks_and_rules(self):
        markdown = "# Title\n\nSome *text* and `code`\n\n---\n\nline one  \nline two"
        html = markdown_toHtml(markdown, SuppressAllVisitor())
        assert html == "<hr />\n<br />\n"

    def test_replace_text(self):
        class Upper(MarkdownVisitor):
            def visit_text(self, text):
                return VisitOutcome.replace(Event.text(text.upper()))

        html = markdown_toHtml("hello *world*", Upper())
        assert html == "<p>HELLO <em>WORLD</em></p>\n"

    def test_unbalanced_suppression_is_not_repaired(self):
        """Dropping only the START of a pair leaves the END in place"""
        class DropQuoteStart(MarkdownVisitor):
            def visit_start_tag(self, tag):
                if tag.kind is TagKind.BLOCK_QUOTE:
                    return SUPPRESS
                return UNCHANGED

        html = markdown_toHtml("> quote", DropQuoteStart())
        assert html == "<p>quote</p>\n</blockquote>\n"

    def test_raw_html_is_not_visited(self):
        class NoText(MarkdownVisitor):
            def visit_text(self, text):
                return SUPPRESS

        html = markdown_toHtml("<div>raw</div>", NoText())
        assert "<div>raw</div>" in html

    def test_visitor_sees_events_in_parse_order(self):
        visitor = RecordingVisitor()
        markdown_toHtml("# A\n\nb `c` *d*", visitor)
        assert visitor.seen == [
            ("start", TagKind.HEADING),
            ("text", "A"),
            ("end", TagKind.HEADING),
            ("start", TagKind.PARAGRAPH),
            ("text", "b "),
            ("code", "c"),
            ("text", " "),
            ("start", TagKind.EMPHASIS),
            ("text", "d"),
            ("end", TagKind.EMPHASIS),
            ("end", TagKind.PARAGRAPH),
        ]


class TestEventsFilter:
    """Order and count guarantees of the filtering stage"""

    @pytest.mark.parametrize("markdown", SAMPLES)
    def test_forwarded_events_keep_relative_order(self, markdown):
        class DropText(MarkdownVisitor):
            def visit_text(self, text):
                return SUPPRESS

        md = parser_make()
        original = list(events_iterate(markdown, md))
        forwarded = list(events_filter(iter(original), DropText()))

        expected = [e for e in original if e.kind is not EventKind.TEXT]
        assert forwarded == expected
        assert len(forwarded) <= len(original)

    def test_filter_is_lazy(self):
        """Nothing is visited before the stream is consumed"""
        visitor = RecordingVisitor()
        stream = events_filter(events_iterate("*a*", parser_make()), visitor)
        assert visitor.seen == []
        next(stream)
        assert visitor.seen == [("start", TagKind.PARAGRAPH)]


class TestEventSource:
    """Events produced from markdown-it tokens"""

    def events(self, markdown):
        return list(events_iterate(markdown, parser_make()))

    def test_end_tag_matches_start_tag(self):
        events = self.events("## Sub")
        assert events[0] == Event.start(Tag.heading(2))
        assert events[-1] == Event.end(Tag.heading(2))

    def test_tight_list_has_no_paragraphs(self):
        kinds = [e.tag.kind for e in self.events("- a\n- b") if e.tag is not None]
        assert TagKind.PARAGRAPH not in kinds

    def test_fenced_code_block(self):
        events = self.events("```python extra\nx = 1\n```")
        tag = events[0].tag
        assert tag.kind is TagKind.CODE_BLOCK
        assert tag.fenced is True
        assert tag.language == "python"
        assert events[1] == Event.text("x = 1\n")

    def test_indented_code_block(self):
        events = self.events("    x = 1\n")
        assert events[0] == Event.start(Tag.code_block("", fenced=False))

    def test_ordered_list_start(self):
        assert self.events("3. three")[0] == Event.start(Tag.list_(start=3))
        assert self.events("1. one")[0] == Event.start(Tag.list_(start=1))
        assert self.events("- bullet")[0] == Event.start(Tag.list_())

    def test_link_tags(self):
        events = self.events('[x](https://example.com "T")')
        assert events[1] == Event.start(Tag.link("https://example.com", "T"))

    def test_autolinks(self):
        link = self.events("<https://example.com>")[1].tag
        assert link.link_type is LinkType.AUTOLINK
        email = self.events("<me@example.com>")[1].tag
        assert email.link_type is LinkType.EMAIL

    def test_rule_and_breaks_are_plain_events(self):
        kinds = [e.kind for e in self.events("a  \nb\nc\n\n***")]
        assert EventKind.HARD_BREAK in kinds
        assert EventKind.SOFT_BREAK in kinds
        assert kinds[-1] is EventKind.RULE


class TestHtmlOutput:
    """HTML written for the main block and inline kinds"""

    def test_heading_and_paragraph(self):
        assert markdown_toHtml("# Hi\n\nthere") == "<h1>Hi</h1>\n<p>there</p>\n"

    def test_block_quote(self):
        assert markdown_toHtml("> q") == "<blockquote>\n<p>q</p>\n</blockquote>\n"

    def test_tight_list(self):
        assert markdown_toHtml("- a\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"

    def test_loose_list(self):
        html = markdown_toHtml("- a\n\n- b")
        assert html == "<ul>\n<li>\n<p>a</p>\n</li>\n<li>\n<p>b</p>\n</li>\n</ul>\n"

    def test_ordered_list_with_start(self):
        html = markdown_toHtml("3. a\n4. b")
        assert html == '<ol start="3">\n<li>a</li>\n<li>b</li>\n</ol>\n'

    def test_code_block(self):
        html = markdown_toHtml("```python\nx = 1 < 2\n```")
        assert html == '<pre><code class="language-python">x = 1 &lt; 2\n</code></pre>\n'

    def test_link_with_title(self):
        html = markdown_toHtml('[x](http://a.com "T")')
        assert html == '<p><a href="http://a.com" title="T">x</a></p>\n'

    def test_image_alt_text_is_plain(self):
        html = markdown_toHtml("![a *b*](x.png)")
        assert html == '<p><img src="x.png" alt="a b" /></p>\n'

    def test_strikethrough(self):
        assert markdown_toHtml("~~gone~~") == "<p><s>gone</s></p>\n"

    def test_hard_break_and_rule(self):
        assert markdown_toHtml("a  \nb\n\n---") == "<p>a<br />\nb</p>\n<hr />\n"

    def test_table(self):
        html = markdown_toHtml("| a | b |\n|---|:-:|\n| 1 | 2 |\n")
        assert html.startswith("<table>\n<thead>\n<tr>\n<th>a</th>\n")
        assert '<td style="text-align:center">2</td>' in html
        assert html.endswith("</tbody>\n</table>\n")

    def test_text_is_escaped(self):
        assert markdown_toHtml("a & b") == "<p>a &amp; b</p>\n"

    def test_malformed_markup_degrades_to_text(self):
        assert markdown_toHtml("**unclosed [link](") == "<p>**unclosed [link](</p>\n"


class TestExtensions:
    """Footnotes, task lists, heading attributes and typography"""

    def test_footnote(self):
        html = markdown_toHtml("foo[^1]\n\n[^1]: note")
        assert html == (
            '<p>foo<sup class="footnote-reference"><a href="#1">1</a></sup></p>\n'
            '<div class="footnote-definition" id="1">'
            '<sup class="footnote-definition-label">1</sup>\n'
            "<p>note</p>\n"
            "</div>\n"
        )

    def test_footnotes_numbered_by_first_reference(self):
        html = markdown_toHtml("b[^y] a[^x]\n\n[^x]: X\n\n[^y]: Y")
        assert '<a href="#y">1</a>' in html
        assert '<a href="#x">2</a>' in html
        assert html.index('id="y"') < html.index('id="x"')

    def test_unchecked_task(self):
        html = markdown_toHtml("- [ ] task")
        assert html == '<ul>\n<li><input disabled="" type="checkbox"/>\ntask</li>\n</ul>\n'

    def test_checked_task(self):
        html = markdown_toHtml("- [x] done\n- plain")
        assert html == (
            '<ul>\n<li><input disabled="" type="checkbox" checked=""/>\ndone</li>\n'
            "<li>plain</li>\n</ul>\n"
        )

    def test_task_marker_needs_text(self):
        assert markdown_toHtml("- [ ]") == "<ul>\n<li>[ ]</li>\n</ul>\n"

    def test_heading_attributes(self):
        html = markdown_toHtml("# Title {#intro .wide .dark}")
        assert html == '<h1 id="intro" class="wide dark">Title</h1>\n'

    def test_heading_braces_mid_text_kept(self):
        assert markdown_toHtml("# a {b} c") == "<h1>a {b} c</h1>\n"

    def test_typographer_on_by_default(self):
        html = markdown_toHtml('"quoted" text')
        assert html == "<p>“quoted” text</p>\n"

    def test_markers_are_not_visited(self):
        html = markdown_toHtml("- [x] done", SuppressAllVisitor())
        assert html == '<input disabled="" type="checkbox" checked=""/>\n'

    def test_footnote_reference_is_not_visited(self):
        visitor = RecordingVisitor()
        markdown_toHtml("a[^1]\n\n[^1]: n", visitor)
        assert visitor.seen == [
            ("start", TagKind.PARAGRAPH),
            ("text", "a"),
            ("end", TagKind.PARAGRAPH),
            ("start", TagKind.FOOTNOTE_DEFINITION),
            ("start", TagKind.PARAGRAPH),
            ("text", "n"),
            ("end", TagKind.PARAGRAPH),
            ("end", TagKind.FOOTNOTE_DEFINITION),
        ]

    def test_markers_in_alt_text(self):
        image = Tag.image("x.png")
        events = [
            Event.start(image),
            Event.text("see"),
            Event.footnote_reference("n"),
            Event.task_list_marker(True),
            Event.end(image),
        ]
        assert html_push(events) == '<img src="x.png" alt="see[1][x]" />'

    def test_event_source(self):
        events = list(events_iterate("- [ ] t[^n]\n\n[^n]: x", parser_make()))
        assert Event.task_list_marker(False) in events
        assert Event.footnote_reference("n") in events
        assert Event.start(Tag.footnote_definition("n")) in events
