"""
HTML serializer for the markdown event stream

Writes events to HTML exactly as they arrive. The writer never reorders,
drops or balances events: a START whose END was suppressed upstream leaves
an unclosed element in the output.
"""

from typing import Dict, Iterable, List

from markdown_it.common.utils import escapeHtml

from ..models.events import Event, EventKind, Tag, TagKind


# Block-level tags written after a fresh line; value is (open, close)
_BLOCK_MARKUP = {
    TagKind.PARAGRAPH: ("<p>", "</p>\n"),
    TagKind.BLOCK_QUOTE: ("<blockquote>\n", "</blockquote>\n"),
    TagKind.ITEM: ("<li>", "</li>\n"),
    TagKind.TABLE: ("<table>\n", "</table>\n"),
    TagKind.TABLE_HEAD: ("<thead>\n", "</thead>\n"),
    TagKind.TABLE_BODY: ("<tbody>\n", "</tbody>\n"),
    TagKind.TABLE_ROW: ("<tr>\n", "</tr>\n"),
}

_INLINE_MARKUP = {
    TagKind.EMPHASIS: ("<em>", "</em>"),
    TagKind.STRONG: ("<strong>", "</strong>"),
    TagKind.STRIKETHROUGH: ("<s>", "</s>"),
    TagKind.LINK: ("", "</a>"),
}


class HtmlWriter:
    """
    Accumulates HTML for a sequence of events

    Attributes:
        parts: Output fragments written so far
        end_newline: Whether the output currently ends with a newline
        alt_depth: Nesting depth inside an image; > 0 means events are
                   written as escaped plain text into the alt attribute
        footnote_numbers: Footnote label -> number, in order of first use
    """

    def __init__(self) -> None:
        self.parts: List[str] = []
        self.end_newline = True
        self.alt_depth = 0
        self.footnote_numbers: Dict[str, int] = {}

    def write(self, s: str) -> None:
        if s:
            self.parts.append(s)
            self.end_newline = s.endswith("\n")

    def fresh_line(self) -> None:
        """Start block markup on its own line"""
        if not self.end_newline:
            self.write("\n")

    def run(self, events: Iterable[Event]) -> str:
        for event in events:
            if self.alt_depth:
                self.altText_write(event)
            else:
                self.event_write(event)
        return "".join(self.parts)

    def event_write(self, event: Event) -> None:
        kind = event.kind
        if kind is EventKind.START:
            self.startTag_write(event.tag)
        elif kind is EventKind.END:
            self.endTag_write(event.tag)
        elif kind is EventKind.TEXT:
            self.write(escapeHtml(event.content))
        elif kind is EventKind.CODE:
            self.write(f"<code>{escapeHtml(event.content)}</code>")
        elif kind is EventKind.HTML:
            self.write(event.content)
        elif kind is EventKind.SOFT_BREAK:
            self.write("\n")
        elif kind is EventKind.HARD_BREAK:
            self.write("<br />\n")
        elif kind is EventKind.RULE:
            self.fresh_line()
            self.write("<hr />\n")
        elif kind is EventKind.FOOTNOTE_REFERENCE:
            label = escapeHtml(event.content)
            number = self.footnote_number(event.content)
            self.write(f'<sup class="footnote-reference"><a href="#{label}">{number}</a></sup>')
        elif kind is EventKind.TASK_LIST_MARKER:
            checked = ' checked=""' if event.checked else ""
            self.write(f'<input disabled="" type="checkbox"{checked}/>\n')

    def altText_write(self, event: Event) -> None:
        """Write an event nested inside an image as alt text"""
        kind = event.kind
        if kind is EventKind.START:
            self.alt_depth += 1
        elif kind is EventKind.END:
            self.alt_depth -= 1
            if not self.alt_depth:
                self.imageClose_write(event.tag)
        elif kind in (EventKind.TEXT, EventKind.CODE, EventKind.HTML):
            self.write(escapeHtml(event.content))
        elif kind is EventKind.FOOTNOTE_REFERENCE:
            self.write(f"[{self.footnote_number(event.content)}]")
        elif kind is EventKind.TASK_LIST_MARKER:
            self.write("[x]" if event.checked else "[ ]")
        else:
            self.write(" ")

    def startTag_write(self, tag: Tag) -> None:
        kind = tag.kind
        if kind in _BLOCK_MARKUP:
            self.fresh_line()
            self.write(_BLOCK_MARKUP[kind][0])
        elif kind is TagKind.HEADING:
            self.fresh_line()
            self.write(f"<h{tag.level}{heading_attrs(tag)}>")
        elif kind is TagKind.CODE_BLOCK:
            self.fresh_line()
            if tag.language:
                self.write(f'<pre><code class="language-{escapeHtml(tag.language)}">')
            else:
                self.write("<pre><code>")
        elif kind is TagKind.LIST:
            self.fresh_line()
            if tag.start is None:
                self.write("<ul>\n")
            elif tag.start == 1:
                self.write("<ol>\n")
            else:
                self.write(f'<ol start="{tag.start}">\n')
        elif kind is TagKind.TABLE_CELL:
            cell = "th" if tag.header else "td"
            if tag.align:
                self.write(f'<{cell} style="text-align:{tag.align}">')
            else:
                self.write(f"<{cell}>")
        elif kind is TagKind.LINK:
            self.write(f'<a href="{escapeHtml(tag.dest)}"{title_attr(tag)}>')
        elif kind is TagKind.FOOTNOTE_DEFINITION:
            self.fresh_line()
            number = self.footnote_number(tag.label)
            self.write(
                f'<div class="footnote-definition" id="{escapeHtml(tag.label)}">'
                f'<sup class="footnote-definition-label">{number}</sup>'
            )
        elif kind is TagKind.IMAGE:
            self.write(f'<img src="{escapeHtml(tag.dest)}" alt="')
            self.alt_depth = 1
        elif kind in _INLINE_MARKUP:
            self.write(_INLINE_MARKUP[kind][0])

    def endTag_write(self, tag: Tag) -> None:
        kind = tag.kind
        if kind in _BLOCK_MARKUP:
            self.write(_BLOCK_MARKUP[kind][1])
        elif kind is TagKind.HEADING:
            self.write(f"</h{tag.level}>\n")
        elif kind is TagKind.CODE_BLOCK:
            self.write("</code></pre>\n")
        elif kind is TagKind.FOOTNOTE_DEFINITION:
            self.write("</div>\n")
        elif kind is TagKind.LIST:
            self.write("</ul>\n" if tag.start is None else "</ol>\n")
        elif kind is TagKind.TABLE_CELL:
            self.write("</th>\n" if tag.header else "</td>\n")
        elif kind is TagKind.IMAGE:
            # Reached only when the image START was suppressed
            self.imageClose_write(tag)
        elif kind in _INLINE_MARKUP:
            self.write(_INLINE_MARKUP[kind][1])

    def imageClose_write(self, tag: Tag) -> None:
        self.write(f'"{title_attr(tag)} />')

    def footnote_number(self, label: str) -> int:
        """Number of a footnote, assigned on first reference or definition"""
        return self.footnote_numbers.setdefault(label, len(self.footnote_numbers) + 1)


def title_attr(tag: Tag) -> str:
    return f' title="{escapeHtml(tag.title)}"' if tag.title else ""


def heading_attrs(tag: Tag) -> str:
    attrs = f' id="{escapeHtml(tag.id)}"' if tag.id else ""
    if tag.classes:
        attrs += f' class="{escapeHtml(" ".join(tag.classes))}"'
    return attrs


def html_push(events: Iterable[Event]) -> str:
    """
    Serialize an event stream to HTML

    Args:
        events: Events in document order (may be a lazy generator)

    Returns:
        HTML string
    """
    return HtmlWriter().run(events)
