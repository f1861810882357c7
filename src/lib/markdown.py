"""
Markdown transformation engine

Three consumers of the same event source:

- markdown_toHtml(): event stream -> visitor filter -> HTML serializer
- markdown_strip(): raw event stream -> plain text
- description_extract(): first meaningful line -> stripped, bounded summary

All three are pure functions of their input; every UTF-8 string is valid
input and nothing here raises for malformed markup (the parser degrades it
to literal text).

Example:
    >>> markdown_toHtml("**Hello**")
    '<p><strong>Hello</strong></p>\\n'
    >>> markdown_strip("# Header")
    'Header\\n'
    >>> description_extract("# Title\\n\\nFirst \\"line\\"\\nsecond")
    "First 'line'"
"""

from typing import Iterable, Iterator, List, Optional

from ..config import appsettings
from ..models.events import Event, EventKind, Tag, TagKind
from .events import events_iterate, parser_make
from .visitor import MarkdownVisitor, UNCHANGED
from .writer import html_push


DESCRIPTION_MAX_CHARS = 200

# Unicode White_Space; str.strip() would also remove \x1c-\x1f
_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

# Information separators are text to CommonMark, but the parser trims
# paragraphs with str.strip(); they are parsed as private-use stand-ins
_SEPARATORS = "\x1c\x1d\x1e\x1f"
_SEPARATOR_STANDINS = "\uf71c\uf71d\uf71e\uf71f"

# END tags after which the stripper starts a fresh line
_STRIP_LINE_ENDS = {
    TagKind.TABLE,
    TagKind.TABLE_HEAD,
    TagKind.TABLE_ROW,
    TagKind.HEADING,
    TagKind.BLOCK_QUOTE,
    TagKind.CODE_BLOCK,
    TagKind.ITEM,
}


def markdown_toHtml(markdown: str, visitor: Optional[MarkdownVisitor] = None) -> str:
    """
    Render markdown to HTML, letting a visitor rewrite events on the way

    Args:
        markdown: Markdown source text
        visitor: Optional MarkdownVisitor; None renders every event unchanged

    Returns:
        HTML string
    """
    md = parser_make(
        tables=appsettings.tables,
        strikethrough=appsettings.strikethrough,
        footnotes=appsettings.footnotes,
        tasklists=appsettings.tasklists,
        heading_attributes=appsettings.heading_attributes,
        html=appsettings.html,
        typographer=appsettings.typographer,
    )
    events = events_iterate(markdown, md)
    if visitor is not None:
        events = events_filter(events, visitor)
    return html_push(events)


def events_filter(events: Iterable[Event], visitor: MarkdownVisitor) -> Iterator[Event]:
    """
    Pass each interceptable event through the visitor

    Forwards zero or one event per input event, in input order. SoftBreak,
    HardBreak, Rule, Html, footnote reference and task list marker events
    are forwarded without a visit.
    """
    for event in events:
        kind = event.kind
        if kind is EventKind.START:
            outcome = visitor.visit_start_tag(event.tag)
        elif kind is EventKind.END:
            outcome = visitor.visit_end_tag(event.tag)
        elif kind is EventKind.TEXT:
            outcome = visitor.visit_text(event.content)
        elif kind is EventKind.CODE:
            outcome = visitor.visit_code(event.content)
        else:
            outcome = UNCHANGED

        forwarded = outcome.resolve(event)
        if forwarded is not None:
            yield forwarded


def markdown_strip(markdown: str) -> str:
    """
    Convert markdown into plain text

    Block boundaries become newlines, unconditionally: the buffer is never
    inspected, so adjacent boundaries produce repeated newlines. No trimming
    is applied to the result.

    Args:
        markdown: Markdown source text

    Returns:
        Plain text
    """
    # strikethrough is the only extension enabled for stripping
    md = parser_make(
        tables=False,
        strikethrough=True,
        footnotes=False,
        tasklists=False,
        heading_attributes=False,
        html=True,
        typographer=False,
    )
    chars = set(markdown)
    shielded = bool(chars & set(_SEPARATORS)) and not chars & set(_SEPARATOR_STANDINS)
    if shielded:
        markdown = markdown.translate(str.maketrans(_SEPARATORS, _SEPARATOR_STANDINS))

    buffer: List[str] = []

    for event in events_iterate(markdown, md):
        kind = event.kind
        if kind is EventKind.START:
            startTag_strip(event.tag, buffer)
        elif kind is EventKind.END:
            if event.tag.kind in _STRIP_LINE_ENDS:
                buffer.append("\n")
        elif kind in (EventKind.TEXT, EventKind.CODE):
            buffer.append(event.content)
        elif kind in (EventKind.SOFT_BREAK, EventKind.HARD_BREAK, EventKind.RULE):
            buffer.append("\n")

    text = "".join(buffer)
    if shielded:
        text = text.translate(str.maketrans(_SEPARATOR_STANDINS, _SEPARATORS))
    return text


def startTag_strip(tag: Tag, buffer: List[str]) -> None:
    if tag.kind in (TagKind.CODE_BLOCK, TagKind.LIST):
        buffer.append("\n")
    elif tag.kind is TagKind.LINK and tag.title:
        buffer.append(tag.title)


def description_extract(markdown: str) -> str:
    """
    Extract a short description from markdown content

    Takes the first meaningful line only (headings and images are skipped,
    following lines of the same paragraph are not joined), strips it to
    plain text, keeps at most DESCRIPTION_MAX_CHARS characters and replaces
    double quotes with single quotes.

    Args:
        markdown: Markdown source text

    Returns:
        Description, or "" when no line qualifies
    """
    for line in markdown.split("\n"):
        line = line.strip(_WHITESPACE)
        if not line or line[0] in "#!":
            continue

        raw = markdown_strip(line)
        if raw in ("", "\n"):
            continue

        return raw[:DESCRIPTION_MAX_CHARS].replace('"', "'")

    return ""
