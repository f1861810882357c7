"""
Event source backed by markdown-it-py

markdown-it produces a flat list of block tokens where each ``inline`` token
carries its own child list. This module walks that structure in order and
yields the flat Event stream used by the renderer and the stripper:

    heading_open, inline[text], heading_close
        -> START(Heading 1), TEXT, END(Heading 1)

END events reuse the Tag of their START partner (a tag stack is kept while
walking). Hidden paragraphs (tight list items) produce no events, leaf
tokens with a body (fence, code_block, image) are expanded to
START/…/END triples.

Footnotes and task lists come from mdit-py-plugins. Footnote definitions
are collected at the end of the document by footnote_plugin; each one
becomes a FOOTNOTE_DEFINITION tag, its back-reference anchors are dropped.
"""

from typing import Any, Dict, Iterator, List, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token
from markdown_it.rules_core import StateCore
from markdown_it.common.utils import unescapeAll
from mdit_py_plugins.attrs.parse import ParseError, parse as attrs_parse
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from ..models.events import Event, LinkType, Tag, TagKind, SOFT_BREAK, HARD_BREAK, RULE
from .log import LOG


# Open/close token prefixes whose Tag carries no variant data
_PLAIN_TAGS = {
    "paragraph": TagKind.PARAGRAPH,
    "blockquote": TagKind.BLOCK_QUOTE,
    "list_item": TagKind.ITEM,
    "table": TagKind.TABLE,
    "thead": TagKind.TABLE_HEAD,
    "tbody": TagKind.TABLE_BODY,
    "tr": TagKind.TABLE_ROW,
    "em": TagKind.EMPHASIS,
    "strong": TagKind.STRONG,
    "s": TagKind.STRIKETHROUGH,
}


def parser_make(
    tables: bool = True,
    strikethrough: bool = True,
    footnotes: bool = True,
    tasklists: bool = True,
    heading_attributes: bool = True,
    html: bool = True,
    typographer: bool = True,
) -> MarkdownIt:
    """
    Build a CommonMark parser with the requested extensions

    The defaults turn every extension on, which is what page rendering
    uses. markdown_strip() asks for strikethrough only.

    Args:
        tables: Enable GFM pipe tables
        strikethrough: Enable ~~strikethrough~~
        footnotes: Enable [^label] references and their definitions
        tasklists: Enable "- [ ]" / "- [x]" task list items
        heading_attributes: Enable trailing {#id .class} blocks on headings
        html: Pass raw HTML through as HTML events
        typographer: Enable smart quotes and typographic replacements

    Returns:
        Configured MarkdownIt instance
    """
    md = MarkdownIt("commonmark", {"html": html, "typographer": typographer})
    if tables:
        md.enable("table")
    if strikethrough:
        md.enable("strikethrough")
    if typographer:
        md.enable(["replacements", "smartquotes"])
    if footnotes:
        md.use(footnote_plugin)
    if tasklists:
        md.use(tasklists_plugin)
    if heading_attributes:
        md.use(headingAttrs_plugin)
    return md


def headingAttrs_plugin(md: MarkdownIt) -> None:
    """
    Trailing attribute blocks on headings: ``# Title {#intro .wide}``

    The block is cut from the heading text and stored on the heading_open
    token as ``id`` and ``class`` attributes. Other attributes are ignored.
    """
    md.core.ruler.after("inline", "heading_attrs", headingAttrs_apply)


def headingAttrs_apply(state: StateCore) -> None:
    for opening, inline in zip(state.tokens, state.tokens[1:]):
        if opening.type != "heading_open" or not inline.children:
            continue
        last = inline.children[-1]
        text = last.content.rstrip()
        start = text.rfind("{")
        if last.type != "text" or start < 0 or not text.endswith("}"):
            continue
        try:
            end, attrs = attrs_parse(text[start:])
        except ParseError:
            continue
        # the block must run to the end of the heading
        if start + end != len(text) - 1:
            continue

        last.content = text[:start].rstrip()
        if attrs.get("id"):
            opening.attrSet("id", attrs["id"])
        if attrs.get("class"):
            opening.attrSet("class", attrs["class"])


def events_iterate(markdown: str, md: MarkdownIt) -> Iterator[Event]:
    """
    Parse markdown and lazily yield its events in document order

    Args:
        markdown: Markdown source text
        md: Parser from parser_make()

    Yields:
        Event objects, START/END well nested
    """
    stack: List[Optional[Tag]] = []
    yield from tokens_walk(md.parse(markdown), stack)


def tokens_walk(tokens: List[Token], stack: List[Optional[Tag]]) -> Iterator[Event]:
    """Yield events for a token list, descending into inline children"""
    task_item = False
    for token in tokens:
        if token.nesting == 1:
            if token.type == "list_item_open":
                # set by tasklists_plugin on items whose text starts with [ ] or [x]
                task_item = "task-list-item" in str(token.attrGet("class") or "")
            if token.hidden:
                continue
            tag = tag_fromToken(token)
            stack.append(tag)
            if tag is not None:
                yield Event.start(tag)
        elif token.nesting == -1:
            if token.hidden:
                continue
            tag = stack.pop()
            if tag is not None:
                yield Event.end(tag)
        elif token.type == "inline":
            children = token.children or []
            if task_item and children:
                task_item = False
                yield from taskItem_walk(children, stack)
            else:
                yield from tokens_walk(children, stack)
        else:
            yield from leaf_toEvents(token, stack)


def taskItem_walk(children: List[Token], stack: List[Optional[Tag]]) -> Iterator[Event]:
    """
    Inline content of a task list item

    tasklists_plugin puts the checkbox in front as an html_inline token and
    leaves the space that followed the ``[ ]`` marker in the next text.
    """
    checkbox, *rest = children
    yield Event.task_list_marker('checked="checked"' in checkbox.content)
    if rest and rest[0].type == "text":
        rest[0] = rest[0].copy(content=rest[0].content.removeprefix(" "))
    yield from tokens_walk(rest, stack)


def footnote_label(meta: Dict[str, Any]) -> str:
    """Label of a footnote token; inline ^[...] footnotes only have an id"""
    label = meta.get("label")
    return str(label) if label else str(meta.get("id", 0) + 1)


def tag_fromToken(token: Token) -> Optional[Tag]:
    """
    Build the Tag for an opening token

    Returns:
        Tag, or None when the token kind has no Tag counterpart
    """
    name = token.type[: -len("_open")]

    if name in _PLAIN_TAGS:
        return Tag(_PLAIN_TAGS[name])
    if name == "heading":
        return Tag.heading(
            int(token.tag[1:]),
            id=token.attrGet("id") or None,
            classes=tuple(str(token.attrGet("class") or "").split()),
        )
    if name == "bullet_list":
        return Tag.list_()
    if name == "ordered_list":
        return Tag.list_(start=int(token.attrGet("start") or 1))
    if name in ("th", "td"):
        style = str(token.attrGet("style") or "")
        align = style.split(":", 1)[1].strip() if style.startswith("text-align:") else ""
        return Tag.table_cell(header=(name == "th"), align=align)
    if name == "link":
        href = str(token.attrGet("href") or "")
        if token.markup == "autolink":
            link_type = LinkType.EMAIL if href.startswith("mailto:") else LinkType.AUTOLINK
        else:
            link_type = LinkType.INLINE
        return Tag.link(href, str(token.attrGet("title") or ""), link_type)
    if name == "footnote":
        return Tag.footnote_definition(footnote_label(token.meta))
    if name == "footnote_block":
        # wrapper around all definitions, no markup of its own
        return None

    LOG(f"Skipping unsupported block '{token.type}'", level=3)
    return None


def leaf_toEvents(token: Token, stack: List[Optional[Tag]]) -> Iterator[Event]:
    """Yield the events for a self-contained (nesting 0) token"""
    kind = token.type

    if kind in ("text", "text_special"):
        if token.content:
            yield Event.text(token.content)
    elif kind == "code_inline":
        yield Event.code(token.content)
    elif kind == "softbreak":
        yield SOFT_BREAK
    elif kind == "hardbreak":
        yield HARD_BREAK
    elif kind == "hr":
        yield RULE
    elif kind in ("html_block", "html_inline"):
        yield Event.html(token.content)
    elif kind in ("fence", "code_block"):
        tag = Tag.code_block(
            info=unescapeAll(token.info).strip(),
            fenced=(kind == "fence"),
        )
        yield Event.start(tag)
        if token.content:
            yield Event.text(token.content)
        yield Event.end(tag)
    elif kind == "image":
        tag = Tag.image(
            str(token.attrGet("src") or ""),
            str(token.attrGet("title") or ""),
        )
        yield Event.start(tag)
        yield from tokens_walk(token.children or [], stack)
        yield Event.end(tag)
    elif kind == "footnote_ref":
        yield Event.footnote_reference(footnote_label(token.meta))
    elif kind == "footnote_anchor":
        # back-reference links are not rendered
        pass
    else:
        LOG(f"Skipping unsupported token '{kind}'", level=3)
