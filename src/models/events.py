"""
Markdown event vocabulary

Pure data shapes for the streaming markdown pipeline. A document is never
materialized as a tree: the event source yields a flat, ordered sequence of
Event objects where every START is matched by an END carrying the same Tag.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple


class TagKind(Enum):
    """Structural kinds carried by START/END events"""
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BLOCK_QUOTE = "block_quote"
    CODE_BLOCK = "code_block"
    LIST = "list"
    ITEM = "item"
    LINK = "link"
    IMAGE = "image"
    TABLE = "table"
    TABLE_HEAD = "table_head"
    TABLE_BODY = "table_body"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    STRIKETHROUGH = "strikethrough"
    FOOTNOTE_DEFINITION = "footnote_definition"


class LinkType(Enum):
    """How a link or image destination was written in the source"""
    INLINE = "inline"      # [text](dest), [text][ref], ![alt](src)
    AUTOLINK = "autolink"  # <https://example.com>
    EMAIL = "email"        # <someone@example.com>


class EventKind(Enum):
    """
    Kinds of parse events

    START, END, TEXT and CODE are the content-bearing kinds a visitor may
    intercept. The rest always pass through; HTML is the catch-all for raw
    constructs, FOOTNOTE_REFERENCE and TASK_LIST_MARKER carry the footnote
    and task list syntax.
    """
    START = "start"
    END = "end"
    TEXT = "text"
    CODE = "code"
    HTML = "html"
    SOFT_BREAK = "soft_break"
    HARD_BREAK = "hard_break"
    RULE = "rule"
    FOOTNOTE_REFERENCE = "footnote_reference"
    TASK_LIST_MARKER = "task_list_marker"


@dataclass(frozen=True)
class Tag:
    """
    Structural context of a START/END event

    Only the fields relevant to ``kind`` are meaningful:

    Attributes:
        kind: The structural kind
        level: Heading level (1-6)
        info: Code block info string (e.g. "python"), empty when absent
        fenced: True for fenced code blocks, False for indented ones
        start: First number of an ordered list; None for bullet lists
        link_type: Link/image destination style
        dest: Link/image destination URL
        title: Link/image title, empty when absent
        header: True for header cells of a table
        align: Table cell alignment ("left", "center", "right") or ""
        id: Heading id from a trailing {#id} attribute block
        classes: Heading classes from a trailing {.class} attribute block
        label: Footnote definition label
    """
    kind: TagKind
    level: int = 0
    info: str = ""
    fenced: bool = False
    start: Optional[int] = None
    link_type: LinkType = LinkType.INLINE
    dest: str = ""
    title: str = ""
    header: bool = False
    align: str = ""
    id: Optional[str] = None
    classes: Tuple[str, ...] = ()
    label: str = ""

    @classmethod
    def heading(
        cls, level: int, id: Optional[str] = None, classes: Tuple[str, ...] = ()
    ) -> "Tag":
        return cls(TagKind.HEADING, level=level, id=id, classes=tuple(classes))

    @classmethod
    def code_block(cls, info: str = "", fenced: bool = True) -> "Tag":
        return cls(TagKind.CODE_BLOCK, info=info, fenced=fenced)

    @classmethod
    def list_(cls, start: Optional[int] = None) -> "Tag":
        return cls(TagKind.LIST, start=start)

    @classmethod
    def link(cls, dest: str, title: str = "", link_type: LinkType = LinkType.INLINE) -> "Tag":
        return cls(TagKind.LINK, dest=dest, title=title, link_type=link_type)

    @classmethod
    def image(cls, dest: str, title: str = "") -> "Tag":
        return cls(TagKind.IMAGE, dest=dest, title=title)

    @classmethod
    def table_cell(cls, header: bool = False, align: str = "") -> "Tag":
        return cls(TagKind.TABLE_CELL, header=header, align=align)

    @classmethod
    def footnote_definition(cls, label: str) -> "Tag":
        return cls(TagKind.FOOTNOTE_DEFINITION, label=label)

    @property
    def language(self) -> str:
        """First word of a code block's info string"""
        parts = self.info.split()
        return parts[0] if parts else ""


@dataclass(frozen=True)
class Event:
    """
    One atomic unit of a streaming markdown parse

    Attributes:
        kind: Event kind
        tag: Structural tag for START/END events, None otherwise
        content: Payload for TEXT, CODE and HTML events; the label of a
                 FOOTNOTE_REFERENCE
        checked: Whether a TASK_LIST_MARKER is ticked
    """
    kind: EventKind
    tag: Optional[Tag] = None
    content: str = ""
    checked: bool = False

    @classmethod
    def start(cls, tag: Tag) -> "Event":
        return cls(EventKind.START, tag=tag)

    @classmethod
    def end(cls, tag: Tag) -> "Event":
        return cls(EventKind.END, tag=tag)

    @classmethod
    def text(cls, text: str) -> "Event":
        return cls(EventKind.TEXT, content=text)

    @classmethod
    def code(cls, code: str) -> "Event":
        return cls(EventKind.CODE, content=code)

    @classmethod
    def html(cls, html: str) -> "Event":
        return cls(EventKind.HTML, content=html)

    @classmethod
    def footnote_reference(cls, label: str) -> "Event":
        return cls(EventKind.FOOTNOTE_REFERENCE, content=label)

    @classmethod
    def task_list_marker(cls, checked: bool) -> "Event":
        return cls(EventKind.TASK_LIST_MARKER, checked=checked)


SOFT_BREAK = Event(EventKind.SOFT_BREAK)
HARD_BREAK = Event(EventKind.HARD_BREAK)
RULE = Event(EventKind.RULE)
