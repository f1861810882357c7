"""
Visitor hook for customizing HTML rendering

A MarkdownVisitor sees every content-bearing event (start tag, end tag,
text, inline code) before it reaches the HTML serializer and decides per
event whether to keep it, swap it for another event, or drop it.

Line breaks, rules and raw HTML are never offered to the visitor.

Example:
    >>> class Unquote(MarkdownVisitor):
    ...     def visit_start_tag(self, tag):
    ...         if tag.kind is TagKind.BLOCK_QUOTE:
    ...             return SUPPRESS
    ...         return UNCHANGED
    ...     visit_end_tag = visit_start_tag
    >>> markdown_toHtml("> hi", Unquote())
    '<p>hi</p>\\n'
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional

from ..models.events import Event, Tag, TagKind


class Outcome(Enum):
    REPLACE = "replace"
    UNCHANGED = "unchanged"
    SUPPRESS = "suppress"


@dataclass(frozen=True)
class VisitOutcome:
    """
    Result of visiting one event

    Attributes:
        outcome: What to do with the visited event
        event: Replacement event, only set for Outcome.REPLACE
    """
    outcome: Outcome
    event: Optional[Event] = None

    @classmethod
    def replace(cls, event: Event) -> "VisitOutcome":
        """Render ``event`` instead of the visited one"""
        return cls(Outcome.REPLACE, event)

    def resolve(self, original: Event) -> Optional[Event]:
        """
        Map this outcome to the event to forward, or None to forward nothing
        """
        if self.outcome is Outcome.REPLACE:
            return self.event
        if self.outcome is Outcome.UNCHANGED:
            return original
        return None


UNCHANGED = VisitOutcome(Outcome.UNCHANGED)
SUPPRESS = VisitOutcome(Outcome.SUPPRESS)


class MarkdownVisitor:
    """
    Base visitor: every operation leaves the event unchanged

    Subclasses override the operations they care about. A visitor may keep
    state between calls, but one instance belongs to one render call.
    """

    def visit_start_tag(self, tag: Tag) -> VisitOutcome:
        return UNCHANGED

    def visit_end_tag(self, tag: Tag) -> VisitOutcome:
        return UNCHANGED

    def visit_text(self, text: str) -> VisitOutcome:
        return UNCHANGED

    def visit_code(self, code: str) -> VisitOutcome:
        return UNCHANGED
