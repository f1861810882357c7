"""
Models package for zinepress

Data shapes for the markdown event stream, site entities and the build
pipeline.
"""

from .state import ProgramState, pipeline
from .events import Event, EventKind, Tag, TagKind, LinkType, SOFT_BREAK, HARD_BREAK, RULE
from .entity import AuthorId, Meta

__all__ = [
    "ProgramState",
    "pipeline",
    "Event",
    "EventKind",
    "Tag",
    "TagKind",
    "LinkType",
    "SOFT_BREAK",
    "HARD_BREAK",
    "RULE",
    "AuthorId",
    "Meta",
]
