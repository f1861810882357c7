"""
zinepress engine and site collaborators
"""

__version__ = "0.6.0"

from .log import LOG, state_connectToLogger
from .errors import ZineError, DateFormatError, SiteError
from .visitor import MarkdownVisitor, Outcome, VisitOutcome, UNCHANGED, SUPPRESS
from .markdown import markdown_toHtml, markdown_strip, description_extract, events_filter
from .visitors import CodeHighlightVisitor, MentionVisitor, ChainVisitor, pageVisitor_make
from .helpers import capitalize, dir_copy
from .entity import Context, Site, site_load, zineFolder_find

__all__ = [
    "LOG",
    "state_connectToLogger",
    "ZineError",
    "DateFormatError",
    "SiteError",
    "MarkdownVisitor",
    "Outcome",
    "VisitOutcome",
    "UNCHANGED",
    "SUPPRESS",
    "markdown_toHtml",
    "markdown_strip",
    "description_extract",
    "events_filter",
    "CodeHighlightVisitor",
    "MentionVisitor",
    "ChainVisitor",
    "pageVisitor_make",
    "capitalize",
    "dir_copy",
    "Context",
    "Site",
    "site_load",
    "zineFolder_find",
    "__version__",
]
