"""
zinepress - Static magazine builder for markdown content

Markdown articles and author bios are rendered to static HTML through a
streaming, visitor-filtered event pipeline.
"""

__version__ = "0.6.0"

from .lib import (
    markdown_toHtml,
    markdown_strip,
    description_extract,
    MarkdownVisitor,
    VisitOutcome,
    UNCHANGED,
    SUPPRESS,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "markdown_toHtml",
    "markdown_strip",
    "description_extract",
    "MarkdownVisitor",
    "VisitOutcome",
    "UNCHANGED",
    "SUPPRESS",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
