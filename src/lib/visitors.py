"""
Bundled markdown visitors

- CodeHighlightVisitor: fenced code blocks with a language -> Pygments HTML
- MentionVisitor: inline code `@name` -> link to the user's profile
- ChainVisitor: combine visitors, first non-UNCHANGED outcome wins

Each instance holds per-render state; create a new one for every page.
"""

from typing import List, Optional

from markdown_it.common.utils import escapeHtml
from pygments import highlight
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.lexer import Lexer
from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from ..config import appsettings
from ..models.events import Event, Tag, TagKind
from .visitor import MarkdownVisitor, Outcome, VisitOutcome, UNCHANGED, SUPPRESS


class CodeHighlightVisitor(MarkdownVisitor):
    """
    Replace fenced code blocks that name a language with highlighted HTML

    The code block START and its body text are suppressed while the body is
    buffered; the END is replaced by a single HTML event holding the
    Pygments output. Blocks without a language render as plain <pre><code>.
    """

    def __init__(self, style: Optional[str] = None) -> None:
        self.style = style or appsettings.highlight_style
        self.language: Optional[str] = None
        self.code: List[str] = []

    def visit_start_tag(self, tag: Tag) -> VisitOutcome:
        if tag.kind is TagKind.CODE_BLOCK and tag.language:
            self.language = tag.language
            self.code = []
            return SUPPRESS
        return UNCHANGED

    def visit_text(self, text: str) -> VisitOutcome:
        if self.language is None:
            return UNCHANGED
        self.code.append(text)
        return SUPPRESS

    def visit_end_tag(self, tag: Tag) -> VisitOutcome:
        if tag.kind is not TagKind.CODE_BLOCK or self.language is None:
            return UNCHANGED
        html = self.code_highlight("".join(self.code), self.language)
        self.language = None
        self.code = []
        return VisitOutcome.replace(Event.html(html))

    def code_highlight(self, code: str, language: str) -> str:
        """Highlight code with inline styles; unknown languages stay plain"""
        lexer: Lexer
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            lexer = TextLexer()
        formatter = HtmlFormatter(style=self.style, noclasses=True)
        return highlight(code, lexer, formatter)


class MentionVisitor(MarkdownVisitor):
    """Turn `@name` inline code into a link to that user's profile"""

    def __init__(self, url_template: Optional[str] = None) -> None:
        self.url_template = url_template or appsettings.mention_url

    def visit_code(self, code: str) -> VisitOutcome:
        name = code[1:] if code.startswith("@") else ""
        if not name:
            return UNCHANGED
        url = self.url_template.format(name=name)
        return VisitOutcome.replace(
            Event.html(f'<a href="{escapeHtml(url)}">{escapeHtml(code)}</a>')
        )


class ChainVisitor(MarkdownVisitor):
    """
    Ask each visitor in turn; the first outcome that is not UNCHANGED wins

    Visitors after the winner are not consulted for that event.
    """

    def __init__(self, *visitors: MarkdownVisitor) -> None:
        self.visitors = visitors

    def visit_start_tag(self, tag: Tag) -> VisitOutcome:
        return self.first([v.visit_start_tag for v in self.visitors], tag)

    def visit_end_tag(self, tag: Tag) -> VisitOutcome:
        return self.first([v.visit_end_tag for v in self.visitors], tag)

    def visit_text(self, text: str) -> VisitOutcome:
        return self.first([v.visit_text for v in self.visitors], text)

    def visit_code(self, code: str) -> VisitOutcome:
        return self.first([v.visit_code for v in self.visitors], code)

    @staticmethod
    def first(visits, value) -> VisitOutcome:
        for visit in visits:
            outcome = visit(value)
            if outcome.outcome is not Outcome.UNCHANGED:
                return outcome
        return UNCHANGED


def pageVisitor_make(mention_url: Optional[str] = None) -> MarkdownVisitor:
    """Visitor used for article and bio pages: highlighting plus mentions"""
    return ChainVisitor(CodeHighlightVisitor(), MentionVisitor(mention_url))
