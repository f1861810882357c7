"""
Plain-text stripping tests

markdown_strip() appends a newline at every recognized block boundary
without looking at what is already in the buffer, and never trims.
"""

import pytest

from zinepress.lib.markdown import markdown_strip


class TestInline:
    """Inline markup disappears, its text stays"""

    @pytest.mark.parametrize(
        "markdown, expected",
        [
            ("**Hello**", "Hello"),
            ("_Hello_", "Hello"),
            ("**asterisks and _underscores_**", "asterisks and underscores"),
            ("~~strikethrough~~", "strikethrough"),
            ("`inline code`", "inline code"),
            ("a <b>x</b>", "a x"),
        ],
    )
    def test_inline(self, markdown, expected):
        assert markdown_strip(markdown) == expected

    def test_basic_link(self):
        markdown = "[I'm an inline-style link](https://www.google.com)"
        assert markdown_strip(markdown) == "I'm an inline-style link"

    def test_link_title_precedes_body(self):
        markdown = '[body](https://example.com "Title")'
        assert markdown_strip(markdown) == "Titlebody"

    def test_basic_image(self):
        markdown = "![alt text](https://github.com/adam-p/markdown-here/raw/master/src/common/images/icon48.png)"
        assert markdown_strip(markdown) == "alt text"

    def test_text_is_not_escaped(self):
        assert markdown_strip('a < b & "c"') == 'a < b & "c"'


class TestBlocks:
    """Line breaks at block boundaries"""

    def test_basic_header(self):
        assert markdown_strip("# Header") == "Header\n"

    def test_alt_header(self):
        markdown = "\nHeader\n======\n"
        assert markdown_strip(markdown) == "Header\n"

    def test_mixed_list(self):
        markdown = """
1. First ordered list item
2. Another item
1. Actual numbers don't matter, just that it's a number
  1. Ordered sub-list
4. And another item.
"""
        expected = """
First ordered list item
Another item
Actual numbers don't matter, just that it's a number
Ordered sub-list
And another item.
"""
        assert markdown_strip(markdown) == expected

    def test_basic_list(self):
        assert markdown_strip("\n* alpha\n* beta\n") == "\nalpha\nbeta\n"

    def test_list_with_header(self):
        """Heading end and list start each add a newline"""
        markdown = "# Title\n* alpha\n* beta\n"
        assert markdown_strip(markdown) == "Title\n\nalpha\nbeta\n"

    def test_code_block(self):
        markdown = '\n```javascript\nvar s = "JavaScript syntax highlighting";\nalert(s);\n```'
        expected = '\nvar s = "JavaScript syntax highlighting";\nalert(s);\n\n'
        assert markdown_strip(markdown) == expected

    def test_block_quote(self):
        markdown = (
            "> Blockquotes are very handy in email to emulate reply text.\n"
            "> This line is part of the same quote."
        )
        expected = (
            "Blockquotes are very handy in email to emulate reply text.\n"
            "This line is part of the same quote.\n"
        )
        assert markdown_strip(markdown) == expected

    def test_paragraph_end_adds_nothing(self):
        assert markdown_strip("one\n\ntwo") == "onetwo"

    def test_breaks_and_rules(self):
        assert markdown_strip("a  \nb\nc\n\n---\n\nd") == "a\nb\nc\nd"

    def test_tables_are_not_parsed(self):
        markdown = "| a |\n|---|\n| 1 |"
        assert markdown_strip(markdown) == "| a |\n|---|\n| 1 |"


class TestDegenerate:
    """Inputs with nothing to strip"""

    def test_empty(self):
        assert markdown_strip("") == ""

    def test_blank_lines(self):
        assert markdown_strip("\n\n") == ""

    def test_rule_only(self):
        assert markdown_strip("---") == "\n"


class TestExtensionsOff:
    """Only strikethrough is enabled when stripping"""

    def test_task_marker_is_text(self):
        assert markdown_strip("- [ ] task") == "\n[ ] task\n"

    def test_heading_attributes_are_text(self):
        assert markdown_strip("# Title {#intro}") == "Title {#intro}\n"

    def test_no_typography(self):
        assert markdown_strip('"a" -- b') == '"a" -- b'

    def test_separator_characters_kept(self):
        assert markdown_strip("a\x1f") == "a\x1f"
        assert markdown_strip("\x1c b \x1d") == "\x1c b \x1d"
