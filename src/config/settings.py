"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use ZINEPRESS_ prefix (e.g., ZINEPRESS_TYPOGRAPHER=false).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use ZINEPRESS_ prefix.

    Examples:
        ZINEPRESS_TYPOGRAPHER=false
        ZINEPRESS_HIGHLIGHT_STYLE=monokai
        ZINEPRESS_WORKERS=8
    """

    model_config = SettingsConfigDict(
        env_prefix="ZINEPRESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Markdown rendering
    tables: bool = Field(
        default=True,
        description="Render GFM pipe tables",
    )

    strikethrough: bool = Field(
        default=True,
        description="Render ~~strikethrough~~ spans",
    )

    footnotes: bool = Field(
        default=True,
        description="Render [^label] footnote references and definitions",
    )

    tasklists: bool = Field(
        default=True,
        description="Render - [ ] / - [x] list items as checkboxes",
    )

    heading_attributes: bool = Field(
        default=True,
        description="Read trailing {#id .class} blocks on headings",
    )

    html: bool = Field(
        default=True,
        description="Pass raw HTML in markdown through to the output",
    )

    typographer: bool = Field(
        default=True,
        description="Smart quotes and typographic replacements in rendered HTML",
    )

    # Visitors
    mention_url: str = Field(
        default="https://github.com/{name}",
        description="Profile URL template for `@name` mentions",
    )

    highlight_style: str = Field(
        default="monokai",
        description="Pygments style used for fenced code blocks",
    )

    # Site build
    site_file: str = Field(
        default="zine.yaml",
        description="Name of the site metadata file at the project root",
    )

    default_avatar: str = Field(
        default="/static/zine.png",
        description="Avatar used for authors that declare none",
    )

    workers: int = Field(
        default=4,
        description="Worker threads used to render pages",
    )

    debug_mode: bool = Field(
        default=False,
        description="Print tracebacks for failed stages",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
