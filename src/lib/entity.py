"""
Site entities and their two-phase lifecycle

Every entity is first parsed (read sources, fill defaults) and then
rendered into a Context and written below a destination directory:

    site = site_load(root)        # zine.yaml -> Site
    site.parse(root)              # authors, articles, front matter
    site.render(Context(), dest)  # one index.html per page

The markdown engine is only used as a pure subroutine here:
markdown_toHtml() for page bodies and description_extract() for the
"meta" description of articles and author pages.
"""

import contextvars
from html import escape
from datetime import date
from pathlib import Path
from dataclasses import dataclass, field
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..config import appsettings
from ..models.entity import AuthorId, Meta
from .dates import date_format, date_parse
from .errors import SiteError
from .helpers import capitalize
from .log import LOG
from .markdown import description_extract, markdown_toHtml
from .visitors import pageVisitor_make


class Context:
    """
    Named values available to page templates

    Each rendered page works on its own copy so entities rendered in
    parallel never see each other's values.
    """

    def __init__(self, values: Optional[Dict[str, Any]] = None) -> None:
        self.values: Dict[str, Any] = dict(values or {})

    def insert(self, key: str, value: Any) -> None:
        """Set a named value, replacing any previous one"""
        self.values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def copy(self) -> "Context":
        return Context(self.values)

    def __contains__(self, key: str) -> bool:
        return key in self.values


class Entity:
    """Base lifecycle: parse() normalizes, render() writes pages"""

    def parse(self, source: Path) -> None:
        pass

    def render(self, context: Context, dest: Path) -> None:
        raise NotImplementedError


@dataclass
class Author(Entity):
    """
    An author declared in the site's ``authors`` table

    Attributes:
        id: Key in the authors table
        name: Display name; pages fall back to the id when missing
        avatar: Avatar URL, site default when missing
        bio: Markdown biography
        is_editor: Whether the author is an editor
    """
    id: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    is_editor: bool = False

    @classmethod
    def from_dict(cls, author_id: str, data: Any) -> "Author":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SiteError(f"Author '{author_id}' must be a mapping")
        return cls(
            id=author_id,
            name=data.get("name"),
            avatar=data.get("avatar"),
            bio=data.get("bio"),
            is_editor=bool(data.get("editor", False)),
        )

    @property
    def slug(self) -> str:
        return f"@{self.id.lower()}"

    def parse(self, source: Path) -> None:
        if not self.avatar:
            self.avatar = appsettings.default_avatar

    def render(self, context: Context, dest: Path) -> None:
        context.insert(
            "meta",
            Meta(
                title=self.name or self.id,
                description=description_extract(self.bio) if self.bio else "",
                url=self.slug,
            ),
        )
        context.insert("author", self)
        visitor = pageVisitor_make(mentionUrl_get(context))
        context.insert("html", markdown_toHtml(self.bio or "", visitor))
        page_write(context, dest / self.slug)


@dataclass
class AuthorList(Entity):
    """The /authors page: every author with their article count"""
    authors: List[Tuple[Author, int]] = field(default_factory=list)

    def author_record(self, author: Author, article_count: int) -> None:
        self.authors.append((author, article_count))

    def render(self, context: Context, dest: Path) -> None:
        context.insert("meta", Meta(title="Authors", url="authors"))
        context.insert("authors", self.authors)
        items = [
            f'<li><a href="/{escape(author.slug)}">{escape(author.name or author.id)}</a>'
            f" ({count})</li>"
            for author, count in self.authors
        ]
        context.insert("html", "<ul>\n" + "\n".join(items) + "\n</ul>\n")
        page_write(context, dest / "authors")


@dataclass
class Article(Entity):
    """
    A markdown article listed in the site's ``articles`` table

    Metadata can be given in zine.yaml or as YAML front matter in the
    article file; values in zine.yaml win.
    """
    file: str
    title: str = ""
    slug: str = ""
    author: Optional[AuthorId] = None
    pub_date: Optional[date] = None
    markdown: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Article":
        if not isinstance(data, dict) or not data.get("file"):
            raise SiteError(f"Article entry needs a 'file': {data!r}")
        article = cls(
            file=str(data["file"]),
            title=str(data.get("title") or ""),
            slug=str(data.get("slug") or ""),
        )
        article.metadata_apply(data)
        return article

    def metadata_apply(self, data: Dict[str, Any]) -> None:
        """Fill author and pub_date from metadata when not already set"""
        if self.author is None and data.get("author") is not None:
            try:
                self.author = AuthorId.from_value(data["author"])
            except ValueError as e:
                raise SiteError(f"Article '{self.file}': {e}") from e
        if self.pub_date is None and data.get("pub_date") is not None:
            self.pub_date = date_parse(data["pub_date"])

    def parse(self, source: Path) -> None:
        path = source / self.file
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SiteError(f"Cannot read article {path}: {e}") from e

        front_matter, self.markdown = frontMatter_split(text)
        self.metadata_apply(front_matter)
        if not self.slug:
            self.slug = str(front_matter.get("slug") or Path(self.file).stem)
        if not self.title:
            self.title = str(front_matter.get("title") or capitalize(self.slug))
        LOG(f"Parsed article {self.file} ({len(self.markdown)} chars)", level=3)

    def render(self, context: Context, dest: Path) -> None:
        context.insert(
            "meta",
            Meta(
                title=self.title,
                description=description_extract(self.markdown),
                url=self.slug,
            ),
        )
        context.insert("article", self)
        context.insert("byline", self.byline_build())
        visitor = pageVisitor_make(mentionUrl_get(context))
        context.insert("html", markdown_toHtml(self.markdown, visitor))
        page_write(context, dest / self.slug)

    def byline_build(self) -> str:
        parts = []
        if self.author is not None:
            links = [f'<a href="/@{escape(a.lower())}">{escape(a)}</a>' for a in self.author.ids]
            parts.append(", ".join(links))
        if self.pub_date is not None:
            parts.append(f"<time>{date_format(self.pub_date)}</time>")
        return f'<p class="byline">{" · ".join(parts)}</p>\n' if parts else ""


@dataclass
class Site(Entity):
    """
    Root entity loaded from zine.yaml

    Attributes:
        title: Site title
        url: Public base URL, used for og:url
        authors: Authors keyed by id
        articles: Articles in declaration order
        mention_url: Profile URL template for `@name` mentions on this
                     site; appsettings.mention_url when None
    """
    title: str
    url: str = ""
    authors: Dict[str, Author] = field(default_factory=dict)
    articles: List[Article] = field(default_factory=list)
    mention_url: Optional[str] = None

    def parse(self, source: Path) -> None:
        for author in self.authors.values():
            author.parse(source)
        for article in self.articles:
            article.parse(source)
            if article.author is None:
                continue
            for author_id in article.author.ids:
                if not any(a.lower() == author_id.lower() for a in self.authors):
                    LOG(f"Warning: article '{article.file}' names unknown author '{author_id}'", level=1)

    def authorList_make(self) -> AuthorList:
        author_list = AuthorList()
        for author in self.authors.values():
            count = sum(
                1 for article in self.articles
                if article.author is not None and article.author.is_author(author.id)
            )
            author_list.author_record(author, count)
        return author_list

    def render(self, context: Context, dest: Path) -> int:
        """
        Render every page of the site

        Pages are rendered concurrently; each job gets its own copy of the
        context and builds its own visitor.

        Returns:
            Number of pages written
        """
        context.insert("site", self)
        entities: List[Entity] = [*self.articles, *self.authors.values(), self.authorList_make()]

        with ThreadPoolExecutor(max_workers=max(1, appsettings.workers)) as executor:
            futures = {
                executor.submit(
                    contextvars.copy_context().run, entity.render, context.copy(), dest
                ): entity
                for entity in entities
            }
            for future in as_completed(futures):
                future.result()

        self.index_render(context.copy(), dest)
        return len(entities) + 1

    def index_render(self, context: Context, dest: Path) -> None:
        context.insert("meta", Meta(title=self.title, url=""))
        articles = sorted(
            self.articles,
            key=lambda a: a.pub_date or date.min,
            reverse=True,
        )
        items = [
            f'<li><a href="/{escape(a.slug)}">{escape(a.title)}</a></li>'
            for a in articles
        ]
        context.insert("html", "<ul>\n" + "\n".join(items) + "\n</ul>\n")
        page_write(context, dest)


def mentionUrl_get(context: Context) -> Optional[str]:
    site: Optional[Site] = context.get("site")
    return site.mention_url if site is not None else None


def frontMatter_split(text: str) -> Tuple[Dict[str, Any], str]:
    """
    Split YAML front matter from a markdown document

    The front matter must start on the first line with ``---`` and end with
    the next ``---`` line.

    Returns:
        (metadata dict, markdown body); ({}, text) when there is none

    Raises:
        SiteError: If the front matter is not a valid YAML mapping
    """
    clean = text.lstrip("\ufeff")
    lines = clean.split("\n")
    if lines[0].strip() != "---":
        return {}, clean

    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            try:
                data = yaml.safe_load("\n".join(lines[1:i])) or {}
            except (yaml.YAMLError, ValueError) as e:
                raise SiteError(f"Invalid front matter: {e}") from e
            if not isinstance(data, dict):
                raise SiteError("Front matter must be a YAML mapping")
            return data, "\n".join(lines[i + 1:])

    return {}, clean


def site_load(root: Path) -> Site:
    """
    Load the site definition from ``root/zine.yaml``

    Raises:
        SiteError: If the file is missing or malformed
    """
    path = root / appsettings.site_file
    try:
        with open(path, "r", encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except OSError as e:
        raise SiteError(f"Cannot read {path}: {e}") from e
    except (yaml.YAMLError, ValueError) as e:
        raise SiteError(f"Failed to parse {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SiteError(f"{path} must contain a YAML mapping")

    authors = data.get("authors") or {}
    if not isinstance(authors, dict):
        raise SiteError("'authors' must be a mapping of id to author")
    articles = data.get("articles") or []
    if not isinstance(articles, list):
        raise SiteError("'articles' must be a list")

    return Site(
        title=str(data.get("title") or root.resolve().name),
        url=str(data.get("url") or ""),
        authors={str(k): Author.from_dict(str(k), v) for k, v in authors.items()},
        articles=[Article.from_dict(entry) for entry in articles],
    )


def zineFolder_find(path: Path) -> Optional[Tuple[Path, Site]]:
    """
    Find the nearest directory at or above path holding a loadable zine.yaml

    Returns:
        (folder, site), or None when no ancestor qualifies
    """
    for folder in [path.resolve(), *path.resolve().parents]:
        if not (folder / appsettings.site_file).is_file():
            continue
        try:
            return folder, site_load(folder)
        except SiteError as e:
            LOG(f"Ignoring {folder / appsettings.site_file}: {e}", level=2)
    return None


def page_build(context: Context) -> str:
    """
    Assemble a complete HTML document from the context

    Uses "meta", "site", "byline" and "html" from the context.
    """
    meta: Meta = context.get("meta", Meta(title=""))
    site: Optional[Site] = context.get("site")
    site_title = site.title if site else ""
    title = f"{meta.title} | {site_title}" if site_title and meta.title != site_title else meta.title

    extra = ""
    if site and site.url and meta.url is not None:
        extra += f'\n    <meta property="og:url" content="{escape(site.url.rstrip("/") + "/" + meta.url)}">'
    if meta.image:
        extra += f'\n    <meta property="og:image" content="{escape(meta.image)}">'

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{escape(title)}</title>
    <meta name="description" content="{escape(meta.description)}">
    <meta property="og:title" content="{escape(meta.title)}">
    <meta property="og:description" content="{escape(meta.description)}">{extra}
</head>
<body>
    <header><a href="/">{escape(site_title)}</a></header>
    <main>
        <h1>{escape(meta.title)}</h1>
{context.get("byline", "")}{context.get("html", "")}
    </main>
</body>
</html>
"""


def page_write(context: Context, directory: Path) -> Path:
    """Write the page for context to directory/index.html"""
    directory.mkdir(parents=True, exist_ok=True)
    output_file = directory / "index.html"
    output_file.write_text(page_build(context), encoding="utf-8")
    LOG(f"Wrote {output_file}", level=2)
    return output_file
