"""
Entity data models

Plain data shared by the entity renderers: page metadata and author
references as written in article metadata.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Meta:
    """
    Page metadata inserted into every rendering context as "meta"

    Attributes:
        title: Page title
        description: Short plain-text summary (at most 200 characters)
        url: Page path relative to the site root (e.g. "@alice")
        image: Optional preview image URL
    """
    title: str
    description: str = ""
    url: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class AuthorId:
    """
    A single author or a list of co-authors of an article

    Written in metadata as a plain string (``author: alice``) or a list
    (``author: [alice, bob]``). Duplicates in a list are dropped, first
    occurrence wins.

    Attributes:
        ids: Author ids in declaration order
        single: True when declared as a plain string
    """
    ids: Tuple[str, ...]
    single: bool = True

    @classmethod
    def from_value(cls, value: Any) -> "AuthorId":
        """
        Build from a metadata value

        Raises:
            ValueError: If value is neither a string nor a list of strings
        """
        if isinstance(value, str):
            return cls((value,), single=True)
        if isinstance(value, (list, tuple)):
            authors: List[str] = []
            for author in value:
                if not isinstance(author, str):
                    raise ValueError(f"Expected plain string or string list, got {value!r}")
                if author not in authors:
                    authors.append(author)
            return cls(tuple(authors), single=False)
        raise ValueError(f"Expected plain string or string list, got {value!r}")

    def is_author(self, author_id: str) -> bool:
        """Case-insensitive membership test"""
        wanted = author_id.lower()
        return any(author.lower() == wanted for author in self.ids)

    def to_value(self) -> Union[str, List[str]]:
        """Inverse of from_value()"""
        if self.single:
            return self.ids[0]
        return list(self.ids)
