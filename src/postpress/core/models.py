"""Data models for the publishing pipeline"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from postpress.core.errors import MissingMetadata, PublishError


REQUIRED_KEYS = ("layout", "permalink", "title", "path")


@dataclass(frozen=True)
class Document:
    """Raw input text and the path it was read from."""
    source: str
    text: str


class FrontMatter(BaseModel):
    """Ordered string mapping parsed from the leading block, plus its exact source text."""
    model_config = {"frozen": True}

    entries: dict[str, str] = Field(default_factory=dict)
    raw: str = ""                   # block text including both marker lines

    def __bool__(self) -> bool:
        return bool(self.raw)

    def get(self, key: str, default: str = None) -> str | None:
        return self.entries.get(key, default)


class PostMetadata(BaseModel):
    """Typed view of the recognized front-matter fields."""
    model_config = {"frozen": True}

    layout: str
    permalink: str
    title: str
    path: str
    extra: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_frontmatter(cls, frontmatter: FrontMatter, source: str = None) -> "PostMetadata":
        """Validate required keys and split the remainder into extra."""
        missing = [k for k in REQUIRED_KEYS if not frontmatter.entries.get(k)]
        if missing:
            raise MissingMetadata(source, missing)
        known = {k: frontmatter.entries[k] for k in REQUIRED_KEYS}
        extra = {k: v for k, v in frontmatter.entries.items() if k not in REQUIRED_KEYS}
        return cls(**known, extra=extra)

    def variables(self) -> dict[str, Any]:
        """Template variables: extra keys first, recognized fields on top, `page` holding all of them."""
        page = {**self.extra, "layout": self.layout, "permalink": self.permalink,
                "title": self.title, "path": self.path}
        return {**page, "page": page}


class CodeBlock(BaseModel):
    """Literal source of a fenced block and its language tag."""
    model_config = {"frozen": True}

    language: str = ""
    source: str
    line: int                       # 1-based line of the opening fence within the body
    closed: bool = True


@dataclass(frozen=True)
class RenderedBody:
    html: str
    code_blocks: list[CodeBlock] = field(default_factory=list)
    warnings: list[PublishError] = field(default_factory=list)


@dataclass(frozen=True)
class Layout:
    """A named template, optionally wrapped by a parent layout."""
    name: str
    template: str
    parent: str | None = None


@dataclass(frozen=True)
class RenderedPage:
    source: str
    metadata: PostMetadata
    layout: str
    html: str
    warnings: list[PublishError] = field(default_factory=list)
