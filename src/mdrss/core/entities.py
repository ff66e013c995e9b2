"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, Optional

from mdrss.core.errors import InvalidFeedConfig, MissingOrInvalidDate


@dataclass(frozen=True)
class SourceDocument:
    """Raw markdown document as read by the caller."""
    
    filename: str
    content: str


@dataclass(frozen=True)
class Post:
    """One feed entry derived from a markdown file."""
    
    title: str
    link: str
    description: str
    publish_date: datetime
    guid: str
    author: Optional[str] = None
    source_filename: str = ""
    
    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Title cannot be empty")
        if not self.link or not self.link.strip():
            raise ValueError("Link cannot be empty")
        if self.publish_date.tzinfo is None:
            raise ValueError("Publish date must be timezone-aware")
        object.__setattr__(self, "publish_date", self.publish_date.astimezone(timezone.utc))


# Optional channel fields and the RSS element each one maps to.
OPTIONAL_CHANNEL_ELEMENTS = (
    ("language", "language"),
    ("copyright", "copyright"),
    ("managing_editor", "managingEditor"),
    ("webmaster", "webMaster"),
    ("category", "category"),
    ("generator", "generator"),
    ("docs", "docs"),
    ("ttl", "ttl"),
)


@dataclass(frozen=True)
class FeedConfig:
    """Channel-level metadata supplied by the caller."""
    
    title: str
    link: str
    description: str
    language: Optional[str] = None
    copyright: Optional[str] = None
    managing_editor: Optional[str] = None
    webmaster: Optional[str] = None
    category: Optional[str] = None
    generator: Optional[str] = None
    docs: Optional[str] = None
    ttl: Optional[str] = None
    
    def __post_init__(self) -> None:
        self.validate()
    
    def validate(self) -> None:
        """Raise InvalidFeedConfig if a required field is blank or ttl is not a number."""
        missing = [
            name
            for name in ("title", "link", "description")
            if not isinstance(getattr(self, name), str) or not getattr(self, name).strip()
        ]
        if self.ttl is not None and not str(self.ttl).strip().isdigit():
            missing.append("ttl")
        if missing:
            raise InvalidFeedConfig(missing)
    
    def optional_elements(self) -> Iterator[tuple[str, str]]:
        """Yield (element name, value) for every optional field that is set."""
        for attr, element in OPTIONAL_CHANNEL_ELEMENTS:
            value = getattr(self, attr)
            if value is not None and str(value) != "":
                yield element, str(value)


@dataclass(frozen=True)
class Feed:
    """Assembled feed: channel config plus posts, newest first."""
    
    config: FeedConfig
    posts: tuple[Post, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one markdown file."""
    
    filename: str
    post: Optional[Post] = None
    error: Optional[MissingOrInvalidDate] = None
    
    @property
    def ok(self) -> bool:
        return self.post is not None
