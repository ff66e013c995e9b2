"""Core domain layer."""

from mdrss.core.assembler import FeedAssembler, order_posts
from mdrss.core.entities import Feed, FeedConfig, ParseResult, Post, SourceDocument
from mdrss.core.errors import FeedError, InvalidFeedConfig, MissingOrInvalidDate
from mdrss.core.front_matter import FrontMatterExtractor
from mdrss.core.interfaces import DocumentSource, FeedSerializer
from mdrss.core.post_parser import PostParser, slugify

__all__ = [
    "Post",
    "Feed",
    "FeedConfig",
    "ParseResult",
    "SourceDocument",
    "FeedError",
    "InvalidFeedConfig",
    "MissingOrInvalidDate",
    "FrontMatterExtractor",
    "PostParser",
    "FeedAssembler",
    "order_posts",
    "slugify",
    "DocumentSource",
    "FeedSerializer",
]
