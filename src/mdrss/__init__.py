"""Convert a directory of markdown posts into an RSS 2.0 feed."""

from mdrss.adapters.rss import RssSerializer
from mdrss.core import (
    Feed,
    FeedAssembler,
    FeedConfig,
    InvalidFeedConfig,
    MissingOrInvalidDate,
    Post,
    PostParser,
)
from mdrss.api import build_feed, generate_rss
from mdrss.use_cases import FeedService

__version__ = "0.1.0"

__all__ = [
    "Feed",
    "FeedAssembler",
    "FeedConfig",
    "FeedService",
    "InvalidFeedConfig",
    "MissingOrInvalidDate",
    "Post",
    "PostParser",
    "RssSerializer",
    "build_feed",
    "generate_rss",
]
