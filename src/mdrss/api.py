"""One-call entry point: (filename, content) pairs in, RSS XML out."""

from typing import Iterable, Optional

from mdrss.adapters.rss import RssSerializer
from mdrss.core import FeedConfig, PostParser, SourceDocument
from mdrss.use_cases import FeedBuildResult, FeedService


def build_feed(
    documents: Iterable[tuple[str, str]],
    config: FeedConfig,
    parser: Optional[PostParser] = None,
    skip_invalid: bool = True,
) -> FeedBuildResult:
    """Build a feed from (filename, content) pairs.

    Undated files are skipped and listed in `failures`, unless
    skip_invalid is False, in which case the first one is raised.
    """
    service = FeedService(
        config=config,
        parser=parser or PostParser(),
        serializer=RssSerializer(),
        skip_invalid=skip_invalid,
        verbose=False,
    )
    return service.build(SourceDocument(filename, content) for filename, content in documents)


def generate_rss(
    documents: Iterable[tuple[str, str]],
    config: FeedConfig,
    parser: Optional[PostParser] = None,
) -> str:
    """Return the RSS 2.0 document for the given markdown files."""
    return build_feed(documents, config, parser).xml
