"""Business logic use cases."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from mdrss.core import (
    Feed,
    FeedAssembler,
    FeedConfig,
    FeedSerializer,
    ParseResult,
    PostParser,
    SourceDocument,
)


@dataclass
class FeedBuildResult:
    """Result of one build run."""

    feed: Feed
    xml: str
    failures: list[ParseResult] = field(default_factory=list)


class FeedService:
    """Service for turning markdown documents into a serialized feed."""

    def __init__(
        self,
        config: FeedConfig,
        parser: PostParser,
        serializer: FeedSerializer,
        assembler: Optional[FeedAssembler] = None,
        skip_invalid: bool = True,
        max_workers: int = 1,
        verbose: bool = True,
    ) -> None:
        self.config = config
        self.parser = parser
        self.serializer = serializer
        self.assembler = assembler or FeedAssembler()
        self.skip_invalid = skip_invalid
        self.max_workers = max_workers
        self.verbose = verbose

    def parse_documents(self, documents: Iterable[SourceDocument]) -> list[ParseResult]:
        """Parse every document independently, keeping input order."""
        documents = list(documents)

        def parse_one(document: SourceDocument) -> ParseResult:
            return self.parser.parse_document(document.filename, document.content, self.config.link)

        if self.max_workers > 1 and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                return list(executor.map(parse_one, documents))

        return [parse_one(document) for document in documents]

    def build(self, documents: Iterable[SourceDocument]) -> FeedBuildResult:
        """Parse, assemble and serialize.

        Raises:
            MissingOrInvalidDate: On the first bad file when skip_invalid is off
            InvalidFeedConfig: If the channel config is invalid
        """
        results = self.parse_documents(documents)
        failures = [result for result in results if not result.ok]

        self._log(f"\n📝 Parsed {len(results)} files")

        for failure in failures:
            if not self.skip_invalid:
                self._log(f"  └─ ❌ {failure.error}")
                raise failure.error
            self._log(f"  └─ ⚠️  Skipped: {failure.error}")

        posts = [result.post for result in results if result.ok]
        feed = self.assembler.assemble(self.config, posts)
        xml = self.serializer.serialize(feed)

        self._log(f"✓ Feed items: {len(feed.posts)}")
        if failures:
            self._log(f"⚠️  Skipped files: {len(failures)}")

        return FeedBuildResult(feed=feed, xml=xml, failures=failures)

    def save_feed(self, xml: str, output_path: Path) -> None:
        """Save feed to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(xml, encoding="utf-8")
        self._log(f"Feed saved to {output_path}")

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message)
