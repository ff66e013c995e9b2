"""Build validated posts from front matter and markdown body."""

import hashlib
import re
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Iterator, Optional, Sequence

from mdrss.core.entities import ParseResult, Post
from mdrss.core.errors import MissingOrInvalidDate
from mdrss.core.front_matter import FrontMatterExtractor

# Tried in order, first match wins.
DEFAULT_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S%z",
)

DATE_KEYS = ("date", "pub_date")

DEFAULT_DESCRIPTION_MAX_LENGTH = 280
TRUNCATION_MARKER = "…"

_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+(.*?)(?:\s+#+)?\s*$")
_FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})(.*)$")
_SLUG_RE = re.compile(r"[^a-z0-9]+")
_STEM_SEPARATORS_RE = re.compile(r"[\s_\-.]+")


def slugify(stem: str) -> str:
    """Lowercase and collapse non-alphanumeric runs to `-`.

    Stems without any ASCII alphanumerics get a short digest instead, so a
    slug is never empty.
    """
    slug = _SLUG_RE.sub("-", stem.lower()).strip("-")
    if not slug:
        slug = hashlib.sha1(stem.encode("utf-8")).hexdigest()[:12]
    return slug


def filename_stem(filename: str) -> str:
    """Stem of a filename, ignoring any directory part."""
    return PurePosixPath(filename.replace("\\", "/")).stem


def join_link(base_link: str, slug: str) -> str:
    return f"{base_link.rstrip('/')}/{slug}"


class PostParser:
    """Turn (metadata, body, filename) into a Post.

    The parser holds only immutable settings, so one instance can be shared
    across threads.
    """

    def __init__(
        self,
        date_formats: Sequence[str] = DEFAULT_DATE_FORMATS,
        description_max_length: int = DEFAULT_DESCRIPTION_MAX_LENGTH,
        extractor: Optional[FrontMatterExtractor] = None,
    ) -> None:
        if not date_formats:
            raise ValueError("At least one date format is required")
        if description_max_length < len(TRUNCATION_MARKER) + 1:
            raise ValueError("description_max_length is too small")
        self.date_formats = tuple(date_formats)
        self.description_max_length = description_max_length
        self.extractor = extractor or FrontMatterExtractor()

    def parse(
        self,
        metadata: dict[str, str],
        body: str,
        source_filename: str,
        feed_base_link: str,
    ) -> ParseResult:
        """Build a Post, or return the date failure for this file."""
        metadata = {key.lower(): value for key, value in metadata.items()}

        try:
            publish_date = self._parse_publish_date(metadata, source_filename)
        except MissingOrInvalidDate as e:
            return ParseResult(filename=source_filename, error=e)

        stem = filename_stem(source_filename)
        link = join_link(feed_base_link, slugify(stem))
        author = metadata.get("author", "").strip() or None

        post = Post(
            title=self._resolve_title(metadata, body, stem),
            link=link,
            description=self._resolve_description(metadata, body),
            publish_date=publish_date,
            guid=link,
            author=author,
            source_filename=source_filename,
        )
        return ParseResult(filename=source_filename, post=post)

    def parse_document(self, filename: str, content: str, feed_base_link: str) -> ParseResult:
        """Extract front matter from raw content and parse it."""
        metadata, body = self.extractor.extract(content)
        return self.parse(metadata, body, filename, feed_base_link)

    def parse_date(self, value: str) -> Optional[datetime]:
        """Parse a date string against the accepted formats, in UTC."""
        value = value.strip()
        for fmt in self.date_formats:
            try:
                parsed = datetime.strptime(value, fmt)
            except ValueError:
                continue
            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
        return None

    def _parse_publish_date(self, metadata: dict[str, str], filename: str) -> datetime:
        raw = next((metadata[key] for key in DATE_KEYS if metadata.get(key, "").strip()), None)
        if raw is None:
            raise MissingOrInvalidDate(filename)

        parsed = self.parse_date(raw)
        if parsed is None:
            raise MissingOrInvalidDate(filename, raw)
        return parsed

    def _resolve_title(self, metadata: dict[str, str], body: str, stem: str) -> str:
        title = metadata.get("title", "").strip()
        if title:
            return title

        for line in outside_fences(body):
            match = _HEADING_RE.match(line or "")
            if match and match.group(1).strip():
                return match.group(1).strip()

        title = _STEM_SEPARATORS_RE.sub(" ", stem).strip().title()
        return title or "Untitled"

    def _resolve_description(self, metadata: dict[str, str], body: str) -> str:
        description = metadata.get("description", "").strip()
        if description:
            return description

        paragraph = first_paragraph(body)
        if len(paragraph) <= self.description_max_length:
            return paragraph

        cut = paragraph[:self.description_max_length - len(TRUNCATION_MARKER)].rstrip()
        return cut + TRUNCATION_MARKER


def outside_fences(body: str) -> Iterator[Optional[str]]:
    """Yield body lines outside fenced code blocks.

    Each fenced block is replaced by a single None, so callers can treat it
    as a paragraph boundary. A fence closes on a line of the same character
    at least as long as the opener; an unclosed fence runs to the end.
    """
    fence = ""

    for line in body.splitlines():
        match = _FENCE_RE.match(line)

        if fence:
            if match and _closes(fence, match.group(1), match.group(2)):
                fence = ""
            continue

        # backtick fences cannot carry backticks in their info string
        if match and not (match.group(1)[0] == "`" and "`" in match.group(2)):
            fence = match.group(1)
            yield None
            continue

        yield line


def first_paragraph(body: str) -> str:
    """First non-empty, non-heading paragraph, whitespace collapsed.

    Code blocks are never part of it.
    """
    block: list[str] = []

    for line in outside_fences(body):
        if line is None:
            if block:
                break
            continue

        stripped = line.strip()

        if not stripped:
            if block:
                break
            continue

        if _HEADING_RE.match(line):
            if block:
                break
            continue

        block.append(stripped)

    return " ".join(" ".join(block).split())


def _closes(fence: str, marker: str, rest: str) -> bool:
    return marker[0] == fence[0] and len(marker) >= len(fence) and not rest.strip()
