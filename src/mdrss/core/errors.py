"""Error types raised or returned by the feed pipeline."""

from typing import Optional


class FeedError(Exception):
    """Base class for feed pipeline errors."""


class InvalidFeedConfig(FeedError, ValueError):
    """Required channel fields are missing or empty."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Feed config has missing or invalid fields: {', '.join(fields)}")


class MissingOrInvalidDate(FeedError, ValueError):
    """A post has no usable publish date."""

    def __init__(self, filename: str, value: Optional[str] = None) -> None:
        self.filename = filename
        self.value = value
        if value is None:
            message = f"{filename}: no date in front matter"
        else:
            message = f"{filename}: unrecognised date {value!r}"
        super().__init__(message)
