"""Source adapters for reading markdown documents."""

from mdrss.adapters.sources.markdown_directory import MarkdownDirectorySource

__all__ = ["MarkdownDirectorySource"]
