"""RSS rendering."""

from mdrss.adapters.rss.rss_serializer import RssSerializer, clean_text, is_permalink

__all__ = ["RssSerializer", "clean_text", "is_permalink"]
