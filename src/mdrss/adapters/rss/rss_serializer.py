"""RSS 2.0 serializer.

Uses feedgen to build the channel and items, so escaping and encoding are
handled by lxml. feedgen always marks guids as non-permalinks, drops empty
descriptions and only writes authors that have an email address; those
details are settled on the generated tree before it is pretty-printed.
"""

import re
from urllib.parse import urlparse

from feedgen.entry import FeedEntry
from feedgen.feed import FeedGenerator
from lxml import etree

from mdrss.core import Feed, FeedSerializer, Post

# Characters outside the XML 1.0 Char production cannot be written at all.
_INVALID_XML_CHARS_RE = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def clean_text(value: str) -> str:
    """Drop characters that XML 1.0 cannot represent."""
    return _INVALID_XML_CHARS_RE.sub("", value)


def is_permalink(post: Post) -> bool:
    """guid is a permalink only when it is an http(s) URL equal to the link."""
    if post.guid != post.link:
        return False
    parsed = urlparse(post.guid)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class RssSerializer(FeedSerializer):
    """Render a Feed as a pretty-printed RSS 2.0 document."""

    def serialize(self, feed: Feed) -> str:
        """Render the feed. Items keep the feed's order."""
        return self.serialize_bytes(feed).decode("utf-8")

    def serialize_bytes(self, feed: Feed) -> bytes:
        """Render the feed as UTF-8 bytes."""
        if not isinstance(feed, Feed):
            raise TypeError(f"Expected Feed, got {type(feed).__name__}")

        generator = self._build_generator(feed)
        root = etree.fromstring(generator.rss_str(pretty=False))
        self._finish_tree(root, feed)

        return etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="UTF-8")

    def _build_generator(self, feed: Feed) -> FeedGenerator:
        config = feed.config

        fg = FeedGenerator()
        fg.title(clean_text(config.title))
        fg.link(href=clean_text(config.link), rel="alternate")
        fg.description(clean_text(config.description))

        for name, value in config.optional_elements():
            if name == "category":
                fg.category(term=clean_text(value))
            else:
                getattr(fg, name)(clean_text(value))

        if feed.posts:
            fg.lastBuildDate(feed.posts[0].publish_date)

        # entry() appends the list as given; add_entry() prepends in newer feedgen
        fg.entry([self._build_entry(post) for post in feed.posts], replace=True)

        return fg

    def _build_entry(self, post: Post) -> FeedEntry:
        """Build single feed entry."""
        entry = FeedEntry()
        entry.title(clean_text(post.title) or "Untitled")
        entry.link(href=clean_text(post.link))
        entry.description(clean_text(post.description))
        entry.guid(clean_text(post.guid))
        entry.published(post.publish_date)
        return entry

    def _finish_tree(self, root: etree._Element, feed: Feed) -> None:
        channel = root.find("channel")

        # feedgen stamps the current time when no build date is given
        if not feed.posts:
            last_build = channel.find("lastBuildDate")
            if last_build is not None:
                channel.remove(last_build)

        for item, post in zip(channel.iterfind("item"), feed.posts):
            if item.find("description") is None:
                _insert_after(item, _text_element("description", ""), "link", "title")

            if post.author:
                _insert_after(item, _text_element("author", clean_text(post.author)), "description")

            guid = item.find("guid")
            if guid is not None:
                guid.set("isPermaLink", "true" if is_permalink(post) else "false")


def _text_element(tag: str, text: str) -> etree._Element:
    element = etree.Element(tag)
    element.text = text
    return element


def _insert_after(parent: etree._Element, element: etree._Element, *anchors: str) -> None:
    """Insert element after the first anchor tag found, else first."""
    for anchor in anchors:
        found = parent.find(anchor)
        if found is not None:
            parent.insert(parent.index(found) + 1, element)
            return
    parent.insert(0, element)
