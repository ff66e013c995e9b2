"""Assemble parsed posts into an ordered feed."""

from typing import Iterable

from mdrss.core.entities import Feed, FeedConfig, Post


def order_posts(posts: Iterable[Post]) -> tuple[Post, ...]:
    """Newest first; equal dates by title, then link, ascending."""
    by_title = sorted(posts, key=lambda post: (post.title, post.link))
    # sort is stable, also with reverse=True
    return tuple(sorted(by_title, key=lambda post: post.publish_date, reverse=True))


class FeedAssembler:
    """Build a Feed from a config and successfully parsed posts."""
    
    def assemble(self, config: FeedConfig, posts: Iterable[Post]) -> Feed:
        """Validate the config and order the posts.
        
        Duplicate links are kept as-is and an empty collection gives an
        empty feed.
        """
        config.validate()
        return Feed(config=config, posts=order_posts(posts))
