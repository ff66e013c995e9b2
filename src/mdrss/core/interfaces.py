"""Core interfaces for adapters."""

from abc import ABC, abstractmethod

from mdrss.core.entities import Feed, SourceDocument


class DocumentSource(ABC):
    """Interface for reading markdown documents."""
    
    @abstractmethod
    def read_documents(self) -> list[SourceDocument]:
        """Return all documents as (filename, content) pairs."""
        pass


class FeedSerializer(ABC):
    """Interface for rendering a feed."""
    
    @abstractmethod
    def serialize(self, feed: Feed) -> str:
        """Render feed as text."""
        pass
