"""Markdown directory source."""

from pathlib import Path

from mdrss.adapters.sources.filters import is_hidden, is_markdown_file
from mdrss.core import DocumentSource, SourceDocument


class MarkdownDirectorySource(DocumentSource):
    """Read markdown posts from a directory tree."""
    
    emoji = "📂"
    name = "Markdown directory"
    
    def __init__(
        self,
        root: Path,
        extensions: tuple[str, ...] = (".md", ".markdown"),
        recursive: bool = True,
        encoding: str = "utf-8",
    ) -> None:
        self.root = Path(root)
        self.extensions = tuple(extensions)
        self.recursive = recursive
        self.encoding = encoding
    
    def read_documents(self) -> list[SourceDocument]:
        """Read every markdown file, sorted by relative path.
        
        Raises:
            NotADirectoryError: If root is not a directory
        """
        if not self.root.is_dir():
            raise NotADirectoryError(f"Not a directory: {self.root}")
        
        pattern = "**/*" if self.recursive else "*"
        documents = []
        
        for path in sorted(self.root.glob(pattern)):
            relative = path.relative_to(self.root)
            if not path.is_file() or is_hidden(relative):
                continue
            if not is_markdown_file(path, self.extensions):
                continue
            
            documents.append(SourceDocument(
                filename=relative.as_posix(),
                content=path.read_text(encoding=self.encoding),
            ))
        
        documents.sort(key=lambda doc: doc.filename)
        return documents
