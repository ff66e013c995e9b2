"""Split markdown documents into front matter and body."""

DEFAULT_DELIMITER = "---"


class FrontMatterExtractor:
    """Detect a delimited metadata block at the start of a document.
    
    A block is opened by a line holding only the delimiter and closed by the
    next such line. Blank lines before the opening delimiter are allowed.
    Anything else means the document has no front matter, which is not an
    error: the whole text becomes the body.
    """
    
    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        if not delimiter.strip():
            raise ValueError("Delimiter cannot be empty")
        self.delimiter = delimiter.strip()
    
    def split(self, text: str) -> tuple[str, str]:
        """Return (metadata_text, body_text)."""
        lines = text.lstrip("\ufeff").splitlines(keepends=True)
        
        start = 0
        while start < len(lines) and not lines[start].strip():
            start += 1
        
        if start >= len(lines) or lines[start].strip() != self.delimiter:
            return "", text
        
        for end in range(start + 1, len(lines)):
            if lines[end].strip() == self.delimiter:
                metadata_text = "".join(lines[start + 1:end])
                body_text = "".join(lines[end + 1:])
                return metadata_text, body_text
        
        # Unclosed block
        return "", text
    
    def parse_metadata(self, metadata_text: str) -> dict[str, str]:
        """Parse `key: value` lines into a flat mapping with lowercased keys.
        
        Lines without a separator are skipped. The last occurrence of a
        key wins.
        """
        metadata: dict[str, str] = {}
        
        for line in metadata_text.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            
            key, sep, value = stripped.partition(":")
            if not sep:
                continue
            
            key = key.strip().lower()
            if not key:
                continue
            
            metadata[key] = _unquote(value.strip())
        
        return metadata
    
    def extract(self, text: str) -> tuple[dict[str, str], str]:
        """Return (metadata mapping, body_text)."""
        metadata_text, body_text = self.split(text)
        return self.parse_metadata(metadata_text), body_text


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
