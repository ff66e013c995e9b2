"""Shared filtering utilities for sources."""

from pathlib import Path


def is_markdown_file(path: Path, extensions: tuple[str, ...]) -> bool:
    """
    Check if a path looks like a markdown post.
    
    Args:
        path: File path to check
        extensions: Accepted suffixes, e.g. (".md", ".markdown")
        
    Returns:
        True for regular, non-hidden files with an accepted suffix
        (case-insensitive)
    """
    if path.name.startswith("."):
        return False
    
    return path.suffix.lower() in {ext.lower() for ext in extensions}


def is_hidden(relative: Path) -> bool:
    """True if any component of a relative path starts with a dot."""
    return any(part.startswith(".") for part in relative.parts)
