"""
Common utility functions and helpers.
"""
import logging
import os

logger = logging.getLogger(__name__)


def content_preview(text: str, max_length: int = 200, suffix: str = "...") -> str:
    """
    Return the first *max_length* characters of text.

    Args:
        text: Text to preview
        max_length: Number of characters kept
        suffix: Appended only when the text was cut

    Returns:
        Preview string
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix


def count_words(text: str) -> int:
    """Count whitespace-separated tokens."""
    return len(text.split())


def safe_remove(path: str) -> None:
    """Delete a file silently, logging warnings but never raising."""
    try:
        if path and os.path.exists(path):
            os.remove(path)
    except OSError as exc:
        logger.warning(f"Could not remove file {path!r}: {exc}")
