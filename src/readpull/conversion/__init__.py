"""Content conversion for readpull (HTML to text, Markdown, cleaned HTML)."""

from .extractor import Article, Document, ReadabilityExtractor, normalize_text
from .markdown import FrontmatterBuilder, HtmlToMarkdown
from .protocols import ContentExtractor, MarkdownConverter

__all__ = [
    # Protocols
    "ContentExtractor",
    "MarkdownConverter",
    # Implementations
    "Article",
    "Document",
    "ReadabilityExtractor",
    "HtmlToMarkdown",
    "FrontmatterBuilder",
    "normalize_text",
]
