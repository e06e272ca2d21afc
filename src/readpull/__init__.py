"""
readpull - Find and extract the readable content of an HTML page.

Usage:
    from readpull import ReadabilityExtractor, ReadpullConfig

    extractor = ReadabilityExtractor(ReadpullConfig())
    article = extractor.extract_article(html_bytes)
    print(article.title)
    print(article.text)
"""

__version__ = "1.0.0"

from .builder import TreeBuilder, feed_html
from .conversion import Article, Document, HtmlToMarkdown, ReadabilityExtractor
from .logging_config import setup_logging
from .models.config import GroupingConfig, OutputConfig, ReadpullConfig, TuningConfig
from .scoring import CandidateRegister, ContentVariety, Node, ReparentingError, Text, prune

__all__ = [
    "__version__",
    # Extraction
    "ReadabilityExtractor",
    "Document",
    "Article",
    "HtmlToMarkdown",
    # Config
    "ReadpullConfig",
    "TuningConfig",
    "GroupingConfig",
    "OutputConfig",
    # Tree
    "Node",
    "Text",
    "ContentVariety",
    "CandidateRegister",
    "ReparentingError",
    "TreeBuilder",
    "feed_html",
    "prune",
    # Logging
    "setup_logging",
]
