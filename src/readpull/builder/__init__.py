"""Tree construction from markup events."""

from .protocols import TreeEvents
from .soup_driver import decode_html, detect_encoding, feed_html, feed_soup
from .tree_builder import TreeBuilder

__all__ = [
    # Protocols
    "TreeEvents",
    # Implementations
    "TreeBuilder",
    "decode_html",
    "detect_encoding",
    "feed_html",
    "feed_soup",
]
