"""Protocol definitions for content conversion."""

from typing import Protocol, Union


class ContentExtractor(Protocol):
    """
    Protocol for extracting the readable content of an HTML page.

    Implementations keep the article body and drop navigation, headers,
    footers, ads and other boilerplate.
    """

    def extract(self, html: Union[bytes, str], url: str = "") -> str:
        """
        Extract main content from HTML.

        Args:
            html: Raw HTML bytes or decoded string
            url: Source URL (for relative link resolution)

        Returns:
            Extracted content in the configured output format
        """
        ...


class MarkdownConverter(Protocol):
    """Protocol for converting HTML to Markdown."""

    def convert(self, html: str, url: str = "") -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            url: Source URL (for resolving relative links)

        Returns:
            Markdown string
        """
        ...
