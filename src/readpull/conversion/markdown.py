"""Markdown rendering of extracted article HTML."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urljoin

import html2text


class HtmlToMarkdown:
    """
    Converts extracted article HTML to Markdown.

    Uses html2text without line wrapping so paragraphs stay on one line.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(document.to_html(), "https://example.com/post")
    """

    def __init__(
        self,
        inline_links: bool = True,
        ignore_images: bool = True,
        ignore_links: bool = False,
        ignore_tables: bool = False,
    ):
        """
        Initialize the Markdown converter.

        Args:
            inline_links: Use inline [text](url) vs reference style
            ignore_images: Skip image conversion
            ignore_links: Render links as their text only
            ignore_tables: Skip table conversion
        """
        self._converter = html2text.HTML2Text()
        self._converter.body_width = 0

        self._converter.inline_links = inline_links
        self._converter.ignore_links = ignore_links
        self._converter.protect_links = False
        self._converter.wrap_links = False

        self._converter.ignore_images = ignore_images
        self._converter.ignore_tables = ignore_tables
        self._converter.unicode_snob = True
        self._converter.mark_code = True
        self._converter.single_line_break = False

    def _clean_output(self, markdown: str) -> str:
        """Clean up the converted Markdown."""
        markdown = re.sub(r"\n{3,}", "\n\n", markdown)
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))
        return markdown.strip() + "\n"

    def _fix_relative_links(self, markdown: str, base_url: str) -> str:
        """Ensure all links are absolute."""

        def replace_link(match: re.Match[str]) -> str:
            text = match.group(1)
            url = match.group(2)

            if url.startswith(("#", "http://", "https://", "mailto:", "tel:")):
                result: str = match.group(0)
                return result

            return f"[{text}]({urljoin(base_url, url)})"

        return re.sub(r"\[([^\]]+)\]\(([^)]+)\)", replace_link, markdown)

    def convert(self, html: str, url: str = "") -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            url: Source URL for resolving relative links (optional)

        Returns:
            Markdown string
        """
        self._converter.baseurl = url
        markdown = self._clean_output(self._converter.handle(html))
        if url:
            markdown = self._fix_relative_links(markdown, url)
        return markdown


class FrontmatterBuilder:
    """
    Builds YAML frontmatter for extracted articles.

    Example:
        builder = FrontmatterBuilder()
        frontmatter = builder.build(title="Hello", url="https://example.com", score=812.4)
    """

    def build(
        self,
        title: str | None = None,
        url: str | None = None,
        **extra_fields: Any,
    ) -> str:
        """
        Build YAML frontmatter string.

        Args:
            title: Article title
            url: Source URL
            **extra_fields: Additional frontmatter fields

        Returns:
            YAML frontmatter string (with --- delimiters)
        """
        lines = ["---"]

        if title:
            safe_title = title.replace('"', '\\"')
            lines.append(f'title: "{safe_title}"')

        if url:
            lines.append(f"source: {url}")

        for key, value in extra_fields.items():
            if value is None:
                continue
            if isinstance(value, str):
                safe_value = value.replace('"', '\\"')
                lines.append(f'{key}: "{safe_value}"')
            elif isinstance(value, float):
                lines.append(f"{key}: {value:.2f}")
            else:
                lines.append(f"{key}: {value}")

        lines.append("---")
        return "\n".join(lines) + "\n\n"
