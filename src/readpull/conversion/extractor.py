"""Readable content extraction from HTML pages."""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag

from ..builder import TreeBuilder, feed_html
from ..builder.tree_builder import ROOT_TAG
from ..models.config import ReadpullConfig
from ..scoring import CandidateRegister, Node, Text, prune
from .markdown import FrontmatterBuilder, HtmlToMarkdown
from .protocols import MarkdownConverter

logger = logging.getLogger(__name__)

# Attributes carried over when re-emitting HTML
KEEP_ATTRIBUTES = {"href", "src", "alt", "title"}

# Attributes holding URLs to resolve against the page URL
URL_ATTRIBUTES = {"href", "src"}


def normalize_text(text: str) -> str:
    """Collapse runs of spaces and blank lines left by serialization."""
    text = re.sub(r"[ \t\r\f\v]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


@dataclass
class Article:
    """Result of a single extraction."""

    title: Optional[str]
    text: str
    score: float
    tag_name: str
    pruned: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.text


class Document:
    """
    A parsed page: the scoring tree plus what was learned about it.

    Example:
        document = ReadabilityExtractor().parse(html)
        document.compute()
        document.prune()
        print(document.title, document.text())
    """

    def __init__(self, root: Node, title: Optional[str] = None):
        self.root = root
        self.title = title
        self._register: Optional[CandidateRegister] = None
        # Containers removed by prune() so far
        self.pruned = 0

    @property
    def candidate(self) -> Optional[Node]:
        """Best container from the last ``compute()``, or None before it ran."""
        if self._register is None:
            return None
        return self._register.node

    @property
    def candidate_score(self) -> float:
        """Children score of the best container (0.0 before ``compute()``)."""
        if self._register is None or self._register.node is None:
            return 0.0
        return self._register.value

    def compute(self) -> Node:
        """
        Aggregate the whole tree and select the best candidate.

        A fresh register is used per call, seeded with the root so a
        document always yields a candidate.
        """
        register = CandidateRegister(node=self.root)
        self.root.compute(register)
        self._register = register

        candidate = register.node
        if candidate is None:
            raise RuntimeError("Candidate register lost its root seed")
        logger.debug(
            f"Selected <{candidate.tag_name}> with children score {register.value:.2f} "
            f"({self.root.chars} chars, {self.root.tags} tags in document)"
        )
        return candidate

    def prune(self) -> int:
        """Prune the candidate subtree, computing first if needed."""
        candidate = self.candidate or self.compute()
        removed = prune(candidate)
        self.pruned += removed
        return removed

    def text(self) -> str:
        """Plain text of the candidate with paragraph breaks."""
        candidate = self.candidate or self.compute()
        return normalize_text(str(candidate))

    def to_html(self, url: str = "") -> str:
        """
        Re-emit the candidate subtree as HTML.

        Only a few attributes are kept; ``href``/``src`` are resolved
        against ``url`` when one is given.
        """
        candidate = self.candidate or self.compute()
        soup = BeautifulSoup("", "html.parser")

        stack: list[tuple[Union[Node, Text], Union[BeautifulSoup, Tag]]]
        if candidate.tag_name == ROOT_TAG:
            stack = [(child, soup) for child in reversed(candidate.children)]
        else:
            stack = [(candidate, soup)]

        while stack:
            node, container = stack.pop()
            if isinstance(node, Text):
                container.append(NavigableString(node.content))
                continue

            attrs = {}
            for name, value in node.attributes.items():
                if name not in KEEP_ATTRIBUTES:
                    continue
                if url and name in URL_ATTRIBUTES and not value.startswith(("#", "data:")):
                    value = urljoin(url, value)
                attrs[name] = value

            tag = soup.new_tag(node.tag_name, attrs=attrs)
            container.append(tag)
            stack.extend((child, tag) for child in reversed(node.children))

        return str(soup)


class ReadabilityExtractor:
    """
    Extracts the readable content of an HTML page.

    Builds a scoring tree from the page, picks the container whose
    children score highest, prunes it and renders it as plain text,
    Markdown or HTML.

    Example:
        extractor = ReadabilityExtractor()
        text = extractor.extract(html_bytes, "https://example.com/post")
    """

    def __init__(
        self,
        config: Optional[ReadpullConfig] = None,
        markdown_converter: Optional[MarkdownConverter] = None,
    ):
        """
        Initialize the extractor.

        Args:
            config: Extraction configuration (defaults to ReadpullConfig())
            markdown_converter: Converter used for markdown output
        """
        self._config = config or ReadpullConfig()
        self._markdown = markdown_converter or HtmlToMarkdown()
        self._frontmatter = FrontmatterBuilder()

    @property
    def config(self) -> ReadpullConfig:
        return self._config

    def parse(self, html: Union[bytes, str]) -> Document:
        """Parse HTML into a scoring tree without computing it."""
        grouping = self._config.grouping
        builder = TreeBuilder(grouping=grouping, tuning=self._config.tuning)
        feed_html(html, builder, grouping.autoclose_tags)
        return Document(builder.root, builder.title)

    def prepare(self, html: Union[bytes, str], url: str = "") -> Document:
        """
        Parse, score and (if configured) prune a page.

        The returned document can be passed to ``article()`` and
        ``render()`` without being processed again.

        Args:
            html: Raw HTML bytes or decoded string
            url: Source URL, used only for logging

        Returns:
            Computed document
        """
        document = self.parse(html)
        document.compute()
        if self._config.output.prune:
            document.prune()
        if not document.text():
            logger.warning(f"No readable content found{f' for {url}' if url else ''}")
        return document

    def article(self, document: Document) -> Article:
        """Summarise a prepared document as an Article."""
        candidate = document.candidate or document.compute()
        return Article(
            title=document.title,
            text=document.text(),
            score=document.candidate_score,
            tag_name=candidate.tag_name,
            pruned=document.pruned,
        )

    def render(self, document: Document, url: str = "") -> str:
        """
        Render a prepared document in the configured output format.

        Args:
            document: Document returned by ``prepare()``
            url: Source URL for resolving relative links

        Returns:
            Extracted text, Markdown or HTML; empty string if nothing scored
        """
        output = self._config.output
        candidate = document.candidate or document.compute()

        text = document.text()
        if not text:
            return ""

        if output.format == "text":
            return text

        if output.format == "html":
            return document.to_html(url)

        markdown = self._markdown.convert(document.to_html(url), url)
        if output.frontmatter:
            markdown = (
                self._frontmatter.build(
                    title=document.title,
                    url=url or None,
                    score=document.candidate_score,
                    element=candidate.tag_name,
                )
                + markdown
            )
        return markdown

    def extract_article(self, html: Union[bytes, str], url: str = "") -> Article:
        """
        Extract the article as plain text along with its metadata.

        Args:
            html: Raw HTML bytes or decoded string
            url: Source URL, used only for logging

        Returns:
            Article with title, text and candidate details
        """
        return self.article(self.prepare(html, url))

    def extract(self, html: Union[bytes, str], url: str = "") -> str:
        """
        Extract readable content in the configured output format.

        Args:
            html: Raw HTML bytes or decoded string
            url: Source URL for resolving relative links

        Returns:
            Extracted text, Markdown or HTML; empty string if nothing scored
        """
        return self.render(self.prepare(html, url), url)
