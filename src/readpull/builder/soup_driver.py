"""Drive tree construction from a BeautifulSoup document."""

import logging
import re
from typing import Union

from bs4 import BeautifulSoup, Tag
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction

from ..grouping import AUTOCLOSE_TAGS
from .protocols import TreeEvents

logger = logging.getLogger(__name__)

_IGNORED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


def detect_encoding(html: bytes) -> str:
    """Detect character encoding from HTML content."""
    try:
        # Quick regex check for meta charset
        head = html[:2048].decode("latin-1", errors="ignore")
        charset_match = re.search(r'charset=["\']?([^"\'\s>;]+)', head, re.IGNORECASE)
        if charset_match:
            return charset_match.group(1).strip()
    except UnicodeDecodeError:
        pass
    return "utf-8"


def decode_html(html: Union[bytes, str]) -> str:
    """Decode raw HTML bytes using the declared charset, falling back to UTF-8."""
    if isinstance(html, str):
        return html
    encoding = detect_encoding(html)
    try:
        return html.decode(encoding, errors="replace")
    except LookupError:
        logger.debug(f"Unknown charset {encoding!r}, decoding as utf-8")
        return html.decode("utf-8", errors="replace")


def feed_soup(
    soup: Union[BeautifulSoup, Tag],
    events: TreeEvents,
    autoclose_tags: frozenset[str] = AUTOCLOSE_TAGS,
) -> None:
    """
    Walk ``soup`` depth-first and emit builder events for each element.

    The walk uses an explicit stack so deeply nested documents do not hit
    the interpreter's recursion limit. Void elements are closed right
    after their attributes.

    Args:
        soup: Parsed document or subtree
        events: Receiver of open/attribute/text/close events
        autoclose_tags: Tags closed immediately after opening
    """
    stack: list[tuple[object, bool]] = [(child, False) for child in reversed(soup.contents)]

    while stack:
        element, closing = stack.pop()

        if closing:
            events.on_close_tag(element.name)  # type: ignore[attr-defined]
            continue

        if isinstance(element, Tag):
            name = element.name.lower()
            events.on_open_tag(name)
            for attr, value in element.attrs.items():
                if isinstance(value, (list, tuple)):
                    value = " ".join(value)
                events.on_attribute(attr, value)

            if name in autoclose_tags:
                events.on_close_tag(name)
                continue

            stack.append((element, True))
            stack.extend((child, False) for child in reversed(element.contents))

        elif isinstance(element, NavigableString) and not isinstance(element, _IGNORED_STRINGS):
            events.on_text(str(element))


def feed_html(
    html: Union[bytes, str],
    events: TreeEvents,
    autoclose_tags: frozenset[str] = AUTOCLOSE_TAGS,
) -> BeautifulSoup:
    """
    Parse ``html`` with BeautifulSoup and feed it to ``events``.

    Returns:
        The parsed soup, for callers that need it afterwards
    """
    soup = BeautifulSoup(decode_html(html), "html.parser")
    feed_soup(soup, events, autoclose_tags)
    return soup
