"""Stack-based construction of the scoring tree from markup events."""

import logging
import re
from typing import Optional

from ..grouping import BAD_ATTRIBUTES, compile_bad_attribute_pattern
from ..models.config import GroupingConfig, TuningConfig
from ..scoring.nodes import ContentVariety, Node, Text

logger = logging.getLogger(__name__)

ROOT_TAG = "#root"
TITLE_TAG = "title"

_WHITESPACE = re.compile(r"\s+")


class TreeBuilder:
    """
    Builds a ``Node`` tree from open/attribute/text/close events.

    Varieties are inherited: every container starts with its parent's
    flags, links add ``HYPERLINK`` and low-value tags or class/id values
    add ``BAD``. Text inside skipped elements is dropped, except for the
    first ``<title>``, which is kept as the document title.

    Example:
        builder = TreeBuilder()
        feed_html(html, builder)
        builder.root.compute()
    """

    def __init__(
        self,
        grouping: Optional[GroupingConfig] = None,
        tuning: Optional[TuningConfig] = None,
    ):
        """
        Initialize the builder.

        Args:
            grouping: Tag classification tables (defaults to the built-in tables)
            tuning: Scoring constants handed to every created container
        """
        self._grouping = grouping or GroupingConfig()
        self._tuning = tuning or TuningConfig()
        self._bad_pattern = compile_bad_attribute_pattern(self._grouping.bad_attribute_pattern)

        self.root = self._new_node(ROOT_TAG, ContentVariety.NORMAL)
        self._current = self.root

        self._skip_depth = 0
        self._in_title = False
        self._title_parts: Optional[list[str]] = None

    @property
    def current(self) -> Node:
        """The container receiving new children."""
        return self._current

    @property
    def title(self) -> Optional[str]:
        """Whitespace-normalised text of the first ``<title>``, if any."""
        if self._title_parts is None:
            return None
        return _WHITESPACE.sub(" ", "".join(self._title_parts)).strip() or None

    def _new_node(self, tag_name: str, variety: ContentVariety) -> Node:
        return Node(
            tag_name,
            variety=variety,
            tuning=self._tuning,
            block_tags=self._grouping.block_tags,
        )

    def on_open_tag(self, name: str) -> None:
        name = name.lower()

        if self._skip_depth or name in self._grouping.skip_tags or name == TITLE_TAG:
            self._skip_depth += 1
            if name == TITLE_TAG and self._title_parts is None:
                self._in_title = True
                self._title_parts = []
            return

        variety = self._current.variety
        if name in self._grouping.hyperlink_tags:
            variety |= ContentVariety.HYPERLINK
        if name in self._grouping.bad_tags:
            variety |= ContentVariety.BAD

        node = self._new_node(name, variety)
        self._current.append_child(node)
        self._current = node

    def on_attribute(self, name: str, value: str) -> None:
        if self._skip_depth:
            return

        node = self._current
        if node is self.root:
            return

        node.attributes[name] = value
        if name.lower() in BAD_ATTRIBUTES and self._bad_pattern.search(value):
            node.variety |= ContentVariety.BAD

    def on_text(self, text: str) -> None:
        if self._in_title and self._title_parts is not None:
            self._title_parts.append(text)
            return
        if self._skip_depth:
            return

        text = _WHITESPACE.sub(" ", text)
        last = self._current.last_child()

        if not text.strip():
            # Whitespace only survives as a separator after an element
            if not isinstance(last, Node):
                return
            text = " "

        if isinstance(last, Text):
            last.append(text)
        else:
            hyperlink = self._current.of_variety(ContentVariety.HYPERLINK)
            self._current.append_child(Text(text, hyperlink=hyperlink))

    def on_close_tag(self, name: str) -> None:
        if self._skip_depth:
            self._skip_depth -= 1
            if name.lower() == TITLE_TAG:
                self._in_title = False
            return

        parent = self._current.parent
        if parent is None:
            logger.debug(f"Ignoring unmatched </{name}> at document root")
            return
        self._current = parent
