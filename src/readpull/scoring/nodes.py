"""Node tree with density scoring.

The tree has two kinds of nodes:

- ``Text`` leaves hold literal text and only contribute counts upward.
- ``Node`` containers own their children and aggregate statistics over
  them in ``compute()``.

Counters are only valid right after ``compute()`` ran on an ancestor
(usually the root). Any structural change leaves them stale until the
next pass.
"""

from __future__ import annotations

import logging
import math
import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from enum import IntFlag
from typing import Optional, Union

from .. import grouping
from ..models.config import TuningConfig
from .candidate import CandidateRegister

logger = logging.getLogger(__name__)

DEFAULT_TUNING = TuningConfig()


class ReparentingError(ValueError):
    """Raised when attaching a node that already has a parent."""


class ContentVariety(IntFlag):
    """Classification flags inherited from ancestors."""

    NORMAL = 0
    HYPERLINK = 1
    BAD = 2


class _TreeNode:
    """Common state for leaves and containers."""

    def __init__(self) -> None:
        self._parent_ref: Optional[weakref.ReferenceType[Node]] = None

        self.chars = 0
        self.hyperchars = 0
        self.tags = 1
        self.score = 0.0

    @property
    def parent(self) -> Optional[Node]:
        """
        Containing node, or None.

        The link is a weak reference: the parent owns its children, not
        the reverse. Callers must hold the root of a tree for as long as
        they use it. Once a parent is garbage collected this returns None
        and the orphan may be attached elsewhere.
        """
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, node: Optional[Node]) -> None:
        self._parent_ref = None if node is None else weakref.ref(node)

    def compute(self, register: Optional[CandidateRegister] = None) -> None:
        raise NotImplementedError

    def can_reject(self) -> bool:
        return False


class Text(_TreeNode):
    """Leaf holding a run of literal text."""

    def __init__(self, content: str, hyperlink: bool = False) -> None:
        super().__init__()
        self.content = content
        self.hyperlink = hyperlink
        self.compute()

    def append(self, text: str) -> None:
        """Extend the literal content; counters update immediately."""
        self.content += text
        self.compute()

    def compute(self, register: Optional[CandidateRegister] = None) -> None:
        # Leaves never become candidates; the register is ignored
        self.chars = len(self.content)
        self.hyperchars = self.chars if self.hyperlink else 0
        self.tags = 1

    def __str__(self) -> str:
        return self.content

    def __repr__(self) -> str:
        return f"Text({self.content!r}, hyperlink={self.hyperlink})"


AnyNode = Union["Node", Text]


class Node(_TreeNode):
    """
    Container node with aggregated statistics.

    Example:
        root = Node("div")
        p = root.append_child(Node("p"))
        p.append_child(Text("Hello world"))
        root.compute()
        print(p.score, str(root))
    """

    def __init__(
        self,
        tag_name: str,
        variety: ContentVariety = ContentVariety.NORMAL,
        tuning: Optional[TuningConfig] = None,
        block_tags: Optional[frozenset[str]] = None,
    ) -> None:
        super().__init__()
        self.tag_name = tag_name
        self.variety = variety
        self.children: list[AnyNode] = []
        self.attributes: dict[str, str] = {}
        self.sum = 0.0

        self._tuning = tuning or DEFAULT_TUNING
        self._block_tags = grouping.BLOCK_TAGS if block_tags is None else block_tags

    @property
    def tuning(self) -> TuningConfig:
        return self._tuning

    @property
    def block_tags(self) -> frozenset[str]:
        return self._block_tags

    def append_child(self, node: AnyNode) -> AnyNode:
        """
        Attach ``node`` as the last child.

        Raises:
            ReparentingError: If ``node`` already belongs to a container
        """
        if node.parent is not None:
            raise ReparentingError(
                f"append_child: attempted reparenting of {node!r} into <{self.tag_name}>"
            )
        node.parent = self
        self.children.append(node)
        return node

    def last_child(self) -> Optional[AnyNode]:
        if not self.children:
            return None
        return self.children[-1]

    def of_variety(self, variety: ContentVariety) -> bool:
        return bool(self.variety & variety)

    def compute(self, register: Optional[CandidateRegister] = None) -> None:
        """
        Recompute counters for this subtree, children first.

        ``score`` rewards text per tag and penalises hyperlink text.
        ``sum`` totals the immediate children's scores and is what the
        register compares. Without a register no candidate is tracked.
        """
        self.chars = self.hyperchars = 0
        self.tags = 1
        self.sum = 0.0

        for child in self.children:
            child.compute(register)
            self.chars += child.chars
            self.hyperchars += child.hyperchars
            self.tags += child.tags
            self.sum += child.score

        self.score = self.chars / self.tags * math.log2((self.chars + 1) / (self.hyperchars + 1))

        if self.of_variety(ContentVariety.BAD):
            self.score *= self._tuning.bad_multiplier

        if register is not None:
            register.offer(self, self.sum)

    def can_reject(self) -> bool:
        """Whether removing this node would improve its parent."""
        tuning = self._tuning
        return (
            self.score < tuning.reject_cutoff or self.tags > self.score * tuning.reject_multiplier
        ) and self.lowers_parent_score()

    def lowers_parent_score(self) -> bool:
        """
        Whether this node drags its parent's score down.

        Detaches the node, re-aggregates the parent subtree and compares
        scores. The tree and the parent's counters are restored before
        returning. Cost is one aggregation of the parent's subtree.
        """
        parent = self.parent
        if parent is None:
            return False

        score = parent.score
        with self._detached(parent):
            parent.compute()
            result = score < parent.score
        return result

    @contextmanager
    def _detached(self, parent: Node) -> Iterator[int]:
        """Temporarily remove this node from ``parent``; restore on every exit path."""
        index = parent.children.index(self)
        saved = (parent.chars, parent.hyperchars, parent.tags, parent.score, parent.sum)

        del parent.children[index]
        self.parent = None
        try:
            yield index
        finally:
            parent.children.insert(index, self)
            self.parent = parent
            parent.chars, parent.hyperchars, parent.tags, parent.score, parent.sum = saved

    def contains_text(self) -> bool:
        """Whether direct text children hold more than half of the subtree's text."""
        chars = sum(child.chars for child in self.children if isinstance(child, Text))
        return chars > self.chars * 0.5

    def iter_nodes(self) -> Iterator[Node]:
        """Yield this node and every descendant container, preorder."""
        yield self
        for child in self.children:
            if isinstance(child, Node):
                yield from child.iter_nodes()

    def __str__(self) -> str:
        parts = [str(child) for child in self.children]
        if self.tag_name in self._block_tags:
            parts.insert(0, "\n\n")
            parts.append("\n\n")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Node({self.tag_name!r}, children={len(self.children)}, score={self.score:.2f})"
