"""Removal of low-value subtrees from a scored tree."""

import logging

from .nodes import Node

logger = logging.getLogger(__name__)


def prune(root: Node) -> int:
    """
    Remove every rejectable container below ``root``.

    Children are visited last to first so removals do not shift the
    indices still to be visited. Kept containers are pruned recursively
    unless they are paragraph-like (mostly direct text), so inline links
    and emphasis inside running text survive. Every removal re-aggregates
    the containers between it and ``root``, so each sibling is judged
    against its parent's current score.
    ``root`` must have been aggregated beforehand; it is re-aggregated
    once the sweep is done.

    Each ``can_reject`` call re-aggregates the parent's subtree, so a
    sweep costs the sum of parent subtree sizes over all visited nodes,
    quadratic in tree depth for deep chains.

    Args:
        root: Aggregated container to prune in place

    Returns:
        Number of containers removed
    """
    removed = _prune_children(root)
    root.compute()
    logger.debug(f"Pruned {removed} nodes under <{root.tag_name}>")
    return removed


def _prune_children(node: Node) -> int:
    removed = 0
    for index in range(len(node.children) - 1, -1, -1):
        child = node.children[index]
        if not isinstance(child, Node):
            continue
        if child.can_reject():
            del node.children[index]
            child.parent = None
            # Later siblings compare against the post-removal score
            node.compute()
            removed += 1
        elif not child.contains_text():
            nested = _prune_children(child)
            if nested:
                # A removal further down changed this node's counters too
                node.compute()
                removed += nested
    return removed
