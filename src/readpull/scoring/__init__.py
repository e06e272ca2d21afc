"""Density scoring, candidate selection and pruning over a node tree."""

from .candidate import CandidateRegister
from .nodes import ContentVariety, Node, ReparentingError, Text
from .pruning import prune

__all__ = [
    "CandidateRegister",
    "ContentVariety",
    "Node",
    "ReparentingError",
    "Text",
    "prune",
]
