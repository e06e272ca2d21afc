"""Best-candidate tracking for a single aggregation pass."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .nodes import Node


@dataclass
class CandidateRegister:
    """
    Holds the container with the highest children score seen so far.

    A register lives for one aggregation pass. Create a fresh one per
    call to ``Node.compute`` and read ``node`` once the call returns.

    Example:
        register = CandidateRegister(node=root)
        root.compute(register)
        article = register.node
    """

    node: Optional[Node] = None
    value: float = -math.inf

    @classmethod
    def sentinel(cls) -> CandidateRegister:
        """Register whose recorded value is unreachable; no offer ever lands."""
        return cls(node=None, value=math.inf)

    def offer(self, node: Node, value: float) -> bool:
        """Record ``node`` if ``value`` strictly beats the current best."""
        if value > self.value:
            self.node = node
            self.value = value
            return True
        return False
