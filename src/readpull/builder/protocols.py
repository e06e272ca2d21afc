"""Protocol definitions for tree construction."""

from typing import Protocol


class TreeEvents(Protocol):
    """
    Protocol for consumers of structural markup events.

    Drivers call ``on_open_tag`` for every element, ``on_attribute`` for
    each of its attributes, ``on_text`` for character data and
    ``on_close_tag`` exactly once per opened element, immediately for
    self-closing and void elements.
    """

    def on_open_tag(self, name: str) -> None:
        """Open a container for element ``name``."""
        ...

    def on_attribute(self, name: str, value: str) -> None:
        """Record an attribute on the most recently opened element."""
        ...

    def on_text(self, text: str) -> None:
        """Append character data to the current element."""
        ...

    def on_close_tag(self, name: str) -> None:
        """Close the current element."""
        ...
