"""HTMLUnmarshaler — opt-in capability for self-decoding destination types.

A type opts in by subclassing :class:`HTMLUnmarshaler` (or via
``HTMLUnmarshaler.register(cls)``).  Detection is an ``issubclass`` check
against the declared hierarchy; a class that merely happens to define an
``unmarshal_html`` method is *not* treated as custom-capable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bs4.element import Tag


class HTMLUnmarshaler(ABC):
    """Types that populate themselves from the raw nodes matched for them.

    When the walker reaches a value of such a type it hands over the node
    list of the current scope and does not descend into the value's fields.
    Any exception raised by :meth:`unmarshal_html` is wrapped as
    ``Reason.CUSTOM_UNMARSHAL_ERROR``.

    Usage::

        @dataclass
        class Price(HTMLUnmarshaler):
            amount: int = 0

            def unmarshal_html(self, nodes: list[Tag]) -> None:
                self.amount = int(nodes[0]["data-cents"])
    """

    @abstractmethod
    def unmarshal_html(self, nodes: list[Tag]) -> None:
        """Populate ``self`` from *nodes*; raise to signal failure."""


def is_unmarshaler(tp: Any) -> bool:
    """Return True if *tp* is a class that declared the custom capability."""
    return isinstance(tp, type) and issubclass(tp, HTMLUnmarshaler)
