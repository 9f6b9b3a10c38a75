"""Selection — an ordered, read-only set of matched nodes.

Thin adapter over BeautifulSoup4 and soupsieve that gives the decode
engine a goquery-like scope object.  A Selection never mutates: every
narrowing returns a new instance, so sibling lookups can share one.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from bs4 import BeautifulSoup
from bs4.element import Tag


class Selection:
    """Ordered, duplicate-free sequence of matched nodes.

    Usage::

        doc = parse_document(html)
        items = Selection.from_document(doc).find("#resources .resource")
        names = [items.eq(i).find(".name").text().strip() for i in range(len(items))]
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Iterable[Tag] = ()) -> None:
        seen: set[int] = set()
        unique: list[Tag] = []
        for node in nodes:
            if id(node) not in seen:
                seen.add(id(node))
                unique.append(node)
        self._nodes: tuple[Tag, ...] = tuple(unique)

    @classmethod
    def from_nodes(cls, nodes: Iterable[Tag]) -> Selection:
        """Build a Selection from an explicit node list."""
        return cls(nodes)

    @classmethod
    def from_document(cls, document: BeautifulSoup) -> Selection:
        """Wrap a whole parsed document as a single-node scope."""
        return cls((document,))

    # --- Node access ---

    @property
    def nodes(self) -> list[Tag]:
        """The matched nodes, in document order."""
        return list(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"Selection({len(self._nodes)} nodes)"

    def eq(self, index: int) -> Selection:
        """Single-node Selection for the node at *index* (empty if out of range)."""
        try:
            return Selection((self._nodes[index],))
        except IndexError:
            return Selection()

    # --- Narrowing ---

    def find(self, selector: str) -> Selection:
        """Descendants of every node matching the CSS *selector*.

        Results are the union over all nodes in this selection, in order,
        with duplicates removed.  An empty selector returns ``self``.
        """
        if not selector:
            return self
        matches: list[Tag] = []
        for node in self._nodes:
            matches.extend(node.select(selector))
        return Selection(matches)

    # --- Extraction ---

    def text(self) -> str:
        """Concatenated text content of all nodes (not trimmed)."""
        return "".join(node.get_text() for node in self._nodes)

    def html(self) -> str:
        """Inner HTML of the first node, or ``""`` when empty."""
        if not self._nodes:
            return ""
        return self._nodes[0].decode_contents()

    def attr(self, name: str, default: str = "") -> str:
        """Attribute *name* of the first node, or *default*."""
        if not self._nodes:
            return default
        value = self._nodes[0].get(name)
        if value is None:
            return default
        return _attr_value(value)

    @staticmethod
    def attributes(node: Tag) -> list[tuple[str, str]]:
        """``(key, value)`` pairs of *node*'s attributes in source order.

        Multi-valued attributes such as ``class`` are joined with spaces.
        """
        return [(key, _attr_value(value)) for key, value in node.attrs.items()]


def _attr_value(value: str | list[str]) -> str:
    if isinstance(value, list):
        return " ".join(value)
    return value
