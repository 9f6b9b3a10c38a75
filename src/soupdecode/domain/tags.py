"""Selector tags — per-field annotations and their parsing.

A tag is attached to a dataclass field either through field metadata::

    name: str = selector(".name")

or through an ``Annotated`` marker::

    name: Annotated[str, Selector(".name")] = ""

Tag grammar: ``"<css selector>[,<value>]"`` where the optional value is
``text`` (default), ``html`` or ``[attribute]``.  ``"!ignore"`` skips the
field entirely.  An empty tag inherits the current scope unchanged.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Any

TAG_KEY = "selector"
IGNORE_TAG = "!ignore"

VALUE_TEXT = "text"
VALUE_HTML = "html"

_ATTR_RE = re.compile(r"^\[\s*([^\]\s]+)\s*\]$")


@dataclass(frozen=True)
class Selector:
    """``Annotated`` marker carrying a selector tag."""

    tag: str


@dataclass(frozen=True)
class TagSpec:
    """A parsed selector tag.

    Attributes:
        selector: CSS selector narrowing the scope, or "" to inherit it.
        value: How leaf text is extracted: ``"text"``, ``"html"`` or
            ``"[attr]"``.
        ignore: Skip the field entirely.
    """

    selector: str = ""
    value: str = VALUE_TEXT
    ignore: bool = False

    @property
    def attribute(self) -> str | None:
        """Attribute name for ``[attr]`` values, else None."""
        m = _ATTR_RE.match(self.value)
        return m.group(1) if m else None


EMPTY_TAG = TagSpec()


def selector(tag: str, **field_kwargs: Any) -> Any:
    """Declare a dataclass field carrying a selector tag.

    Extra keyword arguments go to :func:`dataclasses.field`, e.g.
    ``selector(".price", default=0)``.
    """
    metadata = {**field_kwargs.pop("metadata", {}), TAG_KEY: tag}
    return dataclasses.field(metadata=metadata, **field_kwargs)


def _is_value_extractor(token: str) -> bool:
    return token in (VALUE_TEXT, VALUE_HTML) or bool(_ATTR_RE.match(token))


def parse_tag(tag: str | None) -> TagSpec:
    """Parse a raw tag string into a :class:`TagSpec`.

    Examples:
        >>> parse_tag("#resources .resource")
        TagSpec(selector='#resources .resource', value='text', ignore=False)
        >>> parse_tag("a.link,[href]")
        TagSpec(selector='a.link', value='[href]', ignore=False)
        >>> parse_tag("h1, h2").selector
        'h1, h2'
    """
    if not tag or not tag.strip():
        return EMPTY_TAG
    raw = tag.strip()
    if raw == IGNORE_TAG:
        return TagSpec(ignore=True)

    head, sep, tail = raw.rpartition(",")
    if sep and _is_value_extractor(tail.strip()):
        return TagSpec(selector=head.strip(), value=tail.strip())
    return TagSpec(selector=raw)


def tag_from_hint(extras: tuple[Any, ...]) -> str | None:
    """Return the first :class:`Selector` tag among ``Annotated`` extras."""
    for extra in extras:
        if isinstance(extra, Selector):
            return extra.tag
    return None


def field_tag(field: dataclasses.Field[Any], extras: tuple[Any, ...] = ()) -> TagSpec:
    """Resolve the tag of a dataclass field.

    Field metadata wins over an ``Annotated`` marker when both are present.
    """
    raw = field.metadata.get(TAG_KEY)
    if raw is None:
        raw = tag_from_hint(extras)
    return parse_tag(raw)
