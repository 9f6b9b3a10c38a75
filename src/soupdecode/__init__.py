"""soupdecode — decode HTML documents into typed dataclasses via CSS selectors.

Usage::

    from dataclasses import dataclass, field
    from soupdecode import selector, unmarshal

    @dataclass
    class Resource:
        name: str = selector(".name", default="")

    @dataclass
    class Page:
        resources: list[Resource] = selector("#resources .resource", default_factory=list)

    page = Page()
    unmarshal(html, page)
"""

from __future__ import annotations

from soupdecode.domain.errors import CannotUnmarshalError, Reason
from soupdecode.domain.kinds import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)
from soupdecode.domain.tags import Selector, selector
from soupdecode.domain.unmarshaler import HTMLUnmarshaler
from soupdecode.infrastructure.document import parse_document
from soupdecode.infrastructure.selection import Selection
from soupdecode.services.unmarshal import (
    Decoder,
    Ref,
    unmarshal,
    unmarshal_as,
    unmarshal_selection,
)

__version__ = "0.1.0"

__all__ = [
    "CannotUnmarshalError",
    "Decoder",
    "Float32",
    "Float64",
    "HTMLUnmarshaler",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Reason",
    "Ref",
    "Selection",
    "Selector",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "__version__",
    "parse_document",
    "selector",
    "unmarshal",
    "unmarshal_as",
    "unmarshal_selection",
]
