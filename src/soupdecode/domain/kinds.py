"""Shape descriptors — resolve Python type hints into decode kinds.

The walker never inspects a destination type directly; it asks
:func:`resolve` for a :class:`Shape` and dispatches on ``shape.kind``.

Mapping:

=====================================  ==========
Type hint                              Kind
=====================================  ==========
``HTMLUnmarshaler`` subclass           CUSTOM
dataclass                              STRUCT
``list[T]``, ``tuple[T, ...]``         SLICE
``tuple[A, B, ...]`` (fixed arity)     ARRAY
``T | None``                           OPTIONAL
``bool``                               BOOL
``int``, ``Int8`` ... ``Uint64``       INT
``float``, ``Float32``, ``Float64``    FLOAT
``str``                                STR
anything else                          UNSUPPORTED
=====================================  ==========
"""

from __future__ import annotations

import dataclasses
import functools
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Union

from soupdecode.domain.unmarshaler import is_unmarshaler


class Kind(Enum):
    CUSTOM = "custom"
    STRUCT = "struct"
    SLICE = "slice"
    ARRAY = "array"
    OPTIONAL = "optional"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    UNSUPPORTED = "unsupported"


# ---------------------------------------------------------------------------
# Sized numeric markers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IntBounds:
    """Bit width and signedness of a sized integer destination."""

    bits: int
    signed: bool = True

    @property
    def name(self) -> str:
        return f"{'Int' if self.signed else 'Uint'}{self.bits}"

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


@dataclass(frozen=True)
class FloatBits:
    """Precision of a sized float destination (32 or 64)."""

    bits: int

    @property
    def name(self) -> str:
        return f"Float{self.bits}"


Int8 = Annotated[int, IntBounds(8)]
Int16 = Annotated[int, IntBounds(16)]
Int32 = Annotated[int, IntBounds(32)]
Int64 = Annotated[int, IntBounds(64)]
Uint8 = Annotated[int, IntBounds(8, signed=False)]
Uint16 = Annotated[int, IntBounds(16, signed=False)]
Uint32 = Annotated[int, IntBounds(32, signed=False)]
Uint64 = Annotated[int, IntBounds(64, signed=False)]
Float32 = Annotated[float, FloatBits(32)]
Float64 = Annotated[float, FloatBits(64)]


# ---------------------------------------------------------------------------
# Shape
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Shape:
    """Resolved description of a destination type hint.

    Attributes:
        kind: Dispatch kind for the walker.
        tp: The bare type (``Annotated`` and generic arguments stripped).
        hint: The original hint, kept for display.
        args: Element hints: one for SLICE/OPTIONAL, L for an ARRAY of
            declared length L.
        extras: ``Annotated`` metadata attached to the hint.
        container: ``list`` or ``tuple`` for SLICE shapes.
    """

    kind: Kind
    tp: Any
    hint: Any
    args: tuple[Any, ...] = ()
    extras: tuple[Any, ...] = ()
    container: type | None = None

    @property
    def name(self) -> str:
        return display_name(self.hint)

    def extra(self, marker: type) -> Any:
        """Return the first ``Annotated`` extra of type *marker*, or None."""
        for item in self.extras:
            if isinstance(item, marker):
                return item
        return None


def _strip_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    if typing.get_origin(hint) is Annotated:
        return hint.__origin__, tuple(hint.__metadata__)
    return hint, ()


def resolve(hint: Any) -> Shape:
    """Resolve *hint* into a :class:`Shape`."""
    base, extras = _strip_annotated(hint)
    origin = typing.get_origin(base)
    args = typing.get_args(base)

    if is_unmarshaler(origin or base):
        return Shape(Kind.CUSTOM, origin or base, hint, extras=extras)

    if origin is Union or origin is types.UnionType:
        members = [a for a in args if a is not type(None)]
        if len(members) == 1 and len(args) == 2:
            return Shape(Kind.OPTIONAL, base, hint, (members[0],), extras)
        return Shape(Kind.UNSUPPORTED, base, hint, extras=extras)

    if origin is list and len(args) == 1:
        return Shape(Kind.SLICE, list, hint, args, extras, container=list)

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return Shape(Kind.SLICE, tuple, hint, args[:1], extras, container=tuple)
        return Shape(Kind.ARRAY, tuple, hint, args, extras)

    if base is bool:
        return Shape(Kind.BOOL, bool, hint, extras=extras)
    if base is int:
        return Shape(Kind.INT, int, hint, extras=extras)
    if base is float:
        return Shape(Kind.FLOAT, float, hint, extras=extras)
    if base is str:
        return Shape(Kind.STR, str, hint, extras=extras)

    if isinstance(base, type) and dataclasses.is_dataclass(base):
        return Shape(Kind.STRUCT, base, hint, extras=extras)

    return Shape(Kind.UNSUPPORTED, base, hint, extras=extras)


def display_name(hint: Any) -> str:
    """Short human-readable name for a type hint (no module prefixes)."""
    base, extras = _strip_annotated(hint)
    for extra in extras:
        if isinstance(extra, (IntBounds, FloatBits)):
            return extra.name
    if base is Ellipsis:
        return "..."
    if base is type(None):
        return "None"
    origin = typing.get_origin(base)
    args = typing.get_args(base)
    if origin is Union or origin is types.UnionType:
        return " | ".join(display_name(a) for a in args)
    if origin is not None:
        inner = ", ".join(display_name(a) for a in args)
        return f"{getattr(origin, '__name__', repr(origin))}[{inner}]"
    if isinstance(base, type):
        return base.__name__
    return repr(base).replace("typing.", "")


# ---------------------------------------------------------------------------
# Struct introspection
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldShape:
    """A dataclass field together with its resolved hint."""

    field: dataclasses.Field[Any]
    hint: Any

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def extras(self) -> tuple[Any, ...]:
        return _strip_annotated(self.hint)[1]


@functools.cache
def struct_fields(cls: type) -> tuple[FieldShape, ...]:
    """Return the decodable fields of dataclass *cls* in declaration order.

    Fields whose name starts with an underscore are private and skipped.

    Raises:
        NameError: If a forward reference in the annotations cannot be
            resolved (e.g. a class defined inside a function body).
    """
    hints = typing.get_type_hints(cls, include_extras=True)
    return tuple(
        FieldShape(f, hints[f.name])
        for f in dataclasses.fields(cls)
        if not f.name.startswith("_")
    )


def allocate(tp: type) -> Any:
    """Create an empty instance of *tp* for the walker to populate.

    Tries the no-argument constructor first.  Dataclasses with required
    fields are created without running ``__init__``; fields that declare a
    default or default factory are still initialised.
    """
    try:
        return tp()
    except TypeError:
        obj = tp.__new__(tp)
        if dataclasses.is_dataclass(tp):
            for f in dataclasses.fields(tp):
                if f.default is not dataclasses.MISSING:
                    object.__setattr__(obj, f.name, f.default)
                elif f.default_factory is not dataclasses.MISSING:
                    object.__setattr__(obj, f.name, f.default_factory())
        return obj
