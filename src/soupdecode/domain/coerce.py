"""Type coercion — already-trimmed text into typed primitives.

The destination's declared kind alone selects the parse strategy; the
text is never sniffed for a "likely" type.
"""

from __future__ import annotations

import re
import struct

from soupdecode.domain.errors import CannotUnmarshalError, Reason
from soupdecode.domain.kinds import FloatBits, IntBounds, Kind, Shape

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_bool(text: str) -> bool:
    """Parse the literals ``"true"`` and ``"false"``.

    Raises:
        ValueError: For any other literal.
    """
    if text == "true":
        return True
    if text == "false":
        return False
    msg = f"invalid boolean literal {text!r}"
    raise ValueError(msg)


def parse_int(text: str, bounds: IntBounds | None = None) -> int:
    """Parse a base-10 integer literal, range-checked against *bounds*.

    Raises:
        ValueError: If *text* is not a plain decimal integer or does not
            fit the destination's bit width.
    """
    if not _INT_RE.fullmatch(text):
        msg = f"invalid integer literal {text!r}"
        raise ValueError(msg)
    value = int(text)
    if bounds is not None and not bounds.min <= value <= bounds.max:
        msg = f"value {text!r} out of range for {bounds.name}"
        raise ValueError(msg)
    return value


def parse_float(text: str, bits: FloatBits | None = None) -> float:
    """Parse a decimal or exponential float literal.

    ``Float32`` destinations are narrowed through IEEE-754 single precision.

    Raises:
        ValueError: If *text* is not a float literal.
        OverflowError: If the value does not fit single precision.
    """
    if "_" in text:
        msg = f"invalid float literal {text!r}"
        raise ValueError(msg)
    value = float(text)
    if bits is not None and bits.bits == 32:
        (value,) = struct.unpack("<f", struct.pack("<f", value))
    return value


def coerce(shape: Shape, text: str) -> bool | int | float | str:
    """Convert *text* into a value of the leaf *shape*.

    Raises:
        CannotUnmarshalError: ``TYPE_CONVERSION_ERROR`` on any failure.
            Numeric failures wrap the underlying parse error; boolean
            failures carry the invalid literal only.
    """
    if shape.kind is Kind.STR:
        return text
    if shape.kind is Kind.BOOL:
        try:
            return parse_bool(text)
        except ValueError as exc:
            raise CannotUnmarshalError(
                Reason.TYPE_CONVERSION_ERROR,
                type_name=shape.name,
                value=text,
                detail=str(exc),
            ) from None
    try:
        if shape.kind is Kind.INT:
            return parse_int(text, shape.extra(IntBounds))
        if shape.kind is Kind.FLOAT:
            return parse_float(text, shape.extra(FloatBits))
    except (ValueError, OverflowError) as exc:
        raise CannotUnmarshalError(
            Reason.TYPE_CONVERSION_ERROR, exc, type_name=shape.name, value=text
        ) from exc
    raise CannotUnmarshalError(
        Reason.TYPE_CONVERSION_ERROR,
        type_name=shape.name,
        detail=f"{shape.kind.value} is not a leaf kind",
    )
