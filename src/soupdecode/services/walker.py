"""Struct walker — recursive descent of a destination shape over a Selection.

The walker returns the decoded value for every hint it visits and the
caller assigns it (``setattr`` for struct fields, positional for slices).
Existing dataclass instances and lists are reused and filled in place,
except frozen instances below the root.  Those are never written; a
fresh instance is allocated in their place.

INVARIANT: first failure wins.  A failing field stops its struct level;
a failing element stops its slice.  Each level wraps the error it
received exactly once, so the chain has one entry per failing depth.
"""

from __future__ import annotations

import logging
from typing import Any

from soupsieve import SelectorSyntaxError

from soupdecode.domain.coerce import coerce
from soupdecode.domain.errors import CannotUnmarshalError, Reason
from soupdecode.domain.kinds import Kind, Shape, allocate, display_name, resolve, struct_fields
from soupdecode.domain.tags import VALUE_HTML, VALUE_TEXT, TagSpec, field_tag
from soupdecode.infrastructure.selection import Selection

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64

_LEAF_KINDS = frozenset({Kind.BOOL, Kind.INT, Kind.FLOAT, Kind.STR})


def _is_frozen(obj: Any) -> bool:
    params = getattr(type(obj), "__dataclass_params__", None)
    return params is not None and params.frozen


def _reusable(current: Any, tp: type, depth: int) -> bool:
    """Whether *current* may be filled in place at *depth*."""
    if not isinstance(current, tp):
        return False
    return depth == 0 or not _is_frozen(current)


def _assign(obj: Any, name: str, value: Any) -> None:
    if _is_frozen(obj):
        object.__setattr__(obj, name, value)
    else:
        setattr(obj, name, value)


def extract_value(selection: Selection, value: str = VALUE_TEXT) -> str:
    """Extract trimmed leaf text from *selection* per the tag's value mode."""
    if value == VALUE_HTML:
        return selection.html().strip()
    attribute = TagSpec(value=value).attribute
    if attribute is not None:
        return selection.attr(attribute).strip()
    return selection.text().strip()


class Walker:
    """Resolve destination shapes against a Selection.

    Args:
        max_depth: Nesting depth after which decoding fails; guards
            against self-referencing dataclass shapes.
    """

    def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def walk(
        self,
        hint: Any,
        current: Any,
        selection: Selection,
        value: str = VALUE_TEXT,
        depth: int = 0,
    ) -> Any:
        """Decode *selection* into a value of type *hint*.

        Args:
            hint: Destination type hint.
            current: The destination's present value, or None.  Reused when
                it is an instance of the right type, unless it is a frozen
                dataclass below the root.
            selection: Scope, already narrowed by the owning field's tag.
            value: Leaf extraction mode inherited from the owning tag.
            depth: Current nesting depth.

        Raises:
            CannotUnmarshalError: On the first failure below this point.
        """
        if depth > self.max_depth:
            raise CannotUnmarshalError(
                Reason.TYPE_CONVERSION_ERROR,
                type_name=display_name(hint),
                detail=f"maximum decode depth {self.max_depth} exceeded",
            )

        shape = resolve(hint)
        kind = shape.kind
        if kind is Kind.CUSTOM:
            return self._walk_custom(shape, current, selection, depth)
        if kind is Kind.STRUCT:
            return self._walk_struct(shape, current, selection, depth)
        if kind is Kind.SLICE:
            return self._walk_slice(shape, current, selection, value, depth)
        if kind is Kind.ARRAY:
            return self._walk_array(shape, selection, value, depth)
        if kind is Kind.OPTIONAL:
            return self.walk(shape.args[0], current, selection, value, depth + 1)
        if kind in _LEAF_KINDS:
            return coerce(shape, extract_value(selection, value))
        raise CannotUnmarshalError(
            Reason.TYPE_CONVERSION_ERROR,
            type_name=shape.name,
            detail=f"unsupported type {shape.name}",
        )

    # --- Composite kinds ---

    def _walk_custom(self, shape: Shape, current: Any, selection: Selection, depth: int) -> Any:
        obj = current if _reusable(current, shape.tp, depth) else allocate(shape.tp)
        logger.debug("Dispatching %s.unmarshal_html with %d nodes", shape.name, len(selection))
        try:
            obj.unmarshal_html(selection.nodes)
        except Exception as exc:
            raise CannotUnmarshalError(
                Reason.CUSTOM_UNMARSHAL_ERROR, exc, type_name=shape.name
            ) from exc
        return obj

    def _walk_struct(self, shape: Shape, current: Any, selection: Selection, depth: int) -> Any:
        try:
            fields = struct_fields(shape.tp)
        except NameError as exc:
            raise CannotUnmarshalError(
                Reason.TYPE_CONVERSION_ERROR,
                exc,
                type_name=shape.name,
                detail="cannot resolve field type hints",
            ) from exc

        obj = current if _reusable(current, shape.tp, depth) else allocate(shape.tp)
        for fs in fields:
            tag = field_tag(fs.field, fs.extras)
            if tag.ignore:
                continue
            try:
                scope = selection.find(tag.selector)
                decoded = self.walk(
                    fs.hint,
                    getattr(obj, fs.name, None),
                    scope,
                    tag.value,
                    depth + 1,
                )
            except SelectorSyntaxError as exc:
                raise CannotUnmarshalError(
                    Reason.TYPE_CONVERSION_ERROR,
                    exc,
                    type_name=shape.name,
                    field=fs.name,
                    detail=f"invalid selector {tag.selector!r}",
                ) from exc
            except CannotUnmarshalError as exc:
                raise CannotUnmarshalError(
                    Reason.TYPE_CONVERSION_ERROR, exc, type_name=shape.name, field=fs.name
                ) from exc
            _assign(obj, fs.name, decoded)
        return obj

    def _walk_elements(
        self,
        shape: Shape,
        hints: list[Any],
        existing: list[Any],
        selection: Selection,
        value: str,
        depth: int,
    ) -> list[Any]:
        items: list[Any] = []
        for i, hint in enumerate(hints):
            prev = existing[i] if i < len(existing) else None
            try:
                items.append(self.walk(hint, prev, selection.eq(i), value, depth + 1))
            except CannotUnmarshalError as exc:
                raise CannotUnmarshalError(
                    Reason.TYPE_CONVERSION_ERROR, exc, type_name=shape.name, field=i
                ) from exc
        return items

    def _walk_slice(
        self, shape: Shape, current: Any, selection: Selection, value: str, depth: int
    ) -> Any:
        count = len(selection)
        existing = list(current) if isinstance(current, (list, tuple)) else []
        items = self._walk_elements(
            shape, [shape.args[0]] * count, existing, selection, value, depth
        )
        if shape.container is tuple:
            return tuple(items)
        if isinstance(current, list):
            current[:] = items
            return current
        return items

    def _walk_array(self, shape: Shape, selection: Selection, value: str, depth: int) -> tuple[Any, ...]:
        declared = len(shape.args)
        found = len(selection)
        if found != declared:
            raise CannotUnmarshalError(
                Reason.ARRAY_LENGTH_MISMATCH,
                type_name=shape.name,
                detail=f"declared length {declared}, found {found} elements",
            )
        return tuple(self._walk_elements(shape, list(shape.args), [], selection, value, depth))
