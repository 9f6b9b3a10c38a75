"""Public decode entry points — unmarshal, unmarshal_selection, Decoder.

Destinations are either dataclass instances (filled in place) or a
:class:`Ref` box for every other kind::

    page = Page(resources=[])
    unmarshal(html, page)

    names: Ref[list[str]] = Ref(Annotated[list[str], Selector(".name")])
    unmarshal(html, names)
    names.value  # ['Foo', 'Bar', ...]
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import IO, Any, Generic, TypeVar

import structlog
from soupsieve import SelectorSyntaxError

from soupdecode.domain.errors import CannotUnmarshalError, Reason
from soupdecode.domain.kinds import display_name
from soupdecode.domain.tags import parse_tag, tag_from_hint
from soupdecode.infrastructure.document import DEFAULT_PARSER, parse_document
from soupdecode.infrastructure.selection import Selection
from soupdecode.services.walker import DEFAULT_MAX_DEPTH, Walker

T = TypeVar("T")

log = structlog.get_logger(__name__)


@dataclass
class Ref(Generic[T]):
    """Mutable box used as the destination for non-dataclass kinds.

    Attributes:
        type: Destination type hint, e.g. ``list[Item]`` or
            ``Annotated[tuple[Item, Item], Selector(".item")]``.  A
            :class:`~soupdecode.domain.tags.Selector` extra narrows the
            root scope.
        value: Decoded value (reused as the starting point when set).
    """

    type: Any
    value: T | None = None


def _destination(dest: Any) -> tuple[Any, Any]:
    """Validate *dest* and return ``(type hint, current value)``.

    Raises:
        CannotUnmarshalError: ``NIL_VALUE`` or ``NON_POINTER``.
    """
    if dest is None:
        raise CannotUnmarshalError(Reason.NIL_VALUE)
    if isinstance(dest, Ref):
        if dest.type is None:
            raise CannotUnmarshalError(Reason.NIL_VALUE, type_name="Ref")
        return dest.type, dest.value
    if isinstance(dest, type) or not dataclasses.is_dataclass(dest):
        raise CannotUnmarshalError(Reason.NON_POINTER, type_name=display_name(type(dest)))
    return type(dest), dest


def _root_scope(selection: Selection, selector: str, type_name: str) -> Selection:
    try:
        return selection.find(selector)
    except SelectorSyntaxError as exc:
        raise CannotUnmarshalError(
            Reason.TYPE_CONVERSION_ERROR,
            exc,
            type_name=type_name,
            detail=f"invalid selector {selector!r}",
        ) from exc


def unmarshal_selection(
    selection: Selection,
    dest: Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Decode an existing *selection* into *dest*.

    Custom ``unmarshal_html`` hooks use this to re-enter generic decoding
    on the nodes they were handed.

    Raises:
        CannotUnmarshalError: On the first decode failure.
    """
    hint, current = _destination(dest)
    tag = parse_tag(tag_from_hint(getattr(hint, "__metadata__", ())))
    name = display_name(hint)

    try:
        scope = _root_scope(selection, tag.selector, name)
        result = Walker(max_depth=max_depth).walk(hint, current, scope, tag.value)
    except CannotUnmarshalError as exc:
        log.debug("decode.failed", type=name, reasons=[r.name for r in exc.reasons()])
        raise

    if isinstance(dest, Ref):
        dest.value = result
    log.debug("decode.complete", type=name, nodes=len(selection))


def unmarshal(
    raw: bytes | str,
    dest: Any,
    *,
    parser: str = DEFAULT_PARSER,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Parse *raw* markup and decode the whole document into *dest*.

    The destination is validated before anything is parsed.  Parser
    failures propagate unchanged.

    Raises:
        CannotUnmarshalError: ``NIL_VALUE``/``NON_POINTER`` for a bad
            destination, otherwise the chained error of the first failure.
    """
    _destination(dest)
    document = parse_document(raw, parser)
    unmarshal_selection(Selection.from_document(document), dest, max_depth=max_depth)


def unmarshal_as(
    raw: bytes | str,
    hint: type[T] | Any,
    *,
    parser: str = DEFAULT_PARSER,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> T:
    """Decode *raw* into a freshly allocated value of type *hint*."""
    ref: Ref[T] = Ref(hint)
    unmarshal(raw, ref, parser=parser, max_depth=max_depth)
    return ref.value  # type: ignore[return-value]


class Decoder:
    """Reads a whole markup document from a stream and decodes it.

    Usage::

        with open("page.html", "rb") as fh:
            Decoder(fh).decode(page)
    """

    def __init__(
        self,
        stream: IO[bytes] | IO[str],
        *,
        parser: str = DEFAULT_PARSER,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._stream = stream
        self.parser = parser
        self.max_depth = max_depth

    def decode(self, dest: Any) -> None:
        """Read the stream to the end and :func:`unmarshal` it into *dest*."""
        _destination(dest)
        raw = self._stream.read()
        unmarshal(raw, dest, parser=self.parser, max_depth=self.max_depth)
