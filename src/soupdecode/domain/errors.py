"""Decode error taxonomy — Reason enum and the chainable CannotUnmarshalError.

Every failure in the decode engine is raised as a single
:class:`CannotUnmarshalError`.  Nested failures are wrapped one level at a
time, so the outermost error carries a singly-linked chain down to the
root cause::

    TYPE_CONVERSION_ERROR (Page, field resources)
      -> ARRAY_LENGTH_MISMATCH (tuple[Resource])

Rendering walks the whole chain, so ``str(err)`` on the outer error names
every failing level.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum
from typing import Any

MESSAGE_PREFIX = "soupdecode: an error occurred decoding"


class Reason(StrEnum):
    """Closed set of reasons a decode step can fail."""

    NIL_VALUE = "destination argument is nil"
    NON_POINTER = "destination argument is not a reference"
    TYPE_CONVERSION_ERROR = "type conversion error"
    ARRAY_LENGTH_MISMATCH = "array length mismatch"
    CUSTOM_UNMARSHAL_ERROR = "custom unmarshaler returned an error"


class CannotUnmarshalError(Exception):
    """A reason-tagged decode failure, optionally wrapping its cause.

    Attributes:
        reason: Why this level failed.
        err: The wrapped cause (another CannotUnmarshalError, a parse
            error, or the exception raised by a custom hook).
        type_name: Display name of the destination type at this level.
        field: Field name (struct level) or element index (slice/array level).
        value: Offending text, when a literal failed to convert.
        detail: Extra human-readable detail for this level.
    """

    def __init__(
        self,
        reason: Reason,
        err: BaseException | None = None,
        *,
        type_name: str | None = None,
        field: str | int | None = None,
        value: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.reason = reason
        self.err = err
        self.type_name = type_name
        self.field = field
        self.value = value
        self.detail = detail
        super().__init__(self._render())
        if err is not None:
            self.__cause__ = err

    @property
    def inner(self) -> BaseException | None:
        """The wrapped cause, or None at the root of the chain."""
        return self.err

    def chain(self) -> Iterator[BaseException]:
        """Yield this error and every wrapped cause, outermost first."""
        current: BaseException | None = self
        while current is not None:
            yield current
            current = current.err if isinstance(current, CannotUnmarshalError) else None

    def root_cause(self) -> BaseException:
        """Return the innermost error in the chain."""
        *_, last = self.chain()
        return last

    def reasons(self) -> list[Reason]:
        """Reasons of every CannotUnmarshalError in the chain, outermost first."""
        return [e.reason for e in self.chain() if isinstance(e, CannotUnmarshalError)]

    def to_dict(self) -> dict[str, Any]:
        """Structured form of this level (used by the service layer)."""
        result: dict[str, Any] = {"reason": self.reason.name, "message": self.reason.value}
        if self.type_name is not None:
            result["type"] = self.type_name
        if self.field is not None:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = self.value
        if self.detail is not None:
            result["detail"] = self.detail
        return result

    def _render(self) -> str:
        msg = MESSAGE_PREFIX
        if self.type_name:
            msg += f" {self.type_name}"
        if isinstance(self.field, int):
            msg += f" index {self.field}"
        elif self.field:
            msg += f" field {self.field}"
        msg += f": {self.reason.value}"
        if self.detail:
            msg += f" ({self.detail})"
        if self.err is not None:
            msg += f": {self.err}"
        return msg
