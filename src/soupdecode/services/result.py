"""What DecodeService hands back to the CLI.

INVARIANT: DecodeService methods report expected failures (bad schema path,
unreadable file, decode error, missing parser) as ``ok=False`` results.
Only the library API in :mod:`soupdecode.services.unmarshal` raises
CannotUnmarshalError.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Failure payload of a ServiceResult.

    Attributes:
        code: ``Reason`` name of the outermost decode error
            (``"TYPE_CONVERSION_ERROR"``) or a service code such as
            ``"SCHEMA_NOT_FOUND"``.
        message: The full rendered message.
        detail: ``chain`` and ``root_cause`` for decode errors, otherwise
            the offending input (``path``, ``schema``, ``selector``...).
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @property
    def chain(self) -> list[dict[str, Any]]:
        """Decode error levels, outermost first; empty for service errors."""
        return list(self.detail.get("chain", []))

    @property
    def root_cause(self) -> str | None:
        return self.detail.get("root_cause")


class ServiceResult(BaseModel):
    """Outcome of one ``decode`` or ``select`` call.

    Attributes:
        ok: False when ``error`` is set.
        op: ``"decode"`` or ``"select"``.
        data: The decoded value or the matched nodes.
        warnings: Non-fatal notes, e.g. a selector that matched nothing.
        error: Set when ``ok`` is False.
        meta: ``{"telemetry": span}`` when verbose.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))

    def with_meta(self, **entries: Any) -> ServiceResult:
        """Copy of this result with *entries* merged into ``meta``."""
        return self.model_copy(update={"meta": {**(self.meta or {}), **entries}})
