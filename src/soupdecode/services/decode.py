"""DecodeService — file-level decode and selection, returning ServiceResult.

This is the layer the CLI talks to.  It resolves ``module:Class`` schema
references, reads documents from disk, runs the decode engine with the
configured parser and depth limit, and turns every expected failure into
a structured ``ServiceResult(ok=False)``.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

from bs4 import FeatureNotFound
from pydantic_core import to_jsonable_python
from soupsieve import SelectorSyntaxError

from soupdecode.domain.errors import CannotUnmarshalError
from soupdecode.domain.kinds import display_name
from soupdecode.infrastructure.document import parse_document
from soupdecode.infrastructure.selection import Selection
from soupdecode.services.base import BaseService
from soupdecode.services.result import ServiceResult
from soupdecode.services.telemetry import trace_span, traced
from soupdecode.services.unmarshal import Ref, unmarshal


def load_schema(path: str) -> Any:
    """Import the destination type named by ``"package.module:Class"``.

    Nested classes are addressed with dots: ``"pkg.mod:Outer.Inner"``.

    Raises:
        ValueError: If *path* is not of the form ``module:name``.
        ImportError: If the module cannot be imported.
        AttributeError: If the name does not exist in the module.
    """
    module_name, sep, qualname = path.partition(":")
    if not sep or not module_name or not qualname:
        msg = f"Schema must look like 'module:Class', got {path!r}"
        raise ValueError(msg)
    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


def decode_error_detail(exc: CannotUnmarshalError) -> dict[str, Any]:
    """Structured detail for a decode failure: one entry per level."""
    chain = [e.to_dict() for e in exc.chain() if isinstance(e, CannotUnmarshalError)]
    root = exc.root_cause()
    detail: dict[str, Any] = {"chain": chain}
    if not isinstance(root, CannotUnmarshalError):
        detail["root_cause"] = f"{type(root).__name__}: {root}"
    return detail


class DecodeService(BaseService):
    """Decode documents on disk into schema types."""

    def _read(self, path: Path) -> bytes:
        with trace_span("read", path=path.name) as span:
            raw = path.read_bytes()
            if span:
                span.annotate("bytes", len(raw))
            return raw

    @traced
    def decode_file(self, path: Path, schema: str) -> ServiceResult:
        """Decode the document at *path* into a new instance of *schema*."""
        op = "decode"
        try:
            hint = load_schema(schema)
        except ValueError as exc:
            return self._fail(op, "INVALID_SCHEMA", str(exc), schema=schema)
        except (ImportError, AttributeError) as exc:
            return self._fail(op, "SCHEMA_NOT_FOUND", str(exc), schema=schema)

        try:
            raw = self._read(path)
        except OSError as exc:
            return self._fail(op, "READ_ERROR", str(exc), path=str(path))

        ref: Ref[Any] = Ref(hint)
        backend = self._settings.parser.backend
        with trace_span("unmarshal", schema=display_name(hint), parser=backend):
            try:
                unmarshal(raw, ref, parser=backend, max_depth=self._settings.decode.max_depth)
            except CannotUnmarshalError as exc:
                return self._fail(op, exc.reason.name, str(exc), **decode_error_detail(exc))
            except FeatureNotFound as exc:
                return self._fail(op, "PARSER_UNAVAILABLE", str(exc), parser=backend)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "schema": display_name(hint),
                "value": to_jsonable_python(ref.value, fallback=str),
            },
        )

    @traced
    def select(self, path: Path, selector: str) -> ServiceResult:
        """List the nodes matching *selector* in the document at *path*."""
        op = "select"
        try:
            raw = self._read(path)
        except OSError as exc:
            return self._fail(op, "READ_ERROR", str(exc), path=str(path))

        backend = self._settings.parser.backend
        try:
            with trace_span("parse", parser=backend):
                document = parse_document(raw, backend)
        except FeatureNotFound as exc:
            return self._fail(op, "PARSER_UNAVAILABLE", str(exc), parser=backend)

        try:
            with trace_span("match", selector=selector) as span:
                matches = Selection.from_document(document).find(selector)
                if span:
                    span.annotate("count", len(matches))
        except SelectorSyntaxError as exc:
            return self._fail(op, "INVALID_SELECTOR", str(exc), selector=selector)

        items = [
            {
                "index": i,
                "tag": node.name,
                "text": node.get_text().strip(),
                "attrs": dict(Selection.attributes(node)),
            }
            for i, node in enumerate(matches)
        ]
        warnings = [] if items else [f"selector {selector!r} matched no nodes"]
        return ServiceResult(
            ok=True,
            op=op,
            data={"selector": selector, "count": len(matches), "items": items},
            warnings=warnings,
        )
