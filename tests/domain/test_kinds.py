"""Tests for shape resolution, display names, and instance allocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Optional

import pytest
from bs4.element import Tag

from soupdecode.domain.kinds import (
    Float32,
    Float64,
    FloatBits,
    Int8,
    Int64,
    IntBounds,
    Kind,
    Uint8,
    Uint16,
    Uint64,
    allocate,
    display_name,
    resolve,
    struct_fields,
)
from soupdecode.domain.tags import Selector
from soupdecode.domain.unmarshaler import HTMLUnmarshaler, is_unmarshaler


@dataclass
class Plain:
    name: str = ""


@dataclass
class WithPrivate:
    visible: int = 0
    _cache: str = ""


@dataclass
class NoDefaults:
    title: str
    tags: list[str] = field(default_factory=list)
    count: int = 7


class Hooked(HTMLUnmarshaler):
    def unmarshal_html(self, nodes: list[Tag]) -> None:
        pass


class DuckTyped:
    def unmarshal_html(self, nodes: list[Tag]) -> None:
        pass


class TestResolve:
    @pytest.mark.parametrize(
        ("hint", "kind"),
        [
            (bool, Kind.BOOL),
            (int, Kind.INT),
            (Uint16, Kind.INT),
            (float, Kind.FLOAT),
            (Float32, Kind.FLOAT),
            (str, Kind.STR),
            (Plain, Kind.STRUCT),
            (list[str], Kind.SLICE),
            (tuple[int, ...], Kind.SLICE),
            (tuple[int, str], Kind.ARRAY),
            (str | None, Kind.OPTIONAL),
            (Optional[int], Kind.OPTIONAL),  # noqa: UP045
            (Hooked, Kind.CUSTOM),
            (dict[str, str], Kind.UNSUPPORTED),
            (int | str, Kind.UNSUPPORTED),
            (DuckTyped, Kind.UNSUPPORTED),
            (bytes, Kind.UNSUPPORTED),
        ],
    )
    def test_kind(self, hint: object, kind: Kind) -> None:
        assert resolve(hint).kind is kind

    def test_slice_element_and_container(self) -> None:
        shape = resolve(tuple[Plain, ...])
        assert shape.args == (Plain,)
        assert shape.container is tuple
        assert resolve(list[Plain]).container is list

    def test_array_declared_length(self) -> None:
        assert len(resolve(tuple[Plain, Plain, Plain]).args) == 3

    def test_annotated_extras_are_kept(self) -> None:
        shape = resolve(Annotated[list[str], Selector(".x")])
        assert shape.kind is Kind.SLICE
        assert shape.extra(Selector) == Selector(".x")
        assert shape.extra(IntBounds) is None

    def test_sized_int_bounds(self) -> None:
        bounds = resolve(Uint8).extra(IntBounds)
        assert (bounds.min, bounds.max) == (0, 255)
        bounds = resolve(Int8).extra(IntBounds)
        assert (bounds.min, bounds.max) == (-128, 127)
        assert resolve(Int64).extra(IntBounds).max == 2**63 - 1
        assert resolve(Uint64).extra(IntBounds).max == 2**64 - 1

    def test_float_bits(self) -> None:
        assert resolve(Float32).extra(FloatBits).bits == 32
        assert resolve(Float64).extra(FloatBits).bits == 64
        assert resolve(float).extra(FloatBits) is None


class TestUnmarshalerDetection:
    def test_subclass_is_detected(self) -> None:
        assert is_unmarshaler(Hooked)

    def test_duck_typing_is_not_enough(self) -> None:
        assert not is_unmarshaler(DuckTyped)

    def test_instances_are_not_types(self) -> None:
        assert not is_unmarshaler(Hooked())

    def test_register(self) -> None:
        class Registered:
            def unmarshal_html(self, nodes: list[Tag]) -> None:
                pass

        HTMLUnmarshaler.register(Registered)
        assert is_unmarshaler(Registered)


class TestDisplayName:
    @pytest.mark.parametrize(
        ("hint", "name"),
        [
            (int, "int"),
            (Uint16, "Uint16"),
            (Float32, "Float32"),
            (Plain, "Plain"),
            (list[Plain], "list[Plain]"),
            (tuple[Plain, ...], "tuple[Plain, ...]"),
            (tuple[int, str], "tuple[int, str]"),
            (str | None, "str | None"),
            (dict[str, list[int]], "dict[str, list[int]]"),
            (Annotated[list[str], Selector(".x")], "list[str]"),
        ],
    )
    def test_names(self, hint: object, name: str) -> None:
        assert display_name(hint) == name


class TestStructFields:
    def test_declaration_order(self) -> None:
        assert [fs.name for fs in struct_fields(NoDefaults)] == ["title", "tags", "count"]

    def test_private_fields_skipped(self) -> None:
        assert [fs.name for fs in struct_fields(WithPrivate)] == ["visible"]

    def test_hints_are_resolved(self) -> None:
        hints = {fs.name: fs.hint for fs in struct_fields(NoDefaults)}
        assert hints["tags"] == list[str]

    def test_unresolvable_forward_reference(self) -> None:
        @dataclass
        class Local:
            child: Missing | None = None  # type: ignore[name-defined]  # noqa: F821

        with pytest.raises(NameError):
            struct_fields(Local)


class TestAllocate:
    def test_default_constructor(self) -> None:
        assert allocate(Plain) == Plain()

    def test_required_fields_bypass_init(self) -> None:
        obj = allocate(NoDefaults)
        assert isinstance(obj, NoDefaults)
        assert obj.tags == []
        assert obj.count == 7
        assert not hasattr(obj, "title")

    def test_default_factory_is_fresh(self) -> None:
        a = allocate(NoDefaults)
        b = allocate(NoDefaults)
        assert a.tags is not b.tags
