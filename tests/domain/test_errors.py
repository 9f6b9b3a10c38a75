"""Tests for the decode error taxonomy and chain helpers."""

import pytest

from soupdecode.domain.errors import MESSAGE_PREFIX, CannotUnmarshalError, Reason


def _nested() -> CannotUnmarshalError:
    root = ValueError("invalid literal")
    leaf = CannotUnmarshalError(
        Reason.TYPE_CONVERSION_ERROR, root, type_name="Uint8", value="-123"
    )
    element = CannotUnmarshalError(
        Reason.TYPE_CONVERSION_ERROR, leaf, type_name="list[Uint8]", field=3
    )
    return CannotUnmarshalError(
        Reason.TYPE_CONVERSION_ERROR, element, type_name="Page", field="counts"
    )


class TestReason:
    def test_closed_set(self) -> None:
        assert {r.name for r in Reason} == {
            "NIL_VALUE",
            "NON_POINTER",
            "TYPE_CONVERSION_ERROR",
            "ARRAY_LENGTH_MISMATCH",
            "CUSTOM_UNMARSHAL_ERROR",
        }

    def test_str_is_message(self) -> None:
        assert str(Reason.ARRAY_LENGTH_MISMATCH) == "array length mismatch"


class TestMessage:
    def test_minimal(self) -> None:
        err = CannotUnmarshalError(Reason.NIL_VALUE)
        assert str(err) == f"{MESSAGE_PREFIX}: destination argument is nil"

    def test_type_and_field(self) -> None:
        err = CannotUnmarshalError(
            Reason.ARRAY_LENGTH_MISMATCH,
            type_name="tuple[Resource]",
            detail="declared length 1, found 5 elements",
        )
        assert str(err) == (
            "soupdecode: an error occurred decoding tuple[Resource]: "
            "array length mismatch (declared length 1, found 5 elements)"
        )

    def test_index_is_rendered(self) -> None:
        err = CannotUnmarshalError(Reason.TYPE_CONVERSION_ERROR, type_name="list[int]", field=0)
        assert "list[int] index 0:" in str(err)

    def test_nested_message_names_every_level(self) -> None:
        message = str(_nested())
        assert message.startswith(f"{MESSAGE_PREFIX} Page field counts: type conversion error")
        assert "list[Uint8] index 3" in message
        assert message.endswith("Uint8: type conversion error: invalid literal")


class TestChain:
    def test_inner_and_cause(self) -> None:
        err = _nested()
        assert err.inner is err.err
        assert err.__cause__ is err.err

    def test_no_cause_at_root(self) -> None:
        err = CannotUnmarshalError(Reason.NON_POINTER)
        assert err.inner is None
        assert err.__cause__ is None

    def test_chain_order(self) -> None:
        levels = list(_nested().chain())
        assert len(levels) == 4
        assert isinstance(levels[-1], ValueError)

    def test_root_cause(self) -> None:
        root = _nested().root_cause()
        assert isinstance(root, ValueError)
        assert str(root) == "invalid literal"

    def test_root_cause_of_leaf_is_itself(self) -> None:
        err = CannotUnmarshalError(Reason.NIL_VALUE)
        assert err.root_cause() is err

    def test_reasons(self) -> None:
        assert _nested().reasons() == [Reason.TYPE_CONVERSION_ERROR] * 3

    def test_raises_as_exception(self) -> None:
        with pytest.raises(CannotUnmarshalError, match="destination argument is nil"):
            raise CannotUnmarshalError(Reason.NIL_VALUE)


class TestToDict:
    def test_struct_level(self) -> None:
        assert _nested().to_dict() == {
            "reason": "TYPE_CONVERSION_ERROR",
            "message": "type conversion error",
            "type": "Page",
            "field": "counts",
        }

    def test_leaf_level(self) -> None:
        leaf = list(_nested().chain())[2]
        assert isinstance(leaf, CannotUnmarshalError)
        data = leaf.to_dict()
        assert data["value"] == "-123"
        assert data["type"] == "Uint8"
        assert "field" not in data
