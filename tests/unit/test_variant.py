"""Tests for the tagged union (enum) codec."""

from __future__ import annotations

import pytest

from pydantic import ValidationError

from borshwire import BaseEnum, decode, deserialize, registry_for, serialize
from borshwire.codec import schema as wire
from borshwire.codec.registry import SchemaRegistry
from borshwire.codec.schema import EnumSchema, FieldSchema, StructSchema, VariantSchema
from borshwire.demo import (
    UPDATE_INSTRUCTION_HEX,
    BorshDemoInstruction,
    BorshDemoState,
    DataEnum,
    DataEnumAmount,
    DataEnumName,
    SimpleEnum,
    SimpleEnumFirst,
    SimpleEnumThird,
    UpdateArgs,
    ValidateArgs,
    update_instruction,
    zeroed_state,
)
from borshwire.exceptions import EncodeError, FormatError, UnknownVariantError


@pytest.fixture
def shape_registry() -> SchemaRegistry:
    """Model-less enum with a unit variant and a data variant."""
    return SchemaRegistry(
        [
            EnumSchema(
                name="Shape",
                variants=(
                    VariantSchema("Empty", "Shape.Empty"),
                    VariantSchema("Square", "Shape.Square"),
                ),
            ),
            StructSchema(name="Shape.Empty", fields=()),
            StructSchema(name="Shape.Square", fields=(FieldSchema("side", wire.U16),)),
        ]
    )


class TestEnumDeclaration:
    """Test BaseEnum variant bookkeeping."""

    def test_variants_in_definition_order(self) -> None:
        assert [variant.type_name() for variant in BorshDemoInstruction.borsh_variants] == [
            "Initialize",
            "Update",
            "Validate",
        ]

    def test_discriminants(self) -> None:
        assert SimpleEnumFirst.discriminant() == 0
        assert SimpleEnumThird.discriminant() == 2
        assert ValidateArgs.discriminant() == 2

    def test_root_cannot_be_instantiated(self) -> None:
        with pytest.raises(ValidationError, match="enum root"):
            SimpleEnum()

    def test_root_field_accepts_variant_instance(self) -> None:
        state = zeroed_state().model_copy()
        state.simple_enum = SimpleEnumThird()
        assert isinstance(state.simple_enum, SimpleEnumThird)

    def test_root_field_rejects_mapping(self) -> None:
        """A dumped state loses the variant, so validating it back fails cleanly."""
        with pytest.raises(ValidationError, match="enum root"):
            BorshDemoState.model_validate(zeroed_state().model_dump())

    def test_nested_variant_rejected(self) -> None:
        class Color(BaseEnum):
            pass

        class Red(Color):
            pass

        with pytest.raises(TypeError, match="directly"):

            class DarkRed(Red):
                pass


class TestVariantEncoding:
    """Test discriminant byte and payload layout."""

    def test_unit_variant_is_one_byte(self) -> None:
        assert serialize(SimpleEnumThird()) == b"\x02"

    def test_update_discriminant(self) -> None:
        data = serialize(update_instruction())
        assert data[0] == 1

    def test_validate(self) -> None:
        assert serialize(ValidateArgs(expected_u8=3)).hex() == "0203"

    def test_data_variants(self) -> None:
        assert serialize(DataEnumAmount(value=42)).hex() == "002a00000000000000"
        assert serialize(DataEnumName(label="x")).hex() == "010100000078"

    def test_decode_returns_variant_instance(self) -> None:
        value = deserialize(DataEnum, bytes.fromhex("010100000078"))
        assert isinstance(value, DataEnumName)
        assert value.label == "x"

    def test_decode_via_variant_class(self) -> None:
        value = decode(UpdateArgs, bytes.fromhex(UPDATE_INSTRUCTION_HEX))
        assert value == update_instruction()

    def test_decode_via_variant_class_rejects_sibling(self) -> None:
        with pytest.raises(FormatError, match="Decoded ValidateArgs where UpdateArgs was expected"):
            deserialize(UpdateArgs, bytes.fromhex("0203"))

    def test_unknown_discriminant(self) -> None:
        with pytest.raises(UnknownVariantError, match="discriminant 3 at offset 0"):
            deserialize(BorshDemoInstruction, b"\x03")

    def test_unknown_discriminant_is_a_decode_error(self) -> None:
        with pytest.raises(UnknownVariantError):
            deserialize(SimpleEnum, b"\xff")

    def test_foreign_variant_rejected(self) -> None:
        registry = registry_for(BorshDemoInstruction)
        with pytest.raises(EncodeError, match="not a variant of BorshDemoInstruction"):
            serialize(SimpleEnumFirst(), registry, BorshDemoInstruction)

    def test_truncated_payload(self) -> None:
        with pytest.raises(FormatError):
            deserialize(DataEnum, b"\x00\x2a\x00")


class TestModelLessEnum:
    """Test enums described by explicit schema entries."""

    def test_encode(self, shape_registry: SchemaRegistry) -> None:
        assert serialize({"Square": {"side": 3}}, shape_registry, "Shape") == b"\x01\x03\x00"
        assert serialize({"Empty": {}}, shape_registry, "Shape") == b"\x00"

    def test_decode(self, shape_registry: SchemaRegistry) -> None:
        assert deserialize("Shape", b"\x01\x03\x00", shape_registry) == {"Square": {"side": 3}}

    def test_unknown_variant_name(self, shape_registry: SchemaRegistry) -> None:
        with pytest.raises(EncodeError, match="unknown variant 'Circle'"):
            serialize({"Circle": {}}, shape_registry, "Shape")

    def test_two_variants_populated(self, shape_registry: SchemaRegistry) -> None:
        with pytest.raises(EncodeError, match="single-key mapping"):
            serialize({"Empty": {}, "Square": {"side": 1}}, shape_registry, "Shape")

    def test_unknown_discriminant(self, shape_registry: SchemaRegistry) -> None:
        with pytest.raises(UnknownVariantError):
            deserialize("Shape", b"\x02", shape_registry)
