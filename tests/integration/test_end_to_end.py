"""End-to-end integration tests."""

from __future__ import annotations

import pytest

from borshwire import decode, deserialize, encode, encoded_size, registry_for, serialize
from borshwire.demo import (
    ACCOUNT_DISCRIMINATOR,
    UPDATE_INSTRUCTION_HEX,
    ZEROED_ACCOUNT_HEX,
    BorshDemoAccount,
    BorshDemoInstruction,
    BorshDemoState,
    DataEnumName,
    InitializeArgs,
    NestedStruct,
    UpdateArgs,
    check_discriminator,
    new_account,
    sample_state,
    update_instruction,
    zeroed_state,
)
from borshwire.exceptions import FormatError


class TestAccountWorkflow:
    """Test the demo account from creation to validation."""

    def test_zeroed_account_bytes(self) -> None:
        """The zeroed account encodes to the reference vector."""
        assert encode(new_account(zeroed_state())).hex() == ZEROED_ACCOUNT_HEX

    def test_zeroed_account_roundtrip(self) -> None:
        account = decode(BorshDemoAccount, bytes.fromhex(ZEROED_ACCOUNT_HEX))
        assert account == new_account(zeroed_state())
        assert account.data.primitive_i64 == -5
        check_discriminator(account)

    def test_sample_account_roundtrip(self, authority: bytes) -> None:
        account = new_account(sample_state(authority))
        data = encode(account)
        assert data[:8] == ACCOUNT_DISCRIMINATOR
        assert decode(BorshDemoAccount, data) == account
        assert encoded_size(account) == len(data)

    def test_state_without_discriminator(self) -> None:
        data = bytes.fromhex(ZEROED_ACCOUNT_HEX)[8:]
        assert decode(BorshDemoState, data) == zeroed_state()

    def test_wrong_discriminator(self) -> None:
        data = b"NOTBORSH" + bytes.fromhex(ZEROED_ACCOUNT_HEX)[8:]
        account = decode(BorshDemoAccount, data)
        with pytest.raises(FormatError, match="Invalid account discriminator"):
            check_discriminator(account)

    def test_truncated_account(self) -> None:
        data = bytes.fromhex(ZEROED_ACCOUNT_HEX)
        with pytest.raises(FormatError):
            decode(BorshDemoAccount, data[:-1])

    def test_update_keeps_length(self) -> None:
        """Applying an Update of equal-length text keeps the account size."""
        state = sample_state()
        before = encoded_size(state)
        update = UpdateArgs(new_u64=1, new_bool=False, new_text="HELLO BORSH", new_option=5)
        updated = state.model_copy(
            update={
                "primitive_u64": update.new_u64,
                "primitive_bool": update.new_bool,
                "text": update.new_text,
                "maybe_amount": update.new_option,
            }
        )
        assert encoded_size(updated) == before


class TestInstructionWorkflow:
    """Test instruction encoding."""

    def test_update_instruction_bytes(self) -> None:
        """The Update instruction encodes to the reference vector."""
        assert serialize(update_instruction()).hex() == UPDATE_INSTRUCTION_HEX

    def test_update_instruction_decode(self) -> None:
        value = deserialize(BorshDemoInstruction, bytes.fromhex(UPDATE_INSTRUCTION_HEX))
        assert value == update_instruction()

    def test_initialize_carries_full_state(self, authority: bytes) -> None:
        state = sample_state(authority)
        data = encode(InitializeArgs(data=state))
        assert data[0] == 0
        assert data[1:] == encode(state)
        assert decode(BorshDemoInstruction, data) == InitializeArgs(data=state)

    def test_data_enum_in_state(self) -> None:
        state = zeroed_state().model_copy(update={"data_enum": DataEnumName(label="x")})
        assert decode(BorshDemoState, encode(state)).data_enum == DataEnumName(label="x")


class TestSharedRegistry:
    """Test one registry serving several roots."""

    def test_registry_resolves_nested_types(self) -> None:
        registry = registry_for(BorshDemoAccount)
        note = NestedStruct(count=3, note="ok")
        data = serialize(note, registry)
        assert deserialize("NestedStruct", data, registry) == note
