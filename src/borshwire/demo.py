"""Demo schema: an on-chain account holding one value of every supported shape.

The account layout is an 8-byte discriminator (``b"BORSHDEM"``) followed by
BorshDemoState. BorshDemoInstruction is the instruction enum sent to the
program that owns the account. These types double as the reference vectors for
the codec: ``ZEROED_ACCOUNT_HEX`` and ``UPDATE_INSTRUCTION_HEX`` are the exact
encodings of ``new_account(zeroed_state())`` and ``update_instruction()``.
"""

from __future__ import annotations

from typing import Annotated, Optional

from .exceptions import FormatError
from .models import I64, U8, U16, U32, U64, BaseEnum, BaseMessage, FixedBytes

ACCOUNT_DISCRIMINATOR = b"BORSHDEM"
DISCRIMINATOR_LEN = 8
PUBKEY_LEN = 32


class NestedStruct(BaseMessage):
    count: U32
    note: str


class SimpleEnum(BaseEnum):
    """Unit-only enum."""


class SimpleEnumFirst(SimpleEnum):
    borsh_name = "First"


class SimpleEnumSecond(SimpleEnum):
    borsh_name = "Second"


class SimpleEnumThird(SimpleEnum):
    borsh_name = "Third"


class DataEnum(BaseEnum):
    """Enum whose variants carry data."""


class DataEnumAmount(DataEnum):
    borsh_name = "Amount"

    value: U64


class DataEnumName(DataEnum):
    borsh_name = "Name"

    label: str


class PubkeyBytes(BaseMessage):
    """A raw 32-byte public key."""

    key: Annotated[bytes, FixedBytes(length=PUBKEY_LEN)]


class BorshDemoState(BaseMessage):
    primitive_u8: U8
    primitive_u16: U16
    primitive_u32: U32
    primitive_u64: U64
    primitive_i64: I64
    primitive_bool: bool
    fixed_pubkey_bytes: Annotated[bytes, FixedBytes(length=PUBKEY_LEN)]
    text: str
    data: bytes
    keys: list[PubkeyBytes]
    simple_enum: SimpleEnum
    data_enum: DataEnum
    maybe_amount: Optional[U64]
    nested: NestedStruct


class BorshDemoAccount(BaseMessage):
    discriminator: Annotated[bytes, FixedBytes(length=DISCRIMINATOR_LEN)]
    data: BorshDemoState


class BorshDemoInstruction(BaseEnum):
    """Instructions understood by the demo program, in wire order."""


class InitializeArgs(BorshDemoInstruction):
    """Creates (or initializes) the account and stores the full state."""

    borsh_name = "Initialize"

    data: BorshDemoState


class UpdateArgs(BorshDemoInstruction):
    """Updates fields while keeping the serialized length unchanged."""

    borsh_name = "Update"

    new_u64: U64
    new_bool: bool
    new_text: str
    new_option: Optional[U64]


class ValidateArgs(BorshDemoInstruction):
    """Reads the account data and validates a field."""

    borsh_name = "Validate"

    expected_u8: U8


ZEROED_ACCOUNT_HEX = "".join(
    [
        "424f52534844454d",  # discriminator
        "01",  # primitive_u8
        "0200",  # primitive_u16
        "03000000",  # primitive_u32
        "0400000000000000",  # primitive_u64
        "fbffffffffffffff",  # primitive_i64 = -5
        "01",  # primitive_bool
        "00" * PUBKEY_LEN,  # fixed_pubkey_bytes
        "00000000",  # text
        "00000000",  # data
        "00000000",  # keys
        "00",  # simple_enum = First
        "00",  # data_enum = Amount
        "0000000000000000",  # Amount.value
        "00",  # maybe_amount = None
        "00000000",  # nested.count
        "00000000",  # nested.note
    ]
)

UPDATE_INSTRUCTION_HEX = (
    "01"  # Update
    "0500000000000000"  # new_u64
    "01"  # new_bool
    "02000000"
    "6869"  # new_text = "hi"
    "01"
    "0900000000000000"  # new_option = 9
)


def zeroed_state() -> BorshDemoState:
    """Return the minimal state: small primitives, empty collections, first variants."""
    return BorshDemoState(
        primitive_u8=1,
        primitive_u16=2,
        primitive_u32=3,
        primitive_u64=4,
        primitive_i64=-5,
        primitive_bool=True,
        fixed_pubkey_bytes=bytes(PUBKEY_LEN),
        text="",
        data=b"",
        keys=[],
        simple_enum=SimpleEnumFirst(),
        data_enum=DataEnumAmount(value=0),
        maybe_amount=None,
        nested=NestedStruct(count=0, note=""),
    )


def sample_state(authority: bytes = bytes(range(PUBKEY_LEN))) -> BorshDemoState:
    """Return a state with every field populated."""
    return BorshDemoState(
        primitive_u8=42,
        primitive_u16=500,
        primitive_u32=99_999,
        primitive_u64=123_456_789,
        primitive_i64=-123_456,
        primitive_bool=True,
        fixed_pubkey_bytes=authority,
        text="hello borsh",
        data=bytes([1, 2, 3, 4]),
        keys=[PubkeyBytes(key=authority)],
        simple_enum=SimpleEnumSecond(),
        data_enum=DataEnumAmount(value=42),
        maybe_amount=999,
        nested=NestedStruct(count=7, note="nested"),
    )


def new_account(state: BorshDemoState) -> BorshDemoAccount:
    return BorshDemoAccount(discriminator=ACCOUNT_DISCRIMINATOR, data=state)


def update_instruction() -> UpdateArgs:
    return UpdateArgs(new_u64=5, new_bool=True, new_text="hi", new_option=9)


def check_discriminator(account: BorshDemoAccount) -> None:
    """Raise FormatError unless the account carries the demo discriminator."""
    if account.discriminator != ACCOUNT_DISCRIMINATOR:
        raise FormatError(
            f"Invalid account discriminator {account.discriminator!r}, "
            f"expected {ACCOUNT_DISCRIMINATOR!r}"
        )
