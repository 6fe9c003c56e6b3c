#!/usr/bin/env python3
"""Basic usage example for borshwire.

This example demonstrates:
1. Defining a message with Pydantic
2. Encoding to the Borsh binary format
3. Decoding back to a Pydantic model
4. Calculating message sizes
"""

from __future__ import annotations

from typing import Optional

from borshwire import U8, U64, BaseMessage, decode, encode, encoded_size, field_sizes


# Define a message class
class TransferRecord(BaseMessage):
    """Token transfer record.

    Fields are encoded back to back in declaration order.
    """

    kind: U8
    amount: U64
    memo: str
    approved: bool
    fee: Optional[U64]


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("borshwire Basic Usage Example")
    print("=" * 60)
    print()

    # Create a message instance
    print("1. Creating a transfer record...")
    msg = TransferRecord(kind=1, amount=250_000, memo="rent", approved=True, fee=None)

    print(f"   Kind: {msg.kind}")
    print(f"   Amount: {msg.amount}")
    print(f"   Memo: {msg.memo!r}")
    print(f"   Fee: {msg.fee}")
    print()

    # Analyze field sizes
    print("2. Analyzing field sizes...")
    sizes = field_sizes(msg)
    for field_name, size in sizes.items():
        print(f"   {field_name}: {size} bytes")
    print(f"   Total: {encoded_size(msg)} bytes")
    print()

    # Encode the message
    print("3. Encoding to Borsh...")
    encoded_data = encode(msg)

    print(f"   Encoded size: {len(encoded_data)} bytes")
    print(f"   Hex: {encoded_data.hex()}")
    print()

    # Decode the message
    print("4. Decoding from binary...")
    decoded_msg = decode(TransferRecord, encoded_data)
    print(f"   {decoded_msg!r}")
    print()

    # Verify round-trip
    print("5. Verifying round-trip...")
    if decoded_msg == msg:
        print("   ✓ Round-trip successful! Messages match.")
    else:
        print("   ✗ Round-trip failed! Messages don't match.")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
