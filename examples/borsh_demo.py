#!/usr/bin/env python3
"""Demo account example for borshwire.

Encodes the zeroed demo account and an Update instruction, and checks both
against the reference encodings a Solana program expects.
"""

from __future__ import annotations

from borshwire import decode, serialize
from borshwire.demo import (
    UPDATE_INSTRUCTION_HEX,
    ZEROED_ACCOUNT_HEX,
    BorshDemoAccount,
    check_discriminator,
    new_account,
    update_instruction,
    zeroed_state,
)


def main() -> None:
    """Run the demo account example."""
    account_bytes = serialize(new_account(zeroed_state()))
    account_hex = account_bytes.hex()
    print("Account bytes (hex):", account_hex)
    print("Matches expected:", account_hex == ZEROED_ACCOUNT_HEX)

    decoded = decode(BorshDemoAccount, account_bytes)
    check_discriminator(decoded)
    print("Decoded state:", decoded.data)

    instruction_hex = serialize(update_instruction()).hex()
    print("Update instruction (hex):", instruction_hex)
    print("Matches expected:", instruction_hex == UPDATE_INSTRUCTION_HEX)


if __name__ == "__main__":
    main()
