from __future__ import annotations

from typing import List, Sequence

# 30 half-hour slots per day → 4 bytes, last 2 bits unused
SLOTS_PER_DAY = 30
BYTES_PER_DAY = 4


def new_empty_bits() -> bytes:
    return bytes(BYTES_PER_DAY)


def empty_slots() -> List[bool]:
    return [False] * SLOTS_PER_DAY


def encode_slots(slots: Sequence[bool]) -> bytes:
    """Pack 30 booleans MSB-first: slot i lives in bit (7 - i % 8) of byte i // 8."""
    if len(slots) != SLOTS_PER_DAY:
        raise ValueError(f"slots length must be {SLOTS_PER_DAY}, got {len(slots)}")
    b = bytearray(BYTES_PER_DAY)
    for idx, value in enumerate(slots):
        if value:
            b[idx // 8] |= 1 << (7 - idx % 8)
    return bytes(b)


def decode_slots(bits: bytes) -> List[bool]:
    """Inverse of encode_slots. Bits 30 and 31 are ignored."""
    if len(bits) != BYTES_PER_DAY:
        raise ValueError(f"bits length must be {BYTES_PER_DAY} for 30-slot days")
    return [bool((bits[idx // 8] >> (7 - idx % 8)) & 1) for idx in range(SLOTS_PER_DAY)]


def indexes_from_slots(slots: Sequence[bool]) -> List[int]:
    """Return the indexes of available slots, e.g. for logging a compact summary."""
    return [idx for idx, value in enumerate(slots) if value]
