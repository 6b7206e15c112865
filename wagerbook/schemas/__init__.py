"""Serialization schemas for Wagerbook."""

from wagerbook.schemas.wager import (
    GamePayload,
    OddsSamplePayload,
    WagerPayload,
    decode_wager,
    encode_wager,
)

__all__ = [
    "GamePayload",
    "OddsSamplePayload",
    "WagerPayload",
    "decode_wager",
    "encode_wager",
]
