"""
keysplit — Shamir's Secret Sharing over GF(256)
Split a secret into N shares so that any K of them put it back together
and any K-1 reveal nothing.

Layers:
1. Field — GF(2^8) arithmetic, one byte per element
2. Polynomials — one random degree-(K-1) polynomial per secret byte
3. Shamir — split by evaluating at x = 1..N, combine by Lagrange at x = 0
4. Codec — each share as a single hex or base64 token

Shares hold no threshold and no integrity tag. Too few shares produce a
wrong secret, not an error; use keysplit.integrity to catch that.

Usage:
    from keysplit import split, combine
    tokens = split(b"my secret", total_shares=5, threshold=3)
    assert combine(tokens[:3]) == b"my secret"
"""

from keysplit.errors import (
    SharingError,
    InvalidParameter,
    RandomnessUnavailable,
    InsufficientShares,
    LengthMismatch,
    DuplicateXValue,
    MalformedShare,
    ArithmeticFailure,
    IntegrityMismatch,
)
from keysplit.field import GF256
from keysplit.polynomial import RandomSource
from keysplit.share import Share, SharesConfig
from keysplit.codec import ShareCodec, DecodeResult
from keysplit.shamir import Shamir, split, combine, verify_shares, check_combinations
from keysplit.integrity import fingerprint, matches, combine_verified

__version__ = "0.1.0"
__all__ = [
    "split",
    "combine",
    "Shamir",
    "Share",
    "SharesConfig",
    "ShareCodec",
    "DecodeResult",
    "GF256",
    "RandomSource",
    "verify_shares",
    "check_combinations",
    "fingerprint",
    "matches",
    "combine_verified",
    "SharingError",
    "InvalidParameter",
    "RandomnessUnavailable",
    "InsufficientShares",
    "LengthMismatch",
    "DuplicateXValue",
    "MalformedShare",
    "ArithmeticFailure",
    "IntegrityMismatch",
]
