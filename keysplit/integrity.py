"""
Integrity Check
Catch a wrong reconstruction after the fact.

Shares carry no tag, so combine() cannot tell a real secret from the
garbage produced by too few shares, mixed splits or a corrupted share.
The fix lives on the caller's side: record a fingerprint of the secret at
split time, keep it next to the shares, and check it after combining.

With a key, the fingerprint is an HMAC-SHA256 and does not let anyone
who sees it test guesses of the secret. Without one it is a plain
SHA-256, fine for high-entropy secrets such as random keys.
"""

import logging

from cryptography.hazmat.primitives import constant_time, hashes, hmac

from keysplit.codec import DEFAULT_ENCODING
from keysplit.errors import IntegrityMismatch
from keysplit.shamir import Shamir, combine

logger = logging.getLogger(__name__)

# Domain separation for keyed fingerprints
_FINGERPRINT_CONTEXT = b"keysplit-secret-fingerprint-v1"


def _digest(secret: bytes, key: bytes = None) -> bytes:
    if key is None:
        h = hashes.Hash(hashes.SHA256())
        h.update(bytes(secret))
        return h.finalize()
    mac = hmac.HMAC(key, hashes.SHA256())
    mac.update(_FINGERPRINT_CONTEXT)
    mac.update(bytes(secret))
    return mac.finalize()


def fingerprint(secret: bytes, key: bytes = None) -> str:
    """
    Hex fingerprint of a secret.

    Args:
        secret: The secret bytes (before splitting).
        key: Optional HMAC key. Use the same key to check later.
    """
    return _digest(secret, key).hex()


def matches(secret: bytes, expected: str, key: bytes = None) -> bool:
    """Constant-time check of a secret against a fingerprint."""
    try:
        expected_bytes = bytes.fromhex(expected)
    except (TypeError, ValueError):
        return False
    return constant_time.bytes_eq(_digest(secret, key), expected_bytes)


def combine_verified(
    tokens: list[str],
    expected: str,
    key: bytes = None,
    *,
    threshold: int = None,
    encoding: str = DEFAULT_ENCODING,
    shamir: Shamir = None,
) -> bytes:
    """
    Combine share tokens and check the result against a fingerprint.

    Raises:
        IntegrityMismatch: The reconstructed secret is not the one that
            was fingerprinted (too few shares, mixed or corrupted shares).
        SharingError: Any error combine() raises.
    """
    secret = combine(tokens, threshold=threshold, encoding=encoding, shamir=shamir)
    if not matches(secret, expected, key):
        logger.warning("Reconstructed secret from %d shares failed the fingerprint check", len(tokens))
        raise IntegrityMismatch(
            f"Reconstructed secret does not match its fingerprint "
            f"({len(tokens)} shares supplied; too few, mixed or corrupted)"
        )
    return secret
