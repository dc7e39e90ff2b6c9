"""
Share Codec
Turn shares into single-token strings and back.

A token is the canonical binary share (one byte of x, then L bytes of y)
written as hex or URL-safe base64. Tokens carry no version, threshold or
checksum: they are exactly the share, nothing more.

Decoding validates structure before anything else sees the share:
the text must decode, there must be at least 2 bytes, and x must not be 0.
"""

import base64
import binascii
from dataclasses import dataclass

from keysplit.errors import MalformedShare
from keysplit.share import Share


ENCODINGS = ("hex", "base64")
DEFAULT_ENCODING = "hex"


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of try_decode: exactly one of share / error is set."""
    share: Share | None = None
    error: MalformedShare | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ShareCodec:
    """
    Encodes and decodes share tokens.

    Args:
        encoding: "hex" (default) or "base64" (URL-safe alphabet, padded).
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        if encoding not in ENCODINGS:
            raise ValueError(f"Unknown share encoding {encoding!r}, expected one of {ENCODINGS}")
        self.encoding = encoding

    def encode(self, share: Share) -> str:
        data = share.to_bytes()
        if self.encoding == "hex":
            return data.hex()
        return base64.urlsafe_b64encode(data).decode("ascii")

    def decode(self, token: str) -> Share:
        """
        Parse one token.

        Raises:
            MalformedShare: Bad text encoding, too short, or x = 0.
        """
        if not isinstance(token, str):
            raise MalformedShare(f"Share token must be a string, got {type(token).__name__}")
        token = token.strip()
        if not token:
            raise MalformedShare("Share token is empty")
        if any(c.isspace() for c in token):
            raise MalformedShare("Share token must be a single token with no whitespace inside")

        if self.encoding == "hex":
            try:
                data = bytes.fromhex(token)
            except ValueError as e:
                raise MalformedShare(f"Share token is not valid hex: {e}") from e
        else:
            # altchars maps "-_" onto "+/", so the standard alphabet is refused up front
            if "+" in token or "/" in token:
                raise MalformedShare("Share token is not URL-safe base64 (contains '+' or '/')")
            try:
                data = base64.b64decode(token.encode("ascii"), altchars=b"-_", validate=True)
            except (binascii.Error, UnicodeEncodeError, ValueError) as e:
                raise MalformedShare(f"Share token is not valid base64: {e}") from e

        if len(data) < 2:
            raise MalformedShare(
                f"Share token decodes to {len(data)} byte(s); need x plus at least one y byte"
            )
        if data[0] == 0:
            raise MalformedShare("Share token has x = 0, which is reserved for the secret")
        return Share.from_bytes(data)

    def try_decode(self, token: str) -> DecodeResult:
        """Like decode, but reports malformed tokens instead of raising."""
        try:
            return DecodeResult(share=self.decode(token))
        except MalformedShare as e:
            return DecodeResult(error=e)

    def encode_all(self, shares: list[Share]) -> list[str]:
        return [self.encode(s) for s in shares]

    def decode_all(self, tokens: list[str]) -> list[Share]:
        return [self.decode(t) for t in tokens]
