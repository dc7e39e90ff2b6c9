"""
Shares and split parameters.
"""

from dataclasses import dataclass

from keysplit.errors import InvalidParameter, MalformedShare


MIN_THRESHOLD = 2
MAX_SHARES = 255  # every x must be a distinct nonzero byte


@dataclass(frozen=True)
class SharesConfig:
    """
    How to split: N shares, any K of which reconstruct.

    Invariant: 2 <= K <= N <= 255. Violations raise InvalidParameter
    naming the bound that failed.
    """
    total_shares: int   # N
    threshold: int      # K

    def __post_init__(self):
        n, k = self.total_shares, self.threshold
        for name, value in (("total_shares", n), ("threshold", k)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidParameter(f"{name} must be an integer, got {type(value).__name__}", name, value)
        if n < MIN_THRESHOLD:
            raise InvalidParameter(f"total_shares must be at least {MIN_THRESHOLD}, got {n}", "total_shares>=2", n)
        if n > MAX_SHARES:
            raise InvalidParameter(f"total_shares must be at most {MAX_SHARES}, got {n}", "total_shares<=255", n)
        if k < MIN_THRESHOLD:
            raise InvalidParameter(f"threshold must be at least {MIN_THRESHOLD}, got {k}", "threshold>=2", k)
        if k > n:
            raise InvalidParameter(
                f"threshold ({k}) cannot exceed total_shares ({n})", "threshold<=total_shares", k
            )


@dataclass(frozen=True)
class Share:
    """
    One point on every per-byte polynomial of a split secret.

    A share on its own says nothing about the secret. It carries no
    threshold, no version and no integrity tag.
    """
    x: int      # The x-coordinate, 1..255 (0 is where the secret lives)
    y: bytes    # f_i(x) for every byte position i

    def __post_init__(self):
        if not isinstance(self.x, int) or isinstance(self.x, bool) or not 1 <= self.x <= MAX_SHARES:
            raise MalformedShare(f"Share x must be in 1..{MAX_SHARES}, got {self.x!r}")
        if not isinstance(self.y, (bytes, bytearray, memoryview)):
            raise MalformedShare(f"Share y must be bytes, got {type(self.y).__name__}")
        if len(self.y) == 0:
            raise MalformedShare(f"Share x={self.x} has an empty y value")
        object.__setattr__(self, "y", bytes(self.y))

    def __len__(self) -> int:
        return len(self.y)

    def __repr__(self) -> str:
        # y stays out of reprs and tracebacks
        return f"Share(x={self.x}, length={len(self.y)})"

    def to_bytes(self) -> bytes:
        """Canonical binary form: one byte of x followed by y."""
        return bytes([self.x]) + self.y

    @classmethod
    def from_bytes(cls, data: bytes) -> "Share":
        if len(data) < 2:
            raise MalformedShare(f"Share must be at least 2 bytes, got {len(data)}")
        return cls(x=data[0], y=bytes(data[1:]))

    def to_hex(self) -> str:
        """Serialize to a portable hex string."""
        return self.to_bytes().hex()

    @classmethod
    def from_hex(cls, hex_str: str) -> "Share":
        """Deserialize from hex string."""
        try:
            data = bytes.fromhex(hex_str.strip())
        except ValueError as e:
            raise MalformedShare(f"Share is not valid hex: {e}") from e
        return cls.from_bytes(data)
