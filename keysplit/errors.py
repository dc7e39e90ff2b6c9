"""
Errors
Every failure keysplit raises, one class per kind.

All of them derive from SharingError. Parameter and format errors also
derive from ValueError, so code written against the plain ValueError
contract keeps working.

Messages name the violated bound or the offending x values and lengths.
They never contain secret bytes or share data, so they are safe to show
to a user as-is.
"""


class SharingError(Exception):
    """Base class for all keysplit errors."""


class InvalidParameter(SharingError, ValueError):
    """Split parameters out of range (threshold, share count, secret)."""

    def __init__(self, message: str, bound: str = "", value=None):
        super().__init__(message)
        self.bound = bound
        self.value = value


class RandomnessUnavailable(SharingError, RuntimeError):
    """No cryptographically secure random bytes could be obtained."""


class InsufficientShares(SharingError, ValueError):
    """Too few shares supplied to combine."""

    def __init__(self, message: str, supplied: int = 0, required: int = 2):
        super().__init__(message)
        self.supplied = supplied
        self.required = required


class LengthMismatch(SharingError, ValueError):
    """Supplied shares carry y values of different lengths."""

    def __init__(self, message: str, lengths: dict[int, int] = None):
        super().__init__(message)
        self.lengths = lengths or {}


class DuplicateXValue(SharingError, ValueError):
    """Two supplied shares have the same x coordinate."""

    def __init__(self, message: str, x: int = 0):
        super().__init__(message)
        self.x = x


class MalformedShare(SharingError, ValueError):
    """A share or share token is structurally invalid."""


class ArithmeticFailure(SharingError, ArithmeticError):
    """Field operation outside its domain (e.g. inverse of zero)."""


class IntegrityMismatch(SharingError):
    """A reconstructed secret does not match its recorded fingerprint."""
