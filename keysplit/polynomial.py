"""
Random Polynomials
Build and evaluate the per-byte polynomials behind each share.

For every byte position i of the secret there is one polynomial of
degree K-1 over GF(256):

    f_i(x) = secret[i] + c1*x + c2*x^2 + ... + c(K-1)*x^(K-1)

The constant term is the secret byte; every other coefficient is an
independent, uniform random byte from a CSPRNG. The secret sits at f_i(0).

Polynomials are held as coefficient vectors: vector j holds the j-th
coefficient of all L polynomials, so one Horner step over the vectors
advances all positions at once.
"""

import logging
import secrets

from keysplit.errors import RandomnessUnavailable
from keysplit.field import GF256

logger = logging.getLogger(__name__)


class RandomSource:
    """
    Cryptographically secure random bytes.

    Wraps a byte function (default: secrets.token_bytes, backed by the OS
    CSPRNG). If the function fails or comes back short, RandomnessUnavailable
    is raised. There is no fallback to a weaker generator.

    Args:
        token_bytes: Callable taking a count and returning that many bytes.
            Tests inject deterministic functions here.
    """

    def __init__(self, token_bytes=None):
        self._token_bytes = token_bytes or secrets.token_bytes

    def read(self, count: int) -> bytes:
        if count == 0:
            return b""
        try:
            data = self._token_bytes(count)
        except (NotImplementedError, OSError) as e:
            logger.error("Secure random source failed: %s", e.__class__.__name__)
            raise RandomnessUnavailable(f"No secure random source available: {e}") from e

        if not isinstance(data, (bytes, bytearray)) or len(data) != count:
            got = len(data) if isinstance(data, (bytes, bytearray)) else type(data).__name__
            logger.error("Secure random source returned %s, expected %d bytes", got, count)
            raise RandomnessUnavailable(
                f"Random source returned {got} instead of {count} bytes"
            )
        return bytes(data)


def random_polynomial(secret_byte: int, threshold: int, source: RandomSource) -> list[int]:
    """
    Coefficients c0..c(K-1) of one random polynomial with f(0) = secret_byte.
    """
    return [secret_byte] + list(source.read(threshold - 1))


def random_coefficients(secret: bytes, threshold: int, source: RandomSource) -> list[bytes]:
    """
    Coefficient vectors for all positions of a secret.

    Returns K vectors of length L. Vector 0 is the secret itself; vectors
    1..K-1 are drawn in one read from the random source and sliced, so
    every byte is independent and uniform.
    """
    length = len(secret)
    pool = source.read((threshold - 1) * length)
    vectors = [bytes(secret)]
    for j in range(threshold - 1):
        vectors.append(pool[j * length:(j + 1) * length])
    return vectors


def evaluate(coefficients: list[int], x: int, field: GF256) -> int:
    """Evaluate one polynomial at x using Horner's method."""
    result = 0
    for coeff in reversed(coefficients):
        result = field.add(field.multiply(result, x), coeff)
    return result


def evaluate_vector(vectors: list[bytes], x: int, field: GF256) -> bytes:
    """
    Evaluate all L polynomials at x.

    Horner's method with vectors: multiply the accumulator by x (a byte
    translate) and add the next coefficient vector (XOR).
    """
    result = bytes(len(vectors[0]))
    for vector in reversed(vectors):
        result = field.add_vectors(field.scale(result, x), vector)
    return result
