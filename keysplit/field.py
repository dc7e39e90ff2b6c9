"""
GF(2^8) Arithmetic
The finite field every share byte lives in.

Each byte value is a field element, so a secret of any length is shared
position by position with no carries between bytes. Addition is XOR;
multiplication is polynomial multiplication modulo the AES/Rijndael
polynomial x^8 + x^4 + x^3 + x + 1.

Tables are built per instance. Nothing here touches process-global state.
"""

from keysplit.errors import ArithmeticFailure


# x^8 + x^4 + x^3 + x + 1
FIELD_POLYNOMIAL = 0x11B
# 3 (= x + 1) generates the multiplicative group under 0x11B
FIELD_GENERATOR = 3
FIELD_SIZE = 256


def _multiply_slow(a: int, b: int, polynomial: int) -> int:
    """Shift-and-add multiplication, used only to build the tables."""
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= polynomial
        b >>= 1
    return result


def _check(*elements: int) -> None:
    for e in elements:
        if not isinstance(e, int) or not 0 <= e < FIELD_SIZE:
            raise ArithmeticFailure(f"{e!r} is not an element of GF(256)")


class GF256:
    """
    Arithmetic over GF(2^8).

    Multiplication and inversion go through log/antilog tables computed
    once in the constructor. The exp table is doubled to 510 entries so
    log sums never need reducing.

    Args:
        polynomial: Irreducible modulus (degree 8).
        generator: A generator of the multiplicative group for that modulus.
    """

    def __init__(self, polynomial: int = FIELD_POLYNOMIAL, generator: int = FIELD_GENERATOR):
        self.polynomial = polynomial
        self.generator = generator

        exp = [0] * 510
        log = [0] * FIELD_SIZE
        x = 1
        for i in range(255):
            exp[i] = x
            log[x] = i
            x = _multiply_slow(x, generator, polynomial)
        if x != 1 or len(set(exp[:255])) != 255:
            raise ArithmeticFailure(
                f"{generator:#x} does not generate GF(256) modulo {polynomial:#x}"
            )
        for i in range(255, 510):
            exp[i] = exp[i - 255]

        self._exp = tuple(exp)
        self._log = tuple(log)
        self._tables: dict[int, bytes] = {}

    @staticmethod
    def add(a: int, b: int) -> int:
        """Addition in GF(256) (XOR)."""
        _check(a, b)
        return a ^ b

    # Characteristic 2: every element is its own additive inverse
    subtract = add

    def multiply(self, a: int, b: int) -> int:
        _check(a, b)
        if a == 0 or b == 0:
            return 0
        return self._exp[self._log[a] + self._log[b]]

    def inverse(self, a: int) -> int:
        """
        Multiplicative inverse of a.

        Raises:
            ArithmeticFailure: If a is zero. Zero has no inverse and is
                never mapped to one silently.
        """
        _check(a)
        if a == 0:
            raise ArithmeticFailure("Zero has no multiplicative inverse in GF(256)")
        return self._exp[255 - self._log[a]]

    def divide(self, a: int, b: int) -> int:
        _check(a, b)
        if b == 0:
            raise ArithmeticFailure("Division by zero in GF(256)")
        if a == 0:
            return 0
        return self._exp[self._log[a] - self._log[b] + 255]

    def power(self, base: int, exponent: int) -> int:
        _check(base)
        if exponent < 0:
            raise ArithmeticFailure("Negative exponents are not supported")
        if exponent == 0:
            return 1
        if base == 0:
            return 0
        return self._exp[(self._log[base] * exponent) % 255]

    def multiplication_table(self, c: int) -> bytes:
        """
        The 256-byte table t with t[v] == multiply(c, v).

        Suitable for bytes.translate(), which multiplies every byte of a
        vector by the constant c in one call.
        """
        _check(c)
        table = self._tables.get(c)
        if table is None:
            table = bytes(self.multiply(c, v) for v in range(FIELD_SIZE))
            self._tables[c] = table
        return table

    def scale(self, vector: bytes, c: int) -> bytes:
        """Multiply every element of vector by c."""
        return bytes(vector).translate(self.multiplication_table(c))

    @staticmethod
    def add_vectors(a: bytes, b: bytes) -> bytes:
        """Element-wise addition (XOR) of two equal-length vectors."""
        if len(a) != len(b):
            raise ArithmeticFailure(f"Vector lengths differ: {len(a)} != {len(b)}")
        n = len(a)
        return (int.from_bytes(a, "big") ^ int.from_bytes(b, "big")).to_bytes(n, "big")
