"""
Shamir's Secret Sharing
Split a secret into N shares where any K can reconstruct it.

Every byte of the secret gets its own random polynomial of degree K-1
over GF(256), with the secret byte as the constant term. Share x holds
the value of every one of those polynomials at x. Any K shares pin each
polynomial down and give back f(0), the secret; K-1 shares are
consistent with every possible secret and reveal nothing.

Working byte-wise in GF(256) means a secret of any length splits with no
size limit and no prime to choose.

Limitation: a share records neither the threshold nor where it came from.
Combining fewer than K shares (but at least 2), or shares from different
splits, returns a wrong secret without an error. Pass `threshold=` to
combine when K is known, and check the result against a fingerprint
(keysplit.integrity) when a wrong secret must be caught.
"""

import itertools
import logging

from keysplit.codec import DEFAULT_ENCODING, ShareCodec
from keysplit.errors import (
    DuplicateXValue,
    InsufficientShares,
    InvalidParameter,
    LengthMismatch,
    MalformedShare,
    SharingError,
)
from keysplit.field import GF256
from keysplit.polynomial import RandomSource, evaluate_vector, random_coefficients
from keysplit.share import MAX_SHARES, MIN_THRESHOLD, Share, SharesConfig

logger = logging.getLogger(__name__)


def _check_secret(secret) -> bytes:
    if isinstance(secret, str):
        raise InvalidParameter(
            "Secret must be bytes, not str; encode it first (e.g. secret.encode())", "secret", None
        )
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise InvalidParameter(f"Secret must be bytes, got {type(secret).__name__}", "secret", None)
    if len(secret) == 0:
        raise InvalidParameter("Secret must not be empty", "secret_length>=1", 0)
    return bytes(secret)


class Shamir:
    """
    The secret sharing engine.

    Holds the field tables and the random source for a split or combine.
    Nothing else is kept between calls, so one instance can serve any
    number of callers and threads.

    Args:
        field: GF(256) arithmetic. A fresh GF256() if omitted.
        random_source: Where polynomial coefficients come from. Must be a
            CSPRNG; defaults to the OS one via the secrets module.
    """

    def __init__(self, field: GF256 = None, random_source: RandomSource = None):
        self.field = field or GF256()
        self.random_source = random_source or RandomSource()

    def split(self, secret: bytes, total_shares: int, threshold: int) -> list[Share]:
        """
        Split a secret into shares.

        Args:
            secret: The secret bytes to split (any length >= 1).
            total_shares: Total shares to generate (N).
            threshold: Minimum shares needed to reconstruct (K).

        Returns:
            List of N Share objects with x = 1..N. Any K reconstruct the secret.

        Raises:
            InvalidParameter: If 2 <= K <= N <= 255 does not hold or the
                secret is empty.
            RandomnessUnavailable: If the random source fails.
        """
        config = SharesConfig(total_shares=total_shares, threshold=threshold)
        secret = _check_secret(secret)

        logger.debug(
            "Splitting %d-byte secret into %d shares (threshold %d)",
            len(secret), config.total_shares, config.threshold,
        )

        # f_i(x) = secret[i] + c1[i]*x + ... + c(K-1)[i]*x^(K-1)
        coefficients = random_coefficients(secret, config.threshold, self.random_source)

        # x = 0 is the secret; shares start at 1
        return [
            Share(x=x, y=evaluate_vector(coefficients, x, self.field))
            for x in range(1, config.total_shares + 1)
        ]

    def lagrange_basis(self, xs: list[int]) -> list[int]:
        """
        Lagrange basis polynomials evaluated at 0.

        For each x_j: prod over m != j of x_m / (x_j - x_m). Subtraction is
        XOR in GF(256) and 0 - x_m is x_m.
        """
        field = self.field
        basis = []
        for j, xj in enumerate(xs):
            numerator = 1
            denominator = 1
            for m, xm in enumerate(xs):
                if m == j:
                    continue
                numerator = field.multiply(numerator, xm)
                denominator = field.multiply(denominator, field.subtract(xj, xm))
            basis.append(field.divide(numerator, denominator))
        return basis

    def combine(self, shares: list[Share], threshold: int = None) -> bytes:
        """
        Reconstruct a secret from shares using Lagrange interpolation at x=0.

        All supplied shares are used and their order does not matter.

        Args:
            shares: Shares from one split.
            threshold: K, if known. Fewer shares than this are rejected
                instead of silently producing a wrong secret.

        Returns:
            The reconstructed secret bytes.

        Raises:
            InvalidParameter: threshold is not an integer in 2..255.
            InsufficientShares: Fewer than 2 shares, or fewer than threshold.
            MalformedShare: An element is not a Share.
            DuplicateXValue: Two shares have the same x.
            LengthMismatch: Shares have different lengths.
        """
        shares = list(shares)
        if threshold is not None:
            if not isinstance(threshold, int) or isinstance(threshold, bool):
                raise InvalidParameter(
                    f"threshold must be an integer, got {type(threshold).__name__}", "threshold", threshold
                )
            if not MIN_THRESHOLD <= threshold <= MAX_SHARES:
                raise InvalidParameter(
                    f"threshold must be in {MIN_THRESHOLD}..{MAX_SHARES}, got {threshold}",
                    "2<=threshold<=255", threshold,
                )
        required = MIN_THRESHOLD if threshold is None else threshold
        if len(shares) < required:
            raise InsufficientShares(
                f"Need at least {required} shares, got {len(shares)}", len(shares), required
            )

        for share in shares:
            if not isinstance(share, Share):
                raise MalformedShare(f"Expected a Share, got {type(share).__name__}")

        seen = set()
        for share in shares:
            if share.x in seen:
                raise DuplicateXValue(f"Duplicate share x value: {share.x}", share.x)
            seen.add(share.x)

        lengths = {s.x: len(s.y) for s in shares}
        if len(set(lengths.values())) != 1:
            detail = ", ".join(f"x={x}: {n}" for x, n in sorted(lengths.items()))
            raise LengthMismatch(f"Shares have different lengths ({detail})", lengths)

        xs = [s.x for s in shares]
        logger.debug("Combining %d shares (x=%s)", len(shares), sorted(xs))

        basis = self.lagrange_basis(xs)
        secret = bytes(len(shares[0].y))
        for share, weight in zip(shares, basis):
            secret = self.field.add_vectors(secret, self.field.scale(share.y, weight))
        return secret


def split(
    secret: bytes,
    total_shares: int,
    threshold: int,
    *,
    encoding: str = DEFAULT_ENCODING,
    shamir: Shamir = None,
) -> list[str]:
    """
    Split a secret into N encoded share tokens.

    Args:
        secret: The secret bytes to split.
        total_shares: Total shares to generate (N).
        threshold: Minimum shares needed to reconstruct (K).
        encoding: Token encoding, "hex" or "base64".
        shamir: Engine to use (e.g. with an injected random source).

    Returns:
        N share tokens. Store or hand them out however you like.
    """
    codec = ShareCodec(encoding)
    shares = (shamir or Shamir()).split(secret, total_shares, threshold)
    return codec.encode_all(shares)


def combine(
    tokens: list[str],
    *,
    threshold: int = None,
    encoding: str = DEFAULT_ENCODING,
    shamir: Shamir = None,
) -> bytes:
    """
    Reconstruct a secret from encoded share tokens.

    Every token is decoded and validated before any interpolation runs.
    See the module docstring for what happens with too few shares.
    """
    codec = ShareCodec(encoding)
    shares = codec.decode_all(tokens)
    return (shamir or Shamir()).combine(shares, threshold=threshold)


def verify_shares(shares: list[Share], secret: bytes, shamir: Shamir = None) -> bool:
    """Verify that a set of shares correctly reconstructs the secret."""
    try:
        return (shamir or Shamir()).combine(shares) == bytes(secret)
    except SharingError:
        return False


def check_combinations(
    shares: list[Share],
    threshold: int,
    secret: bytes,
    shamir: Shamir = None,
) -> dict:
    """
    Combine every threshold-sized subset of shares and compare with the secret.

    Meant to run right after a split, before the shares are handed out,
    to confirm every K-of-N combination works.

    Returns:
        Report with the number of combinations tried, how many recovered
        the secret, and the x values of each combination that did not.

    Raises:
        InvalidParameter: threshold is outside 2..len(shares).
    """
    SharesConfig(total_shares=len(shares), threshold=threshold)
    shamir = shamir or Shamir()
    secret = bytes(secret)
    report = {
        "threshold": threshold,
        "combinations": 0,
        "recovered": 0,
        "failed": [],
    }

    for combo in itertools.combinations(shares, threshold):
        report["combinations"] += 1
        if verify_shares(list(combo), secret, shamir):
            report["recovered"] += 1
        else:
            report["failed"].append(tuple(s.x for s in combo))

    logger.debug(
        "Checked %d combinations of %d shares: %d recovered",
        report["combinations"], threshold, report["recovered"],
    )
    return report
