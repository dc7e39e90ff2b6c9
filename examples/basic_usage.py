"""
keysplit — Basic Usage Example

Splits a wallet-style private key into 5 shares, 3 of which recover it,
and shows why a fingerprint belongs next to the shares.
"""

import os
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from keysplit import split, combine, fingerprint, combine_verified, IntegrityMismatch


def main():
    # Secret origination is up to you: here, 32 random bytes
    private_key = os.urandom(32)

    print("=" * 50)
    print("  keysplit — 3-of-5 Shamir Secret Sharing")
    print("=" * 50)

    tokens = split(private_key, total_shares=5, threshold=3)
    fp = fingerprint(private_key)

    print(f"\nSplit a {len(private_key)}-byte key into {len(tokens)} shares:")
    for token in tokens:
        print(f"  {token[:2]}… ({len(token)} hex chars)")
    print(f"Fingerprint: {fp[:16]}…")

    # Any three shares, in any order
    recovered = combine([tokens[4], tokens[0], tokens[2]])
    print(f"\nRecovered from shares 5, 1, 3: {'OK' if recovered == private_key else 'WRONG'}")

    # Two shares still "work" but give the wrong key, without an error
    wrong = combine(tokens[:2])
    print(f"Recovered from 2 shares:       {'OK' if wrong == private_key else 'WRONG (no error raised)'}")

    # The fingerprint catches it
    try:
        combine_verified(tokens[:2], fp)
    except IntegrityMismatch as e:
        print(f"Fingerprint check:             rejected ({e.__class__.__name__})")


if __name__ == "__main__":
    main()
