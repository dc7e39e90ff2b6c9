"""
keysplit command line.

    echo -n "my secret" | keysplit split -n 5 -k 3 > shares.txt
    head -3 shares.txt | keysplit combine
    keysplit verify -k 3 $(cat shares.txt) < secret.txt

The secret is read from stdin (or a hidden prompt on a terminal) and
written only to stdout. Nothing secret goes to the log.
"""

import logging

import click

from keysplit.codec import DEFAULT_ENCODING, ENCODINGS, ShareCodec
from keysplit.errors import SharingError
from keysplit.integrity import combine_verified, fingerprint
from keysplit.shamir import Shamir, check_combinations, combine, split

logger = logging.getLogger(__name__)

_encoding_option = click.option(
    "--encoding",
    type=click.Choice(ENCODINGS),
    default=DEFAULT_ENCODING,
    show_default=True,
    help="Share token encoding",
)


def _read_secret(hex_input: bool) -> bytes:
    stdin = click.get_text_stream("stdin")
    if stdin.isatty():
        text = click.prompt("Secret", hide_input=True)
        raw = text.encode("utf-8")
    else:
        raw = click.get_binary_stream("stdin").read()
        # A single trailing newline comes from echo / editors, not the secret
        if raw.endswith(b"\r\n"):
            raw = raw[:-2]
        elif raw.endswith(b"\n"):
            raw = raw[:-1]

    if hex_input:
        try:
            return bytes.fromhex(raw.decode("ascii").strip())
        except (UnicodeDecodeError, ValueError):
            raise click.BadParameter("secret on stdin is not valid hex", param_hint="--hex-input")
    return raw


def _read_tokens(tokens: tuple) -> list[str]:
    if tokens:
        return list(tokens)
    lines = click.get_text_stream("stdin").read().splitlines()
    return [line.strip() for line in lines if line.strip()]


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
def main(verbose: bool) -> None:
    """Split secrets into Shamir shares over GF(256) and put them back together."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command("split")
@click.option("-n", "--shares", "total_shares", type=int, required=True, help="Total shares to create (N)")
@click.option("-k", "--threshold", type=int, required=True, help="Shares needed to recover (K)")
@_encoding_option
@click.option("--hex-input", is_flag=True, help="Secret on stdin is hex, not raw bytes")
@click.option("--fingerprint", "show_fingerprint", is_flag=True, help="Print the secret's SHA-256 fingerprint to stderr")
def split_command(total_shares: int, threshold: int, encoding: str, hex_input: bool, show_fingerprint: bool) -> None:
    """Split the secret on stdin into N share tokens, one per line."""
    secret = _read_secret(hex_input)
    try:
        tokens = split(secret, total_shares, threshold, encoding=encoding)
    except SharingError as e:
        raise click.ClickException(str(e))

    for token in tokens:
        click.echo(token)
    if show_fingerprint:
        click.echo(f"fingerprint: {fingerprint(secret)}", err=True)


@main.command("combine")
@click.argument("tokens", nargs=-1)
@click.option("-k", "--threshold", type=int, default=None, help="Reject fewer than K shares")
@_encoding_option
@click.option("--hex-output", is_flag=True, help="Write the secret as hex")
@click.option("--fingerprint", "expected", default=None, help="Fail unless the result matches this fingerprint")
def combine_command(tokens: tuple, threshold: int, encoding: str, hex_output: bool, expected: str) -> None:
    """Reconstruct a secret from share tokens (arguments, or one per line on stdin)."""
    token_list = _read_tokens(tokens)
    try:
        if expected:
            secret = combine_verified(token_list, expected, threshold=threshold, encoding=encoding)
        else:
            secret = combine(token_list, threshold=threshold, encoding=encoding)
    except SharingError as e:
        raise click.ClickException(str(e))

    if hex_output:
        click.echo(secret.hex())
    else:
        out = click.get_binary_stream("stdout")
        out.write(secret)
        out.flush()


@main.command("verify")
@click.argument("tokens", nargs=-1, required=True)
@click.option("-k", "--threshold", type=int, required=True, help="Shares needed to recover (K)")
@_encoding_option
@click.option("--hex-input", is_flag=True, help="Secret on stdin is hex, not raw bytes")
def verify_command(tokens: tuple, threshold: int, encoding: str, hex_input: bool) -> None:
    """Check that every K-combination of the tokens recovers the secret on stdin."""
    secret = _read_secret(hex_input)
    try:
        shares = ShareCodec(encoding).decode_all(list(tokens))
        report = check_combinations(shares, threshold, secret, Shamir())
    except SharingError as e:
        raise click.ClickException(str(e))

    click.echo(
        f"{report['recovered']}/{report['combinations']} combinations of "
        f"{threshold} shares recovered the secret"
    )
    for xs in report["failed"]:
        click.echo(f"  FAILED: x={', '.join(str(x) for x in xs)}")
    if report["combinations"] == 0 or report["failed"]:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
