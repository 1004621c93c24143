"""DigiAuth CLI.

Usage:
    python -m digiauth secret                       # Issue a new secret
    python -m digiauth uri SECRET ACCOUNT           # Provisioning URI for QR enrollment
    python -m digiauth code SECRET                  # Current code + seconds left
    python -m digiauth verify SECRET TOKEN          # Exit 0 if the token is valid
"""

from __future__ import annotations

import argparse
import logging
import sys

from digiauth.auth import base32, totp
from digiauth.config import settings
from digiauth.models import VerificationOutcome


def cmd_secret(args: argparse.Namespace) -> None:
    """Issue a new secret, optionally with its provisioning URI."""
    if args.account:
        enrollment = totp.enroll(args.account, issuer=args.issuer)
        print(enrollment.secret)
        print(enrollment.provisioning_uri)
    else:
        print(totp.generate_secret())


def cmd_uri(args: argparse.Namespace) -> None:
    """Print the otpauth:// URI for a secret."""
    try:
        uri = totp.get_provisioning_uri(base32.normalize(args.secret), args.account, issuer=args.issuer)
    except base32.InvalidSecret as e:
        print(f"Error: secret is not valid base32 ({e})")
        sys.exit(1)
    print(uri)


def cmd_code(args: argparse.Namespace) -> None:
    """Print the current code for a secret."""
    try:
        snapshot = totp.current_code(base32.normalize(args.secret))
    except base32.InvalidSecret as e:
        print(f"Error: secret is not valid base32 ({e})")
        sys.exit(1)
    print(f"{snapshot.code}  ({snapshot.seconds_remaining}s left)")


def cmd_verify(args: argparse.Namespace) -> None:
    """Verify a token; exit status reflects the outcome."""
    outcome = totp.check_token(base32.normalize(args.secret), args.token)
    print(outcome.value)
    sys.exit(0 if outcome is VerificationOutcome.VALID else 1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="digiauth",
        description="DigiAuth — TOTP two-factor authentication tools",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=settings.log_level.upper(),
    )
    sub = parser.add_subparsers(dest="command", help="Command to run")

    # secret
    p_secret = sub.add_parser("secret", help="Issue a new secret")
    p_secret.add_argument("--account", help="Also print the provisioning URI for this account")
    p_secret.add_argument("--issuer", help=f"Issuer name (default: {settings.totp_issuer})")

    # uri
    p_uri = sub.add_parser("uri", help="Build a provisioning URI")
    p_uri.add_argument("secret")
    p_uri.add_argument("account")
    p_uri.add_argument("--issuer", help=f"Issuer name (default: {settings.totp_issuer})")

    # code
    p_code = sub.add_parser("code", help="Show the current code")
    p_code.add_argument("secret")

    # verify
    p_verify = sub.add_parser("verify", help="Verify a token")
    p_verify.add_argument("secret")
    p_verify.add_argument("token")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    if not args.command:
        parser.print_help()
        sys.exit(0)

    dispatch = {
        "secret": cmd_secret,
        "uri": cmd_uri,
        "code": cmd_code,
        "verify": cmd_verify,
    }
    dispatch[args.command](args)


if __name__ == "__main__":
    main()
