"""Command-line entry point."""

from __future__ import annotations

import argparse
import platform
import sys

VERSION = "dev"
BUILD_TIME = "unknown"
GIT_COMMIT = "unknown"

_DESCRIPTION = """\
ykcrypt is a command-line tool that encrypts/decrypts files using a
YubiKey PIV ECDH key agreement key as the hardware-root secret.

Security model:
  - Encryption uses ephemeral ECDH against the YubiKey slot public key
  - Encryption can be done without the YubiKey if you have the recipient string
  - Decryption requires the YubiKey (PIN + touch)
  - Optional passphrase as second factor"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its global options and subcommands."""
    parser = argparse.ArgumentParser(
        prog="ykcrypt",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--reader",
        default="",
        help="PC/SC reader name (default: first YubiKey found)",
    )
    commands = parser.add_subparsers(dest="command", metavar="command")
    commands.add_parser(
        "version",
        help="Print the version information",
        description="Print the version information for ykcrypt.",
    )
    return parser


def version_text() -> str:
    """The text printed by the ``version`` command."""
    return "\n".join(
        [
            "ykcrypt - YubiKey-based file encryption tool",
            f"Version:    {VERSION}",
            f"Git Commit: {GIT_COMMIT}",
            f"Built:      {BUILD_TIME}",
            f"Python:     {platform.python_version()}",
        ]
    )


def main(argv: list[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code in (0, None) else 1

    if args.command == "version":
        print(version_text())
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())