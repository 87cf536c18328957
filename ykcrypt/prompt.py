"""Reading PINs and passphrases from the user."""

from __future__ import annotations

import getpass
import sys


def prompt_hidden(prompt: str) -> str:
    """Prompt on stderr and read a value without echo.

    On a terminal the input is hidden; otherwise a single word is read
    from one line of standard input.
    """
    stdin = sys.stdin
    if stdin is not None and stdin.isatty():
        return getpass.getpass(prompt, stream=sys.stderr).strip()

    sys.stderr.write(prompt)
    sys.stderr.flush()
    line = stdin.readline() if stdin is not None else ""
    if not line:
        raise EOFError("unexpected end of input")
    words = line.split()
    if not words:
        raise ValueError("unexpected newline")
    if len(words) > 1:
        raise ValueError("expected newline")
    return words[0].strip()


def prompt_passphrase(prompt: str) -> str:
    """Prompt for a passphrase; an empty one is refused."""
    value = prompt_hidden(prompt)
    if not value:
        raise ValueError("empty passphrase not allowed")
    return value