"""
Candidate messages for the emission loop.

Messages come from, in order of preference:
  1. the strings given on the command line,
  2. the first line of piped standard input (`echo "yes no" | affirm -r`),
     split on single spaces,
  3. the defaults: "y", or "y" and "n" when output is randomized.
"""

import sys
from typing import TextIO

from .config import DEFAULT_MESSAGE, DEFAULT_RANDOM_MESSAGES, Config
from .errors import MessageSourceError


def get_default(config: Config) -> list[str]:
    if config.random:
        return list(DEFAULT_RANDOM_MESSAGES)
    return [DEFAULT_MESSAGE]


def is_piped(stream: TextIO | None) -> bool:
    """True when stream is an open, non-interactive input"""
    if stream is None:
        return False
    try:
        return not stream.isatty()
    except (AttributeError, ValueError, OSError):
        return False


def get_messages(config: Config, stdin: TextIO | None = None) -> list[str]:
    """Candidate messages for config, never empty.

    Only one line of piped input is read. A blank line or an empty pipe falls
    back to the defaults.

    Raises:
        MessageSourceError: if reading from the pipe fails.
    """
    if config.messages:
        return list(config.messages)

    stream = sys.stdin if stdin is None else stdin
    if is_piped(stream):
        try:
            line = stream.readline()  # type: ignore[union-attr]
        except (OSError, UnicodeDecodeError) as e:
            raise MessageSourceError(f"Could not read messages from stdin: {e}") from e
        text = line.rstrip("\r\n")
        if text:
            return text.split(" ")

    return get_default(config)
