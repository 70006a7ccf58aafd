"""
Cooperative shutdown for the emission loop.

A signal handler must not do real work: it only flips a flag, and the loop
checks that flag between units of work (one batched buffer or one line). The
flag is a plain attribute. CPython runs signal handlers on the main thread
between bytecodes, so the store is seen by the next check without any lock.
"""

import signal
from collections.abc import Iterable
from typing import Any

from .console import print_warning


class ShutdownToken:
    """A notify-once stop flag shared by a signal handler and the loop"""

    def __init__(self):
        self._stopped = False

    def request_stop(self) -> None:
        # Called from signal context: a single store, nothing else.
        self._stopped = True

    def is_stopped(self) -> bool:
        return self._stopped

    def reset(self) -> None:
        """Clear the flag. Only meant for reusing the token across runs in one process."""
        self._stopped = False


# Process-wide token used by the command-line entry point.
SHUTDOWN = ShutdownToken()


def default_signals() -> list[signal.Signals]:
    """SIGINT and SIGTERM, plus SIGHUP where the platform has it"""
    names = ("SIGINT", "SIGTERM", "SIGHUP")
    return [getattr(signal, name) for name in names if hasattr(signal, name)]


def install_signal_handlers(
    token: ShutdownToken, signals: Iterable[signal.Signals] | None = None
) -> dict[signal.Signals, Any]:
    """Route stop signals to `token.request_stop`.

    Installation can fail (e.g. when called off the main thread). That is not
    fatal: the loop still runs, it just cannot be stopped cooperatively, so a
    warning is printed and the signal is skipped.

    Returns:
        The previous handler of every signal that was installed, for
        `restore_signal_handlers`.
    """

    def handler(signum, frame):
        token.request_stop()

    previous: dict[signal.Signals, Any] = {}
    for sig in default_signals() if signals is None else signals:
        try:
            previous[sig] = signal.signal(sig, handler)
        except (ValueError, OSError, RuntimeError) as e:
            print_warning(f"Could not install handler for {signal.Signals(sig).name}: {e}")
    return previous


def restore_signal_handlers(previous: dict[signal.Signals, Any]) -> None:
    """Put back handlers returned by `install_signal_handlers`"""
    for sig, handler in previous.items():
        try:
            signal.signal(sig, handler)
        except (ValueError, OSError, RuntimeError, TypeError) as e:
            print_warning(f"Could not restore handler for {signal.Signals(sig).name}: {e}")
