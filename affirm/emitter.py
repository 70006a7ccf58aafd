"""
The emission loop.

EmissionLoop writes the configured message as fast as the sink accepts it,
until one of four things happens:

  - the line limit is reached (``StopReason.LIMIT_REACHED``),
  - the shutdown token is set by a signal handler (``SHUTDOWN_REQUESTED``),
  - the consumer closes the stream, e.g. ``affirm | head`` (``STREAM_CLOSED``),
  - any other write fails (``ERROR``; reported once, never retried).

Two write strategies are used:

  Batched: fixed message and a writer that can style a whole buffer at once.
  One pre-joined buffer of ~8 KiB is written repeatedly. The shutdown token is
  checked between buffers, so stopping waits for the current buffer at most.

  Per-line: random message selection, or random styling. Every line is its own
  write and the token is checked before each one.
"""

import itertools
import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .buffer import BUFFER_CAPACITY, build_buffer
from .config import DEFAULT_MESSAGE, DEFAULT_RANDOM_MESSAGES
from .console import print_error
from .errors import NoMessagesError, is_stream_closed
from .shutdown import SHUTDOWN, ShutdownToken
from .writer import StyledWriter


class StopReason(Enum):
    LIMIT_REACHED = "limit-reached"
    SHUTDOWN_REQUESTED = "shutdown-requested"
    STREAM_CLOSED = "stream-closed"
    ERROR = "error"


@dataclass
class EmissionResult:
    reason: StopReason
    lines_written: int = 0
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        """Everything except ERROR counts as a successful run"""
        return self.reason is not StopReason.ERROR


def resolve_messages(
    messages: Sequence[str], random_mode: bool, allow_default: bool = True
) -> tuple[str, ...]:
    """Pick the candidates the loop will print.

    Fixed mode keeps only the first message; random mode keeps all of them.
    With an empty list the defaults apply ("y", or "y"/"n" in random mode)
    unless allow_default is False, in which case NoMessagesError is raised.

    The command line always fills in defaults before the loop is built (see
    `source.get_messages`), so it passes allow_default=False and the error only
    fires if that contract is broken.
    """
    if messages:
        return tuple(messages) if random_mode else (messages[0],)
    if not allow_default:
        raise NoMessagesError("Missing messages")
    return DEFAULT_RANDOM_MESSAGES if random_mode else (DEFAULT_MESSAGE,)


class EmissionLoop:
    def __init__(
        self,
        messages: Sequence[str],
        limit: int | None = None,
        random_mode: bool = False,
        token: ShutdownToken = SHUTDOWN,
        rng: random.Random | None = None,
        allow_default: bool = True,
        capacity: int = BUFFER_CAPACITY,
    ):
        self.messages = resolve_messages(messages, random_mode, allow_default)
        self.limit = limit
        self.random_mode = random_mode
        self.token = token
        self.capacity = capacity
        self._rng = rng or random.Random()
        self._lines_written = 0

    def run(self, writer: StyledWriter) -> EmissionResult:
        """Emit until a stop condition. Never raises for write failures."""
        self._lines_written = 0
        try:
            reason = self._emit(writer)
        except (OSError, EOFError, ValueError) as e:
            # ValueError covers unencodable text and writes to a closed file.
            if is_stream_closed(e):
                return EmissionResult(StopReason.STREAM_CLOSED, self._lines_written)
            print_error(getattr(e, "strerror", None) or str(e))
            return EmissionResult(StopReason.ERROR, self._lines_written, e)
        return EmissionResult(reason, self._lines_written)

    def _emit(self, writer: StyledWriter) -> StopReason:
        if self.limit == 0:
            return StopReason.LIMIT_REACHED
        if not self.random_mode and writer.supports_batched_writes():
            return self._emit_batched(writer, self.messages[0])
        return self._emit_lines(writer)

    def _emit_batched(self, writer: StyledWriter, message: str) -> StopReason:
        # The buffer is built from the rendered line, so in fixed color mode
        # every repeated line carries its own set/reset pair.
        buffer, repeat_count = build_buffer(writer.render(message), self.capacity, self.limit)

        if self.limit is None:
            while not self.token.is_stopped():
                writer.write_raw(buffer)
                self._lines_written += repeat_count
            return StopReason.SHUTDOWN_REQUESTED

        for _ in range(self.limit // repeat_count):
            if self.token.is_stopped():
                return StopReason.SHUTDOWN_REQUESTED
            writer.write_raw(buffer)
            self._lines_written += repeat_count

        for _ in range(self.limit % repeat_count):
            if self.token.is_stopped():
                return StopReason.SHUTDOWN_REQUESTED
            writer.writeln(message)
            self._lines_written += 1

        return StopReason.LIMIT_REACHED

    def _emit_lines(self, writer: StyledWriter) -> StopReason:
        units = itertools.repeat(None) if self.limit is None else itertools.repeat(None, self.limit)
        for _ in units:
            if self.token.is_stopped():
                return StopReason.SHUTDOWN_REQUESTED
            if self.random_mode:
                message = self._rng.choice(self.messages)
            else:
                message = self.messages[0]
            writer.writeln(message)
            self._lines_written += 1
        return StopReason.LIMIT_REACHED
