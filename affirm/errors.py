"""Exceptions raised by affirm, and classification of write failures."""

import errno

# errno values that mean the reader went away or the write was interrupted.
# Both end the emission the same way a reached limit does.
_STREAM_CLOSED_ERRNOS = {errno.EPIPE, errno.EINTR}


class AffirmError(Exception):
    """Base exception for affirm."""

    pass


class ConfigError(AffirmError):
    """Raised when a configuration value cannot be understood."""

    pass


class NoMessagesError(AffirmError):
    """Raised when there is nothing to print and no default applies."""

    pass


class MessageSourceError(AffirmError):
    """Raised when candidate messages cannot be read from piped input."""

    pass


class OutputUnavailableError(AffirmError):
    """Raised when the output stream does not exist (e.g. stdout was closed at startup)."""

    pass


def is_stream_closed(exc: BaseException) -> bool:
    """Tell whether a write failure means the consumer closed the stream.

    Broken pipes, unexpected end of stream and interrupted system calls are the
    normal way a `yes`-style producer ends (`affirm | head -n 5`), so callers
    stop quietly on them. Anything else is a real I/O fault.
    """
    if isinstance(exc, (BrokenPipeError, EOFError, InterruptedError)):
        return True
    return isinstance(exc, OSError) and exc.errno in _STREAM_CLOSED_ERRNOS
