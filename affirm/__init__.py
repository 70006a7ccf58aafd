"""affirm - print a string repeatedly, as fast as the reader accepts it"""

from .buffer import BUFFER_CAPACITY, build_buffer
from .config import (
    DEFAULT_MESSAGE,
    DEFAULT_RANDOM_MESSAGES,
    DISABLED,
    RANDOM,
    ColorMode,
    Config,
    parse_color_mode,
    parse_color_system,
)
from .emitter import EmissionLoop, EmissionResult, StopReason, resolve_messages
from .errors import (
    AffirmError,
    ConfigError,
    MessageSourceError,
    NoMessagesError,
    OutputUnavailableError,
    is_stream_closed,
)
from .shutdown import (
    SHUTDOWN,
    ShutdownToken,
    install_signal_handlers,
    restore_signal_handlers,
)
from .source import get_messages
from .writer import PALETTE, RESET, StyledWriter, random_style

__all__ = [
    # Buffer
    "BUFFER_CAPACITY",
    "build_buffer",
    # Config
    "DEFAULT_MESSAGE",
    "DEFAULT_RANDOM_MESSAGES",
    "DISABLED",
    "RANDOM",
    "ColorMode",
    "Config",
    "parse_color_mode",
    "parse_color_system",
    # Emission
    "EmissionLoop",
    "EmissionResult",
    "StopReason",
    "resolve_messages",
    # Errors
    "AffirmError",
    "ConfigError",
    "MessageSourceError",
    "NoMessagesError",
    "OutputUnavailableError",
    "is_stream_closed",
    # Shutdown
    "SHUTDOWN",
    "ShutdownToken",
    "install_signal_handlers",
    "restore_signal_handlers",
    # Source
    "get_messages",
    # Writer
    "PALETTE",
    "RESET",
    "StyledWriter",
    "random_style",
]
