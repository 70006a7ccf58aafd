"""
Styled output for emitted lines.

StyledWriter owns the output sink for the duration of an emission run and is
the only thing that writes to it. Three color modes are supported:

  - **none**: text goes to the sink untouched. No escape sequence is ever
    written, not even on teardown.
  - **fixed**: every line is wrapped in the same style-set / style-reset pair.
    Because the wrapping is identical for every line, a fixed-mode line can be
    rendered once and repeated in a batched buffer.
  - **random**: each line gets a freshly sampled style, so lines must be
    written one at a time.

Escape sequences come from Rich's `Style.render`, so colors degrade to what
the detected color system supports (standard, 256 or truecolor). The color
system is detected from the sink exactly the way Rich's Console does it: a sink
that is not a terminal gets no styling unless a color system is forced.
"""

import os
import random
import sys
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from typing import Protocol

from rich.color import ColorSystem
from rich.console import COLOR_SYSTEMS, Console
from rich.style import Style

from .buffer import TERMINATOR
from .config import DISABLED, ColorMode, Config
from .console import print_warning
from .errors import OutputUnavailableError, is_stream_closed

# Foreground colors sampled in random mode.
PALETTE = ("black", "white", "red", "green", "blue", "yellow", "cyan", "magenta")

# Rich closes every rendered style with SGR 0; teardown uses the same sequence.
RESET = "\x1b[0m"

# Placeholder rendered in place of the text to split a style into its set and reset codes.
_MARK = "\x00"


class Sink(Protocol):
    """Anything that accepts text and can be flushed (sys.stdout, StringIO, ...)."""

    def write(self, text: str, /) -> object: ...

    def flush(self) -> object: ...


def random_style(rng: random.Random) -> Style:
    """Sample one style for random mode.

    Color is uniform over PALETTE; bold, italic and underline are independent
    coin flips; dim and intense are mutually exclusive (none / dim / intense,
    uniformly). Rich has no separate "intense" attribute, so intense picks the
    bright variant of the sampled color.
    """
    color = rng.choice(PALETTE)
    bold = rng.random() < 0.5
    italic = rng.random() < 0.5
    underline = rng.random() < 0.5

    emphasis = rng.randrange(3)
    if emphasis == 2:
        color = f"bright_{color}"

    return Style(color=color, bold=bold, italic=italic, underline=underline, dim=emphasis == 1)


def style_codes(style: Style, color_system: ColorSystem) -> tuple[str, str]:
    """Style-set and style-reset sequences for style.

    `Style.render` returns an empty string for empty text, which would leave an
    empty line unstyled; rendering a placeholder keeps the pair for every line.
    """
    set_code, _, reset_code = style.render(_MARK, color_system=color_system).partition(_MARK)
    return set_code, reset_code


def resolve_color_system(sink: Sink, color_system: str | None = "auto") -> ColorSystem | None:
    """Resolve a color system name against a sink.

    "auto" asks Rich to detect support for the sink (None when it is not a
    terminal, or when NO_COLOR is set); an explicit name is used as is; None
    disables styling.
    """
    if color_system is None:
        return None
    if color_system == "auto" and os.getenv("NO_COLOR"):
        return None
    detected = Console(file=sink, color_system=color_system).color_system  # type: ignore[arg-type]
    if detected is None:
        return None
    return COLOR_SYSTEMS[detected]


class StyledWriter:
    """Write lines to a sink, optionally styled, resetting style on every exit path.

    Use as a context manager so the final reset and flush always happen:

        with StyledWriter(sys.stdout, ColorMode("fixed", "red")) as writer:
            writer.writeln("y")
    """

    def __init__(
        self,
        sink: Sink,
        color: ColorMode = DISABLED,
        color_system: str | None = "auto",
        rng: random.Random | None = None,
    ):
        self._sink = sink
        self._color = color
        self._rng = rng or random.Random()
        self._color_system = resolve_color_system(sink, color_system) if color.enabled else None
        self._fixed_codes = None
        if color.kind == "fixed" and self._color_system is not None:
            self._fixed_codes = style_codes(Style(color=color.color), self._color_system)

    @classmethod
    def for_config(cls, config: Config, rng: random.Random | None = None) -> "StyledWriter":
        """Writer on stdout or stderr, as the configuration asks"""
        sink = sys.stderr if config.target == "stderr" else sys.stdout
        if sink is None:
            raise OutputUnavailableError(f"No {config.target} to write to")
        return cls(sink, config.color, config.color_system, rng)

    @property
    def styled(self) -> bool:
        """True when escape sequences are actually being written"""
        return self._color_system is not None

    def supports_batched_writes(self) -> bool:
        # A fixed style can be applied to a whole multi-line buffer; a random
        # one has to change every line.
        return self._color.kind != "random"

    def render(self, text: str) -> str:
        """Text as it will appear on the sink, wrapped in style-set/reset when styled."""
        if not self.styled:
            return text
        if self._fixed_codes is not None:
            set_code, reset_code = self._fixed_codes
        else:
            set_code, reset_code = style_codes(random_style(self._rng), self._color_system)
        return f"{set_code}{text}{reset_code}"

    def write(self, text: str) -> None:
        with self._reset_on_error():
            self._sink.write(self.render(text))

    def writeln(self, text: str) -> None:
        # The terminator stays outside the styled region.
        with self._reset_on_error():
            self._sink.write(self.render(text) + TERMINATOR)

    def write_raw(self, buffer: str) -> None:
        """Write a batch that was already rendered with `render`."""
        with self._reset_on_error():
            self._sink.write(buffer)

    @contextmanager
    def _reset_on_error(self) -> Iterator[None]:
        try:
            yield
        except (OSError, ValueError):
            # A failed write may leave a style open. Try to close it; the sink
            # is probably gone, so a second failure is expected and the
            # original error is the one worth raising.
            if self.styled:
                with suppress(OSError, ValueError):
                    self._sink.write(RESET)
            raise

    def close(self) -> None:
        """Emit a final reset (when styled) and flush. Never raises."""
        try:
            if self.styled:
                self._sink.write(RESET)
            self._sink.flush()
        except (OSError, ValueError) as e:
            if not is_stream_closed(e):
                print_warning(f"Could not reset output stream: {e}")

    def __enter__(self) -> "StyledWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
