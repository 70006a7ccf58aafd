import os
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

import typer

from .config import (
    Config,
    get_bool_setting,
    get_color_setting,
    get_color_system_setting,
    parse_color_mode,
    parse_color_system,
)
from .console import print_error
from .emitter import EmissionLoop, EmissionResult, StopReason
from .errors import ConfigError, MessageSourceError, NoMessagesError, OutputUnavailableError
from .shutdown import SHUTDOWN, ShutdownToken, install_signal_handlers, restore_signal_handlers
from .source import get_messages
from .writer import StyledWriter

app = typer.Typer(
    name="affirm",
    add_completion=False,
    help="Repeatedly print a string (or a random pick among several) until killed.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def get_version() -> str:
    """Installed package version, or "dev" when running from a source checkout"""
    try:
        return version("affirm")
    except PackageNotFoundError:
        return "dev"


def _version_callback(value: bool):
    if value:
        typer.echo(get_version())
        raise typer.Exit()


def silence_stream(stream) -> None:
    """Point a closed stream's file descriptor at devnull.

    After the reader of a pipe goes away, the interpreter's own flush at exit
    would raise BrokenPipeError again and print a traceback.
    """
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        # Not backed by a descriptor (tests, embedding); nothing to flush at exit.
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def run(config: Config, messages: list[str], token: ShutdownToken = SHUTDOWN) -> EmissionResult:
    """Run one emission with signal handling and guaranteed writer teardown."""
    try:
        loop = EmissionLoop(
            messages,
            limit=config.limit,
            random_mode=config.random,
            token=token,
            allow_default=False,
        )
    except NoMessagesError as e:
        print_error(str(e))
        return EmissionResult(StopReason.ERROR, error=e)

    try:
        writer = StyledWriter.for_config(config)
    except OutputUnavailableError as e:
        print_error(str(e))
        return EmissionResult(StopReason.ERROR, error=e)

    previous = install_signal_handlers(token)
    try:
        with writer:
            result = loop.run(writer)
    finally:
        restore_signal_handlers(previous)

    if result.reason is StopReason.STREAM_CLOSED:
        silence_stream(sys.stderr if config.target == "stderr" else sys.stdout)
    return result


@app.command()
def emit(
    strings: Optional[List[str]] = typer.Argument(
        None, help='String(s) to print. Default: "y"', show_default=False
    ),
    stderr: bool = typer.Option(False, "--stderr", "-e", help="Print to stderr"),
    max_lines: Optional[int] = typer.Option(
        None, "--max", "-m", min=0, help="Maximum number of lines to print"
    ),
    random_output: bool = typer.Option(False, "--random", "-r", help="Randomize output strings"),
    color: Optional[str] = typer.Option(
        None,
        "--color",
        "-c",
        help='Foreground color (any Rich color name), "random" for per-line styles, or "none"',
    ),
    color_system: Optional[str] = typer.Option(
        None,
        "--color-system",
        help="ANSI support to assume: auto, standard, 256, truecolor or none",
    ),
    show_version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Print STRING (default "y") repeatedly, as fast as possible."""
    # Settings priority: command-line flag > environment / .env > default
    try:
        config = Config(
            target="stderr" if stderr or get_bool_setting("AFFIRM_STDERR", False) else "stdout",
            limit=max_lines,
            random=random_output,
            color=parse_color_mode(color) if color is not None else get_color_setting(),
            color_system=(
                parse_color_system(color_system)
                if color_system is not None
                else get_color_system_setting()
            ),
            messages=tuple(strings or ()),
        )
    except ConfigError as e:
        raise typer.BadParameter(str(e)) from e

    try:
        messages = get_messages(config)
    except MessageSourceError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    result = run(config, messages)
    raise typer.Exit(code=0 if result.ok else 1)


def main():
    app()
