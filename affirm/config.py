import os
from dataclasses import dataclass, field
from typing import Literal

from dotenv import load_dotenv
from rich.color import Color, ColorParseError

from .console import print_warning
from .errors import ConfigError

# Load environment variables from .env file
load_dotenv()

Target = Literal["stdout", "stderr"]

# Names accepted for --color-system. "auto" lets Rich detect support from the
# sink; "none" turns styling off even when a color mode is requested.
COLOR_SYSTEMS = ("auto", "standard", "256", "truecolor", "none")

# Configuration Defaults
DEFAULT_CONFIG = {
    "AFFIRM_COLOR": "none",
    "AFFIRM_COLOR_SYSTEM": "auto",
    "AFFIRM_STDERR": "false",
}

# Message used when nothing was given, and the candidate set for --random.
DEFAULT_MESSAGE = "y"
DEFAULT_RANDOM_MESSAGES = ("y", "n")


@dataclass(frozen=True)
class ColorMode:
    """How emitted lines are styled.

    kind is "none" (plain text), "fixed" (one foreground color for every line,
    stored in `color`) or "random" (a fresh color and attribute set per line).
    """

    kind: Literal["none", "fixed", "random"] = "none"
    color: str | None = None

    @property
    def enabled(self) -> bool:
        return self.kind != "none"


DISABLED = ColorMode()
RANDOM = ColorMode("random")


@dataclass(frozen=True)
class Config:
    """Finished configuration consumed by the emission loop."""

    target: Target = "stdout"
    limit: int | None = None
    random: bool = False
    color: ColorMode = DISABLED
    color_system: str | None = "auto"
    messages: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.limit is not None and self.limit < 0:
            raise ConfigError(f"Line limit must be zero or positive, got {self.limit}")
        if self.target not in ("stdout", "stderr"):
            raise ConfigError(f"Unknown output target: {self.target}")
        # Callers may hand in any sequence; freeze it so it cannot change under the loop.
        object.__setattr__(self, "messages", tuple(self.messages))


def parse_color_mode(value: str | None) -> ColorMode:
    """Turn a color option ("none", "random" or a Rich color name) into a ColorMode"""
    if value is None:
        return DISABLED
    name = value.strip().lower()
    if name in ("", "none", "off"):
        return DISABLED
    if name == "random":
        return RANDOM
    try:
        Color.parse(name)
    except ColorParseError as e:
        raise ConfigError(f"Unknown color: {value}") from e
    return ColorMode("fixed", name)


def parse_color_system(value: str | None) -> str | None:
    """Validate a color system name; "none" maps to None (styling off)"""
    if value is None:
        return None
    name = value.strip().lower()
    if name not in COLOR_SYSTEMS:
        raise ConfigError(f"Unknown color system: {value} (expected one of {', '.join(COLOR_SYSTEMS)})")
    return None if name == "none" else name


def get_setting(key: str, default: str) -> str:
    """Get setting with priority: Env Var > Default"""
    env_val = os.getenv(key)
    if env_val:
        return env_val
    return default


def get_bool_setting(key: str, default: bool) -> bool:
    """Get boolean setting with priority: Env Var > Default"""
    value = get_setting(key, str(default).lower())
    return value.lower() in ("true", "1", "yes", "on")


def get_color_setting(default: ColorMode = DISABLED) -> ColorMode:
    """Color mode from AFFIRM_COLOR, falling back to default on a bad value"""
    value = get_setting("AFFIRM_COLOR", DEFAULT_CONFIG["AFFIRM_COLOR"])
    try:
        return parse_color_mode(value)
    except ConfigError as e:
        print_warning(f"Invalid value for AFFIRM_COLOR: {e}, using default")
        return default


def get_color_system_setting(default: str | None = "auto") -> str | None:
    """Color system from AFFIRM_COLOR_SYSTEM, falling back to default on a bad value"""
    value = get_setting("AFFIRM_COLOR_SYSTEM", DEFAULT_CONFIG["AFFIRM_COLOR_SYSTEM"])
    try:
        return parse_color_system(value)
    except ConfigError as e:
        print_warning(f"Invalid value for AFFIRM_COLOR_SYSTEM: {e}, using default")
        return default
