import os
import unittest
from unittest.mock import patch

from affirm.config import (
    DISABLED,
    RANDOM,
    ColorMode,
    Config,
    get_bool_setting,
    get_color_setting,
    get_color_system_setting,
    get_setting,
    parse_color_mode,
    parse_color_system,
)
from affirm.errors import ConfigError


class TestConfig(unittest.TestCase):
    """Test the configuration value object"""

    def test_defaults(self):
        config = Config()
        self.assertEqual(config.target, "stdout")
        self.assertIsNone(config.limit)
        self.assertFalse(config.random)
        self.assertEqual(config.color, DISABLED)
        self.assertEqual(config.messages, ())

    def test_messages_are_frozen(self):
        messages = ["a", "b"]
        config = Config(messages=messages)
        messages.append("c")
        self.assertEqual(config.messages, ("a", "b"))

    def test_negative_limit_rejected(self):
        with self.assertRaises(ConfigError):
            Config(limit=-1)

    def test_unknown_target_rejected(self):
        with self.assertRaises(ConfigError):
            Config(target="stdin")  # type: ignore[arg-type]


class TestParseColorMode(unittest.TestCase):
    """Test parsing of --color values"""

    def test_disabled_spellings(self):
        for value in (None, "", "none", "off", "NONE"):
            self.assertEqual(parse_color_mode(value), DISABLED)

    def test_random(self):
        self.assertEqual(parse_color_mode("random"), RANDOM)
        self.assertFalse(RANDOM.kind == "fixed")

    def test_named_color(self):
        self.assertEqual(parse_color_mode("Red"), ColorMode("fixed", "red"))
        self.assertEqual(parse_color_mode("bright_cyan"), ColorMode("fixed", "bright_cyan"))
        self.assertEqual(parse_color_mode("#ff8800"), ColorMode("fixed", "#ff8800"))

    def test_unknown_color(self):
        with self.assertRaises(ConfigError):
            parse_color_mode("not-a-color")

    def test_enabled(self):
        self.assertFalse(DISABLED.enabled)
        self.assertTrue(RANDOM.enabled)
        self.assertTrue(ColorMode("fixed", "red").enabled)


class TestParseColorSystem(unittest.TestCase):
    def test_known(self):
        for name in ("auto", "standard", "256", "truecolor"):
            self.assertEqual(parse_color_system(name), name)

    def test_none(self):
        self.assertIsNone(parse_color_system("none"))
        self.assertIsNone(parse_color_system(None))

    def test_unknown(self):
        with self.assertRaises(ConfigError):
            parse_color_system("16million")


class TestSettings(unittest.TestCase):
    """Test settings with priority: Env Var > Default"""

    def test_env_wins(self):
        with patch.dict(os.environ, {"AFFIRM_TEST_KEY": "from-env"}):
            self.assertEqual(get_setting("AFFIRM_TEST_KEY", "default"), "from-env")

    def test_default(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_setting("AFFIRM_TEST_KEY", "default"), "default")

    def test_bool_setting(self):
        for value in ("true", "1", "yes", "ON"):
            with patch.dict(os.environ, {"AFFIRM_STDERR": value}):
                self.assertTrue(get_bool_setting("AFFIRM_STDERR", False))
        with patch.dict(os.environ, {"AFFIRM_STDERR": "0"}):
            self.assertFalse(get_bool_setting("AFFIRM_STDERR", True))

    def test_color_setting(self):
        with patch.dict(os.environ, {"AFFIRM_COLOR": "blue"}):
            self.assertEqual(get_color_setting(), ColorMode("fixed", "blue"))

    def test_invalid_color_setting_warns_and_uses_default(self):
        with patch.dict(os.environ, {"AFFIRM_COLOR": "nope"}):
            with patch("affirm.config.print_warning") as warn:
                self.assertEqual(get_color_setting(), DISABLED)
        warn.assert_called_once()

    def test_invalid_color_system_setting_warns_and_uses_default(self):
        with patch.dict(os.environ, {"AFFIRM_COLOR_SYSTEM": "nope"}):
            with patch("affirm.config.print_warning") as warn:
                self.assertEqual(get_color_system_setting(), "auto")
        warn.assert_called_once()
