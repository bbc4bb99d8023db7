"""
Unit tests for configuration, settings, errors and logging.
"""

import unittest
import json
import logging
import os
import tempfile
from unittest.mock import Mock, patch

from autoviz.config import Config, Settings
from autoviz.core.exceptions import (
    AutoVizError, ConfigurationError, ErrorHandler, ErrorSeverity, InvalidConfigValueError,
    InvalidCoordinateSystemError, RenderingError, TargetNotFoundError
)
from autoviz.config import get_settings, reset_settings, set_settings
from autoviz.core.logging import LoggerManager, StructuredFormatter, get_logger


class TestConfig(unittest.TestCase):
    """Test the layered configuration."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _config_file(self, data):
        path = os.path.join(self.temp_dir.name, "config.json")
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f)
        return path

    def test_get_and_set(self):
        config = Config(use_environment=False)
        config.set("rendering.canvas_width", 320)
        self.assertEqual(config.get("rendering.canvas_width"), 320)
        self.assertEqual(config.get("rendering.nonexistent", "fallback"), "fallback")

    def test_file_overrides_defaults(self):
        path = self._config_file({"rendering": {"canvas_height": 480}})
        config = Config(path, use_environment=False)

        self.assertEqual(config.get("rendering.canvas_height"), 480)
        self.assertEqual(config.get("rendering.percent_border"), 0.1)

    def test_missing_explicit_file(self):
        with self.assertRaises(ConfigurationError):
            Config(os.path.join(self.temp_dir.name, "nope.json"))

    def test_invalid_file_keeps_defaults(self):
        path = os.path.join(self.temp_dir.name, "broken.json")
        with open(path, 'w', encoding='utf-8') as f:
            f.write("{broken")

        with self.assertLogs("autoviz.config", level="WARNING"):
            config = Config(path, use_environment=False)
        self.assertEqual(config.get("rendering.canvas_width"), 1000)

    def test_environment_overrides(self):
        path = self._config_file({"rendering": {"canvas_width": 500}})
        env = {"AUTOVIZ_RENDERING__CANVAS_WIDTH": "640", "AUTOVIZ_APP__DEBUG": "yes"}

        with patch.dict(os.environ, env):
            config = Config(path)

        self.assertEqual(config.get("rendering.canvas_width"), 640)
        self.assertIs(config.get("app.debug"), True)

    def test_save_and_reload(self):
        config = Config(use_environment=False)
        config.set("rendering.background_color", "#101010")
        path = os.path.join(self.temp_dir.name, "saved", "config.json")
        config.save(path)

        reloaded = Config(path, use_environment=False)
        self.assertEqual(reloaded.get("rendering.background_color"), "#101010")

    def test_reset_to_defaults(self):
        config = Config(use_environment=False)
        config.set("rendering.canvas_width", 1)
        config.reset_to_defaults()
        self.assertEqual(config.get("rendering.canvas_width"), 1000)


class TestSettings(unittest.TestCase):
    """Test validated settings access."""

    def setUp(self):
        self.config = Config(use_environment=False)
        self.settings = Settings(self.config)

    def test_defaults(self):
        self.config.reset_to_defaults()
        self.assertEqual(self.settings.canvas_size, (1000, 600))
        self.assertEqual(self.settings.percent_border, 0.1)
        self.assertEqual(self.settings.placeholder_font_size, 40)
        self.assertEqual(self.settings.background_color, "#272822")

    def test_clamping(self):
        self.settings.update_setting("rendering.canvas_width", 100000)
        self.settings.update_setting("rendering.canvas_height", -5)
        self.settings.update_setting("rendering.percent_border", 2.0)
        self.settings.update_setting("rendering.placeholder_font_size", 1)

        self.assertEqual(self.settings.canvas_width, 16384)
        self.assertEqual(self.settings.canvas_height, 1)
        self.assertEqual(self.settings.percent_border, 0.9)
        self.assertEqual(self.settings.placeholder_font_size, 6)

    def test_invalid_number(self):
        self.settings.update_setting("rendering.canvas_width", "wide")
        with self.assertRaises(InvalidConfigValueError) as cm:
            self.settings.canvas_width
        self.assertEqual(cm.exception.context["config_key"], "rendering.canvas_width")
        self.assertIsInstance(cm.exception, ConfigurationError)

    def test_log_level_validation(self):
        self.settings.update_setting("app.log_level", "verbose")
        self.assertEqual(self.settings.log_level, "INFO")
        self.settings.update_setting("app.log_level", "debug")
        self.assertEqual(self.settings.log_level, "DEBUG")
        self.assertTrue(self.settings.is_development_mode())

    def test_rendering_info(self):
        info = self.settings.get_rendering_info()
        self.assertIn("canvas_width", info)
        self.assertIn("percent_border", info)

    def test_global_settings_can_be_replaced(self):
        set_settings(self.settings)
        try:
            self.assertIs(get_settings(), self.settings)
        finally:
            reset_settings()


class TestErrors(unittest.TestCase):
    """Test the structured exception hierarchy."""

    def test_to_dict(self):
        cause = KeyError("x")
        error = RenderingError("boom", severity=ErrorSeverity.HIGH,
                               context={"zoom": 0}, cause=cause)
        data = error.to_dict()

        self.assertEqual(data["error_type"], "RenderingError")
        self.assertEqual(data["error_code"], "RenderingError")
        self.assertEqual(data["severity"], ErrorSeverity.HIGH.value)
        self.assertEqual(data["context"], {"zoom": 0})
        self.assertIn("boom", str(error))
        self.assertIn("zoom=0", str(error))

    def test_builtin_bases(self):
        self.assertIsInstance(InvalidCoordinateSystemError("x"), ValueError)
        self.assertIsInstance(TargetNotFoundError(1), LookupError)
        self.assertIsInstance(TargetNotFoundError(1), AutoVizError)

    def test_error_handler_callbacks(self):
        handler = ErrorHandler()
        callback = Mock()
        handler.register_error_callback(callback)
        error = RenderingError("boom")

        with self.assertLogs("autoviz", level="WARNING"):
            handler.handle_error(error, context={"stage": "test"})

        callback.assert_called_once()
        self.assertIs(callback.call_args[0][0], error)


class TestLogging(unittest.TestCase):
    """Test structured log formatting."""

    def _record(self, **extra):
        record = logging.LogRecord("autoviz.test", logging.INFO, __file__, 1,
                                   "Scene rendered", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_format(self):
        output = StructuredFormatter("json").format(self._record(entities=3))
        data = json.loads(output)
        self.assertEqual(data["message"], "Scene rendered")
        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["context"], {"entities": 3})

    def test_human_format(self):
        output = StructuredFormatter("text").format(self._record(output="scene.png"))
        self.assertIn("Scene rendered", output)
        self.assertIn("scene.png", output)

    def test_namespace(self):
        self.assertEqual(get_logger("renderer").name, "autoviz.renderer")

    def test_file_output(self):
        manager = LoggerManager()
        with tempfile.TemporaryDirectory() as log_dir:
            manager.configure("INFO", console_output=False, file_output=True, log_dir=log_dir)
            try:
                self.assertTrue(manager.is_configured)
                get_logger("test").info("Scene rendered", extra={"entities": 2})
                with open(manager.log_file, encoding="utf-8") as f:
                    data = json.loads(f.readline())
            finally:
                manager.shutdown()

        self.assertEqual(data["context"], {"entities": 2})
        self.assertFalse(manager.is_configured)
        self.assertIsNone(manager.log_file)


if __name__ == '__main__':
    unittest.main()
