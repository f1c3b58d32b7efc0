"""Tests for config file loading and priority."""

import os
import tempfile
import unittest
from pathlib import Path

from honeytrace import config
from honeytrace.errors import ConfigError, InvalidConfigurationError


class TestConfigFileLoading(unittest.TestCase):
    """Test TOML config file loading."""

    def test_load_toml_config_basic(self):
        """Test loading a basic TOML config file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.toml', delete=False) as f:
            f.write("""
[tracing]
service_name = "checkout"
sample_rate = 10

[exporter]
dataset = "checkout-traces"
debug = true

[exporter.global_fields]
env = "prod"
""")
            f.flush()

        try:
            loaded = config.load_toml_config(f.name)

            self.assertEqual(loaded["tracing"]["service_name"], "checkout")
            self.assertEqual(loaded["tracing"]["sample_rate"], 10)
            self.assertTrue(loaded["exporter"]["debug"])
            self.assertEqual(loaded["exporter"]["global_fields"], {"env": "prod"})
        finally:
            os.unlink(f.name)

    def test_load_toml_config_missing_file(self):
        """Test that loading missing file returns empty dict."""
        loaded = config.load_toml_config("/nonexistent/file.toml")
        self.assertEqual(loaded, {})

    def test_load_toml_config_invalid_toml(self):
        """Test that invalid TOML raises ConfigError."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.toml', delete=False) as f:
            f.write("invalid [toml content")
            f.flush()

        try:
            with self.assertRaises(ConfigError):
                config.load_toml_config(f.name)
        finally:
            os.unlink(f.name)

    def test_find_config_file_current_directory(self):
        """Test finding config file in current directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "honeytrace.toml"
            config_path.write_text("[tracing]\nservice_name = \"test\"")

            original_cwd = os.getcwd()
            try:
                os.chdir(tmpdir)

                found = config.find_config_file()
                self.assertIsNotNone(found)
                self.assertEqual(Path(found).name, "honeytrace.toml")
            finally:
                os.chdir(original_cwd)

    def test_find_config_file_without_local_file(self):
        """Without a local file the result is None or the home config path."""
        original_cwd = os.getcwd()
        with tempfile.TemporaryDirectory() as tmpdir:
            try:
                os.chdir(tmpdir)

                found = config.find_config_file()
                self.assertTrue(found is None or isinstance(found, str))
            finally:
                os.chdir(original_cwd)


class TestConfigPriority(unittest.TestCase):
    """Test configuration loading priority."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.config_file = Path(self.tmpdir.name) / "honeytrace.toml"
        self.config_file.write_text("""
[tracing]
service_name = "from-file"
sample_rate = 5

[exporter]
dataset = "file-dataset"
""")

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_defaults(self):
        loaded = config.load_config(
            config_file=str(Path(self.tmpdir.name) / "missing.toml"), environ={}
        )
        self.assertIsNone(loaded.tracing.service_name)
        self.assertEqual(loaded.tracing.sample_rate, 1)
        self.assertEqual(loaded.exporter.api_host, "https://api.honeycomb.io")
        self.assertEqual(loaded.batch.max_export_batch_size, 512)

    def test_file_values_loaded(self):
        loaded = config.load_config(config_file=str(self.config_file), environ={})
        self.assertEqual(loaded.tracing.service_name, "from-file")
        self.assertEqual(loaded.tracing.sample_rate, 5)
        self.assertEqual(loaded.exporter.dataset, "file-dataset")

    def test_env_overrides_file(self):
        environ = {
            "HONEYTRACE_SAMPLE_RATE": "20",
            "HONEYTRACE_DEBUG": "true",
            "HONEYTRACE_WRITE_KEY": "env-key",
        }
        loaded = config.load_config(config_file=str(self.config_file), environ=environ)
        self.assertEqual(loaded.tracing.sample_rate, 20)
        self.assertTrue(loaded.exporter.debug)
        self.assertEqual(loaded.exporter.write_key, "env-key")
        self.assertEqual(loaded.tracing.service_name, "from-file")

    def test_explicit_params_override_env(self):
        loaded = config.load_config(
            config_file=str(self.config_file),
            overrides={"sample_rate": 3, "dataset": "explicit"},
            environ={"HONEYTRACE_SAMPLE_RATE": "20"},
        )
        self.assertEqual(loaded.tracing.sample_rate, 3)
        self.assertEqual(loaded.exporter.dataset, "explicit")

    def test_none_override_ignored(self):
        loaded = config.load_config(
            config_file=str(self.config_file), overrides={"dataset": None}, environ={}
        )
        self.assertEqual(loaded.exporter.dataset, "file-dataset")

    def test_unknown_override_rejected(self):
        with self.assertRaises(ConfigError):
            config.load_config(config_file=str(self.config_file), overrides={"bogus": 1}, environ={})

    def test_negative_sample_rate_is_invalid_configuration(self):
        with self.assertRaises(InvalidConfigurationError):
            config.load_config(
                config_file=str(self.config_file), overrides={"sample_rate": -1}, environ={}
            )
        with self.assertRaises(InvalidConfigurationError):
            config.load_config(
                config_file=str(self.config_file), environ={"HONEYTRACE_SAMPLE_RATE": "-4"}
            )

    def test_non_integer_sample_rate_is_invalid_configuration(self):
        for value in (True, False, 2.0, 2.5):
            with self.subTest(value=value):
                with self.assertRaises(InvalidConfigurationError) as ctx:
                    config.load_config(
                        config_file=str(self.config_file),
                        overrides={"sample_rate": value},
                        environ={},
                    )
                self.assertIs(ctx.exception.details["sample_rate"], value)

    def test_non_integer_sample_rate_in_file_rejected(self):
        self.config_file.write_text("[tracing]\nsample_rate = 4.0\n")
        with self.assertRaises(InvalidConfigurationError):
            config.load_config(config_file=str(self.config_file), environ={})

    def test_unknown_section_rejected(self):
        self.config_file.write_text("[sampling]\nrate = 3\n")
        with self.assertRaises(ConfigError):
            config.load_config(config_file=str(self.config_file), environ={})

    def test_blank_service_name_rejected(self):
        with self.assertRaises(ConfigError):
            config.load_config(overrides={"service_name": "   "}, environ={},
                               config_file=str(self.config_file))


if __name__ == "__main__":
    unittest.main()
