"""Tests for reader config loading and validation."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from core.reader_config import (
    ConfigValidationError,
    apply_env_overrides,
    load_reader_config,
    parse_reader_config,
)
from extraction.models import ReaderConfig


class TestReaderConfig(unittest.TestCase):
    def _write_config(self, content: str, suffix: str = ".yml") -> str:
        handle = tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False)
        handle.write(content)
        handle.flush()
        handle.close()
        return handle.name

    def test_defaults(self) -> None:
        config = load_reader_config(use_env=False)
        self.assertEqual(config, ReaderConfig())
        self.assertFalse(config.only_comments)
        self.assertEqual(config.function_name_prefix, "ACE")
        self.assertEqual(config.extensions, (".sqf",))

    def test_load_yaml(self) -> None:
        path = self._write_config(
            "only_comments: true\n"
            "function_name_prefix: UKSF\n"
            "extensions: [sqf, .fsm]\n"
            "max_concurrent_reads: 8\n"
        )
        try:
            config = load_reader_config(path, strict=True, use_env=False)
            self.assertTrue(config.only_comments)
            self.assertEqual(config.function_name_prefix, "UKSF")
            self.assertEqual(config.extensions, (".sqf", ".fsm"))
            self.assertEqual(config.max_concurrent_reads, 8)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_load_json(self) -> None:
        path = self._write_config('{"only_comments": true}', suffix=".json")
        try:
            config = load_reader_config(path, strict=True, use_env=False)
            self.assertTrue(config.only_comments)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_non_strict_missing_file_uses_defaults(self) -> None:
        config = load_reader_config("/definitely/missing.yml", strict=False, use_env=False)
        self.assertEqual(config, ReaderConfig())

    def test_strict_missing_file_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_reader_config("/definitely/missing.yml", strict=True, use_env=False)

    def test_strict_malformed_yaml_raises(self) -> None:
        path = self._write_config("only_comments: [unclosed\n")
        try:
            with self.assertRaises(ConfigValidationError):
                load_reader_config(path, strict=True, use_env=False)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_strict_non_mapping_raises(self) -> None:
        path = self._write_config("- just\n- a list\n")
        try:
            with self.assertRaises(ConfigValidationError):
                load_reader_config(path, strict=True, use_env=False)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_invalid_values_non_strict_keep_defaults(self) -> None:
        with self.assertLogs("core.reader_config", level="WARNING"):
            config = parse_reader_config(
                {"max_concurrent_reads": 0, "extensions": [], "bogus": 1},
                strict=False,
            )
        self.assertEqual(config, ReaderConfig())

    def test_invalid_values_strict_raise(self) -> None:
        with self.assertRaises(ConfigValidationError):
            parse_reader_config({"max_concurrent_reads": "many"}, strict=True)
        with self.assertRaises(ConfigValidationError):
            parse_reader_config({"unknown_key": True}, strict=True)

    def test_env_overrides(self) -> None:
        env = {
            "ACE_READER_ONLY_COMMENTS": "yes",
            "ACE_READER_MAX_CONCURRENT_READS": "4",
        }
        with patch.dict(os.environ, env):
            config = apply_env_overrides(ReaderConfig())
        self.assertTrue(config.only_comments)
        self.assertEqual(config.max_concurrent_reads, 4)

    def test_env_overrides_file_values(self) -> None:
        path = self._write_config("only_comments: true\n")
        try:
            with patch.dict(os.environ, {"ACE_READER_ONLY_COMMENTS": "0"}):
                config = load_reader_config(path, strict=True)
            self.assertFalse(config.only_comments)
        finally:
            Path(path).unlink(missing_ok=True)


if __name__ == "__main__":
    unittest.main()
