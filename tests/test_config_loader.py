import json
import tempfile
import unittest
from pathlib import Path

from changeloggy.config.loader import (
    CONFIG_FILENAME,
    ChangelogOptions,
    load_config,
    merge_with_config,
)


class TestConfigLoader(unittest.TestCase):
    """Tests for the configuration loader."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)

    def _write(self, content) -> None:
        if not isinstance(content, str):
            content = json.dumps(content)
        (self.root / CONFIG_FILENAME).write_text(content, encoding="utf-8")

    def test_missing_file_returns_empty(self) -> None:
        self.assertEqual(load_config(self.root), {})

    def test_load_valid_config(self) -> None:
        self._write(
            {
                "since": "last-tag",
                "output": "CHANGELOG.md",
                "format": "markdown",
                "includeInternal": False,
                "scopes": ["api", "ui"],
            }
        )
        self.assertEqual(
            load_config(self.root),
            {
                "since": "last-tag",
                "output": "CHANGELOG.md",
                "format": "markdown",
                "include_internal": False,
                "scope_filter": ["api", "ui"],
            },
        )

    def test_partial_config(self) -> None:
        self._write({"output": "HISTORY.md"})
        config = load_config(self.root)
        self.assertEqual(config, {"output": "HISTORY.md"})
        self.assertNotIn("format", config)

    def test_invalid_json_returns_empty(self) -> None:
        self._write("not valid json")
        self.assertEqual(load_config(self.root), {})

    def test_non_object_returns_empty(self) -> None:
        self._write(["a", "b"])
        self.assertEqual(load_config(self.root), {})

    def test_invalid_values_are_dropped(self) -> None:
        self._write(
            {
                "format": "yaml",
                "includeInternal": "yes",
                "scopes": ["api", 3],
                "output": "OUT.md",
                "unknown": 1,
            }
        )
        self.assertEqual(load_config(self.root), {"output": "OUT.md"})

    def test_defaults_to_current_directory(self) -> None:
        # the test session runs from an empty scratch directory
        self.assertEqual(load_config(), {})


class TestMergeWithConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)

    def _write(self, data) -> None:
        (self.root / CONFIG_FILENAME).write_text(json.dumps(data), encoding="utf-8")

    def test_defaults(self) -> None:
        options = merge_with_config({}, self.root)
        self.assertEqual(options, ChangelogOptions())
        self.assertFalse(options.dry_run)
        self.assertEqual(options.format, "markdown")
        self.assertFalse(options.include_internal)
        self.assertTrue(options.interactive)
        self.assertFalse(options.prepend)

    def test_config_values_apply(self) -> None:
        self._write({"output": "CHANGELOG.md", "format": "json", "scopes": ["api", "core"]})
        options = merge_with_config({}, self.root)
        self.assertEqual(options.output, "CHANGELOG.md")
        self.assertEqual(options.format, "json")
        self.assertEqual(options.scope_filter, ["api", "core"])

    def test_explicit_options_win(self) -> None:
        self._write({"output": "CHANGELOG.md", "format": "json", "includeInternal": True})
        options = merge_with_config(
            {"output": "HISTORY.md", "format": "markdown", "include_internal": False}, self.root
        )
        self.assertEqual(options.output, "HISTORY.md")
        self.assertEqual(options.format, "markdown")
        self.assertFalse(options.include_internal)

    def test_none_does_not_override(self) -> None:
        self._write({"since": "2024-01-01"})
        options = merge_with_config({"since": None, "release": "v1"}, self.root)
        self.assertEqual(options.since, "2024-01-01")
        self.assertEqual(options.release, "v1")

    def test_unknown_option(self) -> None:
        with self.assertRaises(TypeError):
            merge_with_config({"colour": "red"}, self.root)


class TestSessionDirectory(unittest.TestCase):
    def test_tests_run_from_scratch_directory(self) -> None:
        cwd = Path.cwd().resolve()
        self.assertTrue(cwd.name.startswith("changeloggy_tests_"))
        self.assertEqual(cwd.parent, Path(tempfile.gettempdir()).resolve())
        self.assertEqual(load_config(), {})


if __name__ == "__main__":
    unittest.main()
