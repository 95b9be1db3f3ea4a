"""Tests for core text, date and YAML helpers."""
from __future__ import annotations

import datetime as _dt
import tempfile
import unittest
from pathlib import Path

from core.constants import config_file_paths
from core.date_utils import DAY_MAP, MONTH_MAP, month_name, to_iso_str, weekday_name
from core.text_utils import collapse_ws, normalize_unicode
from core.yamlio import YAMLError, load_config

from tests.fixtures import env_var


class TestTextUtils(unittest.TestCase):
    def test_normalize_unicode(self):
        self.assertEqual(normalize_unicode("a\u2013b\u2014c\u2011d"), "a-b-c-d")
        self.assertEqual(normalize_unicode("x\u00a0y"), "x y")
        self.assertEqual(normalize_unicode("year\u2019s"), "year's")
        self.assertEqual(normalize_unicode(""), "")

    def test_collapse_ws(self):
        self.assertEqual(collapse_ws("  first \t working\n day "), "first working day")


class TestDateUtils(unittest.TestCase):
    def test_maps_hold_full_names_only(self):
        self.assertEqual(DAY_MAP["friday"], 4)
        self.assertEqual(MONTH_MAP["december"], 12)
        for word in ("sat", "sun", "wed", "mon"):
            self.assertNotIn(word, DAY_MAP)
        for word in ("mar", "jan", "dec"):
            self.assertNotIn(word, MONTH_MAP)

    def test_names(self):
        day = _dt.date(2026, 12, 31)
        self.assertEqual(weekday_name(day), "Thursday")
        self.assertEqual(month_name(12), "December")
        self.assertEqual(to_iso_str(day), "2026-12-31")


class TestConfigPaths(unittest.TestCase):
    def test_env_var_wins(self):
        with env_var("PRODCAL_CONFIG", "/tmp/custom.yaml"):
            self.assertEqual(config_file_paths(), ["/tmp/custom.yaml"])

    def test_xdg_first(self):
        with env_var("PRODCAL_CONFIG", None), env_var("XDG_CONFIG_HOME", "/tmp/xdg"):
            paths = config_file_paths()
        self.assertEqual(paths[0], "/tmp/xdg/prodcal/config.yaml")
        self.assertTrue(paths[-1].endswith("/.config/prodcal/config.yaml"))


class TestYamlio(unittest.TestCase):
    def test_reads_mapping(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("year: 2026\ncalendar_name: Ops\n", encoding="utf-8")
            self.assertEqual(load_config(str(path)), {"year": 2026, "calendar_name": "Ops"})

    def test_invalid_yaml_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.yaml"
            path.write_text("year: [2026\n", encoding="utf-8")
            with self.assertRaises(YAMLError):
                load_config(str(path))

    def test_missing_and_empty(self):
        self.assertEqual(load_config(None), {})
        self.assertEqual(load_config("/nonexistent/config.yaml"), {})
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.yaml"
            path.write_text("  \n", encoding="utf-8")
            self.assertEqual(load_config(str(path)), {})

    def test_non_mapping_returned_as_is(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "list.yaml"
            path.write_text("- a\n- b\n", encoding="utf-8")
            self.assertEqual(load_config(str(path)), ["a", "b"])


if __name__ == "__main__":
    unittest.main()
