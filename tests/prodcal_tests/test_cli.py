"""CLI tests for prodcal.cli.main."""

from __future__ import annotations

import datetime as _dt
import json
import os
import tempfile
import unittest
from unittest import mock

from core.cli_errors import ExitCode
from prodcal.cli.args import year_from_args
from prodcal.cli.main import app, main
from prodcal.config import Settings
from prodcal.defaults import DEFAULT_RULES_TEXT

from tests.fixtures import capture_output, has_pyyaml, make_args, temp_text_file, temp_yaml_file


class TestParser(unittest.TestCase):
    def test_commands_registered(self):
        parser = app.build_parser()
        help_text = parser.format_help()
        for name in ("generate", "classify", "export", "grid", "defaults"):
            self.assertIn(name, help_text)

    def test_no_command_is_usage(self):
        with capture_output():
            self.assertEqual(main([]), ExitCode.USAGE)


class TestGenerate(unittest.TestCase):
    def test_inline_text(self):
        with capture_output() as (out, _err):
            rc = main(["generate", "--year", "2026", "--text", "Quarterly Report - quarterly"])
        self.assertEqual(rc, 0)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[1].startswith("2026-04-01"))

    def test_json_output(self):
        with capture_output() as (out, _err):
            rc = main(["--output", "json", "generate", "--year", "2026", "--text", "A - 31st of December"])
        self.assertEqual(rc, 0)
        rows = json.loads(out.getvalue())
        self.assertEqual(rows, [
            {"id": "0-12", "date": "2026-12-31", "day": "Thursday", "name": "A", "notes": "31st of December"}
        ])

    def test_unrecognized_warns_on_stderr(self):
        with capture_output() as (out, err):
            rc = main(["generate", "--year", "2026", "--text", "Mystery Task - something unintelligible"])
        self.assertEqual(rc, 0)
        self.assertEqual(out.getvalue(), "")
        self.assertEqual(err.getvalue().count("Mystery Task"), 1)

    def test_rules_file(self):
        with temp_text_file("Close - last working day\n") as path:
            with capture_output() as (out, _err):
                rc = main(["generate", "--year", "2026", "--rules", path])
        self.assertEqual(rc, 0)
        self.assertEqual(len(out.getvalue().splitlines()), 12)

    def test_missing_rules_file(self):
        with capture_output() as (_out, err):
            rc = main(["generate", "--year", "2026", "--rules", "/nonexistent/rules.txt"])
        self.assertEqual(rc, ExitCode.NOT_FOUND)
        self.assertIn("Rules file not found", err.getvalue())

    def test_year_out_of_range(self):
        with capture_output() as (_out, err):
            rc = main(["generate", "--year", "1999", "--defaults"])
        self.assertEqual(rc, ExitCode.USAGE)
        self.assertIn("out of range", err.getvalue())

    @unittest.skipUnless(has_pyyaml(), "requires PyYAML")
    def test_year_from_config(self):
        with temp_yaml_file({"year": 2031}) as path:
            with capture_output() as (out, _err):
                rc = main(["--config", path, "generate", "--text", "A - quarterly"])
        self.assertEqual(rc, 0)
        self.assertTrue(out.getvalue().startswith("2031-01-01"))


class TestOtherCommands(unittest.TestCase):
    def test_classify_json(self):
        with capture_output() as (out, _err):
            rc = main(["-o", "json", "classify", "first working day of every month"])
        self.assertEqual(rc, 0)
        data = json.loads(out.getvalue())
        self.assertEqual(data["family"], "monthly")
        self.assertEqual(data["anchor"], "first_working_day")

    def test_classify_unrecognized(self):
        with capture_output() as (out, err):
            rc = main(["classify", "something unintelligible"])
        self.assertEqual(rc, 0)
        self.assertIn("family: unrecognized", out.getvalue())
        self.assertIn("not understood", err.getvalue())

    def test_defaults(self):
        with capture_output() as (out, _err):
            rc = main(["defaults"])
        self.assertEqual(rc, 0)
        self.assertEqual(out.getvalue(), DEFAULT_RULES_TEXT)

    def test_grid_month(self):
        with capture_output() as (out, _err):
            rc = main(["grid", "--year", "2026", "--month", "4", "--text", "Q - quarterly"])
        self.assertEqual(rc, 0)
        self.assertIn("April 2026", out.getvalue())
        self.assertIn("1*", out.getvalue())

    def test_export_csv_and_ics(self):
        td = tempfile.mkdtemp()
        csv_path = os.path.join(td, "out.csv")
        ics_path = os.path.join(td, "out.ics")
        with capture_output() as (out, _err):
            self.assertEqual(main(["export", "csv", "--year", "2026", "--defaults", "--out", csv_path]), 0)
            self.assertEqual(main(["export", "ics", "--year", "2026", "--defaults", "--out", ics_path]), 0)
        self.assertIn("Wrote 120 events", out.getvalue())
        with open(csv_path, encoding="utf-8") as fh:
            self.assertEqual(len(fh.read().splitlines()), 121)
        with open(ics_path, "rb") as fh:
            self.assertEqual(fh.read().count(b"BEGIN:VEVENT"), 120)

    def test_export_without_format_is_usage(self):
        with capture_output():
            self.assertEqual(main(["export"]), ExitCode.USAGE)


class TestArgsHelpers(unittest.TestCase):
    def test_year_defaults_to_today(self):
        args = make_args()
        with mock.patch("prodcal.cli.args.load_settings", return_value=Settings()):
            self.assertEqual(year_from_args(args, today=_dt.date(2028, 5, 1)), 2028)

    def test_explicit_year_wins(self):
        args = make_args(year=2035)
        with mock.patch("prodcal.cli.args.load_settings", return_value=Settings(year=2040)):
            self.assertEqual(year_from_args(args), 2035)


if __name__ == "__main__":
    unittest.main()
