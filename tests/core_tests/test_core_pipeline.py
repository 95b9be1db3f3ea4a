"""Tests for core/pipeline.py."""

from __future__ import annotations

import unittest

from core.cli_errors import ExitCode, NotFoundError
from core.pipeline import BaseProducer, RequestConsumer, ResultEnvelope, SafeProcessor, run_pipeline

from tests.fixtures import capture_output


class _Doubler(SafeProcessor[int, int]):
    def _process_safe(self, payload: int) -> int:
        if payload < 0:
            raise ValueError("negative input")
        if payload == 0:
            raise NotFoundError("nothing to double")
        return payload * 2


class _Collector(BaseProducer):
    def __init__(self) -> None:
        self.seen = []

    def _produce_success(self, payload, diagnostics) -> None:
        self.seen.append(payload)


class TestResultEnvelope(unittest.TestCase):
    def test_ok(self):
        self.assertTrue(ResultEnvelope("success", payload=[]).ok())
        self.assertFalse(ResultEnvelope("error").ok())

    def test_exit_code(self):
        self.assertEqual(ResultEnvelope("success").exit_code, 0)
        self.assertEqual(ResultEnvelope("error").exit_code, 2)
        self.assertEqual(ResultEnvelope("error", diagnostics={"code": 6}).exit_code, 6)


class TestSafeProcessor(unittest.TestCase):
    def test_success(self):
        env = _Doubler().process(21)
        self.assertTrue(env.ok())
        self.assertEqual(env.payload, 42)

    def test_plain_exception_has_no_code(self):
        env = _Doubler().process(-1)
        self.assertFalse(env.ok())
        self.assertEqual(env.diagnostics, {"message": "negative input"})

    def test_cli_error_keeps_code(self):
        env = _Doubler().process(0)
        self.assertEqual(env.diagnostics["code"], ExitCode.NOT_FOUND)


class TestRunPipeline(unittest.TestCase):
    def test_request_consumer_hands_back_request(self):
        self.assertEqual(RequestConsumer({"year": 2026}).consume(), {"year": 2026})

    def test_success_returns_zero(self):
        producer = _Collector()
        self.assertEqual(run_pipeline(5, _Doubler(), producer), 0)
        self.assertEqual(producer.seen, [10])

    def test_failure_reports_on_stderr_with_default_code(self):
        producer = _Collector()
        with capture_output() as (out, err):
            rc = run_pipeline(-3, _Doubler(), producer)
        self.assertEqual(rc, 2)
        self.assertEqual(producer.seen, [])
        self.assertEqual(out.getvalue(), "")
        self.assertIn("Error: negative input", err.getvalue())

    def test_failure_returns_error_code(self):
        with capture_output():
            self.assertEqual(run_pipeline(0, _Doubler(), _Collector()), ExitCode.NOT_FOUND)


if __name__ == "__main__":
    unittest.main()
