"""Request -> processor -> producer plumbing shared by the CLI commands.

A processor never raises: it wraps its outcome in a ``ResultEnvelope``.
The producer renders successes and reports failures, and ``run_pipeline``
turns the envelope into an exit code.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")

DEFAULT_FAILURE_CODE = 2


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    def ok(self) -> bool:
        return self.status == "success"

    @property
    def exit_code(self) -> int:
        if self.ok():
            return 0
        return int(self.diagnostics.get("code", DEFAULT_FAILURE_CODE))


class RequestConsumer(Generic[RequestT]):
    """Hands back a request that was already built from CLI arguments."""

    def __init__(self, request: RequestT) -> None:
        self._request = request

    def consume(self) -> RequestT:
        return self._request


class SafeProcessor(Generic[RequestT, ResultT]):
    """Processor base; subclasses implement ``_process_safe``.

    Exceptions become error envelopes. An exception carrying an integer
    ``code`` (every CLIError does) keeps it for the exit status.
    """

    def process(self, payload: RequestT) -> ResultEnvelope[ResultT]:
        try:
            return ResultEnvelope("success", payload=self._process_safe(payload))
        except Exception as exc:
            diagnostics: Dict[str, Any] = {"message": str(exc)}
            code = getattr(exc, "code", None)
            if isinstance(code, int):
                diagnostics["code"] = int(code)
            return ResultEnvelope("error", diagnostics=diagnostics)

    def _process_safe(self, payload: RequestT) -> ResultT:
        raise NotImplementedError


class BaseProducer:
    """Producer base; subclasses implement ``_produce_success``."""

    def produce(self, result: ResultEnvelope) -> None:
        if not result.ok():
            message = result.diagnostics.get("message")
            if message:
                print(f"Error: {message}", file=sys.stderr)
            return
        self._produce_success(result.payload, result.diagnostics)

    def _produce_success(self, payload: Any, diagnostics: Dict[str, Any]) -> None:
        raise NotImplementedError


def run_pipeline(request: Any, processor: SafeProcessor, producer: BaseProducer) -> int:
    """Process ``request``, hand the envelope to ``producer``, return the exit code."""
    envelope = processor.process(RequestConsumer(request).consume())
    producer.produce(envelope)
    return envelope.exit_code
