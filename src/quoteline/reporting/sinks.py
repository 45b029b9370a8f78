"""Reporting sinks that receive fetched fields as each step completes.

A sink gets one ``report`` call per successful step with that step's field
mapping, and one ``report_failure`` call per failed step. Sinks must not
raise for ordinary input.
"""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TextIO

from quoteline.data.errors import FetchError
from quoteline.utils.logging import get_logger

logger = get_logger(__name__, component="LogSink")


class ReportSink(ABC):
    """Receiver for per-step fetch results."""

    @abstractmethod
    def report(self, step: str, symbol: str, fields: dict[str, Any]) -> None:
        """Accept the extracted fields of a successful step.

        Args:
            step: Step name, e.g. ``ticker-info``
            symbol: Symbol or identifier the step was run for
            fields: Extracted key-value pairs, in provider field order
        """
        pass

    @abstractmethod
    def report_failure(self, error: FetchError) -> None:
        """Accept a failed step."""
        pass


class LogSink(ReportSink):
    """Emit each report as a structured log event."""

    def report(self, step: str, symbol: str, fields: dict[str, Any]) -> None:
        logger.info(
            "step_reported",
            step=step,
            symbol=symbol,
            fields={key: _plain(value) for key, value in fields.items()},
        )

    def report_failure(self, error: FetchError) -> None:
        logger.error(
            "step_failed",
            step=error.step,
            symbol=error.symbol,
            error=str(error),
            error_type=error.kind,
        )


class ConsoleSink(ReportSink):
    """Write ``key: value`` lines to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # sys.stdout is looked up per call; it may be replaced after construction
        return self._stream if self._stream is not None else sys.stdout

    def report(self, step: str, symbol: str, fields: dict[str, Any]) -> None:
        for key, value in fields.items():
            print(f"{key}: {value}", file=self.stream)

    def report_failure(self, error: FetchError) -> None:
        print(f"error [{error.step}] {error.symbol}: {error.detail}", file=self.stream)


@dataclass(frozen=True)
class ReportedStep:
    """A single successful report captured by :class:`MemorySink`."""

    step: str
    symbol: str
    fields: dict[str, Any]


class MemorySink(ReportSink):
    """Keep every report in memory, in arrival order."""

    def __init__(self) -> None:
        self.reports: list[ReportedStep] = []
        self.failures: list[FetchError] = []

    def report(self, step: str, symbol: str, fields: dict[str, Any]) -> None:
        self.reports.append(ReportedStep(step=step, symbol=symbol, fields=dict(fields)))

    def report_failure(self, error: FetchError) -> None:
        self.failures.append(error)

    @property
    def steps(self) -> list[str]:
        """Names of the successfully reported steps, in arrival order."""
        return [r.step for r in self.reports]

    def fields_for(self, step: str) -> dict[str, Any] | None:
        """Fields of the latest report for ``step``, or None."""
        for reported in reversed(self.reports):
            if reported.step == step:
                return reported.fields
        return None


class MultiSink(ReportSink):
    """Forward every call to several sinks in order."""

    def __init__(self, *sinks: ReportSink) -> None:
        self.sinks = list(sinks)

    def report(self, step: str, symbol: str, fields: dict[str, Any]) -> None:
        for sink in self.sinks:
            sink.report(step, symbol, fields)

    def report_failure(self, error: FetchError) -> None:
        for sink in self.sinks:
            sink.report_failure(error)


def _plain(value: Any) -> Any:
    """Make Decimal values JSON-renderable for log output."""
    if isinstance(value, Decimal):
        return float(value)
    return value
