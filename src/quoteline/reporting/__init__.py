"""Reporting sinks for fetched quote data."""

from quoteline.reporting.sinks import (
    ConsoleSink,
    LogSink,
    MemorySink,
    MultiSink,
    ReportedStep,
    ReportSink,
)

__all__ = [
    "ConsoleSink",
    "LogSink",
    "MemorySink",
    "MultiSink",
    "ReportedStep",
    "ReportSink",
]
