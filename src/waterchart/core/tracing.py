"""Injectable event sink for the chart pipeline.

The transforms never log directly. They receive a tracer and report what they
did (record counts, dropped records, forecast window) as named events with
keyword fields. ``LoggingTracer`` turns events into ``logging`` lines,
``RecordingTracer`` keeps them in memory so callers can surface diagnostics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

PIPELINE_LOGGER_NAME = "waterchart.pipeline"
DIAGNOSTIC_EVENTS = frozenset({"record.dropped"})


class PipelineTracer(Protocol):
    def emit(self, event: str, **fields: Any) -> None: ...


def _format_fields(fields: dict[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in fields.items())


class LoggingTracer:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(PIPELINE_LOGGER_NAME)

    def emit(self, event: str, **fields: Any) -> None:
        level = logging.WARNING if event in DIAGNOSTIC_EVENTS else logging.DEBUG
        if not self.logger.isEnabledFor(level):
            return
        if fields:
            self.logger.log(level, "%s %s", event, _format_fields(fields))
        else:
            self.logger.log(level, "%s", event)


@dataclass(frozen=True)
class TraceEvent:
    name: str
    fields: dict[str, Any]


@dataclass
class RecordingTracer:
    forward_to: PipelineTracer | None = None
    events: list[TraceEvent] = field(default_factory=list)

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append(TraceEvent(name=event, fields=dict(fields)))
        if self.forward_to is not None:
            self.forward_to.emit(event, **fields)

    def named(self, event: str) -> list[TraceEvent]:
        return [item for item in self.events if item.name == event]

    def diagnostics(self) -> list[str]:
        return [
            f"{item.name} {_format_fields(item.fields)}".strip()
            for item in self.events
            if item.name in DIAGNOSTIC_EVENTS
        ]


_default_tracer = LoggingTracer()


def resolve_tracer(tracer: PipelineTracer | None) -> PipelineTracer:
    return tracer if tracer is not None else _default_tracer
