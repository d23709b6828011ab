from __future__ import annotations

from typing import Iterable

from waterchart.core.tracing import PipelineTracer, resolve_tracer
from waterchart.services.pipeline.timekeys import TimeKey


def aggregate_by_key(
    pairs: Iterable[tuple[TimeKey, float]],
    tracer: PipelineTracer | None = None,
) -> list[tuple[TimeKey, float]]:
    """Sort pairs by represented instant and sum values sharing a key.

    The result is an ordered list, one entry per distinct key text.
    """
    ordered = sorted(pairs, key=lambda pair: pair[0].sort_key())
    aggregated: list[tuple[TimeKey, float]] = []
    for key, value in ordered:
        if aggregated and aggregated[-1][0].text == key.text:
            previous_key, previous_value = aggregated[-1]
            aggregated[-1] = (previous_key, previous_value + value)
            continue
        aggregated.append((key, value))

    resolve_tracer(tracer).emit("aggregate.done", pairs=len(ordered), keys=len(aggregated))
    return aggregated
