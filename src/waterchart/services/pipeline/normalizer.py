from __future__ import annotations

from datetime import date
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ValidationError

from waterchart.core.exceptions import AppValidationError
from waterchart.core.tracing import PipelineTracer, resolve_tracer
from waterchart.models import (
    LEGACY_METHOD_CODES,
    ChartMethod,
    HourlyReading,
    MonthlyReading,
    PeriodBucket,
    PeriodReading,
)
from waterchart.services.pipeline.constants import DEFAULT_LOCALE, DEFAULT_TIMEZONE
from waterchart.services.pipeline.timekeys import TimeKey, hourly_key, monthly_key, period_key
from waterchart.utils.dates import today_in

ModelT = TypeVar("ModelT", bound=BaseModel)
KeyedValues = list[tuple[TimeKey, float]]


def resolve_method(method: ChartMethod | str | int) -> ChartMethod:
    if isinstance(method, ChartMethod):
        return method
    if isinstance(method, int) and not isinstance(method, bool):
        resolved = LEGACY_METHOD_CODES.get(method)
        if resolved is None:
            raise AppValidationError(f"Unknown chart method code: {method}")
        return resolved
    try:
        return ChartMethod(str(method).strip().lower())
    except ValueError as exc:
        raise AppValidationError(f"Unknown chart method: {method}") from exc


def validate_record(
    model: type[ModelT],
    raw: Any,
    *,
    method: ChartMethod,
    position: str,
    tracer: PipelineTracer,
) -> ModelT | None:
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) or "record" for error in exc.errors()})
        tracer.emit(
            "record.dropped",
            method=method.value,
            position=position,
            reason="invalid:" + ",".join(fields),
        )
        return None


def _accumulate(keyed: Iterable[tuple[TimeKey, float]]) -> KeyedValues:
    pairs: KeyedValues = []
    index_by_text: dict[str, int] = {}
    for key, value in keyed:
        position = index_by_text.get(key.text)
        if position is None:
            index_by_text[key.text] = len(pairs)
            pairs.append((key, value))
        else:
            existing_key, existing_value = pairs[position]
            pairs[position] = (existing_key, existing_value + value)
    return pairs


def _hourly_pairs(raw: list[Any], reference_date: date, tracer: PipelineTracer) -> KeyedValues:
    keyed: KeyedValues = []
    for index, item in enumerate(raw):
        reading = validate_record(HourlyReading, item, method=ChartMethod.HOURLY, position=str(index), tracer=tracer)
        if reading is None:
            continue
        keyed.append((hourly_key(reading.hour, reference_date), reading.value))
    return keyed


def flatten_period_buckets(raw: list[Any], tracer: PipelineTracer | None = None) -> list[PeriodReading]:
    tracer = resolve_tracer(tracer)
    flattened: list[PeriodReading] = []
    for bucket_index, item in enumerate(raw):
        bucket = validate_record(
            PeriodBucket,
            item,
            method=ChartMethod.PERIOD,
            position=str(bucket_index),
            tracer=tracer,
        )
        if bucket is None:
            continue
        for record_index, record in enumerate(bucket.records):
            reading = validate_record(
                PeriodReading,
                record,
                method=ChartMethod.PERIOD,
                position=f"{bucket_index}.{record_index}",
                tracer=tracer,
            )
            if reading is not None:
                flattened.append(reading)
    return sorted(flattened, key=lambda reading: reading.calendar_date)


def _period_pairs(raw: list[Any], locale: str, tracer: PipelineTracer) -> KeyedValues:
    return [
        (period_key(reading.calendar_date, reading.hour, locale), reading.value)
        for reading in flatten_period_buckets(raw, tracer)
    ]


def _monthly_pairs(raw: list[Any], reference_year: int, locale: str, tracer: PipelineTracer) -> KeyedValues:
    readings: list[MonthlyReading] = []
    for index, item in enumerate(raw):
        reading = validate_record(MonthlyReading, item, method=ChartMethod.MONTHLY, position=str(index), tracer=tracer)
        if reading is not None:
            readings.append(reading)
    readings.sort(key=lambda reading: reading.month)
    return [(monthly_key(reading.month, reference_year, locale), reading.value) for reading in readings]


def normalize_records(
    raw: list[Any] | None,
    method: ChartMethod | str | int,
    *,
    reference_date: date | None = None,
    locale: str = DEFAULT_LOCALE,
    tracer: PipelineTracer | None = None,
) -> KeyedValues:
    """Extract ``(TimeKey, value)`` pairs from one raw upstream array.

    Keys are unique in the result; records that map to the same key are
    summed in place of the first occurrence. Malformed records are dropped
    and reported through ``tracer`` as ``record.dropped``.
    """
    resolved = resolve_method(method)
    tracer = resolve_tracer(tracer)
    if not raw:
        tracer.emit("normalize.empty", method=resolved.value)
        return []

    anchor = reference_date or today_in(DEFAULT_TIMEZONE)
    if resolved == ChartMethod.HOURLY:
        keyed = _hourly_pairs(raw, anchor, tracer)
    elif resolved == ChartMethod.PERIOD:
        keyed = _period_pairs(raw, locale, tracer)
    else:
        keyed = _monthly_pairs(raw, anchor.year, locale, tracer)

    pairs = _accumulate(keyed)
    tracer.emit(
        "normalize.done",
        method=resolved.value,
        records=len(raw),
        normalized=len(keyed),
        keys=len(pairs),
    )
    return pairs
