"""Serialization of Amber records to JSON and CSV."""

import csv
import json
import logging
from dataclasses import asdict, is_dataclass
from datetime import date
from pathlib import Path
from typing import Any, Iterable

from .exceptions import ExportError
from .models import UsageRecord

_LOGGER = logging.getLogger(__name__)

USAGE_CSV_COLUMNS = [
    "type",
    "duration",
    "date",
    "end_time",
    "quality",
    "kwh",
    "nem_time",
    "per_kwh",
    "channel_type",
    "channel_identifier",
    "cost",
    "renewables",
    "spot_per_kwh",
    "start_time",
    "spike_status",
    "tariff_period",
    "descriptor",
]


def _plain(value: Any) -> Any:
    if isinstance(value, date):  # also covers datetime
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def record_to_dict(record: Any) -> dict[str, Any]:
    """Convert a record dataclass into JSON-friendly values."""
    if not is_dataclass(record):
        raise TypeError(f"Expected a record dataclass, got {type(record).__name__}")
    return _plain(asdict(record))


def records_to_json(records: Iterable[Any], indent: int | None = 2) -> str:
    return json.dumps([record_to_dict(r) for r in records], indent=indent)


def usage_csv_row(record: UsageRecord) -> list[Any]:
    return [
        record.interval_type,
        record.duration,
        record.date.isoformat(),
        record.end_time.isoformat(),
        record.quality,
        record.kwh,
        record.nem_time.isoformat(),
        record.per_kwh,
        record.channel_type,
        record.channel_identifier,
        record.cost,
        record.renewables,
        record.spot_per_kwh,
        record.start_time.isoformat(),
        record.spike_status,
        record.tariff_information.period,
        record.descriptor,
    ]


def write_usage_csv(path: Path, records: Iterable[UsageRecord]) -> int:
    """Write usage records to a CSV file with a header row.

    Returns the number of records written. Raises ExportError when the file
    cannot be written.
    """
    count = 0
    _LOGGER.info("Writing usage data to %s", path)
    try:
        with open(path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(USAGE_CSV_COLUMNS)
            for record in records:
                writer.writerow(usage_csv_row(record))
                count += 1
    except OSError as err:
        raise ExportError(f"Could not write usage export to {path}: {err}") from err
    _LOGGER.info("Wrote %d usage records", count)
    return count
