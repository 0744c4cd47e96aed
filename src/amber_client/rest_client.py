"""Typed HTTP client for the Amber REST API.

Sends authenticated GET requests and decodes the JSON arrays the API returns
into the record types in models. Nothing here logs or prints; every failure
surfaces as one of the exceptions in exceptions.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from http import HTTPStatus
from typing import Any, Callable, TypeVar

import httpx

from .exceptions import HttpStatusError, ResponseDecodeError, TransportError
from .models import (
    PriceInterval,
    RenewablesRecord,
    SiteChannel,
    SiteDetails,
    TariffInformation,
    UsageRecord,
)

DEFAULT_TIMEOUT = 30.0

T = TypeVar("T")


def open_http_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """Create the connection object shared by every request in a run."""
    return httpx.Client(timeout=timeout)


@dataclass(frozen=True)
class RestClient:
    """One endpoint URL plus the credentials and connection to query it."""

    url: str
    auth_token: str = field(repr=False)
    http: httpx.Client = field(repr=False, compare=False)

    def get_site_data(self) -> list[SiteDetails]:
        return self._get_records(parse_site)

    def get_price_data(self) -> list[PriceInterval]:
        return self._get_records(parse_price_interval)

    def get_usage_data(self) -> list[UsageRecord]:
        return self._get_records(parse_usage_record)

    def get_renewables_data(self) -> list[RenewablesRecord]:
        return self._get_records(parse_renewables_record)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.auth_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _get_array(self) -> list[Any]:
        """Perform the request and return the decoded top-level array."""
        try:
            response = self.http.get(self.url, headers=self._headers())
        except httpx.TransportError as err:
            raise TransportError(f"Error communicating with Amber API: {err}") from err

        if response.status_code != HTTPStatus.OK:
            raise HttpStatusError(response.status_code, response.reason_phrase, response.text)

        try:
            data = response.json()
        except ValueError as err:
            raise ResponseDecodeError(f"Invalid JSON received from Amber API: {err}") from err

        if not isinstance(data, list):
            raise ResponseDecodeError(
                f"Expected a JSON array from Amber API, got {type(data).__name__}"
            )
        return data

    def _get_records(self, parser: Callable[[Any], T]) -> list[T]:
        records = []
        for index, item in enumerate(self._get_array()):
            try:
                records.append(parser(item))
            except ResponseDecodeError as err:
                raise ResponseDecodeError(f"Invalid record at index {index}: {err}") from err
        return records


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, treating naive values as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _require(raw: Any, key: str, kinds: type | tuple[type, ...]) -> Any:
    if not isinstance(raw, dict):
        raise ResponseDecodeError(f"expected a JSON object, got {type(raw).__name__}")
    value = raw.get(key)
    if value is None:
        raise ResponseDecodeError(f"missing field '{key}'")
    kinds = kinds if isinstance(kinds, tuple) else (kinds,)
    # bool is an int subclass
    if not isinstance(value, kinds) or (isinstance(value, bool) and bool not in kinds):
        raise ResponseDecodeError(f"field '{key}' has invalid type {type(value).__name__}")
    return value


def _str(raw: Any, key: str) -> str:
    return _require(raw, key, str)


def _int(raw: Any, key: str) -> int:
    return _require(raw, key, int)


def _float(raw: Any, key: str) -> float:
    return float(_require(raw, key, (int, float)))


def _timestamp(raw: Any, key: str) -> datetime:
    value = _str(raw, key)
    try:
        return parse_timestamp(value)
    except ValueError as err:
        raise ResponseDecodeError(f"field '{key}' is not a timestamp: {err}") from err


def _optional_timestamp(raw: Any, key: str) -> datetime | None:
    if not isinstance(raw, dict):
        raise ResponseDecodeError(f"expected a JSON object, got {type(raw).__name__}")
    if raw.get(key) is None:
        return None
    return _timestamp(raw, key)


def _date(raw: Any, key: str) -> date:
    value = _str(raw, key)
    try:
        return date.fromisoformat(value)
    except ValueError as err:
        raise ResponseDecodeError(f"field '{key}' is not a date: {err}") from err


def parse_channel(raw: Any) -> SiteChannel:
    return SiteChannel(
        identifier=_str(raw, "identifier"),
        tariff=_str(raw, "tariff"),
        tariff_type=_str(raw, "type"),
    )


def parse_site(raw: Any) -> SiteDetails:
    return SiteDetails(
        id=_str(raw, "id"),
        nmi=_str(raw, "nmi"),
        network=_str(raw, "network"),
        status=_str(raw, "status"),
        active_from=_timestamp(raw, "activeFrom"),
        channels=[parse_channel(channel) for channel in _require(raw, "channels", list)],
    )


def parse_tariff_information(raw: Any) -> TariffInformation:
    return TariffInformation(period=_str(raw, "period"))


def _interval_fields(raw: Any) -> dict[str, Any]:
    """Fields shared by price and usage intervals."""
    return {
        "interval_type": _str(raw, "type"),
        "date": _date(raw, "date"),
        "start_time": _timestamp(raw, "startTime"),
        "end_time": _timestamp(raw, "endTime"),
        "nem_time": _timestamp(raw, "nemTime"),
        "duration": _int(raw, "duration"),
        "per_kwh": _float(raw, "perKwh"),
        "renewables": _float(raw, "renewables"),
        "spot_per_kwh": _float(raw, "spotPerKwh"),
        "channel_type": _str(raw, "channelType"),
        "spike_status": _str(raw, "spikeStatus"),
        "tariff_information": parse_tariff_information(
            _require(raw, "tariffInformation", dict)
        ),
        "descriptor": _str(raw, "descriptor"),
    }


def parse_price_interval(raw: Any) -> PriceInterval:
    fields = _interval_fields(raw)
    estimate = raw.get("estimate")
    if estimate is not None and not isinstance(estimate, bool):
        raise ResponseDecodeError(f"field 'estimate' has invalid type {type(estimate).__name__}")
    return PriceInterval(**fields, estimate=estimate)


def parse_usage_record(raw: Any) -> UsageRecord:
    return UsageRecord(
        **_interval_fields(raw),
        kwh=_float(raw, "kwh"),
        cost=_float(raw, "cost"),
        channel_identifier=_str(raw, "channelIdentifier"),
        quality=_str(raw, "quality"),
    )


def parse_renewables_record(raw: Any) -> RenewablesRecord:
    return RenewablesRecord(
        interval_type=_str(raw, "type"),
        date=_date(raw, "date"),
        start_time=_timestamp(raw, "startTime"),
        end_time=_timestamp(raw, "endTime"),
        duration=_int(raw, "duration"),
        renewables=_float(raw, "renewables"),
        descriptor=_str(raw, "descriptor"),
        nem_time=_optional_timestamp(raw, "nemTime"),
    )
