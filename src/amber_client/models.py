"""Data models for Amber API records."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class SiteChannel:
    """A metering channel at a site."""

    identifier: str  # e.g. E1
    tariff: str
    tariff_type: str  # general, controlledLoad or feedIn


@dataclass(frozen=True)
class SiteDetails:
    """The metering point linked to an account."""

    id: str
    nmi: str
    network: str
    status: str
    active_from: datetime
    channels: list[SiteChannel]


@dataclass(frozen=True)
class TariffInformation:
    """Billing period applicable to an interval."""

    period: str


@dataclass(frozen=True)
class PriceInterval:
    """A single 30-minute pricing interval."""

    interval_type: str
    date: date
    start_time: datetime
    end_time: datetime
    nem_time: datetime
    duration: int  # minutes
    per_kwh: float  # c/kWh
    renewables: float  # percent
    spot_per_kwh: float
    channel_type: str
    spike_status: str  # none, potential or spike
    tariff_information: TariffInformation
    descriptor: str
    estimate: bool | None = None  # forecasts may omit it


@dataclass(frozen=True)
class UsageRecord:
    """A single historical 30-minute usage interval."""

    interval_type: str
    date: date
    start_time: datetime
    end_time: datetime
    nem_time: datetime
    duration: int
    per_kwh: float
    renewables: float
    spot_per_kwh: float
    channel_type: str
    spike_status: str
    tariff_information: TariffInformation
    descriptor: str
    kwh: float
    cost: float
    channel_identifier: str
    quality: str  # estimated or billable


@dataclass(frozen=True)
class RenewablesRecord:
    """Renewable share of the grid for one interval in a state."""

    interval_type: str
    date: date
    start_time: datetime
    end_time: datetime
    duration: int
    renewables: float
    descriptor: str
    nem_time: datetime | None = None
