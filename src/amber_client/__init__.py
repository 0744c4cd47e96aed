"""Client for the Amber Electric REST API."""

from .api import (
    SpikeStatus,
    describe_spike_status,
    get_prices,
    get_renewables,
    get_site_data,
    get_spike_status,
    get_usage_by_date,
    get_user_site_id,
)
from .dates import DateRange, validate_date
from .exceptions import (
    AmberError,
    ConfigError,
    EmptyPriceList,
    EmptyResponse,
    EmptySiteList,
    ExportError,
    HttpStatusError,
    InvalidDateFormat,
    ResponseDecodeError,
    TransportError,
)
from .models import (
    PriceInterval,
    RenewablesRecord,
    SiteChannel,
    SiteDetails,
    TariffInformation,
    UsageRecord,
)
from .rest_client import RestClient
from .urls import QueryWindow

__all__ = [
    "AmberError",
    "ConfigError",
    "DateRange",
    "EmptyPriceList",
    "EmptyResponse",
    "EmptySiteList",
    "ExportError",
    "HttpStatusError",
    "InvalidDateFormat",
    "PriceInterval",
    "QueryWindow",
    "RenewablesRecord",
    "ResponseDecodeError",
    "RestClient",
    "SiteChannel",
    "SiteDetails",
    "SpikeStatus",
    "TariffInformation",
    "TransportError",
    "UsageRecord",
    "describe_spike_status",
    "get_prices",
    "get_renewables",
    "get_site_data",
    "get_spike_status",
    "get_usage_by_date",
    "get_user_site_id",
    "validate_date",
]
