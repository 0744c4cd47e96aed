"""Named queries against the Amber API.

Each function builds the endpoint URL, issues one request through RestClient
and returns the decoded records. Errors propagate unchanged to the caller.

Pass the same httpx.Client as ``http`` to reuse one connection across several
queries in a run; without it each query opens and closes its own.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator

import httpx

from . import urls
from .dates import DateRange
from .exceptions import EmptyPriceList, EmptySiteList
from .models import PriceInterval, RenewablesRecord, SiteDetails, UsageRecord
from .rest_client import DEFAULT_TIMEOUT, RestClient, open_http_client
from .urls import QueryWindow

_LOGGER = logging.getLogger(__name__)


class SpikeStatus(str, Enum):
    """Spike flag carried by a price interval."""

    NONE = "none"
    POTENTIAL = "potential"
    SPIKE = "spike"


SPIKE_STATUS_MESSAGES = {
    SpikeStatus.NONE: "Interval has no spike",
    SpikeStatus.POTENTIAL: "Interval has potential to spike.",
    SpikeStatus.SPIKE: "Interval spiking",
}
UNKNOWN_SPIKE_STATUS_MESSAGE = "Unknown spike status"


@contextmanager
def _connection(http: httpx.Client | None, timeout: float) -> Iterator[httpx.Client]:
    """Yield the caller's client, or a temporary one closed on exit."""
    if http is not None:
        yield http
        return
    with open_http_client(timeout) as client:
        yield client


def get_site_data(
    base_url: str,
    auth_token: str,
    *,
    http: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[SiteDetails]:
    """Get the site details for the account."""
    url = urls.sites_url(base_url)
    _LOGGER.debug("Fetching site data from %s", url)
    with _connection(http, timeout) as client:
        return RestClient(url, auth_token, client).get_site_data()


def get_user_site_id(
    base_url: str,
    auth_token: str,
    *,
    http: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Get only the site id, so later queries can reuse it without another lookup.

    Raises EmptySiteList when the account has no sites.
    """
    sites = get_site_data(base_url, auth_token, http=http, timeout=timeout)
    if not sites:
        raise EmptySiteList()
    _LOGGER.debug("Using site %s (%d site(s) on account)", sites[0].id, len(sites))
    return sites[0].id


def get_prices(
    base_url: str,
    auth_token: str,
    site_id: str,
    window: QueryWindow = QueryWindow.CURRENT,
    *,
    http: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[PriceInterval]:
    """Get the price interval(s) for the current, previous or next window."""
    url = urls.prices_url(base_url, site_id, window)
    _LOGGER.debug("Fetching prices from %s", url)
    with _connection(http, timeout) as client:
        return RestClient(url, auth_token, client).get_price_data()


def get_usage_by_date(
    base_url: str,
    auth_token: str,
    site_id: str,
    start_date: str,
    end_date: str,
    *,
    http: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[UsageRecord]:
    """Get historical usage for a date range supplied by the user.

    Both dates are validated before any request is made; an invalid one
    raises InvalidDateFormat.
    """
    dates = DateRange.parse(start_date, end_date)
    url = urls.usage_url(base_url, site_id, dates)
    _LOGGER.debug("Fetching usage from %s", url)
    with _connection(http, timeout) as client:
        return RestClient(url, auth_token, client).get_usage_data()


def get_renewables(
    base_url: str,
    auth_token: str,
    state: str,
    window: QueryWindow = QueryWindow.CURRENT,
    *,
    http: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[RenewablesRecord]:
    """Get the renewables percentage in the grid for a state and window."""
    url = urls.renewables_url(base_url, state, window)
    _LOGGER.debug("Fetching renewables from %s", url)
    with _connection(http, timeout) as client:
        return RestClient(url, auth_token, client).get_renewables_data()


def describe_spike_status(status: str) -> str:
    """Map a spike status to a sentence. Unknown values never raise."""
    try:
        return SPIKE_STATUS_MESSAGES[SpikeStatus(status)]
    except ValueError:
        return UNKNOWN_SPIKE_STATUS_MESSAGE


def get_spike_status(
    base_url: str,
    auth_token: str,
    site_id: str,
    *,
    http: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Describe the spike status of the current price interval."""
    prices = get_prices(
        base_url, auth_token, site_id, QueryWindow.CURRENT, http=http, timeout=timeout
    )
    if not prices:
        raise EmptyPriceList()
    return describe_spike_status(prices[0].spike_status)
