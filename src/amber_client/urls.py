"""Endpoint URL construction for the Amber REST API.

All functions here are pure: same inputs, same URL, no I/O.

    {base}/sites
    {base}/sites/{site_id}/prices/current?previous=1&resolution=30
    {base}/sites/{site_id}/usage?startDate=...&endDate=...&resolution=30
    {base}/state/{state}/renewables/current?next=1&resolution=30
"""

from enum import Enum

from .dates import DateRange

RESOLUTION = 30


class QueryWindow(str, Enum):
    """Which 30 minute interval to query relative to now."""

    CURRENT = "current"
    PREVIOUS = "previous"
    NEXT = "next"

    @property
    def clause(self) -> str:
        """Path and query prefix for this window.

        Previous and next always use an offset of one interval.
        """
        if self is QueryWindow.CURRENT:
            return "current?"
        return f"current?{self.value}=1"


def _base(base_url: str) -> str:
    return base_url.rstrip("/")


def sites_url(base_url: str) -> str:
    """URL listing the sites linked to the account."""
    return f"{_base(base_url)}/sites"


def prices_url(base_url: str, site_id: str, window: QueryWindow) -> str:
    """URL for the price interval(s) of a window at a site."""
    window = QueryWindow(window)
    return f"{_base(base_url)}/sites/{site_id}/prices/{window.clause}&resolution={RESOLUTION}"


def usage_url(base_url: str, site_id: str, dates: DateRange) -> str:
    """URL for historical usage between two already validated dates."""
    return (
        f"{_base(base_url)}/sites/{site_id}/usage"
        f"?startDate={dates.start_date}&endDate={dates.end_date}&resolution={RESOLUTION}"
    )


def renewables_url(base_url: str, state: str, window: QueryWindow) -> str:
    """URL for the renewables percentage of a window in a grid state."""
    window = QueryWindow(window)
    return f"{_base(base_url)}/state/{state}/renewables/{window.clause}&resolution={RESOLUTION}"
