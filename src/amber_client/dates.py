"""Validation of user supplied calendar dates."""

import re
from dataclasses import dataclass
from datetime import datetime

from .exceptions import InvalidDateFormat

DATE_FORMAT = "%Y-%m-%d"

# strptime alone accepts single digit months and days
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def validate_date(value: str) -> str:
    """Check that value is a real calendar date in YYYY-MM-DD form.

    Returns the normalized date string, which is what the usage endpoint
    expects. Raises InvalidDateFormat otherwise, including for dates that
    match the pattern but do not exist (e.g. 2023-02-30).
    """
    if not isinstance(value, str) or not _DATE_PATTERN.fullmatch(value):
        raise InvalidDateFormat(value)
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise InvalidDateFormat(value) from None
    return parsed.isoformat()


@dataclass(frozen=True)
class DateRange:
    """A validated start/end pair for historical usage queries."""

    start_date: str
    end_date: str

    @classmethod
    def parse(cls, start_date: str, end_date: str) -> "DateRange":
        """Validate both ends, failing on the first invalid one."""
        return cls(
            start_date=validate_date(start_date),
            end_date=validate_date(end_date),
        )
