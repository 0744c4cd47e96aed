"""Exceptions raised by the Amber client."""


class AmberError(Exception):
    """Base exception for Amber client errors."""
    pass


class ConfigError(AmberError):
    """The configuration file is missing or incomplete."""
    pass


class InvalidDateFormat(AmberError, ValueError):
    """A user supplied date is not a real YYYY-MM-DD calendar date."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Date must be in the format yyyy-mm-dd, input of {value!r} does not match requirements"
        )


class EmptyResponse(AmberError):
    """The API returned an empty array where at least one record is required."""
    pass


class EmptySiteList(EmptyResponse):
    """No sites are linked to the account."""

    def __init__(self):
        super().__init__("No sites returned for this account")


class EmptyPriceList(EmptyResponse):
    """No price intervals were returned for the requested window."""

    def __init__(self):
        super().__init__("No price intervals returned for the current window")


class HttpStatusError(AmberError):
    """The API answered with a status other than 200.

    `status_code` is the integer code and `status` the full status line, e.g.
    "401 Unauthorized". The body is kept as raw text so error payloads of any
    shape survive.
    """

    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"Unexpected status {self.status} from Amber API: {body}")

    @property
    def status(self) -> str:
        """Status line in '401 Unauthorized' form."""
        return f"{self.status_code} {self.reason}".strip()


class ResponseDecodeError(AmberError):
    """The response body is not the JSON shape we expected."""
    pass


class TransportError(AmberError):
    """The request never got an HTTP response (connect, TLS, DNS, timeout)."""
    pass


class ExportError(AmberError):
    """Records could not be written to the export file."""
    pass
