"""Shared fixtures for Amber client tests."""

import httpx
import pytest

from helpers import SITE_ID


class MockServer:
    """Queue of canned responses served through httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._responses: list = []
        self.client = httpx.Client(transport=httpx.MockTransport(self._handle))

    def respond(self, status_code: int = 200, json=None, text: str | None = None) -> None:
        if text is not None:
            self._responses.append(httpx.Response(status_code, text=text))
        else:
            self._responses.append(httpx.Response(status_code, json=json))

    def fail(self, error: type[httpx.TransportError], message: str = "boom") -> None:
        self._responses.append((error, message))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request to {request.url}")
        response = self._responses.pop(0)
        if isinstance(response, tuple):
            error, message = response
            raise error(message, request=request)
        return response


@pytest.fixture
def server():
    mock = MockServer()
    yield mock
    mock.client.close()


@pytest.fixture
def site_json() -> list[dict]:
    return [
        {
            "id": SITE_ID,
            "nmi": "3052282872",
            "channels": [
                {"identifier": "E1", "type": "general", "tariff": "A100"},
                {"identifier": "B1", "type": "feedIn", "tariff": "A100"},
            ],
            "network": "Jemena",
            "status": "active",
            "activeFrom": "2022-01-01",
            "closedOn": "2022-05-01",
        }
    ]


def _interval(**overrides) -> dict:
    interval = {
        "type": "CurrentInterval",
        "date": "2021-05-05",
        "duration": 30,
        "startTime": "2021-05-05T02:00:01Z",
        "endTime": "2021-05-05T02:30:00Z",
        "nemTime": "2021-05-05T12:30:00+10:00",
        "perKwh": 23.4,
        "renewables": 45,
        "spotPerKwh": 6.12,
        "channelType": "general",
        "spikeStatus": "none",
        "tariffInformation": {"period": "offPeak", "season": "default"},
        "descriptor": "low",
        "estimate": False,
    }
    interval.update(overrides)
    return interval


@pytest.fixture
def price_json() -> list[dict]:
    return [_interval()]


@pytest.fixture
def make_interval():
    return _interval


@pytest.fixture
def usage_json() -> list[dict]:
    usage = _interval(
        type="Usage",
        kwh=0.42,
        cost=9.83,
        quality="billable",
        channelIdentifier="E1",
    )
    del usage["estimate"]
    return [usage]


@pytest.fixture
def renewables_json() -> list[dict]:
    return [
        {
            "type": "ActualRenewable",
            "duration": 30,
            "date": "2021-05-05",
            "startTime": "2021-05-05T02:00:01Z",
            "endTime": "2021-05-05T02:30:00Z",
            "renewables": 45.2,
            "descriptor": "best",
        }
    ]
