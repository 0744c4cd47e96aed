"""Tests for the typed HTTP client."""

import json
from datetime import date, datetime, timedelta, timezone

import httpx
import pytest

from amber_client.exceptions import HttpStatusError, ResponseDecodeError, TransportError
from amber_client.models import (
    PriceInterval,
    RenewablesRecord,
    SiteChannel,
    SiteDetails,
    TariffInformation,
)
from amber_client.rest_client import RestClient, parse_timestamp

from helpers import BASE_URL, SITE_ID, TOKEN

URL = f"{BASE_URL}/sites"


def make_client(server) -> RestClient:
    return RestClient(URL, TOKEN, server.client)


def test_headers_present_and_called_once(server, site_json):
    """Every request is a GET carrying the bearer token exactly once."""
    server.respond(json=site_json)

    make_client(server).get_site_data()

    assert len(server.requests) == 1
    request = server.requests[0]
    assert request.method == "GET"
    assert str(request.url) == URL
    assert request.headers.get_list("authorization") == [f"Bearer {TOKEN}"]
    assert request.headers["content-type"] == "application/json"
    assert request.headers["accept"] == "application/json"


def test_site_data_decoded_field_for_field(server, site_json):
    server.respond(json=site_json)

    sites = make_client(server).get_site_data()

    assert sites == [
        SiteDetails(
            id=SITE_ID,
            nmi="3052282872",
            network="Jemena",
            status="active",
            active_from=datetime(2022, 1, 1, tzinfo=timezone.utc),
            channels=[
                SiteChannel(identifier="E1", tariff="A100", tariff_type="general"),
                SiteChannel(identifier="B1", tariff="A100", tariff_type="feedIn"),
            ],
        )
    ]


def test_price_data_decoded(server, price_json):
    server.respond(json=price_json)

    [interval] = make_client(server).get_price_data()

    assert interval == PriceInterval(
        interval_type="CurrentInterval",
        date=date(2021, 5, 5),
        start_time=datetime(2021, 5, 5, 2, 0, 1, tzinfo=timezone.utc),
        end_time=datetime(2021, 5, 5, 2, 30, tzinfo=timezone.utc),
        nem_time=datetime(2021, 5, 5, 12, 30, tzinfo=timezone(timedelta(hours=10))),
        duration=30,
        per_kwh=23.4,
        renewables=45.0,
        spot_per_kwh=6.12,
        channel_type="general",
        spike_status="none",
        tariff_information=TariffInformation(period="offPeak"),
        descriptor="low",
        estimate=False,
    )


def test_forecast_interval_without_estimate(server, make_interval):
    forecast = make_interval(type="ForecastInterval")
    del forecast["estimate"]
    server.respond(json=[forecast])

    [interval] = make_client(server).get_price_data()

    assert interval.interval_type == "ForecastInterval"
    assert interval.estimate is None


def test_usage_data_decoded(server, usage_json):
    server.respond(json=usage_json)

    [record] = make_client(server).get_usage_data()

    assert record.kwh == 0.42
    assert record.cost == 9.83
    assert record.quality == "billable"
    assert record.channel_identifier == "E1"
    assert record.tariff_information.period == "offPeak"


def test_renewables_data_decoded(server, renewables_json):
    server.respond(json=renewables_json)

    records = make_client(server).get_renewables_data()

    assert records == [
        RenewablesRecord(
            interval_type="ActualRenewable",
            date=date(2021, 5, 5),
            start_time=datetime(2021, 5, 5, 2, 0, 1, tzinfo=timezone.utc),
            end_time=datetime(2021, 5, 5, 2, 30, tzinfo=timezone.utc),
            duration=30,
            renewables=45.2,
            descriptor="best",
        )
    ]


def test_empty_array_is_valid(server):
    server.respond(json=[])
    assert make_client(server).get_site_data() == []


def test_non_200_keeps_raw_body(server):
    body = json.dumps({"message": "Unauthorized"})
    server.respond(401, text=body)

    with pytest.raises(HttpStatusError) as exc_info:
        make_client(server).get_site_data()

    error = exc_info.value
    assert error.status == "401 Unauthorized"
    assert error.status_code == 401
    assert error.body == '{"message": "Unauthorized"}'


def test_non_json_error_body_is_kept(server):
    server.respond(503, text="<html>down for maintenance</html>")

    with pytest.raises(HttpStatusError) as exc_info:
        make_client(server).get_price_data()

    assert exc_info.value.body == "<html>down for maintenance</html>"
    assert exc_info.value.status == "503 Service Unavailable"


@pytest.mark.parametrize(
    "error", [httpx.ConnectError, httpx.ConnectTimeout, httpx.ReadTimeout]
)
def test_transport_failure(server, error):
    server.fail(error, "connection refused")

    with pytest.raises(TransportError, match="connection refused") as exc_info:
        make_client(server).get_site_data()

    assert isinstance(exc_info.value.__cause__, error)
    assert len(server.requests) == 1  # no retry


def test_invalid_json(server):
    server.respond(200, text="not json")

    with pytest.raises(ResponseDecodeError, match="Invalid JSON"):
        make_client(server).get_site_data()


def test_object_instead_of_array(server, site_json):
    server.respond(json=site_json[0])

    with pytest.raises(ResponseDecodeError, match="Expected a JSON array"):
        make_client(server).get_site_data()


def test_missing_required_field(server, site_json):
    del site_json[0]["nmi"]
    server.respond(json=site_json)

    with pytest.raises(ResponseDecodeError, match="index 0: missing field 'nmi'"):
        make_client(server).get_site_data()


def test_null_required_field(server, make_interval):
    server.respond(json=[make_interval(), make_interval(perKwh=None)])

    with pytest.raises(ResponseDecodeError, match="index 1: missing field 'perKwh'"):
        make_client(server).get_price_data()


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"perKwh": "23.4"}, "perKwh"),
        ({"duration": 30.5}, "duration"),
        ({"duration": True}, "duration"),
        ({"spikeStatus": 1}, "spikeStatus"),
        ({"estimate": "false"}, "estimate"),
        ({"startTime": "half past two"}, "startTime"),
        ({"date": "05/05/2021"}, "date"),
        ({"tariffInformation": "offPeak"}, "tariffInformation"),
    ],
)
def test_wrong_field_types_rejected(server, make_interval, overrides, field):
    server.respond(json=[make_interval(**overrides)])

    with pytest.raises(ResponseDecodeError, match=field):
        make_client(server).get_price_data()


def test_non_object_record(server):
    server.respond(json=["not a site"])

    with pytest.raises(ResponseDecodeError, match="expected a JSON object"):
        make_client(server).get_site_data()


def test_extra_fields_ignored(server, make_interval):
    server.respond(json=[make_interval(advancedPrice={"low": 1, "high": 2}, range=None)])

    [interval] = make_client(server).get_price_data()

    assert interval.per_kwh == 23.4


def test_token_not_in_repr(server):
    assert TOKEN not in repr(make_client(server))


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2021-05-05T02:00:01Z", datetime(2021, 5, 5, 2, 0, 1, tzinfo=timezone.utc)),
        ("2021-05-05", datetime(2021, 5, 5, tzinfo=timezone.utc)),
        ("2021-05-05T02:00:00", datetime(2021, 5, 5, 2, tzinfo=timezone.utc)),
    ],
)
def test_parse_timestamp(value, expected):
    assert parse_timestamp(value) == expected


def test_renewables_nem_time_when_present(server, renewables_json):
    renewables_json[0]["nemTime"] = "2021-05-05T12:30:00+10:00"
    server.respond(json=renewables_json)

    [record] = make_client(server).get_renewables_data()

    assert record.nem_time == datetime(2021, 5, 5, 2, 30, tzinfo=timezone.utc)


def test_renewables_non_object_record(server):
    server.respond(json=[["ActualRenewable", 45.2]])

    with pytest.raises(ResponseDecodeError, match="index 0: expected a JSON object"):
        make_client(server).get_renewables_data()
