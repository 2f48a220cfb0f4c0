"""Tests for single-page fetching and response classification."""

from unittest.mock import MagicMock

import pytest

from cadastre.collectors.vworld import (
    CollectionStatus,
    NullStatusReporter,
    PageFetcher,
    PageStatus,
    RegionCollector,
    VWorldAPIClient,
)
from cadastre.exceptions import VWorldTransportError

from conftest import make_features, vworld_ok, vworld_status


def _raw(count):
    return [f.to_geojson() for f in make_features(count)]


@pytest.fixture()
def api_client():
    return MagicMock(spec=VWorldAPIClient)


@pytest.fixture()
def fetcher(api_client):
    return PageFetcher(api_client)


class TestOk:
    def test_full_page_is_not_last(self, fetcher, api_client):
        api_client.get_features.return_value = vworld_ok(_raw(10))

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.OK
        assert len(result.features) == 10
        assert result.is_last_page is False
        api_client.get_features.assert_called_once_with("44790310", 1, 10)

    def test_short_page_is_last(self, fetcher, api_client):
        api_client.get_features.return_value = vworld_ok(_raw(3))

        result = fetcher.fetch("44790310", 2, 10)

        assert result.status == PageStatus.OK
        assert result.is_last_page is True

    def test_empty_ok_page_is_last(self, fetcher, api_client):
        api_client.get_features.return_value = vworld_ok([])

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.OK
        assert result.features == ()
        assert result.is_last_page is True

    def test_features_parsed_in_order(self, fetcher, api_client):
        raw = _raw(4)
        api_client.get_features.return_value = vworld_ok(raw)

        result = fetcher.fetch("44790310", 1, 10)

        assert [f.id for f in result.features] == [r["id"] for r in raw]
        assert result.features[0].pnu == raw[0]["properties"]["pnu"]

    def test_ok_without_features_is_api_error(self, fetcher, api_client):
        api_client.get_features.return_value = {"response": {"status": "OK", "result": {}}}

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.API_ERROR
        assert result.message == "Unknown error"


class TestNonOk:
    def test_not_found(self, fetcher, api_client):
        api_client.get_features.return_value = vworld_status("NOT FOUND")

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.NOT_FOUND

    def test_error_with_text(self, fetcher, api_client):
        api_client.get_features.return_value = vworld_status("ERROR", "등록되지 않은 인증키입니다.")

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.API_ERROR
        assert result.message == "등록되지 않은 인증키입니다."

    def test_error_without_text(self, fetcher, api_client):
        api_client.get_features.return_value = vworld_status("ERROR")

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.API_ERROR
        assert result.message == "Unknown error"

    @pytest.mark.parametrize("payload", [
        vworld_status("MAINTENANCE", "Service paused"),
        {"response": {}},
    ])
    def test_other_status_is_api_error(self, fetcher, api_client, payload):
        api_client.get_features.return_value = payload

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.API_ERROR


class TestTransport:
    def test_transport_exception(self, fetcher, api_client):
        api_client.get_features.side_effect = VWorldTransportError("VWorld API timeout after 10s")

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.TRANSPORT_ERROR
        assert "timeout" in result.message

    def test_malformed_feature_payload(self, fetcher, api_client):
        api_client.get_features.return_value = vworld_ok([{"id": "x", "properties": {}}])

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.TRANSPORT_ERROR
        assert "geometry" in result.message

    @pytest.mark.parametrize("payload", [
        [],
        [{"response": {"status": "OK"}}],
        "OK",
        {},
        {"response": "OK"},
    ])
    def test_non_object_envelope(self, fetcher, api_client, payload):
        api_client.get_features.return_value = payload

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.TRANSPORT_ERROR
        assert result.message.startswith("Malformed response")

    def test_features_not_a_list(self, fetcher, api_client):
        api_client.get_features.return_value = vworld_ok(5)

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.TRANSPORT_ERROR
        assert "not a list" in result.message

    def test_properties_not_an_object(self, fetcher, api_client):
        feature = {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": []}, "properties": ["x"]}
        api_client.get_features.return_value = vworld_ok([feature])

        result = fetcher.fetch("44790310", 1, 10)

        assert result.status == PageStatus.TRANSPORT_ERROR
        assert "properties" in result.message


@pytest.mark.parametrize("payload", [
    vworld_ok(5),
    vworld_ok([{"geometry": {"type": "Polygon", "coordinates": []}, "properties": ["x"]}]),
    [],
])
def test_malformed_page_fails_region(api_client, payload):
    api_client.get_features.return_value = payload
    collector = RegionCollector(
        page_fetcher=PageFetcher(api_client),
        preloaded={},
        status_reporter=NullStatusReporter(),
        sleep=lambda s: None,
    )

    outcome = collector.collect_region("44790310")

    assert outcome.status == CollectionStatus.FAILED
    assert outcome.collection is None
    api_client.get_features.assert_called_once()
