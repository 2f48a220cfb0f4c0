"""Shared pytest fixtures for the Cadastre Collector test suite."""

from typing import List
from unittest.mock import MagicMock

import pytest

from cadastre.config import VWorldConfig
from cadastre.collectors.vworld import CadastralFeature, PageFetcher, StatusReporter


class RecordingStatusReporter(StatusReporter):
    """Keeps every message in order, most recent last."""

    def __init__(self):
        self.messages: List[str] = []
        self.errors: List[str] = []

    def report(self, message: str) -> None:
        self.messages.append(message)

    def report_error(self, message: str) -> None:
        self.errors.append(message)
        self.messages.append(message)

    @property
    def last(self) -> str:
        return self.messages[-1] if self.messages else ""


def make_feature(index: int, region: str = "44790310") -> CadastralFeature:
    """A small closed square parcel offset by its index."""
    lon = 127.0 + index * 0.0001
    lat = 36.5
    ring = [[lon, lat], [lon, lat + 0.0001], [lon + 0.0001, lat + 0.0001], [lon + 0.0001, lat], [lon, lat]]
    pnu = f"{region}{index:011d}"
    return CadastralFeature(
        id=f"LP_PA_CBND_BUBUN.{index}",
        geometry={"type": "MultiPolygon", "coordinates": [[ring]]},
        properties={"pnu": pnu, "jibun": f"{index} 답"},
    )


def make_features(count: int, start: int = 0) -> List[CadastralFeature]:
    return [make_feature(start + i) for i in range(count)]


def vworld_ok(features) -> dict:
    """VWorld envelope for a successful page."""
    return {
        "response": {
            "status": "OK",
            "result": {"featureCollection": {"type": "FeatureCollection", "features": features}},
        }
    }


def vworld_status(status: str, text: str = None) -> dict:
    """VWorld envelope for a non-OK status, with optional error text."""
    response = {"status": status}
    if text is not None:
        response["error"] = {"level": "1", "code": "INCORRECT_KEY", "text": text}
    return {"response": response}


@pytest.fixture()
def vworld_config() -> VWorldConfig:
    return VWorldConfig(key="TESTKEY1234567890", domain="localhost")


@pytest.fixture()
def page_fetcher() -> MagicMock:
    """PageFetcher double whose fetch results are scripted per test."""
    return MagicMock(spec=PageFetcher)


@pytest.fixture()
def sleep() -> MagicMock:
    return MagicMock()
