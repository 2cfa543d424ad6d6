"""Tests for the HTTP surface"""

import pytest
from fastapi.testclient import TestClient

from api.routes import timeline
from core.config import settings
from main import app
from services.geocoding import EnrichedPoint, LocalityData

SAMPLE_DOCUMENT = {
    "timelineEdits": [
        {"rawSignal": {"signal": {"position": {"point": {"latE7": -255982063, "lngE7": -545841325}}}}},
        {"rawSignal": {"signal": {}}},
    ]
}


class FakeNominatimService:
    """Returns a fixed locality for every point, or raises"""

    def __init__(self, locality=None, error=None):
        self.locality = locality
        self.error = error
        self.calls = []

    async def enrich_points(self, points, session=None):
        self.calls.append(list(points))
        if self.error:
            raise self.error
        return [EnrichedPoint(**p.model_dump(), locality_data=self.locality) for p in points]


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fake_service(monkeypatch):
    service = FakeNominatimService(locality=LocalityData(district_name="Vila Yolanda", country_name="Brasil"))
    monkeypatch.setattr(timeline, "_nominatim_service", service)
    return service


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root(client):
    assert client.get("/").json()["status"] == "running"


def test_parse_timeline_returns_enriched_points(client, fake_service):
    response = client.post("/parse-timeline", json=SAMPLE_DOCUMENT)

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    point = body["points"][0]
    assert point["lat"] == pytest.approx(-25.5982063)
    assert point["lng"] == pytest.approx(-54.5841325)
    assert point["googleMapsUrl"] == "https://www.google.com/maps/search/?api=1&query=-25.5982063,-54.5841325"
    assert point["geocodeRequestUrl"] == "https://nominatim.openstreetmap.org/reverse?lat=-25.5982063&lon=-54.5841325"
    assert point["localityData"] == {"districtName": "Vila Yolanda", "countryName": "Brasil"}


def test_failed_lookup_serializes_as_null(client, monkeypatch):
    monkeypatch.setattr(timeline, "_nominatim_service", FakeNominatimService(locality=None))

    body = client.post("/parse-timeline", json=SAMPLE_DOCUMENT).json()

    assert body["points"][0]["localityData"] is None


def test_unrecognized_document_yields_no_points(client, fake_service):
    response = client.post("/parse-timeline", json={"something": "else"})

    assert response.status_code == 200
    assert response.json() == {"count": 0, "points": []}
    assert fake_service.calls == [[]]


DEEPLY_NESTED_BODY = b"[" * 100000 + b"]" * 100000
HUGE_INTEGER_BODY = b'{"timelineEdits": [' + b"9" * 5000 + b"]}"


@pytest.mark.parametrize(
    "content",
    [
        b"",
        b"{}",
        b"[]",
        b"null",
        b"{not json",
        b"\xff\xfe",
        pytest.param(DEEPLY_NESTED_BODY, id="deeply-nested"),
        pytest.param(HUGE_INTEGER_BODY, id="huge-integer"),
    ],
)
def test_empty_or_invalid_body_is_rejected(client, fake_service, content):
    response = client.post("/parse-timeline", content=content, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"detail": "Request body is empty or not valid JSON"}
    assert fake_service.calls == []


def test_oversized_body_is_rejected(client, fake_service, monkeypatch):
    monkeypatch.setattr(settings, "MAX_BODY_SIZE", 16)

    response = client.post("/parse-timeline", json=SAMPLE_DOCUMENT)

    assert response.status_code == 413
    assert fake_service.calls == []


def test_pipeline_failure_returns_server_error(client, monkeypatch):
    monkeypatch.setattr(timeline, "_nominatim_service", FakeNominatimService(error=RuntimeError("geocoder exploded")))

    response = client.post("/parse-timeline", json=SAMPLE_DOCUMENT)

    assert response.status_code == 500
    assert response.json() == {"detail": {"error": "Internal server error", "message": "geocoder exploded"}}


def test_get_nominatim_service_is_cached(monkeypatch):
    monkeypatch.setattr(timeline, "_nominatim_service", None)

    first = timeline.get_nominatim_service()

    assert first is timeline.get_nominatim_service()
    assert first.timeout == settings.GEOCODE_TIMEOUT_SECONDS
