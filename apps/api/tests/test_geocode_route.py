import pytest
from fastapi.testclient import TestClient

from burpp.geo import GeoPoint
from burpp.main import app
from burpp.providers import get_geocoder
from conftest import StubGeocoder


@pytest.fixture
def use_geocoder():
    def _use(geocoder):
        app.dependency_overrides[get_geocoder] = lambda: geocoder
        return TestClient(app)

    yield _use
    app.dependency_overrides.clear()


def test_resolves_zip(use_geocoder):
    client = use_geocoder(StubGeocoder({"10001": GeoPoint(40.75, -73.99)}))
    r = client.post("/geocode", json={"zipCode": "10001"})
    assert r.status_code == 200
    assert r.json() == {"lat": 40.75, "lng": -73.99}


def test_no_match_returns_nulls(use_geocoder):
    client = use_geocoder(StubGeocoder({}))
    r = client.post("/geocode", json={"zipCode": "00000"})
    assert r.status_code == 200
    assert r.json() == {"lat": None, "lng": None}


@pytest.mark.parametrize("payload", [{}, {"zipCode": ""}, {"zipCode": "   "}])
def test_missing_zip_is_a_bad_request(use_geocoder, payload):
    client = use_geocoder(StubGeocoder({}))
    assert client.post("/geocode", json=payload).status_code == 400


def test_provider_failure_is_a_server_error(use_geocoder):
    client = use_geocoder(StubGeocoder(fail=True))
    r = client.post("/geocode", json={"zipCode": "10001"})
    assert r.status_code == 500
