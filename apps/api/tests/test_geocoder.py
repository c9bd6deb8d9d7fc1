import httpx
import pytest

from burpp.geo import GeoPoint
from burpp.providers import GeocodingServiceError, InMemoryGeocodeCache, NominatimGeocoder
from burpp.providers.geocoding import normalize_location_query


class Recorder:
    """httpx MockTransport handler that replays queued responses."""

    def __init__(self, *responses: httpx.Response | Exception):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        r = self.responses.pop(0)
        if isinstance(r, Exception):
            raise r
        return r


def make_geocoder(recorder: Recorder, country_codes: str | None = None) -> NominatimGeocoder:
    return NominatimGeocoder(
        base_url="https://geo.test/",
        user_agent="burpp-test/1.0",
        cache=InMemoryGeocodeCache(),
        country_codes=country_codes,
        transport=httpx.MockTransport(recorder),
    )


def match(lat: str, lon: str) -> httpx.Response:
    return httpx.Response(200, json=[{"lat": lat, "lon": lon, "display_name": "x"}])


class TestNormalize:
    @pytest.mark.parametrize("raw,expected", [
        ("10001", "10001, USA"),
        (" 10001-1234 ", "10001-1234, USA"),
        ("Austin, TX", "Austin, TX"),
        ("1000", "1000"),
    ])
    def test_us_zip_gets_country_suffix(self, raw, expected):
        assert normalize_location_query(raw) == expected


class TestLookup:
    async def test_parses_first_match(self):
        rec = Recorder(match("40.7506", "-73.9972"))
        point = await make_geocoder(rec).lookup("10001")
        assert point == GeoPoint(40.7506, -73.9972)
        req = rec.requests[0]
        assert req.url.path == "/search"
        assert req.url.params["q"] == "10001, USA"
        assert req.url.params["format"] == "json"
        assert req.url.params["limit"] == "1"
        assert "countrycodes" not in req.url.params
        assert req.headers["User-Agent"] == "burpp-test/1.0"

    async def test_country_codes_are_forwarded(self):
        rec = Recorder(match("1", "2"))
        await make_geocoder(rec, country_codes="us").lookup("Austin")
        assert rec.requests[0].url.params["countrycodes"] == "us"

    async def test_empty_result_is_none(self):
        rec = Recorder(httpx.Response(200, json=[]))
        assert await make_geocoder(rec).lookup("nowhere") is None

    async def test_http_error_raises(self):
        rec = Recorder(httpx.Response(503))
        with pytest.raises(GeocodingServiceError):
            await make_geocoder(rec).lookup("10001")

    async def test_connection_error_raises(self):
        rec = Recorder(httpx.ConnectError("refused"))
        with pytest.raises(GeocodingServiceError):
            await make_geocoder(rec).lookup("10001")

    async def test_malformed_match_raises(self):
        rec = Recorder(httpx.Response(200, json=[{"lat": "abc", "lon": "1"}]))
        with pytest.raises(GeocodingServiceError):
            await make_geocoder(rec).lookup("10001")


class TestGeocode:
    async def test_second_call_is_served_from_cache(self):
        rec = Recorder(match("40.0", "-100.0"))
        geocoder = make_geocoder(rec)
        first = await geocoder.geocode("Lincoln, NE")
        second = await geocoder.geocode("Lincoln, NE")
        assert first == second == GeoPoint(40.0, -100.0)
        assert len(rec.requests) == 1

    async def test_no_match_is_cached(self):
        rec = Recorder(httpx.Response(200, json=[]))
        geocoder = make_geocoder(rec)
        assert await geocoder.geocode("nowhere") is None
        assert await geocoder.geocode("nowhere") is None
        assert len(rec.requests) == 1

    async def test_provider_failure_degrades_to_none_and_is_not_cached(self):
        rec = Recorder(httpx.Response(500), match("40.0", "-100.0"))
        geocoder = make_geocoder(rec)
        assert await geocoder.geocode("Lincoln, NE") is None
        assert await geocoder.geocode("Lincoln, NE") == GeoPoint(40.0, -100.0)
        assert len(rec.requests) == 2

    async def test_bypass_cache_refetches_and_refreshes(self):
        rec = Recorder(match("40.0", "-100.0"), match("41.0", "-101.0"))
        geocoder = make_geocoder(rec)
        await geocoder.geocode("Lincoln, NE")
        fresh = await geocoder.geocode("Lincoln, NE", bypass_cache=True)
        assert fresh == GeoPoint(41.0, -101.0)
        assert await geocoder.geocode("Lincoln, NE") == GeoPoint(41.0, -101.0)
        assert len(rec.requests) == 2
