import httpx
import pytest

from src.greenpath.models.domain import Coordinate
from src.greenpath.services.air_quality.waqi_client import WAQIClient
from src.greenpath.services.errors import AirQualityTokenMissingError, ProviderUnavailableError
from src.greenpath.services.geocoding.nominatim_client import NominatimClient
from src.greenpath.services.routing.osrm_client import OSRMClient, check_health

SOURCE = Coordinate(latitude=26.8318, longitude=80.9231)
DESTINATION = Coordinate(latitude=26.85, longitude=80.946)


def _transport(handler):
    seen: list[httpx.Request] = []

    def wrapped(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return httpx.MockTransport(wrapped), seen


def test_osrm_alternatives_parses_geojson_routes():
    payload = {
        "code": "Ok",
        "routes": [
            {"distance": 5230.4, "geometry": {"coordinates": [[80.9231, 26.8318], [80.946, 26.85]]}},
            {"distance": 6100.0, "geometry": {"coordinates": [[80.9231, 26.8318], [80.93, 26.84], [80.946, 26.85]]}},
        ],
    }
    transport, seen = _transport(lambda request: httpx.Response(200, json=payload))
    client = OSRMClient(base_url="http://osrm.test", transport=transport)

    routes = client.alternatives(SOURCE, DESTINATION)

    assert [route.distance_meters for route in routes] == [5230.4, 6100.0]
    assert routes[0].geometry[0] == (80.9231, 26.8318)
    request = seen[0]
    assert request.url.path == "/route/v1/driving/80.9231,26.8318;80.946,26.85"
    assert request.url.params["alternatives"] == "true"
    assert request.url.params["geometries"] == "geojson"


def test_osrm_no_route_is_empty():
    transport, _ = _transport(lambda request: httpx.Response(400, json={"code": "NoRoute", "message": "Impossible route"}))
    client = OSRMClient(base_url="http://osrm.test", transport=transport)

    assert client.alternatives(SOURCE, DESTINATION) == []


def test_osrm_server_error_is_provider_unavailable():
    transport, _ = _transport(lambda request: httpx.Response(502, text="bad gateway"))
    client = OSRMClient(base_url="http://osrm.test", transport=transport)

    with pytest.raises(ProviderUnavailableError) as excinfo:
        client.alternatives(SOURCE, DESTINATION)

    assert excinfo.value.provider == "Routing"
    assert "bad gateway" not in excinfo.value.message


def test_osrm_timeout_is_provider_unavailable():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    transport, _ = _transport(handler)
    client = OSRMClient(base_url="http://osrm.test", transport=transport)

    with pytest.raises(ProviderUnavailableError):
        client.alternatives(SOURCE, DESTINATION)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>proxy error</html>"),
        httpx.Response(200, json={"routes": []}),
        httpx.Response(200, json=[{"code": "Ok"}]),
        httpx.Response(200, json={"code": "InvalidQuery", "message": "Query string malformed"}),
    ],
)
def test_osrm_unusable_payload_is_provider_unavailable(response):
    transport, _ = _transport(lambda request: response)
    client = OSRMClient(base_url="http://osrm.test", transport=transport)

    with pytest.raises(ProviderUnavailableError) as excinfo:
        client.alternatives(SOURCE, DESTINATION)

    assert excinfo.value.provider == "Routing"


def test_osrm_ok_without_routes_is_empty():
    transport, _ = _transport(lambda request: httpx.Response(200, json={"code": "Ok", "routes": []}))
    client = OSRMClient(base_url="http://osrm.test", transport=transport)

    assert client.alternatives(SOURCE, DESTINATION) == []


def test_osrm_health_check():
    transport, _ = _transport(lambda request: httpx.Response(200, json={"code": "Ok", "routes": []}))
    assert check_health("http://osrm.test", transport=transport) is True

    transport, _ = _transport(lambda request: httpx.Response(500))
    assert check_health("http://osrm.test", transport=transport) is False


def test_nominatim_search_appends_region_suffix():
    transport, seen = _transport(lambda request: httpx.Response(200, json=[{"lat": "26.8318", "lon": "80.9231"}]))
    client = NominatimClient(base_url="http://geo.test", region_suffix="Lucknow, India", transport=transport)

    results = client.search("Charbagh")

    assert results == [Coordinate(latitude=26.8318, longitude=80.9231)]
    request = seen[0]
    assert request.url.path == "/search"
    assert request.url.params["q"] == "Charbagh, Lucknow, India"
    assert request.url.params["limit"] == "1"
    assert request.headers["User-Agent"]


def test_nominatim_search_without_results():
    transport, _ = _transport(lambda request: httpx.Response(200, json=[]))
    client = NominatimClient(base_url="http://geo.test", transport=transport)

    assert client.search("Nowhere") == []


@pytest.mark.parametrize("payload", [{"error": "Unable to geocode"}, "busy"])
def test_nominatim_search_non_list_payload_is_provider_unavailable(payload):
    transport, _ = _transport(lambda request: httpx.Response(200, json=payload))
    client = NominatimClient(base_url="http://geo.test", transport=transport)

    with pytest.raises(ProviderUnavailableError) as excinfo:
        client.search("Charbagh")

    assert excinfo.value.provider == "Geocoding"


def test_nominatim_reverse_prefers_suburb_then_neighbourhood_then_road():
    responses = iter(
        [
            {"address": {"suburb": "Hazratganj", "road": "MG Marg"}},
            {"address": {"neighbourhood": "Aminabad", "road": "Latouche Road"}},
            {"address": {"road": "Shahnajaf Road"}},
            {"error": "Unable to geocode"},
        ]
    )
    transport, _ = _transport(lambda request: httpx.Response(200, json=next(responses)))
    client = NominatimClient(base_url="http://geo.test", transport=transport)

    names = [client.reverse(26.85, 80.94) for _ in range(4)]

    assert names == ["Hazratganj", "Aminabad", "Shahnajaf Road", ""]


def test_nominatim_failure_is_provider_unavailable():
    transport, _ = _transport(lambda request: httpx.Response(503))
    client = NominatimClient(base_url="http://geo.test", transport=transport)

    with pytest.raises(ProviderUnavailableError):
        client.search("Charbagh")


def test_waqi_requires_token_before_calling_out():
    transport, seen = _transport(lambda request: httpx.Response(200, json={}))
    client = WAQIClient(token="", base_url="http://waqi.test", transport=transport)

    with pytest.raises(AirQualityTokenMissingError) as excinfo:
        client.sample(SOURCE)

    assert excinfo.value.message == "Air-quality token missing"
    assert seen == []


def test_waqi_reads_aqi():
    transport, seen = _transport(lambda request: httpx.Response(200, json={"status": "ok", "data": {"aqi": 142}}))
    client = WAQIClient(token="secret", base_url="http://waqi.test", transport=transport)

    sample = client.sample(SOURCE)

    assert sample.aqi == 142
    assert seen[0].url.path == "/feed/geo:26.8318;80.9231/"
    assert seen[0].url.params["token"] == "secret"


@pytest.mark.parametrize(
    "payload",
    [
        {"status": "ok", "data": {"aqi": "-"}},
        {"status": "ok", "data": {}},
    ],
)
def test_waqi_falls_back_to_default_without_reading(payload):
    transport, _ = _transport(lambda request: httpx.Response(200, json=payload))
    client = WAQIClient(token="secret", base_url="http://waqi.test", default_aqi=100, transport=transport)

    assert client.sample(SOURCE).aqi == 100


@pytest.mark.parametrize(
    "payload",
    [
        {"status": "error", "data": "Invalid key"},
        {"status": "error", "data": "Unknown station"},
        ["not", "a", "feed"],
    ],
)
def test_waqi_error_status_is_provider_unavailable(payload):
    transport, _ = _transport(lambda request: httpx.Response(200, json=payload))
    client = WAQIClient(token="bad", base_url="http://waqi.test", default_aqi=100, transport=transport)

    with pytest.raises(ProviderUnavailableError) as excinfo:
        client.sample(SOURCE)

    assert excinfo.value.provider == "Air-quality"
    assert "Invalid key" not in excinfo.value.message


def test_waqi_outage_is_provider_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    transport, _ = _transport(handler)
    client = WAQIClient(token="secret", base_url="http://waqi.test", transport=transport)

    with pytest.raises(ProviderUnavailableError) as excinfo:
        client.sample(SOURCE)

    assert not isinstance(excinfo.value, AirQualityTokenMissingError)
