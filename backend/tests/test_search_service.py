import httpx
import pytest
from answer_engine.errors import UpstreamError
from answer_engine.services.search_service import SearchService


def make_service(settings, handler):
    return SearchService(settings, transport=httpx.MockTransport(handler))


async def test_sends_query_and_result_count(settings):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, json={"organic_results": []})

    service = make_service(settings, handler)
    await service.search("speed of light", location="Austin, Texas")

    request = captured["request"]
    assert request.method == "GET"
    assert request.url.host == "serpapi.com"
    assert request.url.params["engine"] == "google"
    assert request.url.params["q"] == "speed of light"
    assert request.url.params["api_key"] == "serp-test-key"
    assert request.url.params["num"] == "8"
    assert request.url.params["location"] == "Austin, Texas"


async def test_location_is_not_sent_when_absent(settings):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["params"] = request.url.params
        return httpx.Response(200, json={})

    await make_service(settings, handler).search("query")

    assert "location" not in captured["params"]


async def test_maps_results_to_sources(settings):
    payload = {
        "organic_results": [
            {
                "title": "Speed of light",
                "link": "https://en.wikipedia.org/wiki/Speed_of_light",
                "snippet": "299,792,458 metres per second",
                "favicon": "https://en.wikipedia.org/favicon.ico",
            },
            {"link": "https://physics.example.com/c"},
        ]
    }
    service = make_service(settings, lambda request: httpx.Response(200, json=payload))

    sources = await service.search("speed of light")

    assert [s.id for s in sources] == ["serp-1", "serp-2"]
    assert sources[0].title == "Speed of light"
    assert sources[0].description == "299,792,458 metres per second"
    assert sources[0].favicon == "https://en.wikipedia.org/favicon.ico"
    assert sources[1].title == "No title"
    assert sources[1].description == "No description available"
    assert sources[1].url == "https://physics.example.com/c"
    assert sources[1].favicon == "https://www.google.com/s2/favicons?domain=physics.example.com&sz=32"


async def test_drops_results_without_url_and_keeps_order(settings):
    payload = {
        "organic_results": [
            {"title": "first", "link": "https://a.example.com"},
            {"title": "no link"},
            {"title": "empty link", "link": ""},
            {"title": "last", "link": "https://b.example.com"},
        ]
    }
    service = make_service(settings, lambda request: httpx.Response(200, json=payload))

    sources = await service.search("query")

    assert [s.title for s in sources] == ["first", "last"]
    assert [s.url for s in sources] == ["https://a.example.com", "https://b.example.com"]


async def test_non_string_fields_fall_back_per_result(settings):
    payload = {
        "organic_results": [
            {"title": 42, "link": "https://a.example.com", "snippet": ["x"], "favicon": {"src": "x"}},
            {"title": "ok", "link": "https://b.example.com", "snippet": "fine"},
        ]
    }
    service = make_service(settings, lambda request: httpx.Response(200, json=payload))

    sources = await service.search("query")

    assert [s.url for s in sources] == ["https://a.example.com", "https://b.example.com"]
    assert sources[0].title == "No title"
    assert sources[0].description == "No description available"
    assert sources[0].favicon == "https://www.google.com/s2/favicons?domain=a.example.com&sz=32"
    assert sources[1].title == "ok"


async def test_unparseable_link_has_no_favicon(settings):
    payload = {"organic_results": [{"title": "relative", "link": "not-a-url"}]}
    service = make_service(settings, lambda request: httpx.Response(200, json=payload))

    sources = await service.search("query")

    assert sources[0].url == "not-a-url"
    assert sources[0].favicon is None


@pytest.mark.parametrize("payload", [{}, {"organic_results": None}, {"organic_results": "oops"}])
async def test_missing_results_returns_empty_list(settings, payload):
    service = make_service(settings, lambda request: httpx.Response(200, json=payload))

    assert await service.search("query") == []


async def test_http_error_raises_upstream_error(settings):
    service = make_service(settings, lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(UpstreamError) as exc_info:
        await service.search("query")
    assert exc_info.value.message == "Failed to perform web search"


async def test_provider_error_field_raises_upstream_error(settings):
    service = make_service(settings, lambda request: httpx.Response(200, json={"error": "Invalid API key."}))

    with pytest.raises(UpstreamError) as exc_info:
        await service.search("query")
    assert exc_info.value.message == "Failed to perform web search"


async def test_network_failure_hides_transport_detail(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await make_service(settings, handler).search("query")

    assert exc_info.value.message == "Failed to perform web search"
    assert "connection refused" not in exc_info.value.public_message
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
