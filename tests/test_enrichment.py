import httpx
import pytest

from skystream.ingestors.enrichment import PhotoIngestor, TrackHistoryIngestor


@pytest.mark.anyio
async def test_track_history_parses_path():
    payload = {
        "icao24": "abc123",
        "startTime": 1714760000,
        "endTime": 1714765200,
        "path": [
            [1714760000, 51.47, -0.45, 0.0, 270.0, False],
            [1714761000, 52.0, -3.0, 10000.0, 280.0, False],
            [1714762000, None, None, 10000.0, 280.0, False],
        ],
    }

    def handler(request: httpx.Request):
        assert request.url.params["icao24"] == "abc123"
        assert request.url.params["time"] == "0"
        return httpx.Response(200, json=payload)

    ingestor = TrackHistoryIngestor(
        base_url="https://example.test/tracks", transport=httpx.MockTransport(handler)
    )

    track = await ingestor.get_track("abc123")

    assert [(p.lat, p.lon) for p in track] == [(51.47, -0.45), (52.0, -3.0)]
    assert track[1].alt == 10000.0
    assert track[0].time == 1714760000


@pytest.mark.anyio
@pytest.mark.parametrize("status_code", [403, 404, 500])
async def test_track_history_returns_empty_on_error(status_code):
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code))
    ingestor = TrackHistoryIngestor(base_url="https://example.test/tracks", transport=transport)

    assert await ingestor.get_track("abc123") == []


@pytest.mark.anyio
async def test_track_history_returns_empty_on_transport_error():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("refused", request=request)

    ingestor = TrackHistoryIngestor(
        base_url="https://example.test/tracks", transport=httpx.MockTransport(handler)
    )

    assert await ingestor.get_track("abc123") == []


@pytest.mark.anyio
async def test_photo_lookup_returns_thumbnail():
    payload = {
        "photos": [
            {"thumbnail_large": {"src": "https://cdn.example.test/abc123.jpg"}},
        ]
    }

    def handler(request: httpx.Request):
        assert request.url.path == "/pub/photos/hex/abc123"
        return httpx.Response(200, json=payload)

    ingestor = PhotoIngestor(
        base_url="https://example.test/pub/photos/hex/",
        transport=httpx.MockTransport(handler),
    )

    assert await ingestor.get_photo_url("abc123") == "https://cdn.example.test/abc123.jpg"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"photos": []}),
        httpx.Response(200, json={"photos": [{"thumbnail": {}}]}),
        httpx.Response(200, text="not json"),
        httpx.Response(502),
    ],
)
async def test_photo_lookup_returns_none_on_failure(response):
    ingestor = PhotoIngestor(
        base_url="https://example.test/pub/photos/hex",
        transport=httpx.MockTransport(lambda request: response),
    )

    assert await ingestor.get_photo_url("abc123") is None
