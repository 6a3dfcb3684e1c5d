import base64
import json

import httpx
import pytest

from app.effects.registry import registry
from app.errors import ConfigurationError, MediaFetchError, UpstreamError
from app.jobs.models import TaskRecord
from app.jobs.worker import EffectWorker

from fakes import (
    SOURCE_IMAGE_BYTES,
    FakeMediaStore,
    RecordingVendor,
    binary_reply,
    json_reply,
    make_vendor,
    text_reply,
)

ANIME_PARAMS = {"imageUrl": "https://example.com/a.jpg", "style": "ghibli"}
KISS_PARAMS = {
    "firstImageUrl": "https://example.com/1.jpg",
    "secondImageUrl": "https://example.com/2.jpg",
    "mode": "pro",
    "duration": 5,
}


async def _run(effect, params, respond, media_store=None, api_key="test-key"):
    spec = registry.get(effect)
    vendor = RecordingVendor(respond)
    client = make_vendor(vendor, api_key=api_key)
    worker = EffectWorker(client, media_store)
    try:
        result = await worker.run(TaskRecord(effect=spec.slug), spec, params)
    finally:
        await client.aclose()
    return result, vendor


@pytest.mark.asyncio
async def test_json_result_url_is_extracted():
    result, vendor = await _run(
        "anime-filter", ANIME_PARAMS, json_reply({"images": [{"url": "https://cdn/x.jpg"}]})
    )

    assert result == "https://cdn/x.jpg"
    request = vendor.requests[0]
    assert request.url.path == "/v1/gpt-image-1-edit"
    assert request.headers["authorization"] == "Bearer test-key"
    assert json.loads(request.content)["image_urls"] == ["https://example.com/a.jpg"]


@pytest.mark.asyncio
async def test_json_without_result_field_fails():
    with pytest.raises(UpstreamError) as exc:
        await _run("anime-filter", ANIME_PARAMS, json_reply({"images": []}))

    assert "missing imageUrl" in str(exc.value)


@pytest.mark.asyncio
async def test_non_success_status_reports_code_and_body():
    with pytest.raises(UpstreamError) as exc:
        await _run("anime-filter", ANIME_PARAMS, text_reply("rate limited", status_code=503))

    assert exc.value.status_code == 503
    assert str(exc.value) == "Segmind API error (503): rate limited"


@pytest.mark.asyncio
async def test_non_success_status_prefers_json_error_field():
    with pytest.raises(UpstreamError) as exc:
        await _run("ai-kiss", KISS_PARAMS, json_reply({"error": "Insufficient credits"}, status_code=402))

    assert str(exc.value) == "Segmind API error (402): Insufficient credits"


@pytest.mark.asyncio
async def test_unsupported_content_type_echoes_bounded_body():
    html = "<html>" + "x" * 2000 + "</html>"
    with pytest.raises(UpstreamError) as exc:
        await _run("anime-filter", ANIME_PARAMS, text_reply(html, content_type="text/html"))

    message = str(exc.value)
    assert message.startswith("Unsupported content type: text/html")
    assert len(message) < 600


@pytest.mark.asyncio
async def test_anime_filter_treats_binary_as_unsupported():
    with pytest.raises(UpstreamError):
        await _run("anime-filter", ANIME_PARAMS, binary_reply(b"\xff\xd8", "image/jpeg"))


@pytest.mark.asyncio
async def test_inline_media_is_fetched_and_base64_encoded(fake_storage):
    result, vendor = await _run(
        "ai-kiss", KISS_PARAMS, json_reply({"video": [{"url": "https://cdn/kiss.mp4"}]}), fake_storage
    )

    assert result == "https://cdn/kiss.mp4"
    assert [str(r.url) for r in vendor.media_requests] == [
        "https://example.com/1.jpg",
        "https://example.com/2.jpg",
    ]
    payload = json.loads(vendor.requests[0].content)
    expected = base64.b64encode(SOURCE_IMAGE_BYTES).decode()
    assert payload["first_reference_image"] == expected
    assert payload["second_reference_image"] == expected
    assert vendor.requests[0].headers["x-api-key"] == "test-key"
    assert fake_storage.uploads == []


@pytest.mark.asyncio
async def test_binary_artifact_is_uploaded(fake_storage):
    result, _ = await _run("ai-kiss", KISS_PARAMS, binary_reply(b"mp4-bytes", "video/mp4"), fake_storage)

    folder, name, content_type, size = fake_storage.uploads[0]
    assert folder == "ai-kiss-videos"
    assert content_type == "video/mp4"
    assert size == len(b"mp4-bytes")
    assert result == f"https://storage.test/ai-kiss-videos/{name}"


@pytest.mark.asyncio
async def test_upload_failure_falls_back_to_data_url():
    storage = FakeMediaStore(fail=True)

    result, _ = await _run("ai-kiss", KISS_PARAMS, binary_reply(b"mp4-bytes", "video/mp4"), storage)

    assert result == "data:video/mp4;base64," + base64.b64encode(b"mp4-bytes").decode()


@pytest.mark.asyncio
async def test_missing_storage_inlines_artifact():
    result, _ = await _run("music-generator", {
        "genres": "pop", "lyrics": "la", "duration": 60, "lyricsStrength": 1,
        "pitchShift": 4, "steps": 50, "cfg": 4, "seed": None,
    }, binary_reply(b"ID3", "audio/mpeg"))

    assert result.startswith("data:audio/mpeg;base64,")


@pytest.mark.asyncio
async def test_celebrity_selfie_jpeg_is_inlined_not_uploaded(fake_storage):
    params = {"imageUrl": "https://example.com/a.jpg", "celebrity": "brad_pitt", "landmark": "big_ben"}

    result, _ = await _run("celebrity-selfie", params, binary_reply(b"\xff\xd8jpeg", "image/jpeg"), fake_storage)

    assert result.startswith("data:image/jpeg;base64,")
    assert fake_storage.uploads == []


@pytest.mark.asyncio
async def test_missing_api_key_is_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        await _run("anime-filter", ANIME_PARAMS, json_reply({}), api_key=None)

    assert "SEGMIND_API_KEY" in str(exc.value)


@pytest.mark.asyncio
async def test_source_media_failure_is_reported():
    def handler(request):
        if request.url.host == "example.com":
            return httpx.Response(404)
        return httpx.Response(200, json={"video": [{"url": "https://cdn/x.mp4"}]})

    spec = registry.get("jellycat-effect")
    client = make_vendor(handler)
    worker = EffectWorker(client)
    try:
        with pytest.raises(MediaFetchError) as exc:
            await worker.run(
                TaskRecord(effect=spec.slug),
                spec,
                {"imageUrl": "https://example.com/missing.jpg", "mode": "pro", "duration": 5},
            )
    finally:
        await client.aclose()

    assert "404" in str(exc.value)


@pytest.mark.asyncio
async def test_network_error_becomes_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc:
        await _run("muscle-surge", {
            "imageUrl": "https://example.com/a.jpg", "duration": 5, "quality": "540p",
            "seed": 1, "motionMode": "normal",
        }, handler)

    assert "connection refused" in str(exc.value)


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [302, 304])
async def test_non_2xx_source_media_is_rejected(status_code):
    def handler(request):
        if request.url.host == "example.com":
            return httpx.Response(status_code, content=b"<html>moved</html>", headers={"location": "/elsewhere"})
        return httpx.Response(200, json={"video": [{"url": "https://cdn/x.mp4"}]})

    client = make_vendor(handler)
    try:
        with pytest.raises(MediaFetchError) as exc:
            await client.fetch_base64("https://example.com/a.jpg")
    finally:
        await client.aclose()

    assert f"HTTP {status_code}" in str(exc.value)
