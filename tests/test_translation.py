"""Tests for translation module (Layer 1e)."""

import asyncio

import httpx
import pytest

from bilingual_reader.translation import TranslationError, translate, with_translation


def _run(coro_factory, handler):
    """Run coro_factory(client) against a mock transport."""
    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await coro_factory(client)
    return asyncio.run(scenario())


def _ok(translated="Hello"):
    def handler(request):
        return httpx.Response(200, json={"responseData": {"translatedText": translated}})
    return handler


def test_translate_success():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"responseData": {"translatedText": "Hello"}})

    result = _run(lambda c: translate("안녕하세요", client=c), handler)
    assert result == "Hello"
    assert seen[0].url.params["q"] == "안녕하세요"
    assert seen[0].url.params["langpair"] == "ko|en"


def test_translate_custom_langpair():
    seen = []

    def handler(request):
        seen.append(request.url.params["langpair"])
        return httpx.Response(200, json={"responseData": {"translatedText": "안녕"}})

    _run(lambda c: translate("Hi", langpair="en|ko", client=c), handler)
    assert seen == ["en|ko"]


def test_translate_http_error():
    def handler(request):
        return httpx.Response(503)

    with pytest.raises(TranslationError):
        _run(lambda c: translate("안녕", client=c), handler)


def test_translate_missing_payload():
    def handler(request):
        return httpx.Response(200, json={"responseStatus": 403})

    with pytest.raises(TranslationError, match="empty response"):
        _run(lambda c: translate("안녕", client=c), handler)


def test_translate_transport_error():
    def handler(request):
        raise httpx.ConnectError("no route")

    with pytest.raises(TranslationError):
        _run(lambda c: translate("안녕", client=c), handler)


def test_with_translation_appends():
    result = _run(lambda c: with_translation("안녕하세요", client=c), _ok("Hello"))
    assert result == "안녕하세요\n\nHello"


def test_with_translation_falls_back(caplog):
    """Failure speaks the original text only."""
    def handler(request):
        return httpx.Response(500)

    result = _run(lambda c: with_translation("안녕하세요", client=c), handler)
    assert result == "안녕하세요"
    assert "speaking original text only" in caplog.text
