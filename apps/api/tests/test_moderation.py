import json

import httpx
import pytest

from burpp.providers import ModerationServiceError, OpenAICompatibleModerationProvider


def provider(handler) -> OpenAICompatibleModerationProvider:
    return OpenAICompatibleModerationProvider(
        base_url="https://llm.test",
        api_key="sk-test",
        model="gpt-4o-mini",
        transport=httpx.MockTransport(handler),
    )


def router(flagged=False, verdict="GENUINE", seen=None):
    def handle(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.url.path.endswith("/moderations"):
            return httpx.Response(200, json={"results": [{"flagged": flagged, "categories": {"harassment": flagged}}]})
        if request.url.path.endswith("/chat/completions"):
            return httpx.Response(200, json={"choices": [{"message": {"content": verdict}}]})
        return httpx.Response(404)

    return handle


async def test_genuine_review_is_approved():
    seen = []
    result = await provider(router(seen=seen)).moderate("Great plumber, fixed the leak fast.")
    assert result.approved
    assert [r.url.path for r in seen] == ["/v1/moderations", "/v1/chat/completions"]
    assert seen[0].headers["Authorization"] == "Bearer sk-test"
    chat = json.loads(seen[1].content)
    assert chat["model"] == "gpt-4o-mini"
    assert chat["messages"][1]["content"] == "Great plumber, fixed the leak fast."


async def test_flagged_content_short_circuits():
    seen = []
    result = await provider(router(flagged=True, seen=seen)).moderate("...")
    assert not result.approved
    assert result.flagged
    assert result.reason == "Content violates community guidelines"
    assert result.categories == {"harassment": True}
    assert len(seen) == 1


@pytest.mark.parametrize("verdict,reason", [
    ("SPAM", "Review appears to be spam"),
    (" inappropriate\n", "Review contains inappropriate content"),
])
async def test_classifier_rejections(verdict, reason):
    result = await provider(router(verdict=verdict)).moderate("buy now!!!")
    assert not result.approved
    assert result.reason == reason


async def test_api_outage_raises():
    def down(request):
        return httpx.Response(502)

    with pytest.raises(ModerationServiceError):
        await provider(down).moderate("hello")


def test_base_url_gets_version_prefix_once():
    assert provider(router()).base_url == "https://llm.test/v1"
    p = OpenAICompatibleModerationProvider("https://llm.test/v1/", None, "m")
    assert p.base_url == "https://llm.test/v1"
