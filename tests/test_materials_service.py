import asyncio

import pytest

from app.core.errors import UpstreamError, ValidationError
from app.core.llm.client import LLMClient
from app.core.llm.providers.base import BaseLLMProvider
from app.core.materials.schemas import MaterialKind
from app.core.materials.service import MaterialsService


class RecordingProvider(BaseLLMProvider):
    name = "recording"

    def __init__(self):
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        await asyncio.sleep(0)
        return f"text for: {prompt.splitlines()[0][:40]}"


class FailingPosterProvider(BaseLLMProvider):
    """Fails the poster call at once; every other call waits until cancelled."""
    name = "failing"

    def __init__(self):
        self.started = 0
        self.cancelled = 0

    async def generate(self, prompt):
        self.started += 1
        if "poster" in prompt:
            raise UpstreamError("Gemini request failed", detail="503 Service Unavailable")
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        return "never"


@pytest.fixture
def provider():
    return RecordingProvider()


@pytest.fixture
def service(provider):
    return MaterialsService(LLMClient(provider))


@pytest.mark.asyncio
async def test_event_plan_single_call(service, provider):
    result = await service.event_plan("Product launch", "hindi")

    assert len(provider.prompts) == 1
    assert "Product launch" in provider.prompts[0]
    assert result.kind is MaterialKind.EVENT_PLAN
    assert result.language == "hindi"
    assert result.text.startswith("text for:")
    assert result.to_payload()["eventPlan"] == result.text


@pytest.mark.asyncio
async def test_default_language_is_english(service):
    result = await service.poster("Charity run")
    payload = result.to_payload()
    assert payload["language"] == "english"
    assert payload["timestamp"].endswith("Z")


@pytest.mark.asyncio
async def test_email_and_caption_pass_extras(service, provider):
    await service.email("Gala dinner", recipients="board members")
    await service.caption("Gala dinner", style="playful")

    assert "Recipients: board members" in provider.prompts[0]
    assert "Style: playful" in provider.prompts[1]


@pytest.mark.asyncio
async def test_blank_description_never_calls_llm(service, provider):
    with pytest.raises(ValidationError):
        await service.caption("  ")
    with pytest.raises(ValidationError):
        await service.all_materials(None)
    assert provider.prompts == []


@pytest.mark.asyncio
async def test_all_materials_fans_out_four_quick_prompts(service, provider):
    result = await service.all_materials("Startup meetup", "hindi")

    assert len(provider.prompts) == 4
    assert all(p.startswith("Create ") for p in provider.prompts)
    assert all("Respond in Hindi" in p for p in provider.prompts)

    payload = result.to_payload()
    assert set(payload) == {
        "eventPlan", "posterContent", "emailDraft", "instagramCaption", "language", "timestamp",
    }
    assert payload["language"] == "hindi"
    assert "poster content" in payload["posterContent"]
    assert result.description == "Startup meetup"


@pytest.mark.asyncio
async def test_all_materials_fails_whole_and_cancels_pending():
    provider = FailingPosterProvider()
    service = MaterialsService(LLMClient(provider))

    with pytest.raises(UpstreamError, match="Gemini request failed"):
        await service.all_materials("Book fair")

    assert provider.started == 4
    assert provider.cancelled == 3
