import pytest
from fastapi.testclient import TestClient

from app.api.v1.materials import get_materials_service
from app.core.errors import UpstreamError
from app.core.llm.client import LLMClient
from app.core.llm.providers.base import BaseLLMProvider
from app.config import settings
from app.core.materials.service import MaterialsService
from app.main import app

client = TestClient(app)

DESCRIPTION = "Annual tech conference, 200 attendees, March 2025"


class FakeProvider(BaseLLMProvider):
    name = "fake"

    def __init__(self):
        self.prompts = []
        self.fail_on = None

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.fail_on and self.fail_on in prompt:
            raise UpstreamError("Gemini request failed", detail="ServiceUnavailable: 503 model overloaded")
        return f"generated #{len(self.prompts)}"


@pytest.fixture(autouse=True)
def provider():
    fake = FakeProvider()
    app.dependency_overrides[get_materials_service] = lambda: MaterialsService(LLMClient(fake))
    yield fake
    app.dependency_overrides.clear()


@pytest.mark.parametrize(
    "path,field",
    [
        ("/api/gemini/generate-event-plan", "eventPlan"),
        ("/api/gemini/generate-poster", "posterContent"),
        ("/api/gemini/generate-email", "emailDraft"),
        ("/api/gemini/generate-caption", "instagramCaption"),
    ],
)
def test_per_kind_success_envelope(path, field, provider):
    res = client.post(path, json={"description": DESCRIPTION, "language": "hindi"})

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert set(body["data"]) == {field, "language", "timestamp"}
    assert body["data"][field] == "generated #1"
    assert body["data"]["language"] == "hindi"
    assert len(provider.prompts) == 1


@pytest.mark.parametrize(
    "path",
    [
        "/api/gemini/generate-event-plan",
        "/api/gemini/generate-poster",
        "/api/gemini/generate-email",
        "/api/gemini/generate-caption",
        "/api/gemini/generate-all",
    ],
)
@pytest.mark.parametrize("body", [None, {}, {"description": ""}, {"description": "   ", "language": "hindi"}])
def test_missing_description_is_400(path, body, provider):
    res = client.post(path, json=body)

    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Event description is required"}
    assert provider.prompts == []


def test_caption_scenario_prompt(provider):
    res = client.post("/api/gemini/generate-caption", json={"description": DESCRIPTION})

    assert res.status_code == 200
    assert res.json()["data"]["language"] == "english"
    prompt = provider.prompts[0]
    assert DESCRIPTION in prompt
    assert "Please write in English." in prompt


def test_email_recipients_forwarded(provider):
    client.post("/api/gemini/generate-email", json={"description": DESCRIPTION, "recipients": "alumni"})
    assert "Recipients: alumni" in provider.prompts[0]


def test_upstream_failure_is_500_with_detail(provider):
    provider.fail_on = "expert event planner"
    res = client.post("/api/gemini/generate-event-plan", json={"description": DESCRIPTION})

    assert res.status_code == 500
    assert res.json() == {
        "success": False,
        "message": "Failed to generate event plan",
        "error": "ServiceUnavailable: 503 model overloaded",
    }


def test_same_input_same_envelope_shape():
    first = client.post("/api/gemini/generate-poster", json={"description": DESCRIPTION}).json()
    second = client.post("/api/gemini/generate-poster", json={"description": DESCRIPTION}).json()

    assert first["data"]["posterContent"] != second["data"]["posterContent"]
    assert set(first) == set(second)
    assert set(first["data"]) == set(second["data"])


def test_generate_all_success(provider):
    res = client.post("/api/gemini/generate-all", json={"description": DESCRIPTION})

    assert res.status_code == 200
    data = res.json()["data"]
    assert set(data) == {
        "eventPlan", "posterContent", "emailDraft", "instagramCaption", "language", "timestamp",
    }
    assert all(data[key] for key in ("eventPlan", "posterContent", "emailDraft", "instagramCaption"))
    assert len(provider.prompts) == 4


def test_generate_all_is_all_or_nothing(provider):
    provider.fail_on = "Instagram"
    res = client.post("/api/gemini/generate-all", json={"description": DESCRIPTION})

    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Failed to generate marketing materials"
    assert "data" not in body


@pytest.fixture
def unconfigured_gemini(monkeypatch):
    app.dependency_overrides.pop(get_materials_service, None)
    monkeypatch.setattr(settings, "LLM_PROVIDER", "gemini")
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)


def test_blank_description_is_400_even_without_a_provider(unconfigured_gemini):
    res = client.post("/api/gemini/generate-event-plan", json={"description": ""})

    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Event description is required"}


@pytest.mark.parametrize(
    "path,label",
    [
        ("/api/gemini/generate-caption", "Instagram caption"),
        ("/api/gemini/generate-all", "marketing materials"),
    ],
)
def test_provider_init_failure_is_500_envelope(unconfigured_gemini, path, label):
    res = client.post(path, json={"description": DESCRIPTION})

    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert body["message"] == f"Failed to generate {label}"
    assert "GEMINI_API_KEY is not configured" in body["error"]
