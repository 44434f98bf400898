"""Integration tests for the HTTP API (FastAPI TestClient, stubbed LLM provider)."""

import json

import pytest
from fastapi.testclient import TestClient

from vitae.api.app import CORS_HEADERS, create_app
from vitae.contexts.drafting.templates import seed_default_templates
from vitae.contexts.persistence import store as store_module
from vitae.contexts.persistence.store import PersistenceError
from vitae.utils.llm import MissingCredentialError

from conftest import ANALYSIS_PAYLOAD, ProviderFactory, StubProvider

DRAFT = {"personal": {"fullName": "Ada Lovelace"}, "experience": [], "education": [], "skills": []}


def make_client(store, provider=None, error=None):
    factory = ProviderFactory(provider, error)
    return TestClient(create_app(provider_factory=factory, store=store)), factory


@pytest.mark.integration
def test_analyzer_pass_through(store, analysis_reply):
    """A well-formed reply is returned unchanged with permissive CORS."""
    provider = StubProvider(f"```json\n{analysis_reply}\n```")
    client, _ = make_client(store, provider)

    response = client.post(
        "/ats-analyzer", json={"resumeText": "Python dev", "jobDescription": "Need Python"}
    )

    assert response.status_code == 200
    assert response.json() == ANALYSIS_PAYLOAD
    assert response.headers["access-control-allow-origin"] == "*"
    assert provider.calls == 1


@pytest.mark.integration
def test_analyzer_minimal_reply_passes_through(store):
    reply = {
        "score": 78,
        "keywordMatch": {"matched": ["React"], "missing": ["Vue"]},
        "formatIssues": [],
        "contentSuggestions": [],
        "overallFeedback": "ok",
    }
    client, _ = make_client(store, StubProvider(json.dumps(reply)))

    response = client.post(
        "/ats-analyzer", json={"resumeText": "React developer", "jobDescription": "React and Vue"}
    )

    assert response.status_code == 200
    assert response.json() == reply


@pytest.mark.integration
def test_analyzer_empty_resume_makes_no_upstream_call(store):
    provider = StubProvider("unused")
    client, factory = make_client(store, provider)

    response = client.post("/ats-analyzer", json={"resumeText": "", "jobDescription": "Need Python"})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing resume text or job description"}
    assert provider.calls == 0
    assert factory.created == 0


@pytest.mark.integration
def test_analyzer_missing_credential(store):
    client, _ = make_client(store, error=MissingCredentialError("GEMINI_API_KEY"))

    response = client.post("/ats-analyzer", json={"resumeText": "cv", "jobDescription": "job"})

    assert response.status_code == 500
    assert response.json() == {"error": "GEMINI_API_KEY environment variable not set"}


@pytest.mark.integration
def test_analyzer_upstream_failure(store):
    client, _ = make_client(store, StubProvider(error=RuntimeError("503 unavailable")))

    response = client.post("/ats-analyzer", json={"resumeText": "cv", "jobDescription": "job"})

    assert response.status_code == 500
    assert "503 unavailable" in response.json()["error"]


@pytest.mark.integration
def test_analyzer_unparseable_reply(store):
    client, _ = make_client(store, StubProvider("Score: 80. Looks good!"))

    response = client.post("/ats-analyzer", json={"resumeText": "cv", "jobDescription": "job"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to parse analysis results"}


@pytest.mark.integration
def test_analyzer_extract_text(store):
    client, _ = make_client(store, StubProvider("Jane Doe"))

    response = client.post(
        "/ats-analyzer",
        json={"action": "extractText", "fileContent": "data:application/pdf;base64,QUJD", "fileType": "pdf"},
    )

    assert response.status_code == 200
    assert response.json() == {"text": "Jane Doe", "success": True}


@pytest.mark.integration
def test_invalid_json_body(store):
    client, _ = make_client(store, StubProvider())

    response = client.post(
        "/ats-analyzer", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Request body must be valid JSON"}


@pytest.mark.integration
@pytest.mark.parametrize("path", ["/ats-analyzer", "/resume-ai-helper", "/resume-save"])
def test_options_short_circuit(store, path):
    client, factory = make_client(store, StubProvider())

    response = client.options(path)

    assert response.status_code == 200
    assert response.text == "ok"
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-headers"] == CORS_HEADERS["Access-Control-Allow-Headers"]
    assert factory.created == 0


@pytest.mark.integration
def test_browser_preflight(store):
    client, _ = make_client(store, StubProvider())

    response = client.options(
        "/resume-save",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.integration
def test_helper_skills_without_dedup(store):
    client, _ = make_client(store, StubProvider('["Python", "SQL"]'))

    response = client.post(
        "/resume-ai-helper", json={"section": "skills", "currentContent": ["Python"]}
    )

    assert response.status_code == 200
    assert response.json() == {"skills": ["Python", "SQL"]}


@pytest.mark.integration
def test_helper_comma_separated_skills_keep_existing(store):
    client, _ = make_client(store, StubProvider("React, TypeScript, Node.js"))

    response = client.post(
        "/resume-ai-helper", json={"section": "skills", "currentContent": ["React"]}
    )

    assert response.status_code == 200
    assert response.json() == {"skills": ["React", "TypeScript", "Node.js"]}


@pytest.mark.integration
def test_helper_suggestions_and_feedback(store):
    client, _ = make_client(store, StubProvider(json.dumps(["Tip one", "Tip two"])))

    suggestions = client.post(
        "/resume-ai-helper", json={"section": "summary-tips", "page": 1}
    ).json()["suggestions"]
    assert [s["content"] for s in suggestions] == ["Tip one", "Tip two"]

    response = client.post(
        "/resume-ai-helper",
        json={"action": "feedback", "suggestionId": suggestions[0]["id"], "feedback": 1},
    )
    assert response.json() == {"success": True}
    assert store.suggestion_rating(suggestions[0]["id"]) == 1


@pytest.mark.integration
def test_helper_feedback_without_credential(store):
    client, _ = make_client(store, error=MissingCredentialError("GEMINI_API_KEY"))

    response = client.post(
        "/resume-ai-helper", json={"action": "feedback", "suggestionId": "s1", "feedback": -1}
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}


@pytest.mark.integration
def test_save_and_duplicate_anonymous_saves(store):
    client, _ = make_client(store)
    payload = {"resumeData": DRAFT, "title": "Ada's Resume", "templateId": "modern-minimal"}

    first = client.post("/resume-save", json=payload)
    second = client.post("/resume-save", json=payload)

    assert first.status_code == second.status_code == 200
    body = first.json()
    assert body["success"] is True
    assert body["data"][0]["content"]["type"] == "resume"
    assert body["data"][0]["content"]["templateId"] == "modern-minimal"
    assert first.json()["resumeId"] != second.json()["resumeId"]
    assert len(store.list_resumes()) == 2


@pytest.mark.integration
def test_save_missing_data(store):
    client, _ = make_client(store)

    response = client.post("/resume-save", json={"resumeData": DRAFT})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Missing required data"}


@pytest.mark.integration
def test_save_store_failure(store, monkeypatch):
    def fail(*args, **kwargs):
        raise PersistenceError("Database operation failed", "resumes")

    monkeypatch.setattr(store, "insert_resume", fail)
    client, _ = make_client(store)

    response = client.post("/resume-save", json={"resumeData": DRAFT, "title": "Ada"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Database operation failed"}


@pytest.mark.integration
def test_templates_endpoint(store):
    client, _ = make_client(store)

    defaults = client.get("/resume-templates").json()
    assert [t["id"] for t in defaults] == ["classic-professional", "modern-minimal", "executive-premium"]

    seed_default_templates(store)
    stored = client.get("/resume-templates").json()
    assert {t["id"] for t in stored} == {t["id"] for t in defaults}
    assert all(t["created_at"] for t in stored)


@pytest.mark.integration
def test_templates_endpoint_serves_defaults_when_store_cannot_open(tmp_path, monkeypatch):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("")
    monkeypatch.setattr(store_module, "DB_PATH", blocker / "vitae.db")
    client = TestClient(create_app(provider_factory=ProviderFactory()))

    response = client.get("/resume-templates")

    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [
        "classic-professional",
        "modern-minimal",
        "executive-premium",
    ]


@pytest.mark.integration
def test_health(store):
    client, _ = make_client(store)
    assert client.get("/health").json()["status"] == "ok"
