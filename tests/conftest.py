"""Shared fixtures: a scripted LLM provider and tmp_path-backed stores."""

import json

import pytest

from vitae.contexts.persistence.store import ResumeStore
from vitae.contexts.session.local_storage import LocalStorage
from vitae.utils.llm import LLMProvider, LLMResponse

ANALYSIS_PAYLOAD = {
    "score": 72,
    "keywordMatch": {"matched": ["Python", "SQL"], "missing": ["Kubernetes"]},
    "formatIssues": ["Avoid tables"],
    "contentSuggestions": ["Quantify achievements"],
    "overallFeedback": "Solid match with a few gaps.",
    "sectionFeedback": {"skills": "Add cloud tooling"},
}


class StubProvider(LLMProvider):
    """LLMProvider that replays canned replies and records every prompt."""

    _provider_prefix = "stub"

    def __init__(self, replies=("ok",), error: Exception = None, model: str = "stub-model"):
        self._api_exception = RuntimeError
        self.replies = [replies] if isinstance(replies, str) else list(replies)
        self.error = error
        self.prompts = []
        self.settings = []
        self.update_model(model)

    def _call_api(self, user_prompt, settings, system_prompt):
        self.prompts.append(user_prompt)
        self.settings.append(settings)
        if self.error is not None:
            raise self.error
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        return LLMResponse(content=reply, model=self.model, input_tokens=0, output_tokens=0)

    @property
    def calls(self) -> int:
        return len(self.prompts)


class ProviderFactory:
    """Zero-argument provider factory that counts how often it is asked for a provider."""

    def __init__(self, provider: LLMProvider = None, error: Exception = None):
        self.provider = provider
        self.error = error
        self.created = 0

    def __call__(self) -> LLMProvider:
        self.created += 1
        if self.error is not None:
            raise self.error
        return self.provider


@pytest.fixture
def store(tmp_path):
    return ResumeStore(tmp_path / "vitae.db")


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def analysis_reply():
    return json.dumps(ANALYSIS_PAYLOAD)
