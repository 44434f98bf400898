"""Unit tests for the ATS analyzer handlers."""

import pytest

from vitae.contexts.analysis.analyzer import (
    MISSING_INPUT_MESSAGE,
    ResponseParseError,
    analyze_resume,
    extract_document_text,
    handle_analyzer_request,
)
from vitae.contexts.analysis.prompts import EXTRACTION_WINDOW, build_extraction_prompt
from vitae.utils.llm import MissingCredentialError
from vitae.utils.validation import InputValidationError

from conftest import ANALYSIS_PAYLOAD, ProviderFactory, StubProvider


@pytest.mark.unit
def test_analyze_returns_payload_verbatim(analysis_reply):
    provider = StubProvider(analysis_reply)
    result = analyze_resume("Python developer", "Hiring Python devs", lambda: provider)

    assert result == ANALYSIS_PAYLOAD
    assert provider.calls == 1
    assert "Python developer" in provider.prompts[0]
    assert "Hiring Python devs" in provider.prompts[0]
    assert provider.settings[0].temperature == 0.7
    assert provider.settings[0].top_k == 40
    assert provider.settings[0].top_p == 0.95


@pytest.mark.unit
@pytest.mark.parametrize("resume_text, job_description", [("", "job"), ("resume", "  "), (None, "job")])
def test_analyze_validates_before_provider(resume_text, job_description):
    """Blank input fails before a provider is even built."""
    factory = ProviderFactory(error=MissingCredentialError("GEMINI_API_KEY"))

    with pytest.raises(InputValidationError) as exc_info:
        analyze_resume(resume_text, job_description, factory)

    assert exc_info.value.message == MISSING_INPUT_MESSAGE
    assert factory.created == 0


@pytest.mark.unit
def test_analyze_parse_failure():
    provider = StubProvider("I think the score is about 70.")

    with pytest.raises(ResponseParseError) as exc_info:
        analyze_resume("resume", "job", lambda: provider)

    assert exc_info.value.message == "Failed to parse analysis results"
    assert exc_info.value.reason


@pytest.mark.unit
def test_extract_text_without_type_returns_content():
    """Plain-text uploads are passed through without a model call."""
    factory = ProviderFactory(error=MissingCredentialError("GEMINI_API_KEY"))
    result = extract_document_text("Jane Doe\nEngineer", None, factory)

    assert result == {"text": "Jane Doe\nEngineer", "success": True}
    assert factory.created == 0


@pytest.mark.unit
def test_extract_text_strips_prefix_and_fences():
    provider = StubProvider("```\nJane Doe\nSoftware Engineer\n```")
    content = "data:application/pdf;base64," + "A" * (EXTRACTION_WINDOW + 500)

    result = extract_document_text(content, "pdf", lambda: provider)

    assert result == {"text": "Jane Doe\nSoftware Engineer", "success": True}
    prompt = provider.prompts[0]
    assert "data:application/pdf" not in prompt
    assert "A" * EXTRACTION_WINDOW in prompt
    assert "A" * (EXTRACTION_WINDOW + 1) not in prompt
    assert provider.settings[0].temperature == 0.1
    assert provider.settings[0].max_output_tokens == 8192


@pytest.mark.unit
def test_extract_text_requires_content():
    with pytest.raises(InputValidationError, match="Missing file content"):
        extract_document_text("", "pdf", ProviderFactory())


@pytest.mark.unit
def test_extraction_prompt_by_type():
    assert "PDF resume" in build_extraction_prompt("abc", "pdf")
    assert "Word document" in build_extraction_prompt("abc", "DOCX")
    generic = build_extraction_prompt("abc", "rtf")
    assert "contains resume content" in generic
    assert "Focus on extracting" not in generic
    assert "preserving the structure of the resume" in generic
    assert "bullet points" in build_extraction_prompt("abc", "pdf")


@pytest.mark.unit
def test_handle_request_dispatches_extract_text():
    result = handle_analyzer_request({"action": "extractText", "fileContent": "plain"})
    assert result == {"text": "plain", "success": True}


@pytest.mark.unit
def test_handle_request_rejects_non_object():
    with pytest.raises(InputValidationError):
        handle_analyzer_request(["resumeText"])
