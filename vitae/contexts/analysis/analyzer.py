"""
ATS analyzer request handling.

Two modes behind one endpoint:
- Analysis: resumeText + jobDescription -> AnalysisResult JSON, passed through verbatim
- Transcription (action="extractText"): uploaded document -> {"text", "success"}

Every failure is raised; the API layer turns it into the {"error": ...} envelope.
"""

from typing import Any, Callable, Dict, Optional

from vitae.contexts.analysis.logger import _log_debug, _log_error, _log_info, _log_success
from vitae.contexts.analysis.prompts import build_analysis_prompt, build_extraction_prompt
from vitae.contexts.analysis.result_parser import ParseError, parse_analysis_reply
from vitae.utils.llm import (
    LLMProvider,
    get_provider,
    load_generation_settings,
    strip_code_fences,
)
from vitae.utils.validation import InputValidationError, is_blank, require_text

ProviderFactory = Callable[[], LLMProvider]

MISSING_INPUT_MESSAGE = "Missing resume text or job description"
PARSE_FAILURE_MESSAGE = "Failed to parse analysis results"


class ResponseParseError(ValueError):
    """
    Raised when the model reply cannot be parsed into an AnalysisResult.

    Attributes:
        message: Error description surfaced to the caller
        reason: Parser's explanation (kept out of the response envelope)
    """

    def __init__(self, message: str, reason: str = None):
        self.message = message
        self.reason = reason
        super().__init__(message)


def analyze_resume(
    resume_text: str,
    job_description: str,
    provider_factory: ProviderFactory = get_provider,
) -> Dict[str, Any]:
    """
    Analyze a resume against a job description.

    Args:
        resume_text: Plain resume text
        job_description: Job description text
        provider_factory: Zero-argument callable returning an LLMProvider

    Returns:
        The parsed reply object, unchanged (score is not range-checked)

    Raises:
        InputValidationError: If either text is empty after trimming (no upstream call)
        MissingCredentialError: If the provider's API key is not configured
        UpstreamError: If the provider call fails
        ResponseParseError: If the reply is not a usable AnalysisResult
    """
    require_text(
        {"resumeText": resume_text, "jobDescription": job_description},
        "resumeText",
        "jobDescription",
        message=MISSING_INPUT_MESSAGE,
    )

    provider = provider_factory()
    _log_info(f"Analyzing resume against job description ({provider.name})")

    response = provider.generate(
        build_analysis_prompt(resume_text, job_description),
        settings=load_generation_settings("analyze"),
    )
    _log_debug(f"Tokens: {response.input_tokens} in / {response.output_tokens} out")

    outcome = parse_analysis_reply(response.content)
    if isinstance(outcome, ParseError):
        _log_error(f"Error parsing analysis reply: {outcome.reason}")
        raise ResponseParseError(PARSE_FAILURE_MESSAGE, outcome.reason)

    _log_success(f"Analysis complete (score: {outcome.result.score})")
    return outcome.payload


def extract_document_text(
    file_content: str,
    file_type: Optional[str] = None,
    provider_factory: ProviderFactory = get_provider,
) -> Dict[str, Any]:
    """
    Transcribe the visible text of an uploaded document.

    Without a file type hint the content is treated as plain text and returned
    as-is. With a hint, only the first EXTRACTION_WINDOW characters of the base64
    payload are sent to the model, so long documents come back incomplete.

    Args:
        file_content: Data URL ("data:...;base64,XXXX") or bare base64 / plain text
        file_type: Optional hint ("pdf", "docx", "doc", ...)
        provider_factory: Zero-argument callable returning an LLMProvider

    Returns:
        {"text": str, "success": True}
    """
    if is_blank(file_content):
        raise InputValidationError("Missing file content", ("fileContent",))

    if not file_type:
        return {"text": file_content, "success": True}

    # Drop the data-URL prefix
    base64_content = file_content.split(",", 1)[1] if "," in file_content else file_content

    provider = provider_factory()
    _log_info(f"Extracting text from {file_type} document ({len(base64_content)} base64 chars)")

    response = provider.generate(
        build_extraction_prompt(base64_content, file_type),
        settings=load_generation_settings("extract_text"),
    )

    return {"text": strip_code_fences(response.content), "success": True}


def handle_analyzer_request(
    payload: Dict[str, Any], provider_factory: ProviderFactory = get_provider
) -> Dict[str, Any]:
    """
    Dispatch an ats-analyzer request body to the matching mode.

    Args:
        payload: Decoded JSON request body
        provider_factory: Zero-argument callable returning an LLMProvider

    Returns:
        Response body for a successful request
    """
    if not isinstance(payload, dict):
        raise InputValidationError("Request body must be a JSON object")

    if payload.get("action") == "extractText":
        return extract_document_text(
            payload.get("fileContent"), payload.get("fileType"), provider_factory
        )

    return analyze_resume(
        payload.get("resumeText"), payload.get("jobDescription"), provider_factory
    )
