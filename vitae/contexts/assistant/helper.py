"""
Resume AI helper request handling.

Branches on the request body:
- action="feedback": record a suggestion rating (no model call)
- section="summary" | "experience": one generated block of text
- section="skills": a parsed list of skills
- anything else: a stored page of suggestions
"""

from typing import Any, Callable, Dict

from vitae.contexts.assistant.logger import _log_debug, _log_info
from vitae.contexts.assistant.prompts import (
    DEFAULT_EXPERIENCE_LEVEL,
    DEFAULT_INDUSTRY,
    DEFAULT_JOB_TITLE,
    build_experience_prompt,
    build_skills_prompt,
    build_summary_prompt,
)
from vitae.contexts.assistant.skills_parser import parse_skills_reply
from vitae.contexts.assistant.suggestions import generate_suggestions, record_feedback
from vitae.contexts.persistence.store import ResumeStore
from vitae.utils.llm import LLMProvider, get_provider, load_generation_settings
from vitae.utils.validation import InputValidationError

ProviderFactory = Callable[[], LLMProvider]


def _job_context(payload: Dict[str, Any]) -> tuple[str, str, str]:
    """(job_title, industry, experience_level) with defaults for missing values."""
    return (
        payload.get("jobTitle") or DEFAULT_JOB_TITLE,
        payload.get("industry") or DEFAULT_INDUSTRY,
        payload.get("experienceLevel") or DEFAULT_EXPERIENCE_LEVEL,
    )


def generate_section_content(
    provider: LLMProvider, section: str, payload: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Generate a summary paragraph or experience bullets.

    Returns:
        {"content": str} with the model text unchanged
    """
    job_title, industry, experience_level = _job_context(payload)
    current_content = payload.get("currentContent")

    if section == "summary":
        prompt = build_summary_prompt(job_title, industry, experience_level, current_content)
    else:
        prompt = build_experience_prompt(job_title, current_content, payload.get("prompt"))

    response = provider.generate(prompt, settings=load_generation_settings("assist"))
    return {"content": response.content}


def generate_skills(provider: LLMProvider, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Generate a skills list.

    Skills already in currentContent are not filtered out here.

    Returns:
        {"skills": list[str]}
    """
    job_title, industry, experience_level = _job_context(payload)
    prompt = build_skills_prompt(
        job_title, industry, experience_level, payload.get("currentContent")
    )

    response = provider.generate(prompt, settings=load_generation_settings("assist"))
    skills = parse_skills_reply(response.content)
    _log_debug(f"Parsed {len(skills)} skills")
    return {"skills": skills}


def handle_helper_request(
    payload: Dict[str, Any],
    store: ResumeStore,
    provider_factory: ProviderFactory = get_provider,
) -> Dict[str, Any]:
    """
    Dispatch a resume-ai-helper request body.

    Args:
        payload: Decoded JSON request body
        store: Table store (suggestions and feedback)
        provider_factory: Zero-argument callable returning an LLMProvider

    Returns:
        Response body for a successful request

    Raises:
        InputValidationError: Malformed body or feedback input
        MissingCredentialError / UpstreamError: From the provider
        PersistenceError: From the store
    """
    if not isinstance(payload, dict):
        raise InputValidationError("Request body must be a JSON object")

    if payload.get("action") == "feedback":
        return record_feedback(store, payload.get("suggestionId"), payload.get("feedback"))

    section = payload.get("section")
    provider = provider_factory()
    _log_info(f"Generating content for section: {section}")

    if section in ("summary", "experience"):
        return generate_section_content(provider, section, payload)

    if section == "skills":
        return generate_skills(provider, payload)

    extra = payload.get("prompt") if isinstance(payload.get("prompt"), str) else None
    suggestions = generate_suggestions(
        provider,
        store,
        category=section,
        context=payload.get("context"),
        page=payload.get("page", 1),
        filter_text=payload.get("filter"),
        extra=extra,
    )
    return {"suggestions": [suggestion.to_dict() for suggestion in suggestions]}
