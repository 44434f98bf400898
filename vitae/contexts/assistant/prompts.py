"""Prompt templates for AI-assisted resume content."""

import json
from typing import Any, Optional

# The model is asked for this many suggestions per page; the count is not enforced
SUGGESTIONS_PER_PAGE = 10

DEFAULT_JOB_TITLE = "professional"
DEFAULT_INDUSTRY = "general"
DEFAULT_EXPERIENCE_LEVEL = "mid-level"

SUMMARY_TEMPLATE = """\
Write a professional summary for a {experience_level} {job_title} in the {industry} industry.
Make it concise, impactful, and highlight key strengths. The summary should be approximately 3-4 sentences."""

EXPERIENCE_TEMPLATE = "Write powerful job description bullet points for a {job_title} position."

EXPERIENCE_GUIDANCE = (
    "Focus on accomplishments with metrics where possible. Use strong action verbs. "
    "Write 3-5 bullet points."
)

SKILLS_TEMPLATE = """\
List 8-12 relevant technical skills and soft skills for a {experience_level} {job_title} in the {industry} industry.
Format the response as a JSON array of strings."""

SUGGESTIONS_TEMPLATE = """\
Generate {count} distinct, ready-to-use resume content suggestions for the "{category}" section.

Context: {context}
Page: {page} (suggestions on later pages should differ from earlier pages)
{filter_line}{extra_line}
Each suggestion should be one or two sentences the candidate could paste directly into their resume.
Return ONLY a JSON array of {count} strings, nothing else."""


def build_summary_prompt(
    job_title: str, industry: str, experience_level: str, current_content: Any = None
) -> str:
    prompt = SUMMARY_TEMPLATE.format(
        experience_level=experience_level, job_title=job_title, industry=industry
    )
    if current_content:
        prompt += (
            f' Here\'s their current summary for reference or improvement: "{current_content}"'
        )
    return prompt


def build_experience_prompt(job_title: str, current_content: Any = None, details: Any = None) -> str:
    """
    Build the experience-bullets prompt.

    Args:
        job_title: Position title
        current_content: Existing description to improve, if any
        details: Optional dict with "company" / "position" / "context"
    """
    prompt = EXPERIENCE_TEMPLATE.format(job_title=job_title)
    if current_content:
        prompt += (
            " Here's their current job description for reference or improvement: "
            f'"{current_content}"'
        )
    if isinstance(details, dict) and details.get("company"):
        prompt += f" Company: {details['company']}, Position: {details.get('position', job_title)}"
        if details.get("context"):
            prompt += f" {details['context']}."
    return f"{prompt} {EXPERIENCE_GUIDANCE}"


def build_skills_prompt(
    job_title: str, industry: str, experience_level: str, current_content: Any = None
) -> str:
    prompt = SKILLS_TEMPLATE.format(
        experience_level=experience_level, job_title=job_title, industry=industry
    )
    if isinstance(current_content, list) and current_content:
        prompt += (
            f" Current skills: {', '.join(str(s) for s in current_content)}. "
            "Suggest additional relevant skills."
        )
    return prompt


def build_suggestions_prompt(
    category: str,
    context: Any = None,
    page: Any = 1,
    filter_text: Optional[str] = None,
    extra: Optional[str] = None,
) -> str:
    """
    Build the paged suggestion-list prompt.

    Page and filter are free-form constraints for the model; nothing slices a
    stored result set, so different pages may still overlap.
    """
    if context is None or context == "":
        context_text = "general resume"
    elif isinstance(context, str):
        context_text = context
    else:
        context_text = json.dumps(context)

    filter_line = f"Only include suggestions related to: {filter_text}\n" if filter_text else ""
    extra_line = f"Additional instructions: {extra}\n" if extra else ""

    return SUGGESTIONS_TEMPLATE.format(
        count=SUGGESTIONS_PER_PAGE,
        category=category or "general",
        context=context_text,
        page=page or 1,
        filter_line=filter_line,
        extra_line=extra_line,
    )
