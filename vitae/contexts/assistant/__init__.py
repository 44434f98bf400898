"""
Assistant Context

Responsibilities:
- Generates summaries, experience bullets and skills lists for a job context
- Generates pages of rateable content suggestions and stores them
- Records user feedback on suggestions

Owns: Helper prompts, skills parsing, suggestion rows
Never: Edits the user's draft (the client decides what to accept)
"""

from vitae.contexts.assistant.helper import (
    generate_section_content,
    generate_skills,
    handle_helper_request,
)
from vitae.contexts.assistant.skills_parser import parse_skills_reply, split_skills
from vitae.contexts.assistant.suggestions import Suggestion, generate_suggestions, record_feedback

__all__ = [
    "handle_helper_request",
    "generate_section_content",
    "generate_skills",
    "generate_suggestions",
    "record_feedback",
    "parse_skills_reply",
    "split_skills",
    "Suggestion",
]
