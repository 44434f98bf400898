"""
Suggestion lists and suggestion feedback.

Generated suggestions are stored one row each so users can rate them; ratings are
recorded as signed adjustments in the feedback table.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from vitae.contexts.assistant.logger import _log_info, _log_warning
from vitae.contexts.assistant.prompts import build_suggestions_prompt
from vitae.contexts.persistence.store import ResumeStore
from vitae.utils.llm import LLMProvider, load_generation_settings, parse_array_response
from vitae.utils.validation import InputValidationError, is_blank


@dataclass
class Suggestion:
    """A single piece of generated resume content with its user rating."""

    id: str
    content: str
    category: str
    rating: int
    created_at: str

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Suggestion":
        return cls(
            id=row["id"],
            content=row["content"],
            category=row["category"],
            rating=row.get("rating", 0),
            created_at=row["created_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "category": self.category,
            "rating": self.rating,
            "createdAt": self.created_at,
        }


def generate_suggestions(
    provider: LLMProvider,
    store: ResumeStore,
    category: str,
    context: Any = None,
    page: Any = 1,
    filter_text: Optional[str] = None,
    extra: Optional[str] = None,
) -> List[Suggestion]:
    """
    Ask the model for a page of suggestions and persist each one.

    Args:
        provider: LLM provider
        store: Table store for ai_suggestions rows
        category: Resume section the suggestions are for
        context: Free-form context (string or JSON-compatible value)
        page: Page number, passed to the model as text
        filter_text: Free-form filter, passed to the model as text
        extra: Additional caller instructions

    Returns:
        Stored suggestions in reply order (however many the model produced)
    """
    _log_info(f"Generating suggestions for '{category}' (page {page})")

    response = provider.generate(
        build_suggestions_prompt(category, context, page, filter_text, extra),
        settings=load_generation_settings("assist"),
    )

    contents = [item.strip() for item in parse_array_response(response.content) if item.strip()]
    if not contents:
        _log_warning("Model reply contained no suggestions")

    context_text = context if isinstance(context, str) or context is None else str(context)
    return [
        Suggestion.from_row(store.insert_suggestion(content, category or "general", context_text))
        for content in contents
    ]


def record_feedback(store: ResumeStore, suggestion_id: Any, feedback: Any) -> Dict[str, Any]:
    """
    Record a thumbs-up (+1) or thumbs-down (-1) style adjustment.

    Any integer is accepted. The suggestion id is not checked for existence.

    Raises:
        InputValidationError: If suggestion_id is missing or feedback is not an integer
    """
    if is_blank(suggestion_id):
        raise InputValidationError("Missing suggestion id", ("suggestionId",))
    # bool is an int subclass but true/false is not a rating
    if not isinstance(feedback, int) or isinstance(feedback, bool):
        raise InputValidationError("Feedback must be an integer", ("feedback",))

    store.insert_feedback(suggestion_id, feedback)
    _log_info(f"Recorded feedback {feedback:+d} for suggestion {suggestion_id}")
    return {"success": True}
