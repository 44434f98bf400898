"""
Resume snapshot saving.

Wraps a draft in a versioned envelope and inserts it as one row. Saves without a
user id get a freshly generated anonymous identifier on every call, so two
anonymous saves of the same draft produce two unrelated rows.
"""

import uuid
from typing import Any, Dict, Optional

from vitae.contexts.persistence.logger import _log_info, _log_success
from vitae.contexts.persistence.store import ResumeStore
from vitae.utils.timestamp import now_exact
from vitae.utils.validation import InputValidationError, is_blank

SNAPSHOT_TYPE = "resume"
SNAPSHOT_VERSION = "1.0"
ANONYMOUS_PREFIX = "anonymous"


def anonymous_user_id() -> str:
    """New anonymous identifier (not stable across calls)."""
    return f"{ANONYMOUS_PREFIX}-{uuid.uuid4()}"


def build_snapshot(resume_data: Dict[str, Any], template_id: Optional[str] = None) -> Dict[str, Any]:
    """Wrap draft data in the stored envelope."""
    return {
        "type": SNAPSHOT_TYPE,
        "version": SNAPSHOT_VERSION,
        "data": resume_data,
        "templateId": template_id,
        "created_at": now_exact(),
    }


def save_resume(
    store: ResumeStore,
    resume_data: Dict[str, Any],
    title: str,
    user_id: Optional[str] = None,
    template_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Persist a resume draft snapshot.

    Args:
        store: Table store to insert into
        resume_data: Draft as a JSON-compatible dict (stored opaquely)
        title: Resume title
        user_id: Owner id; a new anonymous id is generated when omitted
        template_id: Selected template, if any

    Returns:
        {"success": True, "message", "data": [row], "resumeId"}

    Raises:
        InputValidationError: If resume_data or title is missing
        PersistenceError: If the insert fails
    """
    if not resume_data or is_blank(title):
        raise InputValidationError("Missing required data", ("resumeData", "title"))

    owner = user_id or anonymous_user_id()
    _log_info(f"Saving resume '{title}' for {owner}")

    row = store.insert_resume(
        title=title,
        user_id=owner,
        content=build_snapshot(resume_data, template_id),
        template_id=template_id,
    )

    _log_success(f"Saved resume {row['id']}")
    return {
        "success": True,
        "message": "Resume saved successfully",
        "data": [row],
        "resumeId": row["id"],
    }


def handle_save_request(payload: Dict[str, Any], store: ResumeStore) -> Dict[str, Any]:
    """Dispatch a resume-save request body."""
    if not isinstance(payload, dict):
        raise InputValidationError("Request body must be a JSON object")

    return save_resume(
        store,
        resume_data=payload.get("resumeData"),
        title=payload.get("title"),
        user_id=payload.get("userId"),
        template_id=payload.get("templateId"),
    )
