"""
Persistence Context

Responsibilities:
- Stores resume snapshots in a versioned envelope
- Holds template reference data, AI suggestions and suggestion feedback
- Generates anonymous owner ids for saves without a user

Owns: The table store (resumes, resume_templates, ai_suggestions, ai_suggestions_feedback)
Never: Interprets draft contents or calls the generative API
"""

from vitae.contexts.persistence.saver import handle_save_request, save_resume
from vitae.contexts.persistence.store import PersistenceError, ResumeStore

__all__ = [
    "ResumeStore",
    "PersistenceError",
    "save_resume",
    "handle_save_request",
]
