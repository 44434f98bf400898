"""
Local draft cache.

Drafts whose remote save failed are kept in local storage under
LOCAL_RESUMES_KEY, newest first, so they are not lost.
"""

import uuid
from typing import Any, Dict, List, Optional

from vitae.contexts.drafting.logger import _log_warning
from vitae.contexts.session.local_storage import LOCAL_RESUMES_KEY, LocalStorage
from vitae.utils.timestamp import now_exact


class LocalDraftCache:
    """Locally saved drafts (same envelope fields as a remote row, minus user id)."""

    def __init__(self, storage: LocalStorage = None):
        self.storage = storage if storage is not None else LocalStorage()

    def entries(self) -> List[Dict[str, Any]]:
        entries = self.storage.get_item(LOCAL_RESUMES_KEY, [])
        return entries if isinstance(entries, list) else []

    def save(
        self, resume_data: Dict[str, Any], title: str, template_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Store a draft locally.

        Returns:
            The stored entry ({id, title, templateId, data, savedAt})
        """
        entry = {
            "id": f"local-{uuid.uuid4()}",
            "title": title,
            "templateId": template_id,
            "data": resume_data,
            "savedAt": now_exact(),
        }
        self.storage.set_item(LOCAL_RESUMES_KEY, [entry] + self.entries())
        _log_warning(f"Draft '{title}' saved locally only ({entry['id']})")
        return entry

    def get(self, entry_id: str) -> Optional[Dict[str, Any]]:
        for entry in self.entries():
            if entry.get("id") == entry_id:
                return entry
        return None

    def remove(self, entry_id: str) -> None:
        self.storage.set_item(
            LOCAL_RESUMES_KEY, [e for e in self.entries() if e.get("id") != entry_id]
        )
