"""
Client-side history of ATS analyses.

Keeps the most recent analyses (newest first, at most MAX_HISTORY) in local
storage together with the last resume text / job description pair, so the
checker can be reopened where the user left off.
"""

import uuid
from typing import Any, Dict, List, Optional

from vitae.contexts.analysis.analysis_data_structure import AnalysisResult
from vitae.contexts.session.local_storage import (
    ANALYSIS_HISTORY_KEY,
    JOB_DESCRIPTION_KEY,
    RESUME_TEXT_KEY,
    LocalStorage,
)
from vitae.utils.timestamp import now_exact

MAX_HISTORY = 10
DEFAULT_JOB_TITLE = "Job position analysis"


def derive_job_title(job_description: str) -> str:
    """Use the first non-empty line of the job description as a label."""
    for line in (job_description or "").splitlines():
        line = line.strip()
        if line:
            return line[:80]
    return DEFAULT_JOB_TITLE


def score_band(score: Any) -> str:
    """
    Bucket a score for display.

    Returns:
        "excellent" (>= 80), "good" (>= 60), "fair" (>= 40), "poor" otherwise,
        or "unknown" for non-numeric scores
    """
    try:
        value = float(score)
    except (TypeError, ValueError):
        return "unknown"

    if value >= 80:
        return "excellent"
    if value >= 60:
        return "good"
    if value >= 40:
        return "fair"
    return "poor"


class AnalysisHistory:
    """Rolling list of past analyses stored under ANALYSIS_HISTORY_KEY."""

    def __init__(self, storage: LocalStorage = None, max_entries: int = MAX_HISTORY):
        self.storage = storage if storage is not None else LocalStorage()
        self.max_entries = max_entries

    def entries(self) -> List[Dict[str, Any]]:
        """All stored analyses as wire-format dicts, newest first."""
        entries = self.storage.get_item(ANALYSIS_HISTORY_KEY, [])
        return entries if isinstance(entries, list) else []

    def results(self) -> List[AnalysisResult]:
        """Stored analyses as AnalysisResult objects (malformed entries skipped)."""
        results = []
        for entry in self.entries():
            try:
                results.append(AnalysisResult.from_dict(entry))
            except (KeyError, TypeError, AttributeError):
                continue
        return results

    def record(self, payload: Dict[str, Any], job_title: Optional[str] = None) -> Dict[str, Any]:
        """
        Add an analyzer reply to the front of the history.

        Client-side fields (id, createdAt, jobTitle) are added to a copy of the
        payload; the list is then truncated to max_entries.

        Returns:
            The stored entry
        """
        entry = {
            **payload,
            "id": str(uuid.uuid4()),
            "createdAt": now_exact(),
            "jobTitle": job_title or DEFAULT_JOB_TITLE,
        }
        entries = [entry] + self.entries()
        self.storage.set_item(ANALYSIS_HISTORY_KEY, entries[: self.max_entries])
        return entry

    def get(self, analysis_id: str) -> Optional[Dict[str, Any]]:
        """Look up a stored analysis by its client id."""
        for entry in self.entries():
            if entry.get("id") == analysis_id:
                return entry
        return None

    def clear(self) -> None:
        self.storage.remove_item(ANALYSIS_HISTORY_KEY)

    # Last-edited inputs

    def remember_inputs(self, resume_text: str, job_description: str) -> None:
        """Persist the current resume text / job description pair."""
        self.storage.set_item(RESUME_TEXT_KEY, resume_text)
        self.storage.set_item(JOB_DESCRIPTION_KEY, job_description)

    def last_inputs(self) -> tuple[str, str]:
        """Return the remembered (resume_text, job_description) pair ("" when unset)."""
        return (
            self.storage.get_item(RESUME_TEXT_KEY, ""),
            self.storage.get_item(JOB_DESCRIPTION_KEY, ""),
        )
