"""
File-backed key/value store for client-side state.

Plays the role of browser local storage: the last resume text and job description
typed into the ATS checker, the rolling analysis history, and drafts that could
not be saved remotely. Values are JSON; the whole store is one JSON object on disk.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv

load_dotenv()
LOCAL_STORAGE_PATH = Path(os.getenv("LOCAL_STORAGE_PATH", "outs/local_storage.json"))

# Storage keys
RESUME_TEXT_KEY = "atsResumeText"
JOB_DESCRIPTION_KEY = "atsJobDescription"
ANALYSIS_HISTORY_KEY = "atsAnalysisHistory"
LOCAL_RESUMES_KEY = "localResumes"


class LocalStorage:
    """
    JSON key/value store persisted to a single file.

    Reads go to disk every time so several LocalStorage instances over the same
    file see each other's writes. Writes replace the file atomically.
    """

    def __init__(self, path: Path = None):
        self.path = Path(path) if path is not None else LOCAL_STORAGE_PATH

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            # Corrupt store behaves like cleared storage
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_name, self.path)

    def get_item(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default."""
        return self._load().get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove_item(self, key: str) -> None:
        """Delete key if present."""
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)

    def keys(self) -> List[str]:
        return list(self._load().keys())

    def clear(self) -> None:
        self._dump({})
