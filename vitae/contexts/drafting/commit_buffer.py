"""
Draft commit buffer.

Form edits are staged as CommitMessages and merged into the draft in one step:
on an explicit flush(), on a blur() event, or on tick(now) once the flush
interval has elapsed. Only the latest staged message per section is kept.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from vitae.contexts.drafting.draft_data_structure import (
    EducationEntry,
    ExperienceEntry,
    ResumeDraft,
)
from vitae.contexts.drafting.logger import _log_debug

FLUSH_INTERVAL_SECONDS = 0.5

SECTIONS = ("personal", "experience", "education", "skills")


@dataclass(frozen=True)
class CommitMessage:
    """
    A staged edit for one draft section.

    Attributes:
        section: "personal", "experience", "education" or "skills"
        data: personal -> dict of camelCase field updates;
              experience/education -> full list of entries (objects or dicts);
              skills -> full list of skill strings
    """

    section: str
    data: Any

    def __post_init__(self):
        if self.section not in SECTIONS:
            raise ValueError(f"Unknown draft section: {self.section}. Use one of: {', '.join(SECTIONS)}")


def _entries(items: List[Any], entry_class) -> List[Any]:
    return [item if isinstance(item, entry_class) else entry_class.from_dict(item) for item in items]


def apply_commit(draft: ResumeDraft, message: CommitMessage) -> None:
    """Merge one staged edit into the draft."""
    if message.section == "personal":
        draft.personal = draft.personal.merged(message.data or {})
    elif message.section == "experience":
        draft.experience = _entries(message.data or [], ExperienceEntry)
    elif message.section == "education":
        draft.education = _entries(message.data or [], EducationEntry)
    else:
        draft.skills = []
        draft.add_skills(message.data or [])


class DraftCommitBuffer:
    """
    Batches form edits before they reach the draft.

    Args:
        draft: Draft the edits are merged into
        interval: Seconds between automatic flushes driven by tick()
        clock: Monotonic time source (default flush time when flush() gets no now)
    """

    def __init__(
        self,
        draft: ResumeDraft,
        interval: float = FLUSH_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.draft = draft
        self.interval = interval
        self._clock = clock
        self._pending: Dict[str, CommitMessage] = {}
        self._last_flush = clock()

    @property
    def pending(self) -> List[CommitMessage]:
        """Staged messages in the order their sections were first staged."""
        return list(self._pending.values())

    def stage(self, section: str, data: Any) -> CommitMessage:
        """Stage an edit; replaces any earlier staged edit for the same section."""
        message = CommitMessage(section, data)
        self._pending[section] = message
        return message

    def flush(self, now: float = None) -> int:
        """
        Merge all staged edits into the draft.

        Returns:
            Number of messages applied
        """
        messages = self.pending
        for message in messages:
            apply_commit(self.draft, message)
        self._pending.clear()
        self._last_flush = now if now is not None else self._clock()

        if messages:
            _log_debug(f"Committed {len(messages)} staged edit(s): {[m.section for m in messages]}")
        return len(messages)

    def blur(self, now: float = None) -> int:
        """Field lost focus: commit immediately."""
        return self.flush(now)

    def tick(self, now: float) -> int:
        """Flush if edits are pending and the interval has elapsed since the last flush."""
        if not self._pending or now - self._last_flush < self.interval:
            return 0
        return self.flush(now)
