"""
Resume Draft Data Structures

Defines the client-side resume draft: personal info, experience and education
entries, and the skill set. Attributes are snake_case; to_dict()/from_dict()
use the camelCase wire format stored in resume snapshots.
"""

import time
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

# camelCase wire key -> attribute name, for fields that differ
_PERSONAL_KEYS = {
    "fullName": "full_name",
    "jobTitle": "job_title",
    "experienceLevel": "experience_level",
    "linkedIn": "linked_in",
    "careerObjective": "career_objective",
}

_ENTRY_KEYS = {
    "startDate": "start_date",
    "endDate": "end_date",
    "isCurrent": "is_current",
    "teamSize": "team_size",
}

_EDUCATION_KEYS = {**_ENTRY_KEYS, "field": "field_of_study"}


def _to_wire(obj: Any, keys: Dict[str, str], drop_none: bool = False) -> Dict[str, Any]:
    reverse = {attr: wire for wire, attr in keys.items()}
    result = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if drop_none and value is None:
            continue
        result[reverse.get(f.name, f.name)] = value
    return result


def _from_wire(data: Dict[str, Any], keys: Dict[str, str], allowed: set) -> Dict[str, Any]:
    kwargs = {}
    for key, value in (data or {}).items():
        attr = keys.get(key, key)
        if attr in allowed:
            kwargs[attr] = value
    return kwargs


_last_id_ms = 0


def _time_id(prefix: str) -> str:
    """
    Client-generated, time-based entry id (e.g., "exp-1718000000000").

    Ids issued within the same millisecond are bumped past the previous one so
    every entry gets its own id.
    """
    global _last_id_ms
    _last_id_ms = max(int(time.time() * 1000), _last_id_ms + 1)
    return f"{prefix}-{_last_id_ms}"


@dataclass
class PersonalInfo:
    """
    Personal section of a draft.

    job_title, industry and experience_level also feed the AI helper prompts.
    """

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""
    job_title: str = ""
    industry: str = ""
    experience_level: str = ""
    linked_in: Optional[str] = None
    portfolio: Optional[str] = None
    career_objective: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalInfo":
        return cls(**_from_wire(data, _PERSONAL_KEYS, {f.name for f in fields(cls)}))

    def to_dict(self) -> Dict[str, Any]:
        return _to_wire(self, _PERSONAL_KEYS, drop_none=True)

    def merged(self, updates: Dict[str, Any]) -> "PersonalInfo":
        """Copy with camelCase updates applied (unknown keys ignored)."""
        return replace(self, **_from_wire(updates, _PERSONAL_KEYS, {f.name for f in fields(self)}))


@dataclass
class ExperienceEntry:
    """
    One position in the experience list.

    Attributes:
        id: Time-based client id ("exp-<ms>"), kept across edits
        end_date: Ignored for display when is_current is set
        achievements / technologies / responsibilities: Optional detail lists
    """

    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    is_current: bool = False
    description: str = ""
    id: str = field(default_factory=lambda: _time_id("exp"))
    industry: Optional[str] = None
    achievements: Optional[List[str]] = None
    technologies: Optional[List[str]] = None
    team_size: Optional[int] = None
    responsibilities: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExperienceEntry":
        return cls(**_from_wire(data, _ENTRY_KEYS, {f.name for f in fields(cls)}))

    def to_dict(self) -> Dict[str, Any]:
        return _to_wire(self, _ENTRY_KEYS, drop_none=True)


@dataclass
class EducationEntry:
    """One school in the education list (id prefix "edu-")."""

    institution: str = ""
    degree: str = ""
    field_of_study: str = ""
    start_date: str = ""
    end_date: str = ""
    is_current: bool = False
    description: str = ""
    id: str = field(default_factory=lambda: _time_id("edu"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EducationEntry":
        return cls(**_from_wire(data, _EDUCATION_KEYS, {f.name for f in fields(cls)}))

    def to_dict(self) -> Dict[str, Any]:
        return _to_wire(self, _EDUCATION_KEYS)


@dataclass
class ResumeDraft:
    """
    The resume being built.

    Entry lists keep insertion order. Edits replace by index and keep the
    replaced entry's id. Skills behave as an insertion-ordered set (trimmed,
    case-sensitive).
    """

    personal: PersonalInfo = field(default_factory=PersonalInfo)
    experience: List[ExperienceEntry] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)

    # Experience

    def add_experience(self, entry: ExperienceEntry) -> ExperienceEntry:
        self.experience.append(entry)
        return entry

    def replace_experience(self, index: int, entry: ExperienceEntry) -> ExperienceEntry:
        """Replace the entry at index in place, keeping the original id."""
        updated = replace(entry, id=self.experience[index].id)
        self.experience[index] = updated
        return updated

    def remove_experience(self, entry_id: str) -> None:
        self.experience = [entry for entry in self.experience if entry.id != entry_id]

    # Education

    def add_education(self, entry: EducationEntry) -> EducationEntry:
        self.education.append(entry)
        return entry

    def replace_education(self, index: int, entry: EducationEntry) -> EducationEntry:
        """Replace the entry at index in place, keeping the original id."""
        updated = replace(entry, id=self.education[index].id)
        self.education[index] = updated
        return updated

    def remove_education(self, entry_id: str) -> None:
        self.education = [entry for entry in self.education if entry.id != entry_id]

    # Skills

    def add_skill(self, skill: str) -> bool:
        """
        Add a skill after trimming.

        Returns:
            False if the trimmed skill is empty or already present (exact match)
        """
        skill = (skill or "").strip()
        if not skill or skill in self.skills:
            return False
        self.skills.append(skill)
        return True

    def add_skills(self, skills: List[str]) -> List[str]:
        """Add several skills; returns the ones actually added."""
        return [skill.strip() for skill in skills if self.add_skill(skill)]

    def remove_skill(self, skill: str) -> None:
        self.skills = [s for s in self.skills if s != skill]

    def is_empty(self) -> bool:
        return (
            not self.personal.full_name.strip()
            and not self.experience
            and not self.education
            and not self.skills
        )

    # Wire format

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personal": self.personal.to_dict(),
            "experience": [entry.to_dict() for entry in self.experience],
            "education": [entry.to_dict() for entry in self.education],
            "skills": list(self.skills),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeDraft":
        data = data or {}
        draft = cls(
            personal=PersonalInfo.from_dict(data.get("personal") or {}),
            experience=[ExperienceEntry.from_dict(e) for e in data.get("experience") or []],
            education=[EducationEntry.from_dict(e) for e in data.get("education") or []],
        )
        draft.add_skills(data.get("skills") or [])
        return draft
