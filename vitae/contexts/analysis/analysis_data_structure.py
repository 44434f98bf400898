"""
Analysis Result Data Structures

Typed view over the analyzer's JSON contract. The wire format uses camelCase keys;
attributes are snake_case and converted in to_dict()/from_dict().
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Keys whose absence makes an analyzer reply unusable
REQUIRED_KEYS = ("score", "keywordMatch", "formatIssues", "contentSuggestions", "overallFeedback")

SECTION_NAMES = ("summary", "experience", "education", "skills")


@dataclass
class KeywordMatch:
    """Job-description keywords found in and missing from the resume."""

    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeywordMatch":
        data = data or {}
        return cls(matched=list(data.get("matched") or []), missing=list(data.get("missing") or []))

    def to_dict(self) -> Dict[str, Any]:
        return {"matched": list(self.matched), "missing": list(self.missing)}


@dataclass
class SectionFeedback:
    """Optional per-section commentary (summary, experience, education, skills)."""

    summary: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    skills: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SectionFeedback":
        return cls(**{name: data.get(name) for name in SECTION_NAMES})

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in SECTION_NAMES if getattr(self, name) is not None}


@dataclass
class AnalysisResult:
    """
    ATS compatibility assessment for one resume/job-description pair.

    Attributes:
        score: Compatibility score (0-100 as requested of the model; not range-checked)
        keyword_match: Matched and missing keywords
        format_issues: Formatting problems that may break ATS parsing
        content_suggestions: Suggested content improvements
        overall_feedback: Free-text summary
        section_feedback: Optional per-section feedback
        id: Client-assigned history identifier
        created_at: Client-assigned ISO timestamp
        job_title: Client-assigned label for the analysed position
    """

    score: Any
    keyword_match: KeywordMatch
    format_issues: List[str]
    content_suggestions: List[str]
    overall_feedback: str
    section_feedback: Optional[SectionFeedback] = None
    id: Optional[str] = None
    created_at: Optional[str] = None
    job_title: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        """
        Build from the camelCase wire format.

        Raises:
            KeyError: If a required key is missing
        """
        section_feedback = data.get("sectionFeedback")
        return cls(
            score=data["score"],
            keyword_match=KeywordMatch.from_dict(data["keywordMatch"]),
            format_issues=list(data["formatIssues"] or []),
            content_suggestions=list(data["contentSuggestions"] or []),
            overall_feedback=data["overallFeedback"],
            section_feedback=(
                SectionFeedback.from_dict(section_feedback)
                if isinstance(section_feedback, dict)
                else None
            ),
            id=data.get("id"),
            created_at=data.get("createdAt"),
            job_title=data.get("jobTitle"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire format, omitting unset optional fields."""
        result = {
            "score": self.score,
            "keywordMatch": self.keyword_match.to_dict(),
            "formatIssues": list(self.format_issues),
            "contentSuggestions": list(self.content_suggestions),
            "overallFeedback": self.overall_feedback,
        }
        if self.section_feedback is not None:
            result["sectionFeedback"] = self.section_feedback.to_dict()
        if self.id is not None:
            result["id"] = self.id
        if self.created_at is not None:
            result["createdAt"] = self.created_at
        if self.job_title is not None:
            result["jobTitle"] = self.job_title
        return result
