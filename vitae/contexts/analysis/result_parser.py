"""
Parsing boundary for analyzer replies.

Model replies are free-form text. parse_analysis_reply() is the only place that
touches that text: everything downstream receives either a ParsedOk carrying a
typed AnalysisResult (plus the verbatim JSON payload) or a ParseError with a reason.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Union

from vitae.contexts.analysis.analysis_data_structure import REQUIRED_KEYS, AnalysisResult
from vitae.utils.llm import extract_json_object


@dataclass(frozen=True)
class ParsedOk:
    """Successfully parsed reply. payload is the decoded JSON object, untouched."""

    result: AnalysisResult
    payload: Dict[str, Any]


@dataclass(frozen=True)
class ParseError:
    """Reply that could not be turned into an AnalysisResult."""

    reason: str
    raw_text: str = ""


ParseOutcome = Union[ParsedOk, ParseError]


def parse_analysis_reply(text: str) -> ParseOutcome:
    """
    Parse an analyzer reply into a tagged result.

    One extraction attempt is made (fenced ```json block, else the outermost
    {...} span, else the whole text). The score is not range-checked and keys are
    not repaired; a reply missing any required key is a ParseError.

    Args:
        text: Raw model reply

    Returns:
        ParsedOk or ParseError
    """
    candidate = extract_json_object(text)

    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as e:
        return ParseError(reason=f"Reply is not valid JSON: {e.msg}", raw_text=text)

    if not isinstance(payload, dict):
        return ParseError(reason="Reply JSON is not an object", raw_text=text)

    missing = [key for key in REQUIRED_KEYS if key not in payload]
    if missing:
        return ParseError(reason=f"Reply is missing keys: {', '.join(missing)}", raw_text=text)

    try:
        result = AnalysisResult.from_dict(payload)
    except (TypeError, AttributeError) as e:
        return ParseError(reason=f"Reply has malformed fields: {e}", raw_text=text)

    return ParsedOk(result=result, payload=payload)
