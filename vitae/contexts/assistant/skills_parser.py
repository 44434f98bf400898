"""
Skills list parsing.

Turns a model reply into a list of skill strings. A bracketed JSON array wins;
anything else is split on commas and newlines.
"""

import json
import re
from typing import List

# Tokens that are only list markers
_BULLET_ONLY = re.compile(r"^[•\-\*]+$")
_SEPARATORS = re.compile(r"[,\n]+")


def parse_skills_reply(text: str) -> List[str]:
    """
    Parse skills from a model reply.

    Args:
        text: Raw model reply

    Returns:
        The bracketed array's string elements (trimmed; non-strings and empty
        entries removed), or, when no array parses, the comma/newline split with
        empty and bullet-only tokens removed. Duplicates are kept.
    """
    skills = _parse_bracketed_array(text)
    if skills is not None:
        return skills
    return split_skills(text)


def _parse_bracketed_array(text: str):
    """
    String elements of the first [...] literal, trimmed, or None if it does not parse.

    Non-string elements and entries that are empty after trimming are removed.
    """
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return None

    try:
        result = json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return None

    if not isinstance(result, list):
        return None

    return [item.strip() for item in result if isinstance(item, str) and item.strip()]


def split_skills(text: str) -> List[str]:
    """Split on commas/newlines, trim, and drop empty or bullet-only tokens."""
    tokens = (token.strip() for token in _SEPARATORS.split(text))
    return [token for token in tokens if token and not _BULLET_ONLY.match(token)]
