"""
Shared utilities for VITAE.

Common functionality used across contexts:
- LLM provider abstraction and response parsing
- Logger setup
- Timestamps
"""

from vitae.utils.timestamp import format_month, format_timestamp, now_exact

__all__ = ["now_exact", "format_timestamp", "format_month"]
