"""
Analysis Context

Responsibilities:
- Builds the ATS compatibility prompt from resume text and a job description
- Sends it to the configured generative-language provider
- Parses the reply into an AnalysisResult at a single parsing boundary
- Transcribes uploaded documents to text (best effort, truncated payload)
- Keeps the client-side history of recent analyses

Owns: Analyzer prompt, reply parsing, analysis history
Never: Scores resumes itself or persists drafts
"""

from vitae.contexts.analysis.analysis_data_structure import (
    AnalysisResult,
    KeywordMatch,
    SectionFeedback,
)
from vitae.contexts.analysis.analyzer import (
    analyze_resume,
    extract_document_text,
    handle_analyzer_request,
)
from vitae.contexts.analysis.result_parser import ParseError, ParsedOk, parse_analysis_reply

__all__ = [
    # Request handling
    "handle_analyzer_request",
    "analyze_resume",
    "extract_document_text",
    # Parsing boundary
    "parse_analysis_reply",
    "ParsedOk",
    "ParseError",
    # Data structures
    "AnalysisResult",
    "KeywordMatch",
    "SectionFeedback",
]
