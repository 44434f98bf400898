"""Prompt templates for ATS analysis and document transcription."""

# =============================================================================
# ATS ANALYSIS
# =============================================================================

ANALYSIS_PROMPT_TEMPLATE = """\
You are an expert ATS (Applicant Tracking System) analyzer. Analyze this resume:

{resume_text}

Against this job description:

{job_description}

Provide detailed analysis including:
1. Overall ATS compatibility score (0-100)
2. Keywords found and missing from the job description
3. Format issues that might prevent proper ATS parsing
4. Content improvement suggestions
5. Section-by-section analysis
6. Overall feedback

Return response in this exact JSON format:
{{
  "score": number,
  "keywordMatch": {{
    "matched": ["keyword1", "keyword2"],
    "missing": ["keyword1", "keyword2"]
  }},
  "formatIssues": ["issue1", "issue2"],
  "contentSuggestions": ["suggestion1", "suggestion2"],
  "sectionFeedback": {{
    "summary": "feedback text",
    "experience": "feedback text",
    "education": "feedback text",
    "skills": "feedback text"
  }},
  "overallFeedback": "detailed feedback paragraph"
}}"""

# =============================================================================
# DOCUMENT TRANSCRIPTION
# =============================================================================

# Only this many base64 characters of an uploaded document reach the model
EXTRACTION_WINDOW = 3000

_RESUME_FOCUS = """\
Focus on extracting:
- Personal information (name, contact details)
- Professional summary
- Work experience with dates, titles, and descriptions
- Education details
- Skills and certifications
- Any other relevant resume sections"""

_DOCUMENT_DESCRIPTIONS = {
    "pdf": "This is a base64 encoded PDF resume document. Extract ALL the readable text content from it.",
    "docx": "This is a base64 encoded Word document resume. Extract ALL the readable text content from it.",
    "doc": "This is a base64 encoded Word document resume. Extract ALL the readable text content from it.",
}

_GENERIC_DESCRIPTION = (
    "This is a base64 encoded document that contains resume content. Extract ALL the readable text."
)

_RESUME_LAYOUT = "paragraphs, sections, and bullet points"
_GENERIC_LAYOUT = "the structure of the resume"

EXTRACTION_PROMPT_TEMPLATE = """\
{description}
Format the text in a clean, readable way preserving {layout}.
{focus}

Here is the base64 content:
{content}... (truncated for brevity)

ONLY return the extracted text content, nothing else. Format it as a proper resume text."""


def build_analysis_prompt(resume_text: str, job_description: str) -> str:
    """Embed both texts and the target JSON schema in a single instruction."""
    return ANALYSIS_PROMPT_TEMPLATE.format(
        resume_text=resume_text, job_description=job_description
    )


def build_extraction_prompt(base64_content: str, file_type: str) -> str:
    """
    Build the transcription prompt for an uploaded document.

    Args:
        base64_content: Base64 payload (data-URL prefix already removed)
        file_type: File type hint ("pdf", "docx", "doc", or anything else)

    Returns:
        Prompt containing only the first EXTRACTION_WINDOW characters of the payload
    """
    file_type = (file_type or "").lower()
    description = _DOCUMENT_DESCRIPTIONS.get(file_type, _GENERIC_DESCRIPTION)
    known = file_type in _DOCUMENT_DESCRIPTIONS
    focus = _RESUME_FOCUS if known else ""

    return EXTRACTION_PROMPT_TEMPLATE.format(
        description=description,
        layout=_RESUME_LAYOUT if known else _GENERIC_LAYOUT,
        focus=focus,
        content=base64_content[:EXTRACTION_WINDOW],
    )
