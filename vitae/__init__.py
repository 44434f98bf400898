"""
VITAE - Versatile Interactive Toolkit for ATS Evaluation

A resume builder and ATS compatibility checker. Structured resume drafts are
assembled through a step-by-step builder, previewed against visual templates,
persisted to a table store, and scored against job descriptions by a
generative-language model.

Architecture:
- Analysis Context: ATS compatibility analysis and analysis history
- Assistant Context: AI-generated resume content and suggestion feedback
- Persistence Context: Resume snapshots, templates and suggestion tables
- Drafting Context: Draft model, builder wizard, templates and preview
- Session Context: Auth collaborator, session threading and API client
"""

__version__ = "0.1.0"
