"""
Drafting Context

Responsibilities:
- Models the resume draft (personal info, experience, education, skills)
- Steps the builder wizard and guards template selection and saving
- Batches form edits through a commit buffer
- Serves the template catalog with a built-in fallback
- Renders HTML previews and keeps locally saved drafts

Owns: ResumeDraft, BuilderWizard, DraftCommitBuffer, template catalog
Never: Talks to the API (see vitae.contexts.session.client)
"""

from vitae.contexts.drafting.commit_buffer import CommitMessage, DraftCommitBuffer
from vitae.contexts.drafting.draft_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDraft,
)
from vitae.contexts.drafting.preview import render_preview
from vitae.contexts.drafting.templates import (
    ResumeTemplate,
    get_resume_templates,
    get_template_by_id,
    load_default_templates,
)
from vitae.contexts.drafting.wizard import BuilderWizard, WizardStep

__all__ = [
    # Draft model
    "ResumeDraft",
    "PersonalInfo",
    "ExperienceEntry",
    "EducationEntry",
    # Builder state
    "BuilderWizard",
    "WizardStep",
    "CommitMessage",
    "DraftCommitBuffer",
    # Templates
    "ResumeTemplate",
    "get_resume_templates",
    "get_template_by_id",
    "load_default_templates",
    "render_preview",
]
