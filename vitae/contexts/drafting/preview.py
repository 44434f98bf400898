"""
HTML preview rendering.

Renders a draft with a template's section order, visibility, colors, fonts and
spacing. Dates show as "Mon YYYY"; current entries end in "Present".
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from vitae.contexts.drafting.draft_data_structure import ResumeDraft
from vitae.contexts.drafting.templates import ResumeTemplate, load_default_templates
from vitae.utils.timestamp import format_month

PREVIEW_TEMPLATES_PATH = Path(__file__).parent / "html_templates"

# Used for any style value a template leaves out
DEFAULT_STYLE = {
    "colors": {"primary": "#000000", "secondary": "#4A5568", "accent": "#000000"},
    "typography": {"headingFont": "Arial, sans-serif", "bodyFont": "Arial, sans-serif"},
    "spacing": {"sectionGap": "1.5rem", "elementGap": "0.75rem"},
}

_env = Environment(
    loader=FileSystemLoader(str(PREVIEW_TEMPLATES_PATH)),
    autoescape=select_autoescape(default=True),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _get_template() -> Template:
    return _env.get_template("resume.html.jinja")


def format_date_range(start_date: str, end_date: str, is_current: bool) -> str:
    """Format a range like "Jun 2021 - Present"."""
    end = "Present" if is_current else format_month(end_date)
    return f"{format_month(start_date)} - {end}"


def _style(template: ResumeTemplate, key: str) -> Dict[str, str]:
    return {**DEFAULT_STYLE[key], **template.style.get(key, {})}


def render_preview(draft: ResumeDraft, template: Optional[ResumeTemplate] = None) -> str:
    """
    Render a draft as an HTML fragment.

    Args:
        draft: Draft to render
        template: Visual template (default: first template of the fallback catalog)

    Returns:
        HTML string (an empty-state message when the draft has no content)
    """
    if template is None:
        template = load_default_templates()[0]

    personal = draft.personal.to_dict()
    context: Dict[str, Any] = {
        "empty": draft.is_empty(),
        "layout": template.layout,
        "sections": template.visible_sections(),
        "config": lambda section: f"layout-{template.section_config(section).get('layout', 'default')}",
        "colors": _style(template, "colors"),
        "fonts": _style(template, "typography"),
        "spacing": _style(template, "spacing"),
        "personal": personal,
        "contact": [personal[key] for key in ("email", "phone", "location") if personal.get(key)],
        "experience": [
            {
                "position": entry.position,
                "company": entry.company,
                "description": entry.description,
                "dates": format_date_range(entry.start_date, entry.end_date, entry.is_current),
            }
            for entry in draft.experience
        ],
        "education": [
            {
                "degree": entry.degree,
                "field": entry.field_of_study,
                "institution": entry.institution,
                "dates": format_date_range(entry.start_date, entry.end_date, entry.is_current),
            }
            for entry in draft.education
        ],
        "skills": draft.skills,
    }
    return _get_template().render(**context)
