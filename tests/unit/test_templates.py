"""Unit tests for the template catalog and HTML preview."""

import pytest

from vitae.contexts.drafting.draft_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDraft,
)
from vitae.contexts.drafting.preview import format_date_range, render_preview
from vitae.contexts.drafting.templates import (
    ResumeTemplate,
    get_resume_templates,
    get_template_by_id,
    load_default_templates,
    seed_default_templates,
)
from vitae.contexts.persistence.store import PersistenceError
from vitae.utils.timestamp import format_month

DEFAULT_IDS = ["classic-professional", "modern-minimal", "executive-premium"]


class BrokenStore:
    """Store whose every query fails."""

    def list_templates(self):
        raise PersistenceError("Database operation failed", "resume_templates")

    def get_template(self, template_id):
        raise PersistenceError("Database operation failed", "resume_templates")


@pytest.mark.unit
def test_default_catalog():
    templates = load_default_templates()

    assert [t.id for t in templates] == DEFAULT_IDS
    classic = templates[0]
    assert classic.style["colors"]["accent"] == "#3182CE"
    assert classic.section_order == ["header", "summary", "experience", "education", "skills"]
    assert templates[2].is_premium is True
    assert templates[1].section_config("skills")["layout"] == "tags"


@pytest.mark.unit
def test_fallback_when_store_empty(store):
    assert [t.id for t in get_resume_templates(store)] == DEFAULT_IDS


@pytest.mark.unit
def test_fallback_when_store_fails():
    assert [t.id for t in get_resume_templates(BrokenStore())] == DEFAULT_IDS
    assert get_template_by_id("modern-minimal", BrokenStore()).name == "Modern Minimal"


@pytest.mark.unit
def test_stored_templates_win(store):
    store.upsert_template(
        {"id": "custom", "name": "Custom", "content": {"layout": "single-column"}}
    )

    templates = get_resume_templates(store)
    assert [t.id for t in templates] == ["custom"]
    assert get_template_by_id("custom", store).name == "Custom"
    # Ids missing from the store still resolve from the defaults
    assert get_template_by_id("executive-premium", store).is_premium is True
    assert get_template_by_id("nope", store) is None


@pytest.mark.unit
def test_seed_default_templates(store):
    assert seed_default_templates(store) == DEFAULT_IDS
    assert seed_default_templates(store) == []
    assert len(seed_default_templates(store, overwrite=True)) == 3
    assert {t.id for t in get_resume_templates(store)} == set(DEFAULT_IDS)


@pytest.mark.unit
def test_hidden_sections_are_skipped():
    template = ResumeTemplate(
        id="t",
        name="T",
        content={
            "sections": {
                "order": ["header", "skills", "summary"],
                "config": {"skills": {"visible": False}},
            }
        },
    )
    assert template.visible_sections() == ["header", "summary"]


@pytest.mark.unit
def test_format_month():
    assert format_month("2023-06") == "Jun 2023"
    assert format_month("2021-01-15") == "Jan 2021"
    assert format_month("") == ""
    assert format_month("sometime") == "sometime"


@pytest.mark.unit
def test_format_date_range_current():
    assert format_date_range("2020-03", "2022-01", True) == "Mar 2020 - Present"
    assert format_date_range("2020-03", "2022-01", False) == "Mar 2020 - Jan 2022"


@pytest.mark.unit
def test_preview_empty_state():
    html = render_preview(ResumeDraft())
    assert "Complete the forms to preview your resume" in html


@pytest.mark.unit
def test_preview_renders_sections_in_template_order():
    draft = ResumeDraft(
        personal=PersonalInfo(full_name="Ada <Lovelace>", email="ada@example.com", summary="Analyst"),
        experience=[ExperienceEntry(company="Acme", position="Engineer", start_date="2020-03", is_current=True)],
        education=[EducationEntry(institution="MIT", degree="BSc", field_of_study="Math", start_date="2014-09", end_date="2018-06")],
        skills=["Python"],
    )
    modern = get_template_by_id("modern-minimal")
    html = render_preview(draft, modern)

    assert "Ada &lt;Lovelace&gt;" in html
    assert "Mar 2020 - Present" in html
    assert "BSc in Math" in html
    assert "Sep 2014 - Jun 2018" in html
    assert "Helvetica, sans-serif" in html
    assert "Complete the forms" not in html
    # modern-minimal puts skills before experience and summary last
    assert html.index("section-skills") < html.index("section-experience") < html.index("section-summary")
