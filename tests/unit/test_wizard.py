"""Unit tests for the resume builder wizard."""

import pytest

from vitae.contexts.drafting.commit_buffer import DraftCommitBuffer
from vitae.contexts.drafting.draft_data_structure import ResumeDraft
from vitae.contexts.drafting.wizard import NAME_REQUIRED, BuilderWizard, WizardStep
from vitae.contexts.session.toasts import latest


@pytest.mark.unit
def test_starts_at_template():
    wizard = BuilderWizard()
    assert wizard.step == WizardStep.TEMPLATE
    assert wizard.template_id is None


@pytest.mark.unit
def test_select_template_moves_to_personal():
    wizard = BuilderWizard()
    wizard.select_template("modern-minimal")

    assert wizard.step == WizardStep.PERSONAL
    assert wizard.template_id == "modern-minimal"
    assert wizard.toasts == []


@pytest.mark.unit
def test_next_without_template_stays_and_toasts():
    wizard = BuilderWizard()

    assert wizard.next() == WizardStep.TEMPLATE
    assert len(wizard.toasts) == 1
    assert wizard.toasts[0].variant == "destructive"


@pytest.mark.unit
def test_linear_navigation_and_bounds():
    wizard = BuilderWizard()

    # back() at the first step is a no-op
    assert wizard.back() == WizardStep.TEMPLATE

    wizard.select_template("classic-professional")
    steps = [wizard.next() for _ in range(4)]
    assert steps == [
        WizardStep.EXPERIENCE,
        WizardStep.EDUCATION,
        WizardStep.SKILLS,
        WizardStep.SKILLS,
    ]
    assert wizard.is_last_step

    assert wizard.back() == WizardStep.EDUCATION
    assert wizard.toasts == []


@pytest.mark.unit
def test_go_to_honours_template_guard():
    wizard = BuilderWizard()

    assert wizard.go_to("skills") == WizardStep.TEMPLATE
    assert len(wizard.toasts) == 1

    wizard.select_template("classic-professional")
    assert wizard.go_to(WizardStep.SKILLS) == WizardStep.SKILLS


@pytest.mark.unit
def test_save_requires_full_name():
    wizard = BuilderWizard()

    assert latest(wizard.toasts) is None
    assert wizard.can_save() is False
    assert latest(wizard.toasts) == NAME_REQUIRED

    wizard.buffer.stage("personal", {"fullName": "Ada Lovelace"})
    assert wizard.can_save() is True


@pytest.mark.unit
def test_step_change_commits_staged_edits():
    wizard = BuilderWizard()
    wizard.select_template("classic-professional")

    wizard.buffer.stage("personal", {"fullName": "Ada"})
    wizard.next()

    assert wizard.draft.personal.full_name == "Ada"


@pytest.mark.unit
def test_shared_toast_list():
    toasts = []
    wizard = BuilderWizard(toasts=toasts)
    wizard.next()

    assert len(toasts) == 1


@pytest.mark.unit
def test_step_change_keeps_buffer_on_injected_clock():
    draft = ResumeDraft()
    wizard = BuilderWizard(draft, DraftCommitBuffer(draft, clock=lambda: 100.0))
    wizard.select_template("modern-minimal")

    wizard.buffer.stage("personal", {"fullName": "Ada"})

    assert wizard.buffer.tick(101.0) == 1
    assert draft.personal.full_name == "Ada"
