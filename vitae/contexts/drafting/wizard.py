"""
Resume builder wizard.

Linear step machine over the builder tabs:

    template -> personal -> experience -> education -> skills

Leaving the template step needs a selected template, and saving needs a full
name. Guard failures leave the state unchanged and raise a destructive toast.
"""

from enum import Enum
from typing import List, Optional

from vitae.contexts.drafting.commit_buffer import DraftCommitBuffer
from vitae.contexts.drafting.draft_data_structure import ResumeDraft
from vitae.contexts.drafting.logger import _log_debug
from vitae.contexts.session.toasts import Toast, error_toast

TEMPLATE_REQUIRED = error_toast("Template required", "Please select a template to continue")
NAME_REQUIRED = error_toast("Missing information", "Please enter your full name before saving")


class WizardStep(str, Enum):
    TEMPLATE = "template"
    PERSONAL = "personal"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"


STEP_ORDER = list(WizardStep)


class BuilderWizard:
    """
    Builder state: current step, selected template and the draft being edited.

    Attributes:
        step: Current WizardStep
        template_id: Selected template (None until one is chosen)
        draft: Draft being built
        buffer: Commit buffer feeding the draft
        toasts: Notifications raised so far, oldest first
    """

    def __init__(
        self,
        draft: ResumeDraft = None,
        buffer: DraftCommitBuffer = None,
        toasts: List[Toast] = None,
    ):
        self.draft = draft if draft is not None else ResumeDraft()
        self.buffer = buffer if buffer is not None else DraftCommitBuffer(self.draft)
        self.step = WizardStep.TEMPLATE
        self.template_id: Optional[str] = None
        self.toasts: List[Toast] = toasts if toasts is not None else []

    def select_template(self, template_id: str) -> None:
        """Record the template choice and move on to personal info."""
        self.template_id = template_id
        self._move_to(WizardStep.PERSONAL)

    def next(self) -> WizardStep:
        """Advance one step (no-op at the last step)."""
        if self.step == WizardStep.TEMPLATE and not self.template_id:
            self.toasts.append(TEMPLATE_REQUIRED)
            return self.step

        index = STEP_ORDER.index(self.step)
        if index < len(STEP_ORDER) - 1:
            self._move_to(STEP_ORDER[index + 1])
        return self.step

    def back(self) -> WizardStep:
        """Go back one step (no-op at the first step)."""
        index = STEP_ORDER.index(self.step)
        if index > 0:
            self._move_to(STEP_ORDER[index - 1])
        return self.step

    def go_to(self, step: WizardStep) -> WizardStep:
        """Jump straight to a tab, honouring the template guard."""
        step = WizardStep(step)
        if step != WizardStep.TEMPLATE and not self.template_id:
            self.toasts.append(TEMPLATE_REQUIRED)
            return self.step
        self._move_to(step)
        return self.step

    def can_save(self) -> bool:
        """
        Check the save guard, toasting on failure.

        Staged edits are committed first so the check sees the latest form state.
        """
        self.buffer.flush()
        if not self.draft.personal.full_name.strip():
            self.toasts.append(NAME_REQUIRED)
            return False
        return True

    @property
    def is_last_step(self) -> bool:
        return self.step == STEP_ORDER[-1]

    def _move_to(self, step: WizardStep) -> None:
        # Pending edits belong to the tab being left
        self.buffer.flush()
        _log_debug(f"Wizard step: {self.step.value} -> {step.value}")
        self.step = step
