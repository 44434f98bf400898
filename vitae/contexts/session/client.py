"""
HTTP client for the VITAE API.

Builds requests for the three POST endpoints (plus the template catalog) from a
SessionContext. Client-side validation happens before any request; failures
are reported as toasts and leave earlier results untouched.
"""

import os
from typing import Any, Dict, List, Optional

import httpx
from dotenv import load_dotenv

from vitae.contexts.analysis.history import AnalysisHistory, derive_job_title
from vitae.contexts.drafting.draft_data_structure import ResumeDraft
from vitae.contexts.drafting.local_drafts import LocalDraftCache
from vitae.contexts.drafting.templates import ResumeTemplate, load_default_templates
from vitae.contexts.session.auth import SessionContext
from vitae.contexts.session.logger import _log_error, _log_info
from vitae.contexts.session.toasts import Toast, error_toast
from vitae.utils.validation import is_blank

load_dotenv()
VITAE_API_URL = os.getenv("VITAE_API_URL", "http://localhost:8000")


class ApiError(Exception):
    """
    Raised when an endpoint call fails.

    Attributes:
        message: The server's error text (or the transport error)
        status_code: HTTP status, None for transport failures
    """

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message if status_code is None else f"{message} (HTTP {status_code})")


class VitaeClient:
    """
    Request builders for one client session.

    Args:
        context: Session collaborators (auth, local storage, toasts)
        base_url: API root (default: VITAE_API_URL env var)
        http_client: httpx.Client to send requests with (a FastAPI TestClient works too)
    """

    def __init__(
        self,
        context: SessionContext = None,
        base_url: str = None,
        http_client: httpx.Client = None,
    ):
        self.context = context if context is not None else SessionContext()
        self.base_url = (base_url or VITAE_API_URL).rstrip("/")
        self.http = http_client if http_client is not None else httpx.Client()
        self.history = AnalysisHistory(self.context.storage)
        self.local_drafts = LocalDraftCache(self.context.storage)
        self.last_result: Optional[Dict[str, Any]] = None

    # --- transport ---

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", **self.context.auth_headers()}

    def _handle(self, response: httpx.Response, expected: type = dict) -> Any:
        """Decode a response body; errors and bodies of the wrong shape raise ApiError."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(message or response.reason_phrase or "Request failed", response.status_code)
        if not isinstance(body, expected):
            raise ApiError("Unexpected response from server", response.status_code)
        return body

    def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        try:
            response = self.http.post(self._url(path), json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            raise ApiError(str(e)) from e
        return self._handle(response)

    def _get(self, path: str, expected: type = dict) -> Any:
        try:
            response = self.http.get(self._url(path), headers=self._headers())
        except httpx.HTTPError as e:
            raise ApiError(str(e)) from e
        return self._handle(response, expected)

    def _fail(self, title: str, error: ApiError, fallback: str) -> None:
        _log_error(f"{title}: {error}")
        self.context.notify(error_toast(title, error.message or fallback))

    # --- ATS analyzer ---

    def analyze(self, resume_text: str, job_description: str) -> Optional[Dict[str, Any]]:
        """
        Analyze resume text against a job description.

        Returns:
            The stored history entry, or None when validation or the request fails
            (last_result is then left as it was)
        """
        if is_blank(resume_text) or is_blank(job_description):
            self.context.notify(
                error_toast(
                    "Input Required",
                    "Please provide both your resume text and the job description.",
                )
            )
            return None

        self.history.remember_inputs(resume_text, job_description)
        _log_info("Requesting ATS analysis")

        try:
            payload = self._post(
                "ats-analyzer", {"resumeText": resume_text, "jobDescription": job_description}
            )
        except ApiError as e:
            self._fail("Analysis Failed", e, "Failed to analyze your resume. Please try again.")
            return None

        entry = self.history.record(payload, derive_job_title(job_description))
        self.last_result = entry
        self.context.notify(
            Toast("Analysis Complete", "Your resume has been analyzed against the job description.")
        )
        return entry

    def extract_text(self, file_content: str, file_type: str = None) -> Optional[str]:
        """Transcribe an uploaded document; None on failure."""
        body = {"action": "extractText", "fileContent": file_content}
        if file_type:
            body["fileType"] = file_type

        try:
            return self._post("ats-analyzer", body).get("text", "")
        except ApiError as e:
            self._fail("Extraction Failed", e, "Failed to extract text from the file.")
            return None

    # --- AI helper ---

    def _job_fields(self, draft: ResumeDraft) -> Dict[str, str]:
        personal = draft.personal
        return {
            "jobTitle": personal.job_title,
            "industry": personal.industry,
            "experienceLevel": personal.experience_level,
        }

    def generate_summary(self, draft: ResumeDraft) -> Optional[str]:
        """Generated professional summary for the draft's job context."""
        body = {
            "section": "summary",
            "currentContent": draft.personal.summary,
            **self._job_fields(draft),
        }
        try:
            return self._post("resume-ai-helper", body).get("content", "")
        except ApiError as e:
            self._fail("Generation Failed", e, "Failed to generate summary. Please try again.")
            return None

    def generate_experience(
        self, draft: ResumeDraft, company: str, position: str, current_content: str = ""
    ) -> Optional[str]:
        """Generated bullet points for one position."""
        if is_blank(company) or is_blank(position):
            self.context.notify(
                error_toast(
                    "Missing Information",
                    "Please enter a company name and position to generate a description.",
                )
            )
            return None

        body = {
            "section": "experience",
            "currentContent": current_content,
            "prompt": {"company": company, "position": position},
            **self._job_fields(draft),
            "jobTitle": position,
        }
        try:
            content = self._post("resume-ai-helper", body).get("content", "")
        except ApiError as e:
            self._fail("Generation Failed", e, "Failed to generate description. Please try again.")
            return None

        self.context.notify(
            Toast("Description Generated", "Your job description has been created with AI assistance.")
        )
        return content

    def suggest_skills(self, draft: ResumeDraft) -> List[str]:
        """
        Ask for skills and add the new ones to the draft.

        The server does not filter skills the draft already has; that happens here.

        Returns:
            Skills actually added
        """
        body = {"section": "skills", "currentContent": list(draft.skills), **self._job_fields(draft)}
        try:
            skills = self._post("resume-ai-helper", body).get("skills") or []
        except ApiError as e:
            self._fail("Generation Failed", e, "Failed to generate skills. Please try again.")
            return []

        added = draft.add_skills(skills)
        if added:
            self.context.notify(
                Toast("Skills Generated", f"Added {len(added)} new skills to your profile.")
            )
        else:
            self.context.notify(
                Toast("No New Skills", "All suggested skills are already in your list.")
            )
        return added

    def load_suggestions(
        self,
        category: str,
        context: Any = None,
        page: int = 1,
        filter_text: str = None,
    ) -> List[Dict[str, Any]]:
        """A page of stored suggestions ([] on failure)."""
        body = {"section": category, "context": context, "page": page}
        if filter_text:
            body["filter"] = filter_text

        try:
            # Content and skills sections answer without a suggestions list
            return self._post("resume-ai-helper", body).get("suggestions") or []
        except ApiError as e:
            self._fail("Error", e, "Failed to load suggestions. Please try again.")
            return []

    def send_feedback(self, suggestion_id: str, feedback: int) -> bool:
        body = {"action": "feedback", "suggestionId": suggestion_id, "feedback": feedback}
        try:
            self._post("resume-ai-helper", body)
        except ApiError as e:
            self._fail("Error", e, "Failed to submit feedback. Please try again.")
            return False

        self.context.notify(Toast("Thank you!", "Your feedback helps improve our suggestions."))
        return True

    # --- saving ---

    def save_resume(
        self, draft: ResumeDraft, title: str = None, template_id: str = None
    ) -> Optional[Dict[str, Any]]:
        """
        Save the draft remotely, falling back to local storage.

        Returns:
            The server response, the local cache entry when the remote save failed,
            or None when the draft has no full name (nothing is sent)
        """
        full_name = draft.personal.full_name.strip()
        if not full_name:
            self.context.notify(
                error_toast("Missing information", "Please enter your full name before saving")
            )
            return None

        title = title or f"{full_name}'s Resume"
        body = {
            "resumeData": draft.to_dict(),
            "title": title,
            "templateId": template_id,
        }
        if self.context.user_id:
            body["userId"] = self.context.user_id

        try:
            result = self._post("resume-save", body)
        except ApiError as e:
            _log_error(f"Remote save failed: {e}")
            entry = self.local_drafts.save(body["resumeData"], title, template_id)
            self.context.notify(
                error_toast(
                    "Saved locally only",
                    "We couldn't reach the server. Your resume was saved on this device.",
                )
            )
            return entry

        self.context.notify(Toast("Resume saved", "Your resume has been saved successfully."))
        return result

    # --- templates ---

    def get_templates(self) -> List[ResumeTemplate]:
        """Template catalog from the API, or the built-in defaults on failure."""
        try:
            rows = self._get("resume-templates", expected=list)
        except ApiError as e:
            _log_error(f"Error loading templates: {e}")
            self.context.notify(
                error_toast(
                    "Error loading templates",
                    "Failed to load resume templates. Using default templates instead.",
                )
            )
            return load_default_templates()
        return [ResumeTemplate.from_dict(row) for row in rows if isinstance(row, dict)]
