import os
from datetime import datetime, timezone
from jinja2 import Environment, FileSystemLoader, select_autoescape

from mentorhub.dto.email_dto import RenderedEmailDto

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "..", "templates", "email")


class EmailTemplateRenderer:
    """
    Renders the mentorship email templates under `mentorhub/templates/email`.

    Each message has a `<name>.html` template extending `layout.html` and a
    plain `<name>.txt` template;
    HTML output is autoescaped, text output is not.
    """

    def __init__(self, app_name: str, app_url: str):
        """
        Args:
            app_name (str): Organization name shown in headers and footers.
            app_url (str): Base URL used for call-to-action links.
        """
        self.app_name = app_name
        self.app_url = app_url.rstrip("/")
        self.html_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=select_autoescape(["html"]),
        )
        self.text_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=False,
            keep_trailing_newline=False,
        )

    def _render(self, name: str, subject: str, **context) -> RenderedEmailDto:
        context = {
            "app_name": self.app_name,
            "app_url": self.app_url,
            "current_year": datetime.now(timezone.utc).year,
            "subject": subject,
            **context,
        }
        html = self.html_env.get_template(f"{name}.html").render(**context)
        text = self.text_env.get_template(f"{name}.txt").render(**context)
        return RenderedEmailDto(subject=subject, html=html, text=text.strip())

    def render_request_received(
        self,
        mentor_name: str,
        mentee_name: str,
        mentee_email: str,
        goals: str | None = None,
    ) -> RenderedEmailDto:
        """Email to a mentor announcing a new pending request."""
        return self._render(
            "request_received",
            subject=f"New Mentorship Request from {mentee_name}",
            mentor_name=mentor_name,
            mentee_name=mentee_name,
            mentee_email=mentee_email,
            goals=goals,
        )

    def render_request_sent(
        self, mentee_name: str, mentor_name: str
    ) -> RenderedEmailDto:
        """Confirmation to a mentee that their request was delivered."""
        return self._render(
            "request_sent",
            subject=f"Mentorship Request Sent to {mentor_name}",
            mentee_name=mentee_name,
            mentor_name=mentor_name,
        )

    def render_request_accepted(
        self, mentee_name: str, mentor_name: str, mentor_email: str
    ) -> RenderedEmailDto:
        """Email to a mentee whose request was accepted."""
        return self._render(
            "request_accepted",
            subject=f"Mentorship Request Accepted by {mentor_name}",
            mentee_name=mentee_name,
            mentor_name=mentor_name,
            mentor_email=mentor_email,
        )

    def render_request_rejected(
        self, mentee_name: str, mentor_name: str
    ) -> RenderedEmailDto:
        """Email to a mentee whose request was declined."""
        return self._render(
            "request_rejected",
            subject=f"Mentorship Request Update from {mentor_name}",
            mentee_name=mentee_name,
            mentor_name=mentor_name,
        )

    def render_mentor_application_received(
        self,
        applicant_name: str,
        applicant_email: str,
        expertise_areas: list[str],
        headline: str | None = None,
    ) -> RenderedEmailDto:
        """Email to the admins announcing a new mentor application."""
        return self._render(
            "mentor_application_received",
            subject=f"New Mentor Application from {applicant_name}",
            applicant_name=applicant_name,
            applicant_email=applicant_email,
            expertise_areas=expertise_areas,
            headline=headline,
        )

    def render_mentor_application_reviewed(
        self, applicant_name: str, approved: bool, admin_notes: str | None = None
    ) -> RenderedEmailDto:
        """Email to an applicant with the review decision on their mentor application."""
        subject = (
            "Your Mentor Application Was Approved"
            if approved
            else "Update on Your Mentor Application"
        )
        return self._render(
            "mentor_application_reviewed",
            subject=subject,
            applicant_name=applicant_name,
            approved=approved,
            admin_notes=admin_notes,
        )
