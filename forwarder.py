import logging
from dataclasses import dataclass
from typing import List, Optional

from email_sender import TRANSPORT_ERRORS as EMAIL_ERRORS
from email_sender import EmailSender
from exceptions import ConfigurationError, DeliveryError, RecordsError
from google_sheets import TRANSPORT_ERRORS as SHEETS_ERRORS
from google_sheets import SheetsClient
from intake import PHONE_PLACEHOLDER, escape_submission
from models import SheetRow, Submission

logger = logging.getLogger(__name__)

SUBJECT = "SALES ENQUIRY"
EMAIL_SENT = "Email sent successfully"
EMAIL_SENT_AND_RECORDED = "Email sent and records updated successfully"


def render_text(submission: Submission) -> str:
    return (
        f"Name : {submission.name}\n"
        f"Phone Number : {submission.phone or PHONE_PLACEHOLDER}\n"
        f"Email : {submission.email}\n"
        f"\n"
        f"Message : {submission.message}\n"
    )


def render_html(submission: Submission) -> str:
    safe = escape_submission(submission)
    return (
        f"<h3>{SUBJECT}</h3>\n"
        f"<p><strong>Name :</strong> {safe.name}</p>\n"
        f"<p><strong>Phone Number :</strong> {safe.phone}</p>\n"
        f"<p><strong>Email :</strong> {safe.email}</p>\n"
        f"<br/>\n"
        f"<p><strong>Message :</strong></p>\n"
        f"<p>{safe.message}</p>\n"
    )


@dataclass
class ForwardResult:
    message: str
    row: Optional[SheetRow] = None


class Forwarder:
    """Emails a submission to the studio, then records it in the lead sheet."""

    def __init__(self, email_sender: EmailSender, recipients: List[str],
                 sheets: Optional[SheetsClient] = None):
        self.email_sender = email_sender
        self.recipients = recipients
        self.sheets = sheets

    @classmethod
    def from_settings(cls, settings) -> "Forwarder":
        if not settings.email_user or not settings.email_pass:
            raise ConfigurationError("EMAIL_USER or EMAIL_PASS is missing")
        if not settings.recipients:
            raise ConfigurationError("RECIPIENT_EMAILS is missing")

        sender = EmailSender(
            settings.smtp_host,
            settings.smtp_port,
            settings.email_user,
            settings.email_pass,
            timeout=settings.outbound_timeout_seconds,
        )
        sheets = None
        if settings.sheets_enabled:
            try:
                sheets = SheetsClient.from_settings(settings)
            except ConfigurationError as e:
                logger.warning(f"Sheet append disabled, sending email only: {e.detail}")
        return cls(sender, settings.recipients, sheets)

    def close(self) -> None:
        if self.sheets is not None:
            self.sheets.close()

    def send_email(self, submission: Submission) -> None:
        try:
            self.email_sender.send(
                self.recipients,
                SUBJECT,
                render_text(submission),
                render_html(submission),
            )
        except EMAIL_ERRORS as e:
            logger.error(f"Error sending email: {e!r}")
            raise DeliveryError(str(e)) from e
        except Exception as e:
            logger.exception("Unexpected error sending email")
            raise DeliveryError(str(e)) from e

    def record(self, submission: Submission) -> SheetRow:
        try:
            return self.sheets.append_submission(submission)
        except SHEETS_ERRORS as e:
            logger.error(f"Google Sheets API Error: {getattr(e, 'content', e)!r}")
            raise RecordsError(str(e)) from e
        except Exception as e:
            logger.exception("Unexpected error updating records")
            raise RecordsError(str(e)) from e

    def forward(self, submission: Submission) -> ForwardResult:
        # Not idempotent: the same submission sent twice yields two emails and two rows.
        self.send_email(submission)
        if self.sheets is None:
            return ForwardResult(EMAIL_SENT)
        return ForwardResult(EMAIL_SENT_AND_RECORDED, self.record(submission))
