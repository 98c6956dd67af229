from typing import Dict, Union

from exceptions import ValidationError
from models import EscapedSubmission, Submission
from schemas import ContactForm

REQUIRED_FIELDS = ("name", "email", "message")
PHONE_PLACEHOLDER = "Not provided"
LINE_BREAK = "<br/>"

# Order matters: "&" must go first so the other entities are not escaped twice.
_HTML_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(unsafe: str) -> str:
    for char, entity in _HTML_REPLACEMENTS:
        unsafe = unsafe.replace(char, entity)
    return unsafe


def validate_submission(form: Union[ContactForm, Dict]) -> Submission:
    """Turn a parsed request body into a Submission, or raise ValidationError."""
    if isinstance(form, dict):
        try:
            form = ContactForm.model_validate(form)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    missing = [field for field in REQUIRED_FIELDS if not getattr(form, field)]
    if missing:
        raise ValidationError(f"missing fields: {', '.join(missing)}")

    return Submission(
        name=form.name,
        email=form.email,
        message=form.message,
        phone=form.phone or None,
    )


def escape_submission(submission: Submission) -> EscapedSubmission:
    return EscapedSubmission(
        name=escape_html(submission.name),
        email=escape_html(submission.email),
        phone=escape_html(submission.phone) if submission.phone else PHONE_PLACEHOLDER,
        message=escape_html(submission.message).replace("\n", LINE_BREAK),
    )
