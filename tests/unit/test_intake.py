"""Tests for request validation and HTML escaping."""

import pytest

from exceptions import ValidationError
from intake import escape_html, escape_submission, validate_submission
from models import Submission
from schemas import ContactForm


class TestValidateSubmission:

    def test_valid_form(self):
        """All required fields present yields a Submission."""
        form = ContactForm(name="Asha", email="asha@example.com", phone="123", message="Hi")
        submission = validate_submission(form)

        assert submission == Submission(name="Asha", email="asha@example.com", phone="123", message="Hi")

    def test_phone_is_optional(self):
        """Missing or empty phone is accepted and stored as None."""
        assert validate_submission({"name": "A", "email": "a@b.c", "message": "m"}).phone is None
        assert validate_submission({"name": "A", "email": "a@b.c", "phone": "", "message": "m"}).phone is None

    @pytest.mark.parametrize("missing", ["name", "email", "message"])
    def test_missing_required_field(self, missing):
        """Each required field is enforced with the fixed message."""
        payload = {"name": "A", "email": "a@b.c", "message": "m"}
        del payload[missing]

        with pytest.raises(ValidationError) as exc_info:
            validate_submission(payload)
        assert exc_info.value.message == "Missing required fields"
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("missing", ["name", "email", "message"])
    def test_empty_required_field(self, missing):
        """Empty strings count as missing."""
        payload = {"name": "A", "email": "a@b.c", "message": "m", missing: ""}

        with pytest.raises(ValidationError):
            validate_submission(payload)

    def test_non_string_value_rejected(self):
        """Fields must be strings."""
        with pytest.raises(ValidationError):
            validate_submission({"name": ["A"], "email": "a@b.c", "message": "m"})


class TestEscaping:

    def test_escape_mapping(self):
        """Every special character maps to its fixed entity."""
        assert escape_html("&<>\"'") == "&amp;&lt;&gt;&quot;&#039;"

    def test_escape_applied_once(self):
        """Existing entities are escaped again, not left alone."""
        assert escape_html("&amp;") == "&amp;amp;"

    def test_plain_text_unchanged(self):
        assert escape_html("Teak table, 6 seats") == "Teak table, 6 seats"

    def test_escape_submission(self):
        """Message newlines become <br/> after escaping."""
        submission = Submission(
            name="<b>Asha</b>",
            email="a&b@example.com",
            phone="'123'",
            message='Line "one"\n<script>',
        )
        safe = escape_submission(submission)

        assert safe.name == "&lt;b&gt;Asha&lt;/b&gt;"
        assert safe.email == "a&amp;b@example.com"
        assert safe.phone == "&#039;123&#039;"
        assert safe.message == "Line &quot;one&quot;<br/>&lt;script&gt;"

    def test_escape_submission_does_not_mutate(self):
        """The raw submission keeps its original values."""
        submission = Submission(name="<b>", email="e", message="a\nb")
        escape_submission(submission)

        assert submission.name == "<b>"
        assert submission.message == "a\nb"

    def test_missing_phone_placeholder(self):
        submission = Submission(name="A", email="e", message="m")
        assert escape_submission(submission).phone == "Not provided"
