"""Tests for settings parsing."""

from config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.smtp_host == "smtp.gmail.com"
    assert settings.smtp_port == 465
    assert settings.contact_rate_limit == "5/hour"
    assert settings.outbound_timeout_seconds == 10.0
    assert settings.email_configured is False
    assert settings.sheets_enabled is False


def test_recipient_list_parsing():
    settings = Settings(_env_file=None, recipient_emails=" a@example.com, ,b@example.com ,")
    assert settings.recipients == ["a@example.com", "b@example.com"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("EMAIL_USER", "studio@example.com")
    monkeypatch.setenv("EMAIL_PASS", "app-password")
    monkeypatch.setenv("RECIPIENT_EMAILS", "a@example.com")
    monkeypatch.setenv("GOOGLE_SHEET_ID", "sheet-123")

    settings = Settings(_env_file=None)

    assert settings.email_configured is True
    assert settings.sheets_enabled is True
