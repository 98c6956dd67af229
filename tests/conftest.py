"""Test fixtures and configuration."""

import pytest
from unittest.mock import MagicMock

from email_sender import EmailSender
from forwarder import Forwarder
from google_sheets import SheetsClient
from models import Submission

RECIPIENTS = ["studio@example.com", "sales@example.com"]


@pytest.fixture
def submission():
    """A complete, valid enquiry."""
    return Submission(
        name="Asha Verma",
        email="asha@example.com",
        phone="+91 98765 43210",
        message="Looking for a teak dining table.\nSeats six.",
    )


@pytest.fixture
def email_sender():
    """EmailSender that never opens a connection."""
    return MagicMock(spec=EmailSender)


@pytest.fixture
def sheets_client():
    """SheetsClient stand-in for the forwarder."""
    return MagicMock(spec=SheetsClient)


@pytest.fixture
def forwarder(email_sender):
    """Email-only forwarder."""
    return Forwarder(email_sender, RECIPIENTS)


@pytest.fixture
def sheets_service():
    """Mock Google Sheets discovery client with an empty serial column."""
    service = MagicMock()
    values = service.spreadsheets.return_value.values.return_value
    values.get.return_value.execute.return_value = {"values": [["S.No"]]}
    values.update.return_value.execute.return_value = {"updatedRows": 1}
    return service
