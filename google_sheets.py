import json
import logging
import math
from typing import List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from exceptions import ConfigurationError
from models import SheetRow, Submission

logger = logging.getLogger(__name__)

# Constants
SCOPES = ['https://www.googleapis.com/auth/spreadsheets']
DEFAULT_SHEET_NAME = 'Sheet1'
SERIAL_COLUMN = 'A'
LAST_COLUMN = 'H'
HEADER_ROWS = 1

# Errors that mean the Sheets API call did not complete
TRANSPORT_ERRORS = (HttpError, httplib2.HttpLib2Error, GoogleAuthError, OSError)


def load_credentials(creds_json: Optional[str]):
    """Build service-account credentials from the JSON text in GOOGLE_CREDENTIALS"""
    if not creds_json:
        raise ConfigurationError("GOOGLE_CREDENTIALS environment variable not set")
    try:
        info = json.loads(creds_json)
        return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
    except (ValueError, KeyError) as e:
        raise ConfigurationError(f"GOOGLE_CREDENTIALS is not a valid service account key: {e}") from e


def _as_serial(cell) -> Optional[int]:
    if isinstance(cell, bool):
        return None
    if isinstance(cell, int):
        return cell
    try:
        number = float(str(cell).strip())
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def next_serial(values: List[List[object]]) -> int:
    """Largest numeric serial in the column plus one; headers and junk are skipped."""
    serials = []
    for row in values:
        serial = _as_serial(row[0]) if row else None
        if serial is not None:
            serials.append(serial)
    return max(serials, default=0) + 1


def next_row(values: List[List[object]]) -> int:
    """1-based sheet row just below the last populated one, never the header row."""
    return max(len(values), HEADER_ROWS) + 1


class SheetsClient:
    """Appends lead rows to the studio's Google Sheet.

    The discovery client and credentials are shared. httplib2 connections are
    not thread-safe, so every API call runs on its own authorised connection.
    """

    def __init__(self, service, credentials, spreadsheet_id: str,
                 sheet_name: str = DEFAULT_SHEET_NAME, default_status: str = 'Pending',
                 timeout: float = 10.0):
        self.service = service
        self.credentials = credentials
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self.default_status = default_status
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "SheetsClient":
        credentials = load_credentials(settings.google_credentials)
        service = build('sheets', 'v4', credentials=credentials, cache_discovery=False)
        return cls(
            service,
            credentials,
            settings.google_sheet_id,
            sheet_name=settings.google_sheet_name,
            default_status=settings.sheet_default_status,
            timeout=settings.outbound_timeout_seconds,
        )

    def close(self):
        self.service.close()

    def _http(self) -> AuthorizedHttp:
        return AuthorizedHttp(self.credentials, http=httplib2.Http(timeout=self.timeout))

    def read_serial_column(self) -> List[List[object]]:
        result = self.service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=f"{self.sheet_name}!{SERIAL_COLUMN}:{SERIAL_COLUMN}",
            valueRenderOption='UNFORMATTED_VALUE',
        ).execute(http=self._http())
        return result.get('values', [])

    def build_row(self, submission: Submission, serial: int) -> SheetRow:
        return SheetRow(
            serial=serial,
            name=submission.name,
            phone=submission.phone or '',
            email=submission.email,
            status=self.default_status,
            reason=submission.message,
        )

    def append_submission(self, submission: Submission) -> SheetRow:
        """Write the submission one row below the last populated row.

        The read of the serial column and the write are separate requests with
        no lock between them: two concurrent submissions can get the same
        serial and overwrite the same row. This is a known, accepted race.
        """
        values = self.read_serial_column()
        row = self.build_row(submission, next_serial(values))
        row_number = next_row(values)

        self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=f"{self.sheet_name}!{SERIAL_COLUMN}{row_number}:{LAST_COLUMN}{row_number}",
            valueInputOption='RAW',
            body={'values': [row.to_values()]},
        ).execute(http=self._http())

        logger.info(f"Appended record {row.serial} at {self.sheet_name} row {row_number}")
        return row
