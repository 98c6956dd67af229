from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Sender credentials, supplied by the operator
    email_user: Optional[str] = None
    email_pass: Optional[str] = None

    # Comma-separated list of addresses that receive each enquiry
    recipient_emails: Optional[str] = None

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465

    # Google Sheets lead register; the append is enabled when the sheet id is set
    google_credentials: Optional[str] = None
    google_sheet_id: Optional[str] = None
    google_sheet_name: str = "Sheet1"
    sheet_default_status: str = "Pending"

    contact_rate_limit: str = "5/hour"
    outbound_timeout_seconds: float = 10.0

    allowed_origins: List[str] = ["*"]
    allowed_hosts: List[str] = ["*"]
    forwarded_allow_ips: str = "127.0.0.1"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def recipients(self) -> List[str]:
        if not self.recipient_emails:
            return []
        return [addr.strip() for addr in self.recipient_emails.split(",") if addr.strip()]

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_pass and self.recipients)

    @property
    def sheets_enabled(self) -> bool:
        return bool(self.google_sheet_id)


@lru_cache
def get_settings() -> Settings:
    return Settings()
