import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import List

logger = logging.getLogger(__name__)

# Errors that mean the message did not reach the mail server
TRANSPORT_ERRORS = (smtplib.SMTPException, OSError)


class EmailSender:
    """Sends mail through an SMTP-over-SSL relay with fixed sender credentials.

    Built once at startup; each send opens its own short-lived session.
    """

    def __init__(self, host: str, port: int, user: str, password: str, timeout: float = 10.0):
        self.host = host
        self.port = port
        self.user = user
        self._password = password
        self.timeout = timeout
        self._context = ssl.create_default_context()

    def build_message(self, recipients: List[str], subject: str, text: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.user
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")
        return msg

    def send(self, recipients: List[str], subject: str, text: str, html: str) -> None:
        msg = self.build_message(recipients, subject, text, html)
        logger.info(f"Attempting to send email to: {', '.join(recipients)}")
        with smtplib.SMTP_SSL(self.host, self.port, context=self._context, timeout=self.timeout) as smtp:
            smtp.login(self.user, self._password)
            smtp.send_message(msg)
