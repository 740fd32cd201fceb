"""
SMTP delivery of the amplifier run report.
"""

import smtplib
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from .logging_config import setup_logging

logger = setup_logging(__name__)


class EmailSender:
    """Sends the report (HTML body from reporter.py, optional plain part) over STARTTLS."""

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        smtp_user: str,
        smtp_password: str,
        from_email: str = None,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.from_email = from_email or smtp_user

        logger.info(f"EmailSender initialized: {smtp_host}:{smtp_port}")

    def send_email(
        self, to_email: str, subject: str, html_body: str, plain_body: str = None
    ) -> bool:
        """
        Send an email.

        Args:
            to_email: Recipient email address(es), comma separated
            subject: Email subject line
            html_body: HTML email body
            plain_body: Plain text fallback (optional)

        Returns:
            True if sent successfully, False otherwise
        """
        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = self.from_email
            msg["To"] = to_email
            msg["Date"] = datetime.now(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S +0000")

            if plain_body:
                msg.attach(MIMEText(plain_body, "plain"))
            msg.attach(MIMEText(html_body, "html"))

            logger.info(f"Connecting to {self.smtp_host}:{self.smtp_port}")

            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)

            logger.info(f"Email sent successfully to {to_email}: {subject}")
            return True

        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP authentication failed: {e}")
            return False

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP error: {e}")
            return False

