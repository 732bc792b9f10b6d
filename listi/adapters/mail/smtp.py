"""
SMTP mail sender adapter - Implements MailSender protocol over smtplib.

Connects per message, upgrades with STARTTLS when configured and logs in
when credentials are present.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr

from listi.domain.exceptions import MailError

logger = logging.getLogger(__name__)


class SmtpMailSender:
    """Implements MailSender protocol via an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        from_address: str,
        from_name: str = "LISTI",
        username: str | None = None,
        password: str | None = None,
        starttls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = formataddr((from_name, from_address))
        self._username = username
        self._password = password
        self._starttls = starttls
        self._timeout = timeout

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML capable mail client.")
        message.add_alternative(html, subtype="html")
        return message

    def send(self, to: str, subject: str, html: str) -> None:
        """
        Deliver an HTML email through the relay.

        Raises:
            MailError: On any SMTP protocol or connection failure
        """
        message = self.build_message(to, subject, html)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                if self._starttls:
                    server.starttls(context=ssl.create_default_context())
                if self._username and self._password:
                    server.login(self._username, self._password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise MailError(f"SMTP delivery to {to} failed: {e}") from e

        logger.info("Sent mail to %s via %s:%s", to, self._host, self._port)
