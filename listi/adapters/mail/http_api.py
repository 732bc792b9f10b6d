"""
Transactional email HTTP API adapter - Implements MailSender protocol.

Posts ``{from, to, subject, html}`` as JSON with a bearer API key, which is
the request shape used by Resend-style providers.
"""

import logging

import requests

from listi.domain.exceptions import MailError

logger = logging.getLogger(__name__)


class HttpApiMailSender:
    """Implements MailSender protocol via a transactional email HTTP API."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        from_address: str,
        from_name: str = "LISTI",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._sender = f"{from_name} <{from_address}>"
        self._timeout = timeout
        self._session = session or requests.Session()

    def send(self, to: str, subject: str, html: str) -> None:
        """
        Deliver an HTML email through the provider API.

        Raises:
            MailError: On connection errors or a non-2xx response
        """
        payload = {"from": self._sender, "to": [to], "subject": subject, "html": html}
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            response = self._session.post(
                self._api_url, json=payload, headers=headers, timeout=self._timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise MailError(f"Mail API delivery to {to} failed: {e}") from e

        logger.info("Sent mail to %s via %s", to, self._api_url)
