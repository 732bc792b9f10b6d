"""
Console mail sender adapter - Implements MailSender protocol.

This module provides a console-based implementation of the domain's
mail sender port, logging outgoing mail for local development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleMailSender:
    """
    Implements MailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For development purposes - the rendered body carries the code.
    """

    def send(self, to: str, subject: str, html: str) -> None:
        """
        Log an outgoing email instead of delivering it.

        Args:
            to: Recipient email address
            subject: Subject line
            html: HTML body
        """
        logger.info("[MAIL] To: %s Subject: %s\n%s", to, subject, html)
