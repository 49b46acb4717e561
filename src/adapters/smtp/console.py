"""
Console notifier adapter - Implements Notifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging activation codes to stdout for demo purposes.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """
    Implements Notifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints activation codes to stdout.
    """

    def send_activation_email(self, email: str, name: str, activation_code: str) -> None:
        """
        Log activation code to console (simulates email delivery).

        In production, this would be replaced with an SMTP adapter.
        The code is logged at INFO level to be visible in docker-compose logs.

        Args:
            email: Recipient email address (normalized by domain layer)
            name: Recipient display name
            activation_code: 4-digit activation code
        """
        logger.info("[ACTIVATION] Email: %s Name: %s Code: %s", email, name, activation_code)
