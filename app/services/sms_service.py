"""
app/services/sms_service.py

Purpose: SMS sender collaborator

- Common interface for outbound SMS
- Console sender that only logs the message (development)
- Factory choosing the sender from settings
"""

import uuid
from typing import Optional

from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.core.logging import get_logger, mask_phone

logger = get_logger(__name__)


class SmsSender:
    """Outbound SMS transport."""

    async def send(self, to_phone: str, message: str) -> str:
        """
        Delivers `message` to `to_phone`.

        Returns:
            Provider message id

        Raises:
            TransportError: If the provider rejects or cannot accept the message
        """
        raise NotImplementedError


class ConsoleSmsSender(SmsSender):
    """Logs messages instead of sending them."""

    async def send(self, to_phone: str, message: str) -> str:
        logger.info(f"(SIMULATED) SMS to {mask_phone(to_phone)}: {message}")
        return f"console-{uuid.uuid4().hex[:12]}"


_sms_sender: Optional[SmsSender] = None


def get_sms_sender() -> SmsSender:
    """
    Returns the process-wide SMS sender selected by SMS_PROVIDER.

    Raises:
        ConfigurationError: If Twilio is selected without credentials
    """
    global _sms_sender
    if _sms_sender is None:
        if settings.SMS_PROVIDER == "twilio":
            from app.services.twilio_service import TwilioSmsSender

            sender = TwilioSmsSender(
                account_sid=settings.TWILIO_ACCOUNT_SID or "",
                auth_token=settings.TWILIO_AUTH_TOKEN or "",
                from_number=settings.TWILIO_PHONE_NUMBER or "",
                timeout=settings.TWILIO_TIMEOUT_SECONDS,
            )
            if not sender.is_configured():
                raise ConfigurationError("Twilio credentials are not configured")
            _sms_sender = sender
        else:
            _sms_sender = ConsoleSmsSender()
    return _sms_sender
