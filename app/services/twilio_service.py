"""
app/services/twilio_service.py

Purpose: Twilio SMS sending

- Sends SMS messages via the Twilio REST API
- Raises TransportError on any delivery failure
"""

import httpx
from typing import Optional

from app.core.exceptions import TransportError
from app.core.logging import get_logger, mask_phone
from app.services.sms_service import SmsSender

logger = get_logger(__name__)

TWILIO_API_URL = "https://api.twilio.com/2010-04-01"


class TwilioSmsSender(SmsSender):
    """Sends SMS messages via Twilio"""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout
        self.transport = transport
        self.base_url = f"{TWILIO_API_URL}/Accounts/{self.account_sid}"

    async def send(self, to_phone: str, message: str) -> str:
        """
        Sends an SMS via Twilio

        Args:
            to_phone: Recipient phone (+34600000000)
            message: Message text

        Returns:
            Twilio message SID

        Raises:
            TransportError: On timeout, network failure or non-2xx response
        """
        url = f"{self.base_url}/Messages.json"

        data = {
            "From": self.from_number,
            "To": to_phone,
            "Body": message
        }

        logger.info(f"📤 Sending Twilio SMS to {mask_phone(to_phone)}")

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.post(
                    url,
                    data=data,
                    auth=(self.account_sid, self.auth_token),
                )
        except httpx.TimeoutException as e:
            logger.error("Twilio API timeout")
            raise TransportError("Twilio API timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"Error sending Twilio SMS: {e}")
            raise TransportError(f"Twilio request failed: {e}") from e

        if response.status_code not in (200, 201):
            logger.error(f"❌ Twilio API error: {response.status_code} - {response.text}")
            raise TransportError(
                f"Twilio API error: {response.status_code}",
                details={"status_code": response.status_code}
            )

        result = response.json()
        logger.info(f"✅ SMS sent: SID={result.get('sid')}")
        return result.get("sid", "")

    def is_configured(self) -> bool:
        """Check if Twilio is properly configured"""
        return bool(
            self.account_sid
            and self.auth_token
            and self.from_number
            and self.account_sid != "your_twilio_sid"
        )
