"""
app/services/auth_service.py

Purpose: SMS authentication façade

- register: issue a code and prepare its SMS
- deliver_code: send the SMS after the response; failures are only logged
- verify: check the code and mint an access token
- cleanup: expired-code maintenance sweep

Incorrect and expired codes keep distinct errors. This tells a caller that a
code existed but expired, which is a minor enumeration side channel kept for
UX and pending security review.
"""

from dataclasses import dataclass
from datetime import datetime

from app.core.exceptions import TransportError
from app.core.logging import get_logger, LogContext
from app.core.security import TokenIssuer
from app.models.account import Account
from app.services.sms_service import SmsSender
from app.services.verification_service import VerificationService
from utils.constants import VERIFICATION_SMS_TEMPLATE

logger = get_logger(__name__)


@dataclass
class RegistrationResult:
    phone: str
    expires_at: datetime
    code: str
    code_exposed: bool = False  # Echo the code to the caller (development only)


@dataclass
class VerificationResult:
    account: Account
    token: str


class AuthService:
    """Composes verification, SMS delivery and token issuance."""

    def __init__(
        self,
        verification: VerificationService,
        sms_sender: SmsSender,
        token_issuer: TokenIssuer,
        brand_name: str = "SERVIPRO",
        expose_code: bool = False,
    ):
        self.verification = verification
        self.sms_sender = sms_sender
        self.token_issuer = token_issuer
        self.brand_name = brand_name
        self.expose_code = expose_code

    def build_sms_message(self, code: str) -> str:
        return VERIFICATION_SMS_TEMPLATE.format(brand=self.brand_name, code=code)

    async def register(self, phone: str) -> RegistrationResult:
        """
        Issues a verification code for `phone`.
        The SMS is not sent here; callers schedule deliver_code.
        """
        account = await self.verification.register(phone)
        return RegistrationResult(
            phone=account.phone,
            expires_at=account.code_expires_at,
            code=account.pending_code,
            code_exposed=self.expose_code,
        )

    async def deliver_code(self, phone: str, code: str) -> bool:
        """
        Sends the verification SMS. The stored code stays valid when delivery fails.

        Returns:
            True if the provider accepted the message
        """
        with LogContext(phone=phone):
            try:
                message_id = await self.sms_sender.send(phone, self.build_sms_message(code))
            except TransportError as e:
                logger.error(f"Verification SMS failed: {e.message}")
                return False

            logger.info(f"Verification SMS accepted: {message_id}")
            return True

    async def verify(self, phone: str, code: str) -> VerificationResult:
        account = await self.verification.verify(phone, code)
        token = self.token_issuer.issue(account)
        with LogContext(phone=account.phone):
            logger.info("Account verified and token issued")
        return VerificationResult(account=account, token=token)

    async def cleanup(self) -> int:
        return await self.verification.cleanup_expired()
