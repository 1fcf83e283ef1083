"""
app/services/verification_service.py

Purpose: Phone verification lifecycle

- register: issue a fresh code, restart the trust boundary
- verify: single-use code check, then mark the account verified
- cleanup_expired: maintenance sweep over stale codes

States per account: NO_PENDING -> PENDING -> NO_PENDING (verify or cleanup).
Failed verifications never mutate the account.
"""

from datetime import datetime
from typing import Callable

from app.core.exceptions import (
    AccountNotFoundError,
    CodeExpiredError,
    InvalidCodeError,
    ValidationError,
)
from app.core.logging import get_logger, LogContext
from app.core.security import codes_match, generate_verification_code
from app.db.account_store import AccountStore
from app.models.account import Account, VerificationState
from utils.constants import (
    ACCOUNT_NOT_FOUND_MESSAGE,
    CODE_EXPIRED_MESSAGE,
    INCORRECT_CODE_MESSAGE,
    INVALID_CODE_FORMAT_MESSAGE,
    INVALID_PHONE_MESSAGE,
)
from utils.time_utils import calculate_code_expiry, is_code_expired, utc_now
from utils.validation_utils import validate_account_phone, validate_code_format

logger = get_logger(__name__)


class VerificationService:
    """Owns the register -> verify lifecycle of accounts."""

    def __init__(
        self,
        store: AccountStore,
        code_ttl_minutes: int = 10,
        code_length: int = 6,
        clock: Callable[[], datetime] = utc_now,
        code_generator: Callable[[int], str] = generate_verification_code,
    ):
        self.store = store
        self.code_ttl_minutes = code_ttl_minutes
        self.code_length = code_length
        self.clock = clock
        self.code_generator = code_generator

    async def register(self, phone: str) -> Account:
        """
        Issues a new code for `phone`, creating the account on first use.
        Any previous verification is revoked.

        Returns:
            The stored account, including the pending code

        Raises:
            ValidationError: If the phone is not in international format
        """
        if not validate_account_phone(phone):
            raise ValidationError(INVALID_PHONE_MESSAGE, details={"field": "phone"})

        with LogContext(phone=phone):
            account = await self.store.find_by_phone(phone)
            if account is None:
                logger.info("Creating new account")
                account = Account(phone=phone)

            now = self.clock()
            account.pending_code = self.code_generator(self.code_length)
            account.code_expires_at = calculate_code_expiry(now, self.code_ttl_minutes)
            account.verified = False

            stored = await self.store.upsert(account)
            logger.info(f"Verification code issued, expires at {stored.code_expires_at.isoformat()}")
            return stored

    async def verify(self, phone: str, code: str) -> Account:
        """
        Checks `code` against the pending code of `phone`.
        The match is checked before expiry: an expired matching code is
        reported as expired, never as a success.

        Returns:
            The stored account, verified and with no pending code

        Raises:
            ValidationError: Malformed phone or code
            AccountNotFoundError: No account for phone
            InvalidCodeError: No pending code, or mismatch
            CodeExpiredError: Matching code past its window
        """
        if not validate_account_phone(phone):
            raise ValidationError(INVALID_PHONE_MESSAGE, details={"field": "phone"})
        if not validate_code_format(code, self.code_length):
            raise ValidationError(
                INVALID_CODE_FORMAT_MESSAGE.format(length=self.code_length),
                details={"field": "code"}
            )

        with LogContext(phone=phone):
            account = await self.store.find_by_phone(phone)
            if account is None:
                logger.warning("Verification attempted for unknown phone")
                raise AccountNotFoundError(ACCOUNT_NOT_FOUND_MESSAGE)

            if not codes_match(account.pending_code, code):
                logger.warning("Incorrect verification code")
                raise InvalidCodeError(INCORRECT_CODE_MESSAGE)

            if is_code_expired(account.code_expires_at, self.clock()):
                logger.warning("Expired verification code")
                raise CodeExpiredError(CODE_EXPIRED_MESSAGE)

            account.verified = True
            account.pending_code = None
            account.code_expires_at = None

            stored = await self.store.upsert(account)
            logger.info("Phone verified")
            return stored

    async def cleanup_expired(self) -> int:
        """
        Clears every expired code. Idempotent: a second run returns 0.

        Returns:
            Number of accounts whose code was cleared
        """
        cleared = await self.store.bulk_clear_expired_codes(self.clock())
        logger.info(f"Expired code cleanup executed, accounts cleared: {cleared}")
        return cleared

    async def state_of(self, phone: str) -> VerificationState:
        """Verification state of `phone`; unknown phones have no pending code."""
        account = await self.store.find_by_phone(phone)
        if account is None:
            return VerificationState.NO_PENDING
        return account.state(self.clock())
