"""
app/core/security.py

Purpose: One-time codes and signed access tokens

- Generates numeric verification codes
- Issues JWT access tokens for verified accounts
- Decodes and validates bearer tokens
"""

import hmac
import secrets
from datetime import datetime, timedelta
from typing import Optional, Dict, Any, Callable

import jwt as pyjwt
from jwt.exceptions import PyJWTError as JWTError

from app.core.config import settings
from app.core.exceptions import AuthenticationError, ConfigurationError
from app.models.account import Account
from utils.time_utils import parse_duration, utc_now

PROVIDER_ROLE = "provider"


def generate_verification_code(length: int = 6) -> str:
    """
    Generate a numeric code, uniform over the full range including leading zeros.
    """
    return f"{secrets.randbelow(10 ** length):0{length}d}"


def codes_match(expected: Optional[str], supplied: str) -> bool:
    """Constant-time comparison; an absent expected code never matches."""
    if not expected:
        return False
    return hmac.compare_digest(expected.encode(), supplied.encode())


class TokenIssuer:
    """
    Mints and verifies signed, time-bound access tokens.
    """

    def __init__(
        self,
        secret: Optional[str],
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret:
            raise ConfigurationError("JWT_SECRET is not configured")
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.clock = clock

    def issue(self, account: Account, role: str = PROVIDER_ROLE) -> str:
        """Create JWT access token for a verified account"""
        now = self.clock()
        payload = {
            "sub": str(account.id),
            "phone": account.phone,
            "verified": account.verified,
            "role": role,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return pyjwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Decode and verify a JWT token.

        Raises:
            AuthenticationError: On bad signature, malformed or expired token
        """
        try:
            return pyjwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except JWTError as e:
            raise AuthenticationError("Invalid or expired token") from e


_token_issuer: Optional[TokenIssuer] = None


def get_token_issuer() -> TokenIssuer:
    """Get the process-wide token issuer built from settings"""
    global _token_issuer
    if _token_issuer is None:
        _token_issuer = TokenIssuer(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            expires_in=parse_duration(settings.JWT_EXPIRES_IN),
        )
    return _token_issuer
