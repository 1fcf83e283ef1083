"""
app/dependencies.py

Purpose: FastAPI dependency providers

- Stores bound to their MongoDB collections
- Services built from settings
- Bearer token authentication for provider routes
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request

from app.core.cache import TTLCache
from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.security import TokenIssuer, get_token_issuer
from app.db.account_store import AccountStore
from app.db.click_store import ClickStore
from app.db.mongo import get_accounts_collection, get_clicks_collection, get_services_collection
from app.db.provider_store import ProviderStore
from app.services.auth_service import AuthService
from app.services.click_service import ClickService
from app.services.profile_service import ProfileService
from app.services.provider_service import ProviderService
from app.services.sms_service import SmsSender, get_sms_sender
from app.services.verification_service import VerificationService
from utils.constants import TOKEN_INVALID_MESSAGE, TOKEN_MISSING_MESSAGE


def get_account_store() -> AccountStore:
    return AccountStore(get_accounts_collection())


def get_provider_store() -> ProviderStore:
    return ProviderStore(get_services_collection())


def get_click_store() -> ClickStore:
    return ClickStore(get_clicks_collection())


def get_verification_service(store: AccountStore = Depends(get_account_store)) -> VerificationService:
    return VerificationService(
        store,
        code_ttl_minutes=settings.VERIFICATION_CODE_TTL_MINUTES,
        code_length=settings.VERIFICATION_CODE_LENGTH,
    )


def get_auth_service(
    verification: VerificationService = Depends(get_verification_service),
    sms_sender: SmsSender = Depends(get_sms_sender),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(
        verification,
        sms_sender,
        token_issuer,
        brand_name=settings.SMS_BRAND_NAME,
        expose_code=settings.EXPOSE_VERIFICATION_CODE,
    )


def get_services_cache(request: Request) -> TTLCache:
    """The directory search cache is created with the app and lives on app.state"""
    return request.app.state.services_cache


def get_provider_service(
    store: ProviderStore = Depends(get_provider_store),
    cache: TTLCache = Depends(get_services_cache),
) -> ProviderService:
    return ProviderService(store, cache)


def get_click_service(store: ClickStore = Depends(get_click_store)) -> ClickService:
    return ClickService(store)


def get_profile_service(
    store: ProviderStore = Depends(get_provider_store),
    cache: TTLCache = Depends(get_services_cache),
) -> ProfileService:
    return ProfileService(store, purge_after_days=settings.PROFILE_PURGE_AFTER_DAYS, cache=cache)


async def get_current_account(
    authorization: Optional[str] = Header(None),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> Dict[str, Any]:
    """Dependency returning the claims of a valid bearer token"""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError(TOKEN_MISSING_MESSAGE)

    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AuthenticationError(TOKEN_MISSING_MESSAGE)

    try:
        claims = token_issuer.decode(token)
    except AuthenticationError as e:
        raise AuthenticationError(TOKEN_INVALID_MESSAGE) from e

    if not claims.get("phone"):
        raise AuthenticationError(TOKEN_INVALID_MESSAGE)
    return claims
