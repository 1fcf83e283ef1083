"""
app/api/auth.py

Purpose: SMS authentication endpoints

- POST /auth/register: issue a code; the SMS goes out after the response
- POST /auth/verify: exchange a valid code for an access token
- DELETE /auth/cleanup: clear expired codes

Register and verify share one per-IP rate limit.
"""

from fastapi import APIRouter, BackgroundTasks, Depends

from app.core.rate_limiter import enforce_auth_rate_limit
from app.dependencies import get_auth_service
from app.schemas.auth import (
    CleanupResponse,
    RegisterRequest,
    RegisterResponse,
    VerifyRequest,
    VerifyResponse,
)
from app.services.auth_service import AuthService
from utils.constants import (
    CODE_SENT_DEV_MESSAGE,
    CODE_SENT_MESSAGE,
    CODES_CLEANED_MESSAGE,
    PHONE_VERIFIED_MESSAGE,
)

router = APIRouter(prefix="/auth")


@router.post(
    "/register",
    response_model=RegisterResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(enforce_auth_rate_limit)],
)
async def register(
    payload: RegisterRequest,
    background_tasks: BackgroundTasks,
    auth: AuthService = Depends(get_auth_service),
):
    """
    Issues a verification code for the phone, creating the account on first use.
    Any earlier verification of the phone is revoked.
    """
    result = await auth.register(payload.phone)
    background_tasks.add_task(auth.deliver_code, result.phone, result.code)

    if result.code_exposed:
        return RegisterResponse(
            message=CODE_SENT_DEV_MESSAGE,
            phone=result.phone,
            expires_at=result.expires_at,
            code=result.code,
        )
    return RegisterResponse(
        message=CODE_SENT_MESSAGE,
        phone=result.phone,
        expires_at=result.expires_at,
    )


@router.post(
    "/verify",
    response_model=VerifyResponse,
    dependencies=[Depends(enforce_auth_rate_limit)],
)
async def verify(payload: VerifyRequest, auth: AuthService = Depends(get_auth_service)):
    result = await auth.verify(payload.phone, payload.code)
    return VerifyResponse(message=PHONE_VERIFIED_MESSAGE, token=result.token)


@router.delete("/cleanup", response_model=CleanupResponse)
async def cleanup(auth: AuthService = Depends(get_auth_service)):
    cleared = await auth.cleanup()
    return CleanupResponse(message=CODES_CLEANED_MESSAGE, cleared=cleared)
