import asyncio
import logging

import pytest

from app.core.exceptions import CodeExpiredError, InvalidCodeError, TransportError
from app.core.security import TokenIssuer
from app.db.account_store import AccountStore
from app.services.auth_service import AuthService
from app.services.verification_service import VerificationService

PHONE = "+34600000000"
SECRET = "unit-test-secret-with-enough-length"


def make_service(collection, clock, sender, expose_code=False):
    verification = VerificationService(AccountStore(collection, clock=clock), clock=clock)
    return AuthService(
        verification,
        sender,
        TokenIssuer(SECRET),
        brand_name="SERVIPRO",
        expose_code=expose_code,
    )


def test_register_returns_code_and_flag(accounts_collection, clock, sms_sender):
    service = make_service(accounts_collection, clock, sms_sender)
    result = asyncio.run(service.register(PHONE))

    assert result.phone == PHONE
    assert result.code == accounts_collection.docs[0]["pending_code"]
    assert result.code_exposed is False
    assert sms_sender.sent == []

    exposing = make_service(accounts_collection, clock, sms_sender, expose_code=True)
    assert asyncio.run(exposing.register(PHONE)).code_exposed is True


def test_deliver_code_sends_branded_message(accounts_collection, clock, sms_sender):
    service = make_service(accounts_collection, clock, sms_sender)

    assert asyncio.run(service.deliver_code(PHONE, "123456")) is True
    assert sms_sender.sent == [(PHONE, "Tu código de verificación en SERVIPRO es: 123456")]


def test_delivery_failure_is_logged_and_code_stays_valid(accounts_collection, clock, sms_sender, caplog):
    caplog.set_level(logging.INFO)
    sms_sender.error = TransportError("Twilio API error: 500")
    service = make_service(accounts_collection, clock, sms_sender)

    result = asyncio.run(service.register(PHONE))
    assert asyncio.run(service.deliver_code(PHONE, result.code)) is False
    assert "Twilio API error: 500" in caplog.text

    verified = asyncio.run(service.verify(PHONE, result.code))
    assert verified.account.verified is True


def test_verify_issues_token_for_account(accounts_collection, clock, sms_sender):
    service = make_service(accounts_collection, clock, sms_sender)
    result = asyncio.run(service.register(PHONE))

    verified = asyncio.run(service.verify(PHONE, result.code))
    claims = TokenIssuer(SECRET).decode(verified.token)
    assert claims["phone"] == PHONE
    assert claims["sub"] == verified.account.id

    with pytest.raises(InvalidCodeError):
        asyncio.run(service.verify(PHONE, result.code))


def test_expired_code_then_cleanup(accounts_collection, clock, sms_sender):
    service = make_service(accounts_collection, clock, sms_sender)
    result = asyncio.run(service.register(PHONE))
    clock.advance(minutes=11)

    with pytest.raises(CodeExpiredError):
        asyncio.run(service.verify(PHONE, result.code))

    assert asyncio.run(service.cleanup()) == 1
    with pytest.raises(InvalidCodeError):
        asyncio.run(service.verify(PHONE, result.code))


def test_logs_carry_phone_as_context_not_in_text(accounts_collection, clock, sms_sender, caplog):
    caplog.set_level(logging.INFO)
    service = make_service(accounts_collection, clock, sms_sender)
    result = asyncio.run(service.register(PHONE))
    asyncio.run(service.deliver_code(PHONE, result.code))
    asyncio.run(service.verify(PHONE, result.code))

    records = [r for r in caplog.records if r.name.endswith("auth_service")]
    assert len(records) == 2
    for record in records:
        assert PHONE not in record.getMessage()
        assert record.phone == PHONE
