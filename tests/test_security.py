from datetime import timedelta

import jwt as pyjwt
import pytest

from app.core.exceptions import AuthenticationError, ConfigurationError
from app.core.security import TokenIssuer, codes_match, generate_verification_code
from app.models.account import Account
from utils.time_utils import utc_now

SECRET = "unit-test-secret-with-enough-length"


def make_account():
    return Account(id="65f1c2a9e4b0a1b2c3d4e5f6", phone="+34600000000", verified=True)


def test_generated_codes_are_fixed_length_digits():
    for _ in range(200):
        code = generate_verification_code()
        assert len(code) == 6
        assert code.isdigit()


def test_generated_codes_respect_length():
    assert len(generate_verification_code(8)) == 8


def test_generated_codes_keep_leading_zeros(monkeypatch):
    monkeypatch.setattr("app.core.security.secrets.randbelow", lambda bound: 42)
    assert generate_verification_code() == "000042"


def test_codes_match():
    assert codes_match("123456", "123456")
    assert not codes_match("123456", "123457")
    assert not codes_match(None, "123456")
    assert not codes_match("", "")


def test_issuer_requires_secret():
    with pytest.raises(ConfigurationError):
        TokenIssuer(secret=None)
    with pytest.raises(ConfigurationError):
        TokenIssuer(secret="")


def test_issue_and_decode_round_trip():
    issuer = TokenIssuer(SECRET)
    claims = issuer.decode(issuer.issue(make_account()))

    assert claims["sub"] == "65f1c2a9e4b0a1b2c3d4e5f6"
    assert claims["phone"] == "+34600000000"
    assert claims["verified"] is True
    assert claims["role"] == "provider"
    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())


def test_expired_token_is_rejected():
    issued = utc_now() - timedelta(days=8)
    issuer = TokenIssuer(SECRET, clock=lambda: issued)
    token = issuer.issue(make_account())

    with pytest.raises(AuthenticationError):
        TokenIssuer(SECRET).decode(token)


def test_token_signed_with_other_secret_is_rejected():
    token = TokenIssuer("another-secret-with-enough-length!").issue(make_account())
    with pytest.raises(AuthenticationError):
        TokenIssuer(SECRET).decode(token)


def test_token_without_expiry_is_rejected():
    token = pyjwt.encode({"sub": "x", "iat": utc_now()}, SECRET, algorithm="HS256")
    with pytest.raises(AuthenticationError):
        TokenIssuer(SECRET).decode(token)


def test_garbage_token_is_rejected():
    with pytest.raises(AuthenticationError):
        TokenIssuer(SECRET).decode("not-a-jwt")
