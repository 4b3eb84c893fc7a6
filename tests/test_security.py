"""
Password hashing and bearer token helpers.
"""

from datetime import timedelta

import pytest

from audio_vault.shared.utils.security import SecurityUtils


SECRET = "test-secret"


def test_password_hash_round_trip():
    hashed = SecurityUtils.hash_password("turntable42")

    assert hashed != "turntable42"
    assert SecurityUtils.verify_password("turntable42", hashed)
    assert not SecurityUtils.verify_password("turntable43", hashed)


def test_hashes_are_salted():
    assert SecurityUtils.hash_password("same") != SecurityUtils.hash_password("same")


def test_malformed_hash_is_a_mismatch():
    assert SecurityUtils.verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_carries_claims():
    token = SecurityUtils.create_access_token({"user_id": "abc", "email": "a@example.com"}, SECRET)

    claims = SecurityUtils.decode_access_token(token, SECRET)

    assert claims["user_id"] == "abc"
    assert claims["email"] == "a@example.com"
    assert claims["exp"] > claims["iat"]


def test_expired_token():
    token = SecurityUtils.create_access_token({"user_id": "abc"}, SECRET, expires_delta=timedelta(seconds=-1))

    with pytest.raises(ValueError, match="Token has expired"):
        SecurityUtils.decode_access_token(token, SECRET)


def test_token_signed_with_another_secret():
    token = SecurityUtils.create_access_token({"user_id": "abc"}, "other-secret")

    with pytest.raises(ValueError, match="Invalid token"):
        SecurityUtils.decode_access_token(token, SECRET)
