"""Token signing and secret hashing helpers."""

from lending_registry_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_token_round_trip_keeps_subject():
    token = create_access_token({"sub": "S001"})
    payload = decode_access_token(token)
    assert payload["sub"] == "S001"
    assert payload["exp"] > 0


def test_tampered_token_is_rejected():
    token = create_access_token({"sub": "S001"})
    header, payload, signature = token.split(".")
    forged = create_access_token({"sub": "A001"}).split(".")[1]
    assert decode_access_token(f"{header}.{forged}.{signature}") is None


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "S001"}, expires_delta=-10)
    assert decode_access_token(token) is None


def test_malformed_tokens_are_rejected():
    assert decode_access_token("not-a-token") is None
    assert decode_access_token("a.b.c") is None
    assert decode_access_token("") is None


def test_hash_and_verify():
    stored = hash_password("student123", iterations=1000)
    assert stored.startswith("1000$")
    assert verify_password("student123", stored)
    assert not verify_password("Student123", stored)
    assert not verify_password("student123", "garbage")
