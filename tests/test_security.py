import pytest
from jose import JWTError

from votebooth.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    looks_hashed,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = hash_password("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert looks_hashed(hashed)
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)


def test_plaintext_is_never_accepted_as_hash():
    assert not looks_hashed("plaintext")
    assert not verify_password("plaintext", "plaintext")
    assert not verify_password("anything", "")


def test_token_round_trip():
    token = create_access_token({"sub": "abc"}, "key-1")

    payload = decode_access_token(token, "key-1")

    assert payload["sub"] == "abc"
    assert "exp" in payload


def test_token_signed_with_other_key_is_rejected():
    token = create_access_token({"sub": "abc"}, "key-1")

    with pytest.raises(JWTError):
        decode_access_token(token, "key-2")


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "abc"}, "key-1", expires_minutes=-1)

    with pytest.raises(JWTError):
        decode_access_token(token, "key-1")
