"""
Tests for token handling, password hashing and log sanitizing.
"""
from datetime import timedelta

from jobhunt.core.logging_config import sanitize_log_data
from jobhunt.core.security import create_access_token, decode_access_token, hash_password, verify_password


def test_token_roundtrip():
    token = create_access_token({"sub": "test@example.com"})

    assert decode_access_token(token) == "test@example.com"


def test_expired_token_rejected():
    token = create_access_token({"sub": "test@example.com"}, expires_delta=timedelta(minutes=-5))

    assert decode_access_token(token) is None


def test_garbage_and_subjectless_tokens_rejected():
    assert decode_access_token("not-a-jwt") is None
    assert decode_access_token(create_access_token({"role": "admin"})) is None


def test_sanitize_log_data_redacts_nested_secrets():
    data = {
        "database_url": "postgresql://user:pw@host/db",
        "user_id": 7,
        "auth": {"access_token": "abc", "scheme": "bearer"},
    }

    sanitized = sanitize_log_data(data)

    assert sanitized["database_url"] == "***REDACTED***"
    assert sanitized["user_id"] == 7
    assert sanitized["auth"] == {"access_token": "***REDACTED***", "scheme": "bearer"}
    # Original untouched
    assert data["auth"]["access_token"] == "abc"


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("testpass123", "not-a-bcrypt-hash")
    assert not verify_password("testpass123", "")


def test_verify_password_long_password_matches_truncated_hash():
    password = "p" * 80
    hashed = hash_password(password)

    assert verify_password(password, hashed)
    assert hashed.startswith("$2b$")
