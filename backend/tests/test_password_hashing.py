"""
Tests for bcrypt password hashing
"""
from app.auth.utils import generate_password_hash, pwd_context


def test_hash_is_salted_bcrypt_at_configured_cost():
    """Test that equal passwords hash to different bcrypt digests at cost 10"""
    first = generate_password_hash("secret")
    second = generate_password_hash("secret")

    assert first != second
    assert first.startswith("$2b$10$")
    assert "secret" not in first


def test_context_uses_bcrypt_only():
    """Test that the hashing context is configured for bcrypt alone"""
    assert pwd_context.schemes() == ("bcrypt",)
