from app.core.security import (
    hash_password,
    verify_password,
    generate_referral_code,
    REFERRAL_ALPHABET,
)


def test_hash_and_verify():
    stored = hash_password("password123")
    assert "." in stored
    assert verify_password("password123", stored)
    assert not verify_password("password124", stored)


def test_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_malformed_hash_never_verifies():
    assert not verify_password("x", "")
    assert not verify_password("x", "nodot")
    assert not verify_password("x", "zz.zz")


def test_referral_code_format():
    code = generate_referral_code(10)
    assert len(code) == 10
    assert all(ch in REFERRAL_ALPHABET for ch in code)
