# tests/test_security.py
from kosync.core.security import PasswordHasher


def test_hash_is_not_plaintext_and_verifies(hasher):
    hashed = hasher.hash("secret123")
    assert "secret123" not in hashed
    assert hasher.verify("secret123", hashed)
    assert not hasher.verify("secret124", hashed)


def test_same_password_hashes_differently_each_time(hasher):
    assert hasher.hash("secret123") != hasher.hash("secret123")


def test_hash_depends_on_configured_salt(hasher):
    hashed = hasher.hash("secret123")
    other = PasswordHasher("another-salt", rounds=4)
    assert not other.verify("secret123", hashed)


def test_long_passwords_are_not_truncated(hasher):
    prefix = "x" * 80
    hashed = hasher.hash(prefix + "a")
    assert hasher.verify(prefix + "a", hashed)
    assert not hasher.verify(prefix + "b", hashed)
