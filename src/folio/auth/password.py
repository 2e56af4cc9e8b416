"""Password hashing utilities.

Hashes are produced with scrypt, a slow, memory-hard KDF, using a fresh
random salt per record. The stored form is "<hex digest>.<salt>", with the
salt used as its hex text, which is how the existing admin rows were
written.

Legacy bcrypt hashes ("$2b$...") are still verified, and auto-upgraded
to scrypt on successful login.
"""

import hashlib
import secrets

import bcrypt

# scrypt cost parameters; existing hashes were made with these exact values.
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_KEY_LEN = 64
SALT_BYTES = 16


def _scrypt(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=SCRYPT_KEY_LEN,
        maxmem=64 * 1024 * 1024,
    )


def hash_password(password: str) -> str:
    """Hash a password with scrypt and a random salt → "hash.salt"."""
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_scrypt(password, salt).hex()}.{salt}"


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its stored hash.

    The digest comparison is constant time: it does not short-circuit on
    the first differing byte. Malformed hashes simply fail verification.
    """
    if _is_legacy_hash(password_hash):
        return _verify_bcrypt(password, password_hash)
    try:
        hashed, salt = password_hash.split(".", 1)
        expected = bytes.fromhex(hashed)
    except (ValueError, AttributeError):
        return False
    if not salt or len(expected) != SCRYPT_KEY_LEN:
        return False
    return secrets.compare_digest(expected, _scrypt(password, salt))


def needs_upgrade(password_hash: str) -> bool:
    """Check if a password hash should be re-hashed with scrypt."""
    return _is_legacy_hash(password_hash)


def _is_legacy_hash(password_hash: str) -> bool:
    """Detect bcrypt hashes ($2a$, $2b$, $2y$)."""
    return password_hash.startswith("$2")


def _verify_bcrypt(password: str, password_hash: str) -> bool:
    try:
        pw_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False
