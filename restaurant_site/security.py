"""Password hashing.

Stored format is ``"<hex digest>.<hex salt>"``: a 64-byte scrypt key derived
with a fresh 16-byte salt.
"""
import hashlib
import hmac
import secrets

KEY_LENGTH = 64
SALT_BYTES = 16

# scrypt cost parameters (N=2**14, r=8, p=1)
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive(password, salt).hex()}.{salt}"


def compare_passwords(supplied: str, stored: str | None) -> bool:
    """Re-derive ``supplied`` with the stored salt and compare in constant time."""
    if not stored or "." not in stored:
        return False
    hashed, salt = stored.split(".", 1)
    try:
        expected = bytes.fromhex(hashed)
    except ValueError:
        return False
    if len(expected) != KEY_LENGTH:
        return False
    return hmac.compare_digest(expected, _derive(supplied, salt))
