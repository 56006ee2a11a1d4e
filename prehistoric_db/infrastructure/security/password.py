"""Password hashing (bcrypt).

Hashes are plain bcrypt over the UTF-8 password so the application backend,
which checks credentials with a stock bcrypt compare, can verify them.
bcrypt only reads the first 72 bytes of input; longer default credentials
are rejected rather than silently truncated.
"""

import bcrypt

from prehistoric_db.core.config import MIN_BCRYPT_ROUNDS

BCRYPT_MAX_PASSWORD_BYTES = 72


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        result = bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
        return bool(result)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str, rounds: int = MIN_BCRYPT_ROUNDS) -> str:
    """Return bcrypt hash of password at the given cost factor.

    Raises:
        ValueError: If rounds is below MIN_BCRYPT_ROUNDS or the password
            exceeds bcrypt's 72-byte input limit.
    """
    if rounds < MIN_BCRYPT_ROUNDS:
        raise ValueError(f"bcrypt rounds must be >= {MIN_BCRYPT_ROUNDS}, got {rounds}")
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(
            f"Password exceeds bcrypt limit of {BCRYPT_MAX_PASSWORD_BYTES} bytes"
        )
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(encoded, salt)
    return hashed.decode("utf-8")
