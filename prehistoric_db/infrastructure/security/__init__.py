"""Security: password hashing for provisioned accounts."""

from prehistoric_db.infrastructure.security.password import (
    get_password_hash,
    verify_password,
)

__all__ = [
    "get_password_hash",
    "verify_password",
]
