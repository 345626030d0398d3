"""Opaque token generation.

Tokens are random URL-safe strings with no embedded claims. Only their
SHA-256 digest is persisted, so every lookup goes through `hash_token`.
"""

import hashlib
import secrets

# 32 random bytes -> 256 bits of entropy, 43 URL-safe characters
TOKEN_BYTES = 32
TOKEN_LENGTH = 43


def generate_token() -> str:
    """Return a new unguessable bearer token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """SHA-256 hex digest used as the storage key for a token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
