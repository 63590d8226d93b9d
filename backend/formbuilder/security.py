"""
FormBuilder Backend - Password Hashing & Bearer Tokens
=======================================================

What:  bcrypt password hashing and signed, expiring bearer tokens (JWT).
Who:   AccountService (hash on register, verify on login, issue tokens) and
       the authentication gate (decode tokens).

Token format:
    HS256 JWT with claims
        sub: account id (UUID string)
        iat: issued-at
        exp: expiry, settings.token_expire_minutes after issue
    A token is accepted only if its signature and expiry check out and its
    subject parses as a UUID. Whether the account still exists is the gate's
    job, not this module's.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from formbuilder.config import settings


class InvalidTokenError(Exception):
    """Raised by decode_access_token for any token that must be rejected."""


# ── Passwords ─────────────────────────────────────────────────────────────

def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Return a salted bcrypt hash of `password` as a str."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check `password` against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch rather than an error.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


# ── Tokens ────────────────────────────────────────────────────────────────

def create_access_token(account_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.token_expire_minutes))
    payload = {"sub": str(account_id), "iat": now, "exp": expire}
    return jwt.encode(payload, settings.token_secret, algorithm=settings.token_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verify `token` and return the account id it was issued for.

    Raises:
        InvalidTokenError: bad signature, expired, missing subject, or a
            subject that is not a UUID.
    """
    try:
        payload = jwt.decode(
            token,
            settings.token_secret,
            algorithms=[settings.token_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Invalid token") from e

    try:
        return uuid.UUID(str(payload["sub"]))
    except ValueError as e:
        raise InvalidTokenError("Invalid token subject") from e
