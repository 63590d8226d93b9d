"""
FormBuilder Backend - Authentication Gate
==========================================

What:  FastAPI dependency resolving the bearer credential to an Account.
Who:   Every form route except the public read and public submission.
When:  Before the route handler runs; a failure here means the handler's
       own logic never executes.

Resolution steps:
    1. Authorization header absent                → UnauthorizedError
    2. Header has no second token ("<scheme> <x>") → UnauthorizedError
    3. Token signature/expiry/subject invalid      → UnauthorizedError
    4. No Account with the token's subject id      → UnauthorizedError
    5. Storage failure during the lookup           → DatabaseError (500)
    6. Otherwise the Account, its id and the raw token are stored on
       request.state (account_id is a plain UUID, safe to read after the
       session has closed) and the caller is
       returned as an AuthenticatedAccount.

The scheme word itself is not checked; clients send "Bearer <token>".
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from formbuilder.database import get_db_session
from formbuilder.exceptions import DatabaseError, UnauthorizedError
from formbuilder.models.account import Account
from formbuilder.security import InvalidTokenError, decode_access_token

logger = logging.getLogger(__name__)


@dataclass
class AuthenticatedAccount:
    """The caller of an authenticated request."""
    account: Account
    token: str

    @property
    def id(self) -> uuid.UUID:
        return self.account.id


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the credential part of an Authorization header value."""
    if authorization is None:
        raise UnauthorizedError(context={"reason": "missing_header"})
    parts = authorization.split()
    if len(parts) < 2 or not parts[1]:
        raise UnauthorizedError(context={"reason": "malformed_header"})
    return parts[1]


async def authenticate_account(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> AuthenticatedAccount:
    token = extract_bearer_token(authorization)

    try:
        account_id = decode_access_token(token)
    except InvalidTokenError as e:
        raise UnauthorizedError(context={"reason": str(e)}) from e

    try:
        result = await db.execute(select(Account).where(Account.id == account_id))
        account = result.scalar_one_or_none()
    except Exception as e:
        logger.error("Database error resolving account %s: %s", account_id, str(e), exc_info=True)
        raise DatabaseError(context={"error_type": type(e).__name__}) from e

    if account is None:
        raise UnauthorizedError(context={"reason": "unknown_account"})

    request.state.account = account
    request.state.account_id = account.id
    request.state.token = token
    return AuthenticatedAccount(account=account, token=token)
