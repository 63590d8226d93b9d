"""
FormBuilder Backend - Account Service
======================================

What:  Registration and login.
Who:   Called by the /register and /login route handlers.

Password handling:
    bcrypt is CPU-bound (tens of milliseconds at cost 10), so hashing and
    verification run in Starlette's threadpool and the event loop keeps
    serving other requests meanwhile.

Credentials:
    Both operations answer with a signed bearer token for the account id
    (see formbuilder.security). Login issues a fresh token each time;
    nothing is stored server-side.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from formbuilder.exceptions import (
    ConflictError,
    DatabaseError,
    FormBuilderError,
    InvalidCredentialsError,
)
from formbuilder.models.account import Account
from formbuilder.schemas.account import LoginResponse, RegisterResponse
from formbuilder.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class AccountService:
    """Stateless; receives the request's session on every call."""

    async def register(self, db: AsyncSession, username: str, password: str) -> RegisterResponse:
        """
        Create an account and return a credential for it.

        Raises:
            ConflictError: the username is taken (pre-check, or the unique
                index when two registrations race)
            DatabaseError: the query or insert failed
        """
        try:
            result = await db.execute(select(Account).where(Account.username == username))
            if result.scalar_one_or_none() is not None:
                raise ConflictError(context={"username": username})

            password_hash = await run_in_threadpool(hash_password, password)

            account = Account(username=username, password_hash=password_hash)
            db.add(account)
            await db.flush()  # assigns the id; commit happens in get_db_session
            logger.info("Account registered: %s", account.id)

        except FormBuilderError:
            raise
        except IntegrityError as e:
            logger.info("Concurrent registration lost the race for a username")
            raise ConflictError(context={"username": username}) from e
        except Exception as e:
            logger.error("Database error registering account: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not register the account. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return RegisterResponse(token=create_access_token(account.id))

    async def login(self, db: AsyncSession, username: str, password: str) -> LoginResponse:
        """
        Check a username/password pair and return a credential.

        Raises:
            InvalidCredentialsError: unknown username or wrong password
            DatabaseError: the lookup failed
        """
        try:
            result = await db.execute(select(Account).where(Account.username == username))
            account = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not log in. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        if account is None:
            raise InvalidCredentialsError(context={"reason": "unknown_user"})

        matches = await run_in_threadpool(verify_password, password, account.password_hash)
        if not matches:
            raise InvalidCredentialsError(context={"reason": "password_mismatch"})

        logger.info("Account logged in: %s", account.id)
        return LoginResponse(token=create_access_token(account.id))


account_service = AccountService()
