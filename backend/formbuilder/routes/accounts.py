"""
FormBuilder Backend - Account Route Handlers
=============================================

What:  POST /register and POST /login.
How:   Validate the JSON body, delegate to AccountService, return its result.
       Failures are raised as application exceptions and formatted by the
       global handlers in main.py.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from formbuilder.database import get_db_session
from formbuilder.schemas.account import CredentialsRequest, LoginResponse, RegisterResponse
from formbuilder.schemas.common import ErrorResponse
from formbuilder.services.account_service import account_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Accounts"])


@router.post(
    "/register",
    status_code=201,
    response_model=RegisterResponse,
    responses={
        201: {"description": "Account created", "model": RegisterResponse},
        400: {"description": "Username already exists", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new account",
)
async def register(
    payload: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> RegisterResponse:
    return await account_service.register(db, payload.username, payload.password)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {"description": "Logged in", "model": LoginResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Log in with username and password",
)
async def login(
    payload: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await account_service.login(db, payload.username, payload.password)
