"""
FormBuilder Backend - Form Route Handlers
==========================================

What:  The form-builder dashboard API (authenticated) and the public form read.
How:   Every route except GET /response/getForms/{id} depends on
       authenticate_account, so a request without a valid bearer credential
       is answered with 401 before the handler body runs.

Route Inventory:
    GET    /getForms                     forms owned by the caller
    GET    /getFormData/{form_id}        one form (any owner)
    POST   /updateFormData/{form_id}     replace title and/or fields (owner only)
    POST   /addFormData                  create a form owned by the caller
    DELETE /deleteFormData/{form_id}     delete a form (owner only)
    GET    /getFormResponses/{form_id}   collected responses (owner only)
    GET    /response/getForms/{form_id}  public read for the share page

Path ids are UUIDs; FastAPI answers 422 for anything that does not parse.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from formbuilder.database import get_db_session
from formbuilder.dependencies import AuthenticatedAccount, authenticate_account
from formbuilder.schemas.common import ErrorResponse, MessageResponse
from formbuilder.schemas.form import (
    DeleteFormResponse,
    FormDataRequest,
    FormListResponse,
    FormOut,
    ResponseListResponse,
    UpdateFormResponse,
)
from formbuilder.services.form_service import form_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Forms"])

_AUTH_ERRORS = {
    401: {"description": "Missing or invalid bearer credential", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "/getForms",
    response_model=FormListResponse,
    responses=_AUTH_ERRORS,
    summary="List the caller's forms",
)
async def get_forms(
    caller: AuthenticatedAccount = Depends(authenticate_account),
    db: AsyncSession = Depends(get_db_session),
) -> FormListResponse:
    return await form_service.list_forms(db, owner_id=caller.id)


@router.get(
    "/getFormData/{form_id}",
    response_model=FormOut,
    responses={**_AUTH_ERRORS, 404: {"description": "Form not found", "model": ErrorResponse}},
    summary="Get a form by id",
)
async def get_form_data(
    form_id: UUID,
    caller: AuthenticatedAccount = Depends(authenticate_account),
    db: AsyncSession = Depends(get_db_session),
) -> FormOut:
    return await form_service.get_form(db, form_id)


@router.post(
    "/updateFormData/{form_id}",
    response_model=UpdateFormResponse,
    responses={
        **_AUTH_ERRORS,
        403: {"description": "Form owned by another account", "model": ErrorResponse},
        404: {"description": "Form not found", "model": ErrorResponse},
    },
    summary="Replace a form's title and fields",
)
async def update_form_data(
    form_id: UUID,
    payload: FormDataRequest,
    caller: AuthenticatedAccount = Depends(authenticate_account),
    db: AsyncSession = Depends(get_db_session),
) -> UpdateFormResponse:
    return await form_service.update_form(
        db,
        form_id=form_id,
        owner_id=caller.id,
        title=payload.title,
        form_data=payload.form_data,
    )


@router.post(
    "/addFormData",
    response_model=MessageResponse,
    responses=_AUTH_ERRORS,
    summary="Create a form owned by the caller",
)
async def add_form_data(
    payload: FormDataRequest,
    caller: AuthenticatedAccount = Depends(authenticate_account),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await form_service.create_form(
        db,
        owner_id=caller.id,
        title=payload.title,
        form_data=payload.form_data,
    )
    return MessageResponse(message="Form data added successfully")


@router.delete(
    "/deleteFormData/{form_id}",
    response_model=DeleteFormResponse,
    responses={
        **_AUTH_ERRORS,
        403: {"description": "Form owned by another account", "model": ErrorResponse},
        404: {"description": "Form not found", "model": ErrorResponse},
    },
    summary="Delete a form and its responses",
)
async def delete_form_data(
    form_id: UUID,
    caller: AuthenticatedAccount = Depends(authenticate_account),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteFormResponse:
    return await form_service.delete_form(db, form_id=form_id, owner_id=caller.id)


@router.get(
    "/getFormResponses/{form_id}",
    response_model=ResponseListResponse,
    responses={
        **_AUTH_ERRORS,
        403: {"description": "Form owned by another account", "model": ErrorResponse},
        404: {"description": "Form not found", "model": ErrorResponse},
    },
    summary="List the responses collected by a form",
)
async def get_form_responses(
    form_id: UUID,
    caller: AuthenticatedAccount = Depends(authenticate_account),
    db: AsyncSession = Depends(get_db_session),
) -> ResponseListResponse:
    return await form_service.list_responses(db, form_id=form_id, owner_id=caller.id)


@router.get(
    "/response/getForms/{form_id}",
    response_model=FormOut,
    responses={
        404: {"description": "Form not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Public read of a shared form",
)
async def get_public_form(
    form_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> FormOut:
    return await form_service.get_form(db, form_id)
