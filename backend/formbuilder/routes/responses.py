"""
FormBuilder Backend - Response Submission Route
================================================

What:  POST /addFormResponse/{form_id}, used by the public share page.
How:   No authentication. Delegates to ResponseService.submit.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from formbuilder.database import get_db_session
from formbuilder.schemas.common import ErrorResponse, MessageResponse
from formbuilder.schemas.form import SubmitResponseRequest
from formbuilder.services.response_service import response_service

router = APIRouter(tags=["Responses"])


@router.post(
    "/addFormResponse/{form_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Form not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Submit answers to a form",
)
async def add_form_response(
    form_id: UUID,
    payload: SubmitResponseRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await response_service.submit(
        db,
        form_id=form_id,
        response_data=payload.response_data,
        name=payload.name,
    )
