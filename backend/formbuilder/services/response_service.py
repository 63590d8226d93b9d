"""
FormBuilder Backend - Response Service
=======================================

What:  Public submission of answers to a form.
Who:   Called by POST /addFormResponse/{formId}; no authentication.

Write sequence (one transaction, the request's session):
    1. SELECT the form FOR UPDATE (404 if missing)
    2. INSERT the response row referencing the form
    3. UPDATE the form's response_ids with the new id appended

The row lock serialises concurrent submissions to the same form, so no
append is lost. Because the three steps share a transaction, a failure at
any step leaves neither a response row nor a dangling id behind.
"""

import logging
import uuid

from pydantic import JsonValue
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from formbuilder.exceptions import DatabaseError, FormBuilderError, NotFoundError
from formbuilder.models.form import Form
from formbuilder.models.response import FormResponse
from formbuilder.schemas.common import MessageResponse

logger = logging.getLogger(__name__)


class ResponseService:

    async def submit(
        self,
        db: AsyncSession,
        form_id: uuid.UUID,
        response_data: JsonValue,
        name: str,
    ) -> MessageResponse:
        """
        Store a submission and link it to its form.

        Raises:
            NotFoundError: no form with this id (→ 404)
            DatabaseError: any write failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Form).where(Form.id == form_id).with_for_update()
            )
            form = result.scalar_one_or_none()
            if form is None:
                raise NotFoundError(resource="form", resource_id=str(form_id))

            response = FormResponse(form_id=form.id, response_data=response_data, name=name)
            db.add(response)
            await db.flush()

            form.response_ids = [*(form.response_ids or []), str(response.id)]
            await db.flush()
            logger.info(
                "Response %s stored for form %s (%d total)",
                response.id, form.id, len(form.response_ids),
            )
        except FormBuilderError:
            raise
        except Exception as e:
            logger.error("Database error storing response for %s: %s", form_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save your response. Please try again.",
                context={"form_id": str(form_id)},
            ) from e

        return MessageResponse(message="Form response added successfully")


response_service = ResponseService()
