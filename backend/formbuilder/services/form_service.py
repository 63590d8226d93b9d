"""
FormBuilder Backend - Form Service
===================================

What:  Create, read, update and delete forms; list a form's responses.
Who:   Called by the form route handlers.

Access rules:
    - Reads by id are open to any caller (the same read backs the owner's
      editor and the public share page).
    - Listing returns only the caller's forms.
    - Update, delete and listing responses require the caller to own the
      form (ForbiddenError otherwise). A missing form is reported as
      NotFoundError before ownership is considered.

Error Handling Strategy:
    Application exceptions propagate unchanged. Anything else raised while
    talking to the database is logged and wrapped in DatabaseError so the
    client only ever sees a generic 500 message.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from formbuilder.exceptions import (
    DatabaseError,
    ForbiddenError,
    FormBuilderError,
    NotFoundError,
)
from formbuilder.models.form import Form
from formbuilder.models.response import FormResponse
from formbuilder.schemas.form import (
    DeleteFormResponse,
    FormListResponse,
    FormOut,
    ResponseListResponse,
    ResponseOut,
    UpdateFormResponse,
)

logger = logging.getLogger(__name__)


def form_to_out(form: Form) -> FormOut:
    return FormOut(
        id=form.id,
        user_id=form.owner_id,
        title=form.title,
        form_data=list(form.form_data or []),
        responses=list(form.response_ids or []),
        created_at=form.created_at,
    )


def response_to_out(response: FormResponse) -> ResponseOut:
    return ResponseOut(
        id=response.id,
        form_id=response.form_id,
        response_data=response.response_data,
        name=response.name,
        created_at=response.created_at,
    )


class FormService:
    """
    Business logic layer for form operations.

    Stateless: every method receives the request's session, and writes are
    flushed, not committed (get_db_session commits when the request ends).
    """

    async def _load(self, db: AsyncSession, form_id: uuid.UUID) -> Form:
        result = await db.execute(select(Form).where(Form.id == form_id))
        form = result.scalar_one_or_none()
        if form is None:
            raise NotFoundError(resource="form", resource_id=str(form_id))
        return form

    @staticmethod
    def _require_owner(form: Form, owner_id: uuid.UUID, action: str = "modify") -> None:
        if form.owner_id != owner_id:
            raise ForbiddenError(resource="form", resource_id=str(form.id), action=action)

    async def list_forms(self, db: AsyncSession, owner_id: uuid.UUID) -> FormListResponse:
        """Every form owned by `owner_id`, oldest first."""
        try:
            result = await db.execute(
                select(Form).where(Form.owner_id == owner_id).order_by(Form.created_at)
            )
            forms = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing forms: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve forms. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return FormListResponse(forms=[form_to_out(form) for form in forms])

    async def get_form(self, db: AsyncSession, form_id: uuid.UUID) -> FormOut:
        """
        Retrieve a single form by id, whoever asks.

        Raises:
            NotFoundError: no form with this id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            form = await self._load(db, form_id)
        except FormBuilderError:
            raise
        except Exception as e:
            logger.error("Database error fetching form %s: %s", form_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the form. Please try again.",
                context={"form_id": str(form_id)},
            ) from e

        return form_to_out(form)

    async def create_form(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        title: Optional[str] = None,
        form_data: Optional[List] = None,
    ) -> FormOut:
        try:
            form = Form(owner_id=owner_id, title=title or "", form_data=list(form_data or []))
            db.add(form)
            await db.flush()
            logger.info("Form created: %s (owner=%s)", form.id, owner_id)
        except Exception as e:
            logger.error("Database error creating form: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the form. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return form_to_out(form)

    async def update_form(
        self,
        db: AsyncSession,
        form_id: uuid.UUID,
        owner_id: uuid.UUID,
        title: Optional[str] = None,
        form_data: Optional[List] = None,
    ) -> UpdateFormResponse:
        """
        Replace the title and/or field list of a form the caller owns.

        A None argument leaves the stored value untouched, so a client that
        sends only a title keeps its fields.
        """
        try:
            form = await self._load(db, form_id)
            self._require_owner(form, owner_id)

            if title is not None:
                form.title = title
            if form_data is not None:
                form.form_data = list(form_data)
            await db.flush()
            logger.info("Form updated: %s", form.id)
        except FormBuilderError:
            raise
        except Exception as e:
            logger.error("Database error updating form %s: %s", form_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the form. Please try again.",
                context={"form_id": str(form_id)},
            ) from e

        return UpdateFormResponse(updated_form=form_to_out(form))

    async def delete_form(
        self,
        db: AsyncSession,
        form_id: uuid.UUID,
        owner_id: uuid.UUID,
    ) -> DeleteFormResponse:
        """
        Delete a form the caller owns, together with its responses.

        The returned `deleted_form` is a snapshot taken before deletion.
        """
        try:
            form = await self._load(db, form_id)
            self._require_owner(form, owner_id, action="delete")

            snapshot = form_to_out(form)
            await db.execute(delete(FormResponse).where(FormResponse.form_id == form.id))
            await db.delete(form)
            await db.flush()
            logger.info("Form deleted: %s (%d responses)", form_id, len(snapshot.responses))
        except FormBuilderError:
            raise
        except Exception as e:
            logger.error("Database error deleting form %s: %s", form_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the form. Please try again.",
                context={"form_id": str(form_id)},
            ) from e

        return DeleteFormResponse(deleted_form=snapshot)

    async def list_responses(
        self,
        db: AsyncSession,
        form_id: uuid.UUID,
        owner_id: uuid.UUID,
    ) -> ResponseListResponse:
        """Collected responses of a form the caller owns, oldest first."""
        try:
            form = await self._load(db, form_id)
            self._require_owner(form, owner_id, action="view the responses of")

            result = await db.execute(
                select(FormResponse)
                .where(FormResponse.form_id == form.id)
                .order_by(FormResponse.created_at)
            )
            responses = list(result.scalars().all())
        except FormBuilderError:
            raise
        except Exception as e:
            logger.error("Database error listing responses of %s: %s", form_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve responses. Please try again.",
                context={"form_id": str(form_id)},
            ) from e

        return ResponseListResponse(responses=[response_to_out(r) for r in responses])


form_service = FormService()
