"""
FormBuilder Backend - Response SQLAlchemy Model
================================================

What:  ORM model for the `responses` table: one public submission to a form.
Who:   Written by ResponseService.submit, read by FormService.list_responses.

`response_data` is stored as submitted. The form's field list is not
consulted when a response arrives, so a response may not match the current
form layout (forms can be edited after responses come in).
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, TIMESTAMP, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from formbuilder.database import Base


class FormResponse(Base):
    """A submitted set of answers. Immutable once written."""

    __tablename__ = "responses"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    form_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("forms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    response_data: Mapped[Any] = mapped_column(JSON, nullable=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<FormResponse(id={self.id}, form_id={self.form_id}, name='{self.name}')>"
