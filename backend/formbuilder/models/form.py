"""
FormBuilder Backend - Form SQLAlchemy Model
============================================

What:  ORM model for the `forms` table.
Who:   Used by FormService (CRUD) and ResponseService (appending responses).

Table design:
    - owner_id: the account that created the form. Indexed because the
      dashboard lists "my forms" on every page load.
    - form_data: ordered list of field definitions. Stored as JSON and never
      inspected; the frontend owns its shape.
    - response_ids: ids of submitted responses, appended on each submission.
      Duplicates the back-reference held by each Response row.

Query Patterns:
    - List by owner: SELECT ... WHERE owner_id = :id ORDER BY created_at
    - Get by id:     SELECT ... WHERE id = :uuid  (primary key)
    - Append:        SELECT ... WHERE id = :uuid FOR UPDATE, then UPDATE
"""

import uuid
from datetime import datetime, timezone
from typing import Any, List

from sqlalchemy import JSON, TIMESTAMP, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from formbuilder.database import Base


class Form(Base):
    """
    A user-defined form.

    Lifecycle:
        1. Created by its owner (POST /addFormData)
        2. Title and field list replaced wholesale on update
        3. Response ids appended by public submissions
        4. Deleted explicitly by its owner, together with its responses
    """

    __tablename__ = "forms"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    form_data: Mapped[List[Any]] = mapped_column(JSON, nullable=False, default=list)

    # Reassign (never mutate in place) so the ORM notices the change.
    response_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Form(id={self.id}, title='{self.title}', owner_id={self.owner_id})>"
