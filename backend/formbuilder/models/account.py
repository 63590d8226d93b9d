"""
FormBuilder Backend - Account SQLAlchemy Model
===============================================

What:  ORM model for the `accounts` table (registered users).
Who:   Written by AccountService.register, read by login and the auth gate.

Column notes:
    - username: unique. Register checks for an existing row first; the
      unique index catches the race between two concurrent registrations.
    - password_hash: bcrypt hash string, never returned by the API.
    - legacy_token / form_id / response_ids: carried over from the original
      document schema so imported records keep their fields. No operation
      reads or writes them.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, TIMESTAMP, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from formbuilder.database import Base


class Account(Base):
    """
    A registered user.

    Lifecycle: created on registration; never updated or deleted by any
    exposed operation.
    """

    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # ── Legacy fields ─────────────────────────────────────────────────────
    legacy_token: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    form_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    response_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, username='{self.username}')>"
