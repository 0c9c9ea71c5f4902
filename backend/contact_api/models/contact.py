"""
Contact API — Contact SQLAlchemy Model
========================================

What:  ORM model representing the `contacts` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by ContactService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - String UUID primary key: opaque to clients, generated in Python so the
      id is known before the INSERT is flushed (needed for the Location header)
    - All descriptive columns nullable: every contact field is optional
    - photo_url: full retrieval URL of the contact's single current photo

    Index on name:
        The listing endpoint always sorts by name; without this index every
        page load would sort the whole table.
"""

import uuid
from typing import Optional

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from contact_api.database import Base


def generate_contact_id() -> str:
    """Return a fresh opaque identifier (UUID4 text form)."""
    return str(uuid.uuid4())


class Contact(Base):
    """
    A contact directory record.

    Lifecycle:
        1. Created via ContactService.create_contact (id assigned here; any
           client-supplied id is never read)
        2. photo_url mutated by ContactService.update_photo
        3. Deleted via ContactService.delete_contact; the stored photo file
           is not touched
    """

    __tablename__ = "contacts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_contact_id,
        comment="Server-generated opaque identifier, immutable after creation",
    )

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # ── Photo ─────────────────────────────────────────────────────────────
    # Format: <base>/contacts/images/<id><ext>
    # Overwritten on every upload; the previous value is not kept
    photo_url: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Retrieval URL of the contact's current photo",
    )

    __table_args__ = (
        Index("idx_contacts_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, name='{self.name}')>"
