"""
Contact API — Contact Service (Directory Business Logic)
==========================================================

What:  CRUD and pagination over contact records, plus the photo update workflow.
Why:   Encapsulates business logic in one place, independent of HTTP concerns.
How:   Runs SQLAlchemy queries on the request's AsyncSession and delegates
       photo bytes to the injected PhotoStore.
Who:   Called by route handlers in routes/contacts.py.

Update-Photo Flow (PUT /contacts/photo):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Lookup  │───▶│ PhotoStore  │───▶│ set photoURL │───▶│  Flush   │
    │ (404 if  │    │  .store()   │    │  on contact  │    │  (DB)    │
    │ missing) │    └─────────────┘    └──────────────┘    └──────────┘
    └──────────┘

    The file write and the row update are independent; there is no rollback
    of the file if the commit later fails. A failed write leaves the row untouched.

Design Decision:
    ContactService holds only its PhotoStore; the session is passed per call
    (session-per-request, committed by get_db_session).
"""

import logging
import math
from typing import Optional

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from contact_api.exceptions import DatabaseError, NotFoundError
from contact_api.models.contact import Contact, generate_contact_id
from contact_api.schemas.contact import ContactCreate, ContactPage, ContactResponse
from contact_api.services.photo_store import PhotoStore, get_photo_store

logger = logging.getLogger(__name__)


class ContactService:
    """
    Business logic layer for contact operations.

    Responsibilities:
        - create_contact(): Insert with a server-generated id
        - list_contacts():  Offset pagination sorted by name
        - get_contact():    Single lookup with not-found handling
        - update_photo():   Store photo bytes, then record the URL
        - delete_contact(): Remove the row (photo file is left in place)

    Error Handling Strategy:
        NotFoundError propagates as-is. SQLAlchemy failures are wrapped in
        DatabaseError with the original exception chained. StorageError from
        the PhotoStore propagates unchanged. Nothing is retried.
    """

    def __init__(self, photo_store: PhotoStore):
        self.photo_store = photo_store

    async def create_contact(self, db: AsyncSession, payload: ContactCreate) -> ContactResponse:
        """
        Persist a new contact.

        The id is generated here, before the flush, so it is available for
        the Location header. ContactCreate has no id field, so a
        client-supplied id never reaches the model.
        """
        contact = Contact(id=generate_contact_id(), **payload.model_dump())
        try:
            db.add(contact)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating contact: %s", str(e))
            raise DatabaseError(
                message="Could not create the contact. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Contact created: %s", contact.id)
        return ContactResponse.model_validate(contact)

    async def list_contacts(
        self,
        db: AsyncSession,
        page: int = 0,
        size: int = 10,
    ) -> ContactPage:
        """
        Return one page of contacts sorted by name ascending.

        Query plan:
            SELECT * FROM contacts ORDER BY name ASC NULLS LAST, id ASC
            LIMIT :size OFFSET :page * :size
            → Uses idx_contacts_name

        The id tie-breaker keeps pages stable when several contacts share a name.
        """
        try:
            query = (
                select(Contact)
                .order_by(Contact.name.asc().nulls_last(), Contact.id.asc())
                .offset(page * size)
                .limit(size)
            )
            result = await db.execute(query)
            contacts = list(result.scalars().all())

            count_result = await db.execute(select(func.count(Contact.id)))
            total_elements = count_result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error listing contacts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve contacts. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        total_pages = math.ceil(total_elements / size) if size else 0

        return ContactPage(
            content=[ContactResponse.model_validate(c) for c in contacts],
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
            number_of_elements=len(contacts),
            first=page == 0,
            last=page + 1 >= total_pages,
        )

    async def _load(self, db: AsyncSession, contact_id: str) -> Contact:
        """Fetch the ORM row or raise NotFoundError."""
        try:
            result = await db.execute(select(Contact).where(Contact.id == contact_id))
            contact: Optional[Contact] = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching contact %s: %s", contact_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the contact. Please try again.",
                context={"contact_id": contact_id},
            ) from e

        if contact is None:
            raise NotFoundError(resource="contact", resource_id=contact_id)
        return contact

    async def get_contact(self, db: AsyncSession, contact_id: str) -> ContactResponse:
        """
        Retrieve a single contact by exact id.

        Raises:
            NotFoundError: No contact with that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        contact = await self._load(db, contact_id)
        return ContactResponse.model_validate(contact)

    async def update_photo(
        self,
        db: AsyncSession,
        contact_id: str,
        content: bytes,
        original_filename: Optional[str],
        base_url: str,
    ) -> str:
        """
        Store a new photo for a contact and point its photoURL at it.

        Workflow Steps:
            1. Resolve the contact (NotFoundError before any file is written)
            2. PhotoStore.store() writes `<id><ext>`, overwriting the old file
            3. Set photo_url and flush

        Returns:
            The public URL of the stored photo.

        Raises:
            NotFoundError: Unknown contact id (→ 404)
            StorageError:  Photo could not be written (→ 500)
            DatabaseError: Row update failed (→ 500); the new file stays on disk
        """
        contact = await self._load(db, contact_id)

        photo_url = await self.photo_store.store(
            contact_id=contact.id,
            content=content,
            original_filename=original_filename,
            base_url=base_url,
        )

        contact.photo_url = photo_url
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error recording photo for %s: %s", contact_id, str(e))
            raise DatabaseError(
                message="The photo was saved but the contact could not be updated.",
                context={"contact_id": contact_id, "photo_url": photo_url},
            ) from e

        logger.info("Contact %s photo updated: %s", contact_id, photo_url)
        return photo_url

    async def delete_contact(self, db: AsyncSession, contact_id: str) -> None:
        """
        Delete a contact row.

        The stored photo file is not removed; it becomes an orphan on disk.
        """
        contact = await self._load(db, contact_id)
        try:
            await db.delete(contact)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting contact %s: %s", contact_id, str(e))
            raise DatabaseError(
                message="Could not delete the contact. Please try again.",
                context={"contact_id": contact_id},
            ) from e

        logger.info("Contact deleted: %s", contact_id)


def get_contact_service(
    photo_store: PhotoStore = Depends(get_photo_store),
) -> ContactService:
    """FastAPI dependency wiring the ContactService to the configured PhotoStore."""
    return ContactService(photo_store)
