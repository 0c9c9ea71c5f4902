"""
Contact API — Contact Route Handlers
======================================

What:  HTTP surface of the contact directory under /contacts.
Why:   Entry point for creating, listing, and fetching contacts and their photos.
How:   Extracts path/query/body/multipart data, delegates to ContactService or
       PhotoStore, and shapes the HTTP response (status, headers, media type).

Route Inventory:
    POST   /contacts                    create (201 + Location)
    GET    /contacts?page=&size=        paginated list sorted by name
    GET    /contacts/{id}               single contact
    DELETE /contacts/{id}               delete row (photo file left on disk)
    PUT    /contacts/photo?id=          multipart `file` upload → text/plain URL
    GET    /contacts/image/{filename}   raw photo bytes (image/png or image/jpeg)
    GET    /contacts/images/{filename}  same, matching the URL returned by upload
"""

import logging

from fastapi import APIRouter, Depends, File, Query, Request, Response, UploadFile
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from contact_api.database import get_db_session
from contact_api.schemas.contact import (
    ContactCreate,
    ContactPage,
    ContactResponse,
    ErrorResponse,
)
from contact_api.services.contact_service import ContactService, get_contact_service
from contact_api.services.photo_store import PhotoStore, get_photo_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["Contacts"])


@router.post(
    "",
    status_code=201,
    response_model=ContactResponse,
    responses={201: {"description": "Contact created", "model": ContactResponse}},
    summary="Create a contact",
    description=(
        "Creates a contact from the JSON body. All fields are optional; any `id` "
        "in the body is ignored and a new identifier is generated."
    ),
)
async def create_contact(
    payload: ContactCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    contact = await service.create_contact(db=db, payload=payload)
    response.headers["Location"] = f"/contacts/{contact.id}"
    return contact


@router.get(
    "",
    response_model=ContactPage,
    summary="List contacts",
    description="Returns one zero-indexed page of contacts sorted by name ascending.",
)
async def list_contacts(
    page: int = Query(default=0, ge=0, description="Zero-based page index"),
    size: int = Query(default=10, ge=1, description="Page length"),
    db: AsyncSession = Depends(get_db_session),
    service: ContactService = Depends(get_contact_service),
) -> ContactPage:
    return await service.list_contacts(db=db, page=page, size=size)


@router.put(
    "/photo",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Public URL of the stored photo", "content": {"text/plain": {}}},
        404: {"description": "Contact not found", "model": ErrorResponse},
        500: {"description": "Photo could not be stored", "model": ErrorResponse},
    },
    summary="Upload or replace a contact's photo",
)
async def upload_photo(
    request: Request,
    contact_id: str = Query(..., alias="id", description="Identifier of the contact"),
    file: UploadFile = File(..., description="Photo file (multipart field `file`)"),
    db: AsyncSession = Depends(get_db_session),
    service: ContactService = Depends(get_contact_service),
) -> PlainTextResponse:
    """
    Upload a photo for a contact.

    The stored name is `<id><ext>` where ext comes from the uploaded filename
    (".png" when it has no dot). A previous photo with the same extension is
    overwritten.
    """
    try:
        content = await file.read()
        logger.info(
            "Received photo upload: contact=%s filename=%s size=%d bytes",
            contact_id,
            file.filename or "unknown",
            len(content),
        )
        url = await service.update_photo(
            db=db,
            contact_id=contact_id,
            content=content,
            original_filename=file.filename,
            base_url=str(request.base_url),
        )
    finally:
        await file.close()

    return PlainTextResponse(url)


async def _serve_photo(filename: str, photo_store: PhotoStore) -> Response:
    content = await photo_store.retrieve(filename)
    return Response(content=content, media_type=photo_store.media_type_for(filename))


@router.get(
    "/image/{filename}",
    response_class=Response,
    responses={
        200: {"description": "Photo bytes", "content": {"image/png": {}, "image/jpeg": {}}},
        404: {"description": "Photo not found", "model": ErrorResponse},
    },
    summary="Fetch a stored photo",
)
async def get_photo(
    filename: str,
    photo_store: PhotoStore = Depends(get_photo_store),
) -> Response:
    return await _serve_photo(filename, photo_store)


@router.get(
    "/images/{filename}",
    response_class=Response,
    responses={
        200: {"description": "Photo bytes", "content": {"image/png": {}, "image/jpeg": {}}},
        404: {"description": "Photo not found", "model": ErrorResponse},
    },
    summary="Fetch a stored photo by the URL returned from upload",
)
async def get_photo_by_url(
    filename: str,
    photo_store: PhotoStore = Depends(get_photo_store),
) -> Response:
    return await _serve_photo(filename, photo_store)


@router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    responses={404: {"description": "Contact not found", "model": ErrorResponse}},
    summary="Get a single contact by ID",
)
async def get_contact(
    contact_id: str,
    db: AsyncSession = Depends(get_db_session),
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    return await service.get_contact(db=db, contact_id=contact_id)


@router.delete(
    "/{contact_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Contact not found", "model": ErrorResponse}},
    summary="Delete a contact",
    description="Deletes the contact record. A stored photo file is not removed.",
)
async def delete_contact(
    contact_id: str,
    db: AsyncSession = Depends(get_db_session),
    service: ContactService = Depends(get_contact_service),
) -> Response:
    await service.delete_contact(db=db, contact_id=contact_id)
    return Response(status_code=204)
