"""
Contact API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract for contacts.
Why:   Automatic parsing, serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation.

Serialization rule ("omit defaults"):
    A contact field left at its default is dropped from the JSON object
    entirely instead of being emitted as null. Both None and "" count as
    default, so {"name": "Ann", "email": ""} serializes as {"id": ..., "name": "Ann"}.

Field naming:
    The photo URL is exposed as `photoURL`, the name clients of the directory
    already use. Internally (ORM, Python) it is `photo_url`; both spellings are
    accepted on input.
"""

from typing import Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)


# ══════════════════════════════════════════════════════════════════════════
# Contact Models
# ══════════════════════════════════════════════════════════════════════════


class ContactBase(BaseModel):
    """Descriptive contact fields shared by requests and responses. All optional."""

    name: Optional[str] = Field(default=None, description="Display name (used for sorting)")
    email: Optional[str] = Field(default=None, description="Email address (not validated)")
    title: Optional[str] = Field(default=None, description="Job title")
    phone: Optional[str] = Field(default=None, description="Phone number (free text)")
    address: Optional[str] = Field(default=None, description="Postal address (free text)")
    status: Optional[str] = Field(default=None, description="Free-text status label")
    photo_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("photoURL", "photo_url"),
        serialization_alias="photoURL",
        description="Retrieval URL of the contact's current photo",
    )


class ContactCreate(ContactBase):
    """
    What:  Request body for POST /contacts.

    There is no `id` field: an id sent by the client is silently discarded
    (pydantic ignores unknown keys) and the server assigns a fresh one.
    """


class ContactResponse(ContactBase):
    """
    What:  Full representation of a contact.
    Who:   Returned by POST /contacts, GET /contacts/{id}, and inside ContactPage.
    """

    id: str = Field(description="Server-generated opaque identifier")

    model_config = {"from_attributes": True}

    @model_serializer(mode="wrap")
    def _omit_defaults(self, handler: SerializerFunctionWrapHandler):
        data: Dict[str, Any] = handler(self)
        return {key: value for key, value in data.items() if value not in (None, "")}


class ContactPage(BaseModel):
    """
    What:  One page of contacts sorted by name, plus pagination metadata.
    Who:   Returned by GET /contacts.

    Offset pagination:
        page is zero-indexed; the slice is rows [page * size, page * size + size).
        total_pages = ceil(total_elements / size), so an empty directory reports
        total_elements=0 and total_pages=0.

    Multi-word fields go out in camelCase (totalElements, totalPages,
    numberOfElements) like the contacts' photoURL.
    """

    content: List[ContactResponse] = Field(description="Contacts on this page")
    page: int = Field(description="Zero-based page index that was requested")
    size: int = Field(description="Requested page length")
    total_elements: int = Field(
        serialization_alias="totalElements", description="Total number of contacts"
    )
    total_pages: int = Field(
        serialization_alias="totalPages",
        description="Total number of pages at this page size",
    )
    number_of_elements: int = Field(
        serialization_alias="numberOfElements",
        description="Number of contacts on this page",
    )
    first: bool = Field(description="Whether this is the first page")
    last: bool = Field(description="Whether this is the last page")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "contact with ID 'abc' was not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    photo_storage: str = Field(description="Photo directory: writable, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
