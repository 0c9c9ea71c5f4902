"""
Contact API — Application Package Initializer
===============================================

What: Marks the `contact_api` directory as a Python package.
Who:  Used by uvicorn (contact_api.main:app), Alembic, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (ContactService,         │  ← Directory logic, photo storage
    │             PhotoStore)             │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Persistence) / Disk     │  ← Async SQLAlchemy, aiofiles
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
