"""Create contacts table

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the `contacts` table holding directory records.
How:   Portable column types only (VARCHAR), so the same revision runs on
       PostgreSQL and SQLite.

Rollback: downgrade() drops the table entirely (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the contacts table and its name index. See contact_api/models/contact.py."""
    op.create_table(
        "contacts",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Server-generated opaque identifier, immutable after creation",
        ),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(255), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("status", sa.String(255), nullable=True),
        sa.Column(
            "photo_url",
            sa.String(255),
            nullable=True,
            comment="Retrieval URL of the contact's current photo",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Listing always sorts by name
    op.create_index("idx_contacts_name", "contacts", ["name"])


def downgrade() -> None:
    """Drop the contacts table. Stored photo files are not touched."""
    op.drop_index("idx_contacts_name", table_name="contacts")
    op.drop_table("contacts")
