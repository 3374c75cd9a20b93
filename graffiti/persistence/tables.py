"""SQLAlchemy table definitions.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Double,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("author_id", String(255), nullable=False),  # Opaque caller identity
    Column("lat", Double, nullable=False),
    Column("lng", Double, nullable=False),
    Column("kind", String(16), nullable=False),  # 'text', 'strokes', 'external'
    Column("content", JSONB, nullable=False),  # Variant payload incl. kind
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("lat BETWEEN -90 AND 90", name="tags_lat_range"),
    CheckConstraint("lng BETWEEN -180 AND 180", name="tags_lng_range"),
    CheckConstraint("upvotes >= 0 AND downvotes >= 0", name="tags_counters_positive"),
)

# Latitude is the range-scanned column; longitude is filtered in memory
Index("idx_tags_lat", tags_table.c.lat)
Index("idx_tags_author_id", tags_table.c.author_id)
