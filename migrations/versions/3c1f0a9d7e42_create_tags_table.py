"""create_tags_table

Create the geotag store:
- Tags (text, strokes and external-media content in one JSONB column)
- Latitude index for bounding-box range scans

Revision ID: 3c1f0a9d7e42
Revises:
Create Date: 2026-10-17 10:12:04.318221

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7e42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Refuse to run over an unrelated table that happens to be called "tags"
    bind = op.get_bind()
    existing = sa.inspect(bind).get_table_names()
    if "tags" in existing:
        raise RuntimeError(
            "A 'tags' table already exists; point DATABASE__URL at an empty database"
        )

    op.create_table(
        "tags",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("author_id", sa.String(255), nullable=False),
        sa.Column("lat", sa.Double(), nullable=False),
        sa.Column("lng", sa.Double(), nullable=False),
        sa.Column("kind", sa.String(16), nullable=False),
        sa.Column("content", postgresql.JSONB(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint("lat BETWEEN -90 AND 90", name="tags_lat_range"),
        sa.CheckConstraint("lng BETWEEN -180 AND 180", name="tags_lng_range"),
        sa.CheckConstraint(
            "upvotes >= 0 AND downvotes >= 0", name="tags_counters_positive"
        ),
    )

    op.create_index("idx_tags_lat", "tags", ["lat"])
    op.create_index("idx_tags_author_id", "tags", ["author_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_tags_author_id", table_name="tags")
    op.drop_index("idx_tags_lat", table_name="tags")
    op.drop_table("tags")
