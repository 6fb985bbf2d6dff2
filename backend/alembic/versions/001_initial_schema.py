"""Initial schema — schemas and fields with cascading foreign key.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "schemas",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
    )
    op.create_index("idx_schemas_name", "schemas", ["name"])

    op.create_table(
        "fields",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "schema_id", sa.Integer,
            sa.ForeignKey("schemas.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.Text, nullable=False),
    )
    op.create_index("idx_fields_name", "fields", ["name"])
    op.create_index("idx_fields_schema_id", "fields", ["schema_id"])


def downgrade() -> None:
    op.drop_index("idx_fields_schema_id", table_name="fields")
    op.drop_index("idx_fields_name", table_name="fields")
    op.drop_table("fields")
    op.drop_index("idx_schemas_name", table_name="schemas")
    op.drop_table("schemas")
