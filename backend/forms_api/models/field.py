"""Field ORM — a named child entity belonging to exactly one schema.

Invariants:
    - Always belongs to a Schema (schema_id FK, non-nullable)
    - FK declared ON DELETE CASCADE: the database never keeps a field of a deleted schema
    - name is non-nullable text; duplicates are allowed

Design Decisions:
    - schema_id indexed: schema delete and filtered listing both select by it
"""

from sqlalchemy import ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from forms_api.db.base import Base


class Field(Base):
    """Field entity — a named member of a schema."""
    __tablename__ = "fields"
    __table_args__ = (
        Index("idx_fields_name", "name"),
        Index("idx_fields_schema_id", "schema_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    schema_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("schemas.id", ondelete="CASCADE"), nullable=False,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
