"""Schema ORM — a named parent entity that groups fields.

Invariants:
    - id is an integer primary key assigned by the database
    - name is non-nullable text; duplicates are allowed
    - Deleting a schema removes its fields (FK ON DELETE CASCADE on fields.schema_id)

Design Decisions:
    - No ORM relationship to Field: the store works with bulk statements, the
      cascade lives in the database, not in the unit of work
"""

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from forms_api.db.base import Base


class Schema(Base):
    """Schema entity — owns its fields."""
    __tablename__ = "schemas"
    __table_args__ = (
        Index("idx_schemas_name", "name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
