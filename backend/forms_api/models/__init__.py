"""ORM Models — SQLAlchemy declarative models for schemas and fields.

Invariants:
    - All models inherit from Base (db/base.py)
    - Schema is the parent; every Field is scoped by schema_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from forms_api.models.schema import Schema  # noqa: F401
from forms_api.models.field import Field  # noqa: F401
