"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SchemaId, FieldId wrap the integer row ids — never use bare int in store signatures
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SchemaId = NewType("SchemaId", int)
FieldId = NewType("FieldId", int)


# ─── Enums ───────────────────────────────────────────────────────

class EnvelopeStatus(str, Enum):
    """Status discriminator of every response envelope."""
    OK = "OK"
    ERROR = "Error"


class Environment(str, Enum):
    """Deployment environment — selects the logging profile."""
    LOCAL = "local"
    DEV = "dev"
    PROD = "prod"

    @classmethod
    def parse(cls, value: str) -> "Environment":
        """Unknown values fall back to PROD."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.PROD
