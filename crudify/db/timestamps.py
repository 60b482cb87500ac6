"""Timestamp Capability: explicit mixin for models that track creation/update time.

Invariants:
    - A model is timestamp-capable iff it subclasses HasTimestamps
    - created_at is non-null once persisted; updated_at stays NULL until the first update
    - Both columns are timezone-aware

Design Decisions:
    - Mixin over attribute probing: handlers branch on issubclass/isinstance, so a model
      that merely happens to have a created_at column is not treated as timestamped
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column

TIMESTAMP_FIELDS = ("created_at", "updated_at")


class HasTimestamps:
    """Declarative mixin adding created_at / updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )


def supports_timestamps(model: type) -> bool:
    return isinstance(model, type) and issubclass(model, HasTimestamps)
