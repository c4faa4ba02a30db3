"""Base model for aqdash records.

Every decoded record inherits from :class:`AqBaseModel`: frozen (and so
hashable, which the hover selection relies on), tolerant of extra keys the
server may add, and constructible either from wire keys or field names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AqBaseModel(BaseModel):
    """Base for sensor service records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
