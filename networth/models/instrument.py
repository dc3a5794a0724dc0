"""
Base class for assets and liabilities.

Both kinds of instrument share identity, naming, timestamps and the
single mutation entry point that keeps `value` in sync with the details.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from networth.models.types import UtcDatetime, utc_now


class Instrument(BaseModel, ABC):
    """
    An asset or liability entry.

    CRITICAL: `value` is derived whenever typed details are present.
    It is recomputed on construction (including deserialization) and on
    every call to update(), before either returns.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    # Fields a caller may change through update()
    UPDATABLE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"name", "category", "value", "details"}
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique instrument ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display name"
    )
    value: float = Field(
        default=0.0,
        description="Current monetary value"
    )
    created_at: UtcDatetime = Field(
        default_factory=utc_now,
        description="When the instrument was created"
    )
    updated_at: UtcDatetime = Field(
        default_factory=utc_now,
        description="Last update timestamp"
    )

    @abstractmethod
    def compute_value(self) -> float:
        """Value implied by the instrument's details."""

    @model_validator(mode='after')
    def recalculate_value(self) -> "Instrument":
        """Apply the value strategy after construction."""
        self.value = self.compute_value()
        return self

    def update(self, **changes: Any) -> None:
        """
        Apply a partial update and recompute the value.

        Only the given fields change. Values are validated exactly as on
        construction, so a dict is accepted for `details` and a plain
        string for `category`.

        Raises:
            ValueError: On unknown field names or invalid values
        """
        unknown = set(changes) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        merged = self.model_validate({**self.model_dump(), **changes})
        for field_name in changes:
            setattr(self, field_name, getattr(merged, field_name))

        self.updated_at = utc_now()
        self.value = self.compute_value()
