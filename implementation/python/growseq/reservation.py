"""Capacity reservation request consumed by ``GrowableSequence``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class Reservation(BaseModel):
    """Request to pre-allocate ``capacity`` slots without adding elements."""

    model_config = ConfigDict(frozen=True)

    capacity: StrictInt = Field(ge=0)


def reserve(capacity: int) -> Reservation:
    """Build a ``Reservation`` for ``GrowableSequence(reserve(n))``."""
    return Reservation(capacity=capacity)
