"""Pydantic schemas for analysis endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from coinfolio.domain.views import AllocationView


class AllocationItemOut(BaseModel):
    coin_id: str
    symbol: str
    current_value: float
    percentage: float


class AllocationResponse(BaseModel):
    """Portfolio allocation breakdown."""

    items: list[AllocationItemOut]
    total_value: float
    as_of: Optional[datetime] = None

    @classmethod
    def from_domain(cls, view: AllocationView) -> "AllocationResponse":
        return cls(
            items=[
                AllocationItemOut(
                    coin_id=item.coin_id,
                    symbol=item.symbol,
                    current_value=float(item.current_value),
                    percentage=float(item.percentage),
                )
                for item in view.items
            ],
            total_value=float(view.total_value),
            as_of=view.as_of,
        )
