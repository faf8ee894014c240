"""View models for portfolio analysis outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class AllocationItem:
    """Single item in allocation breakdown."""

    coin_id: str
    symbol: str
    current_value: Decimal
    percentage: Decimal


@dataclass
class AllocationView:
    """Portfolio allocation breakdown."""

    items: list[AllocationItem] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    as_of: Optional[datetime] = None
