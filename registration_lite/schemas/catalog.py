"""
Pydantic schemas for the event catalog: ticket types and tax types.
"""

from typing import Optional, Union
from pydantic import BaseModel, Field

IN_PERSON_ACCESS_LEVEL = "IN_PERSON"


class AccessLevel(BaseModel):
    id: Optional[int] = None
    name: str

    model_config = {"extra": "allow"}


class BadgeFeature(BaseModel):
    id: Optional[int] = None
    name: str = ""

    model_config = {"extra": "allow"}


class BadgeType(BaseModel):
    id: Optional[int] = None
    name: str = ""
    access_levels: list[AccessLevel] = Field(default_factory=list)
    badge_features: list[BadgeFeature] = Field(default_factory=list)

    model_config = {"extra": "allow"}


class TicketType(BaseModel):
    id: int
    name: str = ""
    cost: float = 0
    currency: str = ""
    currency_symbol: str = ""
    quantity_2_sell: int = 0  # 0 means unlimited
    quantity_sold: int = 0
    max_quantity_per_order: int = 0  # 0 means no per-order cap
    # Only a BadgeType when the request expanded it, otherwise the bare id
    badge_type: Optional[Union[BadgeType, int]] = None

    model_config = {"extra": "allow"}


class TaxType(BaseModel):
    id: int
    name: str = ""
    rate: float = 0
    tax_id: Optional[str] = None

    model_config = {"extra": "allow"}


class CatalogSnapshot(BaseModel):
    summit_id: int
    ticket_types: tuple[TicketType, ...]
    tax_types: tuple[TaxType, ...]

    model_config = {"frozen": True}


def is_in_person_ticket_type(ticket_type: TicketType) -> bool:
    """True when the ticket's badge grants IN_PERSON access."""
    if not isinstance(ticket_type.badge_type, BadgeType):
        return False
    return any(al.name == IN_PERSON_ACCESS_LEVEL for al in ticket_type.badge_type.access_levels)


def get_ticket_max_quantity(ticket_type: TicketType) -> Optional[int]:
    """
    Maximum number of tickets of this type a single order may hold.

    Remaining inventory capped by the per-order maximum.
    Returns None when neither limit applies.
    """
    limits = []
    if ticket_type.quantity_2_sell > 0:
        limits.append(max(ticket_type.quantity_2_sell - ticket_type.quantity_sold, 0))
    if ticket_type.max_quantity_per_order > 0:
        limits.append(ticket_type.max_quantity_per_order)
    return min(limits) if limits else None
