"""
Pydantic schemas for reservation requests, reservations and payment outcomes.
"""

from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field


class Company(BaseModel):
    """Owner affiliation: a reference to a known company record, or free text."""

    id: Optional[int] = None
    name: Optional[str] = None


class PersonalInformation(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    company: Optional[Company] = None
    promo_code: Optional[str] = None


class ReservationRequest(BaseModel):
    personal_information: PersonalInformation
    ticket_type_id: int
    ticket_quantity: int = Field(default=1, gt=0)
    provider: Optional[str] = None

    def to_entity(self) -> dict:
        """Outbound body for the reserve call, one line item per ticket."""
        info = self.personal_information
        tickets = [
            {"type_id": self.ticket_type_id, "promo_code": info.promo_code or None}
            for _ in range(self.ticket_quantity)
        ]
        return normalize_reservation({
            "owner_email": info.email,
            "owner_first_name": info.first_name,
            "owner_last_name": info.last_name,
            "owner_company": info.company,
            "tickets": tickets,
        })


def normalize_reservation(entity: dict) -> dict:
    """
    Collapse the owner affiliation to exactly one outbound field.

    A company reference id wins over the free-text name. With neither
    present the affiliation is left out of the body entirely.
    """
    normalized = dict(entity)
    company = normalized.pop("owner_company", None)
    if company is None:
        return normalized

    if company.id:
        normalized["owner_company_id"] = company.id
    elif company.name:
        normalized["owner_company"] = company.name
    return normalized


class ReservationTicket(BaseModel):
    id: Optional[int] = None
    number: Optional[str] = None
    ticket_type: Optional[Any] = None
    owner: Optional[Any] = None
    applied_taxes: list[Any] = Field(default_factory=list)

    model_config = {"extra": "allow"}


class Reservation(BaseModel):
    id: Optional[int] = None
    hash: str
    owner_email: Optional[str] = None
    owner_first_name: Optional[str] = None
    owner_last_name: Optional[str] = None
    tickets: list[ReservationTicket] = Field(default_factory=list)
    amount: float = 0
    currency: Optional[str] = None
    payment_gateway_client_token: Optional[str] = None
    promo_code: Optional[str] = None

    model_config = {"extra": "allow"}

    @property
    def is_free(self) -> bool:
        return not self.amount


class PaymentCompleted(BaseModel):
    """Normalized completion event every provider emits."""

    provider: str
    amount: float
    provider_reference: Optional[str] = None
    order: dict = Field(default_factory=dict)
