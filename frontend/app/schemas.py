from pydantic import BaseModel, Field
from typing import Optional
import datetime

from .config import CO_OP


class Donation(BaseModel):
    id: int
    coins: int = Field(..., ge=0)
    donated_at: datetime.datetime
    income_eur: float = Field(..., ge=0)
    co_op: str


class DonationPayload(BaseModel):
    coins: int = Field(0, ge=0)
    income_eur: float = Field(..., ge=0)
    co_op: str = CO_OP


class Supporter(BaseModel):
    id: int
    name: str
    donation_id: int


class SupporterPayload(BaseModel):
    name: str = Field(..., min_length=1)
    donation_id: int


class SupporterView(BaseModel):
    """A supporter joined with its donation for display.

    ``resolved`` is False when the donation could not be found; the donation
    fields are then None.
    """
    id: int
    name: str
    donation_id: int
    donated_at: Optional[datetime.datetime] = None
    income_eur: Optional[float] = None
    co_op: Optional[str] = None
    resolved: bool = True


class Me(BaseModel):
    id: int
    email: str
