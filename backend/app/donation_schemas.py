from pydantic import BaseModel, Field
import datetime


class DonationCreate(BaseModel):
    coins: int = Field(0, ge=0)
    income_eur: float = Field(..., ge=0)
    co_op: str = 'STUDIO-MATIC'


class DonationUpdate(DonationCreate):
    pass


class Donation(DonationCreate):
    id: int
    donated_at: datetime.datetime

    class Config:
        from_attributes = True
