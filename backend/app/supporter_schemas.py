from pydantic import BaseModel, Field


class SupporterCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    donation_id: int


class SupporterUpdate(SupporterCreate):
    pass


class Supporter(SupporterCreate):
    id: int

    class Config:
        from_attributes = True
