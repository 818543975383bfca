from pydantic import BaseModel, EmailStr, Field


class SignRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class Validation(BaseModel):
    email: str
    message: str


class Me(BaseModel):
    id: int
    email: str

    class Config:
        from_attributes = True
