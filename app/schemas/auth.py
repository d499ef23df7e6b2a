from pydantic import BaseModel, EmailStr, Field
from datetime import datetime


class SignUpRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)

    class Config:
        frozen = True


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)

    class Config:
        frozen = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class User(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True
