from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    message: str
    username: str
    role: str
    token: str
    token_type: str = "bearer"


class AdminCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: str


class AdminRead(BaseModel):
    id: int
    email: EmailStr
    role: str
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AdminCreateResponse(BaseModel):
    message: str
    admin: AdminRead
