# app/schemas/user_schemas.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional, List, Literal
from datetime import datetime

UserRole = Literal["admin", "staff", "customer"]


class UserLogin(BaseModel):
    username: EmailStr
    password: str

class UserRegister(BaseModel):
    username: EmailStr
    password: str = Field(..., min_length=6)

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: Literal["bearer"] = "bearer"

class UserBase(BaseModel):
    username: EmailStr
    role: UserRole = "customer"

class UserCreate(UserBase):
    password: str = Field(..., min_length=6)

class UserUpdate(BaseModel):
    username: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[UserRole] = None

class UserOut(BaseModel):
    id: int
    username: str
    role: str
    is_active: bool
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class MessageResponse(BaseModel):
    msg: str

class UserResponse(BaseModel):
    msg: str
    data: Optional[UserOut] = None

class UsersListResponse(BaseModel):
    msg: str
    data: List[UserOut]
