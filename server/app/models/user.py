from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

class UserIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=128)
    email: Optional[EmailStr] = None
    role: str = Field(default="member", max_length=32)  # parent, child, member
    avatar: Optional[str] = None
    family_id: Optional[int] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None  # YYYY-MM-DD
    height: Optional[int] = Field(default=None, ge=0)
    weight: Optional[int] = Field(default=None, ge=0)

class UserUpdate(BaseModel):
    """Partial profile update; only fields that are sent get merged"""
    password: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    email: Optional[EmailStr] = None
    role: Optional[str] = Field(default=None, max_length=32)
    avatar: Optional[str] = None
    family_id: Optional[int] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    height: Optional[int] = Field(default=None, ge=0)
    weight: Optional[int] = Field(default=None, ge=0)

class UserOut(BaseModel):
    """User response model for API (never carries the password)"""
    id: int
    username: str
    name: str
    email: Optional[str] = None
    role: str = "member"
    avatar: Optional[str] = None
    family_id: Optional[int] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    height: Optional[int] = None
    weight: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class FamilyIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)

class FamilyOut(FamilyIn):
    id: int
    created_at: datetime
