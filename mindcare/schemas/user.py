from datetime import datetime
from typing import List, Literal

from pydantic import Field

from mindcare.schemas.base import CamelModel, FrozenRecord

Role = Literal["student", "counsellor", "admin"]


class UserProfile(FrozenRecord):
    id: str
    email: str
    name: str
    role: Role
    created_at: datetime


class Counsellor(CamelModel):
    id: str
    name: str


class CounsellorsResponse(CamelModel):
    counsellors: List[Counsellor]


class SignupRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)
    role: Role = "student"


class LoginRequest(CamelModel):
    email: str
    password: str


class AuthResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    profile: UserProfile


class ProfileResponse(CamelModel):
    profile: UserProfile
