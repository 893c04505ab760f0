from pydantic import BaseModel, EmailStr
from typing import Optional


class SignupRequest(BaseModel):
    # Optional so a missing field surfaces as "Email and password are required"
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    name: Optional[str] = None
    full_name: Optional[str] = None


class SignupUser(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    full_name: Optional[str] = None


class SignupResponse(BaseModel):
    user: SignupUser


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
