# ============================================================================
# FILE: goonj/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional

class UserCreate(BaseModel):
    """Schema for user registration"""
    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)

class UserLogin(BaseModel):
    """Schema for user login, by email or by username"""
    email: Optional[EmailStr] = None
    username: Optional[str] = None
    password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def require_identifier(self):
        if not self.email and not self.username:
            raise ValueError("email or username is required")
        return self

class UserResponse(BaseModel):
    """Public user profile"""
    id: str
    username: str
    email: str

    class Config:
        from_attributes = True

class AuthPayload(BaseModel):
    """Token issued on register/login, with the profile it belongs to"""
    token: str
    token_type: str = "bearer"
    user: UserResponse
