# ============================================================================
# User Schemas
# ============================================================================
from pydantic import BaseModel, Field, EmailStr
from typing import Optional, List
from datetime import datetime
from uuid import UUID

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr
    password: str = Field(..., min_length=8)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class DeleteAccountRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds until access token expires
    user_id: str

class UserResponse(BaseModel):
    id: UUID
    username: str
    verified_email: bool
    is_operator: bool
    level: int
    experience_points: int
    buddy_level: int
    buddy_experience_points: int
    current_rps_streak: int
    highest_rps_streak: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class UserProfileResponse(UserResponse):
    followers_count: int = 0
    following_count: int = 0
    viewer_follows: bool = False

class FollowEntry(BaseModel):
    user_id: str
    username: str

class FollowListResponse(BaseModel):
    user_id: str
    users: List[FollowEntry]

class MessageResponse(BaseModel):
    message: str
    success: bool = True
