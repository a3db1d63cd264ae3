from pydantic import BaseModel, EmailStr, Field

from app.schemas.base import BaseResponseSchema


class LoginRequest(BaseModel):
    """Login request schema."""
    username: str = Field(..., min_length=1, description="Account username")
    password: str = Field(..., min_length=1, description="Account password")


class TokenResponse(BaseModel):
    """Token response schema."""
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration in seconds")


class UserResponse(BaseResponseSchema):
    """Signed-in user as exposed by the API (never includes hashes)."""
    id: int
    username: str
    email: str
    status: int
    is_active: bool
    created_at: int
    updated_at: int


class UserCreate(BaseModel):
    """Input for provisioning a new account."""
    username: str = Field(..., min_length=3, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, description="Plain password, hashed before storage")
