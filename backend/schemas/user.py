from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


# Credentials payload for /register and /login; emptiness is checked by the service
class Credentials(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# Response after a successful login
class LoginResponse(BaseModel):
    success: bool = True
    token: str


# Generic acknowledgement
class SuccessResponse(BaseModel):
    success: bool = True


# Profile attributes, everything but the credentials
class ProfileFields(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    bio: Optional[str] = None


# Output schema for GET /profile
class ProfileResponse(ProfileFields):
    email: str

    model_config = ConfigDict(from_attributes=True)


# Full overwrite of the profile; omitted attributes become null
class ProfileUpdate(ProfileFields):
    pass


# Schema for password changes
class ChangePasswordRequest(BaseModel):
    current_password: Optional[str] = Field(None, alias="currentPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")

    model_config = ConfigDict(populate_by_name=True)
