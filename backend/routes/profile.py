# backend/routes/profile.py
from fastapi import APIRouter, Depends

from schemas.user import ProfileResponse, ProfileUpdate, SuccessResponse
from services.profiles import ProfileService, get_profile_service
from utils.tokenJWT import get_current_email

router = APIRouter(prefix="/profile", tags=["Profile"])


# Retrieve the profile of the authenticated user
@router.get("", response_model=ProfileResponse)
def get_profile(
    email: str = Depends(get_current_email),
    profiles: ProfileService = Depends(get_profile_service),
):
    return profiles.get_profile(email)


# Overwrite all profile attributes of the authenticated user
@router.put("", response_model=SuccessResponse)
def update_profile(
    payload: ProfileUpdate,
    email: str = Depends(get_current_email),
    profiles: ProfileService = Depends(get_profile_service),
):
    profiles.update_profile(email, payload)
    return SuccessResponse()
