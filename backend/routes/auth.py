# backend/routes/auth.py
from fastapi import APIRouter, Depends

from schemas.user import ChangePasswordRequest, Credentials, LoginResponse, SuccessResponse
from services.credentials import CredentialStore, get_credential_store
from utils.tokenJWT import TokenService, get_current_email, get_token_service

router = APIRouter(tags=["Auth"])


# Register a new user
@router.post("/register", response_model=SuccessResponse)
def register(payload: Credentials, store: CredentialStore = Depends(get_credential_store)):
    store.register(payload.email, payload.password)
    return SuccessResponse()


# Authenticate user and issue JWT token
@router.post("/login", response_model=LoginResponse)
def login(
    payload: Credentials,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = store.verify(payload.email, payload.password)
    return LoginResponse(token=tokens.create_access_token(user.email))


# Change the password of the authenticated user
@router.post("/change-password", response_model=SuccessResponse)
def change_password(
    payload: ChangePasswordRequest,
    email: str = Depends(get_current_email),
    store: CredentialStore = Depends(get_credential_store),
):
    store.change_password(email, payload.current_password, payload.new_password)
    return SuccessResponse()
