# utils/tokenJWT.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt

from config import Settings, get_settings
from exceptions import InvalidToken, MissingToken

logger = logging.getLogger(__name__)


# Issues and verifies signed bearer tokens carrying the user's email
class TokenService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def create_access_token(self, email: str, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode = {"sub": email, "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the email embedded in *token*; raise InvalidToken on any failure."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info(f"Rejected token: {e}")
            raise InvalidToken()

        email = payload.get("sub")
        # Ensure email is present in the token payload
        if not email or not isinstance(email, str):
            raise InvalidToken()
        return email


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token part of an ``Authorization`` header value.

    None means no token was supplied at all. A header with a token but a
    scheme other than Bearer is treated as an invalid token.
    """
    scheme, token = get_authorization_scheme_param(authorization)
    if not token:
        return None
    if scheme.lower() != "bearer":
        raise InvalidToken()
    return token


# Resolve the authenticated email from the request's bearer token
def get_current_email(request: Request, tokens: TokenService = Depends(get_token_service)) -> str:
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise MissingToken()
    return tokens.verify(token)
