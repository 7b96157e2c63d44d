# services/credentials.py
import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from exceptions import (
    EmailAlreadyExists,
    InvalidCredentials,
    InvalidCurrentPassword,
    NotFound,
    ValidationFailed,
)
from models.users import User
from utils.hashing import PasswordHasher, get_password_hasher

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation on PostgreSQL
UNIQUE_VIOLATION = "23505"


def _require(**fields: Optional[str]) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationFailed(missing)


def _is_unique_violation(err: IntegrityError) -> bool:
    orig = err.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    # SQLite reports constraint failures only through the message
    return "UNIQUE" in str(orig).upper()


# Registration, credential verification and password changes
class CredentialStore:
    def __init__(self, db: Session, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    def _get(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def register(self, email: Optional[str], password: Optional[str]) -> User:
        _require(email=email, password=password)

        user = User(email=email, password_hash=self.hasher.hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if _is_unique_violation(e):
                logger.warning(f"Registration rejected, email already exists: {email}")
                raise EmailAlreadyExists()
            raise
        self.db.refresh(user)

        logger.info(f"Registered user {email}")
        return user

    def verify(self, email: Optional[str], password: Optional[str]) -> User:
        _require(email=email, password=password)

        user = self._get(email)
        if user is None:
            # Unknown email costs the same bcrypt work as a wrong password
            self.hasher.dummy_verify()
            logger.warning(f"Failed login for {email}")
            raise InvalidCredentials()
        if not self.hasher.verify(password, user.password_hash):
            logger.warning(f"Failed login for {email}")
            raise InvalidCredentials()
        return user

    def change_password(self, email: str, current_password: Optional[str], new_password: Optional[str]) -> None:
        _require(currentPassword=current_password, newPassword=new_password)

        # Always re-read the stored hash; the token only proves identity
        user = self._get(email)
        if user is None:
            raise NotFound("User")
        if not self.hasher.verify(current_password, user.password_hash):
            logger.warning(f"Password change rejected for {email}: wrong current password")
            raise InvalidCurrentPassword()

        user.password_hash = self.hasher.hash(new_password)
        self.db.commit()
        logger.info(f"Password changed for {email}")


def get_credential_store(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> CredentialStore:
    return CredentialStore(db, hasher)
