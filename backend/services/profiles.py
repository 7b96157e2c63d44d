# services/profiles.py
from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from exceptions import NotFound
from models.users import PROFILE_FIELDS, User
from schemas.user import ProfileUpdate


class ProfileService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, email: str) -> User:
        # The store is authoritative, not the token
        user = self.db.query(User).filter(User.email == email).first()
        if user is None:
            raise NotFound("User")
        return user

    def get_profile(self, email: str) -> User:
        return self._get(email)

    def update_profile(self, email: str, payload: ProfileUpdate) -> User:
        user = self._get(email)
        # Full overwrite: attributes missing from the payload are nulled
        values = payload.model_dump()
        for field in PROFILE_FIELDS:
            setattr(user, field, values.get(field))
        self.db.commit()
        self.db.refresh(user)
        return user


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)
