# utils/hashing.py
from functools import lru_cache

from fastapi import Depends
from passlib.context import CryptContext

from config import Settings, get_settings


# Salted bcrypt hashing with a fixed cost factor
class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        try:
            return self.context.verify(password, password_hash)
        except ValueError:
            # Stored value is not a recognizable hash (legacy rows)
            return False

    def dummy_verify(self) -> None:
        # Spend the same time as a real check when there is no stored hash
        self.context.dummy_verify()


@lru_cache
def _hasher_for(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return _hasher_for(settings.BCRYPT_ROUNDS)
