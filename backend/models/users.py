from sqlalchemy import Column, Integer, String, Text
from database import Base

# Profile attributes a user may edit; everything except the credentials
PROFILE_FIELDS = ("first_name", "last_name", "phone", "role", "department", "bio")


# Represents a user account: unique email identity, bcrypt hash and profile
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False)
    # Column keeps its historical name; only ever holds a bcrypt hash
    password_hash = Column("password", String(255), nullable=False)

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    role = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    bio = Column(Text, nullable=True)

    @property
    def display_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or self.email
