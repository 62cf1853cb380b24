from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from marketplace.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    email = Column(String(255), nullable=False, unique=True)

    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    age = Column(Integer, nullable=True)
    bio = Column(Text, nullable=True)
    profile_picture = Column(String(512), nullable=True)

    role = Column(String(20), nullable=False, default="user")
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
