"""User model: one account per username; owns progress records."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from kosync.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False, index=True)  # case-sensitive
    password = Column(String(255), nullable=False)  # bcrypt_sha256 hash of password + salt
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    progress = relationship("Progress", back_populates="user", uselist=True)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
