from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from tidyhome.database import Base
from tidyhome.utils.dates import utcnow


class User(Base):
    """User model representing account owners."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(20), unique=True, index=True, nullable=False)  # Stored lower-cased
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    # Everything below is private to the owner and goes away with the account
    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    categories = relationship("Category", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    members = relationship("Member", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
