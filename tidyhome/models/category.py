from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tidyhome.database import Base
from tidyhome.utils.dates import utcnow

DEFAULT_CATEGORY_COLOR = "#6b7280"


class Category(Base):
    """Category model used to group and colour tasks."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    color = Column(String(20), default=DEFAULT_CATEGORY_COLOR, nullable=False)  # CSS colour, e.g. '#ff0000'
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="categories")

    # Tasks keep existing when their category is removed (category_id -> NULL)
    tasks = relationship("Task", back_populates="category")
