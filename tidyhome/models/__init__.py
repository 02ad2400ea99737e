"""SQLAlchemy models for TidyHome."""

from tidyhome.models.user import User
from tidyhome.models.category import Category
from tidyhome.models.member import Member
from tidyhome.models.task import Task
from tidyhome.models.completion import Completion

__all__ = ["User", "Category", "Member", "Task", "Completion"]
