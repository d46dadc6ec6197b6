"""SQLAlchemy ORM models."""

from identity.models.base import Base
from identity.models.role import Role, user_roles
from identity.models.user import User

__all__ = ["Base", "Role", "User", "user_roles"]
