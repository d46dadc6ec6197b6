"""ORM model for registered users (credentials and role membership)."""

import uuid

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from identity.models.base import Base
from identity.models.role import user_roles


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    Username and email are unique case-insensitively through their normalized
    columns; the display values keep the casing the user registered with.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    full_name = Column(String(255), nullable=False)
    username = Column(String(255), nullable=False)
    normalized_username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False)
    normalized_email = Column(String(320), nullable=False, unique=True, index=True)
    age = Column(Integer, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    roles = relationship("Role", secondary=user_roles, lazy="selectin")

    @property
    def role_names(self) -> list[str]:
        return sorted(role.name for role in self.roles)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r})"
