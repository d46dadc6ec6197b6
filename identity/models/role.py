"""ORM models for roles and the user-role association table."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table

from identity.models.base import Base

# Many-to-many link between users and roles.
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column(
        "user_id",
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Role(Base):
    """
    Named authorization tag (e.g. 'Admin').

    normalized_name is the trimmed, lower-cased name and carries the unique index,
    so 'admin' and 'Admin' are the same role.
    """

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False)
    normalized_name = Column(String(64), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"Role(id={self.id!r}, name={self.name!r})"
