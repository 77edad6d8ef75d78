"""Admin account model and role types."""

import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from storedesk.db.base import Base
from storedesk.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class RoleType(str, enum.Enum):
    OWNER = "owner"
    BRANCH_MANAGER = "branch manager"


class Admin(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "admins"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[RoleType] = mapped_column(
        Enum(RoleType, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
    )
    # Set iff role is branch manager
    branch: Mapped[str | None] = mapped_column(String(100))

    def __repr__(self) -> str:
        return f"<Admin {self.username} ({self.role.value})>"
