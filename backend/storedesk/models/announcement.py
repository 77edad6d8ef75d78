"""Site announcement: a single-row table."""

from sqlalchemy import Boolean, CheckConstraint, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from storedesk.db.base import Base
from storedesk.models.mixins import TimestampMixin

SINGLETON_ID = 1


class Announcement(TimestampMixin, Base):
    __tablename__ = "announcement"
    __table_args__ = (
        CheckConstraint(f"id = {SINGLETON_ID}", name="ck_announcement_singleton"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    message: Mapped[str] = mapped_column(Text, default="", nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Announcement enabled={self.enabled}>"
