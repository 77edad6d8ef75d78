"""Promotional slider image model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storedesk.db.base import Base
from storedesk.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class SliderImage(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "slider_images"

    url: Mapped[str] = mapped_column(String(500), nullable=False)

    def __repr__(self) -> str:
        return f"<SliderImage {self.url}>"
