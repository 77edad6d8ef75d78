"""Single-row announcement store."""

from sqlalchemy.ext.asyncio import AsyncSession

from storedesk.models.announcement import SINGLETON_ID, Announcement
from storedesk.schemas.content import AnnouncementResponse


async def get_announcement(db: AsyncSession) -> AnnouncementResponse:
    announcement = await db.get(Announcement, SINGLETON_ID)
    if announcement is None:
        return AnnouncementResponse()
    return AnnouncementResponse.model_validate(announcement)


async def upsert_announcement(db: AsyncSession, message: str, enabled: bool) -> AnnouncementResponse:
    announcement = await db.get(Announcement, SINGLETON_ID)
    if announcement is None:
        announcement = Announcement(id=SINGLETON_ID)
        db.add(announcement)
    announcement.message = message
    announcement.enabled = enabled
    await db.commit()
    return AnnouncementResponse.model_validate(announcement)
