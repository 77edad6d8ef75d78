"""Site content endpoints: announcement banner and slider images."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storedesk.core.deps import get_current_admin
from storedesk.core.errors import NotFound
from storedesk.db.base import get_db
from storedesk.models.slider_image import SliderImage
from storedesk.schemas.auth import CurrentAdmin
from storedesk.schemas.content import (
    AnnouncementResponse,
    AnnouncementUpdate,
    SliderImageCreate,
    SliderImageResponse,
)
from storedesk.services import announcement

router = APIRouter(tags=["content"])


@router.get("/announcement", response_model=AnnouncementResponse)
async def get_announcement(db: AsyncSession = Depends(get_db)):
    return await announcement.get_announcement(db)


@router.put("/announcement", response_model=AnnouncementResponse)
async def put_announcement(
    body: AnnouncementUpdate,
    current_admin: CurrentAdmin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the announcement."""
    return await announcement.upsert_announcement(db, body.message, body.enabled)


@router.get("/slider-images", response_model=list[SliderImageResponse])
async def list_slider_images(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(SliderImage).order_by(SliderImage.created_at))
    return result.scalars().all()


@router.post("/slider-images", response_model=SliderImageResponse, status_code=status.HTTP_201_CREATED)
async def create_slider_image(body: SliderImageCreate, db: AsyncSession = Depends(get_db)):
    image = SliderImage(url=body.url)
    db.add(image)
    await db.commit()
    return image


@router.delete("/slider-images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slider_image(image_id: UUID, db: AsyncSession = Depends(get_db)):
    image = await db.get(SliderImage, image_id)
    if not image:
        raise NotFound("Slider image not found")
    await db.delete(image)
    await db.commit()
