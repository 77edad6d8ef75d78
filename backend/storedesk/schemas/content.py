"""Site content schemas: announcement, slider images, uploads."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementUpdate(BaseModel):
    message: str = Field(..., max_length=2000)
    enabled: bool


class AnnouncementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    message: str = ""
    enabled: bool = False


class SliderImageCreate(BaseModel):
    url: str = Field(..., min_length=1, max_length=500)


class SliderImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    url: str


class UploadResponse(BaseModel):
    url: str
