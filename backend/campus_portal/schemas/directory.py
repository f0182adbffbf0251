from datetime import datetime

from pydantic import BaseModel, Field

from campus_portal.schemas.approval import EMAIL_PATTERN


class ClubCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    faculty_coordinator: str = Field(..., min_length=1, max_length=200)
    faculty_email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    recruitment_open: bool = False
    recruitment_info: str | None = Field(None, max_length=2000)
    logo_url: str | None = Field(None, max_length=2048)


class ClubRead(BaseModel):
    id: str
    name: str
    description: str | None
    faculty_coordinator: str
    faculty_email: str | None
    recruitment_open: bool | None
    recruitment_info: str | None
    logo_url: str | None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ShopCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    location: str | None = Field(None, max_length=200)
    contact: str | None = Field(None, max_length=200)
    category: str | None = Field(None, max_length=100)
    image_url: str | None = Field(None, max_length=2048)


class ShopRead(BaseModel):
    id: str
    name: str
    description: str | None
    location: str | None
    contact: str | None
    category: str | None
    image_url: str | None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
