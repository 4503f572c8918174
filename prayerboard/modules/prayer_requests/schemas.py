from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class PrayerRequestCreate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content must not be blank")
        return v


class PrayerRequestUpdate(PrayerRequestCreate):
    pass


class PrayerRequestResponse(BaseModel):
    id: str
    member_id: str
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
