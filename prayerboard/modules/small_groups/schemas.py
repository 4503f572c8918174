from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class SmallGroupCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class SmallGroupUpdate(SmallGroupCreate):
    pass


class SmallGroupResponse(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
