from pydantic import BaseModel, Field, field_validator
from typing import Optional

DEFAULT_X = 50.0
DEFAULT_Y = 50.0
MIN_ZOOM = 1.0
MAX_ZOOM = 2.5
ZOOM_STEP = 0.1


class PhotoPosition(BaseModel):
    """Focal point in percent of the container plus a zoom factor."""
    x: float = Field(DEFAULT_X, ge=0, le=100)
    y: float = Field(DEFAULT_Y, ge=0, le=100)
    zoom: float = Field(MIN_ZOOM, ge=MIN_ZOOM, le=MAX_ZOOM)

    @field_validator("zoom", mode="before")
    @classmethod
    def default_zoom(cls, v):
        # Records saved before zoom existed have no value
        return MIN_ZOOM if v is None else v


class PhotoUrlResponse(BaseModel):
    member_id: str
    url: Optional[str] = None
