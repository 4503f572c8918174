from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime

from prayerboard.modules.photos.position import position_from_record
from prayerboard.modules.photos.schemas import PhotoPosition
from prayerboard.modules.prayer_requests.schemas import PrayerRequestResponse
from prayerboard.modules.small_groups.schemas import SmallGroupResponse


class MemberRole(str, Enum):
    PASTOR = "pastor"
    LEADER = "leader"
    SUB_LEADER = "sub_leader"


ROLE_PRIORITY: Dict[MemberRole, int] = {
    MemberRole.PASTOR: 0,
    MemberRole.LEADER: 1,
    MemberRole.SUB_LEADER: 2,
}

ROLE_LABELS: Dict[MemberRole, str] = {
    MemberRole.PASTOR: "교역자",
    MemberRole.LEADER: "다락방장",
    MemberRole.SUB_LEADER: "순장",
}


def _strip_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name must not be blank")
    return v


class MemberCreate(BaseModel):
    small_group_id: str
    name: str
    role: MemberRole = MemberRole.SUB_LEADER
    photo_url: Optional[str] = None
    photo_position: Optional[PhotoPosition] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)


class MemberUpdate(BaseModel):
    small_group_id: Optional[str] = None
    name: Optional[str] = None
    role: Optional[MemberRole] = None
    photo_position: Optional[PhotoPosition] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return _strip_name(v)


class MemberResponse(BaseModel):
    id: str
    small_group_id: str
    name: str
    role: MemberRole
    photo_url: Optional[str] = None
    photo_position: PhotoPosition = Field(default_factory=PhotoPosition)
    created_at: datetime
    updated_at: datetime
    small_group: Optional[SmallGroupResponse] = None
    prayer_requests: List[PrayerRequestResponse] = Field(default_factory=list)

    @field_validator("photo_position", mode="before")
    @classmethod
    def default_position(cls, v):
        # Stored rows are read leniently; request bodies use the strict PhotoPosition
        return position_from_record(v)

    @field_validator("prayer_requests", mode="before")
    @classmethod
    def default_requests(cls, v):
        return [] if v is None else v

    @property
    def role_label(self) -> str:
        return ROLE_LABELS[self.role]

    class Config:
        from_attributes = True


class DirectoryEntry(BaseModel):
    member: MemberResponse
    is_recent: bool = False


class DirectoryGroup(BaseModel):
    group: SmallGroupResponse
    members: List[DirectoryEntry]


class DirectoryResponse(BaseModel):
    generated_at: datetime
    recent: List[MemberResponse]
    groups: List[DirectoryGroup]
