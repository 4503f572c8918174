from supabase import Client
from prayerboard.config import settings
from prayerboard.modules.members.schemas import MemberCreate, MemberUpdate, MemberResponse
from prayerboard.modules.photos.position import normalize_position
from prayerboard.modules.photos.schemas import PhotoPosition
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

MEMBER_SELECT = "*, small_group:small_groups(*), prayer_requests(*)"


def _to_member(row: Dict[str, Any]) -> MemberResponse:
    member = MemberResponse(**row)
    # Oldest prayer request is entry #1
    member.prayer_requests = sorted(member.prayer_requests, key=lambda r: r.created_at)
    return member


class MemberService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_members(self) -> List[MemberResponse]:
        """List all members with their small group and prayer requests, most recently updated first"""
        try:
            result = self.supabase.table("members")\
                .select(MEMBER_SELECT)\
                .order("updated_at", desc=True)\
                .execute()
            return [_to_member(row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_recent_members(
        self,
        now: Optional[datetime] = None,
        window_days: Optional[int] = None
    ) -> List[MemberResponse]:
        """Members updated within the recent window, filtered by the database"""
        now = now or datetime.now(timezone.utc)
        days = settings.recent_window_days if window_days is None else window_days
        cutoff = now - timedelta(days=days)
        try:
            result = self.supabase.table("members")\
                .select(MEMBER_SELECT)\
                .gte("updated_at", cutoff.isoformat())\
                .order("updated_at", desc=True)\
                .execute()
            return [_to_member(row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_member(self, member_id: str) -> Optional[MemberResponse]:
        """Get member by ID, None when it does not exist"""
        try:
            result = self.supabase.table("members")\
                .select(MEMBER_SELECT)\
                .eq("id", member_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                return None
            return _to_member(result.data)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def require_member(self, member_id: str) -> MemberResponse:
        member = self.get_member(member_id)
        if member is None:
            raise HTTPException(status_code=404, detail="Member not found")
        return member

    def create_member(self, member_data: MemberCreate) -> MemberResponse:
        """Create a new member in a small group"""
        try:
            result = self.supabase.table("members").insert({
                "small_group_id": member_data.small_group_id,
                "name": member_data.name,
                "role": member_data.role.value,
                "photo_url": member_data.photo_url,
                "photo_position": normalize_position(member_data.photo_position).model_dump()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create member")

            logger.info(f"Created member {result.data[0]['id']} in group {member_data.small_group_id}")
            return _to_member(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_member(self, member_id: str, member_data: MemberUpdate) -> MemberResponse:
        """Update member fields that were provided"""
        update_data: Dict[str, Any] = {}
        if member_data.small_group_id is not None:
            update_data["small_group_id"] = member_data.small_group_id
        if member_data.name is not None:
            update_data["name"] = member_data.name
        if member_data.role is not None:
            update_data["role"] = member_data.role.value
        if member_data.photo_position is not None:
            update_data["photo_position"] = normalize_position(member_data.photo_position).model_dump()
        if not update_data:
            return self.require_member(member_id)
        return self._update(member_id, update_data)

    def set_photo_position(self, member_id: str, position: PhotoPosition) -> MemberResponse:
        """Persist a confirmed crop position"""
        return self._update(member_id, {"photo_position": normalize_position(position).model_dump()})

    def set_photo(self, member_id: str, photo_url: Optional[str], position: Optional[PhotoPosition] = None) -> MemberResponse:
        update_data: Dict[str, Any] = {"photo_url": photo_url}
        if position is not None:
            update_data["photo_position"] = normalize_position(position).model_dump()
        return self._update(member_id, update_data)

    def _update(self, member_id: str, update_data: Dict[str, Any]) -> MemberResponse:
        try:
            result = self.supabase.table("members")\
                .update(update_data)\
                .eq("id", member_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Member not found")

            return _to_member(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_member(self, member_id: str) -> bool:
        """Delete a member; prayer requests cascade in the database"""
        try:
            result = self.supabase.table("members")\
                .delete()\
                .eq("id", member_id)\
                .execute()
            deleted = len(result.data or []) > 0
            if deleted:
                logger.info(f"Deleted member {member_id}")
            return deleted
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
