from supabase import Client
from prayerboard.modules.small_groups.schemas import SmallGroupCreate, SmallGroupUpdate, SmallGroupResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class SmallGroupService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_groups(self) -> List[SmallGroupResponse]:
        """List all small groups ordered by name"""
        try:
            result = self.supabase.table("small_groups")\
                .select("*")\
                .order("name")\
                .execute()
            return [SmallGroupResponse(**group) for group in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_group(self, group_id: str) -> SmallGroupResponse:
        """Get small group by ID"""
        try:
            result = self.supabase.table("small_groups")\
                .select("*")\
                .eq("id", group_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Small group not found")
            return SmallGroupResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_group(self, group_data: SmallGroupCreate) -> SmallGroupResponse:
        """Create a new small group"""
        try:
            result = self.supabase.table("small_groups").insert({
                "name": group_data.name
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create small group")

            logger.info(f"Created small group {result.data[0]['id']} ({group_data.name})")
            return SmallGroupResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def rename_group(self, group_id: str, group_data: SmallGroupUpdate) -> SmallGroupResponse:
        """Rename a small group"""
        try:
            result = self.supabase.table("small_groups")\
                .update({"name": group_data.name})\
                .eq("id", group_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Small group not found")

            return SmallGroupResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_group(self, group_id: str) -> bool:
        """Delete a small group; its members and their prayer requests cascade in the database"""
        try:
            result = self.supabase.table("small_groups")\
                .delete()\
                .eq("id", group_id)\
                .execute()

            deleted = len(result.data or []) > 0
            if deleted:
                logger.info(f"Deleted small group {group_id}")
            return deleted
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
