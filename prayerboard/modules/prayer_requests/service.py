from supabase import Client
from prayerboard.modules.prayer_requests.schemas import (
    PrayerRequestCreate, PrayerRequestUpdate, PrayerRequestResponse
)
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class PrayerRequestService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_requests(self, member_id: Optional[str] = None) -> List[PrayerRequestResponse]:
        """List prayer requests, newest first, optionally for one member"""
        try:
            query = self.supabase.table("prayer_requests")\
                .select("*")\
                .order("created_at", desc=True)
            if member_id:
                query = query.eq("member_id", member_id)
            result = query.execute()
            return [PrayerRequestResponse(**row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_request(self, member_id: str, request_data: PrayerRequestCreate) -> PrayerRequestResponse:
        """Add a prayer request to a member"""
        try:
            result = self.supabase.table("prayer_requests").insert({
                "member_id": member_id,
                "content": request_data.content
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create prayer request")

            return PrayerRequestResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_request(self, request_id: str, request_data: PrayerRequestUpdate) -> PrayerRequestResponse:
        """Replace the text of a prayer request"""
        try:
            result = self.supabase.table("prayer_requests")\
                .update({"content": request_data.content})\
                .eq("id", request_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Prayer request not found")

            return PrayerRequestResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_request(self, request_id: str) -> bool:
        """Delete a prayer request"""
        try:
            result = self.supabase.table("prayer_requests")\
                .delete()\
                .eq("id", request_id)\
                .execute()
            return len(result.data or []) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
