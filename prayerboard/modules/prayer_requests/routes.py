from fastapi import APIRouter, Depends, HTTPException
from prayerboard.database.supabase_client import get_supabase
from prayerboard.modules.prayer_requests.schemas import (
    PrayerRequestCreate, PrayerRequestUpdate, PrayerRequestResponse
)
from prayerboard.modules.prayer_requests.service import PrayerRequestService
from prayerboard.modules.members.service import MemberService
from prayerboard.core.dependencies import get_current_session, require_admin
from prayerboard.core.session import SessionState
from supabase import Client
from typing import List

router = APIRouter(tags=["prayer-requests"])


def get_prayer_request_service(supabase: Client = Depends(get_supabase)) -> PrayerRequestService:
    return PrayerRequestService(supabase)


def get_member_service(supabase: Client = Depends(get_supabase)) -> MemberService:
    return MemberService(supabase)


@router.get("/members/{member_id}/prayer-requests", response_model=List[PrayerRequestResponse])
async def list_member_requests(
    member_id: str,
    session: SessionState = Depends(get_current_session),
    members: MemberService = Depends(get_member_service)
):
    """Prayer requests of a member in display order (oldest first)"""
    return members.require_member(member_id).prayer_requests


@router.get("/prayer-requests", response_model=List[PrayerRequestResponse])
async def list_requests(
    session: SessionState = Depends(require_admin),
    service: PrayerRequestService = Depends(get_prayer_request_service)
):
    """All prayer requests, newest first (admin)"""
    return service.list_requests()


@router.post("/members/{member_id}/prayer-requests", response_model=PrayerRequestResponse, status_code=201)
async def create_request(
    member_id: str,
    request_data: PrayerRequestCreate,
    session: SessionState = Depends(require_admin),
    service: PrayerRequestService = Depends(get_prayer_request_service),
    members: MemberService = Depends(get_member_service)
):
    """Add a prayer request to a member (admin)"""
    members.require_member(member_id)
    return service.create_request(member_id, request_data)


@router.put("/prayer-requests/{request_id}", response_model=PrayerRequestResponse)
async def update_request(
    request_id: str,
    request_data: PrayerRequestUpdate,
    session: SessionState = Depends(require_admin),
    service: PrayerRequestService = Depends(get_prayer_request_service)
):
    """Edit a prayer request (admin)"""
    return service.update_request(request_id, request_data)


@router.delete("/prayer-requests/{request_id}", status_code=204)
async def delete_request(
    request_id: str,
    session: SessionState = Depends(require_admin),
    service: PrayerRequestService = Depends(get_prayer_request_service)
):
    """Delete a prayer request (admin)"""
    if not service.delete_request(request_id):
        raise HTTPException(status_code=404, detail="Prayer request not found")
    return None
