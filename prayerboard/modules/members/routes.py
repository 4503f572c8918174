from fastapi import APIRouter, Depends, HTTPException
from prayerboard.config import settings
from prayerboard.database.supabase_client import get_supabase
from prayerboard.modules.members.directory import build_directory
from prayerboard.modules.members.schemas import MemberCreate, MemberUpdate, MemberResponse, DirectoryResponse
from prayerboard.modules.members.service import MemberService
from prayerboard.modules.photos.storage import PhotoStorage
from prayerboard.modules.small_groups.service import SmallGroupService
from prayerboard.core.dependencies import get_current_session, require_admin
from prayerboard.core.session import SessionState
from supabase import Client
from datetime import timedelta
from typing import List

router = APIRouter(prefix="/members", tags=["members"])
directory_router = APIRouter(prefix="/directory", tags=["directory"])


def get_member_service(supabase: Client = Depends(get_supabase)) -> MemberService:
    return MemberService(supabase)


def get_small_group_service(supabase: Client = Depends(get_supabase)) -> SmallGroupService:
    return SmallGroupService(supabase)


@directory_router.get("", response_model=DirectoryResponse)
async def get_directory(
    session: SessionState = Depends(get_current_session),
    members: MemberService = Depends(get_member_service),
    groups: SmallGroupService = Depends(get_small_group_service)
):
    """Recently updated members plus every small group with its sorted members"""
    return build_directory(
        members.list_members(),
        groups.list_groups(),
        window=timedelta(days=settings.recent_window_days)
    )


@router.get("", response_model=List[MemberResponse])
async def list_members(
    session: SessionState = Depends(get_current_session),
    service: MemberService = Depends(get_member_service)
):
    """List all members, most recently updated first"""
    return service.list_members()


@router.get("/recent", response_model=List[MemberResponse])
async def list_recent_members(
    session: SessionState = Depends(get_current_session),
    service: MemberService = Depends(get_member_service)
):
    """Members updated in the recent window"""
    return service.list_recent_members()


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: str,
    session: SessionState = Depends(get_current_session),
    service: MemberService = Depends(get_member_service)
):
    """Get member with small group and prayer requests"""
    return service.require_member(member_id)


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    member_data: MemberCreate,
    session: SessionState = Depends(require_admin),
    service: MemberService = Depends(get_member_service),
    groups: SmallGroupService = Depends(get_small_group_service)
):
    """Create a member in an existing small group (admin)"""
    groups.get_group(member_data.small_group_id)
    return service.create_member(member_data)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: str,
    member_data: MemberUpdate,
    session: SessionState = Depends(require_admin),
    service: MemberService = Depends(get_member_service),
    groups: SmallGroupService = Depends(get_small_group_service)
):
    """Update name, role, small group or photo position (admin)"""
    if member_data.small_group_id is not None:
        groups.get_group(member_data.small_group_id)
    return service.update_member(member_id, member_data)


@router.delete("/{member_id}", status_code=204)
async def delete_member(
    member_id: str,
    session: SessionState = Depends(require_admin),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete a member, their prayer requests and stored photo (admin)"""
    member = service.require_member(member_id)
    if not service.delete_member(member_id):
        raise HTTPException(status_code=404, detail="Member not found")
    if member.photo_url:
        PhotoStorage(supabase).delete(member.photo_url)
    return None
