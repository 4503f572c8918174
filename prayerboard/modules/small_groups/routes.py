from fastapi import APIRouter, Depends, HTTPException
from prayerboard.database.supabase_client import get_supabase
from prayerboard.modules.small_groups.schemas import SmallGroupCreate, SmallGroupUpdate, SmallGroupResponse
from prayerboard.modules.small_groups.service import SmallGroupService
from prayerboard.core.dependencies import get_current_session, require_admin
from prayerboard.core.session import SessionState
from supabase import Client
from typing import List

router = APIRouter(prefix="/small-groups", tags=["small-groups"])


def get_small_group_service(supabase: Client = Depends(get_supabase)) -> SmallGroupService:
    return SmallGroupService(supabase)


@router.get("", response_model=List[SmallGroupResponse])
async def list_groups(
    session: SessionState = Depends(get_current_session),
    service: SmallGroupService = Depends(get_small_group_service)
):
    """List all small groups"""
    return service.list_groups()


@router.get("/{group_id}", response_model=SmallGroupResponse)
async def get_group(
    group_id: str,
    session: SessionState = Depends(get_current_session),
    service: SmallGroupService = Depends(get_small_group_service)
):
    """Get small group by ID"""
    return service.get_group(group_id)


@router.post("", response_model=SmallGroupResponse, status_code=201)
async def create_group(
    group_data: SmallGroupCreate,
    session: SessionState = Depends(require_admin),
    service: SmallGroupService = Depends(get_small_group_service)
):
    """Create a new small group (admin)"""
    return service.create_group(group_data)


@router.put("/{group_id}", response_model=SmallGroupResponse)
async def rename_group(
    group_id: str,
    group_data: SmallGroupUpdate,
    session: SessionState = Depends(require_admin),
    service: SmallGroupService = Depends(get_small_group_service)
):
    """Rename a small group (admin)"""
    return service.rename_group(group_id, group_data)


@router.delete("/{group_id}", status_code=204)
async def delete_group(
    group_id: str,
    session: SessionState = Depends(require_admin),
    service: SmallGroupService = Depends(get_small_group_service)
):
    """Delete a small group and, through the database cascade, its members (admin)"""
    if not service.delete_group(group_id):
        raise HTTPException(status_code=404, detail="Small group not found")
    return None
