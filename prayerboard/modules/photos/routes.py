from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Query
from fastapi.responses import Response
from prayerboard.database.supabase_client import get_supabase
from prayerboard.modules.members.schemas import MemberResponse
from prayerboard.modules.photos.schemas import PhotoPosition, PhotoUrlResponse
from prayerboard.modules.photos.service import PhotoService
from prayerboard.core.dependencies import get_current_session, require_admin
from prayerboard.core.session import SessionState
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/members", tags=["photos"])

MAX_UPLOAD_BYTES = 15 * 1024 * 1024


def get_photo_service(supabase: Client = Depends(get_supabase)) -> PhotoService:
    return PhotoService(supabase)


@router.post("/{member_id}/photo", response_model=MemberResponse)
async def upload_photo(
    member_id: str,
    file: UploadFile = File(...),
    session: SessionState = Depends(require_admin),
    service: PhotoService = Depends(get_photo_service)
):
    """
    Upload a member photo. The image is resized to at most 800px on the
    longest side, stored as JPEG, and the crop position resets to centered.
    """
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are accepted")
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Image too large")
    return service.upload_photo(member_id, content)


@router.delete("/{member_id}/photo", response_model=MemberResponse)
async def remove_photo(
    member_id: str,
    session: SessionState = Depends(require_admin),
    service: PhotoService = Depends(get_photo_service)
):
    """Remove the member's photo (admin)"""
    return service.remove_photo(member_id)


@router.put("/{member_id}/photo-position", response_model=MemberResponse)
async def update_photo_position(
    member_id: str,
    position: PhotoPosition,
    session: SessionState = Depends(require_admin),
    service: PhotoService = Depends(get_photo_service)
):
    """Save a confirmed crop position and zoom (admin)"""
    return service.update_position(member_id, position)


@router.get("/{member_id}/photo-url", response_model=PhotoUrlResponse)
async def get_photo_url(
    member_id: str,
    session: SessionState = Depends(get_current_session),
    service: PhotoService = Depends(get_photo_service)
):
    """Time-limited display URL for the member's photo"""
    return service.photo_url(member_id)


@router.get("/{member_id}/thumbnail")
async def get_thumbnail(
    member_id: str,
    size: Optional[int] = Query(None, ge=32, le=1024),
    session: SessionState = Depends(get_current_session),
    service: PhotoService = Depends(get_photo_service)
):
    """Square JPEG cropped with the stored position and zoom"""
    return Response(content=service.thumbnail(member_id, size), media_type="image/jpeg")
