from supabase import Client
from prayerboard.modules.members.schemas import MemberResponse
from prayerboard.modules.members.service import MemberService
from prayerboard.modules.photos.imaging import render_thumbnail, resize_for_upload
from prayerboard.modules.photos.schemas import PhotoPosition, PhotoUrlResponse
from prayerboard.modules.photos.storage import PhotoStorage
from typing import Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class PhotoService:
    def __init__(self, supabase: Client, storage: Optional[PhotoStorage] = None):
        self.members = MemberService(supabase)
        self.storage = storage or PhotoStorage(supabase)

    def upload_photo(self, member_id: str, image_bytes: bytes) -> MemberResponse:
        """Resize, store and attach a new photo; the crop resets to centered"""
        member = self.members.require_member(member_id)
        try:
            resized = resize_for_upload(image_bytes)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        path = self.storage.upload(member_id, resized)
        if not path:
            raise HTTPException(status_code=500, detail="Failed to upload photo")

        try:
            updated = self.members.set_photo(member_id, path, PhotoPosition())
        except Exception:
            logger.error(f"Saving photo for member {member_id} failed, removing {path}")
            self.storage.delete(path)
            raise
        if member.photo_url and member.photo_url != path:
            self.storage.delete(member.photo_url)
        return updated

    def remove_photo(self, member_id: str) -> MemberResponse:
        """Detach the member's photo and delete it from storage"""
        member = self.members.require_member(member_id)
        updated = self.members.set_photo(member_id, None)
        if member.photo_url:
            self.storage.delete(member.photo_url)
        return updated

    def update_position(self, member_id: str, position: PhotoPosition) -> MemberResponse:
        return self.members.set_photo_position(member_id, position)

    def photo_url(self, member_id: str) -> PhotoUrlResponse:
        member = self.members.require_member(member_id)
        return PhotoUrlResponse(member_id=member_id, url=self.storage.signed_url(member.photo_url))

    def thumbnail(self, member_id: str, size: Optional[int] = None) -> bytes:
        """JPEG of the member's photo cropped the way it is displayed"""
        member = self.members.require_member(member_id)
        if not member.photo_url:
            raise HTTPException(status_code=404, detail="Member has no photo")
        image_bytes = self.storage.download(member.photo_url)
        if not image_bytes:
            raise HTTPException(status_code=404, detail="Photo not available")
        try:
            return render_thumbnail(image_bytes, member.photo_position, size)
        except ValueError as e:
            logger.error(f"Cannot render thumbnail for member {member_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
