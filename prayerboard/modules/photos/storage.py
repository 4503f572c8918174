from supabase import Client
from prayerboard.config import settings
from prayerboard.modules.photos.url_cache import SignedUrlCache, url_cache
from typing import Callable, Optional
import logging
import time

logger = logging.getLogger(__name__)

MEMBER_PHOTO_DIR = "members"


def is_external_url(path: Optional[str]) -> bool:
    return bool(path) and path.startswith("http")


class PhotoStorage:
    def __init__(
        self,
        supabase: Client,
        bucket: Optional[str] = None,
        cache: Optional[SignedUrlCache] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.supabase = supabase
        self.bucket = bucket or settings.photos_bucket
        self.cache = cache if cache is not None else url_cache
        self._clock = clock

    def _bucket(self):
        return self.supabase.storage.from_(self.bucket)

    def build_path(self, member_id: str) -> str:
        return f"{MEMBER_PHOTO_DIR}/{member_id}-{int(self._clock() * 1000)}.jpg"

    def upload(self, member_id: str, image_bytes: bytes) -> Optional[str]:
        """Store an already resized JPEG and return its bucket path, or None on failure"""
        path = self.build_path(member_id)
        try:
            self._bucket().upload(
                path,
                image_bytes,
                file_options={"content-type": "image/jpeg", "upsert": "true"}
            )
            logger.info(f"Uploaded photo for member {member_id}: {path}")
            return path
        except Exception as e:
            logger.error(f"Photo upload failed for member {member_id}: {str(e)}")
            return None

    def delete(self, path: Optional[str]) -> bool:
        """Delete a stored photo. External URLs are left alone."""
        if not path or is_external_url(path):
            return False
        try:
            self._bucket().remove([path])
            self.cache.invalidate(path)
            logger.info(f"Deleted photo: {path}")
            return True
        except Exception as e:
            logger.error(f"Photo delete failed for {path}: {str(e)}")
            return False

    def download(self, path: str) -> Optional[bytes]:
        if not path or is_external_url(path):
            return None
        try:
            return self._bucket().download(path)
        except Exception as e:
            logger.error(f"Photo download failed for {path}: {str(e)}")
            return None

    def signed_url(self, path: Optional[str]) -> Optional[str]:
        """Time-limited display URL for a stored path (cached)."""
        if not path:
            return None
        if is_external_url(path):
            return path
        cached = self.cache.get(path)
        if cached:
            return cached
        try:
            result = self._bucket().create_signed_url(path, settings.signed_url_ttl_sec)
        except Exception as e:
            logger.error(f"Signed URL error for {path}: {str(e)}")
            return None
        url = (result or {}).get("signedURL") or (result or {}).get("signedUrl")
        if url:
            self.cache.put(path, url)
        return url
