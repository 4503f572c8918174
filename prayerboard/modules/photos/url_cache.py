import threading
import time
from typing import Callable, Dict, Optional, Tuple

from prayerboard.config import settings


class SignedUrlCache:
    """In-memory path -> signed URL map with expiry.

    Entries live for `lifetime_sec` and are only served while more than
    `min_remaining_sec` of that lifetime is left.
    """

    def __init__(
        self,
        lifetime_sec: Optional[int] = None,
        min_remaining_sec: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.lifetime_sec = settings.signed_url_cache_sec if lifetime_sec is None else lifetime_sec
        self.min_remaining_sec = (
            settings.signed_url_min_remaining_sec if min_remaining_sec is None else min_remaining_sec
        )
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(path)
            if entry is None:
                return None
            url, expiry = entry
            if expiry > self._clock() + self.min_remaining_sec:
                return url
            del self._entries[path]
            return None

    def put(self, path: str, url: str) -> None:
        with self._lock:
            self._entries[path] = (url, self._clock() + self.lifetime_sec)

    def invalidate(self, path: str) -> None:
        with self._lock:
            self._entries.pop(path, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


url_cache = SignedUrlCache()
