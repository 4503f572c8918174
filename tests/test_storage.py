from prayerboard.modules.photos.storage import PhotoStorage, is_external_url
from prayerboard.modules.photos.url_cache import SignedUrlCache

from tests.fake_supabase import FakeSupabase


class Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestSignedUrlCache:
    def test_serves_until_ten_minutes_before_expiry(self):
        clock = Clock()
        cache = SignedUrlCache(lifetime_sec=3000, min_remaining_sec=600, clock=clock)
        cache.put("members/a.jpg", "https://signed/a")
        clock.now += 2399
        assert cache.get("members/a.jpg") == "https://signed/a"
        clock.now += 1
        assert cache.get("members/a.jpg") is None
        assert len(cache) == 0

    def test_invalidate(self):
        cache = SignedUrlCache(lifetime_sec=3000, min_remaining_sec=600, clock=Clock())
        cache.put("p", "u")
        cache.invalidate("p")
        assert cache.get("p") is None


class TestPhotoStorage:
    def make_storage(self, db=None):
        db = db or FakeSupabase()
        cache = SignedUrlCache(lifetime_sec=3000, min_remaining_sec=600, clock=Clock())
        return db, PhotoStorage(db, bucket="photos", cache=cache, clock=lambda: 1700000000.123)

    def test_upload_path(self):
        db, storage = self.make_storage()
        path = storage.upload("m1", b"jpeg")
        assert path == "members/m1-1700000000123.jpg"
        assert db.files[path] == b"jpeg"

    def test_upload_failure_returns_none(self):
        db, storage = self.make_storage()
        db.storage_fail = True
        assert storage.upload("m1", b"jpeg") is None

    def test_signed_url_is_cached(self):
        db, storage = self.make_storage()
        first = storage.signed_url("members/m1.jpg")
        second = storage.signed_url("members/m1.jpg")
        assert first == second
        assert db.signed_requests == ["members/m1.jpg"]

    def test_external_urls_pass_through(self):
        db, storage = self.make_storage()
        url = "https://example.com/photo.jpg"
        assert is_external_url(url)
        assert storage.signed_url(url) == url
        assert storage.delete(url) is False
        assert db.signed_requests == []

    def test_missing_path(self):
        _, storage = self.make_storage()
        assert storage.signed_url(None) is None
        assert storage.download("") is None

    def test_delete_drops_cached_url(self):
        db, storage = self.make_storage()
        db.files["members/m1.jpg"] = b"x"
        storage.signed_url("members/m1.jpg")
        assert storage.delete("members/m1.jpg") is True
        assert "members/m1.jpg" not in db.files
        assert storage.cache.get("members/m1.jpg") is None
