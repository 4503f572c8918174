from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Preferred over supabase_key when set (bypasses RLS)

    # Shared passwords (site entry / admin mode)
    site_password: str = ""
    admin_password: str = ""
    session_ttl_hours: int = 12

    # Photos (Supabase Storage)
    photos_bucket: str = "photos"
    signed_url_ttl_sec: int = 3600
    signed_url_cache_sec: int = 3000  # cached for 50 minutes, real expiry is 60
    signed_url_min_remaining_sec: int = 600
    photo_max_side: int = 800
    photo_jpeg_quality: int = 85
    thumbnail_size: int = 256

    # Directory
    recent_window_days: int = 14

    # App
    app_name: str = "prayerboard"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    rate_limit_enabled: bool = True
    login_rate_limit: str = "10/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
