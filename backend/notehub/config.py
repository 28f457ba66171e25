"""
Application configuration using Pydantic Settings.
All config is loaded from environment variables / .env file.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "notehub"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: str = "*"  # comma-separated

    # ── Supabase (note metadata store) ───────────────────
    SUPABASE_URL: str = "http://127.0.0.1:54321"  # `supabase start` default
    SUPABASE_KEY: str = ""  # anon/public key
    NOTES_TABLE: str = "notes"
    SEARCH_RPC: str = "search_notes"

    # ── Blob storage ─────────────────────────────────────
    BLOB_BACKEND: str = "local"  # local | supabase
    STORAGE_BUCKET: str = "notes"  # Supabase Storage bucket when BLOB_BACKEND=supabase
    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_BYTES: int = 25 * 1024 * 1024  # 25MB

    # ── Moderation ───────────────────────────────────────
    BANNED_KEYWORDS: str = "gore,violence,nude,nsfw,xxx,kill,blood"  # comma-separated

    # ── Search / listing ─────────────────────────────────
    SEARCH_RESULT_LIMIT: int = 10
    SEARCH_FALLBACK_THRESHOLD: int = 3  # fewer internal hits than this -> summary card
    RECENT_NOTES_LIMIT: int = 20

    # ── Orphan blob sweep ────────────────────────────────
    ORPHAN_SWEEP_ENABLED: bool = False
    ORPHAN_SWEEP_INTERVAL_HOURS: int = 6
    ORPHAN_MAX_AGE_HOURS: int = 24

    # ── API client (presentation layer) ──────────────────
    API_BASE_URL: str = "http://127.0.0.1:5000/api"
    API_TIMEOUT: int = 10  # seconds

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def banned_keywords(self) -> list[str]:
        return [w.strip() for w in self.BANNED_KEYWORDS.split(",") if w.strip()]

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (singleton)."""
    return Settings()
