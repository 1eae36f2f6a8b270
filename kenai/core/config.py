"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Kenai Recorder settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        llm_provider: Which LLM backend to use ("claude" or "ollama").
        supabase_url: Project URL of the Supabase instance (no trailing slash needed).
        recorder_max_duration_ms: Auto-stop threshold for a single recording.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- LLM Provider ---
    llm_provider: str = "ollama"

    claude_api_key: str = ""  # Required when llm_provider="claude"
    claude_model: str = "claude-sonnet-4-20250514"

    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    # Language the summaries and trend ideas are written in
    summary_language: str = "Swedish"

    # --- Whisper STT ---
    whisper_provider: str = "local"
    whisper_model: str = "base"  # tiny, base, small, medium, large-v3
    whisper_default_language: str = ""  # Empty = auto-detect; ISO 639-1 code e.g. "sv"

    # --- Supabase Storage ---
    supabase_url: str = ""
    supabase_anon_key: str = ""  # publishable key, sent as Bearer token
    supabase_bucket: str = "audio"
    supabase_path: str = "reviews"  # logical folder inside the bucket
    upload_timeout: float = 60.0

    # --- Recorder ---
    recorder_max_duration_ms: int = 60_000
    recorder_tick_ms: int = 250
    recorder_deadline_grace_ms: int = 600  # hard-deadline fires at max + grace
    recorder_channels: int = 1
    recorder_blocksize: int = 4096  # samples per capture callback
    recorder_device: str | None = None  # None = system default input

    # --- Application ---
    app_host: str = "0.0.0.0"
    app_port: int = 10000
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    public_dir: str = "public"  # static files served at "/"

    # --- Storage ---
    recordings_dir: str = "data/recordings"  # local WAV copies for playback/download

    # --- Media ---
    ffmpeg_path: str = "ffmpeg"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
