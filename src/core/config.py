"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pronunciation Coach settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        stt_provider: Recognizer backend ("google" or "whisper").
        recognition_language_code: BCP-47 language sent with every request.
        max_upload_bytes: Largest accepted audio upload; bigger bodies get 413.
        status_clear_seconds: How long a client status message stays visible.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Speech recognition ---
    # Selects the recognizer: "google" for Cloud Speech-to-Text, "whisper" for local
    stt_provider: str = "google"

    # Google Cloud Speech-to-Text settings
    google_credentials_path: str = ""  # Empty = GOOGLE_APPLICATION_CREDENTIALS / ADC
    recognition_encoding: str = "WEBM_OPUS"
    recognition_sample_rate_hertz: int = 48000  # Browser MediaRecorder default
    recognition_language_code: str = "en-US"
    recognition_model: str = "default"
    stt_timeout_seconds: float | None = None  # None = wait for the recognizer

    # faster-whisper settings (stt_provider="whisper")
    whisper_model: str = "base"  # Model size: tiny, base, small, medium, large-v3
    whisper_device: str = "cpu"
    whisper_compute_type: str = "int8"

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 3000
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:8501",  # Streamlit
            "http://localhost:3000",  # Static client
        ]
    )
    static_dir: str = "public"  # Browser client served at "/"
    max_upload_bytes: int = 10 * 1024 * 1024

    # --- Client ---
    api_base_url: str = "http://localhost:3000"
    status_clear_seconds: float = 3.0


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
