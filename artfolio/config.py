"""
Central application configuration.

Every tunable value lives here as a typed, documented field.
Any field can be overridden at runtime via an environment variable of the
same name (case-insensitive), e.g.:

    ENVIRONMENT=development uvicorn artfolio.main:app   # skip detection locally
    export DETECTION_MODE=strict                         # force fail-closed

A `.env` file at the project root is loaded automatically.

Detection thresholds are deliberately NOT settings; they live in
artfolio/detection/policy.py.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,   # SIGHTENGINE_API_USER == sightengine_api_user
        extra="ignore",         # silently drop unknown env vars
    )

    # ------------------------------------------------------------------ #
    # Runtime environment                                                 #
    # ------------------------------------------------------------------ #
    environment: str = Field(
        "production", description="'development' enables the permissive detection mode by default"
    )
    detection_mode: Optional[str] = Field(
        None, description="'strict' or 'permissive'; derived from `environment` when unset"
    )
    log_level: str = Field(
        "INFO", description="Root logging level"
    )
    cors_allow_origins: list[str] = Field(
        ["*"], description="Origins allowed to call the gate from a browser"
    )

    # ------------------------------------------------------------------ #
    # Sightengine (image modality)                                        #
    # ------------------------------------------------------------------ #
    sightengine_api_user: Optional[str] = Field(
        None, description="Sightengine API user id"
    )
    sightengine_api_secret: Optional[str] = Field(
        None, description="Sightengine API secret"
    )
    sightengine_api_url: str = Field(
        "https://api.sightengine.com/1.0/check.json", description="Scoring endpoint"
    )
    sightengine_models: str = Field(
        "genai", description="Model selector sent with every image"
    )

    # ------------------------------------------------------------------ #
    # LLM judge (text modality)                                           #
    # ------------------------------------------------------------------ #
    text_detector_provider: str = Field(
        "dedalus", description="'dedalus' (chat completions) or 'gemini'"
    )
    dedalus_api_key: Optional[str] = Field(
        None, description="Dedalus Labs API key"
    )
    dedalus_api_url: str = Field(
        "https://api.dedaluslabs.ai", description="Dedalus API base URL"
    )
    dedalus_model: str = Field(
        "anthropic/claude-opus-4-5", description="Judge model routed through Dedalus"
    )
    gemini_api_key: Optional[str] = Field(
        None, description="Google Gemini API key"
    )
    gemini_text_model: str = Field(
        "gemini-2.5-flash", description="Judge model when the Gemini provider is selected"
    )
    text_detection_temperature: float = Field(
        0.1, description="Judge sampling temperature; kept low for reproducible scores"
    )

    # ------------------------------------------------------------------ #
    # Outbound HTTP                                                       #
    # ------------------------------------------------------------------ #
    http_timeout_sec: int = Field(
        30, description="Total timeout for the shared aiohttp session (seconds)"
    )
    gemini_http_timeout_ms: int = Field(
        15_000, description="Gemini client total timeout (ms)"
    )

    # ------------------------------------------------------------------ #
    # Upload limits                                                       #
    # ------------------------------------------------------------------ #
    max_image_upload_mb: int = Field(
        20, description="Max MB for multipart image uploads"
    )
    pil_max_image_pixels: int = Field(
        20_000_000, description="PIL decompression-bomb guard (pixels)"
    )

    @property
    def max_image_upload_bytes(self) -> int:
        return self.max_image_upload_mb * 1024 * 1024

    @property
    def resolved_detection_mode(self) -> str:
        if self.detection_mode:
            return self.detection_mode.strip().lower()
        return "permissive" if self.environment.strip().lower() == "development" else "strict"


# Single shared instance; import this everywhere.
settings = Settings()
