"""
DetectionConfig: the explicit configuration handed to the upload gate.

Adapters receive everything they need from this object at construction time
and never read the environment, so fail-open / fail-closed behaviour can be
exercised in tests by building a config instead of mutating os.environ.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class DetectionMode(str, Enum):
    STRICT = "strict"          # missing credentials reject the upload
    PERMISSIVE = "permissive"  # missing credentials skip detection with a warning


class Credentials(BaseModel):
    """
    One provider's credentials.

    Sightengine uses `api_key` as its api_user and needs `api_secret` too;
    the LLM judge only needs `api_key`.
    """
    model_config = ConfigDict(frozen=True)

    api_key: str
    api_secret: Optional[str] = None

    def __repr__(self) -> str:
        return "Credentials(api_key='***')"

    __str__ = __repr__

    @property
    def has_secret(self) -> bool:
        return bool(self.api_secret)


def _credentials(api_key: Optional[str], api_secret: Optional[str] = None,
                 secret_required: bool = False) -> Optional[Credentials]:
    api_key = (api_key or "").strip()
    api_secret = (api_secret or "").strip() or None
    if not api_key:
        return None
    if secret_required and not api_secret:
        return None
    return Credentials(api_key=api_key, api_secret=api_secret)


class DetectionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Fail-closed unless someone explicitly opts into permissive behaviour
    mode: DetectionMode = DetectionMode.STRICT
    image_credentials: Optional[Credentials] = None
    text_credentials: Optional[Credentials] = None
    text_provider: Literal["dedalus", "gemini"] = "dedalus"
    # None lets the selected provider fall back to its own default model
    text_model: Optional[str] = None
    text_temperature: float = 0.1

    @field_validator("mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def is_permissive(self) -> bool:
        return self.mode == DetectionMode.PERMISSIVE

    @classmethod
    def from_settings(cls, settings) -> "DetectionConfig":
        """Build a config from the process-wide Settings instance."""
        provider = settings.text_detector_provider.strip().lower()
        if provider == "gemini":
            text_credentials = _credentials(settings.gemini_api_key)
            text_model = settings.gemini_text_model
        else:
            text_credentials = _credentials(settings.dedalus_api_key)
            text_model = settings.dedalus_model

        return cls(
            mode=settings.resolved_detection_mode,
            image_credentials=_credentials(
                settings.sightengine_api_user,
                settings.sightengine_api_secret,
                secret_required=True,
            ),
            text_credentials=text_credentials,
            text_provider=provider,
            text_model=text_model,
            text_temperature=settings.text_detection_temperature,
        )
