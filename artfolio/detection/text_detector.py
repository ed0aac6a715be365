"""
Text adapters: ask an LLM judge how likely an essay is to be AI-written.

`TextDetector` owns the shared flow (credentials, length, parsing, policy);
subclasses only implement `_complete`, the single provider round-trip.
"""

import logging
from typing import Optional

from artfolio.detection import policy
from artfolio.detection.config import Credentials, DetectionConfig, DetectionMode
from artfolio.detection.errors import DetectionConfigError, InputInvalidError
from artfolio.detection.json_extract import extract_verdict
from artfolio.detection.prompts import TEXT_DETECTION_PROMPT, build_user_message
from artfolio.integrations import dedalus
from artfolio.integrations.gemini import client as gemini_client
from artfolio.schemas.detection import DetectionResult, Modality

logger = logging.getLogger(__name__)


class TextDetector:
    modality = Modality.TEXT
    provider_name = "judge"
    default_model = None

    def __init__(
        self,
        credentials: Optional[Credentials],
        mode: DetectionMode = DetectionMode.STRICT,
        model: str = None,
        temperature: float = 0.1,
    ):
        self.credentials = credentials
        self.mode = DetectionMode(mode)
        self.model = model or self.default_model
        self.temperature = temperature

    @property
    def provider(self) -> str:
        return f"{self.provider_name}:{self.model}"

    @property
    def is_configured(self) -> bool:
        return self.credentials is not None

    async def _complete(self, system_prompt: str, user_message: str) -> str:
        raise NotImplementedError

    async def check_text(self, text: str) -> DetectionResult:
        if not self.is_configured:
            if self.mode == DetectionMode.PERMISSIVE:
                logger.warning(f"[JUDGE] {self.provider_name} key not configured; skipping text detection")
                return policy.skipped_result(self.modality, self.provider)
            logger.error(f"[JUDGE] {self.provider_name} key not configured")
            raise DetectionConfigError("AI detection service not configured", provider=self.provider)

        if not isinstance(text, str) or not text.strip():
            raise InputInvalidError("No text provided")
        if len(text.strip()) < policy.MIN_TEXT_LENGTH:
            raise InputInvalidError(
                f"Text must be at least {policy.MIN_TEXT_LENGTH} characters for AI detection"
            )

        reply = await self._complete(TEXT_DETECTION_PROMPT, build_user_message(text))

        parsed = extract_verdict(reply)
        if parsed is None:
            logger.warning(f"[JUDGE] Could not parse verdict from {self.provider}: {reply[:200]!r}")
            return policy.unparsed_result(self.modality, self.provider)

        result = policy.judge(self.modality, parsed.ai_probability, self.provider, parsed.reasoning)
        logger.info(f"[JUDGE] {self.provider}: score={parsed.ai_probability:.3f} passed={result.passed}")
        return result


class DedalusTextDetector(TextDetector):
    provider_name = dedalus.PROVIDER
    default_model = "anthropic/claude-opus-4-5"

    async def _complete(self, system_prompt: str, user_message: str) -> str:
        return await dedalus.create_chat_completion(
            self.credentials.api_key,
            self.model,
            system_prompt,
            user_message,
            self.temperature,
        )


class GeminiTextDetector(TextDetector):
    provider_name = gemini_client.PROVIDER
    default_model = "gemini-2.5-flash"

    async def _complete(self, system_prompt: str, user_message: str) -> str:
        return await gemini_client.generate_text(
            self.credentials.api_key,
            self.model,
            system_prompt,
            user_message,
            self.temperature,
        )


_PROVIDERS = {
    "dedalus": DedalusTextDetector,
    "gemini": GeminiTextDetector,
}


def build_text_detector(config: DetectionConfig) -> TextDetector:
    detector_cls = _PROVIDERS[config.text_provider]
    return detector_cls(
        config.text_credentials,
        config.mode,
        model=config.text_model,
        temperature=config.text_temperature,
    )
