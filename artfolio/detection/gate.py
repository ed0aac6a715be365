"""
UploadGate: runs AI detection on every modality of a submission and decides
whether the upload may be persisted.

Per attempt:

    Idle -> ValidatingLength -> DetectingImage -> DetectingText -> Aggregating
         -> Accepted | Rejected

Detection is sequential, image first. The first AI verdict short-circuits the
attempt so later providers are never billed for a submission that is already
rejected. Provider failures fail closed; the adapters' own fail-open results
(skipped credentials, unparseable judge reply) pass but are logged as degraded.
"""

import logging
from typing import Awaitable, Callable, Optional

from artfolio.detection import policy
from artfolio.detection.config import DetectionConfig
from artfolio.detection.errors import DetectionConfigError, DetectionServiceError, InputInvalidError
from artfolio.detection.image_detector import SightengineDetector
from artfolio.detection.text_detector import build_text_detector
from artfolio.schemas.detection import (
    DetectionResult,
    GateState,
    Modality,
    RejectionReason,
    Submission,
    Verdict,
)

logger = logging.getLogger(__name__)

SERVICE_UNAVAILABLE_MESSAGE = "AI detection service is unavailable. Please try again later."
EMPTY_SUBMISSION_MESSAGE = "Submission must include an image or essay text"


def rejection_message(modality: Modality, score: float) -> str:
    percent = policy.confidence_percent(score)
    if modality == Modality.TEXT:
        return (
            f"This essay appears to be AI-generated (confidence: {percent}%). "
            "Artfolio only accepts human-written content."
        )
    return (
        f"This image appears to be AI-generated (confidence: {percent}%). "
        "Artfolio only accepts human-created artwork."
    )


class UploadGate:
    def __init__(self, config: DetectionConfig, image_detector=None, text_detector=None):
        self.config = config
        self.image_detector = image_detector or SightengineDetector(config.image_credentials, config.mode)
        self.text_detector = text_detector or build_text_detector(config)

    async def evaluate(self, submission: Submission) -> Verdict:
        """Run every present modality through its detector and return the aggregate Verdict."""
        state = GateState.IDLE
        results: list[DetectionResult] = []
        warnings: list[str] = []

        if not submission.has_image and not submission.has_text:
            return self._input_invalid(None, EMPTY_SUBMISSION_MESSAGE, results, warnings)

        if submission.has_text:
            state = GateState.VALIDATING_LENGTH
            if len(submission.text.strip()) < policy.MIN_TEXT_LENGTH:
                logger.info(f"[GATE] Essay too short ({len(submission.text.strip())} chars); no detector called")
                return self._input_invalid(
                    Modality.TEXT,
                    f"Text must be at least {policy.MIN_TEXT_LENGTH} characters for AI detection",
                    results,
                    warnings,
                )

        steps = []
        if submission.has_image:
            steps.append((GateState.DETECTING_IMAGE, Modality.IMAGE, self._detect_image))
        if submission.has_text:
            steps.append((GateState.DETECTING_TEXT, Modality.TEXT, self._detect_text))

        for state, modality, detect in steps:
            logger.debug(f"[GATE] -> {state.value}")
            try:
                result = await detect(submission)
            except InputInvalidError as e:
                return self._input_invalid(modality, str(e), results, warnings)
            except DetectionServiceError as e:
                kind = "configuration" if isinstance(e, DetectionConfigError) else "service"
                logger.error(f"[GATE] {modality.value} detection {kind} failure: {e}")
                return Verdict(
                    accepted=False,
                    state=GateState.REJECTED,
                    reason=RejectionReason.SERVICE_UNAVAILABLE,
                    modality=modality,
                    message=SERVICE_UNAVAILABLE_MESSAGE,
                    results=results,
                    warnings=warnings,
                )

            results.append(result)
            if result.degraded:
                # Unverified content is about to be let through
                logger.warning(
                    f"[DEGRADED] {modality.value} passed without verification "
                    f"({result.provider}): {result.warning}"
                )
                warnings.append(f"{modality.value}: {result.warning}")

            if not result.passed:
                logger.info(
                    f"[GATE] Rejected on {modality.value}: score={result.score:.3f} "
                    f"threshold={result.threshold}"
                )
                return Verdict(
                    accepted=False,
                    state=GateState.REJECTED,
                    reason=RejectionReason.CONTENT_REJECTED,
                    modality=modality,
                    score=result.score,
                    threshold=result.threshold,
                    message=rejection_message(modality, result.score),
                    results=results,
                    warnings=warnings,
                )

        state = GateState.AGGREGATING
        accepted = all(r.passed for r in results)
        logger.info(f"[GATE] {state.value}: {len(results)} modality result(s), accepted={accepted}")
        return Verdict(
            accepted=accepted,
            state=GateState.ACCEPTED if accepted else GateState.REJECTED,
            results=results,
            warnings=warnings,
        )

    async def submit(
        self,
        submission: Submission,
        persist: Callable[[Submission], Awaitable[None]],
    ) -> Verdict:
        """Evaluate, then hand the submission to `persist` only when accepted."""
        verdict = await self.evaluate(submission)
        if verdict.accepted:
            await persist(submission)
        return verdict

    async def _detect_image(self, submission: Submission) -> DetectionResult:
        image = submission.image
        return await self.image_detector.check_image(image.content, image.filename)

    async def _detect_text(self, submission: Submission) -> DetectionResult:
        return await self.text_detector.check_text(submission.text)

    @staticmethod
    def _input_invalid(
        modality: Optional[Modality],
        message: str,
        results: list[DetectionResult],
        warnings: list[str],
    ) -> Verdict:
        return Verdict(
            accepted=False,
            state=GateState.REJECTED,
            reason=RejectionReason.INPUT_INVALID,
            modality=modality,
            message=message,
            results=results,
            warnings=warnings,
        )
