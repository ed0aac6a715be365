"""
Verdict policy: the per-modality thresholds and the pass/fail comparison.

This module is the single source of truth for the numbers. Image and text
thresholds differ on purpose.

The comparison is strict: a score exactly equal to its threshold is rejected.
"""

import math

from artfolio.schemas.detection import DetectionResult, Modality

IMAGE_THRESHOLD = 0.75
TEXT_THRESHOLD = 0.65

# Shorter essays are rejected before any provider call
MIN_TEXT_LENGTH = 100

SKIPPED_WARNING = "AI detection skipped (API not configured)"
PARSE_FAILED_WARNING = "Detection parsing failed"

_THRESHOLDS = {
    Modality.IMAGE: IMAGE_THRESHOLD,
    Modality.TEXT: TEXT_THRESHOLD,
}


def threshold_for(modality: Modality) -> float:
    return _THRESHOLDS[Modality(modality)]


def is_passing(score: float, threshold: float) -> bool:
    """Content passes only while its AI score stays strictly below the threshold."""
    return score < threshold


def confidence_percent(score: float) -> int:
    """Score as a whole percentage, rounding halves up."""
    return int(math.floor(score * 100 + 0.5))


def judge(modality: Modality, score: float, provider: str, reasoning: str = None) -> DetectionResult:
    threshold = threshold_for(modality)
    return DetectionResult(
        modality=modality,
        passed=is_passing(score, threshold),
        score=score,
        threshold=threshold,
        provider=provider,
        reasoning=reasoning,
    )


def skipped_result(modality: Modality, provider: str) -> DetectionResult:
    """Fail-open result used when credentials are absent in permissive mode."""
    return DetectionResult(
        modality=modality,
        passed=True,
        score=0.0,
        threshold=threshold_for(modality),
        provider=provider,
        warning=SKIPPED_WARNING,
    )


def unparsed_result(modality: Modality, provider: str) -> DetectionResult:
    """Fail-open result used when the judge replied but no verdict could be extracted."""
    return DetectionResult(
        modality=modality,
        passed=True,
        score=0.0,
        threshold=threshold_for(modality),
        provider=provider,
        warning=PARSE_FAILED_WARNING,
    )
