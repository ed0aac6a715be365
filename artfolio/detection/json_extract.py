"""
Best-effort extraction of the judge's JSON verdict from free-form model text.

Models wrap their answer in prose or ``` fences often enough that the reply
cannot be fed to json.loads directly. `extract_verdict` scans for the first
well-formed JSON object that carries a numeric `ai_probability`.
"""

import json
import math
from typing import Iterator, Optional

from artfolio.schemas.detection import ParsedVerdict

_decoder = json.JSONDecoder()


def iter_json_objects(text: str) -> Iterator[dict]:
    """Yield every JSON object that decodes cleanly from a '{' in `text`, left to right."""
    if not text:
        return
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            obj = None
        if isinstance(obj, dict):
            yield obj
        start = text.find("{", start + 1)


def _as_probability(value) -> Optional[float]:
    # bool is an int subclass; "true" is not a probability
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def extract_verdict(text: Optional[str]) -> Optional[ParsedVerdict]:
    """Return the first usable {"ai_probability", "reasoning"} object, or None."""
    for obj in iter_json_objects(text or ""):
        probability = _as_probability(obj.get("ai_probability"))
        if probability is None:
            continue
        reasoning = obj.get("reasoning")
        return ParsedVerdict(
            ai_probability=probability,
            reasoning=reasoning if isinstance(reasoning, str) else "",
        )
    return None
