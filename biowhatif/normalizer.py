"""Turn raw Gemini output into a MutationAnalysis record."""

import json
import logging
import re

import pydantic

from biowhatif.errors import ValidationError
from biowhatif.models import MutationAnalysis

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def strip_code_fence(raw_text: str) -> str:
    """Return the content of the first fenced block, or the whole text if there is none."""
    text = raw_text.strip()
    match = _FENCE.search(text)
    if match:
        text = match.group(1)
    return text.strip()


def parse_json(raw_text: str) -> dict:
    try:
        parsed = json.loads(strip_code_fence(raw_text))
    except json.JSONDecodeError:
        logger.warning("Model output is not JSON: %.200s", raw_text)
        raise ValidationError("Model did not return valid JSON")
    if not isinstance(parsed, dict):
        raise ValidationError("Model did not return a JSON object")
    return parsed


def normalize_analysis(raw_text: str) -> MutationAnalysis:
    parsed = parse_json(raw_text)
    try:
        return MutationAnalysis.model_validate(parsed)
    except pydantic.ValidationError as e:
        logger.warning("Model output does not fit the analysis schema: %s", e)
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ValidationError(f"Model returned an invalid analysis ({', '.join(fields)})")
