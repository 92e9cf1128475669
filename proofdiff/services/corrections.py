"""
Correction Parser - Turn a model-generated correction list into requests

Language models asked for a JSON array of corrections tend to wrap it in code
fences, add commentary, or emit slightly broken JSON. This module extracts the
outermost JSON fragment, repairs it with ``json_repair`` and validates each
item into a :class:`CorrectionRequest`.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from json_repair import repair_json
from pydantic import ValidationError

from proofdiff.models.issue import CorrectionRequest
from proofdiff.services.errors import CorrectionParseError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")

# Keys under which some models nest the list inside an object
_LIST_KEYS = ("corrections", "issues")


def extract_json(text: str) -> Any:
    """Locate, repair and parse the outermost JSON array or object in ``text``"""
    if not isinstance(text, str):
        raise CorrectionParseError(f"Expected string input, got {type(text)}")

    cleaned = _FENCE_RE.sub("", text.strip())

    start_arr = cleaned.find("[")
    start_obj = cleaned.find("{")
    if start_arr == -1 and start_obj == -1:
        raise CorrectionParseError("Response text does not contain a JSON array or object")

    # Prefer whichever delimiter appears first
    if start_obj == -1 or (start_arr != -1 and start_arr < start_obj):
        start, end_char = start_arr, "]"
    else:
        start, end_char = start_obj, "}"

    end = cleaned.rfind(end_char)
    # Truncated output: let json_repair close the structure
    fragment = cleaned[start : end + 1] if end > start else cleaned[start:]

    try:
        return json.loads(repair_json(fragment))
    except json.JSONDecodeError as e:
        raise CorrectionParseError(f"Failed to parse JSON: {e}") from e


def coerce_corrections(data: Any) -> list[CorrectionRequest]:
    """Validate already-decoded JSON into correction requests.

    Items that are not objects or have no usable ``original`` are skipped so
    one bad entry never drops the rest of the list.
    """
    if isinstance(data, dict):
        nested = next((data[key] for key in _LIST_KEYS if isinstance(data.get(key), list)), None)
        data = nested if nested is not None else [data]
    if not isinstance(data, list):
        raise CorrectionParseError(f"Expected a JSON array of corrections, got {type(data).__name__}")

    requests: list[CorrectionRequest] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("[Corrections] Skipping item %d: not an object", index)
            continue
        try:
            request = CorrectionRequest.model_validate(item)
        except ValidationError as e:
            logger.warning("[Corrections] Skipping item %d: %s", index, e.errors()[0]["msg"])
            continue
        requests.append(request)

    return requests


def parse_corrections(raw: str) -> list[CorrectionRequest]:
    """Parse a raw model response into correction requests"""
    return coerce_corrections(extract_json(raw))
