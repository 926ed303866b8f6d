"""
Response normalization.

The google-genai SDK hands back differently shaped objects depending on the call
variant and SDK version. Each known shape has one extractor; they are tried in
order and the first one that finds text wins. Anything else is dumped as JSON.
"""

import json
import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple


class ResponseShape(Enum):
    NESTED_CANDIDATE_PARTS = "response.candidates[0].content.parts[0].text"
    CANDIDATE_PARTS = "candidates[0].content.parts[0].text"
    NESTED_CANDIDATE_CONTENT_TEXT = "response.candidates[0].content.text"
    UNKNOWN = "unknown"


_MISSING = object()


def _field(obj: Any, name: str) -> Any:
    """Read `name` from a mapping key or an attribute; _MISSING if absent."""
    if obj is None:
        return _MISSING
    if isinstance(obj, dict):
        return obj.get(name, _MISSING)
    return getattr(obj, name, _MISSING)


def _first(obj: Any) -> Any:
    if isinstance(obj, (list, tuple)) and obj:
        return obj[0]
    return _MISSING


def _walk(obj: Any, *steps: str) -> Any:
    """
    Follow a path like ("candidates", 0, "content"). The int steps index the first element
    of a sequence. Returns None when any step is missing or has the wrong type.
    """
    current = obj
    for step in steps:
        current = _first(current) if step == 0 else _field(current, step)
        if current is _MISSING or current is None:
            return None
    return current


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _nested_candidate_parts(resp: Any) -> Optional[str]:
    return _text_or_none(_walk(resp, "response", "candidates", 0, "content", "parts", 0, "text"))


def _candidate_parts(resp: Any) -> Optional[str]:
    return _text_or_none(_walk(resp, "candidates", 0, "content", "parts", 0, "text"))


def _nested_candidate_content_text(resp: Any) -> Optional[str]:
    return _text_or_none(_walk(resp, "response", "candidates", 0, "content", "text"))


EXTRACTORS: List[Tuple[ResponseShape, Callable[[Any], Optional[str]]]] = [
    (ResponseShape.NESTED_CANDIDATE_PARTS, _nested_candidate_parts),
    (ResponseShape.CANDIDATE_PARTS, _candidate_parts),
    (ResponseShape.NESTED_CANDIDATE_CONTENT_TEXT, _nested_candidate_content_text),
]


def _to_jsonable(obj: Any) -> Any:
    # SDK responses are pydantic models.
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json", exclude_none=True)
    return obj


def _json_default(obj: Any) -> Any:
    if hasattr(obj, "model_dump"):
        return _to_jsonable(obj)
    return str(obj)


def dump_response(resp: Any) -> str:
    """Pretty-printed JSON dump of the whole response (indent 2)."""
    return json.dumps(_to_jsonable(resp), indent=2, default=_json_default)


def classify_response(resp: Any) -> Tuple[ResponseShape, Optional[str]]:
    """
    Find which known shape the response has.

    Returns:
        tuple: (shape, text). For an unrecognized response, (ResponseShape.UNKNOWN, None).
    """
    for shape, extractor in EXTRACTORS:
        text = extractor(resp)
        if text is not None:
            return shape, text
    return ResponseShape.UNKNOWN, None


def extract_text(resp: Any) -> str:
    """
    Return the first available text answer in `resp`, or a JSON dump of `resp`
    when no known shape matches or traversal fails.
    """
    try:
        shape, text = classify_response(resp)
    except Exception:
        logging.exception("[AI] Error extracting text from response")
        return dump_response(resp)

    if shape is ResponseShape.UNKNOWN:
        logging.warning("[AI] Unrecognized response shape, returning raw dump")
        return dump_response(resp)
    return text
