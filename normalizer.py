"""
Turns the raw completion text into a valid AnalysisResult.

The completion service is asked for a JSON object but is free to wrap it in
prose, drop fields or mistype values. ``normalize`` never raises: strict JSON
first, then per-field regex extraction, then a validation pass that coerces
every field into its allowed range.
"""
import json
import logging
import math
import re
from typing import Any, Dict, List, Optional

from models import AnalysisResult, Confidence, Verdict

DEFAULT_VERDICT = Verdict.SUSPICIOUS.value
DEFAULT_CONFIDENCE = Confidence.MEDIUM.value
DEFAULT_SCORE = 50
DEFAULT_RED_FLAGS = ["Unable to parse detailed analysis"]
EXPLANATION_PREVIEW_CHARS = 500

VALID_VERDICTS = {v.value for v in Verdict}
VALID_CONFIDENCES = {c.value for c in Confidence}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _value_patterns(key: str) -> List[re.Pattern]:
    # Order matters: first match wins
    k = re.escape(key)
    return [
        re.compile(rf'"{k}":\s*"([^"]*)"', re.IGNORECASE),
        re.compile(rf'{k}:\s*"([^"]*)"', re.IGNORECASE),
        re.compile(rf'{k}:\s*([^,\n}}]+)', re.IGNORECASE),
    ]


def _array_patterns(key: str) -> List[re.Pattern]:
    k = re.escape(key)
    return [
        re.compile(rf'"{k}":\s*\[([^\]]+)\]', re.IGNORECASE),
        re.compile(rf'{k}:\s*\[([^\]]+)\]', re.IGNORECASE),
    ]


def extract_value(text: str, key: str) -> Optional[str]:
    """First matching pattern wins. Empty captures count as missing."""
    for pattern in _value_patterns(key):
        match = pattern.search(text)
        if match:
            value = match.group(1).strip().replace('"', "")
            return value or None
    return None


def extract_array(text: str, key: str) -> Optional[List[str]]:
    for pattern in _array_patterns(key):
        match = pattern.search(text)
        if match:
            items = [item.strip().replace('"', "") for item in match.group(1).split(",")]
            return [item for item in items if item]
    return None


def parse_int_prefix(value: Optional[str]) -> Optional[int]:
    """'95' -> 95, '85/100' -> 85, 'high' -> None."""
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _strict_parse(raw_text: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(raw_text)
    except (TypeError, ValueError, RecursionError) as e:
        logging.warning(f"Completion reply is not valid JSON ({type(e).__name__}); falling back to field extraction: {raw_text[:80]!r}")
        return None
    if not isinstance(data, dict):
        logging.warning(f"Completion reply is JSON {type(data).__name__}, not an object; falling back to field extraction: {raw_text[:80]!r}")
        return None
    return data


def fallback_extract(raw_text: str) -> Dict[str, Any]:
    """Best-effort recovery of each field from non-JSON text, with defaults."""
    score = parse_int_prefix(extract_value(raw_text, "score"))
    red_flags = extract_array(raw_text, "redFlags")
    return {
        "verdict": extract_value(raw_text, "verdict") or DEFAULT_VERDICT,
        "confidence": extract_value(raw_text, "confidence") or DEFAULT_CONFIDENCE,
        "score": DEFAULT_SCORE if score is None else score,
        "explanation": extract_value(raw_text, "explanation") or raw_text[:EXPLANATION_PREVIEW_CHARS],
        "redFlags": list(DEFAULT_RED_FLAGS) if red_flags is None else red_flags,
        "category": extract_value(raw_text, "category"),
    }


def coerce_score(value: Any) -> int:
    """Truncates numeric values, defaults anything else to 50, clamps to [0, 100]."""
    score = DEFAULT_SCORE
    if isinstance(value, bool):
        pass
    elif isinstance(value, int):
        score = value
    elif isinstance(value, (float, str)):
        try:
            parsed = float(value)
        except ValueError:
            parsed = None
        if parsed is not None and math.isfinite(parsed):
            score = int(parsed)
    return max(0, min(100, score))


def validate(candidate: Dict[str, Any]) -> AnalysisResult:
    """Coerce a candidate record into the allowed ranges."""
    verdict = candidate.get("verdict")
    if not isinstance(verdict, str) or verdict not in VALID_VERDICTS:
        verdict = DEFAULT_VERDICT

    confidence = candidate.get("confidence")
    if not isinstance(confidence, str) or confidence not in VALID_CONFIDENCES:
        confidence = DEFAULT_CONFIDENCE

    red_flags = candidate.get("redFlags")
    if not isinstance(red_flags, list):
        red_flags = []

    explanation = candidate.get("explanation")
    if explanation is None:
        explanation = ""

    category = candidate.get("category")
    if category is not None:
        category = str(category) or None

    return AnalysisResult(
        verdict=verdict,
        confidence=confidence,
        score=coerce_score(candidate.get("score")),
        explanation=explanation if isinstance(explanation, str) else str(explanation),
        redFlags=[flag if isinstance(flag, str) else str(flag) for flag in red_flags],
        category=category,
    )


def normalize(raw_text: Optional[str]) -> AnalysisResult:
    """Never raises; every input yields a structurally valid result."""
    text = raw_text if isinstance(raw_text, str) else ""
    candidate = _strict_parse(text)
    if candidate is None:
        candidate = fallback_extract(text)
    return validate(candidate)
