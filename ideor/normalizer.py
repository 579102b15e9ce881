"""
Normalization of raw Gemini output into short idea strings.

The model is asked for JSON but frequently wraps it in markdown fences,
embeds it in prose, nests JSON objects inside strings or answers with a
bare array. ``normalize_ideas`` tolerates all of these by trying a fixed
sequence of parse strategies and keeping the first one that yields
anything. ``parse_ideas_strict`` is the narrower sibling used when an
exact number of plain ideas is required.
"""

import json
import logging
import re
from typing import Any, Callable, List, Optional, Tuple

from ideor.config import MAX_IDEA_CHARS, MAX_TITLE_WORDS
from ideor.errors import InsufficientResultsError, UpstreamUnparseableError

logger = logging.getLogger(__name__)

ELLIPSIS = "…"
TITLE_SEPARATOR = " — "

# Checked in this order; the first separator present wins
FREE_TEXT_SEPARATORS = (" — ", ": ", " – ", " - ", ". ")

_LEADING_FENCE = re.compile(r"\A\s*```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*\Z")
_IDEAS_ARRAY = re.compile(r'"ideas"\s*:\s*(\[.*?\])', re.DOTALL)

# Marker for "not valid JSON", distinct from a JSON null
_INVALID = object()


def strip_fences(text: Optional[str]) -> str:
    """Remove a leading ```/```json fence and a trailing ``` fence, if present."""
    if not text:
        return ""
    stripped = _LEADING_FENCE.sub("", text, count=1)
    stripped = _TRAILING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def _try_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError):
        return _INVALID


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def limit_words(title: str, max_words: int = MAX_TITLE_WORDS) -> str:
    """Keep at most ``max_words`` words, appending an ellipsis when cut."""
    words = (title or "").split()
    if len(words) > max_words:
        return " ".join(words[:max_words]) + ELLIPSIS
    return (title or "").strip()


def combine_title_subtitle(title: str, subtitle: str, max_chars: int = MAX_IDEA_CHARS) -> str:
    """
    Build the display form of an idea.

    The title is word-limited, joined to a non-blank subtitle with an em dash
    separator and the whole string is cut to ``max_chars`` then right-trimmed.
    A blank title with a subtitle yields the subtitle alone.
    """
    limited = limit_words(title)
    subtitle = (subtitle or "").strip()

    if not limited:
        combined = subtitle
    elif not subtitle:
        combined = limited
    else:
        combined = f"{limited}{TITLE_SEPARATOR}{subtitle}"

    return combined[:max_chars].rstrip()


def split_free_text(text: str) -> Tuple[str, str]:
    """Split free text into (title, subtitle) at the highest-priority separator."""
    for separator in FREE_TEXT_SEPARATORS:
        index = text.find(separator)
        if index >= 0:
            return text[:index], text[index + len(separator):]
    return text, ""


def _interpret_element(element: Any, max_chars: int) -> Optional[str]:
    if isinstance(element, dict):
        return combine_title_subtitle(
            _as_text(element.get("title")), _as_text(element.get("subtitle")), max_chars
        )

    if isinstance(element, str):
        nested = _try_json(element)
        if isinstance(nested, dict) and ("title" in nested or "subtitle" in nested):
            return combine_title_subtitle(
                _as_text(nested.get("title")), _as_text(nested.get("subtitle")), max_chars
            )
        title, subtitle = split_free_text(element.strip())
        return combine_title_subtitle(title, subtitle, max_chars)

    # numbers, booleans, nulls and nested arrays carry no idea
    return None


def _interpret_array(elements: List[Any], max_chars: int) -> List[str]:
    ideas = []
    for element in elements:
        idea = _interpret_element(element, max_chars)
        if idea:
            ideas.append(idea)
    return ideas


# --- Array location strategies ---

def _extract_ideas_array(raw_text: str) -> Optional[list]:
    match = _IDEAS_ARRAY.search(raw_text)
    if not match:
        return None
    parsed = _try_json(match.group(1))
    return parsed if isinstance(parsed, list) else None


def _parse_bare_array(raw_text: str) -> Optional[list]:
    parsed = _try_json(raw_text.strip())
    return parsed if isinstance(parsed, list) else None


_TEXT_FALLBACKS: List[Callable[[str], Optional[list]]] = [
    _extract_ideas_array,
    _parse_bare_array,
]


def _locate_array(raw_text: str, stripped: str) -> Optional[list]:
    """
    Find the array of idea elements.

    The stripped text is parsed first. Only when it is not valid JSON at all
    are the regex extraction and bare-array strategies tried on the raw text.
    """
    parsed = _try_json(stripped)
    if parsed is not _INVALID:
        if isinstance(parsed, dict) and isinstance(parsed.get("ideas"), list):
            return parsed["ideas"]
        if isinstance(parsed, list):
            return parsed
        return None

    for strategy in _TEXT_FALLBACKS:
        found = strategy(raw_text)
        if found is not None:
            return found
    return None


def _ideas_strings(text: str) -> Optional[List[str]]:
    """Read ``{"ideas": [string, ...]}``; non-blank strings only."""
    parsed = _try_json(text)
    if not isinstance(parsed, dict) or not isinstance(parsed.get("ideas"), list):
        return None
    return [item for item in parsed["ideas"] if isinstance(item, str) and item.strip()]


def _last_resort(raw_text: str, max_chars: int) -> List[str]:
    strings = _ideas_strings(raw_text) or []
    ideas = []
    for item in strings:
        title, subtitle = split_free_text(item.strip())
        idea = combine_title_subtitle(title, subtitle, max_chars)[:max_chars]
        if idea:
            ideas.append(idea)
    return ideas


def normalize_ideas(raw_text: Optional[str], expected_count: int,
                    max_chars: int = MAX_IDEA_CHARS) -> List[str]:
    """
    Lenient parse used by the segment ideas flow.

    Returns at most ``expected_count`` ideas in upstream order. A short
    result is returned as is; zero ideas raises UpstreamUnparseableError.
    """
    raw_text = raw_text or ""
    stripped = strip_fences(raw_text)

    ideas: List[str] = []
    elements = _locate_array(raw_text, stripped)
    if elements is not None:
        ideas = _interpret_array(elements, max_chars)

    if not ideas:
        ideas = _last_resort(raw_text, max_chars)

    if not ideas:
        logger.warning(f"Could not recover any idea from model output ({len(raw_text)} chars)")
        raise UpstreamUnparseableError("no idea could be recovered from the model output")

    if len(ideas) < expected_count:
        logger.info(f"Model returned {len(ideas)} ideas, {expected_count} requested")
    return ideas[:expected_count]


def parse_ideas_strict(raw_text: Optional[str], expected_count: int,
                       max_chars: int = MAX_IDEA_CHARS) -> List[str]:
    """
    Strict parse used by the seed + segment suggestion flow.

    Only ``{"ideas": [string, ...]}`` is accepted (fenced or not). Fewer than
    ``expected_count`` usable ideas raises InsufficientResultsError.
    """
    raw_text = raw_text or ""
    items = _ideas_strings(strip_fences(raw_text))
    if items is None:
        items = _ideas_strings(raw_text)
    if items is None:
        raise UpstreamUnparseableError("model output is not an ideas object")

    ideas = [item.strip()[:max_chars].rstrip() for item in items][:expected_count]

    if not ideas:
        raise UpstreamUnparseableError("model output contains no usable idea")
    if len(ideas) < expected_count:
        raise InsufficientResultsError(expected_count, len(ideas))
    return ideas
