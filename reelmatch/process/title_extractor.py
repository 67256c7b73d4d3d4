"""Turn the generation backend's raw text into an ordered list of candidate titles."""

import json
import re
from typing import List

from reelmatch.exceptions import MalformedGenerationOutput
from reelmatch.utils.logger import get_logger

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def _malformed(text: str) -> MalformedGenerationOutput:
    return MalformedGenerationOutput(
        "Failed to parse movie recommendations",
        details="Generation backend returned an invalid format",
        response=text,
    )


def extract_titles(text: str) -> List[str]:
    """Parse a JSON array of titles, tolerating markdown code fences.

    The result keeps the model's order and the titles exactly as written.
    Anything other than a non-empty list of non-blank strings raises
    MalformedGenerationOutput carrying the original text.
    """
    raw = text or ""
    cleaned = _FENCE_RE.sub("", raw).strip()
    try:
        titles = json.loads(cleaned)
    except ValueError:
        logger.error("Failed to parse generation output: %s", raw)
        raise _malformed(raw)

    if not isinstance(titles, list) or not titles:
        logger.error("Generation output is not a non-empty array: %s", raw)
        raise _malformed(raw)
    if not all(isinstance(t, str) and t.strip() for t in titles):
        logger.error("Generation output contains non-title entries: %s", raw)
        raise _malformed(raw)
    return titles
