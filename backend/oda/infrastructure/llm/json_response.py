"""Tolerant JSON extraction from model output."""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def parse_json_response(content: str) -> Any:
    """Decode JSON that may be wrapped in markdown fences or extra text.

    Raises:
        ValueError: If no JSON value can be recovered.
    """
    text = content.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        # Remove first and last lines (the fences)
        text = "\n".join(lines[1:-1] if len(lines) > 2 else lines[1:])
        text = text.strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Models may wrap the payload in prose or thinking tokens.
    for opener, closer in (("{", "}"), ("[", "]")):
        start = text.find(opener)
        end = text.rfind(closer)
        if start != -1 and end > start:
            try:
                return json.loads(text[start : end + 1])
            except json.JSONDecodeError:
                continue

    logger.warning("Could not parse model output as JSON: %s", text[:200])
    raise ValueError("model output is not valid JSON")
