"""Shared utility for parsing JSON from LLM responses."""

import json
import logging
import re

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*\})\s*```", re.DOTALL)
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def parse_json_object_from_llm_response(content: str) -> dict | None:
    """Extract a single JSON object from LLM output.

    Handles three formats:
    1. Direct JSON: {"key": "value"}
    2. Markdown fence: ```json\\n{...}\\n```
    3. Embedded JSON: text before {"key": "value"} text after

    Returns None when no JSON object can be recovered.
    """
    candidates = [content]

    match = _FENCE_RE.search(content)
    if match:
        candidates.append(match.group(1))

    match = _OBJECT_RE.search(content)
    if match:
        candidates.append(match.group(0))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data

    logger.warning("Could not parse JSON object from LLM response (%d chars)", len(content))
    return None
