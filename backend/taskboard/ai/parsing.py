"""Parsing of model replies into task candidates."""

import json
from typing import Any

from taskboard.ai.exceptions import AIResponseError

FENCE = "```"
JSON_FENCE = "```json"


def _fenced_block(text: str, opener: str) -> str | None:
    start = text.find(opener)
    if start == -1:
        return None
    # Content starts on the line after the opening fence
    newline = text.find("\n", start)
    content_start = newline + 1 if newline != -1 else start + len(opener)
    end = text.find(FENCE, content_start)
    if end == -1:
        return None
    return text[content_start:end].strip()


def extract_json_text(content: str) -> str | None:
    """Locate the JSON payload in a model reply.

    Looks for a ```json fenced block first, then any fenced block, then a
    bare reply starting with '['. Returns None if none of these match.
    """
    text = content.strip()
    for opener in (JSON_FENCE, FENCE):
        block = _fenced_block(text, opener)
        if block is not None:
            return block
    if text.startswith("["):
        return text
    return None


def parse_task_items(content: str) -> list[dict[str, Any]]:
    """Parse a model reply into a list of generic task documents.

    Raises:
        AIResponseError: If the payload is not a JSON array of objects
    """
    json_text = extract_json_text(content)
    if json_text is None:
        json_text = content

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise AIResponseError(
            f"Failed to parse AI response as JSON: {e}. Raw: {json_text}"
        )

    if not isinstance(data, list):
        raise AIResponseError(
            "Failed to parse AI response as JSON: expected an array of task objects. "
            f"Raw: {json_text}"
        )
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise AIResponseError(
                f"Failed to parse AI response as JSON: item {index} is not an object. "
                f"Raw: {json_text}"
            )
    return data
