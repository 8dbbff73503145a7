"""Model Response Parsing — extracts the JSON analysis object from raw model text.

Invariants:
    - Always returns a dict or raises AnalysisParseError (never returns partial text)
    - Markdown code fences are stripped before parsing

Fallback levels:
    1. Direct json.loads after fence stripping
    2. Regex: first "{" through last "}" (handles preamble/trailing prose)
    3. Raise AnalysisParseError
"""

import json
import re

from tagscript.core.errors import AnalysisParseError, ErrorContext

_EMBEDDED_OBJECT = re.compile(r"\{[\s\S]*\}")


def strip_code_fences(content: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence."""
    text = content.strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_model_json(
    content: str, context: ErrorContext | None = None,
) -> dict:
    """Parse the model's JSON answer, salvaging an embedded object if needed."""
    text = strip_code_fences(content or "")

    try:
        result = json.loads(text)
    except json.JSONDecodeError:
        match = _EMBEDDED_OBJECT.search(text)
        if not match:
            raise AnalysisParseError(
                "Could not parse JSON from model response", context=context,
            )
        try:
            result = json.loads(match.group())
        except json.JSONDecodeError as e:
            raise AnalysisParseError(
                f"Could not parse JSON from model response: {e.msg}",
                context=context,
            ) from e

    if not isinstance(result, dict):
        raise AnalysisParseError(
            f"Model response was JSON {type(result).__name__}, expected an object",
            context=context,
        )
    return result
