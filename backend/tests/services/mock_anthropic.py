"""Mock Anthropic Client — simulates Messages API responses for analysis tests.

Invariants:
    - MockAnthropicClient.create_message mirrors ResilientAnthropicClient's keyword API
    - Responses are either a sequence (one per call) or a callable(prompt) -> text
    - A response that is an Exception instance is raised instead of returned
    - Every call is recorded in .calls (kwargs) for assertions
"""

import json
import re


class _Block:
    """Mock content block (text only)."""

    def __init__(self, text):
        self.type = "text"
        self.text = text


class _Usage:
    def __init__(self, input_tokens=100, output_tokens=50):
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens


class _Message:
    """Mock Message returned by messages.create()."""

    def __init__(self, text, stop_reason="end_turn"):
        self.content = [_Block(text)]
        self.stop_reason = stop_reason
        self.usage = _Usage()


class MockAnthropicClient:
    """Replaces ResilientAnthropicClient. Sequences pre-configured responses."""

    def __init__(self, responses):
        self._responses = responses
        self._idx = 0
        self.calls = []

    async def create_message(self, **kwargs):
        self.calls.append(kwargs)
        prompt = kwargs["messages"][-1]["content"]
        if callable(self._responses):
            reply = self._responses(prompt)
        else:
            if self._idx >= len(self._responses):
                raise RuntimeError(
                    f"MockAnthropicClient: no response at index {self._idx} "
                    f"(configured {len(self._responses)})",
                )
            reply = self._responses[self._idx]
            self._idx += 1
        if isinstance(reply, Exception):
            raise reply
        return _Message(reply)

    @property
    def prompts(self):
        return [c["messages"][-1]["content"] for c in self.calls]


# -- Builder helpers -----------------------------------------------------------


def analysis_json(
    tags=("Business Strategy", "Marketing", "Growth"),
    chapters=({"summary": "Intro to the episode"},),
    ad_safety="✅ Safe",
    ad_safety_reason="Family-friendly discussion",
    key_topics=("startups", "funding"),
    sentiment="positive",
    fenced=False,
):
    """Serialized analysis object as the model would return it."""
    text = json.dumps({
        "tags": list(tags),
        "chapters": [dict(c) for c in chapters],
        "ad_safety": ad_safety,
        "ad_safety_reason": ad_safety_reason,
        "key_topics": list(key_topics),
        "sentiment": sentiment,
    }, ensure_ascii=False)
    return f"```json\n{text}\n```" if fenced else text


_PART = re.compile(r"part (\d+) of (\d+)")


def chunk_part(prompt):
    """1-based chunk number from a chunk prompt ("part N of M")."""
    match = _PART.search(prompt)
    return int(match.group(1)) if match else None
