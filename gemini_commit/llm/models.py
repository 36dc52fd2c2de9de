"""Gemini generateContent response shape.

Only ``candidates`` is structural; everything else may be missing. Field
names on the wire are camelCase (``finishReason``, ``promptFeedback``).
"""

from dataclasses import dataclass, field
from typing import Any, Optional


class ResponseShapeError(ValueError):
    """Raised when a response body does not fit the expected shape."""
    pass


def _expect(value: Any, kind: type, where: str):
    if not isinstance(value, kind):
        raise ResponseShapeError(f"expected {kind.__name__} at '{where}', got {type(value).__name__}")
    return value


@dataclass
class Part:
    text: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, where: str = "part") -> 'Part':
        data = _expect(data, dict, where)
        text = data.get("text")
        if text is not None:
            _expect(text, str, f"{where}.text")
        return cls(text=text)


@dataclass
class Content:
    parts: list[Part] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, where: str = "content") -> 'Content':
        data = _expect(data, dict, where)
        raw_parts = _expect(data.get("parts") or [], list, f"{where}.parts")
        return cls(parts=[Part.from_dict(p, f"{where}.parts[{i}]") for i, p in enumerate(raw_parts)])


@dataclass
class Candidate:
    content: Optional[Content] = None
    finish_reason: Optional[str] = None
    safety_ratings: Optional[list] = None

    @classmethod
    def from_dict(cls, data: Any, where: str = "candidate") -> 'Candidate':
        data = _expect(data, dict, where)
        content = data.get("content")
        finish_reason = data.get("finishReason")
        if finish_reason is not None:
            finish_reason = str(finish_reason)
        return cls(
            content=Content.from_dict(content, f"{where}.content") if content is not None else None,
            finish_reason=finish_reason,
            safety_ratings=data.get("safetyRatings"),
        )


@dataclass
class GenerationResponse:
    candidates: list[Candidate] = field(default_factory=list)
    prompt_feedback: Optional[dict] = None
    usage_metadata: Optional[dict] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'GenerationResponse':
        data = _expect(data, dict, "response")
        # A blocked prompt comes back with promptFeedback and no candidates key.
        raw_candidates = _expect(data.get("candidates", []), list, "candidates")
        return cls(
            candidates=[Candidate.from_dict(c, f"candidates[{i}]") for i, c in enumerate(raw_candidates)],
            prompt_feedback=data.get("promptFeedback"),
            usage_metadata=data.get("usageMetadata"),
        )

    @property
    def total_tokens(self) -> int:
        if not isinstance(self.usage_metadata, dict):
            return 0
        count = self.usage_metadata.get("totalTokenCount", 0)
        return count if isinstance(count, int) else 0
