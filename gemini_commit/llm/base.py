"""LLM Shared Types and Message Extraction"""

import json
from dataclasses import dataclass

from gemini_commit.llm.models import GenerationResponse

UNKNOWN_FINISH_REASON = "unknown"
NO_PROMPT_FEEDBACK = "none"


@dataclass
class LLMResponse:
    """Generated commit message plus what we know about how it was produced."""
    content: str
    model: str = ""
    tokens_used: int = 0
    finish_reason: str | None = None


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


def extract_commit_message(response: GenerationResponse) -> str:
    """Trimmed text of the first part of the first candidate.

    Raises LLMError naming the finish reason and prompt feedback when any
    link in that chain is missing.
    """
    first = response.candidates[0] if response.candidates else None
    content = first.content if first else None
    part = content.parts[0] if content and content.parts else None
    if part is not None and part.text is not None:
        return part.text.strip()

    reason = first.finish_reason if first and first.finish_reason else UNKNOWN_FINISH_REASON
    if response.prompt_feedback is not None:
        feedback = json.dumps(response.prompt_feedback, ensure_ascii=False, separators=(',', ':'))
    else:
        feedback = NO_PROMPT_FEEDBACK
    raise LLMError(
        "Gemini did not return any usable text.\n"
        f"  finish_reason='{reason}'\n"
        f"  prompt_feedback: {feedback}"
    )
