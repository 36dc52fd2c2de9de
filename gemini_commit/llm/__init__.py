"""LLM Client Package"""

from gemini_commit.llm.base import LLMError, LLMResponse, extract_commit_message
from gemini_commit.llm.gemini import GeminiClient
from gemini_commit.llm.models import Candidate, Content, GenerationResponse, Part, ResponseShapeError

__all__ = [
    "LLMError",
    "LLMResponse",
    "GeminiClient",
    "GenerationResponse",
    "Candidate",
    "Content",
    "Part",
    "ResponseShapeError",
    "extract_commit_message",
]
