"""Prompt Construction Package"""

from gemini_commit.prompts.builder import COMMIT_MESSAGE_GUIDELINE, build_prompt

__all__ = ["COMMIT_MESSAGE_GUIDELINE", "build_prompt"]
