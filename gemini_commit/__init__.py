"""
Gemini Commit

Suggests a commit message for staged git changes using the Gemini API
and copies it to the clipboard.
"""

__version__ = "0.1.0"
