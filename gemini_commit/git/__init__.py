"""Git Operations Package"""

from gemini_commit.git.analyzer import GitAnalyzer, GitError, RepositoryOpenError

__all__ = [
    "GitAnalyzer",
    "GitError",
    "RepositoryOpenError",
]
