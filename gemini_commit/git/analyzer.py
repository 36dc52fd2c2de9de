"""Git Analyzer - Read the staged diff from git."""

import subprocess


class GitError(Exception):
    """Raised when reading from an open repository fails."""
    pass


class RepositoryOpenError(Exception):
    """Raised when there is no repository to read at all.

    This is a setup error, not a runtime one, so it is kept out of the
    GitError hierarchy and left for the interpreter to report.
    """
    pass


class GitAnalyzer:
    """Extracts the HEAD-vs-index diff from git."""

    def __init__(self, cwd: str | None = None):
        self.cwd = cwd
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> bytes:
        """Run a git command and return raw stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                check=True,
                cwd=self.cwd,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b'').decode('utf-8', errors='replace').strip()
            raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr}")
        except FileNotFoundError:
            raise RepositoryOpenError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        try:
            self._run_git('--version')
        except GitError:
            raise RepositoryOpenError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError as e:
            raise RepositoryOpenError(f"Failed to open repository: {e}")

    def _head_tree(self) -> str:
        """Resolve the tree id of the HEAD commit."""
        try:
            output = self._run_git('rev-parse', '--verify', '--quiet', 'HEAD^{tree}')
        except GitError:
            raise GitError("HEAD does not resolve to a commit. Make an initial commit first.")
        return output.decode('ascii').strip()

    def get_staged_diff(self) -> str:
        """Patch text between the HEAD tree and the index. Empty when nothing is staged."""
        tree = self._head_tree()
        raw = self._run_git('diff', '--cached', '--no-color', '--no-ext-diff', tree)
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise GitError(f"Staged diff is not valid UTF-8: {e}")
