"""
Tests for the end-to-end flow in cli.main with git, Gemini and the clipboard faked.

Run with:
    pytest tests/test_main.py -v
"""

import re

import pytest

from gemini_commit.config import Config
from gemini_commit.git import GitError, RepositoryOpenError
from gemini_commit.llm import LLMError, LLMResponse
import gemini_commit.cli.main as cli_main
from gemini_commit import output

ANSI_RE = re.compile(r'\033\[[0-9;]*m')

SAMPLE_DIFF = "diff --git a/a.txt b/a.txt\n--- a/a.txt\n+++ b/a.txt\n@@ -1 +1 @@\n-hello\n+world\n"
GENERATED = "feat: greet the world"


class FakeAnalyzer:
    diff = SAMPLE_DIFF
    error = None

    def get_staged_diff(self):
        if self.error:
            raise self.error
        return self.diff


class FakeClient:
    instances = []
    content = GENERATED
    error = None

    def __init__(self, api_key, model=None, api_base=None, timeout=None):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base
        self.timeout = timeout
        self.prompts = []
        FakeClient.instances.append(self)

    @property
    def name(self):
        return f"Fake ({self.model})"

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return LLMResponse(content=self.content, model=self.model, tokens_used=7, finish_reason="STOP")


@pytest.fixture
def pipeline(monkeypatch):
    """Fake out every collaborator of the pipeline and record clipboard writes."""
    FakeAnalyzer.diff = SAMPLE_DIFF
    FakeAnalyzer.error = None
    FakeClient.instances = []
    FakeClient.content = GENERATED
    FakeClient.error = None
    clipboard = {"calls": [], "result": (True, "")}

    def fake_copy(text):
        clipboard["calls"].append(text)
        return clipboard["result"]

    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    monkeypatch.setattr(cli_main, "load_env_file", lambda: None)
    monkeypatch.setattr(cli_main, "load_config", lambda: Config())
    monkeypatch.setattr(cli_main, "GitAnalyzer", FakeAnalyzer)
    monkeypatch.setattr(cli_main, "GeminiClient", FakeClient)
    monkeypatch.setattr(cli_main, "copy_to_clipboard", fake_copy)
    return clipboard


def _out(capsys):
    captured = capsys.readouterr()
    return ANSI_RE.sub('', captured.out), ANSI_RE.sub('', captured.err)


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

class TestHappyPath:

    def test_prints_and_copies_message(self, pipeline, capsys, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        assert cli_main.main([]) == 0

        out, _ = _out(capsys)
        assert GENERATED in out
        assert "Copied to clipboard!" in out
        assert out.index(GENERATED) < out.index("Copied to clipboard!")
        assert pipeline["calls"] == [GENERATED]

    def test_prompt_wraps_diff(self, pipeline, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        cli_main.main([])

        prompt = FakeClient.instances[0].prompts[0]
        assert f"```diff\n{SAMPLE_DIFF}\n```" in prompt

    def test_cli_key_takes_precedence_over_env(self, pipeline, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        cli_main.main(["cli-key"])
        assert FakeClient.instances[0].api_key == "cli-key"

    def test_env_key_used_without_argument(self, pipeline, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        cli_main.main([])
        assert FakeClient.instances[0].api_key == "env-key"

    def test_config_is_passed_to_client(self, pipeline, monkeypatch):
        monkeypatch.setattr(cli_main, "load_config", lambda: Config(model="cfg-model", api_base="http://x", timeout=9))
        cli_main.main(["key"])

        client = FakeClient.instances[0]
        assert client.model == "cfg-model"
        assert client.api_base == "http://x"
        assert client.timeout == 9

    def test_model_flag_overrides_env(self, pipeline, monkeypatch):
        monkeypatch.setenv("GEMINI_MODEL", "env-model")
        cli_main.main(["key", "--model", "flag-model"])
        assert FakeClient.instances[0].model == "flag-model"

    def test_no_copy_flag_skips_clipboard(self, pipeline, capsys):
        assert cli_main.main(["key", "--no-copy"]) == 0
        assert pipeline["calls"] == []
        out, _ = _out(capsys)
        assert GENERATED in out

    def test_copy_disabled_in_config(self, pipeline, monkeypatch):
        monkeypatch.setattr(cli_main, "load_config", lambda: Config(copy=False))
        cli_main.main(["key"])
        assert pipeline["calls"] == []

    def test_verbose_prints_stats(self, pipeline, capsys):
        cli_main.main(["key", "--verbose"])
        out, _ = _out(capsys)
        assert "Response: 7 tokens" in out
        assert "Timings:" in out


# ---------------------------------------------------------------------------
# Early exits
# ---------------------------------------------------------------------------

class TestEarlyExits:

    def test_empty_diff_short_circuits(self, pipeline, capsys, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        FakeAnalyzer.diff = ""

        assert cli_main.main([]) == 0

        out, _ = _out(capsys)
        assert "Nothing to commit" in out
        assert FakeClient.instances == []
        assert pipeline["calls"] == []

    def test_empty_diff_checked_before_key(self, pipeline, capsys):
        FakeAnalyzer.diff = ""
        assert cli_main.main([]) == 0
        out, _ = _out(capsys)
        assert "No API key" not in out

    def test_missing_key_is_a_clean_exit(self, pipeline, capsys):
        assert cli_main.main([]) == 0

        out, _ = _out(capsys)
        assert "No API key found" in out
        assert "GEMINI_API_KEY" in out
        assert FakeClient.instances == []

    def test_diff_read_error_is_reported(self, pipeline, capsys):
        FakeAnalyzer.error = GitError("HEAD does not resolve to a commit")

        assert cli_main.main(["key"]) == 1

        _, err = _out(capsys)
        assert "HEAD does not resolve" in err
        assert FakeClient.instances == []

    def test_repository_open_error_aborts(self, pipeline):
        FakeAnalyzer.error = RepositoryOpenError("not a repository")
        with pytest.raises(RepositoryOpenError):
            cli_main.main(["key"])


# ---------------------------------------------------------------------------
# Failures after the diff is read
# ---------------------------------------------------------------------------

class TestFailures:

    def test_generation_error_is_printed(self, pipeline, capsys):
        FakeClient.error = LLMError("Gemini did not return any usable text.\n  finish_reason='SAFETY'")

        assert cli_main.main(["key"]) == 1

        out, err = _out(capsys)
        assert "finish_reason='SAFETY'" in err
        assert pipeline["calls"] == []

    def test_clipboard_failure_is_only_a_warning(self, pipeline, capsys):
        pipeline["result"] = (False, "Install wl-clipboard, xclip or xsel")

        assert cli_main.main(["key"]) == 0

        out, _ = _out(capsys)
        assert GENERATED in out
        assert "Could not copy to clipboard: Install wl-clipboard, xclip or xsel" in out
        assert "Copied to clipboard!" not in out

    def test_clipboard_success_carries_check_mark(self, pipeline, capsys):
        cli_main.main(["key"])
        out, _ = _out(capsys)
        assert f"{output.CHECK} Copied to clipboard!" in out

    def test_clipboard_failure_carries_warning_mark(self, pipeline, capsys):
        pipeline["result"] = (False, "no display")
        cli_main.main(["key"])
        out, _ = _out(capsys)
        mark = "\u26a0" if output.UNICODE_ENABLED else "[!]"
        assert f"{mark} Could not copy to clipboard: no display" in out

    def test_clipboard_failure_keeps_same_exit_code(self, pipeline):
        ok = cli_main.main(["key"])
        pipeline["result"] = (False, "no display")
        assert cli_main.main(["key"]) == ok


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

class TestSubcommands:

    def test_display_config_hides_key(self, pipeline, capsys, monkeypatch):
        monkeypatch.setattr("gemini_commit.cli.commands.load_config", lambda: Config())
        monkeypatch.setenv("GEMINI_API_KEY", "super-secret")

        assert cli_main.main(["--display-config"]) == 0

        out, _ = _out(capsys)
        assert "GEMINI_API_KEY: set" in out
        assert "super-secret" not in out
        assert FakeClient.instances == []

    def test_install_completion(self, pipeline, capsys, monkeypatch):
        monkeypatch.setenv("SHELL", "/bin/bash")
        assert cli_main.main(["--install-completion"]) == 0
        out, _ = _out(capsys)
        assert "register-python-argcomplete gcm" in out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli_main.main(["--version"])
        assert exc.value.code == 0
        assert "gcm" in capsys.readouterr().out
