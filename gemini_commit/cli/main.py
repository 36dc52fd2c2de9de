"""CLI Main Entry Point"""

import time

from gemini_commit.config import Config, load_config, load_env_file, resolve_api_key, resolve_model, API_KEY_ENV
from gemini_commit.git import GitAnalyzer, GitError
from gemini_commit.llm import GeminiClient, LLMError, LLMResponse
from gemini_commit.output import (
    info, dim, bold, print_error, print_success, print_warning, RULE, Spinner, colorize_commit_type,
)
from gemini_commit.prompts import build_prompt

from gemini_commit.cli.args import parse_args
from gemini_commit.cli.commands import display_config, run_install_completion
from gemini_commit.cli.utils import copy_to_clipboard


def _read_staged_diff(timings):
    """Return the staged diff, or None after reporting a read failure.

    RepositoryOpenError is not caught here: running outside a repository
    is a setup mistake and aborts the program.
    """
    t0 = time.time()
    try:
        diff = GitAnalyzer().get_staged_diff()
    except GitError as e:
        print_error(f"Could not read staged diff: {e}")
        return None
    finally:
        timings['git'] = time.time() - t0
    return diff


def _generate_message(client, prompt, timings) -> LLMResponse:
    """Run generation behind a spinner and return the response."""
    t_gen = time.time()
    try:
        with Spinner(f"Asking {client.name}..."):
            return client.generate(prompt)
    finally:
        timings['generate'] = time.time() - t_gen


def _display_message(message):
    """Display commit message between horizontal rules with the type colored."""
    colored = colorize_commit_type(message)
    lines = colored.split('\n')
    raw_lines = message.split('\n')
    width = max((len(line) for line in raw_lines), default=40) or 40
    print(f"\n{dim(RULE * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim(RULE * width))


def _copy_and_report(message, enabled):
    """Copy message to clipboard. Failure is only a warning."""
    if not enabled:
        return
    copied, reason = copy_to_clipboard(message)
    if copied:
        print_success("Copied to clipboard!")
    else:
        print_warning(f"Could not copy to clipboard{': ' + reason if reason else ''}")
        print(dim("  Select the message above to copy manually."))


def _print_verbose_stats(prompt, response, timings):
    print()
    print(dim(f"  Prompt: ~{len(prompt)//4} tokens ({len(prompt)} chars)"))
    print(dim(f"  Response: {response.tokens_used} tokens, finish_reason={response.finish_reason or 'n/a'}"))
    print(dim(f"  Timings: git={timings.get('git', 0):.2f}s, prompt={timings.get('prompt', 0):.2f}s, generate={timings.get('generate', 0):.2f}s"))


def _generate_commit_flow(args, config: Config) -> int:
    """Diff -> prompt -> Gemini -> stdout -> clipboard.

    Returns:
        int: Exit code
    """
    timings = {}

    diff = _read_staged_diff(timings)
    if diff is None:
        return 1
    if diff == "":
        print(info("Nothing to commit. Stage changes with 'git add' first."))
        return 0

    api_key = resolve_api_key(args.api_key)
    if not api_key:
        print(f"No API key found. Pass it as the first argument or set {API_KEY_ENV}:")
        print(dim(f"  export {API_KEY_ENV}='your-key-here'"))
        print(dim(f"  or add {API_KEY_ENV}=... to a .env file"))
        return 0

    t0 = time.time()
    prompt = build_prompt(diff)
    timings['prompt'] = time.time() - t0

    try:
        client = GeminiClient(
            api_key=api_key,
            model=resolve_model(args.model, config),
            api_base=config.api_base,
            timeout=config.timeout,
        )
        response = _generate_message(client, prompt, timings)
    except LLMError as e:
        print_error(str(e))
        return 1

    if args.verbose:
        _print_verbose_stats(prompt, response, timings)

    _display_message(response.content)
    _copy_and_report(response.content, config.copy and not args.no_copy)
    return 0


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    if args.install_completion:
        return run_install_completion()

    load_env_file()

    if args.display_config:
        return display_config()

    config = load_config()
    return _generate_commit_flow(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
