"""CLI Utility Functions"""

import subprocess
import sys


def _clipboard_commands() -> list[list[str]]:
    """Candidate clipboard writers for this platform, in order of preference."""
    if sys.platform == 'win32':
        return [['clip']]
    if sys.platform == 'darwin':
        return [['pbcopy']]
    return [
        ['wl-copy'],
        ['xclip', '-selection', 'clipboard'],
        ['xsel', '--clipboard', '--input'],
    ]


def copy_to_clipboard(text: str) -> tuple[bool, str]:
    """Copy text to clipboard. Returns (success, failure_reason)."""
    data = text.encode('utf-8')
    last_failure = ""
    for command in _clipboard_commands():
        try:
            subprocess.run(command, input=data, check=True, capture_output=True)
            return True, ""
        except FileNotFoundError:
            continue
        except (subprocess.CalledProcessError, OSError) as e:
            # e.g. wl-copy installed but no Wayland session; try the next tool
            last_failure = f"Clipboard command failed: {e}"

    if last_failure:
        return False, last_failure
    if sys.platform.startswith('linux'):
        return False, "Install wl-clipboard, xclip or xsel: sudo apt install xclip"
    return False, "No clipboard tool found"
