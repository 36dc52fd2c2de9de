"""CLI Commands"""

import os
import sys

from gemini_commit.config import (
    API_KEY_ENV, MODEL_ENV, ConfigManager, get_config_path, load_config, resolve_api_key,
)
from gemini_commit.output import bold, dim, info, success, warning


def display_config() -> int:
    """Display current configuration. Never prints the key itself."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no {ConfigManager.CONFIG_FILENAME} found)")

    env_model = os.environ.get(MODEL_ENV)
    if env_model:
        print(f"  {dim('Environment overrides:')}")
        print(f"    {MODEL_ENV}={env_model}")

    key_state = success('set') if resolve_api_key() else warning('not set')

    print()
    print(f"  {bold('Settings:')}")
    print(f"    model:    {info(env_model or config.model)}")
    print(f"    api_base: {info(config.api_base)}")
    print(f"    timeout:  {info(str(config.timeout) if config.timeout is not None else 'none')}")
    print(f"    copy:     {info(str(config.copy).lower())}")
    print(f"    {API_KEY_ENV}: {key_state}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  {ConfigManager.CONFIG_FILENAME} (in current directory)")
    print(f"    Global: ~/{ConfigManager.CONFIG_FILENAME}")
    print(f"    Env:    .env (nearest, searching upward)\n")

    return 0


def run_install_completion() -> int:
    """Print shell tab completion setup."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete gcm)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, add to your $PROFILE:\n")
        print("  register-python-argcomplete --shell powershell gcm | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish gcm | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
