"""CLI Commands"""

import os
import sys

from cmit.config import Config, load_config, save_config, get_config_path
from cmit.llm import Provider
from cmit.output import bold, dim, info, print_success


def _mask(secret: str) -> str:
    if not secret:
        return 'not set'
    return f"{secret[:4]}…" if len(secret) > 8 else "set"


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .cmitrc found)")

    overrides = {name: os.environ.get(name) for name in ('CMIT_PROVIDER', 'CMIT_MODEL', 'CMIT_API_KEY')}
    if any(overrides.values()):
        print(f"  {dim('Environment overrides:')}")
        for name, value in overrides.items():
            if value:
                shown = _mask(value) if name == 'CMIT_API_KEY' else value
                print(f"    {name}={shown}")

    max_length = str(config.max_length) if config.max_length is not None else 'off'
    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:    {info(config.provider)}")
    print(f"    model:       {info(config.model or 'default')}")
    print(f"    use_emojis:  {info(str(config.use_emojis).lower())}")
    print(f"    max_length:  {info(max_length)}")
    print(f"    api_key:     {info(_mask(config.api_key))}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .cmitrc (in current directory)")
    print(f"    Global: ~/.cmitrc")
    print(f"\n  {dim('Run')} cmit --setup {dim('to configure')}\n")

    return 0


def run_setup() -> int:
    """Quick setup wizard."""
    display_config()
    print(f"{bold('Setup Wizard')}\n")

    choices = list(Provider)
    print("Choose provider:\n")
    for i, provider in enumerate(choices, 1):
        label = "none (rule-based messages only)" if provider is Provider.NONE else provider.value
        print(f"  {i}. {label}")
    print()

    while True:
        choice = input(f"Select [1-{len(choices)}] (Enter for none): ").strip()
        if choice == '':
            provider = Provider.NONE
            break
        if choice.isdigit() and 1 <= int(choice) <= len(choices):
            provider = choices[int(choice) - 1]
            break

    api_key = ""
    model = None
    if provider is not Provider.NONE:
        api_key = input(f"\nAPI key for {provider.value} (Enter to use CMIT_API_KEY): ").strip()
        model = input("Model (Enter for default): ").strip() or None

    print("\nPrefix subjects with emojis? [Y/n]: ", end='')
    use_emojis = input().strip().lower() != 'n'

    print("\nMax message length, 0 for no limit (Enter for 72): ", end='')
    max_len_input = input().strip()
    if max_len_input == '0':
        max_length = None
    else:
        max_length = int(max_len_input) if max_len_input.isdigit() else 72

    config = Config(
        provider=provider.value,
        model=model,
        use_emojis=use_emojis,
        max_length=max_length,
        api_key=api_key,
    )
    path = save_config(config, global_config=True)

    print_success(f"Saved to {path}")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        line = 'eval "$(register-python-argcomplete cmit)"'
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell cmit | Out-String | Invoke-Expression\n")
        print("To make it permanent, add it to your $PROFILE.")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print('  eval "$(register-python-argcomplete cmit)"\n')
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish cmit | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
