"""CLI Main Entry Point"""

import os
import sys
import time
from contextlib import nullcontext
from dataclasses import replace

from cmit.config import load_config
from cmit.editor import ExternalEditorSurface, SessionSlot
from cmit.git import ChangeSet, GitAnalyzer, GitError, dispatch_commit
from cmit.llm import Provider
from cmit.message import GenerationOptions, synthesize
from cmit.output import (
    bold, colorize_commit_type, dim, info, print_error, print_success, print_warning, Spinner,
)
from cmit.prompts import summarize_changes

from cmit.cli.args import parse_args
from cmit.cli.commands import display_config, run_setup, run_install_completion

MAX_FILES_SHOWN = 8


def _display_file_list(change_set, root=None, max_shown=MAX_FILES_SHOWN):
    """Show the staged files, collapsing long lists."""
    lines = summarize_changes(change_set, root)
    print(bold("Staged changes:"))
    for line in lines[:max_shown]:
        print(dim(f"  {line}"))
    remaining = len(lines) - max_shown
    if remaining > 0:
        print(dim(f"  ... and {remaining} more files"))


def _display_message(message):
    """Display commit message with horizontal rules and colored type."""
    colored = colorize_commit_type(message)
    lines = colored.split('\n')
    # Use raw message for width calculation (no ANSI codes)
    raw_lines = message.split('\n')
    width = max((len(line) for line in raw_lines), default=40)
    print(f"\n{dim('─' * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim('─' * width))


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    if args.setup:
        return run_setup(), True
    return 0, False


def _resolve_options(args, config) -> GenerationOptions:
    """Build generation options from args, env, and config.

    Precedence: CLI args > environment variables > config file
    """
    provider = args.provider or os.environ.get('CMIT_PROVIDER') or config.provider
    try:
        provider = Provider.parse(provider)
    except ValueError:
        print_warning(f"Unknown provider '{provider}', using rule-based messages")
        provider = Provider.NONE

    if args.no_max_length:
        max_length = None
    else:
        max_length = args.max_length or config.max_length

    options = GenerationOptions.from_config(
        config,
        provider=provider,
        model=args.model or os.environ.get('CMIT_MODEL'),
        api_key=os.environ.get('CMIT_API_KEY'),
    )
    return replace(
        options,
        use_emojis=options.use_emojis and not args.no_emoji,
        max_message_length=max_length,
    )


def _prepare_change_set():
    """Open the repository and read staged changes.

    Returns:
        tuple: (vcs, change_set), or (None, None) after reporting the problem
    """
    try:
        vcs = GitAnalyzer()
        changes = vcs.get_staged_changes()
    except GitError as e:
        print_error(str(e))
        return None, None

    if not changes:
        print_error("No staged changes. Run 'git add' first.")
        return None, None

    return vcs, ChangeSet(changes)


def _print_verbose_stats(candidate, timings):
    print(dim(f"  Source: {candidate.source.value}"))
    print(dim(f"  Timings: git={timings['git']:.2f}s, generate={timings['generate']:.2f}s"))


def _generate_commit_flow(args, options, slot):
    """Main flow: staged changes -> candidate -> edit -> commit.

    Returns:
        int: Exit code
    """
    is_pipe = not sys.stdout.isatty()
    timings = {}

    t0 = time.time()
    vcs, change_set = _prepare_change_set()
    timings['git'] = time.time() - t0
    if change_set is None:
        return 1

    if not is_pipe:
        _display_file_list(change_set, vcs.root)

    t0 = time.time()
    if options.wants_ai and not is_pipe:
        print(f"Generating with {info(options.ai_provider.value)}... ", flush=True)
    with Spinner() if options.wants_ai else nullcontext():
        candidate = synthesize(change_set, options, vcs)
    timings['generate'] = time.time() - t0

    if args.verbose and not is_pipe:
        _print_verbose_stats(candidate, timings)

    if args.dry_run:
        if is_pipe:
            print(candidate.text)
        else:
            _display_message(candidate.text)
        return 0

    if args.no_edit:
        final = candidate.text
    else:
        surface = ExternalEditorSurface()
        final = slot.edit(candidate.text, surface, max_length=options.max_message_length)
        if final is None:
            print(dim("Commit cancelled."))
            return 0

    committed, detail = dispatch_commit(vcs, final)
    if not committed:
        print_error(detail)
        print(dim("Your message was not committed:"))
        print(final)
        return 1

    print_success(f"Committed: {colorize_commit_type(detail)}")
    return 0


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    try:
        # Handle subcommands that exit early
        exit_code, should_exit = _handle_subcommands(args)
        if should_exit:
            return exit_code

        config = load_config()
        options = _resolve_options(args, config)
        return _generate_commit_flow(args, options, SessionSlot())
    except (KeyboardInterrupt, EOFError):
        print()
        print(dim("Cancelled."))
        return 130
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        return 1
