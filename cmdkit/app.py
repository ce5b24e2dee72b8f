"""
Command Line Interface for cmdkit.

Global flags come from the option table in cmdkit.config.options; each command
is a thin shell around one of the core helpers. The exit status is the error
status tracked by cmdkit.core.error_utils.
"""

import functools
import logging
import os
from typing import Callable, List

import click

from cmdkit import __version__
from cmdkit.config import Config, get_option_spec, option_help_rows
from cmdkit.core import (
    CommandError,
    RequestTimer,
    context,
    format_size,
    get_error,
    get_log,
    get_log_entries,
    log,
    mime_content_type,
    archive_extension,
    file_is_tarball,
    op_system,
    set_option,
    start_log_recording,
    stop_log_recording,
)
from cmdkit.core.logging_utils import ERROR_LEVELS, WARNING_LEVELS

logger = logging.getLogger(__name__)

# Global options exposed on the command line, in help order
CLI_OPTIONS = ['verbose', 'debug', 'quiet', 'simulate', 'nocolor', 'yes', 'no', 'columns', 'log-dir']


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def global_options(func: Callable) -> Callable:
    """Attach the CLI_OPTIONS from the global option table as click options."""
    for name in reversed(CLI_OPTIONS):
        spec = get_option_spec(name)
        decls = [f"--{spec.name}"]
        if spec.short_form:
            decls.append(f"-{spec.short_form}")
        if spec.is_flag:
            func = click.option(*decls, is_flag=True, default=False, help=spec.description)(func)
        else:
            value_type = int if spec.name == 'columns' else click.Path(file_okay=False)
            func = click.option(*decls, type=value_type, default=None, help=spec.description)(func)
    return func


def exit_with_status(ctx: click.Context) -> None:
    """Leave with the tracked error status when it is not SUCCESS."""
    status = get_error()
    if status:
        ctx.exit(status)


def handles_command_errors(func: Callable) -> Callable:
    """Turn CommandError into a recorded error and a non-zero exit status."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        try:
            func(*args, **kwargs)
        except CommandError as e:
            logger.debug(f"{ctx.info_name} failed: {e}")
            e.record()
        exit_with_status(ctx)
    return wrapper


def print_header(text: str) -> None:
    click.echo("=" * 70)
    click.echo(text)
    click.echo("=" * 70)


# ============================================================================
# MAIN CLI GROUP
# ============================================================================

@click.group()
@global_options
@click.option("--record", is_flag=True, help="Record log entries to a file in the log directory.")
@click.version_option(__version__, prog_name="cmdkit")
@click.pass_context
def cli(ctx, record, **options):
    """
    cmdkit - helpers for command-line automation.

    Inspect archives, format sizes and run shell commands with simulate and
    verbose modes.
    """
    # Each invocation starts from a clean context
    context.clear_all()
    RequestTimer.start()

    for name, value in options.items():
        if value is None or value is False:
            continue
        spec = get_option_spec(name.replace('_', '-'))
        set_option(spec.name, value, 'cli')
        if spec.context:
            context.set(spec.context, value)

    config = Config(
        verbose=options['verbose'] or None,
        debug=options['debug'] or None,
        quiet=options['quiet'] or None,
        simulate=options['simulate'] or None,
        nocolor=options['nocolor'] or None,
        columns=options['columns'],
        log_dir=options['log_dir'],
    )
    config.apply(context)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config

    if record:
        log_file = start_log_recording(log_dir=config.LOG_DIR)
        ctx.call_on_close(stop_log_recording)
        log(f"Recording log to {log_file}", 'debug')


# ============================================================================
# COMMANDS
# ============================================================================

@cli.command()
@click.option("--all", "show_all", is_flag=True, help="Include every global option, not only the core set.")
def options(show_all):
    """List the global options."""
    rows = option_help_rows(brief=not show_all)
    width = max(len(flags) for flags, _ in rows) + 2
    print_header("Global options")
    for flags, description in rows:
        click.echo(f"{flags:<{width}}{description}")


@cli.command()
@click.argument("path", type=click.Path())
@handles_command_errors
def mime(path):
    """Print the content type of an archive file."""
    if not os.path.isfile(path):
        raise CommandError('FILE_NOT_FOUND', f"File not found: {path}")

    content_type = mime_content_type(path)
    if content_type is None:
        raise CommandError('FILE_UNKNOWN_TYPE', f"Could not determine the type of {path}")

    click.echo(content_type)
    if context.get('VERBOSE', False):
        click.echo(f"Archive:   {'yes' if file_is_tarball(path) else 'no'}")
        click.echo(f"Extension: {archive_extension(content_type) or 'unknown'}")


@cli.command()
@click.argument("sizes", nargs=-1, type=int, required=True)
def size(sizes):
    """Format byte counts for humans."""
    for value in sizes:
        click.echo(format_size(value))


@cli.command(name="exec")
@click.argument("command")
@handles_command_errors
def exec_command(command):
    """Run a shell command (skipped in --simulate mode)."""
    if not op_system(command):
        raise CommandError('COMMAND_FAILED', f"Command failed: {command}")
    log(f"Command finished: {command}", 'success')


@cli.command(name="log-history")
@click.option("--errors", "only_problems", is_flag=True, help="Only show warnings and errors.")
@click.option("--file", "log_file", type=click.Path(exists=True, dir_okay=False),
              help="Read a log written by an earlier --record run instead.")
def log_history(only_problems, log_file):
    """
    Show the log entries of this run, or of a recorded run with --file.

    Entries logged during this invocation are mostly debug and notice output,
    so combine with --debug or --record to see them.
    """
    problem_levels = ERROR_LEVELS + WARNING_LEVELS
    if log_file:
        with open(log_file, encoding='utf-8') as f:
            lines = [line for line in f.read().splitlines() if line.startswith('[')]
        if only_problems:
            tags = tuple(f"] [{level.upper()}]" for level in problem_levels)
            lines = [line for line in lines if any(tag in line for tag in tags)]
        for line in lines or ["No log entries."]:
            click.echo(line)
        return

    entries: List = get_log_entries(problem_levels) if only_problems else get_log()
    if not entries:
        click.echo("No log entries.")
        return
    for entry in entries:
        click.echo(f"[{entry.level}] {entry.message}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
