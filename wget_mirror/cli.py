#!/usr/bin/env python3
"""
Command-line entry point for wget_mirror.

Commands:
  wgetMirror START_URL DESTINATION   Mirror START_URL and every page under its path

Common options:
  --config PATH       YAML/JSON file with max_concurrency, timeout and log_* settings
  --log-level LEVEL   Logging level (DEBUG, INFO, ...); overrides the file
  --log-file PATH     Log file (stdout only when omitted); overrides the file
  --log-format FORMAT Logging format string; overrides the file

wgetMirror options:
  --max-concurrency N Cap on simultaneous fetches (unbounded by default)
  --timeout SEC       Per-request timeout in seconds (none by default)

Also:
  --version, -v       Show the wget_mirror version

Example:
  wget-mirror wgetMirror https://example.com/docs ./mirror
"""
import sys
import asyncio
from pathlib import Path

import click
from pydantic import ValidationError

from wget_mirror import __version__
from wget_mirror.config import load_config
from wget_mirror.crawler.resume import load_visited
from wget_mirror.engine import start_mirror
from wget_mirror.errors import MirrorError
from wget_mirror.logger import init_logging, logger
from wget_mirror.utils import parse_start_url, prepare_destination

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='wget_mirror, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML/JSON settings file.'
)
@click.option(
    '--log-level', 'log_level',
    default=None,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level [default: INFO]'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stdout only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=None,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """wget_mirror command group."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['logging'] = dict(log_level=log_level, log_file=log_file, log_format=log_format)


@cli.command('wgetMirror', context_settings=CONTEXT_SETTINGS)
@click.argument('start_url', metavar='START_URL')
@click.argument('destination', metavar='DESTINATION', type=click.Path(path_type=Path))
@click.option(
    '--max-concurrency', 'max_concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Maximum number of simultaneous fetches (unbounded if omitted)'
)
@click.option(
    '--timeout', 'timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Per-request timeout in seconds (none if omitted)'
)
@click.pass_context
def mirror_command(ctx, start_url, destination, max_concurrency, timeout):
    """Mirror START_URL and every same-origin page under its path into DESTINATION."""
    try:
        start_url = parse_start_url(start_url)
    except ValueError as e:
        print_error(f'Error: {e}')

    obj = ctx.obj or {}
    try:
        cfg = load_config(
            obj.get('config_path'),
            start_url=start_url,
            destination=destination,
            max_concurrency=max_concurrency,
            timeout=timeout,
            **obj.get('logging', {}),
        )
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Error: invalid configuration: {e}')

    try:
        init_logging(
            level=cfg.log_level,
            log_file=str(cfg.log_file) if cfg.log_file else None,
            log_format=cfg.log_format
        )
    except OSError as e:
        print_error(f'Error: cannot open log file: {e}')

    try:
        prepare_destination(cfg.destination)
    except MirrorError as e:
        print_error(f'Error: invalid destination directory: {e}')

    try:
        visited = load_visited(cfg.destination)
    except MirrorError as e:
        print_error(f'Error: {e}')

    try:
        stats = asyncio.run(start_mirror(cfg, visited))
    except MirrorError as e:
        logger.error("Mirror failed: %s", e)
        print_error(f'Error: could not download file: {e}')

    click.echo(
        f'Mirrored {stats.fetched} page(s) into {cfg.destination} '
        f'({stats.skipped_on_disk} already on disk, {stats.skipped_cancelled} cancelled)'
    )


if __name__ == "__main__":
    cli()
