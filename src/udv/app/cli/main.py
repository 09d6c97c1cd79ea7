"""CLI main entry point."""

import json
import logging
import sys
from pathlib import Path

import click

from ...adapters import (
    FsCacheAdapter,
    HashlibAdapter,
    LoggingMetricsAdapter,
    NoopMetricsAdapter,
    StdLoggerAdapter,
    UtcClockAdapter,
)
from ...core import (
    CONTROL_DIR,
    AddFailedError,
    IgnoreSync,
    ManifestWriter,
    TrackingService,
    TreeWalker,
    UdvConfig,
    UdvError,
    find_project_root,
    init_project,
)
from ...core.ignore import IGNORE_FILENAME
from ...core.models import DIGEST_LENGTHS


def create_service(project_root: Path, config: UdvConfig) -> TrackingService:
    """Create service with wired adapters."""
    hasher = HashlibAdapter(config.hash_algorithm)
    cache = FsCacheAdapter(project_root / CONTROL_DIR / "cache", hasher)
    manifests = ManifestWriter()
    ignore = IgnoreSync(project_root / IGNORE_FILENAME)
    walker = TreeWalker(CONTROL_DIR)
    clock = UtcClockAdapter()
    logger = StdLoggerAdapter(level=config.log_level)
    metrics = LoggingMetricsAdapter() if config.metrics_type == "logging" else NoopMetricsAdapter()

    return TrackingService(
        project_root=project_root,
        hasher=hasher,
        cache=cache,
        manifests=manifests,
        ignore=ignore,
        walker=walker,
        clock=clock,
        logger=logger,
        metrics=metrics,
        workers=config.workers,
    )


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """udv - Version large files next to git without committing their bytes."""
    ctx.obj = {"log_level": "DEBUG" if debug else None}


@cli.command()
def init() -> None:
    """Initialize a udv project in the current Git repository."""
    click.echo("Initializing udv project in the current Git repository...")
    try:
        init_project(Path.cwd())
    except UdvError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo("udv project initialized successfully.")


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--workers", type=click.IntRange(min=1), help="Files to process in parallel")
@click.option(
    "--algorithm",
    type=click.Choice(sorted(DIGEST_LENGTHS)),
    help="Hash algorithm (default: sha256)",
)
@click.pass_obj
def add(options: dict, path: Path, workers: int | None, algorithm: str | None) -> None:
    """Track a file, or every file in a directory."""
    try:
        project_root = find_project_root(Path.cwd())
        config = UdvConfig.load(
            project_root,
            log_level=options["log_level"],
            workers=workers,
            hash_algorithm=algorithm,
        )
        service = create_service(project_root, config)
        summary = service.add(path if path.is_absolute() else Path.cwd() / path)
    except UdvError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(summary.to_dict(), indent=2))

    try:
        summary.raise_for_failures()
    except AddFailedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Main entry point."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    cli()
