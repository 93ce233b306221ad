"""Portfolio Migrator CLI."""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.panel import Panel

from . import __version__
from .config import MigrationConfig, ScrapingOptions, settings
from .errors import ErrorHandler, MigrationError
from .extractors import ContentExtractor
from .images import ImageMigration, plan_from_extracted
from .images.organizer import ProfileImageConfig, ProjectImageConfig
from .services import MigrationUtils
from .utils.async_bridge import run_async_in_sync
from .utils.console import console
from .utils.logging import MigrationLogger, setup_logging

logger = logging.getLogger(__name__)


def _build[M](factory: Callable[..., M], *args: Any, **kwargs: Any) -> M:
    """Build a pydantic model from CLI input, exit on validation error.

    Raises:
        typer.Exit: If validation fails (exits with code 1)
    """
    try:
        return factory(*args, **kwargs)
    except PydanticValidationError as e:
        console.print(f"[red]Validation error: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(code=1)


def _print_panel(message: str, style: str = "blue") -> None:
    console.print(Panel(f"[bold]{message}[/bold]", style=style))


def _fail(error: MigrationError) -> typer.Exit:
    """Report a migration error and return the exit to raise."""
    logger.debug("Command failed: %s (%s)", error.message, error.code.value)
    console.print(f"[red]✗ {ErrorHandler.get_user_message(error)}[/red]")
    console.print(f"  [dim]{error.message}[/dim]")
    return typer.Exit(code=1)


def _require_source(source: str | None) -> str:
    source_url = source or settings.source_url
    if not source_url:
        console.print("[red]No source URL. Pass --source or set SOURCE_URL.[/red]")
        raise typer.Exit(code=1)
    return source_url


app = typer.Typer(
    name="portfolio-migrator",
    help="Migrate content and images from a legacy portfolio site",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]Portfolio Migrator[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show progress logs on the console"),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Also write debug logs to this file"),
    ] = None,
) -> None:
    """Portfolio Migrator - extract, validate and save portfolio content."""
    setup_logging(
        level="DEBUG" if verbose or log_file else "INFO",
        log_file=log_file,
        console_level="INFO" if verbose else "WARNING",
    )


@app.command("migrate")
def migrate(
    source: Annotated[
        str | None,
        typer.Option("--source", "-s", help="Portfolio URL (default: SOURCE_URL)"),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory"),
    ] = None,
    validate: Annotated[
        bool,
        typer.Option("--validate/--no-validate", help="Validate extracted data"),
    ] = settings.validate_data,
    save: Annotated[
        bool,
        typer.Option("--save/--no-save", help="Write JSON data files"),
    ] = True,
) -> None:
    """Extract content from the portfolio, validate it and save it as JSON."""
    source_url = _require_source(source)
    overrides: dict[str, Any] = {"source_url": source_url, "validate_data": validate}
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    config = _build(MigrationConfig.from_settings, settings, **overrides)
    _build(config.to_scraping_options)

    _print_panel(f"Migrating content from {source_url}")
    utils = MigrationUtils(config)
    try:
        content = run_async_in_sync(utils.run_migration())
        written = utils.save_content(content) if save else {}
    except MigrationError as e:
        raise _fail(e)

    console.print(f"  [green]✓[/green] Projects: {len(content.projects)}")
    console.print(f"  [green]✓[/green] Skills: {len(content.skills)}")
    console.print(f"  [green]✓[/green] Images: {len(content.images)}")

    fallbacks = sorted(content.personal_info.fallback_fields)
    if fallbacks:
        placeholders = ", ".join(fallbacks)
        console.print(f"  [yellow]⚠ Not found, using placeholders: {placeholders}[/yellow]")

    if written:
        console.print(f"\n  Backup: {written['backup']}")
        console.print(f"  Output: {config.output_dir}")
    console.print("\n[bold green]Migration complete![/bold green]")


async def _plan_images(
    extractor: ContentExtractor,
) -> tuple[list[ProjectImageConfig], ProfileImageConfig]:
    try:
        async with asyncio.TaskGroup() as group:
            projects = group.create_task(extractor.extract_projects())
            images = group.create_task(extractor.extract_images())
    except ExceptionGroup as group_error:
        first = group_error.exceptions[0]
        error = ErrorHandler.handle_error(first, "image extraction")
        if error is first:
            raise error from None
        raise error from first
    return plan_from_extracted(images.result(), projects.result())


@app.command("images")
def images(
    source: Annotated[
        str | None,
        typer.Option("--source", "-s", help="Portfolio URL (default: SOURCE_URL)"),
    ] = None,
    public_dir: Annotated[
        Path | None,
        typer.Option("--public-dir", "-p", help="Site public directory"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Only show what would be downloaded"),
    ] = False,
) -> None:
    """Download the portfolio's images into the organized layout."""
    source_url = _require_source(source)
    options = _build(ScrapingOptions.from_settings, settings, base_url=source_url)
    target_dir = public_dir or settings.public_dir

    run_logger = MigrationLogger(settings.run_log_level)
    extractor = ContentExtractor(options, logger=run_logger)
    migration = ImageMigration(
        target_dir, logger=run_logger, max_retries=settings.image_max_retries
    )

    _print_panel(f"Migrating images from {source_url}")
    try:
        project_configs, profile_config = run_async_in_sync(_plan_images(extractor))
    except MigrationError as e:
        raise _fail(e)

    jobs = [
        *migration.organizer.generate_project_image_configs(project_configs),
        *migration.organizer.generate_profile_image_configs(profile_config),
    ]
    if dry_run:
        for job in jobs:
            console.print(f"  {job.url} -> {job.destination}")
        console.print(f"\n[bold]{len(jobs)} images planned[/bold]")
        migration.cleanup_old_images()
        return

    result = run_async_in_sync(migration.migrate_images(project_configs, profile_config))
    console.print(f"  [green]✓ Downloaded:[/green] {result.downloaded_images}")
    if result.failed_images:
        console.print(f"  [red]✗ Failed:[/red] {result.failed_images}")
        for error in result.errors:
            console.print(f"    - {error}")

    if migration.validate_migration(result.image_paths):
        console.print("\n[bold green]All mapped images are in place[/bold green]")
    else:
        console.print("\n[yellow]⚠ Some mapped images are missing[/yellow]")

    if not result.success:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
