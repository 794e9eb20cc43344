#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for Scribe. All functionality is accessible through
command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action editor
    python run.py --action list
    python run.py --action export --article-id 1
    python run.py --action test --test-type unit
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from scribe.backend.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(
        ["server", "editor", "list", "trash", "restore", "purge", "export", "config", "test", "info"]
    ),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--article-id",
    default=None,
    help="Article to export or restore (for export and restore actions).",
)
@click.option(
    "--output",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Export directory (for export action). Defaults to editor.yaml export.directory.",
)
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run (for test action).",
)
@click.option(
    "--coverage",
    is_flag=True,
    help="Run tests with coverage (for test action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    article_id: str | None,
    output: Path | None,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Scribe Entry Point.

    Run the summary server, open the editor, manage articles and the
    trash, view configuration, or run tests.

    Examples:

        # Start the summary server
        python run.py --action server --reload --verbose

        # Open the terminal editor
        python run.py --action editor

        # Export an article with a generated summary
        python run.py --action export --article-id 1 --output exports

        # Remove expired trash now
        python run.py --action purge

        # Run unit tests with coverage
        python run.py --action test --test-type unit --coverage
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "editor":
        run_editor(logger)
    elif action == "list":
        list_articles(logger)
    elif action == "trash":
        list_trash(logger)
    elif action == "restore":
        restore_article(logger, article_id)
    elif action == "purge":
        purge_trash(logger)
    elif action == "export":
        export_article(logger, article_id, output)
    elif action == "config":
        show_config(logger)
    elif action == "test":
        run_tests(logger, test_type, coverage)
    elif action == "info":
        show_info(logger)


def _require_article_id(article_id: str | None, action: str) -> str:
    if not article_id:
        click.echo(click.style(f"Error: --article-id is required for {action}", fg="red"), err=True)
        sys.exit(2)
    return article_id


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the summary backend with uvicorn."""
    from scribe.backend.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "scribe.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def run_editor(logger) -> None:
    """Open the Textual editor."""
    from tui import ScribeApp

    logger.info("Starting editor")
    # The terminal belongs to the editor; keep log output off the console
    setup_logging(enable_console=False)
    ScribeApp().run()


def list_articles(logger) -> None:
    """Print active articles, most recent first."""
    from scribe.editor.workspace import Workspace

    workspace = Workspace.open()
    articles = workspace.articles.list()

    click.echo(f"Articles ({len(articles)}):")
    click.echo("-" * 60)
    for article in articles:
        click.echo(f"  {article.id:<38} {article.date.isoformat()}  {article.title}")

    logger.debug("Articles listed", extra={"count": len(articles)})
    asyncio.run(workspace.close())


def list_trash(logger) -> None:
    """Print trashed articles with the days left before purge."""
    from scribe.editor.workspace import Workspace

    workspace = Workspace.open()
    items = workspace.trash.items()

    click.echo(f"Trash ({len(items)}):")
    click.echo("-" * 60)
    if not items:
        click.echo("  Trash is empty")
    for item in items:
        days = workspace.trash.days_remaining(item)
        click.echo(f"  {item.id:<38} {item.title}  (deletes in {days} day{'s' if days != 1 else ''})")

    logger.debug("Trash listed", extra={"count": len(items)})
    asyncio.run(workspace.close())


def restore_article(logger, article_id: str | None) -> None:
    """Move an article from the trash back to the article list."""
    from scribe.backend.core.exceptions import NotFoundError
    from scribe.editor.workspace import Workspace

    article_id = _require_article_id(article_id, "restore")
    workspace = Workspace.open()
    try:
        article = workspace.restore(article_id)
    except NotFoundError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)
    finally:
        asyncio.run(workspace.close())

    click.echo(click.style(f"Restored: {article.title}", fg="green"))
    logger.info("Article restored", extra={"article_id": article_id})


def purge_trash(logger) -> None:
    """Delete trash items older than the retention window."""
    from scribe.editor.tasks import purge_expired_trash
    from scribe.editor.workspace import Workspace

    workspace = Workspace.open()

    async def _purge() -> dict:
        try:
            return await purge_expired_trash(workspace.trash)
        finally:
            await workspace.close()

    result = asyncio.run(_purge())
    click.echo(f"Purged {result['purged_count']} expired item(s)")
    for purged_id in result["purged_ids"]:
        click.echo(f"  {purged_id}")
    logger.debug("Purge finished", extra=result)


def export_article(logger, article_id: str | None, output: Path | None) -> None:
    """Export an article as JSON with a generated summary."""
    from scribe.backend.core.exceptions import NotFoundError
    from scribe.editor.workspace import Workspace

    article_id = _require_article_id(article_id, "export")
    workspace = Workspace.open()

    async def _export():
        try:
            return await workspace.export_article(article_id)
        finally:
            await workspace.close()

    try:
        artifact = asyncio.run(_export())
    except NotFoundError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)

    path = artifact.write(output or workspace.export_directory)
    click.echo(click.style(f"Exported to {path}", fg="green"))
    click.echo(f"Summary: {artifact.document.summary}")
    logger.info("Article exported", extra={"article_id": article_id, "path": str(path)})


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from scribe.backend.core.config import get_app_config

        app_config = get_app_config()

        sections = [
            ("Application Settings (application.yaml)", app_config.application),
            ("Logging Settings (logging.yaml)", app_config.logging),
            ("Editor Settings (editor.yaml)", app_config.editor),
            ("Summary Agent (agents/summary_agent.yaml)", app_config.summary_agent),
        ]
        for title, section in sections:
            click.echo(f"{title}:")
            click.echo("-" * 40)
            _echo_mapping(section.model_dump(), indent=2)
            click.echo()

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def _echo_mapping(data: dict, indent: int) -> None:
    for key, value in data.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_mapping(value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})

    cmd = [sys.executable, "-m", "pytest"]

    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")

    cmd.append("-v")

    if coverage:
        cmd.extend(["--cov=scribe", "--cov-report=term-missing"])

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e '.[dev]'")
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    from scribe.backend.core.config import get_app_config

    application = get_app_config().application
    click.echo(application.name)
    click.echo("=" * 40)
    click.echo(f"Version: {application.version}")
    click.echo(f"Description: {application.description}")

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the summary server")
    click.echo("  --action editor   Open the terminal editor")
    click.echo("  --action list     List articles")
    click.echo("  --action trash    List trashed articles")
    click.echo("  --action restore  Restore a trashed article (--article-id)")
    click.echo("  --action purge    Delete expired trash now")
    click.echo("  --action export   Export an article as JSON (--article-id, --output)")
    click.echo("  --action config   Display configuration")
    click.echo("  --action test     Run test suite")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
