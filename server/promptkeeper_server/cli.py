"""Promptkeeper CLI"""

import asyncio
import logging
from typing import Optional

import typer

from .config import get_settings
from .core.database import create_db_engine, init_db
from .core.exceptions import ConfigurationError
from .core.seed import seed_from_settings

app = typer.Typer(
    name="promptkeeper",
    help="Promptkeeper CLI - prompt library database and demo data tools",
    no_args_is_help=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr with timestamps."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command("init-db")
def init_db_command():
    """Create the folders and prompts tables"""
    settings = get_settings()
    configure_logging(settings.log_level)
    engine = create_db_engine(settings.database_url)
    try:
        init_db(engine)
    except Exception as e:
        typer.secho(f"Error: {str(e)}", fg=typer.colors.RED, bold=True)
        raise typer.Exit(1)
    finally:
        engine.dispose()

    typer.secho("✓ Database schema ready", fg=typer.colors.GREEN, bold=True)


@app.command()
def seed(
    block_size: Optional[int] = typer.Option(
        None,
        "--block-size",
        "-b",
        help="Consecutive prompts given to each demo user (defaults to SEED_BLOCK_SIZE)",
    ),
):
    """Create demo users in Clerk and reseed the prompts table

    Every existing prompt is deleted first. Do not run two seeds at once
    against the same database.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    typer.echo("🌱 Starting seeding...")

    try:
        result = asyncio.run(seed_from_settings(settings, block_size=block_size))
    except ConfigurationError as e:
        typer.secho(f"Error: {str(e)}", fg=typer.colors.RED, bold=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.secho(f"❌ Error seeding database: {str(e)}", fg=typer.colors.RED, bold=True)
        raise typer.Exit(1)

    typer.secho("✅ Seeding completed successfully", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  - Users: {', '.join(result.user_ids)}")
    typer.echo(f"  - Prompts cleared: {result.prompts_cleared}")
    typer.echo(f"  - Prompts inserted: {result.prompts_inserted}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the API server"""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run("promptkeeper_server.main:app", host=host, port=port, reload=reload)


@app.command()
def version():
    """Show Promptkeeper version"""
    from . import __version__
    typer.echo(f"Promptkeeper v{__version__}")


if __name__ == "__main__":
    app()
