import asyncio
import logging
import sys
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from api import create_app
from config import Settings
from database import initialize_database

APP_NAME = "Book Service CLI"

logger = logging.getLogger(__name__)

console = Console()
app = typer.Typer(help=APP_NAME)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (defaults to HOST)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on (defaults to PORT)"),
):
    """Start the HTTP API with uvicorn."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(f"[bold green]🚀 Server running on http://localhost:{port}[/]")
    logger.info(f"Starting {settings.app_name} on {host}:{port} (database: {settings.database_file})")
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


@app.command("init-db")
def cli_init_db(
    database_file: Optional[str] = typer.Option(None, "--database-file", help="SQLite file (defaults to DATABASE_FILE)"),
):
    """Create the books table if it does not exist yet."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    db_file = database_file or settings.database_file

    async def _init() -> None:
        conn = await initialize_database(db_file)
        await conn.close()

    asyncio.run(_init())
    console.print(f"Database ready: {db_file}")


if __name__ == "__main__":
    if len(sys.argv) > 1:
        app()
    else:
        app(["serve"])
