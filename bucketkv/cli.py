import logging
from typing import Optional

import typer
import uvicorn

from .config import PORT, get_settings
from .logging_config import configure_logging
from .main import create_app

logger = logging.getLogger(__name__)

app = typer.Typer(name="bucketkv", help="Multi-tenant key-value store over HTTP")

@app.callback()
def main() -> None:
    """bucketkv command line."""

@app.command()
def serve(
    db: Optional[str] = typer.Option(None, "--db", help="Path to the SQLite database file"),
    host: Optional[str] = typer.Option(None, help="Interface to listen on"),
    log_level: Optional[str] = typer.Option(None, help="DEBUG, INFO, WARNING or ERROR"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log lines"),
) -> None:
    """Start the HTTP server on port 8080."""
    settings = get_settings()
    overrides = {
        name: value
        for name, value in (("db_path", db), ("host", host), ("log_level", log_level))
        if value is not None
    }
    if json_logs:
        overrides["log_json"] = True
    settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level, json_output=settings.log_json)
    application = create_app(settings)

    logger.info("Starting bucketkv server on %s:%d", settings.host, PORT)
    uvicorn.run(application, host=settings.host, port=PORT, log_config=None)
