#!/usr/bin/env python3
"""
Run the VITAE API server.

Serves the ats-analyzer, resume-ai-helper and resume-save endpoints (plus the
template catalog) with uvicorn. Logs go to LOGS_PATH/serve_<timestamp>/api.log.

Examples:\n

    serve.py                         # Serve on 127.0.0.1:8000

    serve.py --host 0.0.0.0 --port 9000

    serve.py --provider openai       # Override LLM_PROVIDER for this run
"""

from pathlib import Path
from typing import Optional

import typer
import uvicorn
from typing_extensions import Annotated

from vitae.api.app import create_app
from vitae.api.logger import setup_api_logger
from vitae.contexts.persistence.store import ResumeStore
from vitae.utils.llm import get_provider
from vitae.utils.logger import session_log_dir


app = typer.Typer(
    help="Run the VITAE HTTP API",
    add_completion=False,
)


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", "-h", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on")] = 8000,
    provider: Annotated[
        Optional[str], typer.Option("--provider", help="LLM provider (gemini, openai, anthropic)")
    ] = None,
    model: Annotated[Optional[str], typer.Option("--model", help="Model name override")] = None,
    db_path: Annotated[
        Optional[Path], typer.Option("--db", help="SQLite database path (default: VITAE_DB_PATH)")
    ] = None,
):
    """Start the API server."""
    log_dir = session_log_dir("serve")
    log_file = setup_api_logger(log_dir)

    store = ResumeStore(db_path)
    api = create_app(provider_factory=lambda: get_provider(provider, model), store=store)

    typer.secho(f"\nServing VITAE API on http://{host}:{port}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Database: {store.db_path}")
    typer.echo(f"  Log:      {log_file}")

    uvicorn.run(api, host=host, port=port, log_level="info")


if __name__ == "__main__":
    app()
