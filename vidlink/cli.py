from __future__ import annotations

import logging
from pathlib import Path

import typer
from dotenv import load_dotenv

from vidlink.config import ExtractConfig
from vidlink.errors import ConfigError
from vidlink.runner import EXIT_ERROR, EXIT_NOT_FOUND, EXIT_OK, dump_payload, extract_from_text, not_found_payload, run_sync
from vidlink.strategies.registry import ALL_STRATEGIES

app = typer.Typer(add_completion=False, help="Extract direct video URLs from public social media pages")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load_config() -> ExtractConfig:
    load_dotenv()
    try:
        return ExtractConfig.from_env()
    except ConfigError as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=EXIT_ERROR)


@app.command()
def extract(
    url: str = typer.Argument(..., help="Public page URL (http/https)"),
    timeout: float | None = typer.Option(None, "--timeout", help="Fetch timeout in seconds. Default: 15"),
    relay: str | None = typer.Option(None, "--relay", help='Relay URL template containing "{url}"'),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    _setup_logging(verbose)
    config = _load_config()
    if timeout is not None:
        if timeout <= 0:
            typer.echo("--timeout must be positive", err=True)
            raise typer.Exit(code=EXIT_ERROR)
        config.timeout_seconds = timeout
    if relay:
        config.relay_url = relay
        try:
            config.validate()
        except ConfigError as exc:
            typer.echo(f"Invalid configuration: {exc}", err=True)
            raise typer.Exit(code=EXIT_ERROR)

    code, payload = run_sync(url, config)
    typer.echo(dump_payload(payload))
    raise typer.Exit(code=code)


@app.command()
def scan(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Saved HTML page"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run the extractor over a page saved to disk."""
    _setup_logging(verbose)
    config = _load_config()
    text = path.read_text(encoding="utf-8", errors="replace")
    outcome = extract_from_text(str(path), text, config)
    if outcome.found:
        typer.echo(dump_payload(outcome.to_payload()))
        raise typer.Exit(code=EXIT_OK)
    typer.echo(dump_payload(not_found_payload(outcome)))
    raise typer.Exit(code=EXIT_NOT_FOUND)


@app.command("strategies")
def list_strategies() -> None:
    for name in ALL_STRATEGIES:
        typer.echo(name)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
) -> None:
    import uvicorn

    from vidlink.api import create_app

    _setup_logging(False)
    config = _load_config()
    uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    app()
