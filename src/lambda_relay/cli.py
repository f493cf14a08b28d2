"""
lambda-relay CLI.

Commands:
- send: Send a JSON payload to the local endpoint (curl-like)
- invoke: Run the serverless handler on an event file
- echo-server: Serve a local echo target for development
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .config import EndpointConfig, RelayConfig, default_config, load_config
from .lambda_function import handler
from .relay import Forwarder, ForwardSuccess, to_response
from .utils.logging import setup_logging

app = typer.Typer(
    name="lambda-relay",
    help="Forward serverless events to a local HTTP endpoint",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()


def _resolve_config(config_path: Optional[Path]) -> RelayConfig:
    """Load config file when given, otherwise defaults; env overrides apply to both."""
    if config_path is not None:
        return load_config(config_path)
    return default_config()


def _read_data(data: Optional[str]) -> str | None:
    """
    Resolve the payload text.

    Piped standard input wins over --data. A --data value starting with '@'
    names a file to read.
    """
    if not sys.stdin.isatty():
        piped = sys.stdin.read()
        if piped.strip():
            return piped

    if data is None:
        return None

    if data.startswith("@"):
        return Path(data[1:]).read_text(encoding="utf-8")

    return data


@app.command()
def send(
    data: Optional[str] = typer.Option(
        None, "--data", "-d", help="JSON payload, or @filename to read it from a file"
    ),
    header: list[str] = typer.Option(
        [], "--header", "-H", help="Extra header as 'Name: Value' (repeatable)"
    ),
    method: Optional[str] = typer.Option(None, "--method", "-X", help="GET or POST"),
    host: Optional[str] = typer.Option(None, "--host", help="Endpoint host"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Endpoint port"),
    path: Optional[str] = typer.Option(None, "--path", help="Endpoint path"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Dump request and response"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Log level"),
) -> None:
    """
    Send a JSON payload to the local endpoint and print the result.

    Data can be passed by one of:
    - --data '{"message": "hello"}'
    - --data @event.json
    - standard input, e.g. cat event.json | lambda-relay send

    If GET is specified as method, no payload is sent and --data is ignored.

    Example:
        lambda-relay send -d '{"a": 1}'
        lambda-relay send -d @event.json -H "X-Trace: 1" --port 9000
    """
    setup_logging(level="INFO" if verbose else log_level)

    try:
        relay_config = _resolve_config(config)

        overrides: dict[str, Any] = {
            "host": host,
            "port": port,
            "path": path,
            "method": method,
        }
        endpoint_data = relay_config.endpoint.model_dump()
        endpoint_data.update({k: v for k, v in overrides.items() if v is not None})
        endpoint_data["headers"] = [*endpoint_data["headers"], *header]
        endpoint_data["verbose"] = endpoint_data["verbose"] or verbose
        endpoint = EndpointConfig(**endpoint_data)

        # --data and standard input are ignored for GET
        text = _read_data(data) if endpoint.method == "POST" else None
        event = json.loads(text) if text is not None else {}

        result = asyncio.run(Forwarder(endpoint).forward(event))

    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Payload is not valid JSON: {escape(str(e))}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print_json(data=to_response(result))

    if not isinstance(result, ForwardSuccess):
        raise typer.Exit(1)


@app.command()
def invoke(
    event_file: Path = typer.Argument(..., help="JSON file holding the event"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Log level"),
) -> None:
    """
    Run the serverless handler on an event file, as the host runtime would.

    Example:
        lambda-relay invoke event.json
        lambda-relay invoke event.json --config relay.toml
    """
    try:
        relay_config = _resolve_config(config)
        setup_logging(
            level=log_level or relay_config.logging.level,
            log_file=relay_config.logging.log_file,
        )

        event = json.loads(event_file.read_text(encoding="utf-8"))
        response = asyncio.run(handler(event, config=relay_config.endpoint))

    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print_json(data=response)

    if response["statusCode"] != 200:
        raise typer.Exit(1)


@app.command("echo-server")
def echo_server(
    host: str = typer.Option("localhost", "--host", help="Bind host"),
    port: int = typer.Option(8080, "--port", "-p", help="Bind port"),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Log level"),
) -> None:
    """
    Serve a JSON echo target, standing in for the local endpoint.

    Example:
        lambda-relay echo-server
        lambda-relay echo-server --port 9000
    """
    import uvicorn

    from .web import create_app

    setup_logging(level=log_level)
    console.print(f"[green]Echo target listening on http://{host}:{port}/[/green]")

    try:
        uvicorn.run(create_app(), host=host, port=port, log_level=log_level.lower(), log_config=None)
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
