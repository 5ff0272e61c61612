"""Command-line actor for typed API calls implemented with Typer."""

from __future__ import annotations

import asyncio
import dataclasses
import json
import sys
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Awaitable, Callable

import httpx
import typer

from packages.api_client import (
    ApiService,
    ErrorResponse,
    Failure,
    RequestOptions,
    Result,
    Success,
    TransportError,
)
from packages.api_shared.config import ApiClientSettings, load_settings
from packages.api_shared.logging import bind_context, configure_logging, fields

SUCCESS_EXIT_CODE = 0
ERROR_RESPONSE_EXIT_CODE = 3
TRANSPORT_ERROR_EXIT_CODE = 4


@dataclass(frozen=True)
class CliConfig:
    """Global CLI runtime options propagated to every call."""

    settings: ApiClientSettings
    client_name: str
    as_json: bool


def _make_transport() -> httpx.AsyncBaseTransport | None:
    """Return a transport override; ``None`` uses the network."""
    return None


def _serialize(value: Any) -> Any:
    """Convert result objects to JSON-serializable structures."""

    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date, Decimal, Path)):
        return str(value)
    if dataclasses.is_dataclass(value):
        return _serialize(dataclasses.asdict(value))
    if isinstance(value, dict):
        return {str(key): _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_serialize(item) for item in value]
    if hasattr(value, "model_dump"):
        return _serialize(value.model_dump(mode="python"))
    return str(value)


def _emit_output(result: Any, as_json: bool) -> None:
    """Render command output in requested format."""

    data = _serialize(result)
    if as_json:
        typer.echo(json.dumps(data, sort_keys=True, separators=(",", ":")))
        return
    if data is None:
        typer.echo("ok")
        return
    if isinstance(data, (dict, list)):
        typer.echo(json.dumps(data, indent=2, sort_keys=True))
        return
    typer.echo(str(data))


def _emit_error(error: object, as_json: bool) -> None:
    """Render call failures to stderr."""

    if as_json:
        payload: dict[str, Any] = {"error": str(error)}
        if isinstance(error, ErrorResponse):
            payload["status_code"] = error.status_code
            if error.has_messages:
                payload["messages"] = list(error.messages)
        typer.echo(json.dumps(payload, sort_keys=True), err=True)
        return
    typer.echo(f"error: {error}", err=True)


def _parse_query_params(values: list[str]) -> dict[str, str]:
    """Parse repeated ``key=value`` options preserving their order."""
    params: dict[str, str] = {}
    for item in values:
        key, separator, value = item.partition("=")
        if not separator or key == "":
            raise typer.BadParameter(f"expected key=value, got {item!r}")
        params[key] = value
    return params


def _parse_data(raw: str) -> Any:
    """Parse the POST payload given on the command line as JSON."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"--data is not valid JSON: {exc.msg}") from exc


def _run_command(
    cfg: CliConfig,
    invoke: Callable[[ApiService], Awaitable[Result[Any, Any]]],
) -> None:
    """Execute one API call and map outcomes to process semantics."""

    async def _execute() -> Result[Any, Any]:
        async with ApiService.from_settings(
            cfg.settings,
            client_name=cfg.client_name,
            transport=_make_transport(),
        ) as service:
            return await invoke(service)

    try:
        result = asyncio.run(_execute())
    except TransportError as exc:
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=TRANSPORT_ERROR_EXIT_CODE) from exc

    match result:
        case Failure(error=error):
            _emit_error(error, cfg.as_json)
            raise typer.Exit(code=ERROR_RESPONSE_EXIT_CODE)
        case Success(value=value):
            _emit_output(value, cfg.as_json)
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""

    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


app = typer.Typer(no_args_is_help=True, help="Typed API client command-line interface")


@app.callback()
def main(
    ctx: typer.Context,
    client: str | None = typer.Option(
        None, help="Logical client name (defaults to settings default_client_name)"
    ),
    base_url: str | None = typer.Option(None, help="Override the client base URL"),
    timeout: float | None = typer.Option(
        None, min=0.001, help="Override the request timeout in seconds"
    ),
    config: Path | None = typer.Option(None, help="Path to a YAML config file"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Load settings and store global options for all commands."""

    base_settings = load_settings(config_path=config)
    client_name = client or base_settings.default_client_name

    overrides: dict[str, Any] = {}
    if base_url is not None:
        overrides["base_url"] = base_url
    if timeout is not None:
        overrides["timeout_seconds"] = timeout
    settings = base_settings
    if overrides:
        settings = load_settings(
            cli_params={"clients": {client_name: overrides}},
            config_path=config,
        )

    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
        stream=sys.stderr,
    )
    bind_context(**{fields.CLIENT_NAME: client_name})

    ctx.obj = CliConfig(settings=settings, client_name=client_name, as_json=as_json)


@app.command("get")
def get_command(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Request URL or path under the base URL"),
    param: list[str] = typer.Option(
        [], "--param", "-p", help="Query parameter as key=value (repeatable)"
    ),
) -> None:
    """Issue one GET request and print the response payload."""
    cfg = _require_config(ctx)
    options = RequestOptions(query_params=_parse_query_params(param))
    _run_command(cfg, lambda service: service.get(url, Any, options))


@app.command("post")
def post_command(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Request URL or path under the base URL"),
    data: str = typer.Option(..., help="JSON payload wrapped as the envelope data"),
    with_result: bool = typer.Option(
        False, "--with-result", help="Print the decoded response payload"
    ),
    stream: bool = typer.Option(False, "--stream", help="Send the body as a chunked stream"),
) -> None:
    """Issue one POST request with an enveloped JSON body."""
    cfg = _require_config(ctx)
    payload = _parse_data(data)
    options = RequestOptions(stream_body=stream)
    if with_result:
        _run_command(
            cfg,
            lambda service: service.post_with_result(url, payload, Any, options),
        )
    else:
        _run_command(cfg, lambda service: service.post(url, payload, options))


if __name__ == "__main__":
    app()
