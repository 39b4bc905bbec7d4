from __future__ import annotations

import json
from typing import Optional

import typer

from mdata_client.app import MetadataClient
from mdata_client.errors import InvalidArgument

app = typer.Typer(help="Read and write instance metadata through the mdata-* tools.")


def _client(ctx: typer.Context) -> MetadataClient:
    return ctx.obj


def _guard(func, *args: str):
    try:
        return func(*args)
    except InvalidArgument as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback()
def main(
    ctx: typer.Context,
    bin_path: Optional[str] = typer.Option(None, "--bin-path", help="Prefix for the mdata-* binaries."),
    runner: Optional[str] = typer.Option(None, "--runner", help="Command runner: subprocess or inmemory."),
) -> None:
    config = {"bin_path": bin_path} if bin_path is not None else None
    try:
        ctx.obj = MetadataClient(config=config, runner=runner)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--runner") from exc


@app.command("list")
def list_keys(ctx: typer.Context) -> None:
    for key in _client(ctx).list():
        typer.echo(key)


@app.command()
def get(ctx: typer.Context, key: str = typer.Argument(..., help="Metadata key.")) -> None:
    value = _guard(_client(ctx).get, key)
    if value is None:
        raise typer.Exit(code=1)
    typer.echo(value)


@app.command()
def put(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Metadata key."),
    value: str = typer.Argument(..., help="Value to store."),
) -> None:
    if not _guard(_client(ctx).put, key, value):
        raise typer.Exit(code=1)


@app.command()
def delete(ctx: typer.Context, key: str = typer.Argument(..., help="Metadata key.")) -> None:
    if not _guard(_client(ctx).delete, key):
        raise typer.Exit(code=1)


@app.command()
def snapshot(ctx: typer.Context) -> None:
    data = _client(ctx).snapshot()
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    app()
