import asyncio
import json

import click


def _run(coro):
    """Run a store coroutine, turning store errors into a clean CLI failure."""
    from insomnia_store.errors import StoreError, format_error

    try:
        return asyncio.run(coro)
    except StoreError as exc:
        raise click.ClickException(format_error(exc)) from exc


def _open_store():
    from insomnia_store.log import setup_logging
    from insomnia_store.settings import get_settings
    from insomnia_store.store.local import LocalRecordStore

    settings = get_settings()
    setup_logging(settings.log_level)
    return LocalRecordStore(settings.resolve_data_dir(), project_id=settings.project_id)


@click.group()
def main() -> None:
    """insomnia-store - manage Insomnia collections stored as NDJSON files."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from INSOMNIA_MCP_HOST or 127.0.0.1).")
@click.option("--port", default=None, type=int, help="Bind port (default: from INSOMNIA_MCP_PORT or 3847).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the HTTP API server."""
    import uvicorn

    from insomnia_store.settings import get_settings

    settings = get_settings()

    uvicorn.run(
        "insomnia_store.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


@main.command()
def bootstrap() -> None:
    """Create a base environment for every collection that lacks one."""
    from insomnia_store.managers.collections import ensure_base_environments

    created = _run(ensure_base_environments(_open_store()))
    click.echo(f"Created {created} base environment(s).")


@main.command(name="list")
def list_command() -> None:
    """Print every collection as JSON."""
    from insomnia_store.managers.collections import list_collections

    collections = _run(list_collections(_open_store()))
    click.echo(json.dumps([c.model_dump(mode="json", by_alias=True) for c in collections], indent=2))


@main.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), default=None, help="Write to a file.")
def export(output: str | None) -> None:
    """Print all collections as an Insomnia v4 export document."""
    from insomnia_store.converters import to_insomnia_export
    from insomnia_store.managers.collections import list_collections

    document = to_insomnia_export(_run(list_collections(_open_store())))
    text = json.dumps(document, indent=2)
    if output is None:
        click.echo(text)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(text + "\n")
    click.echo(f"Exported {len(document['resources'])} resource(s) to {output}.")


if __name__ == "__main__":
    main()
