"""Typer CLI entrypoints."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Annotated, Any, TypeVar

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mcsm.config.settings import ClientSettings, load_settings
from mcsm.errors import CallFailedError, InvalidResponseError, JSONRPCError
from mcsm.logging_utils import configure_logging
from mcsm.notifications import CANONICAL_NOTIFICATIONS
from mcsm.server import MinecraftServer

app = typer.Typer(name="mcsm", help="Minecraft server management client", add_completion=False)
console = Console()

T = TypeVar("T")

UrlOption = Annotated[str | None, typer.Option("--url", "-u", help="Management server WebSocket URL")]
TokenOption = Annotated[str | None, typer.Option("--token", "-t", help="Management API token")]


def _settings(url: str | None, token: str | None) -> ClientSettings:
    configure_logging()
    return load_settings(url=url, token=token)


def _run(settings: ClientSettings, action: Callable[[MinecraftServer], Awaitable[T]]) -> T:
    async def _main() -> T:
        server = await MinecraftServer.from_settings(settings)
        try:
            return await action(server)
        finally:
            await server.close()

    try:
        return asyncio.run(_main())
    except (JSONRPCError, CallFailedError, InvalidResponseError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except OSError as e:
        console.print(f"[red]Could not connect to {settings.url}:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


@app.command()
def status(url: UrlOption = None, token: TokenOption = None) -> None:
    """Print the server status."""
    settings = _settings(url, token)
    state = _run(settings, lambda server: server.get_status())

    console.print(f"[bold]Version:[/bold] {state.version.name} (protocol {state.version.protocol})")
    console.print(f"[bold]Started:[/bold] {'yes' if state.started else 'no'}")
    console.print(f"[bold]Players online:[/bold] {len(state.players)}")
    for player in state.players:
        console.print(f"  {player.name or '<unknown>'} [dim]{player.id or ''}[/dim]")


@app.command()
def allowlist(
    url: UrlOption = None,
    token: TokenOption = None,
    add: Annotated[list[str] | None, typer.Option("--add", help="Player name to add")] = None,
    remove: Annotated[list[str] | None, typer.Option("--remove", help="Player name to remove")] = None,
) -> None:
    """Show or edit the allowlist."""
    settings = _settings(url, token)

    async def _action(server: MinecraftServer) -> list[Any]:
        players = server.allowlist()
        if add:
            await players.add(add)
        if remove:
            await players.remove(remove)
        return await players.get()

    entries = _run(settings, _action)
    if not entries:
        console.print("[dim]Allowlist is empty[/dim]")
        return
    table = Table("Name", "UUID")
    for player in entries:
        table.add_row(player.name or "", player.id or "")
    console.print(table)


@app.command()
def gamerules(
    url: UrlOption = None,
    token: TokenOption = None,
    set_rule: Annotated[
        tuple[str, str] | None, typer.Option("--set", metavar="KEY VALUE", help="Update one game rule")
    ] = None,
) -> None:
    """List game rules, or update one."""
    settings = _settings(url, token)

    if set_rule is not None:
        key, value = set_rule
        rule = _run(settings, lambda server: server.update_game_rule(key, value))
        console.print(f"[green]{rule.key}[/green] = {rule.value}")
        return

    rules = _run(settings, lambda server: server.get_game_rules())
    table = Table("Key", "Type", "Value")
    for key in sorted(rules):
        rule = rules[key]
        table.add_row(rule.key, str(rule.type), str(rule.value))
    console.print(table)


@app.command()
def watch(url: UrlOption = None, token: TokenOption = None) -> None:
    """Print server notifications until interrupted."""
    settings = _settings(url, token)

    async def _action(server: MinecraftServer) -> None:
        for notification in CANONICAL_NOTIFICATIONS:
            server.on(notification, _printer(str(notification)))
        server.on("error", lambda error: console.print(f"[red]error[/red]: {error}"))
        closed = asyncio.Event()
        server.connection.on("close", lambda code, reason: closed.set())
        console.print(f"[bold]Watching {settings.url}[/bold] (Ctrl+C to stop)")
        await closed.wait()

    try:
        _run(settings, _action)
    except KeyboardInterrupt:
        logger.info("mcsm.cli.watch_interrupted")


def _printer(name: str) -> Callable[..., None]:
    def _print(*args: Any) -> None:
        rendered = ", ".join(arg.model_dump_json() if hasattr(arg, "model_dump_json") else str(arg) for arg in args)
        console.print(f"[blue]{name}[/blue] {rendered}")

    return _print


__all__ = ["app"]
