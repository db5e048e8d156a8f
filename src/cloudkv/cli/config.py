"""CLI: cloudkv config set|show|clear"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _load_config() -> dict:
    from cloudkv.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from cloudkv.cli.main import _save_config
    _save_config(cfg)


@click.group()
def config():
    """Credential and user configuration."""


@config.command("set")
@click.option("--app-id", required=True)
@click.option("--app-key", required=True)
@click.option("--user", "user_name", required=True, help="User the stored keys belong to")
@click.option("--base-url", default=None, help="Key-value service base URL")
def config_set(app_id: str, app_key: str, user_name: str, base_url: Optional[str]):
    """Save credentials to ~/.cloudkv/config.json."""
    cfg = _load_config()
    cfg.update({"app_id": app_id, "app_key": app_key, "user_name": user_name})
    if base_url:
        cfg["base_url"] = base_url
    _save_config(cfg)
    console.print(f"[green]Configured for user {user_name}.[/green]")


@config.command("show")
def config_show():
    """Show the current configuration (key masked)."""
    cfg = _load_config()
    if not cfg.get("app_id"):
        console.print("[yellow]Not configured. Run `cloudkv config set`.[/yellow]")
        return
    key = cfg.get("app_key", "")
    table = Table(title="cloudkv configuration")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("app_id", cfg["app_id"])
    table.add_row("app_key", key[:4] + "…" if key else "")
    table.add_row("user_name", cfg.get("user_name", ""))
    table.add_row("base_url", cfg.get("base_url", "(default)"))
    console.print(table)


@config.command("clear")
def config_clear():
    """Remove saved credentials."""
    _save_config({})
    console.print("[green]Configuration cleared.[/green]")
