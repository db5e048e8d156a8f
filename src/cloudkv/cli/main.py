"""
cloudkv CLI — `cloudkv` command.

Commands:
  cloudkv config set|show|clear   Store credentials and user
  cloudkv get <key>               Read a typed value
  cloudkv set <key> <value>...    Write a typed value
  cloudkv delete <key>            Delete a key
"""

import asyncio
import json
from pathlib import Path

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install cloudkv[cli]")

from cloudkv.client import AsyncKVClient
from cloudkv.transport.http import DEFAULT_BASE_URL

console = Console()
CONFIG_FILE = Path.home() / ".cloudkv" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncKVClient:
    cfg = _load_config()
    if not cfg.get("app_id") or not cfg.get("app_key") or not cfg.get("user_name"):
        console.print("[red]Not configured. Run `cloudkv config set` first.[/red]")
        raise SystemExit(1)
    return AsyncKVClient(
        app_id=cfg["app_id"],
        app_key=cfg["app_key"],
        user_name=cfg["user_name"],
        base_url=cfg.get("base_url", DEFAULT_BASE_URL),
    )


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
def main():
    """cloudkv CLI — typed access to your cloud key-value store."""


from cloudkv.cli.config import config
from cloudkv.cli.data import delete_cmd, get_cmd, set_cmd

main.add_command(config)
main.add_command(get_cmd)
main.add_command(set_cmd)
main.add_command(delete_cmd)


if __name__ == "__main__":
    main()
