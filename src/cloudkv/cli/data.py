"""CLI: cloudkv get|set|delete"""

import base64
import binascii
import json

import click
from rich.console import Console

from cloudkv.errors import InvalidValueShape
from cloudkv.models.types import ValueType
from cloudkv.models.value import StoredValue
from cloudkv.transport.envelope import extract

console = Console()

TYPE_NAMES = {
    "int": ValueType.INT32,
    "long": ValueType.INT64,
    "boolean": ValueType.BOOLEAN,
    "float": ValueType.FLOAT,
    "double": ValueType.DOUBLE,
    "string": ValueType.STRING,
    "bytes": ValueType.BYTES,
}

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def _get_client():
    from cloudkv.cli.main import _get_client
    return _get_client()


def _run(coro):
    from cloudkv.cli.main import _run
    return _run(coro)


def _parse(value_type: ValueType, text: str):
    """Turn one command-line token into a Python value of the given type."""
    if value_type in (ValueType.INT32, ValueType.INT64):
        return int(text)
    if value_type is ValueType.BOOLEAN:
        lowered = text.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"not a boolean: {text!r}")
    if value_type in (ValueType.FLOAT, ValueType.DOUBLE):
        return float(text)
    if value_type is ValueType.BYTES:
        return base64.b64decode(text, validate=True)
    return text


def _jsonable(value):
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    return value


@click.command("get")
@click.argument("key")
@click.option("-t", "--type", "type_name", type=click.Choice(sorted(TYPE_NAMES)), default="string")
@click.option("--array", is_flag=True, help="Read the array form of the type")
@click.option("--json-output", "--json", is_flag=True)
def get_cmd(key, type_name, array, json_output):
    """Read a typed value."""

    async def _get():
        client = _get_client()
        try:
            result = await client.fetch(key)
            value = extract(result.envelope, TYPE_NAMES[type_name], array) if result.ok else None
        finally:
            await client.close()
        return value

    value = _run(_get())
    if json_output:
        click.echo(json.dumps({"key": key, "value": _jsonable(value)}))
    elif value is None:
        console.print(f"[yellow]{key}: absent[/yellow]")
    else:
        console.print(f"{key} = {_jsonable(value)!r}")
    if value is None:
        raise SystemExit(1)


@click.command("set")
@click.argument("key")
@click.argument("values", nargs=-1, required=True)
@click.option("-t", "--type", "type_name", type=click.Choice(sorted(TYPE_NAMES)), default="string")
@click.option("--array", is_flag=True, help="Store all VALUES as one array")
def set_cmd(key, values, type_name, array):
    """Write a typed value (bytes are given as base64)."""
    value_type = TYPE_NAMES[type_name]
    if not array and len(values) != 1:
        raise click.UsageError("Exactly one value is required without --array.")
    try:
        parsed = [_parse(value_type, v) for v in values]
        stored = StoredValue(value_type, parsed if array else parsed[0], is_array=array)
    except (ValueError, binascii.Error, InvalidValueShape) as e:
        raise click.BadParameter(str(e), param_hint="VALUES")

    async def _set():
        client = _get_client()
        try:
            await client.put_value(key, stored)
        finally:
            await client.close()

    with console.status("Storing..."):
        _run(_set())
    console.print(f"[green]{key} stored.[/green]")


@click.command("delete")
@click.argument("key")
def delete_cmd(key):
    """Delete a key."""

    async def _delete():
        client = _get_client()
        try:
            await client.delete_key(key)
        finally:
            await client.close()

    with console.status("Deleting..."):
        _run(_delete())
    console.print(f"[green]{key} deleted.[/green]")
