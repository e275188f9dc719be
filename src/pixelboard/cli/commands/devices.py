"""Device command implementations."""

import asyncio

import click

from pixelboard.cli.backends import create_backend
from pixelboard.exceptions import format_error_for_display


@click.group(name="devices")
def devices_group():
    """Board discovery and sensor commands."""
    pass


@devices_group.command(name="list")
@click.pass_obj
def list_devices(obj: dict):
    """List connected boards."""
    backend = create_backend(obj["backend"], obj["devices"], obj["config"])

    try:
        devices = asyncio.run(backend.find_devices())
    except Exception as e:
        user_message, recovery_hint = format_error_for_display(e)
        click.echo(f"Error: {user_message}", err=True)
        if recovery_hint:
            click.echo(recovery_hint, err=True)
        raise SystemExit(1)

    if not devices:
        click.echo("No boards found.")
        return

    click.echo(f"Found {len(devices)} board(s):\n")
    for i, device in enumerate(devices, start=1):
        click.echo(f"  [{i}] {device}")


@devices_group.command(name="temps")
@click.argument("serial_number")
@click.pass_obj
def temps(obj: dict, serial_number: str):
    """Read the temperature sensors of the board with SERIAL_NUMBER."""
    backend = create_backend(obj["backend"], obj["devices"], obj["config"])

    try:
        readings = asyncio.run(backend.get_temperature(serial_number))
    except Exception as e:
        user_message, recovery_hint = format_error_for_display(e)
        click.echo(f"Error: {user_message}", err=True)
        if recovery_hint:
            click.echo(recovery_hint, err=True)
        raise SystemExit(1)

    click.echo(f"Temperatures for {serial_number}:")
    for i, value in enumerate(readings, start=1):
        click.echo(f"  Sensor {i}: {value:.2f} °C")
