"""Layout file command implementations."""

from pathlib import Path

import click

from pixelboard.core.layout import decode_matrix
from pixelboard.exceptions import PixelBoardError, format_error_for_display
from pixelboard.model_manager import PydanticPersistence
from pixelboard.models import ChannelOrder, LayoutDocument, LedMatrix


@click.group(name="layout")
def layout_group():
    """Layout file commands."""
    pass


@layout_group.command(name="inspect")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--order",
    type=click.Choice([order.value for order in ChannelOrder], case_sensitive=False),
    default=ChannelOrder.GRB.value,
    help="Channel order of the file (default: grb)",
)
@click.pass_obj
def inspect(obj: dict, path: Path, order: str):
    """Validate a layout file and show what it draws."""
    config = obj["config"]
    matrix = LedMatrix.create_empty(config.matrix_width, config.matrix_height)

    try:
        document = PydanticPersistence.load_json(path, LayoutDocument)
        decode_matrix(document.values, matrix, ChannelOrder(order.lower()), source=str(path))
    except PixelBoardError as e:
        user_message, recovery_hint = format_error_for_display(e)
        click.echo(f"Error: {user_message}", err=True)
        if recovery_hint:
            click.echo(recovery_hint, err=True)
        raise SystemExit(1)

    active = matrix.active_cells
    click.echo(f"{path.name}: {len(document)} values, {matrix.width}x{matrix.height} matrix")
    click.echo(f"Active LEDs: {len(active)} of {matrix.size}\n")
    for row in matrix.rows():
        click.echo("  " + "".join("#" if cell.active else "." for cell in row))

    colors = {cell.color.to_hex() for cell in active}
    if colors:
        click.echo(f"\nColors: {', '.join(sorted(colors))}")
