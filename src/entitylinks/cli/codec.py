"""Id encoding CLI commands."""

from __future__ import annotations

import click
from rich.console import Console

from entitylinks.cli.main import Context, pass_context
from entitylinks.core.errors import EntityLinksError

console = Console()


@click.command()
@click.argument("type_name")
@click.argument("id", type=int)
@pass_context
def encode(ctx: Context, type_name: str, id: int) -> None:
    """
    Encode an integer id for a type.

    Examples:

        entitylinks encode user 42
    """
    try:
        console.print(ctx.codec.encode(type_name, id))
    except EntityLinksError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)


@click.command()
@click.argument("hashid")
@click.option(
    "--type",
    "-t",
    "type_name",
    help="Expected type (default: decode without type check)",
)
@pass_context
def decode(ctx: Context, hashid: str, type_name: str | None) -> None:
    """
    Decode a hashed id back to its integer.

    Examples:

        # Verify the id belongs to a user
        entitylinks decode Xk9Lp2 --type user

        # Decode without checking the type
        entitylinks decode Xk9Lp2
    """
    try:
        if type_name:
            console.print(ctx.codec.decode(type_name, hashid))
        else:
            console.print(ctx.codec.decode_untyped(hashid))
    except EntityLinksError as e:
        console.print(f"[red]Decode error:[/red] {e}")
        raise SystemExit(1)
