"""Link resolution CLI command."""

from __future__ import annotations

import click
from rich.console import Console

from entitylinks.cli.main import Context, pass_context

console = Console()


@click.command()
@click.argument("type_name")
@click.argument("id", type=int)
@click.option(
    "--include",
    "-i",
    default=None,
    help="Comma-separated types to include (empty string: none)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@pass_context
def resolve(
    ctx: Context,
    type_name: str,
    id: int,
    include: str | None,
    output_format: str,
) -> None:
    """
    Resolve the linked entities of a dataset record.

    Without --include, every eager link is followed and lazy links are
    skipped. With --include, only the named types are followed and
    their lazy links are evaluated.

    Examples:

        # Default links of post 1001
        entitylinks resolve post 1001

        # Only users and (lazy) comments
        entitylinks resolve post 1001 --include user,comment

        # No links at all
        entitylinks resolve post 1001 --include ""
    """
    import json

    from rich.table import Table

    from entitylinks.core.errors import EntityLinksError
    from entitylinks.params import fetch_include

    try:
        resolver = ctx.resolver
    except click.ClickException as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    params = {} if include is None else {"include": include}
    try:
        whitelist = fetch_include(params, resolver.registry.names())
        links = resolver.resolve_by_id(type_name, id, whitelist=whitelist)
    except EntityLinksError as e:
        console.print(f"[red]Resolution error:[/red] {e}")
        raise SystemExit(1)

    if output_format == "json":
        click.echo(json.dumps([link.to_dict() for link in links], indent=2, default=str))
        return

    if not links:
        console.print(f"[yellow]No links for {type_name} {id}[/yellow]")
        return

    table = Table(title=f"Links of {type_name} {id}")
    table.add_column("Type", style="cyan")
    table.add_column("Id")
    table.add_column("Data", style="dim")

    for link in links:
        table.add_row(link.type, link.id, json.dumps(link.data, default=str))

    console.print(table)
