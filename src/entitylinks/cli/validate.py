"""Validation CLI command."""

from __future__ import annotations

import click
from rich.console import Console

from entitylinks.cli.main import Context, pass_context

console = Console()


@click.command()
@pass_context
def validate(ctx: Context) -> None:
    """
    Validate the codec configuration and dataset.

    Checks schema compliance and that every link field points at an
    existing record.

    Examples:

        entitylinks --dataset fixtures.yml validate
    """
    errors: list[str] = []

    console.print("[bold]Validating codec config...[/bold]")
    try:
        codec = ctx.codec
        console.print(f"  [green]✓[/green] Codec configured: min_length={codec.config.min_length}")
    except click.ClickException as e:
        errors.append(f"Codec configuration failed: {e.message}")
        console.print(f"  [red]✗[/red] Codec configuration failed: {e.message}")

    console.print("[bold]Validating dataset...[/bold]")
    dataset = None
    try:
        dataset = ctx.dataset
        console.print(f"  [green]✓[/green] Dataset loaded: {len(dataset)} types")
    except click.ClickException as e:
        errors.append(f"Dataset validation failed: {e.message}")
        console.print(f"  [red]✗[/red] Dataset validation failed")

    if dataset is not None:
        console.print("[bold]Checking link references...[/bold]")
        dangling = dataset.validate()
        for err in dangling:
            errors.append(err)
            console.print(f"  [red]✗[/red] {err}")
        if not dangling:
            console.print("  [green]✓[/green] All link references valid")

    console.print("\n[bold]Validation Summary[/bold]")
    console.print(f"  Errors: {len(errors)}")

    if errors:
        console.print("\n[red bold]Validation failed[/red bold]")
        raise SystemExit(1)

    console.print("\n[green bold]Validation passed[/green bold]")
