"""Main CLI entry point for entitylinks."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler

from entitylinks import __version__
from entitylinks.config import DEFAULT_CONFIG

console = Console()

DEFAULT_DATASET = "dataset.yml"


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.dataset_path: Path | None = None
        self.verbose: bool = False
        self._codec: Any = None
        self._dataset: Any = None
        self._resolver: Any = None

    @property
    def codec(self) -> Any:
        """Lazy-load codec from config file and environment."""
        if self._codec is None:
            from entitylinks.config import load_config
            from entitylinks.core.codec import IdCodec
            from entitylinks.core.errors import InvalidArgumentError

            try:
                self._codec = IdCodec(load_config(self.config_path))
            except InvalidArgumentError as e:
                raise click.ClickException(str(e))
        return self._codec

    @property
    def dataset(self) -> Any:
        """Lazy-load dataset."""
        if self._dataset is None:
            import yaml
            from pydantic import ValidationError

            from entitylinks.core.errors import InvalidArgumentError
            from entitylinks.dataset import Dataset

            if not (self.dataset_path and self.dataset_path.exists()):
                raise click.ClickException(f"Dataset not found: {self.dataset_path}")
            try:
                self._dataset = Dataset.load(self.dataset_path)
            except (ValidationError, InvalidArgumentError, yaml.YAMLError) as e:
                raise click.ClickException(f"Invalid dataset {self.dataset_path}: {e}")
        return self._dataset

    @property
    def resolver(self) -> Any:
        """Resolver over the dataset's types."""
        if self._resolver is None:
            from entitylinks.core.resolver import LinkResolver

            self._resolver = LinkResolver(self.dataset.build_registry(), self.codec)
        return self._resolver


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.version_option(version=__version__, prog_name="entitylinks")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=False, path_type=Path),
    default=DEFAULT_CONFIG,
    help="Path to codec config YAML file",
)
@click.option(
    "-d",
    "--dataset",
    type=click.Path(exists=False, path_type=Path),
    default=DEFAULT_DATASET,
    help="Path to dataset YAML file",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@pass_context
def cli(ctx: Context, config: Path, dataset: Path, verbose: bool) -> None:
    """
    Entitylinks - Linked-entity resolution and id hashing.

    Encode and decode obfuscated ids, and resolve the links of
    entities described in a YAML dataset.
    """
    ctx.config_path = config
    ctx.dataset_path = dataset
    ctx.verbose = verbose
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


# Import and register subcommands
from entitylinks.cli.codec import decode, encode
from entitylinks.cli.resolve import resolve
from entitylinks.cli.validate import validate

cli.add_command(decode)
cli.add_command(encode)
cli.add_command(resolve)
cli.add_command(validate)


@cli.command()
@pass_context
def types(ctx: Context) -> None:
    """List entity types in the dataset."""
    from rich.table import Table

    try:
        dataset = ctx.dataset
    except click.ClickException as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if len(dataset) == 0:
        console.print("[yellow]No types declared[/yellow]")
        return

    table = Table(title="Entity Types")
    table.add_column("Type", style="cyan")
    table.add_column("Records", justify="right")
    table.add_column("Links")
    table.add_column("Lazy", style="dim")

    for entity_type in sorted(dataset, key=lambda t: t.name):
        table.add_row(
            entity_type.name,
            str(len(entity_type)),
            ", ".join(entity_type.link_targets) or "-",
            ", ".join(entity_type.lazy_targets) or "-",
        )

    console.print(table)


if __name__ == "__main__":
    cli()
