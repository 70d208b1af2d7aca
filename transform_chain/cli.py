"""CLI entry point for transform-chain."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table

from transform_chain.chain import TransformChain
from transform_chain.config import ChainConfig, load_config
from transform_chain.config.loader import DEFAULT_CONFIG_TEMPLATE
from transform_chain.errors import TransformChainError
from transform_chain.plugins import TransformLoader

app = typer.Typer(
    name="transform-chain",
    help="Run source files through a chain of filename-aware transforms.",
)

config_app = typer.Typer(help="Manage transform-chain configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: ChainConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _configure_logging(cfg: ChainConfig) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=_LOG_LEVELS[cfg.log_level], handlers=[handler], force=True)


def _get_config() -> ChainConfig:
    if _config is None:
        return load_config()
    return _config


def _build_chain(cfg: ChainConfig) -> TransformChain:
    try:
        return TransformLoader(cfg).build_chain()
    except TransformChainError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to transform_chain.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except TransformChainError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(_config)


@app.command()
def run(
    file: str = typer.Argument(..., help="Source file to transform"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write result to file"),
    as_name: str | None = typer.Option(
        None, "--as", help="Filename to report to the transforms (defaults to FILE)"
    ),
) -> None:
    """Transform a file through the configured chain."""
    cfg = _get_config()
    chain = _build_chain(cfg)
    filename = as_name or file

    try:
        code = Path(file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        rprint(f"[red]Error:[/red] Could not read '{file}': {e}")
        raise typer.Exit(1)

    if not chain.has_match(filename):
        rprint(f"[yellow]No transform matches {filename}; output is unchanged.[/yellow]", file=sys.stderr)

    result = chain.transform(code, filename)
    chain.notify_post_load_hooks(filename)

    if output:
        Path(output).write_text(str(result), encoding="utf-8")
        rprint(f"[green]Written to[/green] {output}")
    else:
        typer.echo(result, nl=False)


@app.command()
def match(
    file: str = typer.Argument(..., help="Filename to test against the chain"),
) -> None:
    """Show which configured transforms apply to a file."""
    cfg = _get_config()
    chain = _build_chain(cfg)

    table = Table(title=f"Transforms for {file}")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Matches")
    for i, transform in enumerate(chain, start=1):
        hit = transform.matches(file)
        table.add_row(str(i), transform.name or "-", "[green]yes[/green]" if hit else "[dim]no[/dim]")
    rprint(table)

    if not chain.has_match(file):
        raise typer.Exit(1)


@app.command("list")
def list_transforms() -> None:
    """List configured transforms and installed transform plugins."""
    cfg = _get_config()
    loader = TransformLoader(cfg)
    chain = _build_chain(cfg)

    table = Table(title=f"Transform chain ({len(chain)})")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Extensions", style="green")
    table.add_column("Verbose")
    table.add_column("Post-load hook")
    for i, transform in enumerate(chain, start=1):
        table.add_row(
            str(i),
            transform.name or "-",
            ", ".join(transform.extensions),
            "yes" if transform.verbose else "no",
            "yes" if transform.post_load_hook else "no",
        )
    rprint(table)

    plugins = loader.discover()
    if plugins:
        rprint(f"[bold]Installed plugins:[/bold] {', '.join(plugins)}")
    else:
        rprint("[dim]No transform plugins installed.[/dim]")


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default transform_chain.yaml in current directory."""
    target = Path("transform_chain.yaml")
    if target.exists() and not force:
        rprint("[yellow]transform_chain.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
