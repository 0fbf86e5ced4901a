"""sshconfgen CLI."""

import logging
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from sshconfgen.config import GeneratorConfig, get_config_template, load_config
from sshconfgen.errors import InventoryError, NoHostsError, WriteFailure
from sshconfgen.output import find_failed_hosts, read_config
from sshconfgen.pipeline import run
from sshconfgen.translator import translate as translate_args

app = typer.Typer(help="sshconfgen - OpenSSH client config from inventory data")
console = Console(stderr=True)

CONFIG_FILE = "sshconfgen.yaml"


def setup_logging(verbose: bool = False):
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    logging.getLogger("paramiko").setLevel(logging.WARNING)


def get_config(path: Path | None) -> GeneratorConfig:
    """Load the config file, or fall back to defaults when none exists."""
    config_path = path or Path(CONFIG_FILE)
    if not config_path.exists():
        if path is not None:
            console.print(f"[red]Error:[/red] {config_path} not found.")
            raise typer.Exit(1)
        return GeneratorConfig()
    try:
        return load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] invalid config {config_path}: {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def init():
    """Write a configuration template in the current directory."""
    config_file = Path(CONFIG_FILE)

    if config_file.exists():
        console.print(f"[yellow]Warning:[/yellow] {CONFIG_FILE} already exists.")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit(0)

    config_file.write_text(get_config_template())
    console.print(f"[green]Created {CONFIG_FILE}.[/green]")
    console.print(f"\nEdit {CONFIG_FILE} to point at your inventory export.")


@app.command()
def generate(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
    inventory: Path | None = typer.Option(None, "--inventory", "-i", help="Inventory export"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Destination ssh_config"),
    stdout: bool = typer.Option(False, "--stdout", help="Print instead of writing a file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Generate an ssh_config from the inventory."""
    setup_logging(verbose)
    config = get_config(config_path)

    try:
        result = run(config, inventory=inventory, output=output, write=not stdout)
    except (NoHostsError, InventoryError, WriteFailure) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if stdout:
        typer.echo(result.text, nl=False)
    else:
        console.print(f"[green]Wrote {len(result.blocks)} host(s) to {result.path}[/green]")

    if result.skipped_hosts:
        console.print(f"Skipped (connection type): {', '.join(result.skipped_hosts)}")
    if result.failed_hosts:
        console.print(
            f"[yellow]Warning:[/yellow] check connection arguments of: "
            f"{', '.join(result.failed_hosts)}"
        )


@app.command()
def translate(
    args: str = typer.Argument(..., help="Argument string, e.g. -- '-i key -p 2222'"),
):
    """Show the ssh_config directives for ssh command-line arguments."""
    result = translate_args(args)
    if result.failed:
        console.print(f"[red]Error:[/red] {escape(str(result.error))}")
        raise typer.Exit(1)

    for option in result.options:
        typer.echo(option.line())


@app.command()
def check(
    path: Path = typer.Argument(..., help="ssh_config file to inspect"),
):
    """List the hosts of a generated ssh_config."""
    if not path.exists():
        console.print(f"[red]Error:[/red] {path} not found.")
        raise typer.Exit(1)

    text = path.read_text()
    hosts = read_config(text)
    failed = set(find_failed_hosts(text))

    table = Table()
    table.add_column("Host")
    table.add_column("HostName")
    table.add_column("User")
    table.add_column("Port")
    table.add_column("Status")

    for host in hosts:
        status = "[red]check arguments[/red]" if host.pattern in failed else "ok"
        table.add_row(
            host.pattern,
            host.get("hostname") or "",
            host.get("user") or "",
            host.get("port") or "",
            status,
        )
    Console().print(table)

    if failed:
        console.print(f"[yellow]{len(failed)} host(s) need attention.[/yellow]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
