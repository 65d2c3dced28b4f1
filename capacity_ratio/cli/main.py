"""
capacity-ratio CLI — inspect scoring curves and score nodes from the command line.

Usage:
    capacity-ratio status            Show the scoring configuration
    capacity-ratio validate-shape    Parse and validate a shape descriptor
    capacity-ratio evaluate          Evaluate a shape at given positions
    capacity-ratio score             Score nodes described in a JSON file
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config import CapacityRatioConfig, LoggingConfig, ScoringSettings, build_priority
from ..errors import ScoringError, ShapeParseError
from ..interpolation import BrokenLinearFunction
from ..logging import setup_logging
from ..parser import parse_shape
from ..shape import Domain, Shape
from ..types import NodeInfo, Resource

console = Console()
cli = typer.Typer(
    name="capacity-ratio",
    help="Requested-to-capacity ratio node scoring.",
    no_args_is_help=True,
)


@cli.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level"),
    log_format: str = typer.Option("console", "--log-format", help="console or json"),
):
    """Configure logging before running a command."""
    try:
        setup_logging(LoggingConfig(log_level=log_level.upper(), log_format=log_format))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)


@cli.command()
def status():
    """Show the scoring configuration loaded from the environment."""
    try:
        config = CapacityRatioConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("Shape", config.scoring.scoring_function_shape or "default (least requested)")
    table.add_row("Shape domain", config.scoring.shape_domain)
    table.add_row("Max priority", str(config.scoring.max_priority))
    table.add_row("Log level", config.logging.log_level)

    console.print(Panel(table, title="Scoring Configuration", border_style="blue"))


@cli.command("validate-shape")
def validate_shape(
    descriptor: str = typer.Argument(..., help="Shape descriptor, e.g. 0=1,1=0"),
    domain: str = typer.Option("normalized", "--domain", "-d", help="normalized or integer"),
    max_priority: int = typer.Option(10, "--max-priority", help="Upper y bound of the integer domain"),
):
    """Parse and validate a shape descriptor."""
    shape = _load_shape(descriptor, domain, max_priority)

    table = Table(title="Shape", box=box.ROUNDED)
    table.add_column("#", style="dim")
    table.add_column("x", style="bold")
    table.add_column("y")

    for i, (px, py) in enumerate(shape.points):
        table.add_row(str(i), _render(px), _render(py))

    console.print(table)
    console.print(f"[green]Valid shape[/green] with {len(shape)} point(s) in the {shape.domain.name} domain")


@cli.command()
def evaluate(
    descriptor: str = typer.Argument(..., help="Shape descriptor, e.g. 0=1,1=0"),
    positions: List[float] = typer.Argument(..., help="Positions to evaluate"),
    domain: str = typer.Option("normalized", "--domain", "-d", help="normalized or integer"),
    max_priority: int = typer.Option(10, "--max-priority", help="Upper y bound of the integer domain"),
):
    """Evaluate a shape at the given positions."""
    function = BrokenLinearFunction(_load_shape(descriptor, domain, max_priority))

    table = Table(title="Function Values", box=box.ROUNDED)
    table.add_column("p", style="bold")
    table.add_column("f(p)")

    for p in positions:
        table.add_row(str(p), _render(function(p)))

    console.print(table)


@cli.command()
def score(
    nodes_file: Path = typer.Option(..., "--nodes", "-n", help="JSON file with a list of nodes"),
    cpu: int = typer.Option(0, "--cpu", help="Requested CPU in millicores"),
    memory: int = typer.Option(0, "--memory", "-m", help="Requested memory in bytes"),
    shape: Optional[str] = typer.Option(None, "--shape", "-s", help="Shape descriptor"),
    domain: Optional[str] = typer.Option(None, "--domain", "-d", help="normalized or integer"),
    max_priority: Optional[int] = typer.Option(None, "--max-priority", help="Highest node score"),
    output_json: bool = typer.Option(False, "--json", help="Output scores as JSON"),
):
    """Score candidate nodes for a workload requesting CPU and memory."""
    try:
        env_config = CapacityRatioConfig.from_env()
        scoring = ScoringSettings(
            max_priority=max_priority if max_priority is not None else env_config.scoring.max_priority,
            scoring_function_shape=shape if shape is not None else env_config.scoring.scoring_function_shape,
            shape_domain=domain or env_config.scoring.shape_domain,
        )
        config = CapacityRatioConfig(scoring=scoring, logging=env_config.logging)
        priority = build_priority(config)
    except ShapeParseError as e:
        console.print(f"[red]Invalid shape:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    try:
        raw_nodes = json.loads(nodes_file.read_text())
        nodes = [NodeInfo.from_dict(item) for item in raw_nodes]
        request = Resource(milli_cpu=cpu, memory=memory)
    except (OSError, ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error:[/red] cannot load nodes from {escape(str(nodes_file))}: {escape(str(e))}")
        raise typer.Exit(code=1)

    try:
        results = priority.score_nodes(request, nodes)
    except ScoringError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if output_json:
        typer.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    table = Table(title="Node Scores", box=box.ROUNDED)
    table.add_column("Node", style="bold")
    table.add_column("Score")

    for result in results:
        table.add_row(result.host, f"{result.score}/{priority.max_priority}")

    console.print(table)


def _load_shape(descriptor: str, domain: str, max_priority: int) -> Shape:
    try:
        if domain == "integer":
            target = Domain.integer(max_priority)
        elif domain == "normalized":
            target = Domain.normalized()
        else:
            raise ValueError(f"unknown domain '{domain}', expected normalized or integer")
        return parse_shape(descriptor, target)
    except ShapeParseError as e:
        console.print(f"[red]Invalid shape:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _render(value) -> str:
    """Render an exact value compactly."""
    if value.denominator == 1:
        return str(value.numerator)
    return f"{float(value):g}"


if __name__ == "__main__":
    cli()
