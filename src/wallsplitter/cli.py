"""Command Line Interface for Wall Splitter.

This module provides a simple CLI to split the walls of a plan, export the
per-room wall report and inspect a plan.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import EPSILON, MIN_SEGMENT_LENGTH, REPORT_FILENAME
from .core.errors import WallSplitterError
from .core.topology import build_room_graph, build_wall_adjacency
from .engine.api import run
from .io.parser import load_plan, save_plan
from .io.report import write_report
from .visualization.generator import generate_network_image

app = typer.Typer(
    name="wall-splitter",
    help="Split plan walls at intersections and room boundaries and report room wall areas",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def split(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    out: Path = typer.Option(Path(REPORT_FILENAME), "--out", "-o", help="Path to output report CSV"),
    plan_out: Optional[Path] = typer.Option(None, "--plan-out", help="Write the split plan JSON here"),
    image: Optional[Path] = typer.Option(None, "--image", help="Write a PNG of the split network here"),
    eps: float = typer.Option(EPSILON, "--eps", help="Point equality tolerance"),
    min_length: float = typer.Option(MIN_SEGMENT_LENGTH, "--min-length", help="Shortest wall to create"),
    relink: bool = typer.Option(True, "--relink/--no-relink", help="Re-derive room boundaries after splitting"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Split walls and export the room wall report."""
    _configure_logging(verbose)
    try:
        network, rooms = load_plan(str(plan))
        console.print(f"[green]✓[/green] Loaded {len(network)} walls and {len(rooms)} rooms from {plan}")

        result = run(network, rooms, eps=eps, min_length=min_length, relink=relink)

        created = sum(len(children) for children in result.split.lineage.values())
        console.print(
            f"[green]✓[/green] Split {len(result.split.lineage)} walls into {created} "
            f"({len(network)} active walls)"
        )

        write_report(result.report, out, result.rooms)
        rows = sum(len(r) for r in result.report.values())
        console.print(f"[green]✓[/green] Room wall data exported to {out} ({rows} rows)")

        if plan_out is not None:
            save_plan(network, result.rooms, str(plan_out))
            console.print(f"[green]✓[/green] Split plan saved to {plan_out}")

        if image is not None:
            if generate_network_image(network, image, result.split.split_points):
                console.print(f"[green]✓[/green] Image saved to {image}")
            else:
                console.print(f"[yellow]Image could not be generated: {image}[/yellow]")

        if result.diagnostics:
            table = Table(title=f"Skipped ({len(result.diagnostics)})")
            table.add_column("Kind", style="yellow")
            table.add_column("Subject", style="cyan")
            table.add_column("Message")
            for diagnostic in result.diagnostics:
                table.add_row(diagnostic.kind, diagnostic.subject, diagnostic.message)
            console.print(table)

    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except (ValueError, WallSplitterError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def info(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
):
    """Show information about a plan."""
    try:
        network, rooms = load_plan(str(plan))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]Plan Information: {plan}[/bold]")
    console.print()

    adjacency = build_wall_adjacency(rooms)

    console.print(f"[cyan]Walls: {len(network)}[/cyan]")
    wall_table = Table()
    wall_table.add_column("Wall ID", style="cyan")
    wall_table.add_column("Type", style="green")
    wall_table.add_column("Level")
    wall_table.add_column("Length", justify="right")
    wall_table.add_column("Height", justify="right")
    wall_table.add_column("Rooms", style="yellow")

    for wall in network.walls():
        length = f"{wall.segment.length:.2f}" if wall.segment is not None else "curved"
        wall_table.add_row(
            wall.id,
            wall.attributes.type_id,
            wall.attributes.level_id,
            length,
            f"{wall.attributes.height:.2f}",
            ", ".join(sorted(adjacency.get(wall.id, ()))) or "-",
        )
    console.print(wall_table)

    console.print(f"\n[cyan]Rooms: {len(rooms)}[/cyan]")
    room_table = Table()
    room_table.add_column("Number", style="cyan")
    room_table.add_column("Name", style="green")
    room_table.add_column("Loops", justify="center")
    room_table.add_column("Entries", justify="center")
    room_table.add_column("Closed", justify="center")

    for room in rooms:
        closed = all(room.is_loop_closed(i) for i in range(len(room.loops)))
        room_table.add_row(
            room.number,
            room.display_name,
            str(len(room.loops)),
            str(len(room.wall_ids())),
            "yes" if closed and room.loops else "no",
        )
    console.print(room_table)

    graph = build_room_graph(rooms)
    if graph.number_of_edges():
        console.print("\n[cyan]Rooms sharing walls:[/cyan]")
        for first, second, data in sorted(graph.edges(data=True)):
            console.print(f"  {first} - {second}: {', '.join(data['wall_ids'])}")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
