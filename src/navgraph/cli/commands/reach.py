"""
Reach Command - Show which windows can be reached from the start window.
"""

import json
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...analysis.reachability import ReachabilityAnalyzer
from ..utils import echo_error, load_config, load_graph

console = Console()


@click.command()
@click.option("-i", "--input", "graph_file", help="Graph snapshot (defaults to the configured one)")
@click.option("-c", "--config", "config_file", type=click.Path(dir_okay=False), help="Path to navgraph.toml")
@click.option("--start", "start_window", help="Start window (defaults to the graph's start)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def reach(graph_file: Optional[str], config_file: Optional[str], start_window: Optional[str], as_json: bool):
    """Reachability and BFS depth of every window."""
    config = load_config(config_file)
    graph = load_graph(graph_file, config)
    if graph is None:
        sys.exit(1)

    if start_window and not graph.has_window(start_window):
        echo_error(f"Window not found: {start_window}")
        sys.exit(1)

    analyzer = ReachabilityAnalyzer(graph)
    start = analyzer.resolve_start(start_window)
    depths = analyzer.depths(start_window)

    if as_json:
        click.echo(json.dumps({
            "start": start,
            "reachable": {wid: d is not None for wid, d in depths.items()},
            "depths": depths,
        }, indent=2))
        return

    table = Table(title=f"Reachability from {start or '(empty graph)'}")
    table.add_column("Window", style="cyan")
    table.add_column("Reachable")
    table.add_column("Depth", justify="right")
    for wid, depth in sorted(depths.items(), key=lambda kv: (kv[1] is None, kv[1] or 0, kv[0])):
        if depth is None:
            table.add_row(wid, "[red]no[/red]", "-")
        else:
            table.add_row(wid, "[green]yes[/green]", str(depth))
    console.print(table)
