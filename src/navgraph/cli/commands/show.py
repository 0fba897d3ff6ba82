"""
Show Command - Inspect one window and the transitions usable from it.
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.tree import Tree

from ..utils import echo_error, load_config, load_graph

console = Console()


@click.command()
@click.argument("window_id")
@click.option("-i", "--input", "graph_file", help="Graph snapshot (defaults to the configured one)")
@click.option("-c", "--config", "config_file", type=click.Path(dir_okay=False), help="Path to navgraph.toml")
def show(window_id: str, graph_file: Optional[str], config_file: Optional[str]):
    """
    Show a window's settings and outgoing transitions.

    \b
    Examples:
        navgraph show MainMenu
    """
    config = load_config(config_file)
    graph = load_graph(graph_file, config)
    if graph is None:
        sys.exit(1)

    node = graph.get_window(window_id)
    if node is None:
        echo_error(f"Window not found: {window_id}")
        sys.exit(1)

    marker = " [green](start)[/green]" if graph.start_node_id == node.id else ""
    tree = Tree(f"🪟 [bold]{node.id}[/bold]{marker}")

    settings = tree.add("Settings")
    settings.add(f"kind: {node.kind.value}")
    settings.add(f"layer: {node.layer.value} (level {node.level})")
    settings.add(f"content: {node.content_handle or '[yellow]none[/yellow]'}")
    settings.add(f"pause_host: {node.pause_host}  hide_below: {node.hide_below}  allow_back: {node.allow_back}")
    settings.add(f"cursor: {node.cursor_mode.value}")

    local = list(graph.transitions_from(node.id))
    local_branch = tree.add(f"Transitions ({len(local)})")
    for edge in local:
        local_branch.add(f"[cyan]{edge.trigger}[/cyan] → {edge.to_id} [dim]({edge.animation.value})[/dim]")

    global_edges = graph.global_transitions()
    global_branch = tree.add(f"Global transitions ({len(global_edges)})")
    for edge in global_edges:
        global_branch.add(f"[cyan]{edge.trigger}[/cyan] → {edge.to_id} [dim]({edge.animation.value})[/dim]")

    console.print(tree)
