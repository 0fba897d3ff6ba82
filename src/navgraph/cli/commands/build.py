"""
Build Command - Rebuild the navigation graph from its registry.

Loads the registry and supplementary providers named in navgraph.toml (or on
the command line), builds and validates a fresh graph, and writes the
snapshot consumed by the other commands.
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from ...analysis.validator import GraphValidator
from ...core.builder import GraphBuilder
from ...core.errors import NavGraphError
from ...core.snapshot import GraphSnapshot
from ...registry.files import FileRegistry, FileTransitionProvider
from ..utils import echo_error, echo_success, exit_code_for, load_config, print_findings

console = Console()


@click.command()
@click.option("-c", "--config", "config_file", type=click.Path(dir_okay=False), help="Path to navgraph.toml")
@click.option("-r", "--registry", "registry_file", type=click.Path(exists=True, dir_okay=False),
              help="Registry document (overrides config)")
@click.option("-p", "--provider", "provider_files", multiple=True, type=click.Path(exists=True, dir_okay=False),
              help="Supplementary transitions document; repeatable (overrides config)")
@click.option("-o", "--output", "output_file", type=click.Path(dir_okay=False), help="Snapshot output path")
@click.option("--start", "start_window", help="Start window ID")
@click.option("--strict", is_flag=True, help="Fail on warnings as well as errors")
def build(
    config_file: Optional[str],
    registry_file: Optional[str],
    provider_files: Tuple[str, ...],
    output_file: Optional[str],
    start_window: Optional[str],
    strict: bool,
):
    """
    Build the window graph and write a snapshot.

    \b
    Examples:
      navgraph build
      navgraph build -r ui/windows.yaml -p ui/scenes/arena.yaml -o graph.json
    """
    config = load_config(config_file)

    registry_path = Path(registry_file) if registry_file else config.registry
    provider_paths = [Path(p) for p in provider_files] if provider_files else config.providers
    output_path = Path(output_file) if output_file else config.snapshot
    strict = strict or config.strict

    registry = FileRegistry(registry_path)
    try:
        registry.load()
    except NavGraphError as e:
        echo_error(str(e))
        sys.exit(1)

    providers = [FileTransitionProvider(p) for p in provider_paths]
    builder = GraphBuilder(start_node_id=config.start_window)
    result = builder.build(registry, providers, start_node_id=start_window)

    findings = GraphValidator().validate(result.graph, build_findings=result.findings)

    try:
        GraphSnapshot.from_graph(result.graph, result.findings).save(output_path)
    except OSError as e:
        echo_error(f"Failed to write snapshot: {e}")
        sys.exit(1)

    _print_stats(result)
    print_findings(findings)

    code = exit_code_for(findings, strict)
    if code == 0:
        echo_success(f"Graph written to {output_path}")
    else:
        echo_error(f"Graph written to {output_path} with problems")
    sys.exit(code)


def _print_stats(result) -> None:
    stats = result.stats
    table = Table(title="Window Graph", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Windows", str(stats.windows))
    table.add_row("Windows with content", str(stats.windows_with_content))
    table.add_row("Local transitions", str(stats.local_transitions))
    table.add_row("Global transitions", str(stats.global_transitions))
    table.add_row("Supplementary applied", str(stats.supplementary_applied))
    table.add_row("Supplementary skipped", str(stats.supplementary_skipped))
    table.add_row("Start window", result.graph.start_node_id or "[dim]unset[/dim]")
    table.add_row("Build time", f"{stats.build_time_ms:.1f} ms")
    console.print(table)
