"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing, graph loading and findings output used by several
commands.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

import click

from ..config import NavGraphConfig
from ..core.errors import NavGraphError
from ..core.findings import Finding, Severity
from ..core.graph import NavigationGraph
from ..core.snapshot import GraphSnapshot


def echo_success(message: str) -> None:
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(verbose: bool) -> None:
    """Only the CLI installs handlers; the library just emits records."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="[%X]",
        )


def load_config(config_file: Optional[str]) -> NavGraphConfig:
    """Load navgraph.toml, exiting with a readable error if it is malformed."""
    try:
        if config_file:
            return NavGraphConfig.load(config_file)
        return NavGraphConfig.load()
    except NavGraphError as e:
        echo_error(str(e))
        raise SystemExit(1)


def load_snapshot(graph_file: Optional[str], config: NavGraphConfig) -> Optional[GraphSnapshot]:
    """
    Load a graph snapshot.

    Args:
        graph_file: Snapshot path, or None to use the configured one.
        config: Resolved configuration.

    Returns:
        The snapshot, or None if loading failed (an error is printed).
    """
    path = Path(graph_file) if graph_file else config.snapshot

    if not path.exists():
        echo_error(f"Graph snapshot not found: {path}")
        echo_info("Run 'navgraph build' first to create it.")
        return None

    try:
        return GraphSnapshot.load(path)
    except NavGraphError as e:
        echo_error(f"Failed to load graph: {e}")
        return None


def load_graph(graph_file: Optional[str], config: NavGraphConfig) -> Optional[NavigationGraph]:
    """Load a snapshot and rebuild its finalized graph."""
    snapshot = load_snapshot(graph_file, config)
    return snapshot.to_graph() if snapshot is not None else None


def print_findings(findings: Iterable[Finding]) -> None:
    for finding in findings:
        if finding.severity is Severity.ERROR:
            echo_error(f"[{finding.code.value}] {finding.message}")
        else:
            echo_warning(f"[{finding.code.value}] {finding.message}")


def exit_code_for(findings: List[Finding], strict: bool) -> int:
    """1 when errors exist, or any finding at all in strict mode."""
    if any(f.is_error for f in findings):
        return 1
    if strict and findings:
        return 1
    return 0
