"""
Validate Command - CI gate for the window graph.
"""

import json
import sys
from typing import Optional

import click

from ...analysis.validator import GraphValidator
from ..utils import echo_success, exit_code_for, load_config, load_snapshot, print_findings


@click.command()
@click.option("-i", "--input", "graph_file", help="Graph snapshot (defaults to the configured one)")
@click.option("-c", "--config", "config_file", type=click.Path(dir_okay=False), help="Path to navgraph.toml")
@click.option("--json", "as_json", is_flag=True, help="Output findings as JSON")
@click.option("--strict", is_flag=True, help="Fail on warnings as well as errors")
def validate(graph_file: Optional[str], config_file: Optional[str], as_json: bool, strict: bool):
    """Check a built graph for structural problems."""
    config = load_config(config_file)
    snapshot = load_snapshot(graph_file, config)
    if snapshot is None:
        sys.exit(1)

    # The graph no longer holds what the builder dropped; its findings carry that.
    report = GraphValidator().report(snapshot.to_graph(), build_findings=snapshot.build_findings)
    code = exit_code_for(report.findings, strict or config.strict)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(code)

    if report.ok:
        echo_success("Validation passed!")
    else:
        print_findings(report.findings)
        click.echo(f"{len(report.errors)} errors, {len(report.warnings)} warnings")
    sys.exit(code)
