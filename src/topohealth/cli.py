"""topohealth CLI.

Command-line interface for link health correlation and path queries.
Uses Click for command parsing and Rich for output formatting.
"""

import json
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env file if present
load_dotenv()
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from topohealth.analysis.correlator import LinkCorrelator
from topohealth.analysis.filters import FilterCriteria, filter_links
from topohealth.config import get_settings
from topohealth.errors import TopoHealthError
from topohealth.graph.compute import compute_path
from topohealth.graph.types import WeightingStrategy
from topohealth.logging import set_global_log_level
from topohealth.model.loader import DocumentLoader
from topohealth.model.topology import HealthStatus, TopologyResult
from topohealth.parsers.bandwidth import format_bandwidth, tier_label

console = Console()

STRATEGY_CHOICES = [s.value for s in WeightingStrategy]

HEALTH_STYLES = {
    HealthStatus.HEALTHY: "green",
    HealthStatus.DRIFT_HIGH: "red",
    HealthStatus.MISSING_TELEMETRY: "yellow",
    HealthStatus.MISSING_ISIS: "magenta",
}


def _fail(e: TopoHealthError) -> None:
    console.print(f"[bold red]Error:[/bold red] {e.message}")
    if e.details:
        console.print(f"[dim]Details: {e.details}[/dim]")
    raise SystemExit(1)


def _correlate(snapshot_file: Path, isis_file: Path, drift_threshold: float | None) -> TopologyResult:
    settings = get_settings()
    threshold = drift_threshold if drift_threshold is not None else settings.drift_threshold_pct
    snapshot, isis = DocumentLoader().load(snapshot_file, isis_file)
    return LinkCorrelator(threshold).correlate(snapshot, isis)


def _fmt(value: float | None, digits: int = 1) -> str:
    return "-" if value is None else f"{value:.{digits}f}"


@click.group()
@click.version_option(package_name="topohealth-platform")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
def main(log_level: str | None) -> None:
    """Topology health correlation.

    Reconciles serviceability, telemetry and IS-IS data into per-link
    health records and answers shortest path queries.
    """
    set_global_log_level(log_level or get_settings().log_level)


@main.command("analyze")
@click.argument("snapshot_file", type=click.Path(exists=True, path_type=Path))
@click.argument("isis_file", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.option(
    "--health",
    "health_statuses",
    type=click.Choice([s.value for s in HealthStatus]),
    multiple=True,
    help="Only list links with this health status (repeatable)",
)
@click.option("--search", default="", help="Only list links matching this text")
@click.option("--drift-threshold", type=float, default=None, help="Drift threshold in percent")
def analyze(
    snapshot_file: Path,
    isis_file: Path,
    as_json: bool,
    health_statuses: tuple[str, ...],
    search: str,
    drift_threshold: float | None,
) -> None:
    """Correlate a snapshot with an IS-IS database.

    SNAPSHOT_FILE: Serviceability/telemetry snapshot JSON
    ISIS_FILE: IS-IS database JSON
    """
    try:
        result = _correlate(snapshot_file, isis_file, drift_threshold)
    except TopoHealthError as e:
        _fail(e)

    criteria = FilterCriteria(
        health_statuses=frozenset(HealthStatus(s) for s in health_statuses),
        search_query=search,
    )
    links = filter_links(result.topology, criteria)

    if as_json:
        data = result.model_dump(mode="json")
        data["topology"] = [link.model_dump(mode="json") for link in links]
        click.echo(json.dumps(data, indent=2))
        return

    summary = result.summary
    summary_table = Table(title="Link Health", show_header=True, header_style="bold cyan")
    summary_table.add_column("Status", style="dim")
    summary_table.add_column("Links", justify="right")
    summary_table.add_row("Total", str(summary.total_links))
    summary_table.add_row("[green]Healthy[/green]", str(summary.healthy))
    summary_table.add_row("[red]Drift high[/red]", str(summary.drift_high))
    summary_table.add_row("[yellow]Missing telemetry[/yellow]", str(summary.missing_telemetry))
    summary_table.add_row("[magenta]Missing IS-IS[/magenta]", str(summary.missing_isis))
    console.print(summary_table)
    console.print()

    stats = result.bandwidth_stats
    bw_table = Table(title="Bandwidth", show_header=True, header_style="bold green")
    bw_table.add_column("Tier")
    bw_table.add_column("Links", justify="right")
    for tier, count in sorted(stats.distribution.items()):
        bw_table.add_row(tier_label(tier), str(count))
    console.print(bw_table)
    console.print(
        f"Total capacity: {format_bandwidth(stats.total_capacity_gbps)}, "
        f"average: {format_bandwidth(stats.average_bandwidth_gbps)}"
    )
    console.print()

    link_table = Table(title="Links", show_header=True, header_style="bold yellow")
    link_table.add_column("Link")
    link_table.add_column("Bandwidth")
    link_table.add_column("Expected (us)", justify="right")
    link_table.add_column("p50 (us)", justify="right")
    link_table.add_column("Drift %", justify="right")
    link_table.add_column("IS-IS", justify="right")
    link_table.add_column("Health")

    for link in links:
        style = HEALTH_STYLES[link.health_status]
        link_table.add_row(
            link.link_code,
            link.bandwidth_label,
            _fmt(link.expected_delay_us),
            _fmt(link.measured_p50_us),
            _fmt(link.drift_pct),
            "-" if link.isis_metric is None else str(link.isis_metric),
            f"[{style}]{link.health_status.value}[/{style}]",
        )

    console.print(link_table)
    console.print(
        Panel(
            f"[bold]{len(result.locations)} locations, {summary.total_links} links "
            f"({len(links)} shown)[/bold]",
            title="Topology Processed",
            border_style="green",
        )
    )


@main.command("path")
@click.argument("snapshot_file", type=click.Path(exists=True, path_type=Path))
@click.argument("isis_file", type=click.Path(exists=True, path_type=Path))
@click.argument("source")
@click.argument("destination")
@click.option(
    "--strategy",
    type=click.Choice(STRATEGY_CHOICES),
    default=None,
    help="Edge weighting strategy (default from settings)",
)
@click.option("--active-only", is_flag=True, help="Skip links without IS-IS data or with inactive latency")
def path(
    snapshot_file: Path,
    isis_file: Path,
    source: str,
    destination: str,
    strategy: str | None,
    active_only: bool,
) -> None:
    """Compute the shortest path between two devices.

    SOURCE and DESTINATION are device codes.
    """
    try:
        result = _correlate(snapshot_file, isis_file, None)
        outcome = compute_path(
            result.topology,
            source,
            destination,
            strategy or get_settings().default_strategy,
            active_only=active_only,
        )
    except TopoHealthError as e:
        _fail(e)

    if outcome.path is None:
        console.print(f"[bold red]No path:[/bold red] {outcome.error}")
        raise SystemExit(1)

    found = outcome.path
    hop_table = Table(title="Path", show_header=True, header_style="bold cyan")
    hop_table.add_column("#", justify="right")
    hop_table.add_column("From")
    hop_table.add_column("To")
    hop_table.add_column("Latency (us)", justify="right")
    hop_table.add_column("Bandwidth")
    hop_table.add_column("Health")

    for i, edge in enumerate(found.links, start=1):
        frm, to = found.node_ids[i - 1], found.node_ids[i]
        hop_table.add_row(
            str(i),
            frm,
            to,
            _fmt(edge.latency_us),
            format_bandwidth(edge.bandwidth_gbps),
            edge.health_status.value,
        )

    console.print(hop_table)
    console.print(
        Panel(
            f"[bold green]{found.path_string}[/bold green]\n\n"
            f"Hops: {found.total_hops}\n"
            f"Total latency: {_fmt(found.total_latency_us)} us\n"
            f"Bottleneck bandwidth: {format_bandwidth(found.min_bandwidth_gbps)}\n"
            f"Reliability: {found.path_reliability:.0%}\n"
            f"Strategy: {found.strategy.value} ({outcome.compute_time_ms:.2f} ms)",
            title="Path Found",
            border_style="green",
        )
    )


@main.command("serve")
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    import uvicorn

    from topohealth.web.app import create_app

    uvicorn.run(create_app(), host=host, port=port)


@main.command("info")
def info() -> None:
    """Show platform information."""
    from topohealth import __version__

    settings = get_settings()
    console.print(
        Panel(
            f"[bold]topohealth[/bold] v{__version__}\n\n"
            "Correlates serviceability, telemetry and IS-IS data\n"
            "into per-link health, with weighted shortest paths.\n\n"
            f"Drift threshold: {settings.drift_threshold_pct}%\n"
            f"Default strategy: {settings.default_strategy}\n"
            f"Strategies: {', '.join(STRATEGY_CHOICES)}",
            title="About",
            border_style="blue",
        )
    )


if __name__ == "__main__":
    main()
