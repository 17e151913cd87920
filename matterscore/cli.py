"""
matterscore CLI - Score, analyze and compare Matter devices.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import click
from rich.console import Console
from rich.table import Table

from .cache import open_score_cache
from .capabilities import AnalyzerResult, CapabilityAnalyzer, get_catalog
from .compare import aggregate_capabilities, select_devices, support_matrix
from .config import Config, get_config, set_config
from .models import DeviceSnapshot, parse_int
from .registry import get_registry
from .scoring import DeviceScore, DeviceScoreEngine, rank_devices
from .sources import DeviceSourceError, load_device, load_devices

console = Console()


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()]
    )


def stars(rating: float) -> str:
    filled = int(rating)
    return "★" * filled + "☆" * (5 - filled)


def _engine(config: Config) -> DeviceScoreEngine:
    return DeviceScoreEngine(config=config.scoring)


def _analyzer(config: Config) -> CapabilityAnalyzer:
    return CapabilityAnalyzer(
        catalog=get_catalog(config.capabilities_path),
        categories=config.categories,
    )


def _load_or_exit(path: str) -> DeviceSnapshot:
    try:
        return load_device(path)
    except DeviceSourceError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('--data-dir', type=click.Path(file_okay=False), help='Data directory')
@click.pass_context
def main(ctx, verbose, data_dir):
    """📊 matterscore - Matter device compliance scores and capabilities"""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    setup_logging(verbose)

    if data_dir:
        set_config(Config.load(Path(data_dir)))


# =============================================================================
# Scoring
# =============================================================================

@main.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--breakdown', '-b', is_flag=True, help='Show each cluster requirement')
@click.option('--json', 'as_json', is_flag=True, help='Output JSON')
def score(file: str, breakdown: bool, as_json: bool):
    """Score a device snapshot."""
    config = get_config()
    device = _load_or_exit(file)
    result = _engine(config).score_device(device)

    if as_json:
        _echo_json({"slug": device.slug, **result.to_dict()})
        return

    console.print(f"\n[bold blue]{device.display_name}[/bold blue]")
    _print_score(result)

    if breakdown:
        for type_score in result.scores_by_type.values():
            table = Table(title=f"{type_score.device_type_name} breakdown")
            table.add_column("Cluster")
            table.add_column("Required")
            table.add_column("Present")
            table.add_column("Points", justify="right")
            for item in type_score.breakdown:
                table.add_row(
                    item.label,
                    "yes" if item.required else "",
                    "[green]✓[/green]" if item.present else "[red]✗[/red]",
                    f"{item.contribution:.2f}",
                )
            console.print(table)
    console.print()


def _print_score(result: DeviceScore) -> None:
    if not result.scores_by_type:
        console.print("[yellow]No scorable device types.[/yellow]")
        return

    summary = Table(show_header=False, box=None)
    summary.add_column("Key", style="dim")
    summary.add_column("Value")
    summary.add_row("Score", f"[cyan]{result.overall_score}[/cyan]")
    summary.add_row("Rating", f"[yellow]{stars(result.star_rating)}[/yellow]")
    summary.add_row("Compliant", "[green]yes[/green]" if result.is_compliant else "[red]no[/red]")
    if result.best_version:
        summary.add_row("Best version", f"{result.best_version} scores higher than the latest")
    console.print(summary)

    table = Table(title="Device Types")
    table.add_column("Device Type", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Stars")
    table.add_column("Mandatory", justify="right")
    table.add_column("Optional", justify="right")
    table.add_column("Bonus", justify="right")
    table.add_column("Compliant")
    for type_score in result.scores_by_type.values():
        table.add_row(
            type_score.device_type_name,
            f"{type_score.score}",
            stars(type_score.star_rating),
            f"{type_score.mandatory_score}%",
            f"{type_score.optional_score}%",
            f"{type_score.client_bonus}",
            "✓" if type_score.is_compliant else "✗",
        )
    console.print(table)


@main.command()
@click.argument('directory', type=click.Path(exists=True, file_okay=False))
def rebuild(directory: str):
    """Rescore every device snapshot in DIRECTORY and rewrite the cache."""
    config = get_config()

    try:
        devices = load_devices(directory)
    except DeviceSourceError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    cache = open_score_cache(config)
    count = cache.rebuild(devices, engine=_engine(config))

    console.print(f"[green]✓ Scored {count} devices[/green]")
    console.print(f"   Cache: {cache.path}")


@main.command()
@click.argument('device_type')
@click.option('--limit', '-n', default=20, type=int, help='Number of devices to show')
@click.option('--json', 'as_json', is_flag=True, help='Output JSON')
def rank(device_type: str, limit: int, as_json: bool):
    """Rank cached devices for a DEVICE_TYPE id (e.g. 256 or 0x0100)."""
    device_type_id = parse_int(device_type)
    if device_type_id is None:
        console.print(f"[red]Invalid device type id: {device_type}[/red]")
        sys.exit(1)

    cache = open_score_cache(get_config())
    ranked = rank_devices(cache.all(), device_type_id)[:limit]

    if as_json:
        _echo_json([
            {
                "rank": r.rank,
                "slug": r.slug,
                "overall_score": r.score.overall_score,
                "type_score": r.type_score.score,
                "star_rating": r.score.star_rating,
                "is_compliant": r.score.is_compliant,
            }
            for r in ranked
        ])
        return

    name = get_registry().get_device_type_name(device_type_id)
    if not ranked:
        console.print(f"[yellow]No cached devices implement {name}. Run 'matterscore rebuild' first.[/yellow]")
        return

    table = Table(title=f"Top {name} devices")
    table.add_column("#", justify="right")
    table.add_column("Device", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Rating")
    table.add_column("Compliant")
    for r in ranked:
        table.add_row(
            str(r.rank),
            r.slug,
            f"{r.score.overall_score}",
            stars(r.score.star_rating),
            "✓" if r.score.is_compliant else "✗",
        )
    console.print(table)


# =============================================================================
# Capabilities
# =============================================================================

@main.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--json', 'as_json', is_flag=True, help='Output JSON')
def analyze(file: str, as_json: bool):
    """Show what a device can do."""
    config = get_config()
    device = _load_or_exit(file)
    result = _analyzer(config).analyze(device.latest_endpoints)

    if as_json:
        _echo_json({"slug": device.slug, **result.to_dict()})
        return

    console.print(f"\n[bold blue]{device.display_name}[/bold blue]")
    console.print(
        f"   {result.summary.supported} of {result.summary.total} capabilities "
        f"([cyan]{result.summary.percentage}%[/cyan])"
    )
    if result.standouts:
        console.print(f"   [green]Standouts:[/green] {', '.join(result.standouts)}")
    if result.missing:
        console.print(f"   [yellow]Missing:[/yellow] {', '.join(result.missing)}")

    for group in result.by_category.values():
        table = Table(title=group.label, show_header=False)
        table.add_column("Capability")
        table.add_column("Supported")
        table.add_column("Details", style="dim")
        for capability in group.supported.values():
            detail = ""
            if capability.details and capability.details.features:
                detail = ", ".join(capability.details.features)
            table.add_row(f"{capability.emoji} {capability.label}", "[green]✓[/green]", detail)
        for capability in group.unsupported.values():
            table.add_row(f"{capability.emoji} {capability.label}", "[red]✗[/red]", "")
        console.print(table)
    console.print()


@main.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--json', 'as_json', is_flag=True, help='Output JSON')
def compare(files: List[str], as_json: bool):
    """Compare devices side by side."""
    config = get_config()

    devices: Dict[str, DeviceSnapshot] = {}
    for file in files:
        device = _load_or_exit(file)
        devices.setdefault(device.slug, device)

    slugs = select_devices(devices, limit=config.max_compare_devices)
    engine = _engine(config)
    analyzer = _analyzer(config)

    results: Dict[str, AnalyzerResult] = {}
    scores: Dict[str, DeviceScore] = {}
    for slug in slugs:
        device = devices[slug]
        results[slug] = analyzer.analyze(device.latest_endpoints)
        scores[slug] = engine.score_device(device)

    aggregated = aggregate_capabilities(results, config.categories)
    matrix = support_matrix(results)

    if as_json:
        _echo_json({
            "devices": slugs,
            "scores": {slug: s.to_dict() for slug, s in scores.items()},
            "categories": {k: c.to_dict() for k, c in aggregated.items()},
            "matrix": matrix,
        })
        return

    table = Table(title="Comparison")
    table.add_column("Capability")
    for slug in slugs:
        table.add_column(devices[slug].display_name, justify="center")

    table.add_row("[bold]Score[/bold]", *[f"{scores[s].overall_score}" for s in slugs])
    table.add_row("[bold]Rating[/bold]", *[stars(scores[s].star_rating) for s in slugs])

    for category in aggregated.values():
        table.add_section()
        table.add_row(f"[bold]{category.label}[/bold]", *["" for _ in slugs])
        for key, meta in category.capabilities.items():
            cells = []
            for slug in slugs:
                support = matrix[key][slug]
                if support is True:
                    cells.append("[green]✓[/green]")
                elif support is False:
                    cells.append("[red]✗[/red]")
                else:
                    cells.append("[dim]-[/dim]")
            table.add_row(f"{meta.emoji} {meta.label}", *cells)

    console.print(table)


# =============================================================================
# Registry
# =============================================================================

@main.group()
def registry():
    """Browse Matter reference data."""
    pass


@registry.command('device-types')
@click.option('--category', '-c', help='Filter by category (e.g. lighting)')
@click.option('--json', 'as_json', is_flag=True, help='Output JSON')
def registry_device_types(category: Optional[str], as_json: bool):
    """List known device types."""
    reg = get_registry()
    if category:
        device_types = reg.get_device_types_by_category(category)
    else:
        device_types = list(reg.get_all_device_type_metadata().values())

    if as_json:
        _echo_json([dt.to_dict() for dt in device_types])
        return

    if not device_types:
        console.print(f"[yellow]No device types in category '{category}'.[/yellow]")
        console.print(f"   Categories: {', '.join(reg.get_all_categories())}")
        return

    table = Table(title="Device Types")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Spec")
    table.add_column("Scored")
    for dt in device_types:
        table.add_row(
            f"0x{dt.id:04X}",
            dt.name,
            dt.display_category,
            dt.spec_version or "",
            "✓" if dt.scored else "",
        )
    console.print(table)


@registry.command('cluster')
@click.argument('cluster_id')
def registry_cluster(cluster_id: str):
    """Show a cluster's commands, attributes and features."""
    parsed = parse_int(cluster_id)
    if parsed is None:
        console.print(f"[red]Invalid cluster id: {cluster_id}[/red]")
        sys.exit(1)

    reg = get_registry()
    metadata = reg.get_cluster_metadata(parsed)
    if not metadata.known:
        console.print(f"[yellow]Unknown cluster 0x{parsed:04X}[/yellow]")
        sys.exit(1)

    console.print(f"\n[bold blue]{metadata.name}[/bold blue] (0x{metadata.id:04X})")
    console.print(f"   Category: {metadata.category}")
    console.print(f"   Spec version: {metadata.spec_version or 'unknown'}")

    for title, elements in (("Commands", metadata.commands), ("Attributes", metadata.attributes)):
        if not elements:
            continue
        table = Table(title=title)
        table.add_column("ID", justify="right")
        table.add_column("Name")
        table.add_column("Optional")
        for element in elements:
            table.add_row(f"0x{element.id:02X}", element.name, "yes" if element.optional else "")
        console.print(table)

    if metadata.features:
        table = Table(title="Features")
        table.add_column("Bit", justify="right")
        table.add_column("Code", style="cyan")
        table.add_column("Name")
        for feature in metadata.features:
            table.add_row(str(feature.bit), feature.code, feature.name)
        console.print(table)
    console.print()


if __name__ == '__main__':
    main()
