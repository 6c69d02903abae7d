"""Command-line interface for Muster."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from muster.cli.scene import load_scene
from muster.core.config.loader import apply_logging_config, load_muster_config
from muster.core.errors import MusterError
from muster.core.formations.defaults import create_default_formation_registry
from muster.core.models.geometry import FACING_ORDER
from muster.core.party.orchestrator import PartyOrchestrator
from muster.core.world.notify import RecordingNotifier

console = Console()
logger = logging.getLogger(__name__)


def run_deploy(args: argparse.Namespace) -> int:
    """Merge a party from a scene file and deploy it.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    scene_path = Path(args.scene).resolve()
    if not scene_path.exists():
        console.print(f"[red]ERROR: Scene file not found: {scene_path}[/red]")
        return 1

    try:
        config = load_muster_config(args.config)
        apply_logging_config(config)
        scene = load_scene(scene_path)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: Could not load input: {e}[/red]")
        return 1

    party = [p.strip() for p in args.party.split(",") if p.strip()]
    notifier = RecordingNotifier()
    orchestrator = PartyOrchestrator(scene, scene, scene, scene, notifier=notifier, config=config)

    try:
        composite_id = orchestrator.merge_members(party, leader_index=args.leader)
        composite = orchestrator.get_composite(composite_id)
        plan = orchestrator.plan_deployment(
            composite_id, formation_key=args.formation, facing=args.facing
        )
        orchestrator.deploy_all(composite_id, formation_key=args.formation, facing=args.facing)
    except MusterError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    if args.json:
        console.print_json(
            json.dumps(
                {
                    "party": composite.name,
                    "natural_facing": composite.natural_facing.value,
                    "facing": plan.facing.value,
                    "formation": plan.formation_key,
                    "placements": [
                        {
                            "agent_id": p.agent_id,
                            "cell": list(p.cell.as_tuple()),
                            "ideal_cell": list(p.ideal_cell.as_tuple()),
                            "radius": p.radius,
                        }
                        for p in plan.placements
                    ],
                    "warnings": list(plan.warnings),
                }
            )
        )
        return 0

    console.print(
        f"[bold]{composite.name}[/bold] formed facing {composite.natural_facing.value}, "
        f"deployed as [cyan]{plan.formation_key}[/cyan] facing {plan.facing.value}"
    )
    table = Table(title="Placements")
    table.add_column("Agent")
    table.add_column("Ideal cell", justify="right")
    table.add_column("Cell", justify="right")
    table.add_column("Displaced", justify="right")
    for p in plan.placements:
        table.add_row(
            p.agent_id,
            str(p.ideal_cell.as_tuple()),
            str(p.cell.as_tuple()),
            "-" if p.radius == 0 else str(p.radius),
        )
    console.print(table)
    for warning in plan.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")
    return 0


def run_formations(args: argparse.Namespace) -> int:
    """Print the built-in formation presets."""
    registry = create_default_formation_registry()
    table = Table(title="Formations")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Description")
    for key, name, description in registry.describe():
        table.add_row(key, name, description)
    console.print(table)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="muster",
        description="Muster - merge grid agents into parties and deploy them in formation",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    deploy = sub.add_parser("deploy", help="Merge a party from a scene and deploy it")
    deploy.add_argument("--scene", required=True, help="Path to scene file (yaml/json)")
    deploy.add_argument("--party", required=True, help="Comma-separated agent ids to merge")
    deploy.add_argument("--leader", type=int, default=0, help="Index of the leader in --party")
    deploy.add_argument("--formation", default=None, help="Formation key (default: custom)")
    deploy.add_argument(
        "--facing",
        choices=[f.value for f in FACING_ORDER],
        default=None,
        help="Facing to deploy toward (default: the party's natural facing)",
    )
    deploy.add_argument(
        "--config",
        default=None,
        help="Path to app config (default: muster.yaml if present)",
    )
    deploy.add_argument("--json", action="store_true", help="Print placements as JSON")

    sub.add_parser("formations", help="List formation presets")

    return p


def main() -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args()

    if args.cmd == "deploy":
        sys.exit(run_deploy(args))
    elif args.cmd == "formations":
        sys.exit(run_formations(args))
