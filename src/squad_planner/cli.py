"""Command-line interface for squad_planner using Click.

Commands:
  import   -> Import a timetable workbook and summarize sessions per squad
  slots    -> Show the grid slot columns derived from a workbook
  export   -> Re-export one squad's sessions as a renumbered workbook
  analyze  -> Ask the hosted model to audit one squad's schedule

Usage examples:
  python -m squad_planner.cli import --input timetable.xlsx --json-out sessions.json
  python -m squad_planner.cli export --input timetable.xlsx --squad 4 --out-dir out
  python -m squad_planner.cli analyze --input timetable.xlsx --squad 4
"""

from __future__ import annotations
import os, sys, json, logging
from collections import Counter
from typing import List, Optional
import click

from .analysis import analyze_squad
from .errors import SquadPlannerError
from .exporter import export_schedule
from .importer import import_file
from .schedule import Session, derive_slots

# --------------------- helpers ---------------------


def _load(input_path: str) -> List[Session]:
    try:
        return import_file(input_path)
    except SquadPlannerError as e:
        logging.error("Import of %s failed: %s", input_path, e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


# --------------------- CLI group ---------------------


@click.group()
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG).")
@click.version_option("0.1.0")
def cli(verbose: bool):
    """squad_planner CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    logging.debug("Verbose logging enabled." if verbose else "Logging level INFO.")


_input_option = click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Timetable workbook (.xlsx).",
)

# --------------------- import ---------------------


@cli.command("import")
@_input_option
@click.option(
    "--json-out",
    default=None,
    type=click.Path(dir_okay=False),
    help="Optional JSON output for imported sessions.",
)
def cmd_import(input_path: str, json_out: Optional[str]):
    """Import a workbook and report sessions per squad."""
    sessions = _load(input_path)
    per_squad = Counter(str(s.squad_number) for s in sessions)
    click.echo(f"Imported {len(sessions)} sessions.")
    for squad, count in sorted(per_squad.items()):
        click.echo(f" - squad {squad}: {count}")
    if json_out:
        with open(json_out, "w", encoding="utf-8") as f:
            json.dump([s.to_dict() for s in sessions], f, indent=2)
        click.echo(f"Sessions written: JSON={json_out}")


# --------------------- slots ---------------------


@cli.command("slots")
@_input_option
def cmd_slots(input_path: str):
    """Print the slot columns a grid would show."""
    sessions = _load(input_path)
    for slot in derive_slots(sessions):
        click.echo(slot.label)


# --------------------- export ---------------------


@cli.command("export")
@_input_option
@click.option("--squad", required=True, help="Squad to export.")
@click.option(
    "--out-dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory for the exported workbook.",
)
def cmd_export(input_path: str, squad: str, out_dir: str):
    """Export one squad's sessions, sorted and renumbered per day."""
    sessions = _load(input_path)
    try:
        filename, content = export_schedule(sessions, squad)
        os.makedirs(out_dir, exist_ok=True)
        out_path = os.path.join(out_dir, filename)
        with open(out_path, "wb") as f:
            f.write(content)
    except Exception as e:
        logging.exception("Export failed")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Schedule written: {out_path}")


# --------------------- analyze ---------------------


@cli.command("analyze")
@_input_option
@click.option("--squad", required=True, help="Squad to audit.")
def cmd_analyze(input_path: str, squad: str):
    """Audit one squad's schedule for overlaps and mentor conflicts."""
    sessions = _load(input_path)
    click.echo(analyze_squad(sessions, squad))


# --------------------- entry ---------------------


def main():  # pragma: no cover
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
