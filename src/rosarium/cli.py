"""CLI for the rose journal."""

import json as json_mod
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from loguru import logger

from rosarium.app import GardenApp
from rosarium.catalog import (
    BREEDERS,
    FERTILIZERS,
    ISSUES,
    ROSE_LIBRARY,
    SOIL_TYPES,
    TRANSPLANT_TYPES,
    resistance_label,
    short_label,
)
from rosarium.config import STORAGE_KEY, resolve_data_directory
from rosarium.core import mutators
from rosarium.core.confirm import Confirm, always
from rosarium.core.dates import day_label, format_iso, parse_iso, start_of_day, today
from rosarium.core.soil import SoilMix
from rosarium.exceptions import RosariumError
from rosarium.logging_config import configure_logging
from rosarium.models.variety import Event, Note, Photo, Variety
from rosarium.photos import decode_data_uri
from rosarium.storage import FileStorage

app = typer.Typer(help="Rosarium: a journal for your rose garden.")

_Child = TypeVar("_Child", Event, Photo, Note)

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Directory holding the saved journal"),
]
DateOption = Annotated[
    str | None,
    typer.Option("--date", help="Day of the record, YYYY-MM-DD (default: today)"),
]
YesOption = Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")]
JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


@dataclass
class CliState:
    data_dir: Path


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
    data_dir: DataDirOption = None,
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)
    ctx.obj = CliState(data_dir=(data_dir or resolve_data_directory()).expanduser())


def _state(ctx: typer.Context) -> CliState:
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        return CliState(data_dir=resolve_data_directory())
    return state


@contextmanager
def _session(ctx: typer.Context) -> Iterator[GardenApp]:
    """Open the journal for one command and flush it afterwards.

    Also the top-level error boundary: domain errors become a one-line
    message, anything unexpected points the user at ``rosarium reset``.
    """
    garden = GardenApp(FileStorage(_state(ctx).data_dir, create=True)).open()
    garden.persistence.subscribe_status(lambda status: logger.debug("Save status: {}", status))
    try:
        yield garden
    except (typer.Exit, typer.Abort, typer.BadParameter):
        raise
    except (RosariumError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    except Exception as e:
        logger.exception("Unexpected error")
        typer.echo(
            "Something went wrong. If your saved data is corrupted, "
            "'rosarium reset' erases it (export a backup first if you can).",
            err=True,
        )
        raise typer.Exit(2) from e
    finally:
        garden.close()


def _confirmer(yes: bool) -> Confirm:
    if yes:
        return always
    return lambda prompt: typer.confirm(prompt, default=False)


def _parse_day(value: str | None) -> date:
    if value is None:
        return today()
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {value!r}") from e


def _parse_moment(value: str) -> str:
    moment = parse_iso(value)
    if moment is None:
        raise typer.BadParameter(f"Expected an ISO date/time, got {value!r}")
    return format_iso(moment)


def _resolve_variety(garden: GardenApp, ref: str) -> Variety:
    """Find a variety by id, unique id prefix, or exact name."""
    found = garden.store.find(ref)
    if found is not None:
        return found
    candidates = [v for v in garden.store if v.id.startswith(ref)] or [
        v for v in garden.store if v.name == ref
    ]
    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        typer.echo(f"Variety '{ref}' not found.")
    else:
        typer.echo(f"'{ref}' matches {len(candidates)} varieties, use the id.")
    raise typer.Exit(1)


def _resolve_child(children: Sequence[_Child], ref: str, kind: str) -> _Child:
    matches = [c for c in children if c.id == ref] or [c for c in children if c.id.startswith(ref)]
    if len(matches) != 1:
        typer.echo(f"{kind.capitalize()} '{ref}' not found." if not matches else f"'{ref}' is ambiguous.")
        raise typer.Exit(1)
    return matches[0]


def _resolve_choice(value: str, choices: Sequence[str], what: str) -> str:
    upper = value.strip().upper()
    if upper in choices:
        return upper
    raise typer.BadParameter(f"Unknown {what} {value!r}; choose from {', '.join(choices)}")


def _resolve_breeder(value: str) -> str:
    """Map a partial breeder name onto its catalog entry; unknown names pass through."""
    if value in BREEDERS:
        return value
    matches = [b for b in BREEDERS if value.strip().lower() in b.lower()]
    return matches[0] if len(matches) == 1 else value


def _resolve_issue(value: str) -> str:
    """Accept an issue number from `catalog`, part of its label, or free text."""
    if value.isdigit() and 1 <= int(value) <= len(ISSUES):
        return ISSUES[int(value) - 1].label
    matches = [i.label for i in ISSUES if value.strip().lower() in i.label.lower()]
    return matches[0] if len(matches) == 1 else value


def _short_id(value: str) -> str:
    return value[:8]


def _echo_variety(v: Variety) -> None:
    typer.echo(f"{v.name}  [{short_label(v.breeder)}]  id={v.id}")
    if v.rose_type is not None or v.feature:
        typer.echo(f"  {resistance_label(v.rose_type)}" + (f'  "{v.feature}"' if v.feature else ""))
    typer.echo(f"  Registered: {day_label(v.registration_date)}")
    typer.echo(f"  Planted: {day_label(v.planting_date) if v.planting_date else '-'}")
    typer.echo(f"  Last transplant: {day_label(v.transplant_date) if v.transplant_date else '-'}")

    typer.echo(f"\nCare log ({len(v.events)}):")
    for event in v.events:
        typer.echo(f"  {day_label(event.date)}  {event.type:<12} {event.details}  ({_short_id(event.id)})")

    pruning = mutators.pruning_photos(v)
    if pruning:
        typer.echo(f"\nPruning photos ({len(pruning)}):")
        for photo in pruning:
            side = "Before" if photo.type == "PRUNING_BEFORE" else "After"
            note = f"  {photo.note}" if photo.note else ""
            typer.echo(f"  {day_label(photo.date)}  {side:<6}{note}  ({_short_id(photo.id)})")

    blooms = mutators.bloom_photos(v)
    typer.echo(f"\nBlooms ({len(blooms)}):")
    for photo in blooms:
        typer.echo(f"  {day_label(photo.date)}  ({_short_id(photo.id)})")

    notes = mutators.sorted_notes(v)
    typer.echo(f"\nJournal ({len(notes)}):")
    if v.memo:
        typer.echo(f"  Memo: {v.memo}")
    for note in notes:
        typer.echo(f"  {day_label(note.date)}  ({_short_id(note.id)})")
        for line in note.content.splitlines():
            typer.echo(f"    {line}")


# --- Varieties ---


@app.command(name="list")
def list_cmd(ctx: typer.Context, output_json: JsonOption = False) -> None:
    """List all registered varieties, newest first."""
    with _session(ctx) as garden:
        varieties = garden.store.varieties
        if output_json:
            data = [
                {
                    "id": v.id,
                    "name": v.name,
                    "breeder": v.breeder,
                    "roseType": v.rose_type,
                    "registrationDate": v.registration_date,
                    "events": len(v.events),
                    "photos": len(v.photos),
                    "notes": len(v.notes),
                }
                for v in varieties
            ]
            typer.echo(json_mod.dumps({"varieties": data, "count": len(data)}, indent=2))
            return
        if not varieties:
            typer.echo("No roses yet. Register one with 'rosarium add'.")
            return
        typer.echo(f"{len(varieties)} varieties:\n")
        for v in varieties:
            badge = f"Type {v.rose_type}" if v.rose_type is not None else ""
            typer.echo(f"  {v.name}  [{short_label(v.breeder)}] {badge}")
            typer.echo(
                f"    registered {day_label(v.registration_date)}  "
                f"{len(v.events)} events, {len(v.photos)} photos, {len(v.notes)} notes  "
                f"id={_short_id(v.id)}"
            )


@app.command()
def show(ctx: typer.Context, variety: str, output_json: JsonOption = False) -> None:
    """Show a variety with its care log, photos and journal."""
    with _session(ctx) as garden:
        found = garden.open_detail(_resolve_variety(garden, variety).id)
        if found is None:
            typer.echo("Variety not found.")
            raise typer.Exit(1)
        if output_json:
            typer.echo(json_mod.dumps(found.to_dict(), indent=2, ensure_ascii=False))
        else:
            _echo_variety(found)


@app.command()
def add(
    ctx: typer.Context,
    breeder: Annotated[str, typer.Option("--breeder", "-b", help="Breeder (catalog or free text)")],
    name: Annotated[str, typer.Option("--name", "-n", help="Variety name")],
) -> None:
    """Register a new variety. Known names get their type and feature filled in."""
    with _session(ctx) as garden:
        garden.router.show_new()
        variety = garden.register_variety(breeder=_resolve_breeder(breeder), name=name)
        typer.echo(f"Registered {variety.name} (id={variety.id})")
        if variety.rose_type is not None:
            typer.echo(f"  {resistance_label(variety.rose_type)}: {variety.feature}")


@app.command()
def edit(
    ctx: typer.Context,
    variety: str,
    name: Annotated[str | None, typer.Option("--name", "-n", help="New name")] = None,
    breeder: Annotated[str | None, typer.Option("--breeder", "-b", help="New breeder")] = None,
    yes: YesOption = False,
) -> None:
    """Rename a variety or change its breeder."""
    with _session(ctx) as garden:
        current = _resolve_variety(garden, variety)
        garden.router.start_editing(current.id)
        updated = garden.edit_variety_info(
            current.id,
            name=name if name is not None else current.name,
            breeder=_resolve_breeder(breeder) if breeder is not None else current.breeder,
            confirm=_confirmer(yes),
        )
        typer.echo(f"Updated {updated.name} [{short_label(updated.breeder)}]")


@app.command()
def delete(ctx: typer.Context, variety: str, yes: YesOption = False) -> None:
    """Delete a variety and everything recorded for it."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        if garden.request_delete_variety(target.id).execute(_confirmer(yes)):
            typer.echo(f"Deleted {target.name}")
        else:
            typer.echo("Cancelled.")


@app.command()
def catalog(
    breeder: Annotated[
        str | None, typer.Option("--breeder", "-b", help="Only show this breeder's roses")
    ] = None,
) -> None:
    """Show the breeder/variety catalog and the care options."""
    for name, roses in BREEDERS.items():
        if breeder and breeder.lower() not in name.lower():
            continue
        typer.echo(name)
        for rose in roses:
            info = ROSE_LIBRARY.get(rose)
            suffix = f"  Type {info.type}: {info.feature}" if info else ""
            typer.echo(f"    {rose}{suffix}")
    if breeder:
        return
    typer.echo("\nFertilizers:")
    for option in FERTILIZERS:
        typer.echo(f"    {option.value:<14} {option.label}")
    typer.echo("\nTransplant types:")
    for option in TRANSPLANT_TYPES:
        typer.echo(f"    {option.value:<14} {option.label}")
    typer.echo("\nSoil types:")
    for option in SOIL_TYPES:
        typer.echo(f"    {option.value:<14} {option.label}")
    typer.echo("\nIssues:")
    for i, issue in enumerate(ISSUES, start=1):
        typer.echo(f"    {i}. {issue.label} ({issue.kind.lower()})")


@app.command(name="plant-date")
def plant_date(
    ctx: typer.Context,
    variety: str,
    day: Annotated[str | None, typer.Argument(help="YYYY-MM-DD")] = None,
    clear: Annotated[bool, typer.Option("--clear", help="Remove the date")] = False,
) -> None:
    """Set the planting date."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        when = None if clear else start_of_day(_parse_day(day))
        garden.apply(target.id, mutators.set_planting_date, when)
        typer.echo(f"Planting date: {day_label(when) if when else '-'}")


@app.command(name="transplant-date")
def transplant_date(
    ctx: typer.Context,
    variety: str,
    day: Annotated[str | None, typer.Argument(help="YYYY-MM-DD")] = None,
    clear: Annotated[bool, typer.Option("--clear", help="Remove the date")] = False,
) -> None:
    """Correct the last-transplant date without logging a transplant."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        when = None if clear else start_of_day(_parse_day(day))
        garden.apply(target.id, mutators.set_transplant_date, when)
        typer.echo(f"Last transplant: {day_label(when) if when else '-'}")


# --- Care log ---


@app.command()
def fertilize(
    ctx: typer.Context,
    variety: str,
    kind: Annotated[str, typer.Option("--type", "-t", help="VITALIZER, SOLID or LIQUID")] = "VITALIZER",
    day: DateOption = None,
) -> None:
    """Log a fertilizer application."""
    fertilizer = _resolve_choice(kind, [f.value for f in FERTILIZERS], "fertilizer")
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        updated = garden.apply(target.id, mutators.record_fertilizer, fertilizer, _parse_day(day))
        typer.echo(f"Logged: {updated.events[0].details}")


@app.command()
def transplant(
    ctx: typer.Context,
    variety: str,
    kind: Annotated[
        str, typer.Option("--type", "-t", help="TRANSPLANT, POT_UP, SOIL_RENEWAL or GROUND")
    ] = "TRANSPLANT",
    soil: Annotated[
        list[str] | None,
        typer.Option("--soil", "-s", help="TYPE:PERCENT (OTHER=name:PERCENT), repeatable"),
    ] = None,
    pot: Annotated[str, typer.Option("--pot", help="Pot size, e.g. '8 -> 10'")] = "",
    day: DateOption = None,
) -> None:
    """Log a transplant; also updates the last-transplant date."""
    transplant_kind = _resolve_choice(kind, [t.value for t in TRANSPLANT_TYPES], "transplant type")
    try:
        mix = SoilMix.parse(soil or [])
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    if not mix.is_complete:
        raise typer.BadParameter(f"Soil mix must total 100%, got {mix.total}%")
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        updated = garden.apply(
            target.id, mutators.record_transplant, transplant_kind, _parse_day(day), mix, pot_size=pot
        )
        typer.echo(f"Logged: {updated.events[0].details}")


@app.command()
def pest(
    ctx: typer.Context,
    variety: str,
    issue: Annotated[str, typer.Argument(help="Issue number from 'catalog', label, or free text")],
    day: DateOption = None,
) -> None:
    """Log a pest or disease treatment."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        updated = garden.apply(
            target.id, mutators.record_pest_control, _resolve_issue(issue), _parse_day(day)
        )
        typer.echo(f"Logged: {updated.events[0].details}")


@app.command(name="event-edit")
def event_edit(
    ctx: typer.Context,
    variety: str,
    event: str,
    when: Annotated[str | None, typer.Option("--date", help="New date/time (ISO)")] = None,
    details: Annotated[str | None, typer.Option("--details", help="New details")] = None,
) -> None:
    """Change the date or details of a care-log entry."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        found = _resolve_child(target.events, event, "event")
        garden.apply(
            target.id,
            mutators.edit_event,
            found.id,
            when=_parse_moment(when) if when else None,
            details=details,
        )
        typer.echo("Event updated.")


@app.command(name="event-delete")
def event_delete(ctx: typer.Context, variety: str, event: str, yes: YesOption = False) -> None:
    """Delete a care-log entry."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        found = _resolve_child(target.events, event, "event")
        done = garden.request_delete_event(target.id, found.id).execute(_confirmer(yes))
        typer.echo("Event deleted." if done else "Cancelled.")


# --- Pruning and photos ---


def _read_image(path: Path | None) -> bytes | None:
    if path is None:
        return None
    try:
        return path.read_bytes()
    except OSError as e:
        raise typer.BadParameter(f"Cannot read {path}: {e}") from e


@app.command()
def prune(
    ctx: typer.Context,
    variety: str,
    details: Annotated[str, typer.Option("--details", help="e.g. 'Winter pruning'")] = "",
    before: Annotated[Path | None, typer.Option("--before", help="Photo before pruning")] = None,
    after: Annotated[Path | None, typer.Option("--after", help="Photo after pruning")] = None,
    day: DateOption = None,
) -> None:
    """Log a pruning session with optional before/after photos."""
    before_data = _read_image(before)
    after_data = _read_image(after)
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        updated = garden.record_pruning(
            target.id, _parse_day(day), details=details, before=before_data, after=after_data
        )
        photos = mutators.photos_for_event(updated, updated.events[0])
        typer.echo(f"Logged: {updated.events[0].details} ({len(photos)} photos that day)")


@app.command()
def bloom(ctx: typer.Context, variety: str, photo: Path) -> None:
    """Add a bloom photo to the gallery."""
    data = _read_image(photo)
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        garden.add_bloom_photo(target.id, data or b"")
        typer.echo("Bloom photo added.")


@app.command(name="photo-edit")
def photo_edit(
    ctx: typer.Context,
    variety: str,
    photo: str,
    day: DateOption = None,
    note: Annotated[str | None, typer.Option("--note", help="New note")] = None,
) -> None:
    """Move a photo to another day (time of day is kept) or change its note."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        found = _resolve_child(target.photos, photo, "photo")
        garden.apply(
            target.id,
            mutators.edit_photo,
            found.id,
            day=_parse_day(day) if day else None,
            note=note,
        )
        typer.echo("Photo updated.")


@app.command(name="photo-delete")
def photo_delete(ctx: typer.Context, variety: str, photo: str, yes: YesOption = False) -> None:
    """Delete a photo."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        found = _resolve_child(target.photos, photo, "photo")
        done = garden.request_delete_photo(target.id, found.id).execute(_confirmer(yes))
        typer.echo("Photo deleted." if done else "Cancelled.")


@app.command(name="photo-save")
def photo_save(ctx: typer.Context, variety: str, photo: str, output: Path) -> None:
    """Write a stored photo out as a JPEG file."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        found = _resolve_child(target.photos, photo, "photo")
        output.write_bytes(decode_data_uri(found.url))
        typer.echo(f"Saved {output}")


# --- Journal ---


@app.command()
def note(
    ctx: typer.Context,
    variety: str,
    content: Annotated[str, typer.Argument(help="Observation, growth status, ideas...")],
    day: DateOption = None,
) -> None:
    """Add a journal entry."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        garden.apply(target.id, mutators.record_note, content, _parse_day(day))
        typer.echo("Journal entry added.")


@app.command(name="note-edit")
def note_edit(
    ctx: typer.Context,
    variety: str,
    note_id: Annotated[str, typer.Argument(metavar="NOTE")],
    day: DateOption = None,
    content: Annotated[str | None, typer.Option("--content", help="New text")] = None,
) -> None:
    """Change the date or text of a journal entry."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        found = _resolve_child(target.notes, note_id, "note")
        garden.apply(
            target.id,
            mutators.edit_note,
            found.id,
            day=_parse_day(day) if day else None,
            content=content,
        )
        typer.echo("Journal entry updated.")


@app.command(name="note-delete")
def note_delete(
    ctx: typer.Context,
    variety: str,
    note_id: Annotated[str, typer.Argument(metavar="NOTE")],
    yes: YesOption = False,
) -> None:
    """Delete a journal entry."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        found = _resolve_child(target.notes, note_id, "note")
        done = garden.request_delete_note(target.id, found.id).execute(_confirmer(yes))
        typer.echo("Journal entry deleted." if done else "Cancelled.")


@app.command()
def memo(ctx: typer.Context, variety: str, text: str) -> None:
    """Replace the general memo of a variety."""
    with _session(ctx) as garden:
        target = _resolve_variety(garden, variety)
        garden.apply(target.id, mutators.set_memo, text)
        typer.echo("Memo updated.")


# --- Data management ---


@app.command()
def export(
    ctx: typer.Context,
    output_dir: Annotated[
        Path, typer.Option("--output-dir", "-o", help="Where to write the backup file")
    ] = Path(),
    stdout: Annotated[bool, typer.Option("--stdout", help="Print instead of writing a file")] = False,
) -> None:
    """Export every variety to rosarium_backup_<date>.json."""
    with _session(ctx) as garden:
        garden.router.show_settings()
        if stdout:
            typer.echo(garden.export_text(), nl=False)
            return
        path = garden.export_backup(output_dir)
        typer.echo(f"Exported {len(garden.store)} varieties to {path}")


@app.command(name="import")
def import_cmd(ctx: typer.Context, backup: Path, yes: YesOption = False) -> None:
    """Replace all data with a backup file."""
    with _session(ctx) as garden:
        garden.router.show_settings()
        action = garden.request_import_file(backup)
        if action.execute(_confirmer(yes)):
            typer.echo(f"Data imported successfully! {len(garden.store)} varieties.")
        else:
            typer.echo("Cancelled.")


@app.command()
def reset(ctx: typer.Context, yes: YesOption = False) -> None:
    """Erase the saved journal. Use when saved data is corrupted beyond repair."""
    storage = FileStorage(_state(ctx).data_dir, create=True)
    garden = GardenApp(storage)
    # No open(): the data may be exactly what cannot be loaded.
    if garden.request_reset().execute(_confirmer(yes)):
        typer.echo("Saved data erased.")
    else:
        typer.echo("Cancelled.")


@app.command()
def status(ctx: typer.Context) -> None:
    """Show where the journal is stored and how much it holds."""
    storage = FileStorage(_state(ctx).data_dir, create=True)
    path = storage.path_for(STORAGE_KEY)
    typer.echo(f"Data file: {path}")
    if not path.exists():
        typer.echo("No saved data yet.")
        return
    with _session(ctx) as garden:
        photos = sum(len(v.photos) for v in garden.store)
        typer.echo(f"{len(garden.store)} varieties, {photos} photos, {path.stat().st_size} bytes")


if __name__ == "__main__":
    app()
