from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.filesystem.json_utils import write_json_atomic
from adapters.filesystem.schedule_repository import FileSystemScheduleRepository
from app.config import AppSettings, load_settings
from domain.models import ScheduleDocument
from domain.services.schedule_bounds import build_schedule_bounds
from domain.services.schedule_layout import build_schedule_layout

app = typer.Typer(no_args_is_help=True)
console = Console()


def _configure(config_path: Optional[Path]) -> AppSettings:
    settings = load_settings(config_path)
    logging.basicConfig(
        level=settings.layout.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


def _load_document(input_path: Path) -> ScheduleDocument:
    repository = FileSystemScheduleRepository()
    try:
        return repository.load_by_path(input_path)
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/] {input_path}", soft_wrap=True)
        raise typer.Exit(code=1) from exc
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid schedule file:[/] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1) from exc


@app.command("layout")
def layout(
    input_path: Path = typer.Argument(..., help="Schedule JSON file."),
    scale: Optional[float] = typer.Option(
        None, min=0, help="Display units per minute (overrides config).",
    ),
    output: Optional[Path] = typer.Option(None, help="Write the computed layout as JSON."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    settings = _configure(config)
    if scale is not None:
        settings.layout.scale_factor = scale
    document = _load_document(input_path)
    calculator = settings.layout.build_calculator()
    schedule_layout = build_schedule_layout(document, calculator)

    table = Table(title=document.title or input_path.stem)
    table.add_column("Room")
    table.add_column("Lecture")
    table.add_column("Top", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Bottom", justify="right")
    for column in schedule_layout.columns:
        for lecture in column.lectures:
            params = column.params[lecture]
            table.add_row(
                column.room,
                lecture.title or lecture.lecture_id,
                f"{params.top_margin:g}",
                f"{params.height:g}",
                f"{params.bottom_margin:g}",
            )
    console.print(table)
    console.print(f"Column height: {schedule_layout.column_height:g}", soft_wrap=True)

    if output is not None:
        write_json_atomic(output, schedule_layout.to_dict())
        console.print(f"[green]Wrote[/] {output}", soft_wrap=True)


@app.command("bounds")
def bounds(input_path: Path = typer.Argument(..., help="Schedule JSON file.")) -> None:
    document = _load_document(input_path)
    schedule_bounds = build_schedule_bounds(document.lectures, day_start=document.day_start)
    console.print(f"Earliest start: {schedule_bounds.earliest_start}", soft_wrap=True)
    console.print(f"Latest end: {schedule_bounds.latest_end}", soft_wrap=True)
    if schedule_bounds.day_start is not None:
        console.print(f"Day start: {schedule_bounds.day_start.isoformat()}", soft_wrap=True)


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="Schedule file to validate.")) -> None:
    document = _load_document(input_path)
    console.print(
        f"[green]Valid schedule file:[/] {input_path} ({len(document.lectures)} lectures)",
        soft_wrap=True,
    )


if __name__ == "__main__":
    app()
