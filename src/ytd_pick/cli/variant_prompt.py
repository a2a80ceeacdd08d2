"""Variant table rendering and interactive selection for the CLI layer.

All display logic lives here; selection policy and downloading do not.
"""

from __future__ import annotations

from typing import Any

from ytd_pick.cli.console import console
from ytd_pick.core.collection import VariantCollection
from ytd_pick.core.models import Variant
from ytd_pick.core.naming import extension_for_format
from ytd_pick.exceptions import EnvironmentError


def _import_questionary() -> Any:
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def build_choice_label(index: int, variant: Variant) -> str:
    """Single-line label for the selector, e.g. ``"  0.  hd720   video/mp4"``."""
    quality = variant.quality or "?"
    return f"  {index}.  {quality:<8} {variant.format}"


def display_variant_table(collection: VariantCollection) -> None:
    """Print the title and a Rich table of index, quality and format.

    Falls back to the collection's plain-text table without Rich.
    """
    try:
        table_class = _import_rich_table()
    except EnvironmentError:
        console.print(collection.render_table())
        return

    console.print()
    console.print(f"[bold cyan]Title:[/bold cyan]  {collection.title}")
    console.print()

    table = table_class(
        title="Available Variants",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Index", justify="right", style="dim", width=5)
    table.add_column("Quality", justify="left", min_width=8)
    table.add_column("Format", justify="left", min_width=10)
    table.add_column("Ext", justify="left", min_width=5)

    for index, variant in enumerate(collection):
        table.add_row(
            str(index),
            variant.quality or "[red]missing[/red]",
            variant.format or "[red]missing[/red]",
            extension_for_format(variant.format),
        )

    console.print(table)
    console.print()


def prompt_variant_selection(collection: VariantCollection) -> Variant:
    """Let the user choose one variant of *collection* with arrow keys.

    A single candidate is returned without prompting.

    Raises
    ------
    SelectionCancelledError
        If the user cancels the prompt (Esc / Ctrl+C returns ``None``).
    """
    from ytd_pick.exceptions import SelectionCancelledError

    if len(collection) == 1:
        return collection[0]

    questionary = _import_questionary()
    choices = [
        questionary.Choice(title=build_choice_label(i, variant), value=i)
        for i, variant in enumerate(collection)
    ]

    selected: int | None = questionary.select(
        "Select variant to download:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()

    if selected is None:
        raise SelectionCancelledError(
            "No variant selected.",
            hint="Use arrow keys to pick a variant, then press Enter.",
        )
    return collection[selected]
