"""
CLI Output

Table and JSON rendering of client results.
"""

import json
from typing import Any, Dict, List, Optional, Sequence

import click
from rich import box
from rich.console import Console
from rich.table import Table


def print_error(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)


def print_success(message: str) -> None:
    click.secho(message, fg="green")


def print_info(message: str) -> None:
    click.secho(message, fg="cyan")


def _to_plain(obj: Any) -> Any:
    """Records, lists and dicts as JSON-ready values."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, list):
        return [_to_plain(o) for o in obj]
    if isinstance(obj, dict):
        return {k: _to_plain(v) for k, v in obj.items()}
    return obj


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    return str(value)


class OutputFormatter:
    """Writes results in the selected format."""

    def __init__(self, format: str = "table", quiet: bool = False):
        self.format = format
        self.quiet = quiet

    def output(self, obj: Any, columns: Optional[Sequence[str]] = None) -> None:
        """
        Print a record, a list of records or a mapping.

        Args:
            obj: Value to print
            columns: Column order for lists (defaults to keys of the rows)
        """
        plain = _to_plain(obj)

        if self.format == "json":
            click.echo(json.dumps(plain, indent=2))
        elif isinstance(plain, list):
            self._table(plain, columns)
        elif isinstance(plain, dict):
            self._key_values(plain)
        else:
            click.echo(_cell(plain))

    def success(self, message: str) -> None:
        if not self.quiet:
            print_success(message)

    def info(self, message: str) -> None:
        if not self.quiet:
            print_info(message)

    def _table(self, rows: List[Dict[str, Any]], columns: Optional[Sequence[str]]) -> None:
        if not rows:
            self.info("No results")
            return

        if columns is None:
            columns = []
            for row in rows:
                for key in row:
                    if key not in columns:
                        columns.append(key)

        table = Table(box=box.SIMPLE_HEAD)
        for index, column in enumerate(columns):
            table.add_column(column.replace("_", " ").upper(), no_wrap=index == 0)
        for row in rows:
            table.add_row(*(_cell(row.get(c)) for c in columns))

        Console(highlight=False).print(table)

    def _key_values(self, data: Dict[str, Any]) -> None:
        width = max((len(k) for k in data), default=0)
        for key, value in data.items():
            label = key.replace("_", " ").title()
            click.echo(f"{label.ljust(width)}  {_cell(value)}")
