"""Library for formatting command output."""

from abc import ABC, abstractmethod
import json
import sys
from typing import Any, Generator, TextIO

import yaml

PADDING = 4


def column_format_string(rows: list[list[str]]) -> str:
    """Produce a format string based on max width of columns."""
    widths = [0] * len(rows[0])
    for row in rows:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))
    return "".join(f"{{:{width + PADDING}}}" for width in widths)


def format_columns(
    headers: list[str], rows: list[list[str]]
) -> Generator[str, None, None]:
    """Yield the header and rows aligned in columns."""
    data = [headers] + rows
    if format_string := column_format_string(data):
        for row in data:
            yield format_string.format(*row)


class Formatter(ABC):
    """A formatter that renders command output."""

    @abstractmethod
    def format(self, data: Any) -> Generator[str, None, None]:
        """Format the data objects as lines of output."""

    def print(self, data: Any, file: TextIO | None = None) -> None:
        """Print the formatted data objects, to stdout by default."""
        file = file or sys.stdout
        for line in self.format(data):
            print(line, file=file)


class PrintFormatter(Formatter):
    """A formatter that prints a human readable table."""

    def __init__(self, keys: list[str] | None = None):
        """Initialize the PrintFormatter with optional keys to print."""
        self._keys = keys

    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        """Format the rows as columns with upper case headers."""
        if not data:
            return
        keys = self._keys if self._keys is not None else list(data[0])
        rows = [[str(row.get(key, "")) for key in keys] for row in data]
        yield from format_columns([key.upper() for key in keys], rows)


class TextFormatter(Formatter):
    """A formatter that prints one value per line."""

    def format(self, data: list[Any]) -> Generator[str, None, None]:
        """Format each value on its own line."""
        for value in data:
            yield str(value)


class YamlFormatter(Formatter):
    """A formatter that prints a yaml document."""

    def format(self, data: Any) -> Generator[str, None, None]:
        """Format the data as a single yaml document."""
        content = yaml.dump(data, sort_keys=False, explicit_start=True)
        yield from content.rstrip("\n").split("\n")


class JsonFormatter(Formatter):
    """A formatter that prints json output."""

    def format(self, data: Any) -> Generator[str, None, None]:
        """Format the data as indented json."""
        yield from json.dumps(data, indent=4, sort_keys=False).split("\n")


FORMATTERS: dict[str, type[Formatter]] = {
    "yaml": YamlFormatter,
    "json": JsonFormatter,
}


def structured_formatter(output: str) -> Formatter:
    """Return the formatter for a structured output format."""
    if (formatter_cls := FORMATTERS.get(output)) is None:
        raise ValueError(f"Unsupported output format '{output}'")
    return formatter_cls()
