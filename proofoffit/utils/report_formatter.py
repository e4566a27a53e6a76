"""
Aligned text tables for CLI reports.
"""

from typing import Any, List


class Column:
    """Column definition: header, width and alignment ('<', '>' or '^')."""

    def __init__(self, name: str, width: int, align: str = "<"):
        self.name = name
        self.width = width
        self.align = align

    def format_header(self) -> str:
        return f"{self.name:{self.align}{self.width}}"

    def format_value(self, value: Any) -> str:
        text = "" if value is None else str(value)
        if len(text) > self.width:
            text = text[: self.width - 1] + "…"
        return f"{text:{self.align}{self.width}}"


class TableFormatter:
    """Builder for text tables; every add_* method returns self for chaining."""

    def __init__(self, columns: List[Column], total_width: int = None):
        self.columns = columns
        self.total_width = total_width or sum(col.width for col in columns) + len(columns) - 1
        self.lines: List[str] = []

    def add_section_header(self, title: str) -> "TableFormatter":
        self.lines.append("=" * self.total_width)
        self.lines.append(title)
        self.lines.append("=" * self.total_width)
        return self

    def add_table_header(self) -> "TableFormatter":
        self.lines.append(" ".join(col.format_header() for col in self.columns))
        self.add_separator()
        return self

    def add_separator(self, char: str = "-") -> "TableFormatter":
        self.lines.append(char * self.total_width)
        return self

    def add_row(self, values: List[Any]) -> "TableFormatter":
        """
        Add one data row.

        Raises:
            ValueError: If number of values doesn't match columns
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        self.lines.append(" ".join(col.format_value(val) for col, val in zip(self.columns, values)))
        return self

    def add_summary(self, text: str) -> "TableFormatter":
        self.lines.append(f"\n{text}")
        return self

    def render(self) -> str:
        return "\n".join(self.lines)
