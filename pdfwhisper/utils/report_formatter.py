"""
Fixed-width console tables for outline and persona results.

Values wider than their column are cut with an ellipsis so rows never wrap.
"""

from typing import Any, List, Sequence

from pdfwhisper.utils.text_processing import truncate_display


class Column:
    """One fixed-width table column."""

    def __init__(self, name: str, width: int, align: str = "<"):
        """
        Args:
            name: Header label
            width: Width in characters; longer values are truncated
            align: Format-spec alignment ('<' left, '>' right, '^' center)
        """
        self.name = name
        self.width = width
        self.align = align

    def _fit(self, text: str) -> str:
        return f"{truncate_display(text, self.width):{self.align}{self.width}}"

    def format_header(self) -> str:
        return self._fit(self.name)

    def format_value(self, value: Any) -> str:
        return self._fit(str(value))


class TableFormatter:
    """
    Chainable builder for a titled table with an optional summary line.

    Example:
        >>> table = TableFormatter([Column("Doc", 8), Column("Rank", 4, ">")], total_width=20)
        >>> print(table.add_section_header("RESULTS").add_table_header().add_row(["a.pdf", 9]).render())
    """

    def __init__(self, columns: List[Column], total_width: int = 100):
        self.columns = columns
        self.total_width = total_width
        self.lines: List[str] = []

    def _join(self, cells: Sequence[str]) -> str:
        return " ".join(cells)

    def add_section_header(self, title: str) -> "TableFormatter":
        """Title framed above and below by '=' rules."""
        rule = "=" * self.total_width
        self.lines.extend([rule, title, rule])
        return self

    def add_table_header(self) -> "TableFormatter":
        """Column labels followed by a '-' rule."""
        self.lines.append(self._join([col.format_header() for col in self.columns]))
        self.lines.append("-" * self.total_width)
        return self

    def add_row(self, values: Sequence[Any]) -> "TableFormatter":
        """
        Append one row, one value per column.

        Raises:
            ValueError: If number of values doesn't match columns
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")
        self.lines.append(self._join([col.format_value(v) for col, v in zip(self.columns, values)]))
        return self

    def add_summary(self, text: str) -> "TableFormatter":
        """Summary text set off from the table by a blank line."""
        self.lines.extend(["", text])
        return self

    def render(self) -> str:
        return "\n".join(self.lines)
