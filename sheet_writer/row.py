from dataclasses import dataclass, field
from typing import Optional

from sheet_writer.exceptions import InvalidArgumentError
from sheet_writer.style import Style, to_style


@dataclass
class Row:
    """
    An ordered list of cell values plus an optional style.
    Example: Row(['data1', 1234, None, '', True], Style(bold=True))
    """
    cells: list = field(default_factory=list)
    style: Optional[Style] = None

    def __post_init__(self):
        if isinstance(self.cells, (str, bytes)) or not hasattr(self.cells, "__iter__"):
            raise InvalidArgumentError(f"Row cells must be a sequence of values, got {type(self.cells).__name__}.")
        self.cells = list(self.cells)
        self.style = to_style(self.style)

    def __len__(self):
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)


def to_row(data, style=None) -> Row:
    """Wraps a plain sequence of cells into a Row. A style given here overrides the row's own."""
    if isinstance(data, Row):
        if style is None:
            return data
        return Row(data.cells, style)
    return Row(data, style)
