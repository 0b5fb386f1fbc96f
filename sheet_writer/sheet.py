import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sheet_writer.exceptions import InvalidSheetNameError

# --- Logger Setup ---
logger = logging.getLogger(f"sheet_writer.{__name__}")
# --- End Logger Setup ---

MAX_SHEET_NAME_LENGTH = 31
INVALID_SHEET_NAME_CHARACTERS = re.compile(r"[\\/?*:\[\]]")


@dataclass(frozen=True)
class Sheet:
    """
    The handle callers get for a worksheet. It only identifies the worksheet:
    the position of the sheet in its workbook and the id of that workbook.
    """
    index: int
    name: str
    workbook_id: str


@dataclass
class Worksheet:
    """Internal state of one worksheet. `output_sheet` is whatever the output encoder keeps per sheet."""
    external_sheet: Sheet
    output_sheet: Any = None
    last_written_row_index: int = 0

    @property
    def name(self) -> str:
        return self.external_sheet.name


@dataclass
class Workbook:
    worksheets: List[Worksheet] = field(default_factory=list)
    internal_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def find_worksheet(self, sheet: Sheet) -> Optional[Worksheet]:
        if not isinstance(sheet, Sheet) or sheet.workbook_id != self.internal_id:
            return None
        if 0 <= sheet.index < len(self.worksheets):
            return self.worksheets[sheet.index]
        return None


def validate_sheet_name(name: str, workbook: Workbook) -> None:
    """
    Raises InvalidSheetNameError unless the name is usable by a spreadsheet application:
    1 to 31 characters, none of \\ / ? * : [ ], not quoted, unique (case insensitive) in the workbook.
    """
    problems = []
    if not isinstance(name, str) or not name:
        problems.append("it must be a non-empty string")
    else:
        if len(name) > MAX_SHEET_NAME_LENGTH:
            problems.append(f"it must not exceed {MAX_SHEET_NAME_LENGTH} characters")
        if INVALID_SHEET_NAME_CHARACTERS.search(name):
            problems.append("it must not contain any of \\ / ? * : [ ]")
        if name.startswith("'") or name.endswith("'"):
            problems.append("it must not start or end with a single quote")
        if any(each.name.lower() == name.lower() for each in workbook.worksheets):
            problems.append("it must be unique in the workbook")

    if problems:
        err_msg = f"Invalid sheet name {name!r}: " + "; ".join(problems) + "."
        logger.error(err_msg)
        raise InvalidSheetNameError(err_msg)
