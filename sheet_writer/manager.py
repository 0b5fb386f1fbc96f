import logging
from typing import Callable, List, Optional, Protocol

from sheet_writer.exceptions import SheetNotFoundError, WriterNotOpenedError
from sheet_writer.options import Options, OptionsManager
from sheet_writer.row import Row
from sheet_writer.sheet import Sheet, Workbook, Worksheet, validate_sheet_name
from sheet_writer.style import Style

# --- Logger Setup ---
logger = logging.getLogger(f"sheet_writer.{__name__}")
# --- End Logger Setup ---


class WorkbookManagerInterface(Protocol):
    """What the writer session needs from a workbook manager."""

    def add_new_sheet_and_make_it_current(self, name: Optional[str] = None) -> Worksheet: ...

    def get_worksheets(self) -> List[Worksheet]: ...

    def get_current_worksheet(self) -> Worksheet: ...

    def set_current_sheet(self, sheet: Sheet) -> None: ...

    def add_row_to_current_worksheet(self, row: Row, style: Optional[Style]) -> None: ...

    def get_workbook(self) -> Optional[Workbook]: ...

    def close(self, sink) -> None: ...


WorkbookManagerFactory = Callable[[OptionsManager], WorkbookManagerInterface]


class WorkbookManager:
    """
    Owns the workbook and its worksheets and decides where each row goes.
    Rows are encoded by an output object (OutputXLSX, OutputCSV) that knows the file format.
    The options are copied when the manager is built; changing them afterwards has no effect.
    """
    def __init__(self, options_manager: OptionsManager, output):
        logger.debug(f"Initializing WorkbookManager with output {type(output).__name__}.")
        self.options = options_manager.snapshot()
        self.output = output
        self.workbook = None
        self.current_worksheet = None
        self.closed = False

        self.should_create_new_sheets_automatically = self.options[Options.SHOULD_CREATE_NEW_SHEETS_AUTOMATICALLY]
        self.max_rows_per_sheet = min(self.options[Options.MAX_ROWS_PER_SHEET], output.MAX_ROWS_PER_SHEET)
        self.default_row_style = self.options[Options.DEFAULT_ROW_STYLE]
        self.sheet_name_prefix = self.options[Options.SHEET_NAME_PREFIX]
        logger.debug(f"WorkbookManager initialized. Auto new sheets: {self.should_create_new_sheets_automatically}, max rows per sheet: {self.max_rows_per_sheet}")

    def get_workbook(self) -> Optional[Workbook]:
        return self.workbook

    def get_worksheets(self) -> List[Worksheet]:
        if self.workbook is None:
            return []
        return list(self.workbook.worksheets)

    def get_current_worksheet(self) -> Worksheet:
        return self.current_worksheet

    def next_sheet_name(self) -> str:
        """First '<prefix><n>' not already used, n starting at the number of existing sheets + 1."""
        existing = {each.name.lower() for each in self.workbook.worksheets}
        number = len(self.workbook.worksheets) + 1
        while f"{self.sheet_name_prefix}{number}".lower() in existing:
            number += 1
        return f"{self.sheet_name_prefix}{number}"

    def add_new_sheet_and_make_it_current(self, name: Optional[str] = None) -> Worksheet:
        """
        Creates a worksheet at the end of the workbook and makes it the current one.
        The workbook itself is created with the first worksheet.

        :param name: Optional sheet name. Defaults to '<sheet_name_prefix><n>'.
        :return: The new internal Worksheet.
        """
        if self.closed:
            raise WriterNotOpenedError("The workbook has already been closed.")
        if self.workbook is None:
            self.output.new_workbook(self.options)
            self.workbook = Workbook()
            logger.info(f"Created workbook {self.workbook.internal_id}.")

        if name is None:
            name = self.next_sheet_name()
        validate_sheet_name(name, self.workbook)

        external_sheet = Sheet(index=len(self.workbook.worksheets), name=name, workbook_id=self.workbook.internal_id)
        worksheet = Worksheet(external_sheet=external_sheet, output_sheet=self.output.new_worksheet(name))
        self.workbook.worksheets.append(worksheet)
        self.current_worksheet = worksheet
        logger.info(f"Added sheet '{name}' at index {external_sheet.index} and made it current.")
        return worksheet

    def find_worksheet(self, sheet: Sheet) -> Worksheet:
        worksheet = self.workbook.find_worksheet(sheet) if self.workbook else None
        if worksheet is None or worksheet.external_sheet != sheet:
            err_msg = f"The given sheet {sheet!r} does not exist in the workbook."
            logger.error(err_msg)
            raise SheetNotFoundError(err_msg)
        return worksheet

    def set_current_sheet(self, sheet: Sheet) -> None:
        """
        Makes the given sheet current. Writing resumes after the last row it already has.
        """
        worksheet = self.find_worksheet(sheet)
        self.current_worksheet = worksheet
        logger.debug(f"Current sheet is now '{worksheet.name}' (row {worksheet.last_written_row_index}).")

    def has_current_worksheet_reached_max_rows(self) -> bool:
        return self.current_worksheet.last_written_row_index >= self.max_rows_per_sheet

    def add_row_to_current_worksheet(self, row: Row, style: Optional[Style] = None) -> None:
        """
        Writes the row in the current worksheet. When the worksheet is full, either a new sheet is
        started and receives the row, or (auto creation disabled) the row is not written.
        """
        if self.closed:
            raise WriterNotOpenedError("The workbook has already been closed.")
        if self.has_current_worksheet_reached_max_rows():
            if self.should_create_new_sheets_automatically:
                logger.info(f"Sheet '{self.current_worksheet.name}' reached {self.max_rows_per_sheet} rows. Starting a new sheet.")
                self.add_new_sheet_and_make_it_current()
            else:
                logger.warning(f"Sheet '{self.current_worksheet.name}' reached {self.max_rows_per_sheet} rows and automatic sheet creation is disabled. Row not written.")
                return

        row_style = style if style is not None else row.style
        if row_style is not None:
            row_style = row_style.merge(self.default_row_style)
        else:
            row_style = self.default_row_style

        worksheet = self.current_worksheet
        self.output.new_entry(worksheet.output_sheet, worksheet.last_written_row_index, row.cells, row_style)
        worksheet.last_written_row_index += 1

    def close(self, sink) -> None:
        """
        Saves every worksheet into the sink. Closing an already closed manager does nothing.
        """
        if self.closed:
            logger.debug("WorkbookManager already closed.")
            return
        self.closed = True
        if self.workbook is None:
            logger.info("No workbook was created. Nothing to save.")
            return
        self.output.save(sink, self.get_worksheets())
        logger.info(f"Closed workbook {self.workbook.internal_id} with {len(self.workbook.worksheets)} sheets.")
