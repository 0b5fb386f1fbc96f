import logging
from typing import List, Optional

from sheet_writer.exceptions import (
    InvalidArgumentError,
    SheetNotFoundError,
    WriterAlreadyOpenedError,
    WriterClosedError,
    WriterNotOpenedError,
)
from sheet_writer.manager import WorkbookManagerFactory
from sheet_writer.options import Options, OptionsManager
from sheet_writer.row import to_row
from sheet_writer.sheet import Sheet
from sheet_writer.sink import FileSink, StreamSink
from sheet_writer.style import to_style

# --- Logger Setup ---
logger = logging.getLogger(f"sheet_writer.{__name__}")
# --- End Logger Setup ---


class MultiSheetWriter:
    """
    A writer session producing one workbook with one or more sheets.

    The session goes through three states: not opened, opened, closed. It must be configured
    before it is opened. Opening builds the workbook manager (through the factory given here)
    and a first sheet, so there is always a sheet to write to. Rows go to the current sheet.
    Closing saves the workbook into the sink given to open().

    Usage:
        with WriterFactory.create_from_file("report.xlsx").open_to_file("report.xlsx") as writer:
            writer.append_row(["a", 1])
            writer.add_new_sheet_and_make_it_current("Totals")
            writer.append_row(["total", 1])
    """
    def __init__(self, options_manager: OptionsManager, manager_factory: WorkbookManagerFactory, sink_for_path=None):
        """
        :param options_manager: Options read by the workbook manager when it is built.
        :param manager_factory: Callable building a workbook manager from the options manager.
        :param sink_for_path: Callable turning a path into a sink, used by open_to_file(). Defaults to FileSink.
        """
        self.options_manager = options_manager
        self.manager_factory = manager_factory
        self.sink_for_path = sink_for_path or FileSink
        self.workbook_manager = None
        self.sink = None
        self.is_open = False
        self.is_closed = False

    # --- Configuration. Only allowed before the writer is opened. ---

    def throw_if_writer_already_opened(self, message: str):
        if self.is_open or self.is_closed:
            logger.error(message)
            raise WriterAlreadyOpenedError(message)

    def set_should_create_new_sheets_automatically(self, should_create_new_sheets_automatically: bool):
        """
        Sets whether new sheets are created automatically when the max rows limit per sheet is reached.
        :return: The writer, for chaining.
        """
        self.throw_if_writer_already_opened("Writer must be configured before opening it.")
        self.options_manager.set_option(Options.SHOULD_CREATE_NEW_SHEETS_AUTOMATICALLY, should_create_new_sheets_automatically)
        return self

    def set_max_rows_per_sheet(self, max_rows_per_sheet: int):
        self.throw_if_writer_already_opened("Writer must be configured before opening it.")
        self.options_manager.set_option(Options.MAX_ROWS_PER_SHEET, max_rows_per_sheet)
        return self

    def set_default_row_style(self, style):
        self.throw_if_writer_already_opened("Writer must be configured before opening it.")
        self.options_manager.set_option(Options.DEFAULT_ROW_STYLE, style)
        return self

    # --- Lifecycle ---

    def open(self, sink):
        """
        Opens the sink and builds the workbook with its first sheet. Opening an opened writer does nothing.

        :param sink: FileSink, StreamSink, DirectorySink or any object with open(), write(), close() and discard().
        :return: The writer, usable as a context manager.
        """
        if self.is_closed:
            err_msg = "The writer has been closed and cannot be opened again."
            logger.error(err_msg)
            raise WriterClosedError(err_msg)
        if self.workbook_manager is not None:
            logger.debug("Writer already opened. Ignoring open().")
            return self

        logger.info(f"Opening writer to {sink!r}")
        sink.open()
        try:
            workbook_manager = self.manager_factory(self.options_manager)
            workbook_manager.add_new_sheet_and_make_it_current()
        except Exception as e:
            logger.exception(f"Error creating the workbook: {e}")
            sink.discard()
            raise

        self.sink = sink
        self.workbook_manager = workbook_manager
        self.is_open = True
        logger.debug("Writer opened.")
        return self

    def open_to_file(self, path):
        return self.open(self.sink_for_path(path))

    def open_to_stream(self, stream):
        return self.open(StreamSink(stream))

    def throw_if_workbook_is_not_available(self):
        if self.is_closed:
            err_msg = "The writer has been closed. No more actions can be performed."
            logger.error(err_msg)
            raise WriterClosedError(err_msg)
        if self.workbook_manager is None or not self.workbook_manager.get_workbook():
            err_msg = "The writer must be opened before performing this action."
            logger.error(err_msg)
            raise WriterNotOpenedError(err_msg)

    # --- Sheets ---

    def get_sheets(self) -> List[Sheet]:
        """Returns the handles of all the sheets, in the order they were created."""
        self.throw_if_workbook_is_not_available()
        return [worksheet.external_sheet for worksheet in self.workbook_manager.get_worksheets()]

    def add_new_sheet_and_make_it_current(self, name: Optional[str] = None) -> Sheet:
        """
        Creates a new sheet and makes it the current sheet. The data will now be written to this sheet.
        :param name: Optional sheet name, default names are 'Sheet1', 'Sheet2', ...
        :return: The created sheet.
        """
        self.throw_if_workbook_is_not_available()
        worksheet = self.workbook_manager.add_new_sheet_and_make_it_current(name)
        return worksheet.external_sheet

    def get_current_sheet(self) -> Sheet:
        """Returns the current sheet. It can change while rows are appended, when a full sheet overflows."""
        self.throw_if_workbook_is_not_available()
        return self.workbook_manager.get_current_worksheet().external_sheet

    def set_current_sheet(self, sheet: Sheet) -> None:
        """
        Sets the given sheet as the current one. New data will be written to this sheet.
        The writing will resume where it stopped (i.e. data won't be truncated).
        """
        self.throw_if_workbook_is_not_available()
        self.workbook_manager.set_current_sheet(sheet)

    def get_row_count(self, sheet: Sheet) -> int:
        self.throw_if_workbook_is_not_available()
        for worksheet in self.workbook_manager.get_worksheets():
            if worksheet.external_sheet == sheet:
                return worksheet.last_written_row_index
        err_msg = f"The given sheet {sheet!r} does not exist in the workbook."
        logger.error(err_msg)
        raise SheetNotFoundError(err_msg)

    # --- Rows ---

    def append_row(self, row, style=None):
        """
        Adds a row to the current sheet. If the sheet is full and automatic sheet creation is on,
        the row goes to a new sheet which becomes the current one.

        :param row: A Row or a list of cell values. Example: ['data1', 1234, None, '', 'data5']
        :param style: Style or style name applied to the row, overriding the row's own style.
        :return: The writer, for chaining.
        """
        self.throw_if_workbook_is_not_available()
        self.workbook_manager.add_row_to_current_worksheet(to_row(row), to_style(style))
        return self

    def append_rows(self, rows, style=None):
        self.throw_if_workbook_is_not_available()
        if isinstance(rows, (str, bytes)) or not hasattr(rows, "__iter__"):
            err_msg = f"append_rows expects an iterable of rows, got {type(rows).__name__}."
            logger.error(err_msg)
            raise InvalidArgumentError(err_msg)
        style = to_style(style)
        rows = [to_row(row) for row in rows]
        for row in rows:
            self.workbook_manager.add_row_to_current_worksheet(row, style)
        logger.debug(f"Appended {len(rows)} rows.")
        return self

    # --- Closing ---

    def close(self):
        """
        Saves the workbook (if one was created) into the sink and closes it. Closing twice does nothing.
        If saving fails, the sink is discarded so no partial file is left behind.
        """
        if self.is_closed:
            logger.debug("Writer already closed.")
            return
        self.is_closed = True
        self.is_open = False

        workbook_manager, self.workbook_manager = self.workbook_manager, None
        sink, self.sink = self.sink, None
        if workbook_manager is None:
            logger.info("Writer closed without ever being opened.")
            return
        try:
            workbook_manager.close(sink)
        except Exception as e:
            logger.exception(f"Error saving the workbook to {sink!r}: {e}")
            sink.discard()
            raise
        sink.close()
        logger.info(f"Writer closed. Output written to {sink!r}")

    def abort(self):
        """
        Closes the writer without saving anything. A file the sink already created is removed.
        Does nothing on a closed writer.
        """
        if self.is_closed:
            logger.debug("Writer already closed.")
            return
        self.is_closed = True
        self.is_open = False

        self.workbook_manager = None
        sink, self.sink = self.sink, None
        if sink is None:
            logger.info("Writer aborted without ever being opened.")
            return
        sink.discard()
        logger.warning(f"Writer aborted. Nothing was saved to {sink!r}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Saves the workbook, unless the block raised: then the unfinished workbook is discarded."""
        if exc_type:
            logger.error(f"Exception occurred while writing: {exc_type.__name__}: {exc_val}",
                         exc_info=(exc_type, exc_val, exc_tb))
            self.abort()
            return
        self.close()
