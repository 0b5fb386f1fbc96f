import datetime
import io
import logging
import pathlib
from dataclasses import replace

import xlsxwriter
from xlsxwriter.exceptions import XlsxWriterException

from sheet_writer.exceptions import InvalidArgumentError, SheetWriterIOError
from sheet_writer.options import XLSX_MAX_ROWS_PER_SHEET
from sheet_writer.sink import FileSink
from sheet_writer.style import Style

# --- Logger Setup ---
logger = logging.getLogger(f"sheet_writer.{__name__}")
# --- End Logger Setup ---

# Excel cells hold at most this many characters
MAX_STRING_LENGTH = 32767

# Number formats for date and time cells whose style has no number format
DATETIME_FORMAT = "yyyy-mm-dd hh:mm:ss"
DATE_FORMAT = "yyyy-mm-dd"
TIME_FORMAT = "hh:mm:ss"


class OutputXLSX:
    """
    Encodes worksheets into an Excel workbook using xlsxwriter.
    The workbook is assembled in memory and written to the sink once, when it is saved.
    Formats are created once per distinct Style and reused.
    """
    MAX_ROWS_PER_SHEET = XLSX_MAX_ROWS_PER_SHEET
    FILE_SUFFIX = ".xlsx"

    def __init__(self):
        logger.debug("Initializing OutputXLSX.")
        self.wb = None
        self.buffer = None
        self.format_map = {}  # Style -> xlsxwriter Format

    @classmethod
    def sink_for_path(cls, path):
        return FileSink(pathlib.Path(path).with_suffix(cls.FILE_SUFFIX))

    def new_workbook(self, options: dict):
        """
        Creates the in-memory xlsxwriter Workbook.

        :param options: Snapshot of the writer options (unused by this encoder beyond logging).
        :return: The xlsxwriter Workbook.
        """
        logger.debug(f"Called new_workbook with options: {sorted(options)}")
        self.buffer = io.BytesIO()
        self.wb = xlsxwriter.Workbook(self.buffer, {
            "in_memory": True,
            "strings_to_formulas": False,
            "strings_to_urls": False,
            "default_date_format": DATETIME_FORMAT,
        })
        logger.info("Created new in-memory XLSX workbook.")
        return self.wb

    def get_format(self, style: Style):
        if style not in self.format_map:
            self.format_map[style] = self.wb.add_format(style.to_format_properties())
            logger.debug(f"Registered format for style: {style}")
        return self.format_map[style]

    def new_worksheet(self, worksheet_name: str):
        """
        Adds a worksheet to the workbook. The name has already been validated by the workbook manager.

        :param worksheet_name: Name for the worksheet (max 31 characters).
        :return: The xlsxwriter Worksheet.
        """
        if self.wb is None:
            raise SheetWriterIOError("Workbook not initialized. Call new_workbook first.")
        logger.info(f"Creating sheet: '{worksheet_name}'")
        return self.wb.add_worksheet(worksheet_name)

    def date_style(self, value, style: Style):
        """Gives date and time cells a number format when the row style doesn't set one."""
        if style is not None and style.num_format:
            return style
        if isinstance(value, datetime.datetime):
            num_format = DATETIME_FORMAT
        elif isinstance(value, datetime.date):
            num_format = DATE_FORMAT
        else:
            num_format = TIME_FORMAT
        return replace(style or Style(), num_format=num_format)

    def new_entry(self, worksheet, row_idx: int, entry: list, style: Style = None):
        """
        Writes a row of data at the given (zero based) row index.
        Converts bytes values to strings for xlsxwriter compatibility.
        Strings are always stored as text, never as formulas or hyperlinks.
        The whole row is checked before any cell is written.

        :param worksheet: The xlsxwriter Worksheet.
        :param row_idx: Zero based index of the row in the worksheet.
        :param entry: List of cell values.
        :param style: Style applied to every cell of the row, or None.
        """
        values = []
        for col_idx, value in enumerate(entry):
            if isinstance(value, bytes):
                value = value.decode("utf-8", errors="replace")
                logger.debug(f"Converted bytes to string for cell {row_idx},{col_idx}: {value}")
            if isinstance(value, str) and len(value) > MAX_STRING_LENGTH:
                err_msg = f"Cell {row_idx},{col_idx} holds {len(value)} characters. XLSX cells are limited to {MAX_STRING_LENGTH}."
                logger.error(err_msg)
                raise InvalidArgumentError(err_msg)
            values.append(value)

        cell_format = self.get_format(style) if style is not None else None
        for col_idx, value in enumerate(values):
            value_format = cell_format
            if isinstance(value, (datetime.date, datetime.time)):
                value_format = self.get_format(self.date_style(value, style))
            try:
                result = worksheet.write(row_idx, col_idx, value, value_format)
            except TypeError:
                # Types xlsxwriter doesn't know how to write are stored as their text
                logger.debug(f"Writing unsupported type {type(value).__name__} as text at {row_idx},{col_idx}")
                result = worksheet.write_string(row_idx, col_idx, str(value), value_format)
            if result is not None and result < 0:
                err_msg = f"xlsxwriter could not write cell {row_idx},{col_idx} of sheet '{worksheet.name}' (error code {result})."
                logger.error(err_msg)
                raise InvalidArgumentError(err_msg)
        logger.debug(f"Appended entry to sheet '{worksheet.name}' at row {row_idx}.")

    def save(self, sink, worksheets: list):
        """
        Closes the workbook and writes the resulting file into the sink.
        """
        if self.wb is None:
            err_msg = "Workbook not initialized. Call new_workbook first."
            logger.error(err_msg)
            raise SheetWriterIOError(err_msg)
        logger.info(f"Saving workbook with {len(worksheets)} worksheets to: {sink}")
        try:
            self.wb.close()
        except XlsxWriterException as e:
            err_msg = f"Error assembling workbook: {e}"
            logger.exception(err_msg)
            raise SheetWriterIOError(err_msg) from e
        sink.write(self.buffer.getvalue())
        self.buffer = None
        self.wb = None
        self.format_map = {}
        logger.info("Workbook saved successfully.")
