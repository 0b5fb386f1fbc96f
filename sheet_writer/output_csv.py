import csv
import io
import logging
import pathlib

from sheet_writer.exceptions import SheetWriterIOError
from sheet_writer.options import CSV_MAX_ROWS_PER_SHEET, Options
from sheet_writer.sink import DirectorySink, FileSink

# --- Logger Setup ---
logger = logging.getLogger(f"sheet_writer.{__name__}")
# --- End Logger Setup ---

UTF8_BOM = "\ufeff"


class OutputCSV:
    """
    A class for writing CSV "workbooks". In this design, a workbook is simply a directory,
    and each worksheet is a CSV file named after the sheet. A workbook of one sheet can
    also go to a single .csv file or a stream.
    Rows are buffered per sheet and the files are written when the workbook is saved.
    Styles have no meaning in CSV and are ignored.
    """
    MAX_ROWS_PER_SHEET = CSV_MAX_ROWS_PER_SHEET

    def __init__(self):
        self.delimiter = ","
        self.quotechar = '"'
        self.add_bom = True

    @classmethod
    def sink_for_path(cls, path):
        """A path ending in .csv is a single file (one sheet only). Any other path is a directory."""
        path = pathlib.Path(path)
        if path.suffix.lower() == ".csv":
            return FileSink(path)
        return DirectorySink(path)

    def new_workbook(self, options: dict):
        self.delimiter = options.get(Options.FIELD_DELIMITER, ",")
        self.quotechar = options.get(Options.FIELD_ENCLOSURE, '"')
        self.add_bom = options.get(Options.SHOULD_ADD_BOM, True)
        logger.debug(f"CSV workbook uses delimiter {self.delimiter!r}, enclosure {self.quotechar!r}, bom {self.add_bom}")

    class CSVWorksheetBuffer:
        def __init__(self, delimiter, quotechar):
            self.file = io.StringIO(newline="")
            self.writer = csv.writer(self.file, delimiter=delimiter, quotechar=quotechar)

        def new_entry(self, entry: list):
            self.writer.writerow(entry)

        def getvalue(self):
            return self.file.getvalue()

    def new_worksheet(self, worksheet_name: str):
        logger.info(f"Creating sheet: '{worksheet_name}'")
        return self.CSVWorksheetBuffer(self.delimiter, self.quotechar)

    def new_entry(self, worksheet, row_idx: int, entry: list, style=None):
        """
        Appends a new row to the sheet buffer. CSV rows are sequential so row_idx is only logged.
        :param worksheet: The buffer returned by new_worksheet.
        :param entry: List of cell values.
        """
        values = [value.decode("utf-8", errors="replace") if isinstance(value, bytes) else value for value in entry]
        worksheet.new_entry(values)
        logger.debug(f"Appended entry at row {row_idx}.")

    def encode(self, worksheet) -> bytes:
        text = worksheet.getvalue()
        if self.add_bom:
            text = UTF8_BOM + text
        return text.encode("utf-8")

    def save(self, sink, worksheets: list):
        """
        Writes one '<sheet name>.csv' member per worksheet. A sink that is a single file or stream
        can only receive a workbook made of one worksheet.
        """
        logger.info(f"Saving {len(worksheets)} CSV worksheets to: {sink}")
        if hasattr(sink, "write_member"):
            for worksheet in worksheets:
                sink.write_member(f"{worksheet.name}.csv", self.encode(worksheet.output_sheet))
        elif len(worksheets) == 1:
            sink.write(self.encode(worksheets[0].output_sheet))
        else:
            err_msg = f"Cannot write {len(worksheets)} CSV worksheets into a single file. Use a directory."
            logger.error(err_msg)
            raise SheetWriterIOError(err_msg)
        logger.info("CSV worksheets saved successfully.")
