import logging

from sheet_writer.alignment import CellAlignment, CellVerticalAlignment
from sheet_writer.exceptions import (
    InvalidArgumentError,
    InvalidSheetNameError,
    SheetNotFoundError,
    SheetWriterError,
    SheetWriterIOError,
    UnsupportedTypeError,
    WriterAlreadyOpenedError,
    WriterClosedError,
    WriterNotOpenedError,
)
from sheet_writer.factory import WriterFactory, WriterType
from sheet_writer.manager import WorkbookManager
from sheet_writer.options import Options, OptionsManager
from sheet_writer.row import Row
from sheet_writer.sheet import Sheet
from sheet_writer.sink import DirectorySink, FileSink, StreamSink
from sheet_writer.style import Style
from sheet_writer.writer import MultiSheetWriter

# Library logs go nowhere until the application configures logging.
logging.getLogger("sheet_writer").addHandler(logging.NullHandler())

__version__ = "1.0.0"
