import logging
import pathlib

from sheet_writer.exceptions import UnsupportedTypeError
from sheet_writer.manager import WorkbookManager
from sheet_writer.options import OptionsManager
from sheet_writer.output_csv import OutputCSV
from sheet_writer.output_xlsx import OutputXLSX
from sheet_writer.writer import MultiSheetWriter

# --- Logger Setup ---
logger = logging.getLogger(f"sheet_writer.{__name__}")
# --- End Logger Setup ---


class WriterType:
    XLSX = "xlsx"
    CSV = "csv"


OUTPUT_CLASSES = {
    WriterType.XLSX: OutputXLSX,
    WriterType.CSV: OutputCSV,
}


class WriterFactory:
    """Builds ready to configure writers for the supported output types."""

    @staticmethod
    def create(writer_type: str) -> MultiSheetWriter:
        writer_type = str(writer_type).lower()
        if writer_type not in OUTPUT_CLASSES:
            err_msg = f"Unsupported writer type '{writer_type}'. Options are {sorted(OUTPUT_CLASSES)}."
            logger.error(err_msg)
            raise UnsupportedTypeError(err_msg)

        output_class = OUTPUT_CLASSES[writer_type]

        def create_workbook_manager(options_manager):
            return WorkbookManager(options_manager, output_class())

        logger.debug(f"Creating {writer_type} writer.")
        return MultiSheetWriter(OptionsManager(writer_type), create_workbook_manager, output_class.sink_for_path)

    @staticmethod
    def create_from_file(path) -> MultiSheetWriter:
        """
        Picks the writer type from the path: '.xlsx' gives an XLSX writer,
        '.csv' gives a CSV writer saving one sheet into that file, no suffix gives a CSV writer
        saving a directory with one CSV file per sheet.
        """
        suffix = pathlib.Path(path).suffix.lower()
        if suffix == ".xlsx":
            return WriterFactory.create(WriterType.XLSX)
        if suffix in (".csv", ""):
            return WriterFactory.create(WriterType.CSV)
        err_msg = f"Cannot pick a writer for '{path}'. Use a .xlsx file, or a .csv file or directory."
        logger.error(err_msg)
        raise UnsupportedTypeError(err_msg)
