import argparse
import csv
import logging
import sys

from sheet_writer.exceptions import SheetWriterError
from sheet_writer.factory import WriterFactory

logger = logging.getLogger("sheet_writer")


def build_parser():
    parser = argparse.ArgumentParser(prog="sheet_writer", description="Combine CSV files into one workbook. Each input file starts a new sheet and long inputs overflow into more sheets.")
    parser.add_argument("--INFILE", "-i", action="append", required=True, help="CSV file to add to the workbook. Repeat for more files.")
    parser.add_argument("--OUTFILE", "-o", required=True, help="Output path. A .xlsx file, a .csv file (one sheet only), or a directory for CSV output with one file per sheet.")
    parser.add_argument("--OUTPUT_FORMAT", "-f", choices=["xlsx", "csv"], default=None, help="Output format. Defaults to the format implied by OUTFILE.")
    parser.add_argument("--MAX_ROWS", "-m", type=int, default=None, help="Maximum number of rows per sheet.")
    parser.add_argument("--NO_AUTO_SHEETS", action="store_true", help="Do not start new sheets when a sheet is full. Extra rows are dropped.")
    parser.add_argument("--CONFIG", "-c", default=None, help="JSON or YAML file with writer options.")
    parser.add_argument("--LOG_FILE", "-l", default=None, help="Write the log to this file instead of stderr.")
    parser.add_argument("--DEBUG", "-v", action="store_true", help="Enable verbose logging.")
    return parser


def configure_logging(options):
    # --- Logging Setup ---
    logger.setLevel(logging.INFO)  # INFO logging by default
    if options.DEBUG:
        logger.setLevel(logging.DEBUG)  # Unless you pass --DEBUG or -v
    log_formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(name)s - %(message)s')
    if options.LOG_FILE:
        handler = logging.FileHandler(options.LOG_FILE)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(log_formatter)
    logger.addHandler(handler)
    logger.info(f"Logging initialized. Using options: {options}")
    # --- End Logging Setup ---
    return handler


def read_csv_rows(path):
    with open(path, "r", newline="", encoding="utf-8-sig") as csv_file:
        for row in csv.reader(csv_file):
            yield row


def main(argv=None):
    options = build_parser().parse_args(argv)
    handler = configure_logging(options)
    try:
        if options.OUTPUT_FORMAT:
            writer = WriterFactory.create(options.OUTPUT_FORMAT)
        else:
            writer = WriterFactory.create_from_file(options.OUTFILE)

        if options.CONFIG:
            writer.options_manager.load(options.CONFIG)
        if options.MAX_ROWS is not None:
            writer.set_max_rows_per_sheet(options.MAX_ROWS)
        if options.NO_AUTO_SHEETS:
            writer.set_should_create_new_sheets_automatically(False)

        total_rows = 0
        with writer.open_to_file(options.OUTFILE):
            for position, infile in enumerate(options.INFILE):
                if position > 0:
                    writer.add_new_sheet_and_make_it_current()
                logger.info(f"Now processing {infile} into sheet '{writer.get_current_sheet().name}'.")
                file_rows = 0
                for row in read_csv_rows(infile):
                    writer.append_row(row)
                    file_rows += 1
                total_rows += file_rows
                logger.info(f"{infile} contained {file_rows} rows.")
            sheet_count = len(writer.get_sheets())

        logger.info(f"Finished! Wrote {total_rows} rows into {sheet_count} sheets at {options.OUTFILE}.")
        return 0
    except (SheetWriterError, OSError, csv.Error, UnicodeDecodeError) as e:
        logger.exception(f"Unable to write {options.OUTFILE}: {e}")
        return 1
    finally:
        logger.removeHandler(handler)
        handler.close()


if __name__ == "__main__":
    sys.exit(main())
