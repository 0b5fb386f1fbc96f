import json
import logging
import pathlib
from typing import Any, Dict

import yaml

from sheet_writer.exceptions import InvalidArgumentError, UnsupportedTypeError
from sheet_writer.sheet import INVALID_SHEET_NAME_CHARACTERS, MAX_SHEET_NAME_LENGTH
from sheet_writer.style import Style, to_style

# --- Logger Setup ---
logger = logging.getLogger(f"sheet_writer.{__name__}")
# --- End Logger Setup ---

# Room kept in sheet names for the number after the sheet name prefix
SHEET_NUMBER_DIGITS = 6
MAX_SHEET_NAME_PREFIX_LENGTH = MAX_SHEET_NAME_LENGTH - SHEET_NUMBER_DIGITS

# Excel cannot hold more rows than this in a single worksheet.
XLSX_MAX_ROWS_PER_SHEET = 1048576
CSV_MAX_ROWS_PER_SHEET = 1048576


class Options:
    SHOULD_CREATE_NEW_SHEETS_AUTOMATICALLY = "should_create_new_sheets_automatically"
    MAX_ROWS_PER_SHEET = "max_rows_per_sheet"
    DEFAULT_ROW_STYLE = "default_row_style"
    SHEET_NAME_PREFIX = "sheet_name_prefix"
    FIELD_DELIMITER = "field_delimiter"
    FIELD_ENCLOSURE = "field_enclosure"
    SHOULD_ADD_BOM = "should_add_bom"


COMMON_DEFAULTS = {
    Options.SHOULD_CREATE_NEW_SHEETS_AUTOMATICALLY: True,
    Options.DEFAULT_ROW_STYLE: Style(),
    Options.SHEET_NAME_PREFIX: "Sheet",
}

WRITER_DEFAULTS = {
    "xlsx": {
        Options.MAX_ROWS_PER_SHEET: XLSX_MAX_ROWS_PER_SHEET,
    },
    "csv": {
        Options.MAX_ROWS_PER_SHEET: CSV_MAX_ROWS_PER_SHEET,
        Options.FIELD_DELIMITER: ",",
        Options.FIELD_ENCLOSURE: '"',
        Options.SHOULD_ADD_BOM: True,
    },
}


class OptionsManager:
    def __init__(self, writer_type: str = "xlsx"):
        """
        Holds the options of one writer. The workbook manager reads them once, when it is built.
        :param writer_type: 'xlsx' or 'csv'. Decides which options exist and their defaults.
        """
        logger.debug(f"Initializing OptionsManager for writer type: {writer_type}")
        if writer_type not in WRITER_DEFAULTS:
            err_msg = f"Unsupported writer type '{writer_type}'. Use one of {sorted(WRITER_DEFAULTS)}."
            logger.error(err_msg)
            raise UnsupportedTypeError(err_msg)
        self.writer_type = writer_type
        self.data: Dict[str, Any] = dict(COMMON_DEFAULTS)
        self.data.update(WRITER_DEFAULTS[writer_type])

    def supported_options(self) -> list:
        return list(self.data.keys())

    def set_option(self, name: str, value: Any) -> None:
        """Set an option after checking it exists for this writer type and that the value makes sense."""
        logger.debug(f"Setting option '{name}' to {value!r}")
        if name not in self.data:
            err_msg = f"Unknown option '{name}' for {self.writer_type} writers."
            logger.error(err_msg)
            raise InvalidArgumentError(err_msg)

        if name == Options.MAX_ROWS_PER_SHEET:
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                err_msg = f"Option '{name}' must be a positive integer, got {value!r}."
                logger.error(err_msg)
                raise InvalidArgumentError(err_msg)
        elif name in (Options.SHOULD_CREATE_NEW_SHEETS_AUTOMATICALLY, Options.SHOULD_ADD_BOM):
            value = bool(value)
        elif name == Options.DEFAULT_ROW_STYLE:
            if isinstance(value, dict):
                try:
                    value = Style(**value)
                except TypeError as e:
                    err_msg = f"Invalid style properties for option '{name}': {e}"
                    logger.error(err_msg)
                    raise InvalidArgumentError(err_msg) from e
            value = to_style(value) or Style()
        elif name in (Options.FIELD_DELIMITER, Options.FIELD_ENCLOSURE):
            if not isinstance(value, str) or len(value) != 1:
                err_msg = f"Option '{name}' must be a single character, got {value!r}."
                logger.error(err_msg)
                raise InvalidArgumentError(err_msg)
        elif name == Options.SHEET_NAME_PREFIX:
            if not isinstance(value, str) or not value:
                err_msg = f"Option '{name}' must be a non-empty string."
                logger.error(err_msg)
                raise InvalidArgumentError(err_msg)
            if len(value) > MAX_SHEET_NAME_PREFIX_LENGTH or INVALID_SHEET_NAME_CHARACTERS.search(value) or value.startswith("'"):
                err_msg = (f"Option '{name}' must leave room for a sheet number: at most {MAX_SHEET_NAME_PREFIX_LENGTH} characters, "
                           f"none of \\ / ? * : [ ] and no leading quote. Got {value!r}.")
                logger.error(err_msg)
                raise InvalidArgumentError(err_msg)

        self.data[name] = value

    def get_option(self, name: str) -> Any:
        return self.data.get(name)

    def snapshot(self) -> Dict[str, Any]:
        """Returns a copy of the options. Later changes to this manager do not affect the copy."""
        return dict(self.data)

    def load(self, file_path) -> None:
        """
        Load options from a JSON or YAML file, picked by the file suffix.
        A missing file leaves the options untouched. Unknown keys are rejected.
        """
        file_path = pathlib.Path(file_path)
        file_format = "yaml" if file_path.suffix.lower() in (".yaml", ".yml") else "json"
        logger.debug(f"Attempting to load options from: {file_path} (format: {file_format})")
        try:
            with open(file_path, "r", encoding="utf-8") as file:
                if file_format == "json":
                    loaded_data = json.load(file)
                else:
                    loaded_data = yaml.safe_load(file)
        except FileNotFoundError:
            logger.warning(f"Options file {file_path} not found. Keeping current options.")
            return
        except (json.JSONDecodeError, yaml.YAMLError) as decode_error:
            err_msg = f"Error decoding options file {file_path}: {decode_error}"
            logger.exception(err_msg)
            raise InvalidArgumentError(err_msg) from decode_error

        # An empty YAML file loads as None
        loaded_data = loaded_data or {}
        if not isinstance(loaded_data, dict):
            err_msg = f"Options file {file_path} must contain a mapping, got {type(loaded_data).__name__}."
            logger.error(err_msg)
            raise InvalidArgumentError(err_msg)

        for name, value in loaded_data.items():
            self.set_option(name, value)
        logger.info(f"Successfully loaded options from {file_path}. Found {len(loaded_data)} keys.")
