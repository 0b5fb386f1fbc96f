class SheetWriterError(Exception):
    """Base class for every error raised by sheet_writer."""


class WriterNotOpenedError(SheetWriterError):
    """Raised when a sheet or row operation is attempted before the writer was opened."""


class WriterClosedError(WriterNotOpenedError):
    """Raised when the writer is used after it has been closed."""


class WriterAlreadyOpenedError(SheetWriterError):
    """Raised when the writer is configured after it has been opened."""


class SheetNotFoundError(SheetWriterError):
    """Raised when a sheet handle does not belong to the workbook."""


class InvalidSheetNameError(SheetWriterError, ValueError):
    pass


class InvalidArgumentError(SheetWriterError, ValueError):
    pass


class UnsupportedTypeError(SheetWriterError, ValueError):
    pass


class SheetWriterIOError(SheetWriterError, OSError):
    """Raised when the output sink cannot be opened or written."""
