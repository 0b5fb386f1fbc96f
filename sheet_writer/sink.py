import logging
import pathlib

from sheet_writer.exceptions import SheetWriterIOError

# --- Logger Setup ---
logger = logging.getLogger(f"sheet_writer.{__name__}")
# --- End Logger Setup ---


class FileSink:
    """
    Writes the encoded workbook into a single file.
    The file is opened (and truncated) when the writer opens, so an unwritable path fails early.
    """
    def __init__(self, path):
        self.path = pathlib.Path(path)
        self.file = None

    def open(self):
        logger.debug(f"Opening file sink: {self.path}")
        try:
            self.file = self.path.open("wb")
        except OSError as e:
            err_msg = f"Unable to open {self.path} for writing: {e}"
            logger.error(err_msg)
            raise SheetWriterIOError(err_msg) from e

    def write(self, data: bytes):
        if self.file is None:
            raise SheetWriterIOError(f"File sink {self.path} is not open.")
        try:
            self.file.write(data)
        except OSError as e:
            err_msg = f"Unable to write to {self.path}: {e}"
            logger.exception(err_msg)
            raise SheetWriterIOError(err_msg) from e
        logger.debug(f"Wrote {len(data)} bytes to {self.path}")

    def close(self):
        if self.file:
            self.file.close()
            logger.debug(f"Closed file sink: {self.path}")
        self.file = None

    def discard(self):
        """Closes the file and removes it, leaving no partial output behind."""
        self.close()
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            err_msg = f"Unable to remove {self.path}: {e}"
            logger.error(err_msg)
            raise SheetWriterIOError(err_msg) from e
        logger.info(f"Removed unfinished output {self.path}")

    def __repr__(self):
        return f"FileSink({str(self.path)!r})"


class StreamSink:
    """Writes the encoded workbook into a binary stream owned by the caller. The stream is never closed."""
    def __init__(self, stream):
        if not hasattr(stream, "write"):
            raise TypeError("StreamSink needs an object with a write() method.")
        self.stream = stream

    def open(self):
        return

    def write(self, data: bytes):
        try:
            self.stream.write(data)
        except OSError as e:
            err_msg = f"Unable to write to output stream: {e}"
            logger.exception(err_msg)
            raise SheetWriterIOError(err_msg) from e

    def close(self):
        flush = getattr(self.stream, "flush", None)
        if flush:
            flush()

    def discard(self):
        # Bytes only reach the stream when the workbook is saved
        return

    def __repr__(self):
        return f"StreamSink({self.stream!r})"


class DirectorySink:
    """
    A directory acting as the workbook: every worksheet becomes one member file.
    """
    def __init__(self, path):
        self.path = pathlib.Path(path)

    def open(self):
        logger.debug(f"Opening directory sink: {self.path}")
        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            err_msg = f"Unable to create output directory {self.path}: {e}"
            logger.error(err_msg)
            raise SheetWriterIOError(err_msg) from e

    def write_member(self, name: str, data: bytes):
        member_path = self.path / name
        try:
            member_path.write_bytes(data)
        except OSError as e:
            err_msg = f"Unable to write {member_path}: {e}"
            logger.exception(err_msg)
            raise SheetWriterIOError(err_msg) from e
        logger.debug(f"Wrote {len(data)} bytes to {member_path}")

    def close(self):
        return

    def discard(self):
        # Members are only written when the workbook is saved
        return

    def __repr__(self):
        return f"DirectorySink({str(self.path)!r})"
