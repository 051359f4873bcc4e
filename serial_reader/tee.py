"""
tee.py – copy device output to the console and, optionally, a file

The logging module is not used here: it terminates every record with a
newline, and the device stream has to reach both sides byte for byte.
"""

import sys
from typing import BinaryIO, Optional

from .errors import CloseFailed, FileCreateFailed

# no stdout at all (pythonw), a closed pipe, or a closed stream
CONSOLE_ERRORS = (AttributeError, OSError, ValueError)


def say(message: str) -> None:
    """Print a status line; like device output, the console is best effort."""
    try:
        print(message, flush=True)
    except CONSOLE_ERRORS:
        pass


class LogWriter:
    """
    Writes every buffer to the console, and to *file* when one is given.

    The result of write() is the file write's result; console output is
    best effort. Use as a context manager so the file is closed on every
    exit path.
    """

    def __init__(self, file: Optional[BinaryIO] = None,
                 console: Optional[BinaryIO] = None):
        self.file = file
        self._console = console

    @classmethod
    def create(cls, filename: str, console: Optional[BinaryIO] = None) -> "LogWriter":
        """Create (or truncate) *filename* and return a writer teeing into it."""
        try:
            f = open(filename, "wb")
        except OSError as e:
            raise FileCreateFailed(
                f"Failed creating log file {filename}: {e}") from e
        return cls(f, console)

    @property
    def console(self) -> BinaryIO:
        # resolved late so a redirected sys.stdout is honoured
        if self._console is not None:
            return self._console
        return sys.stdout.buffer

    def write(self, data: bytes) -> int:
        try:
            sys.stdout.flush()
            console = self.console
            console.write(data)
            console.flush()
        except CONSOLE_ERRORS:
            pass    # console is best effort
        if self.file is None:
            return len(data)
        n = self.file.write(data)
        self.file.flush()
        return n

    def close(self) -> None:
        if self.file is None:
            return
        f, self.file = self.file, None
        try:
            f.close()
        except OSError as e:
            raise CloseFailed(f"Failed closing log file: {e}") from e

    def __enter__(self) -> "LogWriter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
