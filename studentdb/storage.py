"""
Storage adapters for the record store.

The `RecordStore` only needs three things from its backing medium: make sure it
exists, read every line, and replace every line. `FlatFileStorage` does this against a
plain text file; `MemoryStorage` keeps the lines in a list and is handy for tests or
for a throwaway session.
"""
# studentdb/storage.py

import logging
import os

logger = logging.getLogger(__name__)


ENCODING = "utf-8"
# Bytes that are not valid UTF-8 are carried through as surrogate escapes.
ERRORS = "surrogateescape"


def read_text_lines(path: str) -> list:
    """Reads a text file and returns its lines without line terminators.

    Only `\\n` ends a line; a `\\r` directly before it is dropped, any other `\\r`
    is kept as part of the line.
    """
    with open(path, "r", encoding=ENCODING, errors=ERRORS, newline="") as f:
        content = f.read()
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def write_text_lines(path: str, lines) -> None:
    """Truncates `path` and writes each line followed by a newline."""
    with open(path, "w", encoding=ENCODING, errors=ERRORS, newline="") as f:
        for line in lines:
            f.write(line + "\n")


class FlatFileStorage:
    """Line storage backed by a single text file."""

    def __init__(self, path: str):
        self.path = path

    def ensure(self):
        """Creates an empty file if none exists yet."""
        if not os.path.exists(self.path):
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding=ENCODING):
                pass
            logger.info("Created empty record file %s", self.path)

    def read_lines(self) -> list:
        return read_text_lines(self.path)

    def write_lines(self, lines) -> None:
        write_text_lines(self.path, lines)

    def __repr__(self):
        return f"FlatFileStorage({self.path!r})"


class MemoryStorage:
    """Line storage kept in memory. Nothing survives the process."""

    def __init__(self, lines=None):
        self.lines = list(lines or [])

    def ensure(self):
        pass

    def read_lines(self) -> list:
        return list(self.lines)

    def write_lines(self, lines) -> None:
        self.lines = list(lines)
