"""
Per-user activity trail.

Each user has a plain text file `<LOG_FOLDER>/<username>.txt`. Events are appended as
`YYYY-MM-DD HH:MM:SS - message` in local time; the first line of a registered user's
file is a `== User: <name> created ==` marker.
"""
# studentdb/activity.py

import logging
import os
from datetime import datetime

from studentdb import config
from studentdb.models import LogEntry
from studentdb.storage import ENCODING, ERRORS, read_text_lines

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
SEPARATOR = " - "


class ActivityLog:
    """Appends and reads per-user event lines."""

    def __init__(self, folder=None):
        self.folder = folder if folder is not None else config.LOG_FOLDER

    def ensure_folder(self):
        os.makedirs(self.folder, exist_ok=True)

    def path_for(self, username: str) -> str:
        return os.path.join(self.folder, f"{username}.txt")

    def _write(self, username: str, line: str):
        self.ensure_folder()
        with open(self.path_for(username), "a", encoding=ENCODING, errors=ERRORS, newline="") as f:
            f.write(line + "\n")

    def append(self, username: str, message: str, now=None):
        """Appends one timestamped event to the user's log."""
        now = now or datetime.now()
        self._write(username, f"{now.strftime(TIMESTAMP_FORMAT)}{SEPARATOR}{message}")
        logger.debug("%s: %s", username, message)

    def mark_created(self, username: str):
        """Writes the account creation marker."""
        self._write(username, f"== User: {username} created ==")

    def read(self, username: str) -> list:
        """Returns the user's log as `LogEntry` objects, oldest first.

        Lines without a parseable timestamp (the creation marker) carry `timestamp=None`.
        A user with no log yet gets an empty list.
        """
        try:
            lines = read_text_lines(self.path_for(username))
        except FileNotFoundError:
            return []

        entries = []
        for line in lines:
            if not line:
                continue
            stamp, sep, message = line.partition(SEPARATOR)
            try:
                timestamp = datetime.strptime(stamp, TIMESTAMP_FORMAT) if sep else None
            except ValueError:
                timestamp = None
            if timestamp is None:
                message = line
            entries.append(LogEntry(username=username, timestamp=timestamp, message=message))
        return entries
