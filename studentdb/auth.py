"""
This module provides the credential store for the student record manager.

It defines the `CredentialStore` class, which is responsible for:
- Creating the ledger file (`users.txt`) with a default administrator on first run.
- Registering new usernames with an encoded password (append-only).
- Checking whether a username exists and verifying a username/password pair.

Passwords are encoded through a `CredentialVerifier` (see `studentdb.encryption`), so the
legacy XOR scheme can be swapped for a real key derivation without touching callers.
"""
# studentdb/auth.py

import logging
import os

from studentdb import config
from studentdb.activity import ActivityLog
from studentdb.encryption import get_verifier
from studentdb.models import CredentialEntry
from studentdb.storage import ENCODING, ERRORS

logger = logging.getLogger(__name__)


class CredentialStore:
    """An append-only `username token` ledger."""

    def __init__(self, users_file=None, activity_log=None, verifier=None):
        """Opens the ledger, creating it with the default administrator if missing.

        Args:
            users_file (str, optional): Ledger path. Defaults to `config.USERS_FILE`.
            activity_log (ActivityLog, optional): Where account creation markers go.
            verifier (CredentialVerifier, optional): Password encoding scheme.
                Defaults to the one named by `config.CREDENTIAL_SCHEME`.
        """
        self.users_file = users_file if users_file is not None else config.USERS_FILE
        self.activity = activity_log if activity_log is not None else ActivityLog()
        self.verifier = verifier if verifier is not None else get_verifier()
        self._ensure_ledger()

    def _ensure_ledger(self):
        """Writes the default administrator entry if the ledger does not exist yet."""
        if os.path.exists(self.users_file):
            return
        directory = os.path.dirname(self.users_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        token = self.verifier.encode(config.DEFAULT_ADMIN_PASSWORD)
        with open(self.users_file, "w", encoding=ENCODING, errors=ERRORS) as f:
            f.write(f"{config.DEFAULT_ADMIN_USERNAME} {token}\n")
        logger.info("Created credential ledger %s with default user %r", self.users_file, config.DEFAULT_ADMIN_USERNAME)

    def entries(self):
        """Yields every ledger entry in file order.

        The ledger is read as a stream of whitespace-separated tokens taken two at a
        time; a dangling username without a token is ignored.
        """
        try:
            with open(self.users_file, "r", encoding=ENCODING, errors=ERRORS) as f:
                tokens = f.read().split()
        except FileNotFoundError:
            return
        for i in range(0, len(tokens) - 1, 2):
            yield CredentialEntry(username=tokens[i], token=tokens[i + 1])

    def _find(self, username: str):
        for entry in self.entries():
            if entry.username == username:
                return entry
        return None

    def exists(self, username: str) -> bool:
        return self._find(username) is not None

    def register(self, username: str, password: str) -> bool:
        """Adds a user to the ledger and creates their activity log.

        Returns:
            bool: False if the username is already taken.
        """
        if self.exists(username):
            return False
        token = self.verifier.encode(password)
        with open(self.users_file, "a", encoding=ENCODING, errors=ERRORS) as f:
            f.write(f"{username} {token}\n")
        self.activity.mark_created(username)
        logger.info("Registered user %r", username)
        return True

    def verify(self, username: str, password: str) -> bool:
        """Checks a password against the first ledger entry for `username`.

        Unknown users and wrong passwords both return False.
        """
        entry = self._find(username)
        if entry is None:
            return False
        return self.verifier.verify(password, entry.token)
