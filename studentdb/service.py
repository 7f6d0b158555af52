"""
This module provides the session facade that the user interface drives.

It defines the `StudentDBService` class, which is responsible for:
- Wiring together the record store, the credential store and the activity log.
- Registration, login and logout, and tracking the logged-in user.
- Role routing: the default administrator may change records, everyone else may read.
- Writing exactly one activity log line for every record action a user performs.
"""
# studentdb/service.py

import logging

from studentdb import config
from studentdb.activity import ActivityLog
from studentdb.auth import CredentialStore
from studentdb.records import RecordStore

logger = logging.getLogger(__name__)


class StudentDBService:
    """Manages the session and routes user actions to the stores."""

    def __init__(self, student_file=None, users_file=None, log_folder=None, verifier=None):
        """Creates the stores, bootstrapping any missing files.

        All arguments default to the locations in `studentdb.config`.
        """
        self.current_user = None
        self.activity = ActivityLog(log_folder)
        self.activity.ensure_folder()
        self.credentials = CredentialStore(users_file, activity_log=self.activity, verifier=verifier)
        self.records = RecordStore(student_file)

    # Session

    @staticmethod
    def _is_valid_username(username: str) -> bool:
        """Usernames become ledger tokens and log file names."""
        if not username:
            return False
        if any(c.isspace() for c in username):
            return False
        return not any(sep in username for sep in ("/", "\\", ".."))

    def register_user(self, username: str, password: str):
        """Registers a new account.

        Returns:
            str or bool: 'invalid_username', 'invalid_password' (empty password),
                         True for success, or False if the username is taken.
        """
        if not self._is_valid_username(username):
            return 'invalid_username'
        if not password:
            return 'invalid_password'
        if not self.credentials.register(username, password):
            return False
        self.activity.append(username, "Registered")
        return True

    def login(self, username: str, password: str):
        """Authenticates a user and starts their session.

        Returns:
            str or None: The username on success, None otherwise.
        """
        if not self.credentials.verify(username, password):
            logger.info("Failed login for %r", username)
            return None
        self.current_user = username
        self.activity.append(username, "Logged in")
        return username

    def logout(self):
        if self.current_user is not None:
            self.activity.append(self.current_user, "Logged out")
        self.current_user = None

    @property
    def is_admin(self) -> bool:
        return self.current_user == config.DEFAULT_ADMIN_USERNAME

    def _require_user(self) -> str:
        if self.current_user is None:
            raise PermissionError("No user is logged in.")
        return self.current_user

    def _require_admin(self) -> str:
        user = self._require_user()
        if not self.is_admin:
            raise PermissionError(f"User {user!r} may not modify records.")
        return user

    def _log(self, user: str, message: str):
        self.activity.append(user, message)

    # Record actions available to every user

    def list_students(self) -> list:
        user = self._require_user()
        students = self.records.list_all()
        self._log(user, "Viewed all students")
        return students

    def search_by_name(self, term: str) -> list:
        user = self._require_user()
        results = self.records.search_by_name(term)
        self._log(user, f"Searched name: {term}")
        return results

    def find_student(self, student_id: int):
        user = self._require_user()
        student = self.records.find_by_id(student_id)
        self._log(user, f"Searched ID: {student_id}")
        return student

    def get_student(self, student_id: int):
        """Looks up a record without writing an activity line, for edit forms."""
        self._require_user()
        return self.records.find_by_id(student_id)

    def get_all_students(self) -> list:
        """Unlogged snapshot of every record, for downloads."""
        self._require_admin()
        return self.records.list_all()

    def get_activity(self) -> list:
        """Returns the logged-in user's own activity entries."""
        return self.activity.read(self._require_user())

    # Administrator actions

    def add_student(self, name: str, age: int, branch: str, cgpa: float):
        user = self._require_admin()
        student = self.records.add(name, age, branch, cgpa)
        self._log(user, f"Added student ID {student.id}")
        return student

    def update_student(self, student_id: int, name: str, age: int, branch: str, cgpa: float) -> bool:
        user = self._require_admin()
        updated = self.records.update(student_id, name, age, branch, cgpa)
        self._log(user, f"Updated ID {student_id}")
        return updated

    def delete_student(self, student_id: int) -> bool:
        user = self._require_admin()
        removed = self.records.remove_by_id(student_id)
        self._log(user, f"Deleted ID {student_id}")
        return removed

    def import_students(self, path: str) -> bool:
        user = self._require_admin()
        imported = self.records.import_file(path)
        self._log(user, f"Imported CSV: {path}")
        return imported

    def export_students(self, path: str) -> bool:
        user = self._require_admin()
        exported = self.records.export_file(path)
        self._log(user, f"Exported CSV: {path}")
        return exported
