"""
Pytest configuration file for the student record manager test suite.

This file defines shared fixtures used across the test modules. Every fixture points
the stores at files under pytest's `tmp_path`, so tests never touch the real
`students.csv`, `users.txt` or `user_logs/` and never interfere with each other.
"""
import pytest

from studentdb.activity import ActivityLog
from studentdb.auth import CredentialStore
from studentdb.encryption import XorHexVerifier
from studentdb.records import RecordStore
from studentdb.service import StudentDBService


@pytest.fixture
def student_file(tmp_path):
    """Path of a record file that does not exist yet."""
    return str(tmp_path / "students.csv")


@pytest.fixture
def store(student_file):
    """An empty `RecordStore` backed by a temporary file."""
    return RecordStore(student_file)


@pytest.fixture
def seeded_store(store):
    """A store holding three students with ids 1, 2 and 3."""
    store.add("Alice", 20, "CS", 8.5)
    store.add("Bob", 21, "EE", 7.25)
    store.add("Charlie", 22, "ME", 9.0)
    return store


@pytest.fixture
def activity(tmp_path):
    """An `ActivityLog` writing into a temporary folder."""
    return ActivityLog(str(tmp_path / "user_logs"))


@pytest.fixture
def credentials(tmp_path, activity):
    """A `CredentialStore` using the legacy XOR scheme and a temporary ledger."""
    return CredentialStore(str(tmp_path / "users.txt"), activity_log=activity, verifier=XorHexVerifier())


@pytest.fixture
def service(tmp_path):
    """A `StudentDBService` with every file under `tmp_path`."""
    return StudentDBService(
        student_file=str(tmp_path / "students.csv"),
        users_file=str(tmp_path / "users.txt"),
        log_folder=str(tmp_path / "user_logs"),
        verifier=XorHexVerifier(),
    )


@pytest.fixture
def admin_service(service):
    """A service with the default administrator logged in."""
    assert service.login("admin", "admin") == "admin"
    return service

