"""
System-level tests for the student record manager.

These tests drive the application the way the shell does, from a fresh working
directory with default configuration, and check the files left behind.
"""
import os

from studentdb import config
from studentdb.service import StudentDBService


def test_first_run_in_empty_directory(tmp_path, monkeypatch):
    """
    A first run creates every file in the working directory with the defaults:
    an empty record file, a ledger holding the default administrator and the log folder.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "CREDENTIAL_SCHEME", "xor")

    service = StudentDBService()

    assert (tmp_path / config.STUDENT_FILE).read_text(encoding="utf-8") == ""
    assert (tmp_path / config.USERS_FILE).read_text(encoding="utf-8") == "admin 0A0114585C\n"
    assert os.path.isdir(tmp_path / config.LOG_FOLDER)
    assert service.login("admin", "admin") == "admin"


def test_end_to_end_session(tmp_path, monkeypatch):
    """
    Full session: register, admin maintenance, user lookup, and the resulting files.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "CREDENTIAL_SCHEME", "xor")
    service = StudentDBService()

    assert service.register_user("bob", "pw1") is True

    service.login("admin", "admin")
    for name, age, branch, cgpa in [("Alice", 20, "CS", 8.5), ("Bob", 21, "EE", 7.0), ("Cara", 19, "ME", 9.1)]:
        service.add_student(name, age, branch, cgpa)
    assert service.delete_student(2) is True
    assert service.delete_student(2) is False
    assert service.add_student("Dave", 22, "CS", 6.0).id == 4
    service.logout()

    service.login("bob", "pw1")
    assert [s.id for s in service.list_students()] == [1, 3, 4]
    assert service.find_student(2) is None
    service.logout()

    records = (tmp_path / "students.csv").read_text(encoding="utf-8").splitlines()
    assert records == [
        '1,"Alice",20,"CS",8.5',
        '3,"Cara",19,"ME",9.1',
        '4,"Dave",22,"CS",6.0',
    ]
    ledger = (tmp_path / "users.txt").read_text(encoding="utf-8").splitlines()
    assert ledger[0] == "admin 0A0114585C"
    assert ledger[1].startswith("bob ")

    bob_log = (tmp_path / "user_logs" / "bob.txt").read_text(encoding="utf-8").splitlines()
    assert bob_log[0] == "== User: bob created =="
    assert bob_log[-1].endswith(" - Logged out")
    assert len(bob_log) == 6
