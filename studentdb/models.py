"""
This module defines the data models for the student record manager.

The models are frozen dataclasses: the stores hand out snapshots that callers cannot
mutate, and the only way to change a stored record is through `RecordStore.update`.
"""
# studentdb/models.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Represents a single student record.

    Attributes:
        id (int): Identifier assigned by the record store. Values of 0 or below mark
                  a line that could not be decoded.
        name (str): The student's name.
        age (int): The student's age in years.
        branch (str): The branch or department of study.
        cgpa (float): Cumulative grade point average.
    """
    id: int
    name: str
    age: int
    branch: str
    cgpa: float

    @classmethod
    def invalid(cls) -> "Student":
        """The zeroed record returned for lines that cannot be decoded."""
        return cls(id=0, name="", age=0, branch="", cgpa=0.0)

    @property
    def is_valid(self) -> bool:
        return self.id > 0

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "age": self.age, "branch": self.branch, "cgpa": self.cgpa}


@dataclass(frozen=True)
class CredentialEntry:
    """One `username token` pair from the credential ledger."""
    username: str
    token: str


@dataclass(frozen=True)
class LogEntry:
    """One line of a user's activity log.

    Attributes:
        username (str): Owner of the log file.
        timestamp (datetime or None): Local time of the event. `None` for the marker
                                      line written when the account is created.
        message (str): The event description.
    """
    username: str
    timestamp: Optional[datetime]
    message: str
