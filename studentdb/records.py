"""
This module provides the record store for student data.

It defines the `RecordStore` class, which is responsible for:
- Loading every record from the backing storage into memory.
- Assigning identifiers (always one more than the largest id currently held).
- Persisting the whole collection after every add, update, delete and import.
- Lookup by id and case-insensitive search by name.
- Importing records from, and exporting them to, external files in the same format.

The store knows nothing about users or sessions; activity logging is the caller's job.
"""
# studentdb/records.py

import dataclasses
import logging
import numbers
import operator

from studentdb import codec, config
from studentdb.models import Student
from studentdb.storage import FlatFileStorage, read_text_lines, write_text_lines

logger = logging.getLogger(__name__)


def _check_numbers(age, cgpa):
    """Returns `age` as an int and `cgpa` as a float.

    Raises:
        TypeError: If `age` is not an integer (a float such as 20.7 is refused
            rather than truncated) or `cgpa` is not a number.
    """
    if isinstance(age, bool) or isinstance(cgpa, bool) or not isinstance(cgpa, numbers.Real):
        raise TypeError(f"age and cgpa must be numbers, got {age!r} and {cgpa!r}")
    return operator.index(age), float(cgpa)


class RecordStore:
    """Owns the in-memory student collection and its backing storage."""

    def __init__(self, storage=None):
        """Creates the store and loads whatever the storage already holds.

        Args:
            storage: A storage adapter (`FlatFileStorage`, `MemoryStorage`) or a file
                     path. Defaults to a flat file at `config.STUDENT_FILE`.
        """
        if storage is None:
            storage = config.STUDENT_FILE
        if isinstance(storage, str):
            storage = FlatFileStorage(storage)
        self.storage = storage
        self._students = []
        self._next_id = 1
        self.load()

    @property
    def next_id(self) -> int:
        """The id the next added or imported record will receive."""
        return self._next_id

    def __len__(self):
        return len(self._students)

    def _refresh_next_id(self):
        self._next_id = max((s.id for s in self._students), default=0) + 1

    def load(self):
        """Replaces the in-memory collection with the storage contents.

        Lines that do not decode to a record with a positive id are dropped.
        """
        self.storage.ensure()
        students = []
        dropped = 0
        for line in self.storage.read_lines():
            if not line:
                continue
            student = codec.decode(line)
            if student.is_valid:
                students.append(student)
            else:
                dropped += 1
        if dropped:
            logger.warning("Skipped %d malformed line(s) while loading %r", dropped, self.storage)
        self._students = students
        self._refresh_next_id()

    def save(self):
        """Rewrites the storage with every record, in store order."""
        self.storage.write_lines(codec.encode(s) for s in self._students)

    def add(self, name: str, age: int, branch: str, cgpa: float) -> Student:
        """Adds a new record with the next free id and persists the collection."""
        age, cgpa = _check_numbers(age, cgpa)
        student = Student(id=self._next_id, name=name, age=age, branch=branch, cgpa=cgpa)
        self._next_id += 1
        self._students.append(student)
        self.save()
        return student

    def list_all(self) -> list:
        """Returns a copy of every record in store order."""
        return list(self._students)

    def find_by_id(self, student_id: int):
        """Returns the first record with `student_id`, or None."""
        for student in self._students:
            if student.id == student_id:
                return student
        return None

    def remove_by_id(self, student_id: int) -> bool:
        """Removes every record with `student_id`.

        Returns:
            bool: True if anything was removed (the collection is then persisted).
        """
        remaining = [s for s in self._students if s.id != student_id]
        if len(remaining) == len(self._students):
            return False
        self._students = remaining
        self.save()
        return True

    def update(self, student_id: int, name: str, age: int, branch: str, cgpa: float) -> bool:
        """Overwrites every field except the id of an existing record.

        Returns:
            bool: False if no record has `student_id`; nothing is written in that case.
        """
        age, cgpa = _check_numbers(age, cgpa)
        for index, student in enumerate(self._students):
            if student.id == student_id:
                self._students[index] = dataclasses.replace(
                    student, name=name, age=age, branch=branch, cgpa=cgpa
                )
                self.save()
                return True
        return False

    def search_by_name(self, term: str) -> list:
        """Case-insensitive substring search on the name. An empty term matches all."""
        needle = term.lower()
        return [s for s in self._students if needle in s.name.lower()]

    def import_file(self, path: str) -> bool:
        """Appends every non-blank line of an external file as a new record.

        Ids in the source are ignored and fresh ones assigned. Lines that fail to
        decode are still admitted, as zeroed records with a fresh id.

        Returns:
            bool: False if the file cannot be read, True otherwise.
        """
        try:
            lines = read_text_lines(path)
        except OSError as e:
            logger.warning("Could not import %s (%s)", path, e)
            return False

        imported = 0
        degenerate = 0
        for line in lines:
            if not line:
                continue
            decoded = codec.decode(line)
            if not decoded.is_valid:
                # TODO: skip undecodable rows once existing import files are checked for them
                degenerate += 1
            self._students.append(dataclasses.replace(decoded, id=self._next_id))
            self._next_id += 1
            imported += 1
        self.save()
        logger.info("Imported %d record(s) from %s", imported, path)
        if degenerate:
            logger.warning("%d imported line(s) from %s did not decode and were stored as blank records", degenerate, path)
        return True

    def export_file(self, path: str) -> bool:
        """Writes every record to `path` in the backing file format.

        Returns:
            bool: False if the file cannot be written.
        """
        try:
            write_text_lines(path, (codec.encode(s) for s in self._students))
        except OSError as e:
            logger.warning("Could not export to %s (%s)", path, e)
            return False
        return True
