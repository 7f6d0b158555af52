"""
Line codec for the student record file.

One record per line, fields in the fixed order `id,"name",age,"branch",cgpa`. The two
text fields are wrapped in double quotes so that commas inside them survive. Quotes
are stripped on the way back in rather than unescaped, so a name that itself contains
a double quote does not round-trip.
"""
# studentdb/codec.py

from studentdb.models import Student

DELIMITER = ","
QUOTE = '"'
FIELD_COUNT = 5


def encode(student: Student) -> str:
    """Serializes a record to a single line without a trailing newline."""
    return DELIMITER.join([
        str(student.id),
        f"{QUOTE}{student.name}{QUOTE}",
        str(student.age),
        f"{QUOTE}{student.branch}{QUOTE}",
        repr(float(student.cgpa)),
    ])


def split_fields(line: str) -> list:
    """Splits a line on commas that are not inside a quoted section.

    Quote characters toggle the quoted state and are dropped from the output.
    """
    fields = []
    current = []
    in_quotes = False
    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
            continue
        if char == DELIMITER and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def decode(line: str) -> Student:
    """Parses one line into a record.

    Returns `Student.invalid()` (id 0) when the line has fewer than five fields or a
    numeric field does not parse. Extra trailing fields are ignored.
    """
    fields = split_fields(line.rstrip("\r\n"))
    if len(fields) < FIELD_COUNT:
        return Student.invalid()
    try:
        return Student(
            id=int(fields[0]),
            name=fields[1],
            age=int(fields[2]),
            branch=fields[3],
            cgpa=float(fields[4]),
        )
    except ValueError:
        return Student.invalid()
