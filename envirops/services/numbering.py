"""
Document numbering: PREFIX-YEAR-NNN (COT-2024-007, OS-2024-012, OC-2024-003).

The next number increments the suffix of the greatest existing number and
restarts at 001 on a new year or when nothing has been numbered yet.
"""
import re
from datetime import date
from typing import Iterable, Optional, Tuple

from sqlalchemy.orm import Session

NUMBER_RE = re.compile(r'^(?P<prefix>[A-Z]+)-(?P<year>\d{4})-(?P<seq>\d+)$')


def parse_number(number: str) -> Optional[Tuple[str, int, int]]:
    """Split 'COT-2024-007' into ('COT', 2024, 7); None for free-form numbers."""
    match = NUMBER_RE.match((number or '').strip())
    if not match:
        return None
    return match.group('prefix'), int(match.group('year')), int(match.group('seq'))


def format_number(prefix: str, year: int, seq: int) -> str:
    return f"{prefix}-{year}-{seq:03d}"


def next_document_number(existing: Iterable[str], prefix: str, year: int) -> str:
    """
    Compute the number that follows the greatest of ``existing``.

    Numbers with another prefix or that do not follow the pattern are ignored.
    """
    greatest = None
    for number in existing:
        parsed = parse_number(number)
        if not parsed or parsed[0] != prefix:
            continue
        key = (parsed[1], parsed[2])
        if greatest is None or key > greatest:
            greatest = key

    if greatest is None or greatest[0] < year:
        return format_number(prefix, year, 1)
    return format_number(prefix, year, greatest[1] + 1)


def next_number_for(model, prefix: str, session: Session, today: Optional[date] = None) -> str:
    """
    Next number for a document table.

    Soft-deleted rows are included: ``number`` is unique across the whole
    table, so their numbers are never handed out again.
    """
    year = (today or date.today()).year
    numbers = [
        row[0] for row in
        session.query(model.number).filter(model.number.like(f"{prefix}-%")).all()
    ]
    return next_document_number(numbers, prefix, year)
