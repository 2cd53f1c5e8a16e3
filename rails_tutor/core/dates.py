"""Day-first date helpers used by front matter and log headings."""

from __future__ import annotations

import re
from datetime import date, datetime

DATE_FORMAT = "%d-%m-%Y"
DATE_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4}$")


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    """Parse a DD-MM-YYYY string, raising ValueError on anything else."""
    text = str(value).strip()
    if not DATE_PATTERN.match(text):
        raise ValueError(f"Expected DD-MM-YYYY date, got {value!r}")
    return datetime.strptime(text, DATE_FORMAT).date()
