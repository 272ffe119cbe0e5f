# file: src/overconsumption/dsv.py
"""
Minimal delimiter-separated text parser.

Only the two conventions the datasets use are needed (comma and semicolon).
No quoting, escaping or multi-line fields.
"""

from __future__ import annotations

from typing import Dict, List

RawRecord = Dict[str, str]


def parse_delimited(text: str, delimiter: str = ",") -> List[RawRecord]:
    """
    Parse delimited text into header-keyed records.

    Rules:
    1. First line is the header row; each header is trimmed
    2. Blank lines (after trim) are skipped
    3. Fields are zipped positionally against headers and trimmed
    4. Missing trailing fields become "", extra fields are dropped

    Args:
        text: Raw file content
        delimiter: Single field separator character

    Returns:
        Records in input line order
    """
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")

    lines = text.split("\n")
    if not lines or not lines[0].strip():
        return []

    headers = [header.strip() for header in lines[0].split(delimiter)]

    records: List[RawRecord] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        values = line.split(delimiter)
        records.append({
            header: values[i].strip() if i < len(values) else ""
            for i, header in enumerate(headers)
        })

    return records
