from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Assignment:
    """ A resolved key-value pair from a dotenv file."""
    key: str
    value: str
    line: int
