from __future__ import annotations

from polyenv.parsers.dialects import DIALECTS, rules_for
from polyenv.parsers.dotenv_parser import DotenvParser, iter_assignments, parse_dotenv
from polyenv.parsers.types import Assignment

__all__ = [
    "Assignment",
    "DIALECTS",
    "DotenvParser",
    "iter_assignments",
    "parse_dotenv",
    "rules_for",
]
