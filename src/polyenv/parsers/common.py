from __future__ import annotations

import logging
from dataclasses import dataclass

from polyenv.core.errors import DotenvSyntaxError

log = logging.getLogger("polyenv.parser")


@dataclass(frozen=True)
class ParseContext:
    """
    Per-run error policy shared by the tokenizer and the escape decoder.

      debug  -> log a diagnostic for every malformed construct
      strict -> raise DotenvSyntaxError instead of recovering
    """

    source: str
    strict: bool = True
    debug: bool = False

    def report(self, line: int, column: int, message: str) -> None:
        if self.debug:
            log.warning("%s:%d: %s", self.source, line, message)
        if self.strict:
            raise DotenvSyntaxError(self.source, line, column, message)

    def note(self, line: int, message: str) -> None:
        """Diagnostic for constructs the dialect always tolerates."""
        if self.debug:
            log.warning("%s:%d: %s", self.source, line, message)


def cut_null(s: str) -> str:
    """Truncate at the first NUL; process environments cannot hold it."""
    idx = s.find("\0")
    return s if idx < 0 else s[:idx]
