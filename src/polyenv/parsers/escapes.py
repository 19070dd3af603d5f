"""
Backslash escape decoding, driven by a per-dialect EscapeTable.

The decoder scans left to right. For every backslash it looks at the next
character and, in order:

  1. a line break      -> dropped together with the backslash (if enabled)
  2. table.simple      -> replaced by the mapped text
  3. octal digit       -> 1-3 digit octal byte (if enabled)
  4. x / u / U         -> hex byte, UTF-16 unit, 32-bit code point (if enabled)
  5. anything else     -> table.fallback decides

Malformed numeric escapes and (with Fallback.REPORT) unknown escapes go
through ParseContext.report(); when that does not raise, the backslash is
kept and scanning resumes right after it, so the rest of the sequence shows
up as ordinary text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Tuple

from polyenv.parsers.common import ParseContext


class Fallback(str, Enum):
    KEEP = "keep"            # keep the backslash, rescan the next char as text
    UNESCAPE = "unescape"    # drop the backslash, keep the next char
    REPORT = "report"        # diagnose (strict: fail), then behave like KEEP


@dataclass(frozen=True)
class EscapeTable:
    simple: Mapping[str, str] = field(default_factory=dict)
    line_continuation: bool = False
    octal: bool = False
    hex: bool = False
    unicode: bool = False
    fallback: Fallback = Fallback.KEEP


_OCTAL_RE = re.compile(r"[0-7]{1,3}")
_HEX_RE = re.compile(r"[0-9A-Fa-f]+")
_OCTAL_DIGITS = frozenset("01234567")


def _position(text: str, index: int, line: int, column: int) -> Tuple[int, int]:
    """Map an index in a (possibly multi-line) value back to line/column."""
    breaks = text.count("\n", 0, index)
    if not breaks:
        return line, column + index
    return line + breaks, index - text.rfind("\n", 0, index)


def _is_hex(s: str, width: int) -> bool:
    return len(s) == width and _HEX_RE.fullmatch(s) is not None


def decode_escapes(
    text: str,
    table: EscapeTable,
    ctx: ParseContext,
    *,
    line: int = 1,
    column: int = 1,
) -> str:
    """
    Decode backslash escapes in text.

    line/column locate text[0] in the source file and are only used for
    diagnostics.
    """
    out: List[str] = []
    i = 0
    n = len(text)

    def fail(at: int, message: str) -> None:
        ctx.report(*_position(text, at, line, column), message)
        out.append("\\")

    while i < n:
        j = text.find("\\", i)
        if j < 0:
            out.append(text[i:])
            break

        out.append(text[i:j])
        i = j + 1

        if i >= n:
            # a lone trailing backslash stays in the value; recovery never drops characters
            if table.fallback is Fallback.REPORT:
                fail(j, "truncated escape sequence")
            else:
                out.append("\\")
            break

        ch = text[i]

        if ch == "\n" and table.line_continuation:
            i += 1
            continue

        simple = table.simple.get(ch)
        if simple is not None:
            out.append(simple)
            i += 1
            continue

        if table.octal and ch in _OCTAL_DIGITS:
            m = _OCTAL_RE.match(text, i)
            assert m is not None
            code = int(m.group(), 8)
            if code > 0xFF:
                fail(j, f"invalid octal escape sequence: \\{m.group()}")
                continue
            out.append(chr(code))
            i = m.end()
            continue

        if table.hex and ch == "x":
            arg = text[i + 1 : i + 3]
            if not _is_hex(arg, 2):
                fail(j, f"invalid hex escape sequence: \\x{arg}")
                continue
            out.append(chr(int(arg, 16)))
            i += 3
            continue

        if table.unicode and ch in ("u", "U"):
            width = 4 if ch == "u" else 8
            arg = text[i + 1 : i + 1 + width]
            code = int(arg, 16) if _is_hex(arg, width) else -1
            # \u takes one UTF-16 unit: a lone surrogate can't stand alone
            if code < 0 or 0xD800 <= code <= 0xDFFF or code > 0x10FFFF:
                fail(j, f"invalid unicode escape sequence: \\{ch}{arg}")
                continue
            out.append(chr(code))
            i += 1 + width
            continue

        if table.fallback is Fallback.UNESCAPE:
            out.append(ch)
            i += 1
        elif table.fallback is Fallback.REPORT:
            fail(j, f"invalid escape sequence: \\{ch}")
        else:
            out.append("\\")

    return "".join(out)
