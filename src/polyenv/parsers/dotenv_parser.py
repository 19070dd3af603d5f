from __future__ import annotations

from collections import deque
from typing import BinaryIO, Deque, Iterable, Iterator, List, Optional, Tuple

from polyenv.core.encoding import iter_lines, split_lines
from polyenv.core.models import ParseOptions
from polyenv.parsers.common import ParseContext
from polyenv.parsers.dialects import rules_for
from polyenv.parsers.escapes import EscapeTable, decode_escapes
from polyenv.parsers.rules import (
    DialectRules,
    InlineComment,
    Malformed,
    QuoteRule,
    QuoteScan,
    QuoteStyle,
    ReadMode,
    Trailing,
    Unterminated,
)
from polyenv.parsers.types import Assignment

Line = Tuple[int, str]

EXPORT_PREFIX = "export "


class LineCursor:
    """Iterator over (lineno, text) that lets multi-line values give lines back."""

    def __init__(self, lines: Iterable[Line]) -> None:
        self._lines = iter(lines)
        self._pushed: Deque[Line] = deque()

    def __iter__(self) -> "LineCursor":
        return self

    def __next__(self) -> Line:
        if self._pushed:
            return self._pushed.popleft()
        return next(self._lines)

    def next_or_none(self) -> Optional[Line]:
        try:
            return next(self)
        except StopIteration:
            return None

    def push_back(self, lines: List[Line]) -> None:
        self._pushed.extendleft(reversed(lines))


class DotenvParser:
    """
    Tokenize dotenv lines under one dialect's rule table.

    Per statement:
      trim -> skip blank/# lines -> split on first separator ->
      strip "export " from the key -> trim key and value ->
      quoted value (escape table) or unquoted value (inline comments)
    """

    def __init__(self, rules: DialectRules, ctx: ParseContext) -> None:
        self.rules = rules
        self.ctx = ctx

    def parse_lines(self, lines: Iterable[Line]) -> Iterator[Assignment]:
        cursor = LineCursor(lines)
        for lineno, raw in cursor:
            assignment = self._parse_statement(lineno, raw, cursor)
            if assignment is not None:
                yield assignment

    # ----------------------------
    # Statements
    # ----------------------------

    def _parse_statement(self, lineno: int, raw: str, cursor: LineCursor) -> Optional[Assignment]:
        line = raw.strip()
        if not line or line.startswith("#"):
            return None

        sep = self._find_separator(line)
        if sep < 0:
            self.ctx.note(lineno, f"ignoring line without assignment: {line}")
            return None

        key = line[:sep]
        if key.startswith(EXPORT_PREFIX):
            key = key[len(EXPORT_PREFIX):]
        key = key.strip()

        indent = len(raw) - len(raw.lstrip())
        if not key or not self.rules.key_ok(key):
            self._malformed(lineno, indent + 1, f"invalid variable name: {key!r}")
            return None

        after = line[sep + 1:]
        value = after.lstrip()
        column = indent + sep + 1 + (len(after) - len(value)) + 1

        resolved = self._resolve_value(value, lineno, column, cursor)
        if resolved is None:
            return None
        return Assignment(key=key, value=resolved, line=lineno)

    def _find_separator(self, line: str) -> int:
        found: List[int] = []
        for sep in self.rules.separators:
            i = line.find(sep)
            if i < 0:
                continue
            if sep == ":" and self.rules.colon_needs_blank and not line[i + 1 : i + 2].isspace():
                continue
            found.append(i)
        return min(found) if found else -1

    def _malformed(self, lineno: int, column: int, message: str) -> None:
        if self.rules.malformed is Malformed.SKIP:
            self.ctx.note(lineno, message)
        else:
            self.ctx.report(lineno, column, message)

    # ----------------------------
    # Values
    # ----------------------------

    def _resolve_value(
        self, value: str, lineno: int, column: int, cursor: LineCursor
    ) -> Optional[str]:
        quote = value[:1]
        rule = self.rules.quotes.get(quote) if quote else None
        if rule is None:
            return self._resolve_unquoted(value, lineno, column)

        if self.rules.quote_style is QuoteStyle.WRAPPED:
            if len(value) >= 2 and value.endswith(quote):
                return self._decode(value[1:-1], rule.escapes, lineno, column + 1)
            return self._resolve_unquoted(value, lineno, column)

        return self._resolve_quoted(quote, rule, value, lineno, column, cursor)

    def _resolve_quoted(
        self,
        quote: str,
        rule: QuoteRule,
        value: str,
        lineno: int,
        column: int,
        cursor: LineCursor,
    ) -> Optional[str]:
        text = value
        close = _find_closing_quote(text, quote, 1, rule.scan)
        consumed: List[Line] = []

        while close < 0 and rule.multiline:
            nxt = cursor.next_or_none()
            if nxt is None:
                break
            consumed.append(nxt)
            start = len(text) + 1
            text = f"{text}\n{nxt[1]}"
            close = _find_closing_quote(text, quote, start, rule.scan)

        if close < 0:
            cursor.push_back(consumed)
            return self._resolve_unterminated(value, lineno, column)

        rest = text[close + 1:]
        if not _is_blank_or_comment(rest):
            if self.rules.trailing is Trailing.COMMENT:
                cursor.push_back(consumed)
                return self._resolve_unquoted(value, lineno, column)
            if self.rules.trailing is Trailing.STRICT:
                end_line = lineno + len(consumed)
                self._malformed(end_line, 1, f"unexpected text after quoted value: {rest.strip()}")
                return None

        return self._decode(text[1:close], rule.escapes, lineno, column + 1)

    def _resolve_unterminated(self, value: str, lineno: int, column: int) -> Optional[str]:
        mode = self.rules.unterminated
        if mode is Unterminated.RAW:
            return value
        if mode is Unterminated.UNQUOTED:
            return self._resolve_unquoted(value, lineno, column)
        self._malformed(lineno, column, f"unterminated quoted value: {value}")
        return None

    def _resolve_unquoted(self, value: str, lineno: int, column: int) -> str:
        value = _cut_inline_comment(value, self.rules.inline_comment).strip()

        if self.rules.unwrap_unquoted and len(value) >= 2:
            rule = self.rules.quotes.get(value[0])
            if rule is not None and value.endswith(value[0]):
                return self._decode(value[1:-1], rule.escapes, lineno, column + 1)

        return self._decode(value, self.rules.unquoted_escapes, lineno, column)

    def _decode(
        self, text: str, table: Optional[EscapeTable], lineno: int, column: int
    ) -> str:
        if table is None:
            return text
        return decode_escapes(text, table, self.ctx, line=lineno, column=column)


def _find_closing_quote(text: str, quote: str, start: int, scan: QuoteScan) -> int:
    if scan is QuoteScan.ESCAPE_PAIRS:
        i = start
        while i < len(text):
            ch = text[i]
            if ch == "\\":
                i += 2
            elif ch == quote:
                return i
            else:
                i += 1
        return -1

    i = text.find(quote, start)
    while i > 0 and scan is QuoteScan.BACKSLASH_BEFORE and text[i - 1] == "\\":
        i = text.find(quote, i + 1)
    return i


def _is_blank_or_comment(rest: str) -> bool:
    rest = rest.strip()
    return not rest or rest.startswith("#")


def _cut_inline_comment(value: str, mode: InlineComment) -> str:
    if mode is InlineComment.HASH:
        return value.split("#", 1)[0]
    if mode is InlineComment.SPACE_HASH:
        for i in range(1, len(value)):
            if value[i] == "#" and value[i - 1].isspace():
                return value[:i]
    return value


# ----------------------------
# Entry points
# ----------------------------


def parse_dotenv(
    text: str,
    options: Optional[ParseOptions] = None,
    *,
    source: str = "<string>",
) -> List[Assignment]:
    """
    Parse already-decoded dotenv text into Assignment entries.

    Supported (dialect permitting):
      KEY=VALUE
      export KEY=VALUE
      comments (# ...) and blank lines
      single/double (and for some dialects backtick) quoted values
    """
    options = options or ParseOptions()
    parser = _build_parser(options, source)
    return list(parser.parse_lines(enumerate(split_lines(text), start=1)))


def iter_assignments(
    stream: BinaryIO,
    options: Optional[ParseOptions] = None,
    *,
    source: str = "<stream>",
) -> Iterator[Assignment]:
    """
    Decode a byte stream and yield assignments in file order.

    Decode failures raise EncodingError no matter how strict is set.
    """
    options = options or ParseOptions()
    parser = _build_parser(options, source)

    lines: Iterable[Line]
    if parser.rules.read_mode is ReadMode.TEXT:
        text = options.encoding.read_text(stream, source=source)
        lines = enumerate(split_lines(text), start=1)
    else:
        lines = iter_lines(options.encoding, stream, source=source)

    yield from parser.parse_lines(lines)


def _build_parser(options: ParseOptions, source: str) -> DotenvParser:
    rules = rules_for(options.dialect, options.linebreak_mode)
    ctx = ParseContext(source=source, strict=options.strict, debug=options.debug)
    return DotenvParser(rules, ctx)
