from __future__ import annotations

import codecs
import re
from enum import Enum
from typing import BinaryIO, Dict, Iterator, List, Optional, Tuple

from polyenv.core.errors import EncodingError, OptionsError, OptionType

_CHUNK_SIZE = 64 * 1024

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class Encoding(str, Enum):
    ASCII = "ascii"
    LATIN1 = "latin1"  # aka ISO-8859-1
    UTF8 = "utf-8"
    UTF16BE = "utf-16be"
    UTF16LE = "utf-16le"
    UTF32BE = "utf-32be"
    UTF32LE = "utf-32le"

    @property
    def unit_size(self) -> int:
        return _UNIT_SIZES.get(self, 1)

    @property
    def newline(self) -> bytes:
        """The code unit for U+000A in this encoding."""
        return "\n".encode(self.codec_name)

    @property
    def codec_name(self) -> str:
        # the python codec names happen to match the enum values
        return self.value

    @classmethod
    def from_name(cls, name: Optional[str], *, key: str = "encoding") -> "Encoding":
        """
        Resolve an encoding alias (case-insensitive).

        An empty or missing name selects UTF-8.
        """
        if not name:
            return cls.UTF8
        found = _ALIASES.get(name.strip().lower())
        if found is None:
            raise OptionsError(key, name, OptionType.ENCODING)
        return found

    def decode(self, data: bytes, *, source: Optional[str] = None) -> str:
        try:
            return data.decode(self.codec_name, errors="strict")
        except UnicodeDecodeError as e:
            raise EncodingError(self.value, _reason(e), source=source) from e

    def read_line(self, stream: BinaryIO, *, source: Optional[str] = None) -> Optional[str]:
        """
        Read the next line (including its "\\n" terminator, if any).

        Returns None once the stream is exhausted. Multi-byte encodings are
        read one code unit at a time so that "\\n" is only recognized as the
        whole unit U+000A, never as a stray 0x0A byte inside another unit.
        """
        if self.unit_size == 1:
            data = stream.readline()
        else:
            data = self._read_units_until_newline(stream)
        if not data:
            return None
        return self.decode(data, source=source)

    def read_text(self, stream: BinaryIO, *, source: Optional[str] = None) -> str:
        """Decode everything that remains in the stream."""
        decoder = codecs.getincrementaldecoder(self.codec_name)(errors="strict")
        parts: List[str] = []
        try:
            while True:
                chunk = stream.read(_CHUNK_SIZE)
                if not chunk:
                    parts.append(decoder.decode(b"", final=True))
                    break
                parts.append(decoder.decode(chunk))
        except UnicodeDecodeError as e:
            raise EncodingError(self.value, _reason(e), source=source) from e
        return "".join(parts)

    def _read_units_until_newline(self, stream: BinaryIO) -> bytes:
        size = self.unit_size
        newline = self.newline
        buf = bytearray()
        while True:
            unit = stream.read(size)
            if not unit:
                break
            buf += unit
            # a short read means the stream ended mid-unit; the decoder reports it
            if len(unit) < size or unit == newline:
                break
        return bytes(buf)


_UNIT_SIZES: Dict[Encoding, int] = {
    Encoding.UTF16BE: 2,
    Encoding.UTF16LE: 2,
    Encoding.UTF32BE: 4,
    Encoding.UTF32LE: 4,
}

ENCODING_ALIASES: Dict[Encoding, Tuple[str, ...]] = {
    Encoding.UTF8: ("utf-8", "utf8", "windows-65001"),
    Encoding.ASCII: ("ascii", "us-ascii", "windows-20127"),
    Encoding.LATIN1: (
        "latin1",
        "iso-8859-1",
        "iso8859-1",
        "iso8859_1",
        "windows-28591",
        "cp819",
    ),
    Encoding.UTF16LE: ("utf-16le", "utf16le", "windows-1200"),
    Encoding.UTF16BE: ("utf-16be", "utf16be", "windows-1201"),
    Encoding.UTF32LE: ("utf-32le", "utf32le", "windows-12000"),
    Encoding.UTF32BE: ("utf-32be", "utf32be", "windows-12001"),
}

_ALIASES: Dict[str, Encoding] = {
    alias: enc for enc, aliases in ENCODING_ALIASES.items() for alias in aliases
}


def _reason(e: UnicodeDecodeError) -> str:
    return f"{e.reason} at byte offset {e.start}"


def split_lines(text: str) -> List[str]:
    """
    Split decoded text on "\\n", "\\r\\n" and "\\r".

    Unlike str.splitlines() no other characters (form feed, U+2028, ...) end
    a line. A trailing line break does not produce an empty last line.
    """
    if not text:
        return []
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def iter_lines(
    encoding: Encoding, stream: BinaryIO, *, source: Optional[str] = None
) -> Iterator[Tuple[int, str]]:
    """Stream logical lines as (lineno, text) without terminators."""
    lineno = 0
    while True:
        raw = encoding.read_line(stream, source=source)
        if raw is None:
            break
        # read_line stops at "\n" only, so a lone "\r" can still sit inside raw
        for line in split_lines(raw):
            lineno += 1
            yield lineno, line
