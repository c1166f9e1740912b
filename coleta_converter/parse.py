"""
Delimited text -> grid of string cells.

Responsibilities:
- encoding detection (UTF-8 first, then charset-normalizer among Western codecs)
- newline normalization
- delimiter detection (comma unless the sample clearly says otherwise)
- blank line skipping

Cells are returned exactly as read; typing happens in the transformer.
"""

from __future__ import annotations

import csv
import io
import logging
import sys
from typing import List

from charset_normalizer import from_bytes

from .rules import CANDIDATE_DELIMITERS, DEFAULT_DELIMITER, FALLBACK_ENCODINGS, TARGET_ENCODING

logger = logging.getLogger(__name__)

# no per-field limit on cell size
try:
    csv.field_size_limit(sys.maxsize)
except OverflowError:
    csv.field_size_limit(2**31 - 1)


class ParseError(Exception):
    """Raised when the delimited structure cannot be read."""


def decode_text(raw: bytes) -> str:
    """
    Decode input bytes to text.

    Rules:
    - Strict UTF-8 first; a BOM is stripped so it doesn't leak into the first header cell.
    - Otherwise let charset-normalizer pick among the Western single-byte codecs.
      Short Portuguese samples are misread as CJK/Arabic codecs when left unrestricted.
    - If nothing fits, decode with replacement characters so a grid can still be produced.
    """
    try:
        text = raw.decode(TARGET_ENCODING)
    except UnicodeDecodeError:
        match = from_bytes(raw, cp_isolation=FALLBACK_ENCODINGS).best()
        if match is not None:
            logger.info("input is not utf-8, decoding as %s", match.encoding)
            text = raw.decode(match.encoding, errors="replace")
        else:
            logger.warning("could not detect input encoding, decoding as %s with replacement", FALLBACK_ENCODINGS[0])
            text = raw.decode(FALLBACK_ENCODINGS[0], errors="replace")

    # CRLF/CR -> LF
    return text.replace("\r\n", "\n").replace("\r", "\n")


def detect_delimiter(text: str) -> str:
    sample = text[:4096]
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=CANDIDATE_DELIMITERS)
    except csv.Error:
        return DEFAULT_DELIMITER
    return dialect.delimiter


def parse_grid(raw: bytes) -> List[List[str]]:
    """
    Parse raw CSV bytes into rows of string cells.

    Lines with no content at all are skipped. Empty input yields a grid with a
    single empty header row. Malformed quoting raises ParseError.
    """
    if not isinstance(raw, (bytes, bytearray)):
        raise ParseError(f"expected bytes, got {type(raw).__name__}")

    text = decode_text(bytes(raw))
    if not text.strip("\n"):
        return [[]]

    delimiter = detect_delimiter(text)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)

    rows: List[List[str]] = []
    try:
        for row in reader:
            if row == [] or row == [""]:
                continue
            rows.append(row)
    except csv.Error as e:
        raise ParseError(f"line {reader.line_num}: {e}") from e

    logger.debug("parsed %d rows with delimiter %r", len(rows), delimiter)
    return rows or [[]]
