import logging
import math
from typing import Iterable, Iterator, List, Union
from dataclasses import dataclass
from .models import GCodeLine

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """G-code 파싱 결과"""
    lines: List[GCodeLine]
    encoding: str
    is_fallback: bool  # latin-1 fallback으로 디코딩되었는지


def parse_line(line: str, index: int, strip_comments: bool = True) -> GCodeLine:
    """Parse a single G-code line.

    The first whitespace-delimited token is the command code. Every following
    token is a single letter immediately followed by a number; tokens whose
    value is not a finite number are dropped. Codes and letters are kept
    exactly as written.
    """
    raw = line.rstrip()
    comment = None
    if strip_comments and ';' in raw:
        parts = raw.split(';', 1)
        raw_cmd = parts[0].strip()
        comment = parts[1].strip()
    else:
        raw_cmd = raw.strip()

    if not raw_cmd:
        return GCodeLine(index=index, raw=raw, cmd="", params={}, comment=comment)

    parts = raw_cmd.split()
    cmd = parts[0]
    params = {}

    for part in parts[1:]:
        key = part[0]
        try:
            value = float(part[1:])
        except ValueError:
            logger.debug(f"[Parser] Line {index}: ignoring malformed parameter {part!r}")
            continue
        if not math.isfinite(value):
            logger.debug(f"[Parser] Line {index}: ignoring non-finite parameter {part!r}")
            continue
        params[key] = value

    return GCodeLine(index=index, raw=raw, cmd=cmd, params=params, comment=comment)


def split_lines(text: str) -> List[str]:
    return text.replace('\r\n', '\n').replace('\r', '\n').split('\n')


def iter_gcode_lines(commands: Union[str, Iterable[str]],
                     strip_comments: bool = True) -> Iterator[GCodeLine]:
    """Yield parsed lines from a whole program text or an iterable of lines."""
    if isinstance(commands, str):
        commands = split_lines(commands)
    for i, line in enumerate(commands):
        yield parse_line(line, i + 1, strip_comments=strip_comments)


def decode_gcode(raw_bytes: bytes, strip_comments: bool = True) -> ParseResult:
    """Decode raw bytes and parse every line.

    Returns:
        ParseResult with lines, encoding used, and fallback flag
    """
    # 시도할 인코딩 목록 (우선순위 순)
    encodings = ['utf-8', 'cp949', 'euc-kr']

    content = None
    used_encoding = None
    is_fallback = False

    for encoding in encodings:
        try:
            content = raw_bytes.decode(encoding)
            used_encoding = encoding
            break
        except (UnicodeDecodeError, LookupError):
            continue

    # 모든 인코딩 실패 시 latin-1로 강제 디코딩 (항상 성공)
    if content is None:
        content = raw_bytes.decode('latin-1', errors='replace')
        used_encoding = 'latin-1 (fallback)'
        is_fallback = True
        logger.warning("[Parser] Falling back to latin-1 decoding")

    return ParseResult(
        lines=list(iter_gcode_lines(content, strip_comments=strip_comments)),
        encoding=used_encoding,
        is_fallback=is_fallback,
    )


def parse_gcode(file_path: str, strip_comments: bool = True) -> ParseResult:
    """Parse a G-code file into a list of structured GCodeLine objects."""
    # 바이너리로 읽어서 인코딩 시도
    with open(file_path, 'rb') as f:
        raw_bytes = f.read()
    return decode_gcode(raw_bytes, strip_comments=strip_comments)
