"""Content-line handling: unfolding, decoding, escaping and folding.

A calendar text block is a sequence of physical lines. Long content lines may
be folded across several physical lines, each continuation starting with a
single space (or tab). Once unfolded, every logical line has the form::

    NAME[;PARAM=VALUE[;PARAM=VALUE...]]:VALUE

for example ``ATTENDEE;RSVP=TRUE;ROLE=REQ-PARTICIPANT:mailto:dan@d3fy.net``.
Only the first ``:`` outside a quoted parameter value separates the name
segment from the value, so values such as URLs may contain further colons.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging
import re
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import DecodeError

logger = logging.getLogger(__name__)

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
ESCAPED_NEWLINE_RE = re.compile(r"\\[nN]")
FOLD_CHARS = (" ", "\t")
FOLD_INDENT = " "


@dataclass(frozen=True)
class ContentLine:
    name: str
    value: str                  # unescaped
    params: Dict[str, str] = field(default_factory=dict)
    raw_value: str = ""


def unfold_lines(text: str) -> List[str]:
    """Merge folded physical lines into logical lines.

    Empty physical lines are dropped, so surrounding blank lines never produce
    empty records. A continuation is appended as-is, minus its one indent
    character, even when the rest of it is whitespace.
    """
    lines: List[str] = []
    for number, physical in enumerate(LINE_BREAK_RE.split(text), start=1):
        if not physical:
            logger.debug("Skipping blank physical line %d", number)
            continue
        if physical[0] in FOLD_CHARS:
            if lines:
                lines[-1] += physical[1:]
            elif physical.strip():
                raise DecodeError(
                    "Continuation line without a preceding content line",
                    line=physical,
                    line_number=number,
                )
        elif physical.strip():
            lines.append(physical)
        else:
            logger.debug("Skipping blank physical line %d", number)
    return lines


def _unquoted(text: str, chars: str) -> Iterator[Tuple[int, str]]:
    # Yields positions of `chars` outside double quotes and backslash escapes.
    quoted = False
    escaped = False
    for pos, char in enumerate(text):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == '"':
            quoted = not quoted
        elif not quoted and char in chars:
            yield pos, char


def _split_name_segment(segment: str) -> List[str]:
    parts: List[str] = []
    start = 0
    for pos, _ in _unquoted(segment, ";"):
        parts.append(segment[start:pos])
        start = pos + 1
    parts.append(segment[start:])
    return parts


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def decode_line(line: str, line_number: Optional[int] = None) -> ContentLine:
    separator = next((pos for pos, _ in _unquoted(line, ":")), -1)
    if separator < 0:
        raise DecodeError("Missing ':' between name and value", line=line, line_number=line_number)

    segments = _split_name_segment(line[:separator])
    name = segments[0]
    if not name:
        raise DecodeError("Empty property name", line=line, line_number=line_number)

    params: Dict[str, str] = {}
    for segment in segments[1:]:
        key, _, value = segment.partition("=")
        params[key] = _unquote(value)

    raw_value = line[separator + 1:]
    return ContentLine(name=name, value=unescape_text(raw_value), params=params, raw_value=raw_value)


def escape_text(value: str) -> str:
    r"""Replace each line break with backslash-n.

    ``\r\n`` and a lone ``\r`` count as one line break, so they come back as
    ``\n`` after unescaping. A raw CR cannot stay in a content line.
    """
    return LINE_BREAK_RE.sub(r"\\n", value)


def unescape_text(value: str) -> str:
    return ESCAPED_NEWLINE_RE.sub("\n", value)


def _quote_param(value: str) -> str:
    if any(char in value for char in ",;:"):
        return f'"{value}"'
    return value


def encode_line(name: str, value: str, params: Optional[Dict[str, str]] = None) -> str:
    head = name
    for key, param_value in (params or {}).items():
        head += f";{key}={_quote_param(param_value)}"
    return f"{head}:{value}"


def fold_line(line: str, width: int) -> List[str]:
    """Split one content line into physical lines of at most `width` characters.

    Continuation lines carry a one-space indent that counts toward the width.
    A width of 0 (or anything too small to make progress) disables folding.
    """
    if width <= len(FOLD_INDENT) or len(line) <= width:
        return [line]

    physical = [line[:width]]
    rest = line[width:]
    step = width - len(FOLD_INDENT)
    while rest:
        physical.append(FOLD_INDENT + rest[:step])
        rest = rest[step:]
    return physical
