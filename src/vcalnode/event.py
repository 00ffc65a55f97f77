"""Mapping between :class:`CalendarEvent` records and ``VEVENT`` text."""
from __future__ import annotations
from datetime import datetime, timezone
import re
from typing import List, Optional

from .config import CodecConfig
from .contentline import encode_line, escape_text, fold_line
from .errors import DecodeError, TimestampFormatError
from .models import CalendarEvent, to_utc
from .tree import Node, parse_calendar

VEVENT = "VEVENT"
TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"  # strptime only
TIMESTAMP_RE = re.compile(r"\d{8}T\d{6}Z", re.ASCII)


def format_timestamp(value: datetime) -> str:
    u = to_utc(value)
    return f"{u.year:04d}{u.month:02d}{u.day:02d}T{u.hour:02d}{u.minute:02d}{u.second:02d}Z"


def parse_timestamp(value: str, property_name: Optional[str] = None) -> datetime:
    if not TIMESTAMP_RE.fullmatch(value):
        raise TimestampFormatError(value, property_name)
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        # well-formed but out of range, e.g. month 13
        raise TimestampFormatError(value, property_name) from e
    return parsed.replace(tzinfo=timezone.utc)


def _event_lines(event: CalendarEvent) -> List[str]:
    lines = [f"BEGIN:{VEVENT}"]

    def add(name: str, value: Optional[str]) -> None:
        if value:
            lines.append(encode_line(name, value))

    def add_time(name: str, value: Optional[datetime]) -> None:
        if value is not None:
            lines.append(encode_line(name, format_timestamp(value)))

    add("UID", event.id)
    add_time("CREATED", event.created_at_utc)
    add_time("LAST-MODIFIED", event.modified_at_utc)
    add_time("DTSTART", event.start_at_utc())
    add_time("DTEND", event.end_at_utc())
    add("SUMMARY", event.summary)
    add("DESCRIPTION", escape_text(event.description))
    add("LOCATION", escape_text(event.location))
    add("URL", event.url)
    for attendee in event.attendees:
        add("ATTENDEE", attendee)

    lines.append(f"END:{VEVENT}")
    return lines


def serialize_event(event: CalendarEvent, config: Optional[CodecConfig] = None) -> str:
    """Render the event as a ``BEGIN:VEVENT`` ... ``END:VEVENT`` block.

    Absent fields produce no line at all. Timestamps are always written in
    UTC. No trailing line terminator is added.
    """
    config = config or CodecConfig()
    physical: List[str] = []
    for line in _event_lines(event):
        physical.extend(fold_line(line, config.fold_width))
    return config.line_ending.join(physical)


def _find_event(node: Node) -> Optional[Node]:
    if node.name == VEVENT:
        return node
    for candidate in node.walk():
        if candidate.name == VEVENT and candidate.is_block:
            return candidate
    return None


def parse_event(text: str, config: Optional[CodecConfig] = None, strict: bool = False) -> CalendarEvent:
    """Read the first ``VEVENT`` block in `text` into a record.

    Missing properties leave the field at its default. `config.strict_blocks`
    (or `strict`) makes a mismatched ``END`` fatal. Raises ``DecodeError``
    for malformed structure and ``TimestampFormatError`` for bad dates.
    """
    strict = strict or (config is not None and config.strict_blocks)
    vevent = _find_event(parse_calendar(text, strict=strict))
    if vevent is None:
        raise DecodeError(f"No {VEVENT} block found", block=VEVENT)

    def text_of(name: str) -> str:
        node = vevent.child_by_name(name)
        return node.value if node is not None else ""

    def time_of(name: str) -> Optional[datetime]:
        node = vevent.child_by_name(name)
        if node is None:
            return None
        return parse_timestamp(node.value, name)

    return CalendarEvent(
        id=text_of("UID"),
        created_at_utc=time_of("CREATED"),
        modified_at_utc=time_of("LAST-MODIFIED"),
        start_at=time_of("DTSTART"),
        end_at=time_of("DTEND"),
        summary=text_of("SUMMARY"),
        location=text_of("LOCATION"),
        description=text_of("DESCRIPTION"),
        url=text_of("URL"),
        attendees=[node.value for node in vevent.children_by_name("ATTENDEE")],
    )
