from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .config import CodecConfig


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    # naive datetimes are taken to be UTC already
    return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)


@dataclass
class CalendarEvent:
    id: str = ""                               # UID
    created_at_utc: Optional[datetime] = None  # CREATED
    modified_at_utc: Optional[datetime] = None # LAST-MODIFIED
    start_at: Optional[datetime] = None        # DTSTART, any timezone
    end_at: Optional[datetime] = None          # DTEND, any timezone
    summary: str = ""
    location: str = ""
    description: str = ""
    url: str = ""
    attendees: List[str] = field(default_factory=list)

    def start_at_utc(self) -> Optional[datetime]:
        return to_utc(self.start_at)

    def end_at_utc(self) -> Optional[datetime]:
        return to_utc(self.end_at)

    def serialize(self, config: Optional[CodecConfig] = None) -> str:
        from .event import serialize_event

        return serialize_event(self, config)
