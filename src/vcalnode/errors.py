from __future__ import annotations
from typing import Optional


class CalendarError(ValueError):
    pass


class DecodeError(CalendarError):
    """Raised for content lines or block structure that cannot be decoded."""

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        line_number: Optional[int] = None,
        block: Optional[str] = None,
    ) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line = line
        self.line_number = line_number
        self.block = block


class TimestampFormatError(CalendarError):
    def __init__(self, value: str, property_name: Optional[str] = None) -> None:
        where = f" in {property_name}" if property_name else ""
        super().__init__(f"Invalid timestamp{where}: {value!r} (expected YYYYMMDDTHHMMSSZ)")
        self.value = value
        self.property_name = property_name
