"""
twiliokit - Converters

Conversions between the string forms used on the wire and the typed values the
builders and resources expose.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from enum import Enum
from typing import Any, Optional, Type, TypeVar, Union

import httpx

from twiliokit.types import PhoneNumber

E = TypeVar("E", bound=Enum)


class Promoter:
    """Promotes convenience string values to their typed counterparts."""

    @staticmethod
    def uri_from_string(url: Union[str, httpx.URL]) -> httpx.URL:
        """Parse a URL string; URLs pass through untouched."""
        if isinstance(url, httpx.URL):
            return url
        return httpx.URL(url)

    @staticmethod
    def phone_number_from_string(number: Union[str, PhoneNumber]) -> PhoneNumber:
        if isinstance(number, PhoneNumber):
            return number
        return PhoneNumber(number)

    @staticmethod
    def enum_from_string(value: Any, enum_cls: Type[E]) -> Optional[E]:
        """
        Look up an enum member by value.

        Values the server sends that this SDK does not know promote to None
        rather than failing, so new server-side values do not break parsing.
        """
        if value is None or isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(value)
        except ValueError:
            return None


def serialize(value: Any) -> str:
    """
    Canonical string form of a request parameter value.

    Enums serialize as their value, booleans as ``true``/``false``, dates as
    ISO-8601 and everything else (URLs, phone numbers, numbers) via ``str``.
    """
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def rfc2822_datetime(value: Any) -> Optional[datetime]:
    """Parse a Twilio timestamp such as ``Tue, 31 Aug 2010 20:36:28 +0000``."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected an RFC 2822 date string, got {type(value).__name__}")
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid RFC 2822 date: {value!r}") from e


def format_rfc2822_datetime(value: Optional[datetime]) -> Optional[str]:
    """
    Format a datetime the way the API does.

    Naive datetimes are written with a ``-0000`` offset, which parses back to
    a naive datetime.
    """
    if value is None:
        return None
    return format_datetime(value)
