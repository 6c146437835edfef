"""Wrappers for primitive values that indicate their usage.

Every wrapper is an immutable subclass of ``str`` or ``int`` so that it
serialises exactly like the value it wraps.  The subclass only names the
value (``field_name`` is the field Twitch expects) so that, for instance, a
``UserId`` is not passed where a ``GameId`` is expected.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, GetCoreSchemaHandler
from pydantic_core import core_schema

# fromisoformat before Python 3.11 accepts only 3 or 6 fractional digits.
_FRACTION = re.compile(r"\.(\d+)")


class FieldValue(str):
    """Base class for string values sent to or received from Twitch."""

    __slots__ = ()

    field_name: ClassVar[str] = ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


class IntFieldValue(int):
    """Base class for integer values sent to or received from Twitch."""

    __slots__ = ()

    field_name: ClassVar[str] = ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.int_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )


# ----------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------
class UserId(FieldValue):
    field_name = "id"


class UserLogin(FieldValue):
    field_name = "login"


class UserName(FieldValue):
    field_name = "display_name"


class UserEmail(FieldValue):
    field_name = "email"


class BroadcasterType(str, Enum):
    PARTNER = "partner"
    AFFILIATE = "affiliate"
    NONE = ""


class UserType(str, Enum):
    STAFF = "staff"
    ADMIN = "admin"
    GLOBAL_MOD = "global_mod"
    NONE = ""


# ----------------------------------------------------------------------
# Broadcasters, games, extensions
# ----------------------------------------------------------------------
class BroadcasterId(FieldValue):
    field_name = "broadcaster_id"


class BroadcasterName(FieldValue):
    field_name = "broadcaster_name"


class ISOLanguage(FieldValue):
    """An ISO 639-1 two-letter language code, or ``"other"``."""

    field_name = "language"


class BroadcasterLanguage(ISOLanguage):
    field_name = "broadcaster_language"


class BroadcasterViews(IntFieldValue):
    field_name = "view_count"


class GameId(FieldValue):
    field_name = "game_id"


class GameName(FieldValue):
    field_name = "game_name"


class ExtensionId(FieldValue):
    field_name = "extension_id"


# ----------------------------------------------------------------------
# Clips and videos
# ----------------------------------------------------------------------
class ClipId(FieldValue):
    field_name = "id"


class ClipTitle(FieldValue):
    field_name = "title"


class ViewCount(IntFieldValue):
    field_name = "view_count"


class VideoId(FieldValue):
    field_name = "video_id"


class Url(FieldValue):
    field_name = "url"


class Count(IntFieldValue):
    """The maximum number of items returned per page."""

    field_name = "first"


# ----------------------------------------------------------------------
# Time
# ----------------------------------------------------------------------
class RFC3339Time(FieldValue):
    """An RFC 3339 formatted timestamp such as ``2021-03-01T12:00:00Z``."""

    field_name = "time"

    @classmethod
    def from_datetime(cls, dt: datetime) -> "RFC3339Time":
        """Format ``dt`` in UTC.  Naive datetimes are taken to be UTC already."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        dt = dt.astimezone(timezone.utc)
        return cls(dt.strftime("%Y-%m-%dT%H:%M:%SZ"))

    @classmethod
    def coerce(cls, value: Union[datetime, str]) -> "RFC3339Time":
        if isinstance(value, datetime):
            return cls.from_datetime(value)
        if not value:
            raise ValueError(f"{cls.__name__} must not be empty")
        return cls(value)

    def to_datetime(self) -> datetime:
        """Parse the timestamp into a timezone-aware UTC datetime."""
        iso_str = self[:-1] + "+00:00" if self.endswith(("Z", "z")) else str(self)
        iso_str = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), iso_str, count=1)
        parsed = datetime.fromisoformat(iso_str)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)


class StartedAt(RFC3339Time):
    field_name = "started_at"


class EndedAt(RFC3339Time):
    field_name = "ended_at"


class Period(BaseModel):
    """A time window.  Without an end Twitch uses one week after the start."""

    model_config = ConfigDict(frozen=True)

    started_at: StartedAt
    ended_at: Optional[EndedAt] = None


class Pagination(BaseModel):
    """A cursor for endpoints that may return more than one page of results."""

    model_config = ConfigDict(frozen=True)

    cursor: Optional[str] = None

    @property
    def has_next(self) -> bool:
        return bool(self.cursor)
