"""
Cache Value Objects

Immutable value objects for the cache domain.
Covers key validation, expiry normalisation and the store's
whole-minute TTL granularity.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Optional, Union

from .exceptions import InvalidExpiryException, InvalidKeyException

ExpiryInput = Union[None, datetime, date, str, int, float]
DurationInput = Union[None, timedelta, int]

RESERVED_KEY_CHARACTERS = "{}()/\\@:"


def current_time(tz: Optional[tzinfo] = None) -> datetime:
    """Current aware time, expressed in ``tz`` (UTC by default)."""
    return datetime.now(tz or timezone.utc)


@dataclass(frozen=True)
class CacheKey:
    """
    Immutable cache key value object.

    A key is any string free of the reserved characters ``{}()/\\@:``.
    """

    value: str

    RESERVED_PATTERN = re.compile(r"[{}()/\\@:]")

    def __post_init__(self) -> None:
        """Validate cache key format."""
        if not isinstance(self.value, str):
            raise InvalidKeyException(self.value, "key must be a string")

        match = self.RESERVED_PATTERN.search(self.value)
        if match:
            raise InvalidKeyException(
                self.value, f"reserved character {match.group(0)!r}"
            )

    @classmethod
    def validate(cls, key: Any) -> str:
        """Return ``key`` unchanged if valid, raise InvalidKeyException otherwise."""
        return cls(key).value


@dataclass(frozen=True)
class TTL:
    """
    Time To Live in whole minutes, the backing store's native granularity.
    """

    minutes: int

    def __post_init__(self) -> None:
        """Validate TTL value."""
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int):
            raise TypeError("TTL minutes must be an integer")
        if self.minutes <= 0:
            raise ValueError("TTL must be positive")

    @classmethod
    def until(cls, expires_at: datetime, now: Optional[datetime] = None) -> Optional["TTL"]:
        """
        TTL covering the time left until ``expires_at``.

        ``now`` is taken in the expiry's own timezone. Both instants are
        truncated to whole UNIX seconds before subtracting. Returns None when
        fewer than one full minute remains, including expiries in the past.
        """
        if now is None:
            now = current_time(expires_at.tzinfo)
        seconds = math.floor(expires_at.timestamp()) - math.floor(now.timestamp())
        minutes = math.floor(seconds / 60.0)
        if minutes <= 0:
            return None
        return cls(int(minutes))

    @property
    def seconds(self) -> int:
        return self.minutes * 60


def normalize_expiry(value: ExpiryInput) -> Optional[datetime]:
    """
    Normalise an absolute expiry into a timezone-aware datetime.

    Accepts aware or naive datetimes (naive means UTC), dates (midnight UTC),
    ISO-8601 strings and UNIX timestamps. None clears the expiry.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    if isinstance(value, bool):
        raise InvalidExpiryException(value, "booleans are not timestamps")

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidExpiryException(
                value, "timestamp out of range", original_error=e
            ) from e

    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidExpiryException(
                value, "not an ISO-8601 timestamp", original_error=e
            ) from e
        return normalize_expiry(parsed)

    raise InvalidExpiryException(value, "unsupported expiry type")


def normalize_duration(value: DurationInput) -> Optional[timedelta]:
    """Normalise a relative lifetime; ints are seconds, None clears it."""
    if value is None:
        return None

    if isinstance(value, timedelta):
        return value

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidExpiryException(
            value, "duration must be a timedelta or a number of seconds"
        )

    try:
        return timedelta(seconds=value)
    except OverflowError as e:
        raise InvalidExpiryException(
            value, "duration out of range", original_error=e
        ) from e
