#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import threading
from datetime import datetime, timezone
from decimal import Decimal
from math import isinf, isnan
from urllib.parse import quote as urlquote
from urllib.parse import unquote_plus


def escape(value: str) -> str:
    """Percent-encodes a key segment or value for form-urlencoded output.

    Only the unreserved characters of :rfc:`3986#section-2.3` are left alone. Spaces
    are written as ``%20`` rather than ``+``, and non-ASCII text is encoded as UTF-8
    before escaping.

    :param value: The string to escape.
    :returns: The escaped string.
    """
    return urlquote(value, safe="")


def unescape(value: str) -> str:
    """Reverses :py:func:`escape`.

    Both ``+`` and ``%20`` are decoded to a space so that values produced by other
    form encoders are accepted too.

    :param value: The escaped string.
    :returns: The unescaped string.
    """
    return unquote_plus(value)


def ensure_utc(value: datetime) -> datetime:
    """Ensures that the given datetime is a UTC timezone-aware datetime.

    If the datetime isn't timezone-aware, its timezone is set to UTC. If it is aware,
    it's replaced with the equivalent datetime under UTC.

    :param value: A datetime object that may or may not be timezone-aware.
    :returns: A UTC timezone-aware equivalent datetime.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    else:
        return value.astimezone(timezone.utc)


def serialize_float(given: float | Decimal) -> str:
    """Serializes a float to a string.

    This ensures non-numeric floats are serialized correctly, and ensures that there is
    a fractional part.

    :param given: A float or Decimal to be serialized.
    :returns: The string representation of the given float.
    """
    if isnan(given):
        return "NaN"
    if isinf(given):
        return "-Infinity" if given < 0 else "Infinity"

    if isinstance(given, Decimal):
        result = format(given.normalize(), "f")
    else:
        result = str(given)
    if result.lstrip("-").isnumeric():
        result += ".0"
    return result


def serialize_epoch_seconds(given: datetime) -> str:
    """Serializes a datetime into a string containing the fractional epoch seconds.

    Naive datetimes are assumed to be in UTC.

    :param given: The datetime to serialize.
    :returns: A string containing the seconds since the UNIX epoch.
    """
    return serialize_float(ensure_utc(given).timestamp())


class ISO8601Formatter:
    """Formats datetimes as ISO 8601 timestamps in UTC.

    Instances aren't safe to share between threads. Use :py:func:`iso8601_formatter`
    to get the instance owned by the current thread.
    """

    _format: str

    def __init__(self, format: str = "%Y-%m-%dT%H:%M:%SZ") -> None:
        self._format = format

    def format(self, value: datetime) -> str:
        return ensure_utc(value).strftime(self._format)


_thread_local = threading.local()


def iso8601_formatter() -> ISO8601Formatter:
    """Returns the ISO 8601 formatter owned by the current thread.

    The formatter is created on first use and kept for the life of the thread.
    """
    formatter: ISO8601Formatter | None = getattr(_thread_local, "iso8601", None)
    if formatter is None:
        formatter = ISO8601Formatter()
        _thread_local.iso8601 = formatter
    return formatter
