#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from .serializers import FormSerializer


class ArrayEncoding(Enum):
    """Array encodings that don't need any extra parameters.

    Use :py:class:`SeparatedArrayEncoding` to join array elements into a single value.
    """

    BRACKET = "bracket"
    """Arrays are serialized as separate values with bracket suffixed keys.

    For example, ``foo = [1, 2, 3]`` is serialized as ``foo[]=1&foo[]=2&foo[]=3``.
    """

    VALUES = "values"
    """Arrays are serialized as separate values.

    For example, ``foo = [1, 2, 3]`` is serialized as ``foo=1&foo=2&foo=3``.
    """


@dataclass(frozen=True, slots=True)
class SeparatedArrayEncoding:
    """Arrays are serialized as a single value with character-separated items.

    For example, ``foo = [1, 2, 3]`` with a separator of ``,`` is serialized as
    ``foo=1,2,3``. Items are escaped before being joined, so the separator itself is
    never escaped, and it can't be ``&`` or ``=``.
    """

    separator: str = ","
    """The character placed between items."""

    def __post_init__(self) -> None:
        if len(self.separator) != 1:
            raise ValueError(
                f"Array separator must be a single character, found: {self.separator!r}"
            )
        if self.separator in "&=":
            raise ValueError(
                f"Array separator can't be '&' or '=', found: {self.separator!r}"
            )


ArrayEncodingStrategy: TypeAlias = ArrayEncoding | SeparatedArrayEncoding


class DateEncoding(Enum):
    """Date encodings that don't need any extra parameters.

    Use :py:class:`CustomDateEncoding` to write dates with a callback.
    """

    SECONDS_SINCE_1970 = "seconds-since-1970"
    """Fractional seconds since 1 January 1970 00:00:00 UTC (Unix timestamp)."""

    ISO8601 = "iso8601"
    """An ISO 8601 timestamp in UTC without fractional seconds, for example
    ``2017-06-14T10:45:32Z``."""


@dataclass(frozen=True, slots=True)
class CustomDateEncoding:
    """Dates are written by a callback.

    The callback is given the date and a serializer rooted at the date's position. It
    may write a scalar, a struct, or a list, but not the datetime itself, which would
    invoke the callback again. Exceptions raised by the callback are not caught.
    """

    callback: Callable[[datetime, "FormSerializer"], None]


DateEncodingStrategy: TypeAlias = DateEncoding | CustomDateEncoding


@dataclass(frozen=True, slots=True)
class URLEncodedFormSettings:
    """Settings for the form-urlencoded encoder."""

    array_encoding: ArrayEncodingStrategy = ArrayEncoding.BRACKET
    """How lists of scalar values are written."""

    date_encoding: DateEncodingStrategy = DateEncoding.SECONDS_SINCE_1970
    """How datetime values are written."""
