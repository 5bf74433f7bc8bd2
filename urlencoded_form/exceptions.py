#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Sequence


class URLEncodedFormError(Exception):
    """Base exception type for all exceptions raised by urlencoded-form."""


class SerializationError(URLEncodedFormError):
    """Exception raised when a value can't be represented as form data."""

    path: tuple[str, ...]
    """The key path at which serialization failed."""

    def __init__(self, message: str, path: Sequence[str] = ()) -> None:
        self.path = tuple(path)
        if self.path:
            message = f"Invalid value at '{'.'.join(self.path)}': {message}"
        super().__init__(message)


class MalformedKeyError(SerializationError):
    """Exception raised when a key can't be expressed with bracket notation."""

    key: str
    """The offending key segment."""

    def __init__(self, key: str, path: Sequence[str] = ()) -> None:
        self.key = key
        super().__init__(f"Malformed form-urlencoded key encountered: {key!r}", path)


class InvalidURLError(URLEncodedFormError):
    """Exception raised when a URL can't be split into or rebuilt from components."""

    url: str
    """The URL that was given."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Failed to split or rebuild url: {url}")
