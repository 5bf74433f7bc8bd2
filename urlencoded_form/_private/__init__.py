#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from base64 import b64encode
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Self
from uuid import UUID

from ..utils import escape, serialize_float


@dataclass(frozen=True, slots=True)
class Fragment:
    """A single value already converted to its wire string."""

    value: str

    is_encoded: bool = False
    """Whether the value has already been percent-encoded.

    Joined array values are escaped item by item before the separator is inserted,
    so they must not be escaped again.
    """

    def as_url_encoded(self) -> str:
        if self.is_encoded:
            return self.value
        return escape(self.value)


@dataclass(slots=True)
class FormData:
    """A node of the intermediate tree built while encoding.

    The empty key in ``children`` is reserved for values of bracket encoded arrays,
    which are written as ``key[]=value``.
    """

    values: list[Fragment] = field(default_factory=list)
    """Values written directly at this node's key, in order."""

    children: dict[str, "FormData"] = field(default_factory=dict)
    """Child nodes keyed by their key segment."""

    @classmethod
    def of(cls, *values: str) -> Self:
        """Creates a node holding the given raw values."""
        return cls(values=[Fragment(v) for v in values])

    @property
    def has_only_values(self) -> bool:
        return not self.children

    def copy(self) -> "FormData":
        """Returns a copy that can be modified without affecting this node.

        Child nodes are shared, not copied.
        """
        return FormData(values=list(self.values), children=dict(self.children))


def as_fragment(value: Any) -> Fragment | None:
    """Converts a scalar to a fragment.

    :param value: The value to convert.
    :returns: A raw fragment, or None if the value isn't a scalar that has a direct
        string representation.
    """
    match value:
        case bool():
            return Fragment("true" if value else "false")
        case Enum():
            return as_fragment(value.value)
        case int():
            return Fragment(str(value))
        case float() | Decimal():
            return Fragment(serialize_float(value))
        case str():
            return Fragment(value)
        case bytes() | bytearray():
            return Fragment(b64encode(value).decode("utf-8"))
        case UUID():
            return Fragment(str(value))
        case _:
            return None
