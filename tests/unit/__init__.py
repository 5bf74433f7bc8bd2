#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from urlencoded_form.serializers import FormSerializer, StructSerializer

DATE = datetime(2017, 6, 14, 10, 45, 32, tzinfo=UTC)
NEXT_DATE = datetime(2017, 6, 15, tzinfo=UTC)


class Color(Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class User:
    name: str
    age: int
    nickname: str | None = None


@dataclass
class Pet:
    name: str
    type: str


@dataclass
class Owner:
    name: str
    pets: list[Pet]
    tags: list[str] = field(default_factory=list)


@dataclass
class Event:
    title: str
    starts_at: datetime


class Wrapped:
    """Writes a single value through the serializer instead of a container."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def serialize(self, serializer: FormSerializer) -> None:
        serializer.write_value(self.value)


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def serialize(self, serializer: FormSerializer) -> None:
        serializer.write_struct(self)

    def serialize_members(self, serializer: StructSerializer) -> None:
        serializer.write("x", self.x)
        serializer.write("y", self.y)
