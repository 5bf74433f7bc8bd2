#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping, Sequence, Set
from dataclasses import fields, is_dataclass
from datetime import datetime
from enum import Enum
from types import TracebackType
from typing import Any, Self, TypeAlias

from ..exceptions import MalformedKeyError, SerializationError
from ..serializers import (
    FormSerializer,
    ListSerializer,
    SerializeableForm,
    StructSerializer,
)
from ..settings import (
    ArrayEncoding,
    CustomDateEncoding,
    DateEncoding,
    SeparatedArrayEncoding,
    URLEncodedFormSettings,
)
from ..utils import escape, iso8601_formatter, serialize_epoch_seconds
from . import Fragment, FormData, as_fragment

_Container: TypeAlias = "FormStructSerializer | FormListSerializer | FormValueSerializer"


class FormShapeSerializer(FormSerializer):
    """Writes a value at one position of a form.

    This is the entry point for every nested value: it inspects the value and opens the
    container that fits it. The data written is collected with :py:meth:`get_data`.
    """

    _settings: URLEncodedFormSettings
    _path: tuple[str, ...]
    _container: "_Container | None"

    def __init__(
        self, settings: URLEncodedFormSettings, path: tuple[str, ...] = ()
    ) -> None:
        self._settings = settings
        self._path = path
        self._container = None

    def begin_struct(self) -> "FormStructSerializer":
        container = FormStructSerializer(self._settings, self._path)
        self._container = container
        return container

    def begin_list(self) -> "FormListSerializer":
        container = FormListSerializer(self._settings, self._path)
        self._container = container
        return container

    def begin_value(self) -> "FormValueSerializer":
        container = FormValueSerializer(self._settings, self._path)
        self._container = container
        return container

    def write_null(self) -> None:
        pass

    def write_value(self, value: Any) -> None:
        if value is None:
            self.write_null()
            return

        if isinstance(value, SerializeableForm):
            value.serialize(self)
            return

        if isinstance(value, datetime) or as_fragment(value) is not None:
            self.begin_value().write(value)
            return

        match value:
            case Mapping():
                with self.begin_struct() as struct_serializer:
                    for key, member in value.items():
                        struct_serializer.write(self._member_key(key), member)
            case _ if is_dataclass(value) and not isinstance(value, type):
                with self.begin_struct() as struct_serializer:
                    for member in fields(value):
                        member_value = getattr(value, member.name)
                        struct_serializer.write(member.name, member_value)
            case Set():
                try:
                    elements = sorted(value)
                except TypeError as e:
                    raise SerializationError(
                        f"Set elements must be sortable: {value!r}", self._path
                    ) from e
                self._write_elements(elements)
            case Sequence():
                self._write_elements(value)
            case _:
                raise SerializationError(
                    f"Unsupported type {type(value).__name__}: {value!r}", self._path
                )

    def _write_elements(self, elements: Sequence[Any]) -> None:
        with self.begin_list() as list_serializer:
            for element in elements:
                list_serializer.write(element)

    def _member_key(self, key: Any) -> str:
        if isinstance(key, Enum):
            key = key.value
        if isinstance(key, str):
            return key
        if isinstance(key, int) and not isinstance(key, bool):
            return str(key)
        raise SerializationError(
            f"Mapping keys must be strings or integers, found {type(key).__name__}: "
            f"{key!r}",
            self._path,
        )

    def get_data(self) -> FormData:
        if self._container is None:
            return FormData()
        return self._container.get_data()


class FormStructSerializer(StructSerializer):
    """Collects the members of a structure.

    Members written directly are stored immediately. Nested containers are kept
    separately and only merged in when :py:meth:`get_data` is called.

    The empty key is reserved for bracket-style list values, so members can't use it.
    """

    _settings: URLEncodedFormSettings
    _path: tuple[str, ...]
    _data: FormData
    _child_containers: dict[str, "_Container"]

    def __init__(self, settings: URLEncodedFormSettings, path: tuple[str, ...]) -> None:
        self._settings = settings
        self._path = path
        self._data = FormData()
        self._child_containers = {}

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        pass

    def write_null(self, key: str) -> None:
        pass

    def write(self, key: str, value: Any) -> None:
        if value is None:
            self.write_null(key)
            return

        path = self._member_path(key)
        if isinstance(value, datetime):
            self._data.children[key] = encode_date(value, self._settings, path)
        elif (fragment := as_fragment(value)) is not None:
            self._data.children[key] = FormData(values=[fragment])
        else:
            serializer = FormShapeSerializer(self._settings, path)
            serializer.write_value(value)
            self._data.children[key] = serializer.get_data()

    def _member_path(self, key: str) -> tuple[str, ...]:
        if not key:
            raise MalformedKeyError(key, self._path)
        return (*self._path, key)

    def begin_struct(self, key: str) -> "FormStructSerializer":
        container = FormStructSerializer(self._settings, self._member_path(key))
        self._child_containers[key] = container
        return container

    def begin_list(self, key: str) -> "FormListSerializer":
        container = FormListSerializer(self._settings, self._member_path(key))
        self._child_containers[key] = container
        return container

    def get_data(self) -> FormData:
        result = self._data.copy()
        for key, container in self._child_containers.items():
            result.children[key] = container.get_data()
        return result


class FormListSerializer(ListSerializer):
    """Collects the elements of a list.

    Scalar elements are routed by the array encoding: under ``BRACKET`` they're
    collected under the reserved empty key, otherwise they're written as values of the
    list itself. Structured elements are keyed by their position.
    """

    _settings: URLEncodedFormSettings
    _path: tuple[str, ...]
    _data: FormData
    _child_containers: dict[int, "_Container"]
    _count: int

    def __init__(self, settings: URLEncodedFormSettings, path: tuple[str, ...]) -> None:
        self._settings = settings
        self._path = path
        self._data = FormData()
        self._child_containers = {}
        self._count = 0

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        pass

    def write_null(self) -> None:
        pass

    def write(self, value: Any) -> None:
        if value is None:
            self.write_null()
            return

        if (fragment := as_fragment(value)) is not None:
            self._append_values([fragment])
        else:
            path = (*self._path, str(self._count))
            if isinstance(value, datetime):
                data = encode_date(value, self._settings, path)
            else:
                serializer = FormShapeSerializer(self._settings, path)
                serializer.write_value(value)
                data = serializer.get_data()

            # An element that only wrote values is a wrapped scalar, so it shouldn't
            # get an index key of its own.
            if data.has_only_values:
                self._append_values(data.values)
            else:
                self._data.children[str(self._count)] = data
        self._count += 1

    def _append_values(self, values: list[Fragment]) -> None:
        if self._settings.array_encoding is ArrayEncoding.BRACKET:
            self._data.children.setdefault("", FormData()).values.extend(values)
        else:
            self._data.values.extend(values)

    def begin_struct(self) -> FormStructSerializer:
        container = FormStructSerializer(
            self._settings, (*self._path, str(self._count))
        )
        self._child_containers[self._count] = container
        self._count += 1
        return container

    def begin_list(self) -> "FormListSerializer":
        container = FormListSerializer(self._settings, (*self._path, str(self._count)))
        self._child_containers[self._count] = container
        self._count += 1
        return container

    def get_data(self) -> FormData:
        result = self._data.copy()
        if (bucket := result.children.get("")) is not None:
            result.children[""] = bucket = bucket.copy()
        for index, container in self._child_containers.items():
            result.children[str(index)] = container.get_data()

        encoding = self._settings.array_encoding
        if isinstance(encoding, SeparatedArrayEncoding):
            to_join = result.values
            if bucket is not None:
                to_join = to_join + bucket.values
                bucket.values = []
            joined = encoding.separator.join(v.as_url_encoded() for v in to_join)
            result.values = [Fragment(joined, is_encoded=True)]
        return result


class FormValueSerializer:
    """Collects a single value."""

    _settings: URLEncodedFormSettings
    _path: tuple[str, ...]
    _data: FormData

    def __init__(self, settings: URLEncodedFormSettings, path: tuple[str, ...]) -> None:
        self._settings = settings
        self._path = path
        self._data = FormData()

    def write_null(self) -> None:
        pass

    def write(self, value: Any) -> None:
        if value is None:
            self.write_null()
        elif isinstance(value, datetime):
            self._data = encode_date(value, self._settings, self._path)
        elif (fragment := as_fragment(value)) is not None:
            self._data.values.append(fragment)
        else:
            serializer = FormShapeSerializer(self._settings, self._path)
            serializer.write_value(value)
            self._data = serializer.get_data()

    def get_data(self) -> FormData:
        return self._data.copy()


def encode_date(
    value: datetime, settings: URLEncodedFormSettings, path: tuple[str, ...]
) -> FormData:
    """Writes a datetime using the configured date encoding.

    :param value: The datetime to write.
    :param settings: The active settings.
    :param path: The key path of the value, used to root custom encoders.
    :returns: The form data of the datetime.
    """
    match settings.date_encoding:
        case DateEncoding.SECONDS_SINCE_1970:
            return FormData.of(serialize_epoch_seconds(value))
        case DateEncoding.ISO8601:
            return FormData.of(iso8601_formatter().format(value))
        case CustomDateEncoding(callback=callback):
            serializer = FormShapeSerializer(settings, path)
            callback(value, serializer)
            return serializer.get_data()


class FormDataSerializer:
    """Writes a form data tree as a form-urlencoded string.

    Keys are composed with bracket notation: ``a[b][c]=value``. The reserved empty
    key segment is written as a bare ``[]``. Values at the root have no key and are
    written bare.
    """

    def serialize(self, data: FormData) -> str:
        """Serialize the tree.

        :param data: The root of the tree.
        :returns: The pairs of the tree joined with ``&``.
        :raises MalformedKeyError: If a key segment contains ``[`` or ``]``.
        """
        pairs: list[str] = []
        self._write_node(data, (), pairs)
        return "&".join(pairs)

    def _write_node(
        self, data: FormData, path: tuple[str, ...], pairs: list[str]
    ) -> None:
        if data.values:
            key = self._compose_key(path)
            for value in data.values:
                if path:
                    pairs.append(f"{key}={value.as_url_encoded()}")
                else:
                    pairs.append(value.as_url_encoded())

        for segment, child in data.children.items():
            if "[" in segment or "]" in segment:
                raise MalformedKeyError(segment, path)
            self._write_node(child, (*path, segment), pairs)

    def _compose_key(self, path: tuple[str, ...]) -> str:
        key = ""
        for i, segment in enumerate(path):
            if not segment:
                key += "[]"
            elif i == 0:
                key += escape(segment)
            else:
                key += f"[{escape(segment)}]"
        return key
