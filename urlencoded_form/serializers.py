#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FormSerializer(Protocol):
    """Protocol for writing a value at a single position in a form.

    A serializer is given to :py:meth:`SerializeableForm.serialize` and to custom date
    encoders. Exactly one kind of container should be used per serializer: a struct,
    a list, or a single value. Opening another replaces the first.
    """

    def begin_struct(self) -> AbstractContextManager["StructSerializer"]:
        """Open a structure for writing.

        Members written to the structure are written as ``parent[member]=value``.

        :returns: A context manager containing a member serializer.
        """
        ...

    def begin_list(self) -> AbstractContextManager["ListSerializer"]:
        """Open a list for writing.

        How elements are written depends on the configured array encoding.

        :returns: A context manager containing an element serializer.
        """
        ...

    def write_null(self) -> None:
        """Write a null value.

        Form data has no representation for null, so nothing is written.
        """
        ...

    def write_value(self, value: Any) -> None:
        """Write any supported value.

        Scalars and datetimes are written directly. Mappings, dataclasses, sequences
        and :py:class:`SerializeableForm` objects are written as nested containers.

        :param value: The value to write.
        """
        ...

    def write_struct(self, struct: "SerializeableStruct") -> None:
        """Write a structure using its ``serialize_members`` method.

        :param struct: The structure to serialize.
        """
        with self.begin_struct() as struct_serializer:
            struct.serialize_members(struct_serializer)


@runtime_checkable
class StructSerializer(Protocol):
    """Protocol for writing the members of a structure."""

    def write(self, key: str, value: Any) -> None:
        """Write a member.

        :param key: The member's key segment.
        :param value: The member's value. ``None`` omits the member.
        """
        ...

    def write_null(self, key: str) -> None:
        """Omit a member.

        :param key: The member's key segment.
        """
        ...

    def begin_struct(self, key: str) -> AbstractContextManager["StructSerializer"]:
        """Open a nested structure for the given member.

        :param key: The member's key segment.
        :returns: A context manager containing a member serializer.
        """
        ...

    def begin_list(self, key: str) -> AbstractContextManager["ListSerializer"]:
        """Open a nested list for the given member.

        :param key: The member's key segment.
        :returns: A context manager containing an element serializer.
        """
        ...


@runtime_checkable
class ListSerializer(Protocol):
    """Protocol for writing the elements of a list, in order."""

    def write(self, value: Any) -> None:
        """Write an element.

        :param value: The element. ``None`` is skipped.
        """
        ...

    def write_null(self) -> None:
        """Skip an element."""
        ...

    def begin_struct(self) -> AbstractContextManager[StructSerializer]:
        """Open a structure as the next element."""
        ...

    def begin_list(self) -> AbstractContextManager["ListSerializer"]:
        """Open a list as the next element."""
        ...


@runtime_checkable
class SerializeableForm(Protocol):
    """Protocol for objects that control how they are written to a form."""

    def serialize(self, serializer: FormSerializer) -> None:
        """Serialize the object using the given serializer.

        :param serializer: The serializer to write data to.
        """
        ...


@runtime_checkable
class SerializeableStruct(SerializeableForm, Protocol):
    """Protocol for structures that write their members to a form."""

    def serialize_members(self, serializer: StructSerializer) -> None:
        """Serialize structure members using the given serializer.

        :param serializer: The serializer to write member data to.
        """
        ...
