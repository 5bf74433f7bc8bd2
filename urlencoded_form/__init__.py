#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from ._private.serializers import FormDataSerializer as _FormDataSerializer
from ._private.serializers import FormShapeSerializer as _FormShapeSerializer
from .exceptions import (
    InvalidURLError,
    MalformedKeyError,
    SerializationError,
    URLEncodedFormError,
)
from .serializers import FormSerializer
from .settings import (
    ArrayEncoding,
    ArrayEncodingStrategy,
    CustomDateEncoding,
    DateEncoding,
    DateEncodingStrategy,
    SeparatedArrayEncoding,
    URLEncodedFormSettings,
)

__version__ = "0.1.0"
__all__ = (
    "ArrayEncoding",
    "CustomDateEncoding",
    "DateEncoding",
    "InvalidURLError",
    "MalformedKeyError",
    "SeparatedArrayEncoding",
    "SerializationError",
    "URLEncodedFormEncoder",
    "URLEncodedFormError",
    "URLEncodedFormSettings",
    "encode",
)

logger = logging.getLogger(__name__)


class URLEncodedFormEncoder:
    """Encodes values as ``application/x-www-form-urlencoded`` data.

    >>> URLEncodedFormEncoder().encode({"name": "Vapor", "age": 3})
    'name=Vapor&age=3'

    Scalars, datetimes, mappings, dataclasses, sequences, and objects implementing
    :py:class:`serializers.SerializeableForm` are supported. ``None`` values are
    omitted.
    """

    def __init__(
        self,
        array_encoding: ArrayEncodingStrategy = ArrayEncoding.BRACKET,
        date_encoding: DateEncodingStrategy = DateEncoding.SECONDS_SINCE_1970,
    ) -> None:
        """Initializes a URLEncodedFormEncoder.

        :param array_encoding: How lists of scalar values are written. Defaults to
            bracket suffixed keys, e.g. ``foo[]=1&foo[]=2``.
        :param date_encoding: How datetime values are written. Defaults to fractional
            seconds since the UNIX epoch.
        """
        self._settings = URLEncodedFormSettings(
            array_encoding=array_encoding,
            date_encoding=date_encoding,
        )

    @property
    def media_type(self) -> str:
        return "application/x-www-form-urlencoded"

    @property
    def settings(self) -> URLEncodedFormSettings:
        return self._settings

    def create_serializer(self) -> _FormShapeSerializer:
        """Create a serializer rooted at the top of a new form.

        Call ``get_data`` on the serializer once writing is complete and pass the result
        to :py:meth:`serialize_data` to get the encoded form.
        """
        return _FormShapeSerializer(self._settings)

    def encode(self, value: Any) -> str:
        """Encode a value.

        :param value: The value to encode.
        :returns: The encoded form, without a leading ``?``.
        :raises SerializationError: If the value or one of its members can't be
            represented, or a key is empty or contains ``[`` or ``]``.
        """
        logger.debug(
            "Encoding %s as form data with settings: %s",
            type(value).__name__,
            self._settings,
        )
        serializer = self.create_serializer()
        serializer.write_value(value)
        return self.serialize_data(serializer)

    def serialize_data(self, serializer: FormSerializer) -> str:
        """Encode everything written to a serializer from :py:meth:`create_serializer`.

        :param serializer: The root serializer.
        :returns: The encoded form.
        """
        if not isinstance(serializer, _FormShapeSerializer):
            raise TypeError(
                f"Expected a serializer created by create_serializer, found: "
                f"{type(serializer)}"
            )
        result = _FormDataSerializer().serialize(serializer.get_data())
        logger.debug("Encoded form data of length %s", len(result))
        return result

    def encode_to_url(self, value: Any, url: str) -> str:
        """Encode a value and set it as the query of a URL.

        Any existing query is replaced.

        :param value: The value to encode.
        :param url: The URL to attach the encoded value to.
        :returns: The URL with the encoded value as its query.
        :raises InvalidURLError: If the URL can't be split into components or rebuilt
            from them.
        """
        try:
            components = urlsplit(url)
        except ValueError as e:
            raise InvalidURLError(url) from e

        if not (components.scheme or components.netloc or components.path):
            raise InvalidURLError(url)

        query = self.encode(value)
        try:
            result = urlunsplit(components._replace(query=query))
        except ValueError as e:
            raise InvalidURLError(url) from e

        logger.debug(
            "Attached encoded form data of length %s to url: %s", len(query), url
        )
        return result


def encode(value: Any, settings: URLEncodedFormSettings | None = None) -> str:
    """Encode a value as ``application/x-www-form-urlencoded`` data.

    :param value: The value to encode.
    :param settings: The settings to encode with. Defaults are used if not set.
    :returns: The encoded form.
    """
    if settings is None:
        settings = URLEncodedFormSettings()
    encoder = URLEncodedFormEncoder(
        array_encoding=settings.array_encoding,
        date_encoding=settings.date_encoding,
    )
    return encoder.encode(value)
