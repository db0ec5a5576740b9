"""
twiliokit - Data Models

Base class for API resources, the error payload model and the annotated field
types resources declare their wire schema with.

Resources are immutable pydantic models. Each field's alias is its wire name,
so a resource class body is the table mapping JSON keys to attributes. Keys the
table does not know are ignored, and missing keys leave the attribute None.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, IO, Optional, Type, TypeVar, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, PlainValidator, ValidationError

from twiliokit.converters import Promoter, format_rfc2822_datetime, rfc2822_datetime
from twiliokit.exceptions import ApiConnectionError, DeserializationError
from twiliokit.types import PhoneNumber

logger = logging.getLogger("twiliokit")

R = TypeVar("R", bound="Resource")

JsonSource = Union[str, bytes, IO[bytes], IO[str]]


# =============================================================================
# Field Types
# =============================================================================

def _to_phone_number(value: Any) -> Optional[PhoneNumber]:
    if value is None:
        return None
    if not isinstance(value, (str, PhoneNumber)):
        raise ValueError(f"expected a phone number string, got {type(value).__name__}")
    return Promoter.phone_number_from_string(value)


def _from_phone_number(value: Optional[PhoneNumber]) -> Optional[str]:
    return None if value is None else str(value)


PhoneNumberField = Annotated[
    Optional[PhoneNumber],
    PlainValidator(_to_phone_number),
    PlainSerializer(_from_phone_number, return_type=Optional[str]),
]

DateTimeField = Annotated[
    Optional[datetime],
    BeforeValidator(rfc2822_datetime),
    PlainSerializer(format_rfc2822_datetime, return_type=Optional[str], when_used="json"),
]


def EnumField(enum_cls: Type[Enum]) -> Any:
    """Optional enum field; values this SDK does not know parse as None."""
    return Annotated[
        Optional[enum_cls],
        BeforeValidator(lambda value: Promoter.enum_from_string(value, enum_cls)),
    ]


def _read_source(source: JsonSource) -> Union[str, bytes]:
    if isinstance(source, (str, bytes, bytearray)):
        return source
    # Convert stream I/O failures to connection errors
    try:
        return source.read()
    except OSError as e:
        raise ApiConnectionError(str(e)) from e


# =============================================================================
# Resources
# =============================================================================

class Resource(BaseModel):
    """
    Base class for all API resources.

    Resources are created by deserializing a server response and are never
    mutated afterwards. Equality and hashing are field-wise.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @classmethod
    def from_json(cls: Type[R], source: JsonSource) -> R:
        """
        Build a resource from a JSON document.

        Args:
            source: JSON text, bytes, or a readable stream positioned at the
                start of a JSON object

        Returns:
            The fully populated resource

        Raises:
            DeserializationError: If the document is not valid JSON or does not
                have the resource's shape
            ApiConnectionError: If reading the stream fails
        """
        content = _read_source(source)
        try:
            return cls.model_validate_json(content)
        except ValidationError as e:
            raise DeserializationError(f"Unable to parse {cls.__name__}: {e}") from e

    @classmethod
    def from_dict(cls: Type[R], data: Dict[str, Any]) -> R:
        """Build a resource from an already decoded JSON object."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DeserializationError(f"Unable to parse {cls.__name__}: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert the resource to its wire representation."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Convert the resource to a JSON document in the wire schema."""
        return json.dumps(self.to_dict())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash((type(self),) + tuple(self.model_dump().values()))


# =============================================================================
# Error Payload
# =============================================================================

class RestError(BaseModel):
    """
    Error payload returned with non-success responses.

    Attributes:
        message: Human-readable description
        code: Twilio error code
        more_info: URL of the error's documentation page
        status: HTTP status the server reported
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str
    code: Optional[int] = None
    more_info: Optional[str] = None
    status: Optional[int] = None

    @classmethod
    def from_json(cls, source: JsonSource) -> Optional["RestError"]:
        """
        Parse an error payload.

        Returns:
            The payload, or None if the body is empty or is not an error payload
        """
        content = _read_source(source)
        if not content or not content.strip():
            return None
        try:
            return cls.model_validate_json(content)
        except ValidationError as e:
            logger.debug(f"Response body is not an error payload: {e}")
            return None
