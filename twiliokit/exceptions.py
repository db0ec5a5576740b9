"""
twiliokit - Exceptions

This module contains all custom exceptions used by the SDK.

Every exception carries an :class:`ErrorKind` tag, so callers that prefer to
branch on the kind of failure rather than on the class can do so exhaustively:

    >>> try:
    ...     call = Call.updater("CA123").set_status(CallStatus.COMPLETED).execute(client)
    ... except TwilioError as e:
    ...     if e.kind is ErrorKind.API:
    ...         print(e.code, e.more_info)
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    """The disjoint kinds of failure an operation can end in."""
    CONNECTION = "connection"
    API = "api"
    SERVER = "server"
    PARSE = "parse"
    CONFIGURATION = "configuration"


class TwilioError(Exception):
    """
    Base exception for all twiliokit errors.

    Attributes:
        message: Human-readable error message
        kind: The kind of failure
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "kind": self.kind.value,
            "message": self.message,
        }


class ApiConnectionError(TwilioError):
    """
    Raised when the server could not be reached at all.

    This covers transport failures (DNS, refused connections, timeouts) and
    I/O failures while reading a response body. The underlying exception, if
    any, is chained as ``__cause__``.
    """

    kind = ErrorKind.CONNECTION


class ApiError(TwilioError):
    """
    Raised when the API answers with an error payload.

    This is how server-side validation and business-rule failures reach the
    caller.

    Attributes:
        code: Twilio error code, e.g. 21211
        more_info: URL of the error's documentation page
        status: HTTP status of the response
    """

    kind = ErrorKind.API

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        more_info: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.more_info = more_info
        self.status = status

    def __str__(self) -> str:
        if self.code:
            return f"HTTP {self.status} [{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r}, "
            f"more_info={self.more_info!r}, status={self.status!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(code=self.code, more_info=self.more_info, status=self.status)
        return data


class ServerError(TwilioError):
    """
    Raised when the API answers with a non-success status and a body that is
    empty or not an error payload.
    """

    kind = ErrorKind.SERVER

    def __init__(self, message: str = "Server Error, no content") -> None:
        super().__init__(message)


class DeserializationError(TwilioError):
    """
    Raised when a response body does not have the shape of the expected
    resource. The parser's exception is chained as ``__cause__``.
    """

    kind = ErrorKind.PARSE


class AuthenticationError(TwilioError):
    """
    Raised when a client is constructed without credentials.

    Credentials come either from the constructor or from the
    ``TWILIO_ACCOUNT_SID`` and ``TWILIO_AUTH_TOKEN`` environment variables.
    """

    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str = "Account SID and auth token are required") -> None:
        super().__init__(message)
