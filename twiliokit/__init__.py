"""
twiliokit

Typed request builders and resources for the Twilio REST API.

Example:
    >>> from twiliokit import TwilioRestClient, Call, CallStatus
    >>> client = TwilioRestClient("ACXXXXXXXX", "your_auth_token")
    >>> call = Call.updater("CAXXXXXXXX").set_status(CallStatus.COMPLETED).execute(client)
    >>> call.status
    <CallStatus.COMPLETED: 'completed'>
"""

from twiliokit.__version__ import __version__

__author__ = "twiliokit maintainers"
__license__ = "MIT"

from twiliokit.client import TwilioRestClient
from twiliokit.config import ClientConfig, Domains, API_VERSION
from twiliokit.converters import Promoter
from twiliokit.exceptions import (
    TwilioError,
    ErrorKind,
    ApiConnectionError,
    ApiError,
    ServerError,
    DeserializationError,
    AuthenticationError,
)
from twiliokit.models import Resource, RestError
from twiliokit.resources import (
    Call,
    CallStatus,
    CallDirection,
    CallCreator,
    CallFetcher,
    CallUpdater,
    CallDeleter,
    CallReader,
    Page,
    ResourceSet,
    ValidationRequest,
    ValidationRequestCreator,
)
from twiliokit.transport import HttpClient, HttpxClient, HttpMethod, Request, Response
from twiliokit.types import PhoneNumber

__all__ = [
    "__version__",

    # Main client
    "TwilioRestClient",
    "ClientConfig",
    "Domains",
    "API_VERSION",

    # Transport
    "HttpClient",
    "HttpxClient",
    "HttpMethod",
    "Request",
    "Response",

    # Types and converters
    "PhoneNumber",
    "Promoter",

    # Resources
    "Resource",
    "RestError",
    "Call",
    "CallStatus",
    "CallDirection",
    "CallCreator",
    "CallFetcher",
    "CallUpdater",
    "CallDeleter",
    "CallReader",
    "Page",
    "ResourceSet",
    "ValidationRequest",
    "ValidationRequestCreator",

    # Exceptions
    "TwilioError",
    "ErrorKind",
    "ApiConnectionError",
    "ApiError",
    "ServerError",
    "DeserializationError",
    "AuthenticationError",
]
