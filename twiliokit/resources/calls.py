"""
twiliokit - Calls Resource

The Call resource and the operations that create, fetch, update, delete and
list calls.

Example:
    >>> client = TwilioRestClient("ACXXXXXXXX", "your_auth_token")
    >>> call = (
    ...     Call.updater("CAXXXXXXXX")
    ...     .set_url("https://example.com/twiml")
    ...     .set_method(HttpMethod.POST)
    ...     .execute(client)
    ... )
    >>> call.status
    <CallStatus.IN_PROGRESS: 'in-progress'>
"""

from datetime import date
from enum import Enum
from typing import List, Optional, Union

import httpx
from pydantic import Field

from twiliokit.config import Endpoints
from twiliokit.converters import Promoter
from twiliokit.models import DateTimeField, EnumField, Resource
from twiliokit.resources.base import Creator, Deleter, Fetcher, Reader, Updater
from twiliokit.transport import HttpMethod
from twiliokit.types import PhoneNumber


class CallStatus(str, Enum):
    """Status of a call."""
    QUEUED = "queued"
    RINGING = "ringing"
    IN_PROGRESS = "in-progress"
    CANCELED = "canceled"
    COMPLETED = "completed"
    FAILED = "failed"
    BUSY = "busy"
    NO_ANSWER = "no-answer"

    def __str__(self) -> str:
        return self.value


class CallDirection(str, Enum):
    """Direction of a call."""
    INBOUND = "inbound"
    OUTBOUND_API = "outbound-api"
    OUTBOUND_DIAL = "outbound-dial"

    def __str__(self) -> str:
        return self.value


CallStatusField = EnumField(CallStatus)
CallDirectionField = EnumField(CallDirection)


class Call(Resource):
    """A phone call made to or from an account."""

    sid: Optional[str] = None
    date_created: DateTimeField = None
    date_updated: DateTimeField = None
    parent_call_sid: Optional[str] = None
    account_sid: Optional[str] = None
    to: Optional[str] = None
    to_formatted: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    from_formatted: Optional[str] = None
    phone_number_sid: Optional[str] = None
    status: CallStatusField = None
    start_time: DateTimeField = None
    end_time: DateTimeField = None
    duration: Optional[str] = None
    price: Optional[str] = None
    price_unit: Optional[str] = None
    direction: CallDirectionField = None
    answered_by: Optional[str] = None
    api_version: Optional[str] = None
    forwarded_from: Optional[str] = None
    group_sid: Optional[str] = None
    caller_name: Optional[str] = None
    uri: Optional[str] = None

    @classmethod
    def creator(
        cls,
        to: Union[PhoneNumber, str],
        from_: Union[PhoneNumber, str],
        url: Optional[Union[httpx.URL, str]] = None,
        application_sid: Optional[str] = None,
        account_sid: Optional[str] = None,
    ) -> "CallCreator":
        """Create a CallCreator to execute create."""
        return CallCreator(to, from_, url=url, application_sid=application_sid, account_sid=account_sid)

    @classmethod
    def fetcher(cls, sid: str, account_sid: Optional[str] = None) -> "CallFetcher":
        """Create a CallFetcher to execute fetch."""
        return CallFetcher(sid, account_sid=account_sid)

    @classmethod
    def updater(cls, sid: str, account_sid: Optional[str] = None) -> "CallUpdater":
        """Create a CallUpdater to execute update."""
        return CallUpdater(sid, account_sid=account_sid)

    @classmethod
    def deleter(cls, sid: str, account_sid: Optional[str] = None) -> "CallDeleter":
        """Create a CallDeleter to execute delete."""
        return CallDeleter(sid, account_sid=account_sid)

    @classmethod
    def reader(cls, account_sid: Optional[str] = None) -> "CallReader":
        """Create a CallReader to execute read."""
        return CallReader(account_sid=account_sid)


class CallCreator(Creator[Call]):
    """
    Places an outbound call.

    TwiML for the call comes from ``url``, from the application identified by
    ``application_sid``, or inline from ``set_twiml``.

    Args:
        to: Phone number, SIP address or client identifier to call
        from_: Phone number or client identifier the call comes from
        url: URL that returns TwiML for the call
        application_sid: Application whose voice URL returns TwiML
        account_sid: Account to create the call in. Defaults to the client's
            account.
    """

    resource_class = Call
    post_params = (
        ("_to", "To"),
        ("_from", "From"),
        ("_url", "Url"),
        ("_application_sid", "ApplicationSid"),
        ("_twiml", "Twiml"),
        ("_method", "Method"),
        ("_fallback_url", "FallbackUrl"),
        ("_fallback_method", "FallbackMethod"),
        ("_status_callback", "StatusCallback"),
        ("_status_callback_event", "StatusCallbackEvent"),
        ("_status_callback_method", "StatusCallbackMethod"),
        ("_send_digits", "SendDigits"),
        ("_timeout", "Timeout"),
        ("_record", "Record"),
        ("_caller_id", "CallerId"),
    )

    def __init__(
        self,
        to: Union[PhoneNumber, str],
        from_: Union[PhoneNumber, str],
        url: Optional[Union[httpx.URL, str]] = None,
        application_sid: Optional[str] = None,
        account_sid: Optional[str] = None,
    ) -> None:
        self.account_sid = account_sid
        self._to = Promoter.phone_number_from_string(to)
        self._from = Promoter.phone_number_from_string(from_)
        self._url = Promoter.uri_from_string(url) if url is not None else None
        self._application_sid = application_sid
        self._twiml: Optional[str] = None
        self._method: Optional[HttpMethod] = None
        self._fallback_url: Optional[httpx.URL] = None
        self._fallback_method: Optional[HttpMethod] = None
        self._status_callback: Optional[httpx.URL] = None
        self._status_callback_event: Optional[List[str]] = None
        self._status_callback_method: Optional[HttpMethod] = None
        self._send_digits: Optional[str] = None
        self._timeout: Optional[int] = None
        self._record: Optional[bool] = None
        self._caller_id: Optional[str] = None

    def set_url(self, url: Union[httpx.URL, str]) -> "CallCreator":
        """URL that returns TwiML for the call."""
        self._url = Promoter.uri_from_string(url)
        return self

    def set_application_sid(self, application_sid: str) -> "CallCreator":
        """Application whose voice URL returns TwiML for the call."""
        self._application_sid = application_sid
        return self

    def set_twiml(self, twiml: str) -> "CallCreator":
        """TwiML instructions for the call, used instead of ``url``."""
        self._twiml = twiml
        return self

    def set_method(self, method: HttpMethod) -> "CallCreator":
        """HTTP method used to request ``url``. Defaults to POST."""
        self._method = method
        return self

    def set_fallback_url(self, fallback_url: Union[httpx.URL, str]) -> "CallCreator":
        """URL requested if requesting or executing the TwiML at ``url`` fails."""
        self._fallback_url = Promoter.uri_from_string(fallback_url)
        return self

    def set_fallback_method(self, fallback_method: HttpMethod) -> "CallCreator":
        """HTTP method used to request ``fallback_url``."""
        self._fallback_method = fallback_method
        return self

    def set_status_callback(self, status_callback: Union[httpx.URL, str]) -> "CallCreator":
        """URL notified of call progress events."""
        self._status_callback = Promoter.uri_from_string(status_callback)
        return self

    def set_status_callback_event(self, status_callback_event: List[str]) -> "CallCreator":
        """Call progress events that trigger ``status_callback``, e.g. ``initiated``."""
        self._status_callback_event = list(status_callback_event)
        return self

    def set_status_callback_method(self, status_callback_method: HttpMethod) -> "CallCreator":
        """HTTP method used to request ``status_callback``."""
        self._status_callback_method = status_callback_method
        return self

    def set_send_digits(self, send_digits: str) -> "CallCreator":
        """Digits to dial once the call connects."""
        self._send_digits = send_digits
        return self

    def set_timeout(self, timeout: int) -> "CallCreator":
        """Seconds to let the call ring before treating it as unanswered."""
        self._timeout = timeout
        return self

    def set_record(self, record: bool) -> "CallCreator":
        """Whether to record the call."""
        self._record = record
        return self

    def set_caller_id(self, caller_id: str) -> "CallCreator":
        """Caller id shown for SIP calls."""
        self._caller_id = caller_id
        return self

    def _path(self, client) -> str:
        return Endpoints.CALLS.format(account_sid=self._resolve_account_sid(self.account_sid, client))


class CallFetcher(Fetcher[Call]):
    """
    Fetches a single call.

    Args:
        sid: SID of the call to fetch
        account_sid: Account the call belongs to
    """

    resource_class = Call

    def __init__(self, sid: str, account_sid: Optional[str] = None) -> None:
        self.account_sid = account_sid
        self.sid = sid

    def _path(self, client) -> str:
        return Endpoints.CALL.format(
            account_sid=self._resolve_account_sid(self.account_sid, client),
            sid=self.sid,
        )


class CallUpdater(Updater[Call]):
    """
    Modifies a call in progress: redirects it to new TwiML or ends it.

    Args:
        sid: SID of the call to update
        account_sid: Account the call belongs to. Defaults to the client's
            account.
    """

    resource_class = Call
    post_params = (
        ("_url", "Url"),
        ("_method", "Method"),
        ("_status", "Status"),
        ("_fallback_url", "FallbackUrl"),
        ("_fallback_method", "FallbackMethod"),
        ("_status_callback", "StatusCallback"),
        ("_status_callback_method", "StatusCallbackMethod"),
        ("_twiml", "Twiml"),
    )

    def __init__(self, sid: str, account_sid: Optional[str] = None) -> None:
        self.account_sid = account_sid
        self.sid = sid
        self._url: Optional[httpx.URL] = None
        self._method: Optional[HttpMethod] = None
        self._status: Optional[CallStatus] = None
        self._fallback_url: Optional[httpx.URL] = None
        self._fallback_method: Optional[HttpMethod] = None
        self._status_callback: Optional[httpx.URL] = None
        self._status_callback_method: Optional[HttpMethod] = None
        self._twiml: Optional[str] = None

    def set_url(self, url: Union[httpx.URL, str]) -> "CallUpdater":
        """
        A URL that returns TwiML. The call is redirected to the new TwiML as
        soon as the update is executed.
        """
        self._url = Promoter.uri_from_string(url)
        return self

    def set_method(self, method: HttpMethod) -> "CallUpdater":
        """HTTP method used to request ``url``. Defaults to POST."""
        self._method = method
        return self

    def set_status(self, status: CallStatus) -> "CallUpdater":
        """
        Either ``canceled`` or ``completed``.

        ``canceled`` hangs up calls that are queued or ringing without
        affecting calls in progress; ``completed`` hangs up the call even if it
        is in progress.
        """
        self._status = status
        return self

    def set_fallback_url(self, fallback_url: Union[httpx.URL, str]) -> "CallUpdater":
        """URL requested if requesting or executing the TwiML at ``url`` fails."""
        self._fallback_url = Promoter.uri_from_string(fallback_url)
        return self

    def set_fallback_method(self, fallback_method: HttpMethod) -> "CallUpdater":
        """HTTP method used to request ``fallback_url``. Must be GET or POST."""
        self._fallback_method = fallback_method
        return self

    def set_status_callback(self, status_callback: Union[httpx.URL, str]) -> "CallUpdater":
        """URL requested when the call ends."""
        self._status_callback = Promoter.uri_from_string(status_callback)
        return self

    def set_status_callback_method(self, status_callback_method: HttpMethod) -> "CallUpdater":
        """HTTP method used to request ``status_callback``. Defaults to POST."""
        self._status_callback_method = status_callback_method
        return self

    def set_twiml(self, twiml: str) -> "CallUpdater":
        """TwiML instructions that replace the call's current TwiML."""
        self._twiml = twiml
        return self

    def _path(self, client) -> str:
        return Endpoints.CALL.format(
            account_sid=self._resolve_account_sid(self.account_sid, client),
            sid=self.sid,
        )


class CallDeleter(Deleter):
    """
    Deletes a call record.

    Args:
        sid: SID of the call to delete
        account_sid: Account the call belongs to
    """

    resource_class = Call

    def __init__(self, sid: str, account_sid: Optional[str] = None) -> None:
        self.account_sid = account_sid
        self.sid = sid

    def _path(self, client) -> str:
        return Endpoints.CALL.format(
            account_sid=self._resolve_account_sid(self.account_sid, client),
            sid=self.sid,
        )


class CallReader(Reader[Call]):
    """
    Lists calls, newest first.

    Example:
        >>> for call in Call.reader().set_status(CallStatus.BUSY).limit(20).read(client):
        ...     print(call.sid)
    """

    resource_class = Call
    records_key = "calls"
    query_params = (
        ("_to", "To"),
        ("_from", "From"),
        ("_parent_call_sid", "ParentCallSid"),
        ("_status", "Status"),
        ("_start_time", "StartTime"),
        ("_end_time", "EndTime"),
    )

    def __init__(self, account_sid: Optional[str] = None) -> None:
        super().__init__()
        self.account_sid = account_sid
        self._to: Optional[PhoneNumber] = None
        self._from: Optional[PhoneNumber] = None
        self._parent_call_sid: Optional[str] = None
        self._status: Optional[CallStatus] = None
        self._start_time: Optional[date] = None
        self._end_time: Optional[date] = None

    def set_to(self, to: Union[PhoneNumber, str]) -> "CallReader":
        """Only calls made to this number."""
        self._to = Promoter.phone_number_from_string(to)
        return self

    def set_from(self, from_: Union[PhoneNumber, str]) -> "CallReader":
        """Only calls made from this number."""
        self._from = Promoter.phone_number_from_string(from_)
        return self

    def set_parent_call_sid(self, parent_call_sid: str) -> "CallReader":
        """Only child calls of this call."""
        self._parent_call_sid = parent_call_sid
        return self

    def set_status(self, status: CallStatus) -> "CallReader":
        """Only calls with this status."""
        self._status = status
        return self

    def set_start_time(self, start_time: date) -> "CallReader":
        """Only calls that started on this date."""
        self._start_time = start_time
        return self

    def set_end_time(self, end_time: date) -> "CallReader":
        """Only calls that ended on this date."""
        self._end_time = end_time
        return self

    def _path(self, client) -> str:
        return Endpoints.CALLS.format(account_sid=self._resolve_account_sid(self.account_sid, client))
