"""
twiliokit - Validation Requests Resource

Adding an outgoing caller id starts a validation call to the number; the
ValidationRequest returned holds the code the person answering must enter.
"""

from typing import Optional, Union

import httpx

from twiliokit.config import Endpoints
from twiliokit.converters import Promoter
from twiliokit.models import PhoneNumberField, Resource
from twiliokit.resources.base import Creator
from twiliokit.transport import HttpMethod
from twiliokit.types import PhoneNumber


class ValidationRequest(Resource):
    """A pending validation of an outgoing caller id."""

    account_sid: Optional[str] = None
    phone_number: PhoneNumberField = None
    friendly_name: Optional[str] = None
    validation_code: Optional[int] = None
    call_sid: Optional[str] = None

    @classmethod
    def creator(
        cls,
        phone_number: Union[PhoneNumber, str],
        account_sid: Optional[str] = None,
    ) -> "ValidationRequestCreator":
        """
        Create a ValidationRequestCreator to execute create.

        Args:
            phone_number: Number to validate
            account_sid: Account to add the caller id to. Defaults to the
                client's account.
        """
        return ValidationRequestCreator(phone_number, account_sid=account_sid)


class ValidationRequestCreator(Creator[ValidationRequest]):
    resource_class = ValidationRequest
    post_params = (
        ("_phone_number", "PhoneNumber"),
        ("_friendly_name", "FriendlyName"),
        ("_call_delay", "CallDelay"),
        ("_extension", "Extension"),
        ("_status_callback", "StatusCallback"),
        ("_status_callback_method", "StatusCallbackMethod"),
    )

    def __init__(
        self,
        phone_number: Union[PhoneNumber, str],
        account_sid: Optional[str] = None,
    ) -> None:
        self.account_sid = account_sid
        self._phone_number = Promoter.phone_number_from_string(phone_number)
        self._friendly_name: Optional[str] = None
        self._call_delay: Optional[int] = None
        self._extension: Optional[str] = None
        self._status_callback: Optional[httpx.URL] = None
        self._status_callback_method: Optional[HttpMethod] = None

    def set_friendly_name(self, friendly_name: str) -> "ValidationRequestCreator":
        self._friendly_name = friendly_name
        return self

    def set_call_delay(self, call_delay: int) -> "ValidationRequestCreator":
        """Seconds to wait before placing the validation call."""
        self._call_delay = call_delay
        return self

    def set_extension(self, extension: str) -> "ValidationRequestCreator":
        """Digits to dial after the call connects, e.g. to reach an extension."""
        self._extension = extension
        return self

    def set_status_callback(self, status_callback: Union[httpx.URL, str]) -> "ValidationRequestCreator":
        self._status_callback = Promoter.uri_from_string(status_callback)
        return self

    def set_status_callback_method(self, status_callback_method: HttpMethod) -> "ValidationRequestCreator":
        self._status_callback_method = status_callback_method
        return self

    def _path(self, client) -> str:
        return Endpoints.VALIDATION_REQUESTS.format(
            account_sid=self._resolve_account_sid(self.account_sid, client),
        )
