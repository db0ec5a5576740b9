"""Shared pytest fixtures for testing."""

import json
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest

from twiliokit import TwilioRestClient
from twiliokit.transport import HttpClient, Response


ACCOUNT_SID = "AC00000000000000000000000000000000"
AUTH_TOKEN = "test_auth_token"
CALL_SID = "CA00000000000000000000000000000001"


class StubHttpClient(HttpClient):
    """HttpClient that records requests and replays canned responses."""

    def __init__(self, responses: Union[Optional[Response], List[Optional[Response]]] = None) -> None:
        self._responses = responses if isinstance(responses, list) else [responses]
        self.requests: List[Dict[str, Any]] = []
        self.closed = False

    def make_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, List[str]]] = None,
        data: Optional[Dict[str, List[str]]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[Tuple[str, str]] = None,
    ) -> Optional[Response]:
        self.requests.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "data": data,
                "headers": headers,
                "auth": auth,
            }
        )
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]

    def close(self) -> None:
        self.closed = True

    @property
    def last_request(self) -> Dict[str, Any]:
        return self.requests[-1]


def json_response(status_code: int, body: Any) -> Response:
    """Build a Response whose body is ``body`` encoded as JSON."""
    return Response(
        status_code=status_code,
        content=json.dumps(body).encode("utf-8"),
        headers={"content-type": "application/json"},
    )


# =============================================================================
# Payload Fixtures
# =============================================================================


@pytest.fixture
def call_payload() -> Dict[str, Any]:
    """A call as the API returns it."""
    return {
        "sid": CALL_SID,
        "date_created": "Tue, 31 Aug 2010 20:36:28 +0000",
        "date_updated": "Tue, 31 Aug 2010 20:36:44 +0000",
        "parent_call_sid": None,
        "account_sid": ACCOUNT_SID,
        "to": "+14155551212",
        "to_formatted": "(415) 555-1212",
        "from": "+15017122661",
        "from_formatted": "(501) 712-2661",
        "phone_number_sid": "PN00000000000000000000000000000000",
        "status": "completed",
        "start_time": "Tue, 31 Aug 2010 20:36:29 +0000",
        "end_time": "Tue, 31 Aug 2010 20:36:44 +0000",
        "duration": "15",
        "price": "-0.03000",
        "price_unit": "USD",
        "direction": "outbound-api",
        "answered_by": None,
        "api_version": "2010-04-01",
        "forwarded_from": None,
        "group_sid": None,
        "caller_name": None,
        "uri": f"/2010-04-01/Accounts/{ACCOUNT_SID}/Calls/{CALL_SID}.json",
        "subresource_uris": {
            "notifications": f"/2010-04-01/Accounts/{ACCOUNT_SID}/Calls/{CALL_SID}/Notifications.json",
            "recordings": f"/2010-04-01/Accounts/{ACCOUNT_SID}/Calls/{CALL_SID}/Recordings.json",
        },
    }


@pytest.fixture
def validation_request_payload() -> Dict[str, Any]:
    """A validation request as the API returns it."""
    return {
        "account_sid": ACCOUNT_SID,
        "phone_number": "+14158675310",
        "friendly_name": "Office line",
        "validation_code": 111111,
        "call_sid": CALL_SID,
    }


@pytest.fixture
def error_payload() -> Dict[str, Any]:
    return {
        "message": "Internal error",
        "code": 20500,
        "more_info": "https://www.twilio.com/docs/errors/20500",
        "status": 500,
    }


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def respond():
    """Factory for JSON responses: respond(status_code, body)."""
    return json_response


@pytest.fixture
def make_client():
    """
    Factory for a REST client wired to a stub transport.

    Returns the client and the stub; the stub replays the given responses in
    order and keeps answering with the last one.
    """
    def _make(*responses: Optional[Response]) -> Tuple[TwilioRestClient, StubHttpClient]:
        stub = StubHttpClient(list(responses) or [None])
        return TwilioRestClient(ACCOUNT_SID, AUTH_TOKEN, http_client=stub), stub

    return _make
