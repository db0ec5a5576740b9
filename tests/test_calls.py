"""Tests for the Call resource operations."""

from datetime import date

import httpx
import pytest

from twiliokit import (
    ApiConnectionError,
    ApiError,
    Call,
    CallCreator,
    CallStatus,
    CallUpdater,
    DeserializationError,
    ErrorKind,
    HttpMethod,
    ServerError,
)
from twiliokit.transport import Response


CALLS_URL = "https://api.twilio.com/2010-04-01/Accounts/AC00000000000000000000000000000000/Calls.json"
CALL_URL = (
    "https://api.twilio.com/2010-04-01/Accounts/AC00000000000000000000000000000000"
    "/Calls/CA00000000000000000000000000000001.json"
)
CALL_SID = "CA00000000000000000000000000000001"


class TestCallUpdaterParams:
    """Tests for how CallUpdater assembles its form parameters."""

    def test_unset_fields_are_not_sent(self, make_client, respond, call_payload):
        """Test that an updater with no setters called sends no parameters."""
        client, stub = make_client(respond(200, call_payload))

        CallUpdater(CALL_SID).execute(client)

        assert stub.last_request["data"] == {}

    def test_only_set_fields_are_sent(self, make_client, respond, call_payload):
        """Test that only the fields explicitly set appear in the request."""
        client, stub = make_client(respond(200, call_payload))

        CallUpdater(CALL_SID).set_status(CallStatus.COMPLETED).execute(client)

        assert stub.last_request["data"] == {"Status": ["completed"]}

    def test_wire_names_and_order(self, make_client, respond, call_payload):
        """Test that every field uses its API name, in the documented order."""
        client, stub = make_client(respond(200, call_payload))

        (
            CallUpdater(CALL_SID)
            .set_twiml("<Response><Hangup/></Response>")
            .set_status_callback_method(HttpMethod.GET)
            .set_status_callback("https://example.com/status")
            .set_fallback_method(HttpMethod.POST)
            .set_fallback_url("https://example.com/fallback")
            .set_status(CallStatus.CANCELED)
            .set_method(HttpMethod.GET)
            .set_url("https://example.com/twiml")
            .execute(client)
        )

        data = stub.last_request["data"]
        assert list(data) == [
            "Url",
            "Method",
            "Status",
            "FallbackUrl",
            "FallbackMethod",
            "StatusCallback",
            "StatusCallbackMethod",
            "Twiml",
        ]
        assert data["Url"] == ["https://example.com/twiml"]
        assert data["Method"] == ["GET"]
        assert data["Status"] == ["canceled"]
        assert data["FallbackMethod"] == ["POST"]
        assert data["StatusCallbackMethod"] == ["GET"]

    def test_overwritten_field_sends_last_value(self, make_client, respond, call_payload):
        """Test that setting a field twice keeps only the second value."""
        client, stub = make_client(respond(200, call_payload))

        (
            CallUpdater(CALL_SID)
            .set_url("https://example.com/first")
            .set_url("https://example.com/second")
            .execute(client)
        )

        assert stub.last_request["data"] == {"Url": ["https://example.com/second"]}

    @pytest.mark.parametrize("setter", ["set_url", "set_fallback_url", "set_status_callback"])
    def test_string_and_url_setters_are_equivalent(self, make_client, respond, call_payload, setter):
        """Test that a URL string and an httpx.URL serialize identically."""
        client_a, stub_a = make_client(respond(200, call_payload))
        client_b, stub_b = make_client(respond(200, call_payload))

        getattr(CallUpdater(CALL_SID), setter)("https://example.com/path?a=1").execute(client_a)
        getattr(CallUpdater(CALL_SID), setter)(httpx.URL("https://example.com/path?a=1")).execute(client_b)

        assert stub_a.last_request["data"] == stub_b.last_request["data"]

    def test_setters_chain(self):
        """Test that setters return the builder itself."""
        updater = CallUpdater(CALL_SID)

        assert updater.set_url("https://example.com") is updater
        assert updater.set_status(CallStatus.COMPLETED) is updater
        assert updater.set_method(HttpMethod.POST) is updater


class TestCallUpdaterExecute:
    """Tests for CallUpdater response handling."""

    def test_success_returns_call(self, make_client, respond, call_payload):
        """Test that a 200 response is deserialized into a Call."""
        client, stub = make_client(respond(200, call_payload))

        call = Call.updater(CALL_SID).set_status(CallStatus.COMPLETED).execute(client)

        assert isinstance(call, Call)
        assert call.sid == CALL_SID
        assert call.status is CallStatus.COMPLETED
        assert stub.last_request["method"] == "POST"
        assert stub.last_request["url"] == CALL_URL

    def test_explicit_account_sid_is_used_in_path(self, make_client, respond, call_payload):
        """Test that an explicit account SID overrides the client's account."""
        client, stub = make_client(respond(200, call_payload))

        CallUpdater(CALL_SID, account_sid="AC11111111111111111111111111111111").execute(client)

        assert "/Accounts/AC11111111111111111111111111111111/Calls/" in stub.last_request["url"]

    def test_error_payload_raises_api_error(self, make_client, respond, error_payload):
        """Test that an error body is surfaced with all four values."""
        client, _ = make_client(respond(500, error_payload))

        with pytest.raises(ApiError) as exc_info:
            CallUpdater(CALL_SID).set_status(CallStatus.COMPLETED).execute(client)

        error = exc_info.value
        assert error.message == "Internal error"
        assert error.code == 20500
        assert error.more_info == "https://www.twilio.com/docs/errors/20500"
        assert error.status == 500
        assert error.kind is ErrorKind.API
        assert error.to_dict() == {
            "error_type": "ApiError",
            "kind": "api",
            "message": "Internal error",
            "code": 20500,
            "more_info": "https://www.twilio.com/docs/errors/20500",
            "status": 500,
        }

    def test_empty_error_body_raises_server_error(self, make_client):
        """Test that a failure without a body raises the no-content error."""
        client, _ = make_client(Response(status_code=400, content=b""))

        with pytest.raises(ServerError) as exc_info:
            CallUpdater(CALL_SID).execute(client)

        assert exc_info.value.message == "Server Error, no content"
        assert exc_info.value.kind is ErrorKind.SERVER

    def test_non_json_error_body_raises_server_error(self, make_client):
        """Test that an HTML error page is treated as no content."""
        client, _ = make_client(Response(status_code=502, content=b"<html>Bad Gateway</html>"))

        with pytest.raises(ServerError):
            CallUpdater(CALL_SID).execute(client)

    def test_no_response_raises_connection_error(self, make_client):
        """Test that an unreachable server raises a connection error."""
        client, _ = make_client(None)

        with pytest.raises(ApiConnectionError) as exc_info:
            CallUpdater(CALL_SID).execute(client)

        assert str(exc_info.value) == "Call update failed: Unable to connect to server"
        assert exc_info.value.kind is ErrorKind.CONNECTION

    def test_error_without_status_uses_http_status(self, make_client, respond):
        """Test that the response status fills in a status missing from the error body."""
        client, _ = make_client(respond(404, {"message": "The requested resource was not found", "code": 20404}))

        with pytest.raises(ApiError) as exc_info:
            CallUpdater(CALL_SID).execute(client)

        assert exc_info.value.status == 404
        assert str(exc_info.value) == "HTTP 404 [20404] The requested resource was not found"

    def test_malformed_success_body_raises_deserialization_error(self, make_client):
        """Test that a 200 with an unparseable body does not return a resource."""
        client, _ = make_client(Response(status_code=200, content=b"{not json"))

        with pytest.raises(DeserializationError) as exc_info:
            CallUpdater(CALL_SID).execute(client)

        assert exc_info.value.__cause__ is not None
        assert exc_info.value.kind is ErrorKind.PARSE

    def test_error_kinds_are_disjoint(self):
        """Test that no error class is a subclass of another kind."""
        kinds = [ApiConnectionError, ApiError, ServerError, DeserializationError]

        for kind in kinds:
            for other in kinds:
                if kind is not other:
                    assert not issubclass(kind, other)
        assert len({k.kind for k in kinds}) == len(kinds)


class TestCallCreator:
    """Tests for CallCreator."""

    def test_create_call(self, make_client, respond, call_payload):
        """Test creating a call sends the required parameters first."""
        client, stub = make_client(respond(201, call_payload))

        call = Call.creator("+14155551212", "+15017122661", url="https://example.com/twiml").execute(client)

        assert call.sid == CALL_SID
        request = stub.last_request
        assert request["method"] == "POST"
        assert request["url"] == CALLS_URL
        assert request["data"] == {
            "To": ["+14155551212"],
            "From": ["+15017122661"],
            "Url": ["https://example.com/twiml"],
        }

    def test_optional_parameters(self, make_client, respond, call_payload):
        """Test serialization of booleans, integers and repeated parameters."""
        client, stub = make_client(respond(201, call_payload))

        (
            CallCreator("+14155551212", "+15017122661")
            .set_application_sid("AP00000000000000000000000000000000")
            .set_record(True)
            .set_timeout(30)
            .set_status_callback_event(["initiated", "answered"])
            .execute(client)
        )

        data = stub.last_request["data"]
        assert data["ApplicationSid"] == ["AP00000000000000000000000000000000"]
        assert data["Record"] == ["true"]
        assert data["Timeout"] == ["30"]
        assert data["StatusCallbackEvent"] == ["initiated", "answered"]
        assert "Url" not in data
        assert "Twiml" not in data

    def test_ok_instead_of_created_is_a_failure(self, make_client, respond, call_payload):
        """Test that create only accepts 201 as success."""
        client, _ = make_client(respond(200, call_payload))

        with pytest.raises(ServerError):
            CallCreator("+14155551212", "+15017122661", url="https://example.com").execute(client)

    def test_no_response_message_names_the_operation(self, make_client):
        """Test the connection error message for creates."""
        client, _ = make_client(None)

        with pytest.raises(ApiConnectionError, match="Call creation failed"):
            CallCreator("+14155551212", "+15017122661", url="https://example.com").execute(client)


class TestCallFetcherAndDeleter:
    """Tests for CallFetcher and CallDeleter."""

    def test_fetch_call(self, make_client, respond, call_payload):
        """Test fetching a call issues a GET without parameters."""
        client, stub = make_client(respond(200, call_payload))

        call = Call.fetcher(CALL_SID).execute(client)

        assert call.to == "+14155551212"
        assert stub.last_request["method"] == "GET"
        assert stub.last_request["url"] == CALL_URL
        assert stub.last_request["params"] == {}

    def test_delete_call(self, make_client):
        """Test that a 204 response means the call was deleted."""
        client, stub = make_client(Response(status_code=204))

        assert Call.deleter(CALL_SID).execute(client) is True
        assert stub.last_request["method"] == "DELETE"

    def test_delete_missing_call(self, make_client, respond):
        """Test that deleting an unknown call raises the API error."""
        client, _ = make_client(
            respond(
                404,
                {
                    "code": 20404,
                    "message": "The requested resource was not found",
                    "more_info": "https://www.twilio.com/docs/errors/20404",
                    "status": 404,
                },
            )
        )

        with pytest.raises(ApiError) as exc_info:
            Call.deleter(CALL_SID).execute(client)

        assert exc_info.value.code == 20404
        assert exc_info.value.status == 404


class TestCallReader:
    """Tests for CallReader paging."""

    @pytest.fixture
    def two_pages(self, respond, call_payload):
        next_uri = (
            "/2010-04-01/Accounts/AC00000000000000000000000000000000/Calls.json"
            "?PageSize=2&Page=1&PageToken=PACA00000000000000000000000000000002"
        )
        first = respond(
            200,
            {
                "calls": [
                    dict(call_payload, sid="CA01"),
                    dict(call_payload, sid="CA02"),
                ],
                "page": 0,
                "page_size": 2,
                "uri": "/2010-04-01/Accounts/AC00000000000000000000000000000000/Calls.json?PageSize=2",
                "next_page_uri": next_uri,
            },
        )
        second = respond(
            200,
            {
                "calls": [dict(call_payload, sid="CA03")],
                "page": 1,
                "page_size": 2,
                "uri": next_uri,
                "next_page_uri": None,
            },
        )
        return first, second, next_uri

    def test_read_all_pages(self, make_client, two_pages):
        """Test that iteration follows next_page_uri to the last page."""
        first, second, next_uri = two_pages
        client, stub = make_client(first, second)

        sids = [call.sid for call in Call.reader().set_page_size(2).read(client)]

        assert sids == ["CA01", "CA02", "CA03"]
        assert len(stub.requests) == 2
        assert stub.requests[0]["params"] == {"PageSize": ["2"]}
        assert stub.requests[1]["url"] == "https://api.twilio.com" + next_uri

    def test_limit_stops_before_next_page(self, make_client, two_pages):
        """Test that a limit reached on the first page fetches no more pages."""
        first, second, _ = two_pages
        client, stub = make_client(first, second)

        calls = list(Call.reader().limit(2).read(client))

        assert [call.sid for call in calls] == ["CA01", "CA02"]
        assert len(stub.requests) == 1

    def test_filters_are_query_params(self, make_client, respond):
        """Test that filters go to the query string, and only when set."""
        client, stub = make_client(respond(200, {"calls": [], "next_page_uri": None}))

        (
            Call.reader()
            .set_to("+14155551212")
            .set_status(CallStatus.NO_ANSWER)
            .set_start_time(date(2024, 1, 15))
            .read(client)
        )

        assert stub.last_request["params"] == {
            "To": ["+14155551212"],
            "Status": ["no-answer"],
            "StartTime": ["2024-01-15"],
        }
        assert stub.last_request["data"] == {}

    def test_next_page_on_last_page(self, make_client, respond):
        """Test that next_page returns None after the last page."""
        client, _ = make_client(respond(200, {"calls": [], "next_page_uri": None}))
        reader = Call.reader()

        page = reader.first_page(client)

        assert len(page) == 0
        assert reader.next_page(page, client) is None

    def test_page_without_records_raises(self, make_client, respond):
        """Test that a body without the records list is a parse error."""
        client, _ = make_client(respond(200, {"messages": []}))

        with pytest.raises(DeserializationError):
            Call.reader().first_page(client)
