"""
twiliokit - Base Operations

This module contains the base classes for all operation builders, and the
paging containers list operations return.

An operation builder is configured through chained ``set_*`` calls and then
consumed by a single ``execute(client)``. Builders are single-owner,
single-use objects: they hold no locks, so sharing one between threads is the
caller's responsibility, and calling ``execute`` twice is not supported.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from twiliokit.config import Domains, HttpStatus
from twiliokit.converters import serialize
from twiliokit.exceptions import ApiConnectionError, ApiError, DeserializationError, ServerError
from twiliokit.models import Resource, RestError
from twiliokit.transport import HttpMethod, Request, Response

if TYPE_CHECKING:
    from twiliokit.client import TwilioRestClient

logger = logging.getLogger("twiliokit")

T = TypeVar("T")
R = TypeVar("R", bound=Resource)


class Executable(ABC, Generic[T]):
    """
    Base class for all operations.

    Subclasses fix the HTTP method, the expected success status and the
    resource type, and describe their optional parameters as an ordered table
    of ``(attribute, wire name)`` pairs. Only attributes that are not None are
    sent, so a parameter that was never set never reaches the request.
    """

    method: HttpMethod
    success_status: int
    verb: str
    resource_class: Type[Resource]
    domain: Domains = Domains.API

    # (attribute, wire name) pairs for form parameters, in request order
    post_params: Sequence[Tuple[str, str]] = ()
    # (attribute, wire name) pairs for query parameters, in request order
    query_params: Sequence[Tuple[str, str]] = ()

    @abstractmethod
    def _path(self, client: "TwilioRestClient") -> str:
        """Build the request path from the identity parameters."""
        ...

    @abstractmethod
    def execute(self, client: "TwilioRestClient") -> T:
        """Make the request and return its result."""
        ...

    def _build_request(self, client: "TwilioRestClient") -> Request:
        request = Request(method=self.method, domain=self.domain, uri=self._path(client))
        self._add_params(request, self.post_params, request.add_post_param)
        self._add_params(request, self.query_params, request.add_query_param)
        return request

    def _add_params(self, request: Request, table: Sequence[Tuple[str, str]], add) -> None:
        for attribute, name in table:
            value = getattr(self, attribute)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                for item in value:
                    add(name, serialize(item))
            else:
                add(name, serialize(value))

    def _send(self, client: "TwilioRestClient", request: Request) -> Response:
        """Perform the request and translate every failure into an exception."""
        response = client.request(request)
        return self._check_response(response)

    def _check_response(self, response: Optional[Response]) -> Response:
        resource_name = self.resource_class.__name__

        if response is None:
            raise ApiConnectionError(
                f"{resource_name} {self.verb} failed: Unable to connect to server"
            )

        if response.status_code != self.success_status:
            rest_error = RestError.from_json(response.stream)
            if rest_error is None:
                raise ServerError("Server Error, no content")

            logger.debug(
                f"{resource_name} {self.verb} failed: "
                f"HTTP {response.status_code} code={rest_error.code}"
            )
            raise ApiError(
                rest_error.message,
                code=rest_error.code,
                more_info=rest_error.more_info,
                status=rest_error.status if rest_error.status is not None else response.status_code,
            )

        return response

    def _resolve_account_sid(self, account_sid: Optional[str], client: "TwilioRestClient") -> str:
        """The explicit account SID, or the client's own account."""
        return account_sid or client.account_sid


class ResourceOperation(Executable[R]):
    """Operation whose successful response body is a single resource."""

    def execute(self, client: "TwilioRestClient") -> R:
        """
        Make the request to the Twilio API.

        Args:
            client: TwilioRestClient with which to make the request

        Returns:
            The resource the server returned

        Raises:
            ApiConnectionError: If the server could not be reached
            ApiError: If the server returned an error payload
            ServerError: If the server failed without an error payload
            DeserializationError: If the body is not the expected resource
        """
        response = self._send(client, self._build_request(client))
        return self.resource_class.from_json(response.stream)


class Creator(ResourceOperation[R]):
    """Base class for create operations."""

    method = HttpMethod.POST
    success_status = HttpStatus.CREATED
    verb = "creation"


class Updater(ResourceOperation[R]):
    """Base class for update operations."""

    method = HttpMethod.POST
    success_status = HttpStatus.OK
    verb = "update"


class Fetcher(ResourceOperation[R]):
    """Base class for fetch operations."""

    method = HttpMethod.GET
    success_status = HttpStatus.OK
    verb = "fetch"


class Deleter(Executable[bool]):
    """Base class for delete operations. A successful delete returns True."""

    method = HttpMethod.DELETE
    success_status = HttpStatus.NO_CONTENT
    verb = "delete"

    def execute(self, client: "TwilioRestClient") -> bool:
        self._send(client, self._build_request(client))
        return True


# =============================================================================
# Paging
# =============================================================================

class Page(Generic[R]):
    """
    One page of a list response.

    Attributes:
        records: Resources on this page
        page: Zero-based page number
        page_size: Number of records requested per page
        uri: URI of this page
        first_page_uri: URI of the first page
        next_page_uri: URI of the next page, or None on the last page
        previous_page_uri: URI of the previous page, or None on the first page
    """

    def __init__(
        self,
        records: List[R],
        page: int = 0,
        page_size: int = 0,
        uri: Optional[str] = None,
        first_page_uri: Optional[str] = None,
        next_page_uri: Optional[str] = None,
        previous_page_uri: Optional[str] = None,
    ) -> None:
        self.records = records
        self.page = page
        self.page_size = page_size
        self.uri = uri
        self.first_page_uri = first_page_uri
        self.next_page_uri = next_page_uri
        self.previous_page_uri = previous_page_uri

    @classmethod
    def from_json(cls, content: bytes, records_key: str, resource_class: Type[R]) -> "Page[R]":
        """
        Parse a list response.

        Args:
            content: Raw response body
            records_key: Key holding the records, e.g. ``calls``
            resource_class: Resource type of the records

        Raises:
            DeserializationError: If the body is not a page of records
        """
        try:
            data: Dict[str, Any] = json.loads(content)
        except ValueError as e:
            raise DeserializationError(f"Unable to parse page: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get(records_key), list):
            raise DeserializationError(f"Unable to parse page: missing '{records_key}' list")

        return cls(
            records=[resource_class.from_dict(item) for item in data[records_key]],
            page=data.get("page", 0),
            page_size=data.get("page_size", len(data[records_key])),
            uri=data.get("uri"),
            first_page_uri=data.get("first_page_uri"),
            next_page_uri=data.get("next_page_uri"),
            previous_page_uri=data.get("previous_page_uri"),
        )

    def __iter__(self) -> Iterator[R]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __repr__(self) -> str:
        return f"Page(page={self.page}, records={len(self.records)}, next_page_uri={self.next_page_uri!r})"


class Reader(Executable["ResourceSet[R]"], Generic[R]):
    """
    Base class for list operations.

    Subclasses set ``records_key`` to the key the page envelope holds its
    records under.
    """

    method = HttpMethod.GET
    success_status = HttpStatus.OK
    verb = "read"
    records_key: str

    def __init__(self) -> None:
        self._page_size: Optional[int] = None
        self._limit: Optional[int] = None

    def set_page_size(self, page_size: int) -> "Reader[R]":
        """Number of records the server should return per page."""
        self._page_size = page_size
        return self

    def limit(self, limit: int) -> "Reader[R]":
        """Maximum number of records ``read`` yields across all pages."""
        self._limit = limit
        return self

    def _build_request(self, client: "TwilioRestClient") -> Request:
        request = super()._build_request(client)
        if self._page_size is not None:
            request.add_query_param("PageSize", serialize(self._page_size))
        return request

    def first_page(self, client: "TwilioRestClient") -> Page[R]:
        """Fetch the first page of results."""
        response = self._send(client, self._build_request(client))
        return Page.from_json(response.content, self.records_key, self.resource_class)

    def next_page(self, page: Page[R], client: "TwilioRestClient") -> Optional[Page[R]]:
        """Fetch the page after ``page``, or None if it was the last one."""
        if not page.next_page_uri:
            return None
        request = Request(method=self.method, domain=self.domain, uri=page.next_page_uri)
        response = self._send(client, request)
        return Page.from_json(response.content, self.records_key, self.resource_class)

    def read(self, client: "TwilioRestClient") -> "ResourceSet[R]":
        """Read every record, fetching pages lazily as the result is iterated."""
        return ResourceSet(self, client, self.first_page(client))

    def execute(self, client: "TwilioRestClient") -> "ResourceSet[R]":
        return self.read(client)


class ResourceSet(Generic[R]):
    """
    Iterable over all records of a list operation.

    Pages after the first are requested only when iteration reaches them, and
    iteration stops once the reader's limit is reached.
    """

    def __init__(self, reader: Reader[R], client: "TwilioRestClient", first_page: Page[R]) -> None:
        self._reader = reader
        self._client = client
        self._first_page = first_page

    @property
    def first_page(self) -> Page[R]:
        return self._first_page

    def pages(self) -> Iterator[Page[R]]:
        """Iterate over pages, starting with the first."""
        page: Optional[Page[R]] = self._first_page
        while page is not None:
            yield page
            page = self._reader.next_page(page, self._client)

    def __iter__(self) -> Iterator[R]:
        limit = self._reader._limit
        if limit is not None and limit <= 0:
            return
        count = 0
        for page in self.pages():
            for record in page:
                yield record
                count += 1
                if limit is not None and count >= limit:
                    return
