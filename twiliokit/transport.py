"""
twiliokit - HTTP Transport

Request and response descriptors, and the HTTP client abstraction the REST
client delegates to. The default implementation is built on httpx.
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, List, Tuple

import httpx

from twiliokit.config import Domains

logger = logging.getLogger("twiliokit")


class HttpMethod(str, Enum):
    """HTTP methods, used both for requests and as request parameter values."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    def __str__(self) -> str:
        return self.value


@dataclass
class Request:
    """
    Outbound request descriptor.

    Attributes:
        method: HTTP method
        domain: Twilio domain the request is addressed to
        uri: Path, optionally with a query string already attached
        post_params: Form parameters, in the order they were added
        query_params: Query parameters, in the order they were added
    """
    method: HttpMethod
    domain: Domains
    uri: str
    post_params: Dict[str, List[str]] = field(default_factory=dict)
    query_params: Dict[str, List[str]] = field(default_factory=dict)

    def add_post_param(self, name: str, value: str) -> None:
        """Add a form parameter; repeated names keep every value."""
        self.post_params.setdefault(name, []).append(value)

    def add_query_param(self, name: str, value: str) -> None:
        """Add a query parameter; repeated names keep every value."""
        self.query_params.setdefault(name, []).append(value)


@dataclass
class Response:
    """
    Inbound response descriptor.

    Attributes:
        status_code: HTTP status code
        content: Raw response body
        headers: Response headers
    """
    status_code: int
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def stream(self) -> io.BytesIO:
        """A fresh binary stream positioned at the start of the body."""
        return io.BytesIO(self.content)


class HttpClient(ABC):
    """
    Abstract HTTP client.

    Implementations perform exactly one request per call and never raise for
    transport failures: a server that cannot be reached yields ``None``.
    """

    @abstractmethod
    def make_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, List[str]]] = None,
        data: Optional[Dict[str, List[str]]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[Tuple[str, str]] = None,
    ) -> Optional[Response]:
        """Send a request and return the response, or None if unreachable."""
        ...

    def close(self) -> None:
        """Release transport resources."""


class HttpxClient(HttpClient):
    """
    HTTP client backed by ``httpx.Client``.

    Args:
        timeout: Request timeout in seconds
        client: An existing httpx client to use instead of creating one
    """

    def __init__(
        self,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

    def make_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, List[str]]] = None,
        data: Optional[Dict[str, List[str]]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[Tuple[str, str]] = None,
    ) -> Optional[Response]:
        logger.debug(f"Making {method} request to {url}")
        logger.debug(f"Params: {params}")
        logger.debug(f"Data: {data}")

        try:
            response = self._client.request(
                method=method,
                url=url,
                params=params or None,
                data=data or None,
                headers=headers,
                auth=auth,
            )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning(f"{method} {url} failed: {e}")
            return None

        logger.debug(f"Response status: {response.status_code}")

        return Response(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self._client.close()
