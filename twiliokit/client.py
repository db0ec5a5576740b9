"""
twiliokit - REST Client

This module provides the TwilioRestClient, which operation builders execute
against. It resolves a request's domain and path into a URL, authenticates it
and hands it to an HttpClient.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from twiliokit.config import (
    BASE_HOST,
    DEFAULT_CONFIG,
    ENV_ACCOUNT_SID,
    ENV_AUTH_TOKEN,
    ClientConfig,
)
from twiliokit.exceptions import AuthenticationError
from twiliokit.transport import HttpClient, HttpxClient, Request, Response

logger = logging.getLogger("twiliokit")


class TwilioRestClient:
    """
    Client that performs requests against the Twilio REST API.

    Args:
        account_sid: Account SID. If not provided, will look for the
            TWILIO_ACCOUNT_SID environment variable.
        auth_token: Auth token. If not provided, will look for the
            TWILIO_AUTH_TOKEN environment variable.
        http_client: HttpClient to send requests with. Defaults to an
            httpx-backed client.
        timeout: Request timeout in seconds for the default HTTP client.
        debug: Enable debug logging. Defaults to False.

    Example:
        >>> client = TwilioRestClient("ACXXXXXXXX", "your_auth_token")
        >>> call = Call.updater("CAXXXXXXXX").set_status(CallStatus.COMPLETED).execute(client)
        >>> print(call.status)
    """

    def __init__(
        self,
        account_sid: Optional[str] = None,
        auth_token: Optional[str] = None,
        http_client: Optional[HttpClient] = None,
        timeout: float = DEFAULT_CONFIG.timeout,
        debug: bool = False,
    ) -> None:
        # Get credentials from parameters or environment
        self._config = ClientConfig(
            account_sid=account_sid or os.environ.get(ENV_ACCOUNT_SID),
            auth_token=auth_token or os.environ.get(ENV_AUTH_TOKEN),
            timeout=timeout,
            debug=debug,
        )
        if not self._config.account_sid or not self._config.auth_token:
            raise AuthenticationError(
                "Account SID and auth token are required. Provide them as parameters "
                f"or set the {ENV_ACCOUNT_SID} and {ENV_AUTH_TOKEN} environment variables."
            )

        # Setup logging
        if debug:
            logging.basicConfig(level=logging.DEBUG)
            logger.setLevel(logging.DEBUG)

        self._http_client = http_client or HttpxClient(timeout=self._config.timeout)

        logger.debug(f"TwilioRestClient initialized for account {self._config.account_sid}")

    @property
    def account_sid(self) -> str:
        return self._config.account_sid

    @property
    def http_client(self) -> HttpClient:
        return self._http_client

    def url_for(self, request: Request) -> str:
        """Absolute URL a request is sent to."""
        return f"https://{request.domain.value}.{BASE_HOST}{request.uri}"

    def request(self, request: Request) -> Optional[Response]:
        """
        Send a request.

        Args:
            request: The request descriptor built by an operation

        Returns:
            The response, or None if the server could not be reached
        """
        headers = {
            "User-Agent": self._config.user_agent,
            "Accept": "application/json",
            "Accept-Charset": "utf-8",
        }

        return self._http_client.make_request(
            method=request.method.value,
            url=self.url_for(request),
            params=request.query_params,
            data=request.post_params,
            headers=headers,
            auth=(self._config.account_sid, self._config.auth_token),
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._http_client.close()
        logger.debug("TwilioRestClient closed")

    def __enter__(self) -> "TwilioRestClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        return f"TwilioRestClient(account_sid='{self._config.account_sid}')"
