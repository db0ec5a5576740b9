"""
twiliokit - Configuration

This module contains configuration classes and defaults for the SDK.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from twiliokit.__version__ import __version__


@dataclass
class ClientConfig:
    """
    Configuration for the Twilio REST client.

    Attributes:
        account_sid: Account SID used for authentication and as the default
            account for account-scoped operations
        auth_token: Auth token paired with the account SID
        timeout: Request timeout in seconds
        debug: Enable debug logging
        user_agent: Value of the User-Agent header
    """
    account_sid: Optional[str] = None
    auth_token: Optional[str] = None
    timeout: float = 30.0
    debug: bool = False
    user_agent: str = f"twiliokit-python/{__version__}"


# Default configuration
DEFAULT_CONFIG = ClientConfig()


# Environment variables consulted when credentials are not passed explicitly
ENV_ACCOUNT_SID = "TWILIO_ACCOUNT_SID"
ENV_AUTH_TOKEN = "TWILIO_AUTH_TOKEN"


# API version
API_VERSION = "2010-04-01"

# Base host every domain is a subdomain of
BASE_HOST = "twilio.com"


class Domains(str, Enum):
    """Twilio API domains a request can be addressed to."""
    API = "api"

    def __str__(self) -> str:
        return self.value


class HttpStatus:
    """Status codes the operation builders expect on success."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204


# Endpoints
class Endpoints:
    """API endpoint paths."""

    # Calls
    CALLS = "/" + API_VERSION + "/Accounts/{account_sid}/Calls.json"
    CALL = "/" + API_VERSION + "/Accounts/{account_sid}/Calls/{sid}.json"

    # Outgoing caller ids
    VALIDATION_REQUESTS = "/" + API_VERSION + "/Accounts/{account_sid}/OutgoingCallerIds.json"
