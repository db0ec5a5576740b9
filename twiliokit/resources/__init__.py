"""
twiliokit - Resources

This module contains all API resources and their operation builders.
"""

from twiliokit.resources.base import (
    Executable,
    Creator,
    Updater,
    Fetcher,
    Deleter,
    Reader,
    Page,
    ResourceSet,
)
from twiliokit.resources.calls import (
    Call,
    CallStatus,
    CallDirection,
    CallCreator,
    CallFetcher,
    CallUpdater,
    CallDeleter,
    CallReader,
)
from twiliokit.resources.validation_requests import (
    ValidationRequest,
    ValidationRequestCreator,
)

__all__ = [
    "Executable",
    "Creator",
    "Updater",
    "Fetcher",
    "Deleter",
    "Reader",
    "Page",
    "ResourceSet",
    "Call",
    "CallStatus",
    "CallDirection",
    "CallCreator",
    "CallFetcher",
    "CallUpdater",
    "CallDeleter",
    "CallReader",
    "ValidationRequest",
    "ValidationRequestCreator",
]
