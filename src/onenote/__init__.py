"""
OneNote REST API client.

Authenticated calls to notebooks, sections, section groups and pages. Every
call returns an ApiResponseEnvelope carrying the status code, correlation id,
raw body and, on the expected success status, the parsed entity.
"""

from onenote.api import OneNoteApi
from onenote.client import OneNoteClient
from onenote.envelope import ApiResponseEnvelope
from onenote.exceptions import (
    MalformedResponseBodyError,
    OneNoteApiError,
    UnexpectedStatusError,
)
from onenote.models import (
    CopyOperation,
    GenericEntity,
    Links,
    ODataCollection,
    Page,
    PatchCommand,
)
from onenote.query import ODataQuery
from onenote.translator import build_envelope, translate_response

__all__ = [
    "OneNoteApi",
    "OneNoteClient",
    "ApiResponseEnvelope",
    "build_envelope",
    "translate_response",
    "ODataQuery",
    # Models
    "GenericEntity",
    "Page",
    "CopyOperation",
    "PatchCommand",
    "Links",
    "ODataCollection",
    # Errors
    "OneNoteApiError",
    "UnexpectedStatusError",
    "MalformedResponseBodyError",
]
