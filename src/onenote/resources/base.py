"""Shared plumbing for resource groups."""

from onenote.client import OneNoteClient
from onenote.models import GenericEntity, ODataCollection

EntityList = ODataCollection[GenericEntity]


class Resource:
    """A group of endpoints under one collection path."""

    def __init__(self, client: OneNoteClient):
        self.client = client

    @staticmethod
    def copy_payload(target_id: str | None = None, rename_as: str | None = None) -> dict[str, str]:
        payload = {}
        if target_id is not None:
            payload["id"] = target_id
        if rename_as:
            payload["renameAs"] = rename_as
        return payload


__all__ = ["Resource", "EntityList"]
